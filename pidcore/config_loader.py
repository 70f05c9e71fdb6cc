# pidcore/config_loader.py
"""
Загрузка конфигурации регуляторов из config/pid_config.json
и сборка PIDController по имени.
"""
import json
import logging
import os

from pidcore.filters import (
    NoFilter,
    MovingAverageFilter,
    ExponentialMovingAverageFilter,
    LowPassFilter,
)
from pidcore.pid_controller import PIDController

project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DEFAULT_CONFIG_PATH = os.path.join(project_root, "config", "pid_config.json")


class ConfigError(Exception):
    pass


def load_pid_config(path: str = DEFAULT_CONFIG_PATH) -> dict:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as e:
        logging.error(f"CFG Файл {path} не найден")
        raise ConfigError(f"Файл конфигурации не найден: {path}") from e
    except json.JSONDecodeError as e:
        logging.error(f"CFG Ошибка разбора {path}: {e}")
        raise ConfigError(f"Некорректный JSON в {path}: {e}") from e


def build_filter(filter_cfg):
    """Создаёт фильтр производной по секции derivative_filter"""
    if not filter_cfg:
        return NoFilter()

    ftype = filter_cfg.get("type", "none")
    try:
        if ftype == "none":
            return NoFilter()
        if ftype == "moving_average":
            return MovingAverageFilter(filter_cfg["window_size"])
        if ftype == "ema":
            return ExponentialMovingAverageFilter(filter_cfg["alpha"])
        if ftype == "low_pass":
            return LowPassFilter(filter_cfg["cutoff_frequency"], filter_cfg["sampling_time"])
    except KeyError as e:
        logging.error(f"CFG Фильтр '{ftype}': нет параметра {e}")
        raise ConfigError(f"Фильтр '{ftype}': отсутствует параметр {e}") from e

    logging.error(f"CFG Неизвестный тип фильтра: {ftype}")
    raise ConfigError(f"Неизвестный тип фильтра: {ftype}")


def _controller_cfg(name: str, config: dict) -> dict:
    try:
        return config["controllers"][name]
    except KeyError as e:
        logging.error(f"CFG Регулятор '{name}' не найден в конфигурации")
        raise ConfigError(f"Регулятор '{name}' не найден") from e


def build_controller(name: str, config: dict, timing_service) -> PIDController:
    cfg = _controller_cfg(name, config)
    try:
        pid = PIDController(
            kp=cfg["kp"],
            ki=cfg["ki"],
            kd=cfg["kd"],
            max_integral=cfg["max_integral"],
            derivative_filter=build_filter(cfg.get("derivative_filter")),
            timing_service=timing_service,
        )
    except KeyError as e:
        logging.error(f"CFG Регулятор '{name}': нет параметра {e}")
        raise ConfigError(f"Регулятор '{name}': отсутствует параметр {e}") from e

    logging.info(f"CFG Регулятор '{name}' создан: Kp={pid.kp}, Ki={pid.ki}, Kd={pid.kd}, Imax={pid.max_integral}")
    return pid


def apply_tunings(pid: PIDController, name: str, config: dict):
    """Обновляет коэффициенты на лету, интеграл и фильтр не сбрасываются"""
    cfg = _controller_cfg(name, config)
    try:
        pid.set_tunings(kp=cfg["kp"], ki=cfg["ki"], kd=cfg["kd"])
    except KeyError as e:
        logging.error(f"CFG Регулятор '{name}': нет параметра {e}")
        raise ConfigError(f"Регулятор '{name}': отсутствует параметр {e}") from e
    logging.debug(f"CFG Регулятор '{name}': коэффициенты обновлены на лету")
