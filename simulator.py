# simulator.py
"""
Симулятор контура: ПИД-регулятор из config/pid_config.json
против объекта первого порядка y' = (gain * u - y) / tau.
"""
import argparse
import logging
import os
import sys
from logging.handlers import TimedRotatingFileHandler

import pandas as pd

from pidcore.config_loader import ConfigError, DEFAULT_CONFIG_PATH, build_controller, load_pid_config
from pidcore.mock_timing import MockTimingService
from pidcore.plot_response import ResponsePlotter


def setup_logger():
    os.makedirs("logs", exist_ok=True)
    log_file = "logs/simulator.log"

    logger = logging.getLogger()
    # Повторный вызов не должен дублировать хендлер
    for existing in logger.handlers:
        if getattr(existing, "baseFilename", None) == os.path.abspath(log_file):
            return

    handler = TimedRotatingFileHandler(
        log_file,
        when="midnight",  # Ротация в полночь
        interval=1,
        backupCount=7,  # Хранить 7 дней
        encoding="utf-8"
    )
    handler.suffix = "%Y-%m-%d"

    formatter = logging.Formatter('%(asctime)s [SIM] %(levelname)s: %(message)s')
    handler.setFormatter(formatter)

    logger.setLevel(logging.INFO)
    logger.addHandler(handler)
    logging.info("SIM Логирование инициализировано")


def simulate(pid, setpoint, steps, dt, plant_gain=1.0, plant_tau=1.0, initial=0.0) -> pd.DataFrame:
    """
    Прогоняет контур steps тактов с шагом dt (с).
    Сервис времени регулятора должен отдавать тот же dt.
    """
    if plant_tau <= 0:
        raise ValueError(f"SIM Постоянная времени должна быть > 0, получено {plant_tau}")

    y = initial
    rows = []
    for k in range(steps):
        u = pid.update(setpoint, y)
        p, i, d = pid.get_last_terms()
        rows.append({
            "time": k * dt,
            "setpoint": setpoint,
            "measurement": y,
            "output": u,
            "p": p,
            "i": i,
            "d": d,
            "integral": pid.get_integral(),
        })
        # Объект первого порядка, явный Эйлер
        y += dt * (plant_gain * u - y) / plant_tau

    df = pd.DataFrame(rows, columns=["time", "setpoint", "measurement", "output", "p", "i", "d", "integral"])
    if not df.empty:
        logging.info(
            f"SIM {steps} тактов: итоговое значение {df['measurement'].iloc[-1]:.4f}, уставка {setpoint}"
        )
    return df


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Симуляция ПИД-контура")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="Путь к pid_config.json")
    parser.add_argument("--controller", default="motor_speed", help="Имя регулятора в конфиге")
    parser.add_argument("--setpoint", type=float, default=1.0)
    parser.add_argument("--steps", type=int, default=2000)
    parser.add_argument("--dt-ms", type=float, default=10.0, help="Шаг цикла, мс")
    parser.add_argument("--plant-gain", type=float, default=1.0)
    parser.add_argument("--plant-tau", type=float, default=1.0)
    parser.add_argument("--plot", action="store_true", help="Показать график")
    parser.add_argument("--save", default=None, help="Сохранить график в PNG")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logger()

    try:
        config = load_pid_config(args.config)
        timing = MockTimingService(default_delta=int(round(args.dt_ms * 1000)))
        pid = build_controller(args.controller, config, timing)
    except ConfigError as e:
        logging.critical(f"SIM Ошибка конфигурации: {e}")
        print(f"❌ {e}")
        return 1

    df = simulate(
        pid,
        setpoint=args.setpoint,
        steps=args.steps,
        dt=args.dt_ms / 1000.0,
        plant_gain=args.plant_gain,
        plant_tau=args.plant_tau,
    )
    print(df.tail(5).to_string(index=False))

    if args.plot or args.save:
        plotter = ResponsePlotter(show_terms=True)
        result = plotter.plot(df, save_path=args.save, show=args.plot, title=f"Регулятор {args.controller}")
        print(result['message'])
        if result['status'] != 'OK':
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
