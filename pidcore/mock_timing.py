# pidcore/mock_timing.py

import logging
from collections import deque

from pidcore.timing_service import micros_to_seconds


class MockTimingService:
    """
    Мок-сервис времени для тестов и симулятора.
    Отдаёт заранее заданные интервалы, затем интервал по умолчанию.
    """

    def __init__(self, deltas=None, default_delta: int = 1_000_000):
        self._deltas = deque(deltas or [])
        self._default_delta = default_delta
        self._initial_default = default_delta
        self._loop_count = 0
        logging.info(f"TS Mock: инициализирован, по умолчанию {default_delta} мкс")

    def get_delta_time(self) -> int:
        self._loop_count += 1
        if self._deltas:
            return self._deltas.popleft()
        return self._default_delta

    def get_delta_time_seconds(self) -> float:
        return micros_to_seconds(self.get_delta_time())

    def get_loop_count(self) -> int:
        return self._loop_count

    # 🔧 Методы для управления временем в тестах
    def push(self, delta: int):
        self._deltas.append(delta)

    def set_default(self, delta: int):
        self._default_delta = delta
        logging.info(f"TS Mock: интервал по умолчанию {delta} мкс")

    def reset(self):
        """Сбрасывает счётчик, сценарий и интервал по умолчанию (как после создания без deltas)"""
        self._deltas.clear()
        self._default_delta = self._initial_default
        self._loop_count = 0
