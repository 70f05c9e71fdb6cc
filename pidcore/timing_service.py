# pidcore/timing_service.py
"""
Сервис времени для цикла управления.
Отдаёт число микросекунд, прошедших с предыдущего запроса.
"""
import logging
import time

MICROS_PER_SECOND = 1_000_000


def micros_to_seconds(micros) -> float:
    return micros / MICROS_PER_SECOND


class TimingService:
    def __init__(self, clock=time.monotonic_ns):
        # clock: функция, возвращающая наносекунды
        self._clock = clock
        self._last_ns = self._clock()
        self._loop_count = 0
        logging.debug("TS Сервис времени инициализирован")

    def get_delta_time(self) -> int:
        """Микросекунды с прошлого запроса (или с создания/сброса)"""
        now = self._clock()
        delta_us = (now - self._last_ns) // 1000
        self._last_ns = now
        self._loop_count += 1
        return delta_us

    def get_delta_time_seconds(self) -> float:
        return micros_to_seconds(self.get_delta_time())

    def get_loop_count(self) -> int:
        return self._loop_count

    def reset(self):
        self._last_ns = self._clock()
        self._loop_count = 0
