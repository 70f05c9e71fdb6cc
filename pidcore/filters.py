# pidcore/filters.py
"""
Фильтры для сглаживания сигналов (в первую очередь производной ПИД).
Любой объект с методами update / reset / get_output подходит регулятору.
"""
import math
from collections import deque


class Filter:
    """Базовый контракт фильтра"""

    def update(self, value: float) -> float:
        raise NotImplementedError

    def reset(self):
        raise NotImplementedError

    def get_output(self) -> float:
        raise NotImplementedError


class NoFilter(Filter):
    """Пропускает значение без изменений"""

    def __init__(self):
        self._output = 0.0

    def update(self, value: float) -> float:
        self._output = value
        return self._output

    def reset(self):
        self._output = 0.0

    def get_output(self) -> float:
        return self._output


class MovingAverageFilter(Filter):
    def __init__(self, window_size: int):
        if window_size < 1:
            raise ValueError(f"FLT Размер окна должен быть >= 1, получено {window_size}")
        self.window_size = window_size
        self._window = deque(maxlen=window_size)
        self._sum = 0.0
        self._output = 0.0

    def update(self, value: float) -> float:
        if len(self._window) == self.window_size:
            self._sum -= self._window[0]
        self._window.append(value)
        self._sum += value
        self._output = self._sum / len(self._window)
        return self._output

    def reset(self):
        self._window.clear()
        self._sum = 0.0
        self._output = 0.0

    def get_output(self) -> float:
        return self._output


class ExponentialMovingAverageFilter(Filter):
    """y = alpha * x + (1 - alpha) * y_prev; первый отсчёт задаёт y"""

    def __init__(self, alpha: float):
        if not 0.0 < alpha <= 1.0:
            raise ValueError(f"FLT alpha должен быть в (0, 1], получено {alpha}")
        self.alpha = alpha
        self._output = 0.0
        self._initialized = False

    def update(self, value: float) -> float:
        if not self._initialized:
            self._output = value
            self._initialized = True
        else:
            self._output = self.alpha * value + (1.0 - self.alpha) * self._output
        return self._output

    def reset(self):
        self._output = 0.0
        self._initialized = False

    def get_output(self) -> float:
        return self._output


class LowPassFilter(Filter):
    """
    RC-фильтр первого порядка.

    Параметры:
        cutoff_frequency (float): частота среза, Гц.
        sampling_time (float): период дискретизации, с.
    """

    def __init__(self, cutoff_frequency: float, sampling_time: float):
        if cutoff_frequency <= 0 or sampling_time <= 0:
            raise ValueError(
                f"FLT Частота среза и период должны быть > 0 (fc={cutoff_frequency}, dt={sampling_time})"
            )
        self.cutoff_frequency = cutoff_frequency
        self.sampling_time = sampling_time
        rc = 1.0 / (2.0 * math.pi * cutoff_frequency)
        self.alpha = sampling_time / (rc + sampling_time)
        self._output = 0.0

    def update(self, value: float) -> float:
        self._output += self.alpha * (value - self._output)
        return self._output

    def reset(self):
        self._output = 0.0

    def get_output(self) -> float:
        return self._output
