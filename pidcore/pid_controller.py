# pidcore/pid_controller.py
"""
Дискретный ПИД-регулятор с anti-windup и сглаживанием производной.
Шаг dt берётся из сервиса времени, производная проходит через фильтр.
"""
import logging
import math

from pidcore.timing_service import micros_to_seconds


class PIDController:
    def __init__(self, kp, ki, kd, max_integral, derivative_filter, timing_service):
        self.kp = kp
        self.ki = ki
        self.kd = kd
        # Отрицательный предел даёт пустой диапазон, нормализуем
        self.max_integral = abs(max_integral)

        # Фильтр и сервис времени не принадлежат регулятору
        self.derivative_filter = derivative_filter
        self.timing_service = timing_service

        self._integral = 0.0
        self._previous_error = 0.0

        self._last_output = 0.0
        self._last_p = 0.0
        self._last_i = 0.0
        self._last_d = 0.0

    def update(self, setpoint, input_value):
        """
        Один такт регулятора. Вызывается раз за цикл управления.

        Возвращает:
            float: сумма kp*e + ki*интеграл + kd*сглаженная производная.
        """
        dt = micros_to_seconds(self.timing_service.get_delta_time())
        if dt < 0:
            # Время пошло назад: интеграл не трогаем
            logging.warning(f"PID Отрицательный dt={dt}, принят за 0")
            dt = 0.0

        if not (math.isfinite(setpoint) and math.isfinite(input_value)):
            logging.warning(f"PID Нечисловой вход (setpoint={setpoint}, input={input_value}), такт пропущен")
            return self._last_output

        # Ошибка
        error = setpoint - input_value

        # Интегральная часть с ограничением
        self._integral += error * dt
        if self._integral > self.max_integral:
            self._integral = self.max_integral
        elif self._integral < -self.max_integral:
            self._integral = -self.max_integral

        # Дифференциальная часть
        if dt > 0:
            derivative = self.derivative_filter.update((error - self._previous_error) / dt)
        else:
            logging.debug(f"PID dt={dt}: производная не обновлялась")
            derivative = self.derivative_filter.get_output()
        self._previous_error = error

        self._last_p = self.kp * error
        self._last_i = self.ki * self._integral
        self._last_d = self.kd * derivative

        self._last_output = self._last_p + self._last_i + self._last_d
        return self._last_output

    def reset(self):
        self._integral = 0.0
        self._previous_error = 0.0
        self._last_output = 0.0
        self._last_p = 0.0
        self._last_i = 0.0
        self._last_d = 0.0
        self.derivative_filter.reset()

    # --- Коэффициенты ---
    def get_kp(self):
        return self.kp

    def get_ki(self):
        return self.ki

    def get_kd(self):
        return self.kd

    def set_kp(self, kp):
        self.kp = kp

    def set_ki(self, ki):
        self.ki = ki

    def set_kd(self, kd):
        self.kd = kd

    def set_tunings(self, kp, ki, kd):
        """Меняет все коэффициенты без сброса накопленного состояния"""
        self.kp = kp
        self.ki = ki
        self.kd = kd

    # --- Состояние ---
    def get_max_integral(self):
        return self.max_integral

    def get_integral(self):
        return self._integral

    def get_previous_error(self):
        return self._previous_error

    def get_derivative(self):
        """Последнее сглаженное значение производной (выход фильтра)"""
        return self.derivative_filter.get_output()

    def get_last_terms(self):
        """(P, I, D) вклады последнего такта"""
        return self._last_p, self._last_i, self._last_d
