"""
Numerical Safeguards: Safe Math Primitives для оконных вычислений

Модуль обеспечивает численную устойчивость signal windows:
- Проверка и валидация сэмплов (только конечные int/float, без bool)
- Безопасное деление с fallback вместо ZeroDivisionError/NaN
- Компенсированная (Neumaier) бегущая сумма для ограничения drift
- Epsilon-сравнения float

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. NaN/Inf никогда не попадают в вычисления (InvalidSample)
2. Деление на ноль никогда не происходит (возвращается fallback)
3. Ошибка бегущей суммы не растёт линейно с длиной последовательности
4. Все операции детерминированы и воспроизводимы
"""

import math
from collections.abc import Sequence
from typing import Final

from src.datautils.errors import InvalidSample, InvalidWindow, TypeMismatch

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Epsilon для знаменателей (variance в Pearson)
EPS_CALC: Final[float] = 1e-12

# Epsilon для сравнения float (относительная толерантность)
EPS_FLOAT_COMPARE_REL: Final[float] = 1e-9

# Epsilon для сравнения float (абсолютная толерантность)
EPS_FLOAT_COMPARE_ABS: Final[float] = 1e-12

# Диапазон целочисленных сэмплов: fixed-width 64-bit (i64 снизу, u64 сверху)
SAMPLE_INT_MIN: Final[int] = -(2**63)
SAMPLE_INT_MAX: Final[int] = 2**64 - 1


# =============================================================================
# ВАЛИДАЦИЯ СЭМПЛОВ И ОКОН
# =============================================================================


def is_valid_float(value: float) -> bool:
    """True если значение конечное (не NaN, не Inf)"""
    return math.isfinite(value)


def validate_samples(samples: Sequence[int | float], name: str = "samples") -> list[int | float]:
    """
    Валидация числовой последовательности.

    Args:
        samples: Последовательность сэмплов
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        Список сэмплов (копия входа)

    Raises:
        TypeMismatch: Если samples не последовательность или элемент нечисловой
        InvalidSample: Если элемент NaN/Inf или int вне 64-bit диапазона
    """
    if isinstance(samples, (str, bytes, bytearray)) or not isinstance(samples, Sequence):
        raise TypeMismatch(f"{name} must be a sequence of numbers, got {type(samples).__name__}")

    values = list(samples)
    for idx, value in enumerate(values):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeMismatch(
                f"{name}[{idx}] must be int or float, got {type(value).__name__}"
            )
        if isinstance(value, float) and not is_valid_float(value):
            raise InvalidSample(f"{name}[{idx}] must be finite, got {value}")
        if isinstance(value, int) and not SAMPLE_INT_MIN <= value <= SAMPLE_INT_MAX:
            raise InvalidSample(
                f"{name}[{idx}] integer {value} outside 64-bit sample range "
                f"[{SAMPLE_INT_MIN}, {SAMPLE_INT_MAX}]"
            )

    return values


def validate_window(window: int, length: int, name: str = "samples") -> None:
    """
    Валидация размера окна: 1 <= window <= length.

    Raises:
        InvalidWindow: Пустая последовательность, window не int,
            window <= 0 или window > length
    """
    if length == 0:
        raise InvalidWindow(f"{name} is empty")

    if isinstance(window, bool) or not isinstance(window, int):
        raise InvalidWindow(f"Window size must be an int, got {type(window).__name__}")

    if window <= 0:
        raise InvalidWindow(f"Window size must be positive, got {window}")

    if window > length:
        raise InvalidWindow(f"Window size {window} exceeds {name} length {length}")


# =============================================================================
# БЕЗОПАСНОЕ ДЕЛЕНИЕ
# =============================================================================


def safe_divide(
    numerator: float,
    denominator: float,
    eps: float = EPS_CALC,
    fallback: float = 0.0,
) -> float:
    """
    Деление с fallback для знаменателя, близкого к нулю.

    Args:
        numerator: Числитель
        denominator: Знаменатель
        eps: Порог: abs(denominator) <= eps считается нулём
        fallback: Значение при делении на ноль (default: 0.0)

    Returns:
        numerator / denominator, либо fallback

    Examples:
        >>> safe_divide(10.0, 2.0)
        5.0
        >>> safe_divide(10.0, 0.0)
        0.0
        >>> safe_divide(1.0, 1e-15, fallback=-1.0)
        -1.0
    """
    if eps <= 0:
        raise ValueError(f"eps must be positive, got {eps}")

    if abs(denominator) <= eps:
        return fallback

    result = numerator / denominator
    if not is_valid_float(result):
        return fallback
    return result


# =============================================================================
# EPSILON-СРАВНЕНИЯ
# =============================================================================


def is_close(
    a: float,
    b: float,
    rel_tol: float = EPS_FLOAT_COMPARE_REL,
    abs_tol: float = EPS_FLOAT_COMPARE_ABS,
) -> bool:
    """
    Сравнение float с учётом машинной точности.

    abs(a - b) <= max(rel_tol * max(abs(a), abs(b)), abs_tol)
    """
    return math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)


# =============================================================================
# КОМПЕНСИРОВАННАЯ СУММА
# =============================================================================


class CompensatedSum:
    """
    Бегущая сумма Neumaier (улучшенный Kahan).

    Хранит основную сумму и накопленную компенсацию потерянных младших
    разрядов. Вычитание реализовано как прибавление -value, поэтому
    сумма пригодна для скользящего окна (вход + выход сэмпла).

    Examples:
        >>> acc = CompensatedSum()
        >>> for x in [0.1] * 10:
        ...     acc.add(x)
        >>> acc.value
        1.0
    """

    __slots__ = ("_total", "_compensation")

    def __init__(self, start: float = 0.0) -> None:
        self._total = float(start)
        self._compensation = 0.0

    def add(self, value: float) -> None:
        total = self._total + value
        if abs(self._total) >= abs(value):
            self._compensation += (self._total - total) + value
        else:
            self._compensation += (value - total) + self._total
        self._total = total

    def subtract(self, value: float) -> None:
        self.add(-value)

    @property
    def value(self) -> float:
        return self._total + self._compensation
