"""
Signal Windows: Скользящее среднее и скользящая cross-correlation

Чистые функции над упорядоченной числовой последовательностью S длины n
и размером окна w (1 <= w <= n). Каждый вызов возвращает новый list[float].

ФОРМУЛЫ:
    sliding_average(S, w)[i] = mean(S[i : i+w]),            i = 0 .. n-w
    cross_correlation(A, B, w)[k]:
        DOT:     Σ_j A[k+j] * B[k+j]                         (default)
        PEARSON: cov(A_k, B_k) / sqrt(var(A_k) * var(B_k))
    где k = 0 .. min(len(A), len(B)) - w, без zero-padding.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. w == 0, w > n, отрицательный w или пустой вход → InvalidWindow
2. sliding_average использует бегущую сумму: O(n) вместо O(n·w)
3. Целочисленный вход суммируется точно (Python int), float: через
   компенсированную сумму Neumaier
4. PEARSON для постоянного окна → 0.0, не NaN; для любого непостоянного
   окна коэффициент не зависит от масштаба сэмплов
5. Результат всегда float
"""

import logging
import math
from collections.abc import Sequence
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field

from src.datautils.errors import InvalidWindow, TypeMismatch
from src.datautils.math.numerical_safeguards import (
    CompensatedSum,
    safe_divide,
    validate_samples,
    validate_window,
)

logger = logging.getLogger(__name__)


# =============================================================================
# ENUMS
# =============================================================================


class Normalization(str, Enum):
    """Нормализация cross-correlation"""

    DOT = "dot"
    PEARSON = "pearson"


# =============================================================================
# HELPERS
# =============================================================================


def _all_int(values: list[int | float]) -> bool:
    return all(isinstance(v, int) for v in values)


def _exact_sum(values: list[int | float]) -> float:
    """Сумма без накопления ошибки: точная для int, fsum для float"""
    if _all_int(values):
        return float(sum(values))
    return math.fsum(values)


# =============================================================================
# SEQUENCE AVERAGE
# =============================================================================


def sequence_average(samples: Sequence[int | float]) -> float:
    """
    Среднее всей последовательности.

    Args:
        samples: Непустая последовательность конечных чисел

    Returns:
        Арифметическое среднее (float)

    Raises:
        InvalidWindow: Пустая последовательность
        TypeMismatch / InvalidSample: Невалидные сэмплы

    Examples:
        >>> sequence_average([1, 2, 3, 4, 5])
        3.0
    """
    values = validate_samples(samples)
    if not values:
        raise InvalidWindow("samples is empty")

    if _all_int(values):
        return sum(values) / len(values)
    return math.fsum(values) / len(values)


# =============================================================================
# SLIDING AVERAGE
# =============================================================================


def sliding_average(samples: Sequence[int | float], window: int) -> list[float]:
    """
    Скользящее среднее с бегущей суммой.

    Для каждого сдвига окна прибавляется входящий сэмпл и вычитается
    выходящий; полная пересумма окна не выполняется.

    Args:
        samples: Последовательность конечных чисел длины n
        window: Размер окна, 1 <= window <= n

    Returns:
        Список длины n - window + 1

    Raises:
        InvalidWindow: Недопустимый window или пустой вход
        TypeMismatch: Нечисловой сэмпл
        InvalidSample: NaN/Inf сэмпл

    Examples:
        >>> sliding_average([1, 2, 3, 4, 5], 3)
        [2.0, 3.0, 4.0]
    """
    values = validate_samples(samples)
    validate_window(window, len(values))

    count = len(values) - window + 1
    result: list[float] = []

    if _all_int(values):
        # Python int не переполняется: сумма точная
        running = sum(values[:window])
        result.append(running / window)
        for i in range(1, count):
            running += values[i + window - 1] - values[i - 1]
            result.append(running / window)
    else:
        acc = CompensatedSum()
        for value in values[:window]:
            acc.add(value)
        result.append(acc.value / window)
        for i in range(1, count):
            acc.add(values[i + window - 1])
            acc.subtract(values[i - 1])
            result.append(acc.value / window)

    logger.debug("sliding_average: n=%d window=%d -> %d values", len(values), window, count)
    return result


# =============================================================================
# CROSS-CORRELATION
# =============================================================================


def _is_constant(values: list[int | float]) -> bool:
    first = values[0]
    return all(v == first for v in values)


def _scaled_deviations(values: list[int | float]) -> list[float] | None:
    """
    Отклонения от среднего, делённые на максимальное по модулю отклонение.

    Масштаб не влияет на коэффициент Пирсона, но держит квадраты в [0, 1]:
    для сэмплов порядка 1e-200 квадраты без масштабирования уходят в underflow.

    Returns:
        None если все отклонения нулевые
    """
    mean = _exact_sum(values) / len(values)
    deviations = [v - mean for v in values]
    scale = max(abs(d) for d in deviations)
    if scale == 0.0:
        return None
    return [d / scale for d in deviations]


def _pearson(a: list[int | float], b: list[int | float]) -> float:
    # Нулевая дисперсия определяется точно, без абсолютного epsilon
    if _is_constant(a) or _is_constant(b):
        return 0.0

    dev_a = _scaled_deviations(a)
    dev_b = _scaled_deviations(b)
    if dev_a is None or dev_b is None:
        return 0.0

    cov = math.fsum(x * y for x, y in zip(dev_a, dev_b))
    var_a = math.fsum(x * x for x in dev_a)
    var_b = math.fsum(y * y for y in dev_b)

    # var_a, var_b >= 1 после масштабирования
    r = safe_divide(cov, math.sqrt(var_a) * math.sqrt(var_b), fallback=0.0)
    # Округление может вывести |r| чуть за 1.0
    return max(-1.0, min(1.0, r))


def cross_correlation(
    a: Sequence[int | float],
    b: Sequence[int | float],
    window: int,
    normalization: Normalization = Normalization.DOT,
) -> list[float]:
    """
    Скользящая cross-correlation двух последовательностей.

    Для каждого сдвига k сравниваются a[k:k+window] и b[k:k+window].
    Последовательности могут быть разной длины; вычисляются только
    сдвиги 0 .. min(len(a), len(b)) - window.

    Args:
        a: Первая последовательность
        b: Вторая последовательность
        window: Размер окна, 1 <= window <= min(len(a), len(b))
        normalization: DOT (сырое скалярное произведение, default)
            или PEARSON (коэффициент корреляции в [-1, 1])

    Returns:
        Список длины min(len(a), len(b)) - window + 1

    Raises:
        InvalidWindow: Недопустимый window или пустой вход
        TypeMismatch: Нечисловой сэмпл или неизвестная нормализация
        InvalidSample: NaN/Inf сэмпл

    Examples:
        >>> cross_correlation([1, 1, 1, 1], [1, 1, 1, 1], 2)
        [2.0, 2.0, 2.0]
        >>> cross_correlation([1, 2, 3], [4, 5, 6, 7], 2)
        [14.0, 28.0]
    """
    values_a = validate_samples(a, "a")
    values_b = validate_samples(b, "b")
    validate_window(window, len(values_a), "a")
    validate_window(window, len(values_b), "b")

    try:
        mode = Normalization(normalization)
    except ValueError:
        raise TypeMismatch(
            f"Unknown normalization {normalization!r}, expected one of "
            f"{[n.value for n in Normalization]}"
        ) from None

    count = min(len(values_a), len(values_b)) - window + 1
    result: list[float] = []

    for k in range(count):
        win_a = values_a[k:k + window]
        win_b = values_b[k:k + window]
        if mode == Normalization.DOT:
            result.append(_exact_sum([x * y for x, y in zip(win_a, win_b)]))
        else:
            result.append(_pearson(win_a, win_b))

    logger.debug(
        "cross_correlation: len_a=%d len_b=%d window=%d mode=%s -> %d values",
        len(values_a), len(values_b), window, mode.value, count,
    )
    return result


# =============================================================================
# REQUEST MODEL
# =============================================================================


class WindowRequest(BaseModel):
    """
    Запрос оконного вычисления, полученный в виде JSON.

    Immutable модель (frozen=True). Для cross_correlation обязателен other.
    """

    operation: Literal["sliding_average", "cross_correlation"] = Field(
        ..., description="Тип вычисления"
    )
    samples: list[int | float] = Field(..., description="Основная последовательность")
    other: list[int | float] | None = Field(
        None, description="Вторая последовательность (cross_correlation)"
    )
    window: int = Field(..., description="Размер окна")
    normalization: Normalization = Field(
        Normalization.DOT, description="Нормализация cross_correlation"
    )

    model_config = {"frozen": True}

    @classmethod
    def from_contract(cls, data: dict) -> "WindowRequest":
        """
        Создание из JSON dict с предварительной проверкой по window_request схеме.

        Raises:
            jsonschema.ValidationError: Если data не соответствует контракту
        """
        from src.datautils.contracts.validators import validate_contract

        validate_contract("window_request", data)
        return cls(**data)

    def run(self) -> list[float]:
        """Выполнение запрошенного вычисления"""
        if self.operation == "sliding_average":
            return sliding_average(self.samples, self.window)
        if self.other is None:
            raise InvalidWindow("cross_correlation request requires 'other' samples")
        return cross_correlation(self.samples, self.other, self.window, self.normalization)
