"""
Тесты для модуля Numerical Safeguards

Проверяет:
1. Валидацию сэмплов (тип, NaN/Inf, bool)
2. Валидацию размера окна
3. Безопасное деление с fallback
4. Epsilon-сравнения float
5. Компенсированную бегущую сумму
"""

import math

import pytest

from src.datautils.errors import InvalidSample, InvalidWindow, TypeMismatch
from src.datautils.math.numerical_safeguards import (
    EPS_CALC,
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    SAMPLE_INT_MAX,
    SAMPLE_INT_MIN,
    CompensatedSum,
    is_close,
    is_valid_float,
    safe_divide,
    validate_samples,
    validate_window,
)

# =============================================================================
# ТЕСТЫ ВАЛИДАЦИИ
# =============================================================================


class TestValidateSamples:
    """Тесты для validate_samples"""

    def test_returns_copy(self) -> None:
        samples = [1, 2.5, -3]
        result = validate_samples(samples)
        assert result == samples
        assert result is not samples

    def test_accepts_empty(self) -> None:
        """Пустота проверяется validate_window, не здесь"""
        assert validate_samples([]) == []

    def test_rejects_bool(self) -> None:
        with pytest.raises(TypeMismatch, match="bool"):
            validate_samples([False])

    def test_rejects_non_sequence(self) -> None:
        with pytest.raises(TypeMismatch):
            validate_samples(42)  # type: ignore[arg-type]
        with pytest.raises(TypeMismatch):
            validate_samples(b"\x01\x02")  # type: ignore[arg-type]

    def test_rejects_nan(self) -> None:
        with pytest.raises(InvalidSample, match=r"xs\[0\]"):
            validate_samples([math.nan], "xs")

    def test_integer_bounds(self) -> None:
        """int сэмплы ограничены диапазоном [i64 min, u64 max]"""
        assert validate_samples([SAMPLE_INT_MIN, SAMPLE_INT_MAX]) == [-(2**63), 2**64 - 1]
        with pytest.raises(InvalidSample, match="64-bit"):
            validate_samples([SAMPLE_INT_MAX + 1])
        with pytest.raises(InvalidSample, match=r"xs\[1\]"):
            validate_samples([0, SAMPLE_INT_MIN - 1], "xs")


class TestValidateWindow:
    """Тесты для validate_window"""

    def test_valid_bounds(self) -> None:
        validate_window(1, 5)
        validate_window(5, 5)

    def test_empty_sequence_first(self) -> None:
        """Пустой вход сообщается даже при валидном окне"""
        with pytest.raises(InvalidWindow, match="empty"):
            validate_window(1, 0)

    @pytest.mark.parametrize("window", [0, -2, 6])
    def test_out_of_bounds(self, window: int) -> None:
        with pytest.raises(InvalidWindow):
            validate_window(window, 5)


# =============================================================================
# ТЕСТЫ БЕЗОПАСНОГО ДЕЛЕНИЯ
# =============================================================================


class TestSafeDivide:
    """Тесты для safe_divide"""

    def test_normal_division(self) -> None:
        assert safe_divide(10.0, 2.0) == 5.0
        assert safe_divide(-9.0, 3.0) == -3.0

    def test_zero_denominator_returns_fallback(self) -> None:
        assert safe_divide(10.0, 0.0) == 0.0
        assert safe_divide(10.0, 0.0, fallback=-1.0) == -1.0

    def test_tiny_denominator_returns_fallback(self) -> None:
        assert safe_divide(1.0, EPS_CALC / 10) == 0.0

    def test_overflow_returns_fallback(self) -> None:
        assert safe_divide(1e308, 1e-11, fallback=7.0) == 7.0

    def test_invalid_eps(self) -> None:
        with pytest.raises(ValueError, match="eps must be positive"):
            safe_divide(1.0, 1.0, eps=0.0)


# =============================================================================
# ТЕСТЫ СРАВНЕНИЙ
# =============================================================================


class TestComparisons:
    """Тесты is_valid_float и is_close"""

    def test_is_valid_float(self) -> None:
        assert is_valid_float(0.0)
        assert is_valid_float(-1e308)
        assert not is_valid_float(math.nan)
        assert not is_valid_float(math.inf)

    def test_is_close_defaults(self) -> None:
        assert EPS_FLOAT_COMPARE_REL == 1e-9
        assert EPS_FLOAT_COMPARE_ABS == 1e-12
        assert is_close(1.0, 1.0 + 1e-10)
        assert not is_close(1.0, 1.1)
        assert is_close(0.0, 1e-13)


# =============================================================================
# ТЕСТЫ КОМПЕНСИРОВАННОЙ СУММЫ
# =============================================================================


class TestCompensatedSum:
    """Тесты CompensatedSum"""

    def test_empty(self) -> None:
        assert CompensatedSum().value == 0.0

    def test_start_value(self) -> None:
        acc = CompensatedSum(2.5)
        acc.add(1)
        assert acc.value == 3.5

    def test_tenths_sum_exactly(self) -> None:
        acc = CompensatedSum()
        for _ in range(10):
            acc.add(0.1)
        assert acc.value == 1.0

    def test_large_and_small_terms(self) -> None:
        """Малые слагаемые не теряются на фоне большого"""
        acc = CompensatedSum()
        acc.add(1e16)
        for _ in range(100):
            acc.add(1.0)
        acc.subtract(1e16)
        assert acc.value == 100.0

    def test_subtract_restores(self) -> None:
        acc = CompensatedSum()
        values = [0.1, 0.2, 0.3, 1e10, -7.25]
        for v in values:
            acc.add(v)
        for v in values:
            acc.subtract(v)
        assert is_close(acc.value, 0.0)
