"""
Integer: Парсинг текста в целые числа заданной ширины

Строгий парсер integer literal с проверкой диапазона для ширины 8/16/32/64
бит (signed/unsigned).

ГРАММАТИКА (строка должна быть поглощена целиком):
    literal := sign? body
    sign    := "+" | "-"
    body    := ("0x" | "0X") HEXDIGITS
             | ("0b" | "0B") BINDIGITS
             | DECDIGITS

Не допускаются: underscores, octal, пустые группы цифр, пробелы (кроме
явного strip_whitespace=True), знак после префикса.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Нарушение грамматики → ParseError (никакого "parse as much as possible")
2. Значение вне диапазона ширины → RangeError
3. Для любого i в диапазоне: parse_int(str(i)) == i
"""

import re
from enum import IntEnum
from typing import Final

from pydantic import BaseModel, Field

from src.datautils.errors import ParseError, RangeError, TypeMismatch

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Ширина по умолчанию (соответствует Integer payload в Variant)
DEFAULT_INT_WIDTH: Final[int] = 64

_LITERAL_RE: Final[re.Pattern[str]] = re.compile(
    r"(?P<sign>[+-]?)"
    r"(?:"
    r"0[xX](?P<hex>[0-9a-fA-F]+)"
    r"|0[bB](?P<bin>[01]+)"
    r"|(?P<dec>[0-9]+)"
    r")"
)


# =============================================================================
# ТИПЫ
# =============================================================================


class IntWidth(IntEnum):
    """Поддерживаемые ширины целых (бит)"""

    W8 = 8
    W16 = 16
    W32 = 32
    W64 = 64


class IntFormat(BaseModel):
    """
    Целевой целочисленный тип: ширина + знаковость.

    Immutable модель (frozen=True).
    """

    width: IntWidth = Field(IntWidth.W64, description="Ширина в битах (8/16/32/64)")
    signed: bool = Field(True, description="Знаковый тип")

    model_config = {"frozen": True}

    @classmethod
    def from_contract(cls, data: dict) -> "IntFormat":
        """
        Создание из JSON dict с предварительной проверкой по int_format схеме.

        Raises:
            jsonschema.ValidationError: Если data не соответствует контракту
        """
        from src.datautils.contracts.validators import validate_contract

        validate_contract("int_format", data)
        return cls(**data)

    @property
    def min_value(self) -> int:
        return int_range(self.width, self.signed)[0]

    @property
    def max_value(self) -> int:
        return int_range(self.width, self.signed)[1]

    def contains(self, value: int) -> bool:
        """Проверка, что value представимо в данном формате"""
        return self.min_value <= value <= self.max_value

    def parse(self, text: str, *, strip_whitespace: bool = False) -> int:
        return parse_int(text, self.width, self.signed, strip_whitespace=strip_whitespace)


# =============================================================================
# ДИАПАЗОНЫ
# =============================================================================


def _check_width(width: int) -> IntWidth:
    try:
        return IntWidth(width)
    except ValueError:
        raise ValueError(
            f"Unsupported integer width {width}, expected one of "
            f"{[w.value for w in IntWidth]}"
        ) from None


def int_range(width: int = DEFAULT_INT_WIDTH, signed: bool = True) -> tuple[int, int]:
    """
    Диапазон представимых значений.

    Args:
        width: Ширина в битах (8/16/32/64)
        signed: Знаковый тип

    Returns:
        (min_value, max_value) включительно

    Raises:
        ValueError: Если ширина не поддерживается

    Examples:
        >>> int_range(8, signed=True)
        (-128, 127)
        >>> int_range(8, signed=False)
        (0, 255)
    """
    bits = int(_check_width(width))
    if signed:
        return (-(1 << (bits - 1)), (1 << (bits - 1)) - 1)
    return (0, (1 << bits) - 1)


def fit_int(value: int, width: int = DEFAULT_INT_WIDTH, signed: bool = True) -> int:
    """
    Сужение уже вычисленного int до заданной ширины с проверкой диапазона.

    Args:
        value: Целое значение
        width: Целевая ширина
        signed: Знаковость целевого типа

    Returns:
        value без изменений, если помещается

    Raises:
        TypeMismatch: Если value не int (bool не считается int)
        RangeError: Если value вне диапазона

    Examples:
        >>> fit_int(255, 8, signed=False)
        255
        >>> fit_int(256, 8, signed=False)  # doctest: +SKIP
        Traceback (most recent call last):
            ...
        RangeError: ...
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeMismatch(f"Expected int, got {type(value).__name__}")

    lo, hi = int_range(width, signed)
    if value < lo or value > hi:
        kind = "i" if signed else "u"
        raise RangeError(f"Value {value} out of range for {kind}{width} [{lo}, {hi}]")

    return value


# =============================================================================
# ПАРСИНГ
# =============================================================================


def parse_int(
    text: str,
    width: int = DEFAULT_INT_WIDTH,
    signed: bool = True,
    *,
    strip_whitespace: bool = False,
) -> int:
    """
    Строгий парсинг integer literal.

    Args:
        text: Текст литерала (decimal, 0x hex или 0b binary, с опциональным знаком)
        width: Целевая ширина (8/16/32/64)
        signed: Знаковость целевого типа
        strip_whitespace: Разрешить пробелы по краям (по умолчанию строго)

    Returns:
        Значение как Python int

    Raises:
        TypeMismatch: Если text не str
        ParseError: Если text не соответствует грамматике
        RangeError: Если значение вне диапазона ширины

    Examples:
        >>> parse_int("-128", 8)
        -128
        >>> parse_int("0xFF", 8, signed=False)
        255
        >>> parse_int("+0b101")
        5
        >>> parse_int(" 42 ", strip_whitespace=True)
        42
    """
    if not isinstance(text, str):
        raise TypeMismatch(f"parse_int expects str, got {type(text).__name__}")

    _check_width(width)
    source = text.strip() if strip_whitespace else text

    match = _LITERAL_RE.fullmatch(source)
    if match is None:
        raise ParseError(f"Invalid integer literal: {text!r}")

    if match.group("hex") is not None:
        magnitude = int(match.group("hex"), 16)
    elif match.group("bin") is not None:
        magnitude = int(match.group("bin"), 2)
    else:
        magnitude = int(match.group("dec"), 10)

    value = -magnitude if match.group("sign") == "-" else magnitude
    return fit_int(value, width, signed)
