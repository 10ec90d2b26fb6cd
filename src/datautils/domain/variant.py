"""
Variant: Tagged union над {Integer, Text, Bytes}

Immutable Pydantic модель: тег VariantKind + payload. Ровно один вариант
активен в любой момент, пустого состояния нет.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Тип payload всегда соответствует тегу (проверяется model validator)
2. Integer payload помещается в signed 64-bit
3. Variant immutable (frozen=True): любая конверсия возвращает новый объект
4. Каждый Variant владеет своим payload (bytearray/memoryview копируются в bytes)
5. Accessor с несовпадающим тегом → TypeMismatch

СТРОГИЕ accessors (as_*) возвращают payload только своего тега.
COERCE-конверсии (coerce_*) интерпретируют любой тег в целевом виде:
    Integer → text:  каноническая десятичная запись
    Bytes   → text:  hex (lowercase)
    Integer → bytes: 8 байт signed little-endian
    Text    → bytes: UTF-8
    Text    → int:   strict parse_int (i64)
    Bytes   → int:   ровно 8 байт signed little-endian
"""

import logging
from enum import Enum
from typing import Final

from pydantic import BaseModel, model_validator

from src.datautils.domain.hex import bytes_to_hex, hex_to_bytes
from src.datautils.domain.integer import (
    DEFAULT_INT_WIDTH,
    IntFormat,
    IntWidth,
    fit_int,
    parse_int,
)
from src.datautils.errors import ParseError, RangeError, TypeMismatch

logger = logging.getLogger(__name__)

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Формат Integer payload
VARIANT_INT_FORMAT: Final[IntFormat] = IntFormat(width=IntWidth.W64, signed=True)

# Размер бинарного представления Integer payload
VARIANT_INT_BYTES: Final[int] = 8

# Порядок байтов для Integer ↔ Bytes
VARIANT_BYTE_ORDER: Final[str] = "little"

# Префикс буферного литерала в parse_literal
BUFFER_LITERAL_PREFIX: Final[str] = "$0x"


# =============================================================================
# ENUMS
# =============================================================================


class VariantKind(str, Enum):
    """Активный тег Variant"""

    INTEGER = "integer"
    TEXT = "text"
    BYTES = "bytes"


_PAYLOAD_TYPES: Final[dict[VariantKind, type]] = {
    VariantKind.INTEGER: int,
    VariantKind.TEXT: str,
    VariantKind.BYTES: bytes,
}


# =============================================================================
# VARIANT MODEL
# =============================================================================


class Variant(BaseModel):
    """
    Значение, помеченное ровно одним из тегов Integer, Text, Bytes.

    Создаётся через фабрики from_integer / from_text / from_bytes /
    from_hex_text / parse_literal.

    Examples:
        >>> Variant.from_bytes(b"\\x01\\xff").to_hex_text().as_text()
        '01ff'
        >>> Variant.from_text("0x10").to_integer(width=8).as_integer()
        16
    """

    kind: VariantKind
    value: int | str | bytes

    model_config = {"frozen": True, "strict": True}

    @model_validator(mode="after")
    def validate_payload_matches_kind(self) -> "Variant":
        """Проверка соответствия payload тегу и диапазона Integer"""
        expected = _PAYLOAD_TYPES[self.kind]
        if type(self.value) is not expected:
            raise ValueError(
                f"{self.kind.value} variant requires {expected.__name__} payload, "
                f"got {type(self.value).__name__}"
            )
        if self.kind == VariantKind.INTEGER and not VARIANT_INT_FORMAT.contains(self.value):
            raise ValueError(f"Integer payload {self.value} does not fit signed 64-bit")
        return self

    # -------------------------------------------------------------------------
    # Фабрики
    # -------------------------------------------------------------------------

    @classmethod
    def from_integer(cls, value: int) -> "Variant":
        """
        Integer variant.

        Raises:
            TypeMismatch: Если value не int (bool отклоняется)
            RangeError: Если value вне signed 64-bit
        """
        fit_int(value, VARIANT_INT_FORMAT.width, VARIANT_INT_FORMAT.signed)
        return cls(kind=VariantKind.INTEGER, value=int(value))

    @classmethod
    def from_text(cls, value: str) -> "Variant":
        """Text variant. Содержимое не валидируется."""
        if not isinstance(value, str):
            raise TypeMismatch(f"from_text expects str, got {type(value).__name__}")
        return cls(kind=VariantKind.TEXT, value=str(value))

    @classmethod
    def from_bytes(cls, value: bytes | bytearray | memoryview) -> "Variant":
        """Bytes variant. Payload копируется в неизменяемый bytes."""
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeMismatch(f"from_bytes expects a byte buffer, got {type(value).__name__}")
        return cls(kind=VariantKind.BYTES, value=bytes(value))

    @classmethod
    def from_hex_text(cls, text: "str | Variant") -> "Variant":
        """
        Bytes variant из hex текста.

        Args:
            text: Hex строка или Text variant

        Raises:
            TypeMismatch: Если передан не-Text variant или не str
            InvalidEncoding: Нечётная длина или не-hex символ
        """
        if isinstance(text, Variant):
            text = text.as_text()
        return cls(kind=VariantKind.BYTES, value=hex_to_bytes(text))

    @classmethod
    def parse_literal(cls, token: str) -> "Variant":
        """
        Классификация пользовательского токена в Variant.

        Правила (после удаления пробелов по краям):
        - начинается с цифры или знака → Integer (strict parse_int, i64)
        - "..." в двойных кавычках → Text без кавычек
        - $0x<hex> → Bytes
        - иначе → ParseError

        Examples:
            >>> Variant.parse_literal("  123 ").as_integer()
            123
            >>> Variant.parse_literal('" 456 but a string "').as_text()
            ' 456 but a string '
            >>> Variant.parse_literal("$0x1122").as_bytes()
            b'\\x11"'
        """
        if not isinstance(token, str):
            raise TypeMismatch(f"parse_literal expects str, got {type(token).__name__}")

        literal = token.strip()
        if not literal:
            raise ParseError("Literal token is empty")

        first, last = literal[0], literal[-1]

        if first.isdigit() or first in "+-":
            logger.debug("Literal %r classified as integer", literal)
            return cls.from_integer(parse_int(literal, DEFAULT_INT_WIDTH, signed=True))

        if first == '"' or last == '"':
            if len(literal) < 2 or first != last:
                raise ParseError(f"String literal missing double quote at one end: {literal!r}")
            logger.debug("Literal %r classified as text", literal)
            return cls.from_text(literal[1:-1])

        if literal.startswith(BUFFER_LITERAL_PREFIX):
            logger.debug("Literal %r classified as bytes", literal)
            return cls.from_hex_text(literal[len(BUFFER_LITERAL_PREFIX):])

        raise ParseError(f"Unrecognized literal token: {literal!r}")

    # -------------------------------------------------------------------------
    # Строгие accessors
    # -------------------------------------------------------------------------

    def _require(self, kind: VariantKind, operation: str) -> None:
        if self.kind != kind:
            raise TypeMismatch(
                f"{operation} requires a {kind.value} variant, got {self.kind.value}"
            )

    def as_integer(self) -> int:
        self._require(VariantKind.INTEGER, "as_integer")
        return self.value

    def as_text(self) -> str:
        self._require(VariantKind.TEXT, "as_text")
        return self.value

    def as_bytes(self) -> bytes:
        self._require(VariantKind.BYTES, "as_bytes")
        return self.value

    # -------------------------------------------------------------------------
    # Конверсии
    # -------------------------------------------------------------------------

    def to_hex_text(self, uppercase: bool = False) -> "Variant":
        """
        Bytes → Text variant с hex представлением.

        Raises:
            TypeMismatch: Если variant не Bytes
        """
        self._require(VariantKind.BYTES, "to_hex_text")
        return Variant.from_text(bytes_to_hex(self.value, uppercase=uppercase))

    def to_integer(self, width: int = DEFAULT_INT_WIDTH, signed: bool = True) -> "Variant":
        """
        Text → Integer variant.

        Значение проверяется по запрошенной ширине, затем по signed 64-bit
        (ограничение Integer payload): unsigned 64-bit значения выше
        2**63 - 1 дают RangeError.

        Raises:
            TypeMismatch: Если variant не Text
            ParseError: Нарушение грамматики
            RangeError: Значение вне диапазона
        """
        self._require(VariantKind.TEXT, "to_integer")
        return Variant.from_integer(parse_int(self.value, width, signed))

    def coerce_integer(self) -> int:
        """
        Интерпретация любого тега как signed 64-bit int.

        Raises:
            ParseError / RangeError: Text не является валидным i64 literal
            TypeMismatch: Bytes длиной не 8 байт
        """
        if self.kind == VariantKind.INTEGER:
            return self.value
        if self.kind == VariantKind.TEXT:
            return parse_int(self.value, VARIANT_INT_FORMAT.width, VARIANT_INT_FORMAT.signed)
        if self.kind == VariantKind.BYTES:
            if len(self.value) != VARIANT_INT_BYTES:
                raise TypeMismatch(
                    f"Bytes variant of length {len(self.value)} cannot be read as "
                    f"a {VARIANT_INT_BYTES}-byte integer"
                )
            return int.from_bytes(self.value, VARIANT_BYTE_ORDER, signed=True)
        raise TypeMismatch(f"Unhandled variant kind {self.kind!r}")

    def coerce_unsigned(self) -> int:
        """
        Как coerce_integer, но отрицательные значения запрещены.

        Raises:
            RangeError: Если значение отрицательное
        """
        value = self.coerce_integer()
        if value < 0:
            raise RangeError(f"Negative value {value} where an unsigned integer is required")
        return value

    def coerce_text(self) -> str:
        """Integer → decimal, Text → как есть, Bytes → hex (lowercase)"""
        if self.kind == VariantKind.INTEGER:
            return str(self.value)
        if self.kind == VariantKind.TEXT:
            return self.value
        if self.kind == VariantKind.BYTES:
            return bytes_to_hex(self.value)
        raise TypeMismatch(f"Unhandled variant kind {self.kind!r}")

    def coerce_bytes(self) -> bytes:
        """Integer → 8 байт signed little-endian, Text → UTF-8, Bytes → копия"""
        if self.kind == VariantKind.INTEGER:
            return self.value.to_bytes(VARIANT_INT_BYTES, VARIANT_BYTE_ORDER, signed=True)
        if self.kind == VariantKind.TEXT:
            return self.value.encode("utf-8")
        if self.kind == VariantKind.BYTES:
            return bytes(self.value)
        raise TypeMismatch(f"Unhandled variant kind {self.kind!r}")

    def __str__(self) -> str:
        return self.coerce_text()
