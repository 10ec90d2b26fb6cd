"""
Domain models and value objects.

Contains the Variant tagged union and its hex/integer conversions.
"""

from src.datautils.domain.hex import HEX_DIGITS, bytes_to_hex, hex_to_bytes, is_hex_text
from src.datautils.domain.integer import (
    DEFAULT_INT_WIDTH,
    IntFormat,
    IntWidth,
    fit_int,
    int_range,
    parse_int,
)
from src.datautils.domain.variant import (
    BUFFER_LITERAL_PREFIX,
    VARIANT_BYTE_ORDER,
    VARIANT_INT_BYTES,
    VARIANT_INT_FORMAT,
    Variant,
    VariantKind,
)

__all__ = [
    # Hex
    "HEX_DIGITS",
    "bytes_to_hex",
    "hex_to_bytes",
    "is_hex_text",
    # Integer
    "DEFAULT_INT_WIDTH",
    "IntFormat",
    "IntWidth",
    "fit_int",
    "int_range",
    "parse_int",
    # Variant
    "BUFFER_LITERAL_PREFIX",
    "VARIANT_BYTE_ORDER",
    "VARIANT_INT_BYTES",
    "VARIANT_INT_FORMAT",
    "Variant",
    "VariantKind",
]
