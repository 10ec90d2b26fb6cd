"""
Hex: Конверсия между байтовыми буферами и hex текстом

Модуль обеспечивает биективное отображение bytes ↔ hex text:
- Каждый байт кодируется двумя hex цифрами, старший nibble первым
- Порядок байтов сохраняется
- Вход принимается в любом регистре, выход нормализован (lowercase по умолчанию)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. len(bytes_to_hex(b)) == 2 * len(b)
2. hex_to_bytes(bytes_to_hex(b)) == b для любого b
3. Нечётная длина или любой не-hex символ → InvalidEncoding (без частичного результата)
4. Пустой буфер ↔ пустая строка (не ошибка)
"""

from typing import Final

from src.datautils.errors import InvalidEncoding, TypeMismatch

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Допустимые символы на входе (регистронезависимо)
HEX_DIGITS: Final[frozenset[str]] = frozenset("0123456789abcdefABCDEF")

# Алфавиты для кодирования nibble → символ
_LOWER_ALPHABET: Final[str] = "0123456789abcdef"
_UPPER_ALPHABET: Final[str] = "0123456789ABCDEF"


# =============================================================================
# КОДИРОВАНИЕ
# =============================================================================


def bytes_to_hex(data: bytes | bytearray | memoryview, uppercase: bool = False) -> str:
    """
    Кодирование байтового буфера в hex текст.

    Args:
        data: Байтовый буфер
        uppercase: Использовать верхний регистр (default: False → lowercase)

    Returns:
        Hex строка длиной 2 * len(data)

    Raises:
        TypeMismatch: Если data не является байтовым буфером

    Examples:
        >>> bytes_to_hex(b"\\x00\\x11\\xee\\xff")
        '0011eeff'
        >>> bytes_to_hex(b"\\xab", uppercase=True)
        'AB'
        >>> bytes_to_hex(b"")
        ''
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeMismatch(f"bytes_to_hex expects a byte buffer, got {type(data).__name__}")

    alphabet = _UPPER_ALPHABET if uppercase else _LOWER_ALPHABET
    return "".join(alphabet[b >> 4] + alphabet[b & 0x0F] for b in bytes(data))


# =============================================================================
# ДЕКОДИРОВАНИЕ
# =============================================================================


def hex_to_bytes(text: str) -> bytes:
    """
    Строгое декодирование hex текста в байты.

    В отличие от bytes.fromhex, пробелы НЕ допускаются: любой символ вне
    [0-9a-fA-F] является ошибкой.

    Args:
        text: Hex строка чётной длины

    Returns:
        Декодированные байты (len(text) // 2)

    Raises:
        TypeMismatch: Если text не str
        InvalidEncoding: Нечётная длина или не-hex символ

    Examples:
        >>> hex_to_bytes("001122EEff00")
        b'\\x00\\x11"\\xee\\xff\\x00'
        >>> hex_to_bytes("")
        b''
    """
    if not isinstance(text, str):
        raise TypeMismatch(f"hex_to_bytes expects str, got {type(text).__name__}")

    if len(text) % 2 != 0:
        raise InvalidEncoding(f"Hex text length {len(text)} is odd: {text!r}")

    for pos, char in enumerate(text):
        if char not in HEX_DIGITS:
            pair_start = pos - pos % 2
            raise InvalidEncoding(
                f"Non-hex character {char!r} at position {pos} "
                f"(pair {text[pair_start:pair_start + 2]!r}) in {text!r}"
            )

    return bytes.fromhex(text)


def is_hex_text(text: str) -> bool:
    """
    Проверка без exception: является ли text валидным hex.

    Returns:
        True если hex_to_bytes(text) завершится успешно
    """
    if not isinstance(text, str) or len(text) % 2 != 0:
        return False
    return all(char in HEX_DIGITS for char in text)
