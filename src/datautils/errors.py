"""
Errors: Таксономия ошибок datautils

Все ошибки библиотеки наследуются от DataUtilsError и дополнительно от
встроенного исключения с той же семантикой (TypeError / ValueError), чтобы
вызывающий код мог ловить их как обычные Python-исключения.

ПОЛИТИКА:
1. Ошибка всегда возвращается непосредственному вызывающему (raise)
2. Никаких silent defaults и log-and-continue внутри библиотеки
3. Ретраи бессмысленны: все операции детерминированы
"""


class DataUtilsError(Exception):
    """Базовая ошибка библиотеки datautils"""

    pass


class TypeMismatch(DataUtilsError, TypeError):
    """
    Активный тег Variant не совпадает с запрошенным accessor/conversion.

    Также используется для нечисловых сэмплов в signal windows.
    """

    pass


class InvalidEncoding(DataUtilsError, ValueError):
    """Невалидный hex текст: нечётная длина или не-hex символ"""

    pass


class ParseError(DataUtilsError, ValueError):
    """Текст не соответствует грамматике integer literal"""

    pass


class RangeError(DataUtilsError, ValueError):
    """Распарсенное значение не помещается в запрошенную ширину"""

    pass


class InvalidWindow(DataUtilsError, ValueError):
    """
    Недопустимый размер окна: 0, отрицательный, больше длины
    последовательности, либо пустая входная последовательность.
    """

    pass


class InvalidSample(DataUtilsError, ValueError):
    """Сэмпл не является конечным числом (NaN/Inf)"""

    pass
