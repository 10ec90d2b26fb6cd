"""
Math modules для datautils

Оконные численные алгоритмы с гарантией стабильности.
"""

# Numerical Safeguards
from src.datautils.math.numerical_safeguards import (
    # Epsilon constants
    EPS_CALC,
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    # Accumulation
    CompensatedSum,
    # Comparisons
    is_close,
    is_valid_float,
    # Safe division
    safe_divide,
    # Validation
    validate_samples,
    validate_window,
)

# Signal Windows
from src.datautils.math.signal_windows import (
    Normalization,
    WindowRequest,
    cross_correlation,
    sequence_average,
    sliding_average,
)

__all__ = [
    # Numerical Safeguards: Epsilon constants
    "EPS_CALC",
    "EPS_FLOAT_COMPARE_ABS",
    "EPS_FLOAT_COMPARE_REL",
    # Numerical Safeguards: Accumulation
    "CompensatedSum",
    # Numerical Safeguards: Comparisons
    "is_close",
    "is_valid_float",
    # Numerical Safeguards: Safe division
    "safe_divide",
    # Numerical Safeguards: Validation
    "validate_samples",
    "validate_window",
    # Signal Windows: Types
    "Normalization",
    "WindowRequest",
    # Signal Windows: Functions
    "cross_correlation",
    "sequence_average",
    "sliding_average",
]
