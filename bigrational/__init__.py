"""
bigrational - exact arbitrary-precision rational arithmetic

Value types:
- Fraction: numerator/denominator with explicit simplification
- BigRational: mixed numbers (whole part + proper fraction)

With integer and rational root extraction and conversions to and from
native numbers, decimals and text.
"""

from .config import Settings, get_settings
from .conversions import (
    continued_fraction,
    fraction_from_decimal,
    fraction_from_float,
    fraction_from_float32,
    fraction_to_decimal,
    fraction_to_float,
    fraction_to_float32,
    fraction_to_int,
    parse_fraction,
    parse_mixed,
)
from .errors import (
    BigRationalError,
    DecimalOverflowError,
    InvalidArgumentError,
    RationalFormatError,
    ZeroDenominatorError,
)
from .fraction import MINUS_ONE, ONE, ONE_HALF, ZERO, Fraction, gcd, lcm
from .logging import get_logger, setup_logging
from .mixed import BigRational
from .roots import integer_nth_root, isqrt, nth_root, sqrt
from .value import RationalValue, TypePrecedence

__version__ = "0.1.0"

__all__ = [
    "RationalValue",
    "TypePrecedence",
    "Fraction",
    "BigRational",
    "ZERO",
    "ONE",
    "MINUS_ONE",
    "ONE_HALF",
    "gcd",
    "lcm",
    "isqrt",
    "integer_nth_root",
    "nth_root",
    "sqrt",
    "continued_fraction",
    "fraction_from_float",
    "fraction_from_float32",
    "fraction_from_decimal",
    "fraction_to_float",
    "fraction_to_float32",
    "fraction_to_decimal",
    "fraction_to_int",
    "parse_fraction",
    "parse_mixed",
    "BigRationalError",
    "InvalidArgumentError",
    "ZeroDenominatorError",
    "RationalFormatError",
    "DecimalOverflowError",
    "Settings",
    "get_settings",
    "get_logger",
    "setup_logging",
]
