"""
Conversions between rational values and native numbers or text.

Construction:
- float / numpy float32 → Fraction (heuristic or continued fraction)
- decimal.Decimal → Fraction (exact)
- "N", "N/D" → Fraction; "W N/D", "W+N/D" → BigRational

Outward:
- Fraction → float, numpy float32, Decimal (96-bit mantissa, scale <= 28), int
"""

from __future__ import annotations

import math
import re
from decimal import Decimal

import numpy as np

from .config import get_settings
from .errors import DecimalOverflowError, InvalidArgumentError, RationalFormatError
from .fraction import Fraction, trunc_divmod
from .mixed import BigRational

DOUBLE_PRECISION = 13
SINGLE_PRECISION = 7

DECIMAL_MAX_SCALE = 28
DECIMAL_MAX_MANTISSA = 2**96 - 1

_INTEGER_PATTERN = re.compile(r"[+-]?\d+")
_MIXED_SEPARATOR = re.compile(r"[+ ]+")


# Floats


def _check_finite(value: float) -> None:
    if math.isnan(value):
        raise InvalidArgumentError("Value is not a number")
    if math.isinf(value):
        raise InvalidArgumentError("Cannot represent infinity")


def continued_fraction(x: float, max_denominator: int = 10**8) -> tuple[int, int]:
    """
    Convert a float to a fraction using continued fractions.

    The expansion runs over the exact binary value of ``x`` and stops at the
    last convergent whose denominator does not exceed ``max_denominator``.

    Args:
        x: Finite float to convert
        max_denominator: Maximum allowed denominator

    Returns:
        Tuple of (numerator, denominator), denominator positive
    """
    num, den = x.as_integer_ratio()
    n, rem = divmod(num, den)
    h0, h1, k0, k1 = 1, n, 0, 1

    # End when the expansion terminates or the denominator exceeds max
    while rem != 0:
        num, den = den, rem
        n, rem = divmod(num, den)

        # Compute next numerator and denominator
        h0, h1 = h1, n * h1 + h0
        k0, k1 = k1, n * k1 + k0

        if k1 > max_denominator:
            return (h0, k0)

    return (h1, k1)


def _heuristic(value: float, shortest: str, one_over: float) -> Fraction:
    """
    Fraction from a float and its shortest decimal text.

    A reciprocal that rounds to a whole number gives ``±1/n``; otherwise the
    decimal digits of the shortest text are taken exactly.
    """
    sign = 1 if value > 0 else -1
    if math.isfinite(one_over) and one_over % 1 == 0:
        return Fraction(sign, int(one_over))
    return fraction_from_decimal(Decimal(shortest))


def fraction_from_float(value: float, precision: int = DOUBLE_PRECISION, method: str | None = None) -> Fraction:
    """
    Convert a float to a Fraction.

    Args:
        value: Finite float
        precision: Decimal places used to test the reciprocal (heuristic only)
        method: "heuristic" or "continued_fraction" (default from settings)

    Raises:
        InvalidArgumentError: For NaN or infinity

    Examples:
        >>> fraction_from_float(0.75)
        Fraction(3, 4)
        >>> fraction_from_float(1 / 3)
        Fraction(1, 3)
    """
    value = float(value)
    _check_finite(value)
    if value.is_integer():
        return Fraction(int(value))

    settings = get_settings()
    method = method or settings.FLOAT_CONVERSION
    if method == "continued_fraction":
        num, den = continued_fraction(value, settings.CONTINUED_FRACTION_MAX_DENOMINATOR)
        return Fraction(num, den)
    if method != "heuristic":
        raise InvalidArgumentError(f"Unknown float conversion method: {method}")

    one_over = round(1 / abs(value), precision)
    return _heuristic(value, repr(value), one_over)


def fraction_from_float32(value: float | np.float32) -> Fraction:
    """
    Convert a single-precision float to a Fraction.

    Same heuristic as ``fraction_from_float`` at 7 decimal places, with the
    reciprocal and the shortest text taken at single precision.
    """
    single = np.float32(value)
    as_double = float(single)
    _check_finite(as_double)
    if as_double.is_integer():
        return Fraction(int(as_double))

    one_over = float(np.float32(round(1 / abs(as_double), SINGLE_PRECISION)))
    shortest = np.format_float_positional(single, unique=True, trim="-")
    return _heuristic(as_double, shortest, one_over)


def fraction_from_decimal(value: Decimal) -> Fraction:
    """
    Exact Fraction of a Decimal, simplified.

    Raises:
        InvalidArgumentError: For NaN or infinite decimals
    """
    if not value.is_finite():
        raise InvalidArgumentError(f"Cannot convert non-finite decimal {value}")
    num, den = value.as_integer_ratio()
    return Fraction(num, den)


# Text


def _parse_int(token: str, part: str, text: str) -> int:
    token = token.strip()
    if not _INTEGER_PATTERN.fullmatch(token):
        raise RationalFormatError(f"Invalid {part}", text)
    return int(token)


def parse_fraction(text: str) -> Fraction:
    """
    Parse "N" or "N/D".

    Raises:
        RationalFormatError: For any other shape
        ZeroDenominatorError: For a zero denominator
    """
    if not text or not text.strip():
        raise RationalFormatError("Argument cannot be empty or whitespace", text)

    parts = text.strip().split("/")
    if len(parts) == 1:
        return Fraction(_parse_int(parts[0], "integer", text))
    if len(parts) > 2:
        raise RationalFormatError("Expected an integer (e.g. '34') or a fraction (e.g. '7/12')", text)
    return Fraction(
        _parse_int(parts[0], "numerator", text),
        _parse_int(parts[1], "denominator", text),
    )


def parse_mixed(text: str) -> BigRational:
    """
    Parse "N", "N/D", "W N/D" or "W+N/D".

    Raises:
        RationalFormatError: For any other shape
        ZeroDenominatorError: For a zero denominator
    """
    if not text or not text.strip():
        raise RationalFormatError("Argument cannot be empty or whitespace", text)

    parts = text.strip().split("/")
    if len(parts) == 1:
        return BigRational(_parse_int(parts[0], "whole number", text))
    if len(parts) > 2:
        raise RationalFormatError("Invalid mixed number", text)

    leading = [token for token in _MIXED_SEPARATOR.split(parts[0].strip()) if token]
    if len(leading) == 1:
        whole = 0
        numerator = _parse_int(parts[0], "numerator", text)
    elif len(leading) == 2:
        whole = _parse_int(leading[0], "whole number", text)
        numerator = _parse_int(leading[1], "numerator", text)
    else:
        raise RationalFormatError("Invalid mixed number", text)

    denominator = _parse_int(parts[1], "denominator", text)
    return BigRational(whole, numerator, denominator)


# Outward


def fraction_to_float(value: Fraction) -> float:
    """
    Correctly rounded float of a Fraction.

    Magnitudes beyond the double range give a signed infinity; magnitudes
    below it underflow to zero.
    """
    value = value.normalize_sign()
    try:
        return value.numerator / value.denominator
    except OverflowError:
        return math.inf if value.numerator > 0 else -math.inf


def fraction_to_float32(value: Fraction) -> np.float32:
    return np.float32(fraction_to_float(value))


def fraction_to_decimal(value: Fraction) -> Decimal:
    """
    Decimal with at most 96 mantissa bits and a scale of at most 28.

    The largest scale that fits is used and the digits beyond it are
    truncated.

    Raises:
        DecimalOverflowError: If the integer part needs more than 96 bits
    """
    value = value.normalize_sign()
    negative = value.numerator < 0
    mantissa = abs(value.numerator) * 10**DECIMAL_MAX_SCALE // value.denominator
    if mantissa == 0:
        # underflow - too small for any scale
        return Decimal(0)

    scale = DECIMAL_MAX_SCALE
    while mantissa > DECIMAL_MAX_MANTISSA:
        if scale == 0:
            raise DecimalOverflowError("Value was either too large or too small for a decimal")
        mantissa //= 10
        scale -= 1

    while scale > 0 and mantissa % 10 == 0:
        mantissa //= 10
        scale -= 1

    digits = tuple(int(digit) for digit in str(mantissa))
    return Decimal((int(negative), digits, -scale))


def fraction_to_int(value: Fraction) -> int:
    """Integer part, truncated toward zero."""
    quotient, _ = trunc_divmod(value.numerator, value.denominator)
    return quotient
