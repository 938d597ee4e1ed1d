"""
Fraction type: exact rational numbers over arbitrary-precision integers.

A Fraction stores an integer numerator and a non-zero integer denominator.
Canonical form is not maintained automatically: ``simplify`` and
``normalize_sign`` are explicit operations. Multiplication, division and the
reciprocal always return simplified values; construction, addition and
subtraction do not. Equality and ordering therefore cross-multiply instead of
comparing components.
"""

from __future__ import annotations

import math
import operator
from decimal import Decimal
from typing import TYPE_CHECKING, Any, ClassVar

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import InvalidArgumentError, ZeroDenominatorError
from .value import RationalValue, TypePrecedence, numeric_hash

if TYPE_CHECKING:
    from .mixed import BigRational


def gcd(a: int, b: int) -> int:
    """Greatest Common Divisor of the magnitudes of two integers."""
    return math.gcd(a, b)


def lcm(a: int, b: int) -> int:
    """
    Least Common Multiple of the magnitudes of two integers.

    Returns 0 when either argument is 0.
    """
    a, b = abs(a), abs(b)
    if a == 0 or b == 0:
        return 0
    return (a // gcd(a, b)) * b


def reduce_fraction(num: int, den: int) -> tuple[int, int]:
    """
    Reduce a numerator/denominator pair to lowest terms.

    The denominator is made positive first. Zero becomes 0/1; numerators of
    1 and -1 need no gcd.
    """
    if den < 0:
        num, den = -num, -den
    if num == 0:
        return 0, 1
    if num == 1 or num == -1:
        return num, den
    g = gcd(num, den)
    return num // g, den // g


def trunc_divmod(dividend: int, divisor: int) -> tuple[int, int]:
    """
    Integer division truncating toward zero.

    The remainder takes the sign of the dividend, so
    ``dividend == quotient * divisor + remainder`` with
    ``|remainder| < |divisor|``.
    """
    if divisor == 0:
        raise ZeroDenominatorError("Division by zero")
    quotient = abs(dividend) // abs(divisor)
    if (dividend < 0) != (divisor < 0):
        quotient = -quotient
    return quotient, dividend - quotient * divisor


def _as_integer(value: Any, name: str) -> int:
    if isinstance(value, (int, np.integer)):
        return operator.index(value)
    raise TypeError(f"{name} must be an integer, got {type(value).__name__}")


def _coerce_single(value: Any) -> tuple[int, int]:
    """Numerator/denominator of a single constructor argument."""
    if isinstance(value, Fraction):
        return value.numerator, value.denominator
    if isinstance(value, RationalValue):
        fraction = value.to_fraction()
        return fraction.numerator, fraction.denominator
    if isinstance(value, (int, np.integer)):
        return operator.index(value), 1

    # Import here to avoid circular imports
    from .conversions import (
        fraction_from_decimal,
        fraction_from_float,
        fraction_from_float32,
        parse_fraction,
    )

    if isinstance(value, np.float32):
        converted = fraction_from_float32(value)
    elif isinstance(value, (float, np.floating)):
        converted = fraction_from_float(float(value))
    elif isinstance(value, Decimal):
        converted = fraction_from_decimal(value)
    elif isinstance(value, str):
        converted = parse_fraction(value)
    else:
        raise TypeError(f"Cannot convert {type(value).__name__} to Fraction")
    return converted.numerator, converted.denominator


class Fraction(BaseModel, RationalValue):
    """
    Fraction represents a rational number as numerator/denominator.

    Examples:
        >>> Fraction(1, 2)           # 1/2
        >>> Fraction(182, 26)        # stays 182/26 until simplified
        >>> Fraction(182, 26).simplify()   # 7
        >>> Fraction(0.75)           # 3/4
        >>> Fraction("-7/5")         # -7/5
    """

    model_config = ConfigDict(frozen=True)

    numerator: int = Field(description="The numerator")
    denominator: int = Field(description="The denominator, never zero")

    type_precedence: ClassVar[TypePrecedence] = TypePrecedence.FRACTION

    ZERO: ClassVar[Fraction]
    ONE: ClassVar[Fraction]
    MINUS_ONE: ClassVar[Fraction]
    ONE_HALF: ClassVar[Fraction]

    def __init__(self, numerator: Any = 0, denominator: Any = None, *, reduce: bool = False):
        """
        Create a Fraction.

        Args:
            numerator: Numerator, or a single value to convert when no
                denominator is given (int, Fraction, BigRational, float,
                numpy scalar, Decimal or "N/D" text)
            denominator: Denominator (default 1)
            reduce: Whether to simplify immediately (default False)

        Raises:
            ZeroDenominatorError: If the denominator is zero
        """
        if denominator is None:
            num, den = _coerce_single(numerator)
        else:
            num = _as_integer(numerator, "numerator")
            den = _as_integer(denominator, "denominator")

        if den == 0:
            raise ZeroDenominatorError()

        if reduce:
            num, den = reduce_fraction(num, den)

        super().__init__(numerator=num, denominator=den)

    @field_validator("denominator")
    @classmethod
    def _denominator_not_zero(cls, value: int) -> int:
        if value == 0:
            raise ValueError("Fraction denominator cannot be zero")
        return value

    # Properties

    @property
    def sign(self) -> int:
        """-1, 0 or 1 according to the sign of the value."""
        num_sign = (self.numerator > 0) - (self.numerator < 0)
        return num_sign if self.denominator > 0 else -num_sign

    @property
    def is_zero(self) -> bool:
        return self.numerator == 0

    @property
    def is_one(self) -> bool:
        return self.numerator == self.denominator

    @property
    def is_integer(self) -> bool:
        return self.numerator % self.denominator == 0

    # Canonical form

    def normalize_sign(self) -> Fraction:
        """
        Move a negative sign off the denominator.

        The denominator of the result is positive; the numerator carries the
        sign of the value.
        """
        if self.denominator > 0:
            return self
        return Fraction(-self.numerator, -self.denominator)

    def simplify(self) -> Fraction:
        """Return the fraction in lowest terms with a positive denominator."""
        num, den = reduce_fraction(self.numerator, self.denominator)
        if num == self.numerator and den == self.denominator:
            return self
        return Fraction(num, den)

    def is_simplified(self) -> bool:
        """Check if the fraction is in lowest terms with a positive denominator."""
        return self.denominator > 0 and gcd(self.numerator, self.denominator) == 1

    # Operand handling

    def _operand_or_none(self, other: Any) -> Fraction | None:
        if isinstance(other, Fraction):
            return other
        if isinstance(other, (int, np.integer)):
            return Fraction(other)
        if isinstance(other, RationalValue):
            return other.to_fraction()
        return None

    def _operand(self, other: Any) -> Fraction:
        operand = self._operand_or_none(other)
        if operand is None:
            raise TypeError(f"Unsupported operand type for Fraction: {type(other).__name__}")
        return operand

    def _defers_to(self, other: Any) -> bool:
        """True when ``other`` outranks Fraction and should produce the result."""
        return isinstance(other, RationalValue) and other.type_precedence > self.type_precedence

    def to_fraction(self) -> Fraction:
        return self.simplify()

    # Arithmetic

    def add(self, other: Any) -> Fraction:
        """a/b + c/d == (ad + bc)/bd, not simplified."""
        other = self._operand(other)
        return Fraction(
            self.numerator * other.denominator + self.denominator * other.numerator,
            self.denominator * other.denominator,
        )

    def subtract(self, other: Any) -> Fraction:
        """a/b - c/d == (ad - bc)/bd, not simplified."""
        other = self._operand(other)
        return Fraction(
            self.numerator * other.denominator - self.denominator * other.numerator,
            self.denominator * other.denominator,
        )

    def multiply(self, other: Any) -> Fraction:
        """(a/b) * (c/d) == (ac)/(bd), always returned in lowest terms."""
        other = self._operand(other)
        num, den = reduce_fraction(
            self.numerator * other.numerator,
            self.denominator * other.denominator,
        )
        return Fraction(num, den)

    def divide(self, other: Any) -> Fraction:
        """
        (a/b) / (c/d) == (a/b) * (d/c).

        Raises:
            ZeroDenominatorError: If ``other`` is zero
        """
        return self.multiply(self._operand(other).reciprocal()).simplify()

    def remainder(self, other: Any) -> Fraction:
        """
        Remainder of self / other: (ad rem bc)/bd.

        The remainder is truncated, so it takes the sign of ``self``.
        """
        left = self.normalize_sign()
        right = self._operand(other).normalize_sign()
        ad = left.numerator * right.denominator
        bc = left.denominator * right.numerator
        _, rem = trunc_divmod(ad, bc)
        return Fraction(rem, left.denominator * right.denominator)

    def divrem(self, other: Any) -> tuple[Fraction, Fraction]:
        """
        Quotient and remainder of self / other.

        The quotient is the unreduced improper fraction (ad)/(bc); the
        remainder is as for ``remainder``.
        """
        left = self.normalize_sign()
        right = self._operand(other).normalize_sign()
        ad = left.numerator * right.denominator
        bc = left.denominator * right.numerator
        _, rem = trunc_divmod(ad, bc)
        return Fraction(ad, bc), Fraction(rem, left.denominator * right.denominator)

    @staticmethod
    def divrem_integers(dividend: int, divisor: int) -> tuple[int, Fraction]:
        """Truncated integer quotient and the remainder as a fraction of ``divisor``."""
        dividend = _as_integer(dividend, "dividend")
        divisor = _as_integer(divisor, "divisor")
        quotient, rem = trunc_divmod(dividend, divisor)
        return quotient, Fraction(rem, divisor)

    def pow(self, exponent: Any, precision: int | None = None) -> Fraction:
        """
        Raise to an integer or fractional power.

        (a/b)^m == a^m / b^m; a negative exponent inverts the base first.
        (a/b)^(p/q) == q-th root of a^p divided by q-th root of b^p, computed
        to ``precision`` decimal digits.

        Raises:
            InvalidArgumentError: For zero raised to a negative power, or a
                fractional power of a value whose root is undefined
        """
        if isinstance(exponent, RationalValue):
            exponent = exponent.to_fraction()
            if exponent.denominator != 1:
                return self._pow_fraction(exponent, precision)
            exponent = exponent.numerator

        exponent = _as_integer(exponent, "exponent")
        if exponent == 0:
            return ONE

        base = self
        if exponent < 0:
            if self.is_zero:
                raise InvalidArgumentError("Cannot raise zero to a negative power")
            base = self.reciprocal()
            exponent = -exponent

        if exponent == 1:
            return base
        return Fraction(base.numerator ** exponent, base.denominator ** exponent)

    def _pow_fraction(self, exponent: Fraction, precision: int | None) -> Fraction:
        # Import here to avoid circular imports
        from .roots import nth_root

        base = self.normalize_sign()
        p, q = exponent.numerator, exponent.denominator
        num_root = nth_root(Fraction(base.numerator).pow(p), q, precision)
        den_root = nth_root(Fraction(base.denominator).pow(p), q, precision)
        return num_root.divide(den_root)

    def sqrt(self, precision: int | None = None) -> Fraction:
        """Square root to ``precision`` decimal digits (see roots.nth_root)."""
        from .roots import sqrt

        return sqrt(self, precision)

    def nth_root(self, root: int, precision: int | None = None) -> Fraction:
        """Nth root to ``precision`` decimal digits (see roots.nth_root)."""
        from .roots import nth_root

        return nth_root(self, root, precision)

    def reciprocal(self) -> Fraction:
        """
        Swap numerator and denominator, then simplify.

        Raises:
            ZeroDenominatorError: If the value is zero
        """
        if self.numerator == 0:
            raise ZeroDenominatorError("Zero has no reciprocal")
        return Fraction(self.denominator, self.numerator).simplify()

    def abs(self) -> Fraction:
        """Absolute value."""
        if self.sign >= 0:
            return self
        return Fraction(abs(self.numerator), abs(self.denominator))

    def negate(self) -> Fraction:
        return Fraction(-self.numerator, self.denominator)

    def mediant(self, other: Any) -> Fraction:
        """(a + c)/(b + d), the Stern-Brocot mediant of a/b and c/d."""
        other = self._operand(other)
        return Fraction(
            self.numerator + other.numerator,
            self.denominator + other.denominator,
        )

    def log(self) -> float:
        """
        Natural logarithm as a float.

        Raises:
            InvalidArgumentError: If the value is not positive
        """
        value = self.normalize_sign()
        if value.numerator <= 0:
            raise InvalidArgumentError("Logarithm is only defined for positive values")
        return math.log(value.numerator) - math.log(value.denominator)

    # GCD & LCM

    def greatest_common_divisor(self, other: Any) -> Fraction:
        """gcd(a/b, c/d) == gcd(a, c) / lcm(b, d), on the simplified forms."""
        left = self.simplify()
        right = self._operand(other).simplify()
        return Fraction(
            gcd(left.numerator, right.numerator),
            lcm(left.denominator, right.denominator),
        )

    def least_common_denominator(self, other: Any) -> Fraction:
        """lcm of the simplified denominators, as an integer-valued Fraction."""
        left = self.simplify()
        right = self._operand(other).simplify()
        return Fraction(lcm(left.denominator, right.denominator))

    # Comparison

    def compare(self, other: Any) -> int:
        """
        Exact three-way comparison by cross-multiplication.

        Returns:
            -1 if self < other, 0 if equal, 1 if self > other
        """
        left = self.normalize_sign()
        right = self._operand(other).normalize_sign()
        lhs = left.numerator * right.denominator
        rhs = right.numerator * left.denominator
        return (lhs > rhs) - (lhs < rhs)

    def __eq__(self, other: Any) -> bool:
        operand = self._operand_or_none(other)
        if operand is None:
            return NotImplemented
        return self.numerator * operand.denominator == operand.numerator * self.denominator

    def __ne__(self, other: Any) -> bool:
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    def __hash__(self) -> int:
        reduced = self.simplify()
        return numeric_hash(reduced.numerator, reduced.denominator)

    # Transform

    def reduce_to_proper_fraction(self) -> BigRational:
        """
        Split into a whole part and a proper fraction.

        Examples:
            Fraction(7, 5) → BigRational(1, 2, 5)
            Fraction(-7, 5) → BigRational(-1, 2, 5)
            Fraction(2, 5) → BigRational(0, 2, 5)
        """
        from .mixed import BigRational

        value = self.simplify()
        if value.numerator == 0:
            return BigRational(0, ZERO)
        if value.denominator == 1:
            return BigRational(value.numerator, ZERO)
        if abs(value.numerator) > value.denominator:
            whole, rem = divmod(abs(value.numerator), value.denominator)
            if value.numerator < 0:
                whole = -whole
            return BigRational(whole, Fraction(rem, value.denominator))
        return BigRational(0, value)

    # String representations

    def to_string(self) -> str:
        """"0", "N" for whole values, "N/D" otherwise."""
        if self.numerator == 0:
            return "0"
        if self.denominator == 1:
            return str(self.numerator)
        return f"{self.numerator}/{self.denominator}"

    def to_tex(self) -> str:
        """Convert to LaTeX representation."""
        value = self.normalize_sign()
        if value.denominator == 1:
            return str(value.numerator)
        if value.numerator < 0:
            return f"-\\frac{{{-value.numerator}}}{{{value.denominator}}}"
        return f"\\frac{{{value.numerator}}}{{{value.denominator}}}"

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Fraction({self.numerator}, {self.denominator})"

    # Operators

    def __add__(self, other: Any) -> Fraction:
        if self._defers_to(other):
            return NotImplemented
        operand = self._operand_or_none(other)
        return NotImplemented if operand is None else self.add(operand)

    def __radd__(self, other: Any) -> Fraction:
        operand = self._operand_or_none(other)
        return NotImplemented if operand is None else operand.add(self)

    def __sub__(self, other: Any) -> Fraction:
        if self._defers_to(other):
            return NotImplemented
        operand = self._operand_or_none(other)
        return NotImplemented if operand is None else self.subtract(operand)

    def __rsub__(self, other: Any) -> Fraction:
        operand = self._operand_or_none(other)
        return NotImplemented if operand is None else operand.subtract(self)

    def __mul__(self, other: Any) -> Fraction:
        if self._defers_to(other):
            return NotImplemented
        operand = self._operand_or_none(other)
        return NotImplemented if operand is None else self.multiply(operand)

    def __rmul__(self, other: Any) -> Fraction:
        operand = self._operand_or_none(other)
        return NotImplemented if operand is None else operand.multiply(self)

    def __truediv__(self, other: Any) -> Fraction:
        if self._defers_to(other):
            return NotImplemented
        operand = self._operand_or_none(other)
        return NotImplemented if operand is None else self.divide(operand)

    def __rtruediv__(self, other: Any) -> Fraction:
        operand = self._operand_or_none(other)
        return NotImplemented if operand is None else operand.divide(self)

    def __mod__(self, other: Any) -> Fraction:
        if self._defers_to(other):
            return NotImplemented
        operand = self._operand_or_none(other)
        return NotImplemented if operand is None else self.remainder(operand)

    def __rmod__(self, other: Any) -> Fraction:
        operand = self._operand_or_none(other)
        return NotImplemented if operand is None else operand.remainder(self)

    def __divmod__(self, other: Any) -> tuple[Fraction, Fraction]:
        if self._defers_to(other):
            return NotImplemented
        operand = self._operand_or_none(other)
        return NotImplemented if operand is None else self.divrem(operand)

    def __rdivmod__(self, other: Any) -> tuple[Fraction, Fraction]:
        operand = self._operand_or_none(other)
        return NotImplemented if operand is None else operand.divrem(self)

    def __pow__(self, exponent: Any) -> Fraction:
        if isinstance(exponent, (int, np.integer, RationalValue)):
            return self.pow(exponent)
        return NotImplemented

    def __rpow__(self, other: Any) -> Fraction:
        if isinstance(other, (int, np.integer)):
            return Fraction(other).pow(self)
        return NotImplemented

    def __neg__(self) -> Fraction:
        return self.negate()

    def __abs__(self) -> Fraction:
        return self.abs()


# Process-wide constants
ZERO = Fraction(0, 1)
ONE = Fraction(1, 1)
MINUS_ONE = Fraction(-1, 1)
ONE_HALF = Fraction(1, 2)

Fraction.ZERO = ZERO
Fraction.ONE = ONE
Fraction.MINUS_ONE = MINUS_ONE
Fraction.ONE_HALF = ONE_HALF
