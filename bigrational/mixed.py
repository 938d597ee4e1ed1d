"""
BigRational type: mixed numbers (whole part plus proper fraction).

A BigRational keeps an integer whole part next to a Fraction remainder.
Arithmetic expands both operands to improper fractions, delegates to the
Fraction operations and reduces the result back to whole + proper fraction.

Sign convention: when the whole part is non-zero it carries the sign and the
fraction is non-negative; when it is zero the fraction carries the sign.
A value constructed with a non-zero whole part and a negative fraction is
read as a negative number, e.g. BigRational(-1, -2, 5) == -7/5.

This holds for a negative whole part too: BigRational(-2, -1, 3) is -7/3.
Mixed-number code that only moves the sign when the whole part is positive
reads the same arguments as -2 + 1/3 == -5/3, so values ported from such
code need their fraction sign checked.
"""

from __future__ import annotations

import operator
from typing import Any, ClassVar

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from .fraction import ZERO as FRACTION_ZERO
from .fraction import Fraction, trunc_divmod
from .value import RationalValue, TypePrecedence


def _normalize(whole: int, fractional: Fraction) -> tuple[int, Fraction]:
    """Apply the sign convention to a (whole, fraction) pair."""
    fractional = fractional.normalize_sign()
    if whole != 0 and fractional.numerator < 0:
        whole = -abs(whole)
        fractional = fractional.negate()
    return whole, fractional


def _is_integer(value: Any) -> bool:
    return isinstance(value, (int, np.integer))


class BigRational(BaseModel, RationalValue):
    """
    BigRational represents a mixed number ``whole + fractional``.

    Examples:
        >>> BigRational(3, 1, 3)          # 3 1/3
        >>> BigRational(7, 5)             # 7/5, reduces to 1 2/5
        >>> BigRational(-1, Fraction(2, 5))
        >>> BigRational("2 3/4")
        >>> BigRational(0.25)
    """

    model_config = ConfigDict(frozen=True)

    whole: int = Field(default=0, description="Integer part")
    fractional: Fraction = Field(default=FRACTION_ZERO, description="Fractional part")

    type_precedence: ClassVar[TypePrecedence] = TypePrecedence.MIXED

    ZERO: ClassVar[BigRational]
    ONE: ClassVar[BigRational]
    MINUS_ONE: ClassVar[BigRational]

    def __init__(self, *args: Any):
        """
        Create a BigRational.

        Accepted forms:
            BigRational(value)                  int, Fraction, BigRational,
                                                float, numpy scalar, Decimal
                                                or "W N/D" text
            BigRational(whole, fraction)
            BigRational(numerator, denominator)
            BigRational(whole, numerator, denominator)
        """
        if len(args) == 0:
            whole, fractional = 0, FRACTION_ZERO
        elif len(args) == 1:
            whole, fractional = self._coerce_single(args[0])
        elif len(args) == 2:
            first, second = args
            if not _is_integer(first):
                raise TypeError(f"Whole part must be an integer, got {type(first).__name__}")
            if isinstance(second, Fraction):
                whole, fractional = operator.index(first), second
            else:
                whole, fractional = 0, Fraction(first, second)
        elif len(args) == 3:
            if not _is_integer(args[0]):
                raise TypeError(f"Whole part must be an integer, got {type(args[0]).__name__}")
            whole, fractional = operator.index(args[0]), Fraction(args[1], args[2])
        else:
            raise TypeError(f"BigRational takes at most 3 arguments ({len(args)} given)")

        whole, fractional = _normalize(whole, fractional)
        super().__init__(whole=whole, fractional=fractional)

    @staticmethod
    def _coerce_single(value: Any) -> tuple[int, Fraction]:
        if isinstance(value, BigRational):
            return value.whole, value.fractional
        if isinstance(value, Fraction):
            return 0, value
        if _is_integer(value):
            return operator.index(value), FRACTION_ZERO
        if isinstance(value, str):
            from .conversions import parse_mixed

            parsed = parse_mixed(value)
            return parsed.whole, parsed.fractional

        # float, numpy float, Decimal
        reduced = Fraction(value).reduce_to_proper_fraction()
        return reduced.whole, reduced.fractional

    # Properties

    @property
    def sign(self) -> int:
        """-1, 0 or 1 according to the sign of the value."""
        if self.whole != 0:
            return 1 if self.whole > 0 else -1
        return self.fractional.sign

    @property
    def is_zero(self) -> bool:
        return self.whole == 0 and self.fractional.is_zero

    # Transform

    def improper_fraction(self) -> Fraction:
        """
        The value as a single (unreduced) fraction.

        whole * den + num over den, with the numerator subtracted for a
        negative whole part.
        """
        if self.whole == 0:
            return self.fractional
        fractional = self.fractional
        remainder = -fractional.numerator if self.whole < 0 else fractional.numerator
        return Fraction(self.whole * fractional.denominator + remainder, fractional.denominator)

    def reduce(self) -> BigRational:
        """Return the value with a proper, simplified fractional part."""
        return self.improper_fraction().reduce_to_proper_fraction()

    def normalize_sign(self) -> BigRational:
        """Values are sign-normalized on construction, so this is the identity."""
        return self

    def to_fraction(self) -> Fraction:
        return self.improper_fraction().simplify()

    # Operand handling

    def _operand_or_none(self, other: Any) -> BigRational | None:
        if isinstance(other, BigRational):
            return other
        if isinstance(other, Fraction) or _is_integer(other):
            return BigRational(other)
        return None

    def _operand(self, other: Any) -> BigRational:
        operand = self._operand_or_none(other)
        if operand is None:
            raise TypeError(f"Unsupported operand type for BigRational: {type(other).__name__}")
        return operand

    # Arithmetic

    def add(self, other: Any) -> BigRational:
        other = self._operand(other)
        return self.improper_fraction().add(other.improper_fraction()).reduce_to_proper_fraction()

    def subtract(self, other: Any) -> BigRational:
        other = self._operand(other)
        return self.improper_fraction().subtract(other.improper_fraction()).reduce_to_proper_fraction()

    def multiply(self, other: Any) -> BigRational:
        other = self._operand(other)
        return self.improper_fraction().multiply(other.improper_fraction()).reduce_to_proper_fraction()

    def divide(self, other: Any) -> BigRational:
        """
        Raises:
            ZeroDenominatorError: If ``other`` is zero
        """
        other = self._operand(other)
        return self.improper_fraction().divide(other.improper_fraction()).reduce_to_proper_fraction()

    def mod(self, other: Any) -> BigRational:
        """Truncated remainder of self / other, signed like ``self``."""
        other = self._operand(other)
        return self.improper_fraction().remainder(other.improper_fraction()).reduce_to_proper_fraction()

    @staticmethod
    def divide_integers(dividend: int, divisor: int) -> BigRational:
        """
        dividend / divisor as a mixed number.

        Examples:
            BigRational.divide_integers(7, 5) → 1 2/5
            BigRational.divide_integers(-7, 5) → -1 2/5
        """
        quotient, remainder = trunc_divmod(operator.index(dividend), operator.index(divisor))
        return BigRational(quotient, Fraction(remainder, divisor)).reduce()

    def pow(self, exponent: Any, precision: int | None = None) -> BigRational:
        return self.improper_fraction().pow(exponent, precision).reduce_to_proper_fraction()

    def sqrt(self, precision: int | None = None) -> BigRational:
        from .roots import sqrt

        return sqrt(self.improper_fraction(), precision).reduce_to_proper_fraction()

    def nth_root(self, root: int, precision: int | None = None) -> BigRational:
        from .roots import nth_root

        return nth_root(self.improper_fraction(), root, precision).reduce_to_proper_fraction()

    def abs(self) -> BigRational:
        if self.sign >= 0:
            return self.reduce()
        return self.improper_fraction().abs().reduce_to_proper_fraction()

    def negate(self) -> BigRational:
        return self.improper_fraction().negate().reduce_to_proper_fraction()

    def log(self) -> float:
        """Natural logarithm as a float."""
        return self.improper_fraction().log()

    def greatest_common_divisor(self, other: Any) -> BigRational:
        other = self._operand(other)
        return self.improper_fraction().greatest_common_divisor(other.improper_fraction()).reduce_to_proper_fraction()

    def least_common_denominator(self, other: Any) -> BigRational:
        other = self._operand(other)
        return self.improper_fraction().least_common_denominator(other.improper_fraction()).reduce_to_proper_fraction()

    # Comparison

    def compare(self, other: Any) -> int:
        """
        Exact three-way comparison.

        Returns:
            -1 if self < other, 0 if equal, 1 if self > other
        """
        return self.improper_fraction().compare(self._operand(other).improper_fraction())

    def __eq__(self, other: Any) -> bool:
        operand = self._operand_or_none(other)
        if operand is None:
            return NotImplemented
        return self.improper_fraction() == operand.improper_fraction()

    def __ne__(self, other: Any) -> bool:
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    def __hash__(self) -> int:
        return hash(self.improper_fraction())

    # String representations

    def to_string(self) -> str:
        """"W N/D", "W", "N/D" or "0", computed on the reduced form."""
        value = self.reduce()
        if value.whole == 0:
            return value.fractional.to_string()
        if value.fractional.is_zero:
            return str(value.whole)
        return f"{value.whole} {value.fractional.numerator}/{value.fractional.denominator}"

    def to_tex(self) -> str:
        """Convert to LaTeX representation."""
        value = self.reduce()
        if value.whole == 0:
            return value.fractional.to_tex()
        if value.fractional.is_zero:
            return str(value.whole)
        return f"{value.whole}\\,{value.fractional.to_tex()}"

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"BigRational({self.whole}, {self.fractional.numerator}, {self.fractional.denominator})"

    # Operators

    def __add__(self, other: Any) -> BigRational:
        operand = self._operand_or_none(other)
        return NotImplemented if operand is None else self.add(operand)

    def __radd__(self, other: Any) -> BigRational:
        operand = self._operand_or_none(other)
        return NotImplemented if operand is None else operand.add(self)

    def __sub__(self, other: Any) -> BigRational:
        operand = self._operand_or_none(other)
        return NotImplemented if operand is None else self.subtract(operand)

    def __rsub__(self, other: Any) -> BigRational:
        operand = self._operand_or_none(other)
        return NotImplemented if operand is None else operand.subtract(self)

    def __mul__(self, other: Any) -> BigRational:
        operand = self._operand_or_none(other)
        return NotImplemented if operand is None else self.multiply(operand)

    def __rmul__(self, other: Any) -> BigRational:
        operand = self._operand_or_none(other)
        return NotImplemented if operand is None else operand.multiply(self)

    def __truediv__(self, other: Any) -> BigRational:
        operand = self._operand_or_none(other)
        return NotImplemented if operand is None else self.divide(operand)

    def __rtruediv__(self, other: Any) -> BigRational:
        operand = self._operand_or_none(other)
        return NotImplemented if operand is None else operand.divide(self)

    def __mod__(self, other: Any) -> BigRational:
        operand = self._operand_or_none(other)
        return NotImplemented if operand is None else self.mod(operand)

    def __rmod__(self, other: Any) -> BigRational:
        operand = self._operand_or_none(other)
        return NotImplemented if operand is None else operand.mod(self)

    def __divmod__(self, other: Any) -> tuple[BigRational, BigRational]:
        operand = self._operand_or_none(other)
        if operand is None:
            return NotImplemented
        quotient, remainder = self.improper_fraction().divrem(operand.improper_fraction())
        return quotient.reduce_to_proper_fraction(), remainder.reduce_to_proper_fraction()

    def __rdivmod__(self, other: Any) -> tuple[BigRational, BigRational]:
        operand = self._operand_or_none(other)
        return NotImplemented if operand is None else divmod(operand, self)

    def __pow__(self, exponent: Any) -> BigRational:
        if _is_integer(exponent) or isinstance(exponent, RationalValue):
            return self.pow(exponent)
        return NotImplemented

    def __rpow__(self, other: Any) -> BigRational:
        operand = self._operand_or_none(other)
        return NotImplemented if operand is None else operand.pow(self)

    def __neg__(self) -> BigRational:
        return self.negate()

    def __abs__(self) -> BigRational:
        return self.abs()


BigRational.ZERO = BigRational(0)
BigRational.ONE = BigRational(1)
BigRational.MINUS_ONE = BigRational(-1)
