"""
Base class for the exact rational value types.

This module provides the shared foundation for ``Fraction`` and
``BigRational``:
- A promotion order between the two representations
- Ordering operators on top of an exact three-way ``compare``
- Conversions to native Python numbers
- A numeric hash compatible with ``int`` and ``fractions.Fraction``
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from decimal import Decimal
from enum import IntEnum
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from .fraction import Fraction

_HASH_MODULUS = sys.hash_info.modulus
_HASH_INF = sys.hash_info.inf


class TypePrecedence(IntEnum):
    """
    Type promotion precedence hierarchy.

    Lower values promote to higher values: an integer combined with a
    Fraction yields a Fraction, a Fraction combined with a BigRational
    yields a BigRational.
    """

    INTEGER = 0
    FRACTION = 1
    MIXED = 2


def numeric_hash(numerator: int, denominator: int) -> int:
    """
    Hash of the rational ``numerator/denominator``.

    Uses the same scheme as the built-in numeric types, so values that
    compare equal to an ``int`` hash like that ``int``. The denominator must
    be positive.
    """
    try:
        inverse = pow(denominator, -1, _HASH_MODULUS)
    except ValueError:
        # denominator divisible by the modulus
        hash_ = _HASH_INF
    else:
        hash_ = hash(hash(abs(numerator)) * inverse)
    result = hash_ if numerator >= 0 else -hash_
    return -2 if result == -1 else result


class RationalValue(ABC):
    """
    Base class for exact rational values.

    Subclasses must implement:
    - type_precedence: Class variable defining promotion order
    - to_fraction, compare, to_string, to_tex
    - The arithmetic operators

    Note: Concrete subclasses inherit from both BaseModel and RationalValue,
    e.g. ``class Fraction(BaseModel, RationalValue)``, and define their own
    ``__eq__``, ``__hash__``, ``__str__`` and ``__repr__`` since BaseModel
    comes first in the MRO.
    """

    type_precedence: ClassVar[TypePrecedence]

    @abstractmethod
    def to_fraction(self) -> Fraction:
        """Return the value as a simplified Fraction."""

    @abstractmethod
    def compare(self, other: Any) -> int:
        """Exact three-way comparison: -1, 0 or 1."""

    @abstractmethod
    def to_string(self) -> str:
        """Convert to human-readable string."""

    @abstractmethod
    def to_tex(self) -> str:
        """Convert to LaTeX representation."""

    # Operator overloading

    @abstractmethod
    def __add__(self, other: Any) -> RationalValue:
        """Addition: self + other"""

    @abstractmethod
    def __sub__(self, other: Any) -> RationalValue:
        """Subtraction: self - other"""

    @abstractmethod
    def __mul__(self, other: Any) -> RationalValue:
        """Multiplication: self * other"""

    @abstractmethod
    def __truediv__(self, other: Any) -> RationalValue:
        """Division: self / other"""

    @abstractmethod
    def __neg__(self) -> RationalValue:
        """Unary negation: -self"""

    @abstractmethod
    def __abs__(self) -> RationalValue:
        """Absolute value: abs(self)"""

    def __pos__(self) -> RationalValue:
        """Unary positive: +self"""
        return self

    # Ordering

    def _compare_or_none(self, other: Any) -> int | None:
        try:
            return self.compare(other)
        except TypeError:
            return None

    def __lt__(self, other: Any) -> bool:
        result = self._compare_or_none(other)
        return NotImplemented if result is None else result < 0

    def __le__(self, other: Any) -> bool:
        result = self._compare_or_none(other)
        return NotImplemented if result is None else result <= 0

    def __gt__(self, other: Any) -> bool:
        result = self._compare_or_none(other)
        return NotImplemented if result is None else result > 0

    def __ge__(self, other: Any) -> bool:
        result = self._compare_or_none(other)
        return NotImplemented if result is None else result >= 0

    # Conversions

    def __float__(self) -> float:
        from .conversions import fraction_to_float

        return fraction_to_float(self.to_fraction())

    def __int__(self) -> int:
        from .conversions import fraction_to_int

        return fraction_to_int(self.to_fraction())

    def __trunc__(self) -> int:
        return self.__int__()

    def __bool__(self) -> bool:
        return not self.to_fraction().is_zero

    def to_decimal(self) -> Decimal:
        """Convert to ``decimal.Decimal`` (96-bit mantissa, scale <= 28)."""
        from .conversions import fraction_to_decimal

        return fraction_to_decimal(self.to_fraction())
