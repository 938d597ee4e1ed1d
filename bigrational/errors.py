"""
Exceptions raised by bigrational.

Every failure is deterministic and surfaces immediately to the caller.
Invalid arguments subclass ``ValueError`` so code that already catches the
built-in error keeps working.
"""

from typing import Optional


class BigRationalError(Exception):
    """Base exception for all bigrational errors"""

    def __init__(self, message: str = ""):
        self.message = message
        super().__init__(self.message)


class InvalidArgumentError(BigRationalError, ValueError):
    """Raised when an argument lies outside the domain of an operation"""


class ZeroDenominatorError(InvalidArgumentError, ZeroDivisionError):
    """Raised when an operation would produce a zero denominator"""

    def __init__(self, message: str = "Fraction denominator cannot be zero"):
        super().__init__(message)


class RationalFormatError(InvalidArgumentError):
    """Raised when text cannot be parsed as a fraction or mixed number"""

    def __init__(self, message: str, text: Optional[str] = None):
        self.text = text
        super().__init__(message if text is None else f"{message}: '{text}'")


class DecimalOverflowError(BigRationalError, OverflowError):
    """Raised when a value does not fit any representable decimal scale"""
