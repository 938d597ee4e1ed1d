"""
Root extraction.

Integer square and nth roots with floor semantics, and rational nth roots
found by mediant bisection over the Stern-Brocot tree.
"""

from __future__ import annotations

import math
import operator
from typing import Any

from .config import get_settings
from .errors import InvalidArgumentError
from .fraction import Fraction
from .logging import get_logger

logger = get_logger(__name__)

# Below this the double square root is off by at most one
NATIVE_SQRT_LIMIT = 144838757784765629
ONE_NEWTON_STEP_LIMIT = 85 * 10**36
TWO_NEWTON_STEP_LIMIT = 43322 * 10**123
SECOND_NEWTON_STEP_THRESHOLD = 2 * 10**63

# Precision (in result bits) of the hardware seed of the adaptive scheme
SEED_BITS = 26


def _isqrt_native(n: int) -> int:
    root = int(math.sqrt(n))
    if root * root > n:
        root -= 1
    elif (root + 1) * (root + 1) <= n:
        root += 1
    return root


def _isqrt_newton(n: int, steps: int) -> int:
    root = int(math.sqrt(n))
    for _ in range(steps):
        root = (root + n // root) >> 1
    while root * root > n:
        root -= 1
    return root


def _isqrt_adaptive(n: int) -> int:
    """
    Floor square root by precision doubling.

    ``c`` is half the bit length of ``n``. After each step ``a`` is within one
    of the square root of the top ``2 * d + 1`` or ``2 * d + 2`` bits of ``n``,
    and ``d`` roughly doubles until it reaches ``c``.
    """
    c = (n.bit_length() - 1) // 2

    s = 0
    while c >> s > SEED_BITS:
        s += 1
    d = c >> s
    a = _isqrt_native(n >> 2 * (c - d))

    while s > 0:
        s -= 1
        e = d
        d = c >> s
        a = (a << d - e - 1) + (n >> 2 * c - e - d + 1) // a

    return a - (a * a > n)


def _regime(name: str, n: int) -> dict[str, Any]:
    return {"extra_data": {"regime": name, "bits": n.bit_length()}}


def isqrt(n: Any) -> int:
    """
    Largest integer ``r`` with ``r * r <= n``.

    The method depends on the magnitude of ``n``: a corrected hardware square
    root for small inputs, one or two Newton steps from a hardware seed for
    medium inputs, and adaptive precision doubling for everything larger.

    Raises:
        InvalidArgumentError: If ``n`` is negative
    """
    n = operator.index(n)
    if n < 0:
        raise InvalidArgumentError(f"Cannot take the square root of negative integer {n}")

    if n < NATIVE_SQRT_LIMIT:
        logger.debug("isqrt: native regime for %d-bit input", n.bit_length(), extra=_regime("native", n))
        return _isqrt_native(n)
    if n < ONE_NEWTON_STEP_LIMIT:
        logger.debug("isqrt: one Newton step for %d-bit input", n.bit_length(), extra=_regime("newton", n))
        return _isqrt_newton(n, 1)
    if n < TWO_NEWTON_STEP_LIMIT:
        steps = 2 if n > SECOND_NEWTON_STEP_THRESHOLD else 1
        logger.debug("isqrt: %d Newton steps for %d-bit input", steps, n.bit_length(), extra=_regime("newton", n))
        return _isqrt_newton(n, steps)

    logger.debug("isqrt: adaptive regime for %d-bit input", n.bit_length(), extra=_regime("adaptive", n))
    return _isqrt_adaptive(n)


def integer_nth_root(n: Any, root: Any) -> tuple[int, int]:
    """
    Largest integer ``r`` with ``r ** root <= n``, and ``n - r ** root``.

    Examples:
        >>> integer_nth_root(27, 3)
        (3, 0)
        >>> integer_nth_root(30, 3)
        (3, 3)
    """
    n = operator.index(n)
    root = operator.index(root)
    if root < 1:
        raise InvalidArgumentError(f"Root must be at least 1, got {root}")
    if n < 0:
        raise InvalidArgumentError(f"Cannot take a root of negative integer {n}")

    if n < 2 or root == 1:
        return n, 0
    if root == 2:
        r = isqrt(n)
        return r, n - r * r

    # low ** root <= n < high ** root
    low, high = 1, 1 << -(-n.bit_length() // root)
    while high - low > 1:
        mid = (low + high) >> 1
        if mid**root <= n:
            low = mid
        else:
            high = mid
    return low, n - low**root


def nth_root(
    value: Any,
    root: Any,
    precision: int | None = None,
    max_iterations: int | None = None,
) -> Fraction:
    """
    Nth root of a non-negative rational.

    The integer root of the whole part brackets the result between two
    consecutive integers (or between 0 and 1 for values below one). The
    bracket is then bisected using the mediant of the bounds as the split
    point. Stops at an exact root, or once the bounds are within
    10^-precision of each other, and returns the lower bound.

    Args:
        value: Radicand (Fraction, BigRational, int, ...)
        root: Index of the root, at least 1
        precision: Correct decimal places required (default from settings)
        max_iterations: Bisection cap (default from settings)

    Returns:
        The exact root, or a lower approximation within the deviation bound.
        If the cap is reached first, the best lower bound found so far.

    Raises:
        InvalidArgumentError: For a negative value, a root below 1 or a
            negative precision
    """
    if not isinstance(value, Fraction):
        value = Fraction(value)
    root = operator.index(root)

    if root < 1:
        raise InvalidArgumentError(f"Root must be at least 1, got {root}")
    if value.sign < 0:
        raise InvalidArgumentError(f"Cannot take a root of negative value {value}")
    if value.is_zero or value.is_one or root == 1:
        return value

    settings = get_settings()
    if precision is None:
        precision = settings.ROOT_PRECISION
    if max_iterations is None:
        max_iterations = settings.ROOT_MAX_ITERATIONS
    if precision < 0:
        raise InvalidArgumentError(f"Precision must be non-negative, got {precision}")

    value = value.simplify()
    whole_root, remainder = integer_nth_root(value.numerator // value.denominator, root)
    if remainder == 0 and value.denominator == 1:
        return Fraction(whole_root)

    deviation_bound = Fraction(1, 10**precision)
    lower = Fraction(whole_root)
    upper = Fraction(whole_root + 1)
    details = {"root": root, "precision": precision, "start": whole_root}

    iterations = 0
    while True:
        if iterations >= max_iterations:
            logger.warning(
                "nth_root: no convergence after %d iterations (root=%d, precision=%d); "
                "returning best lower bound",
                iterations, root, precision,
                extra={"extra_data": {**details, "iterations": iterations}},
            )
            break
        iterations += 1

        mediant = lower.mediant(upper).simplify()
        order = mediant.pow(root).compare(value)
        if order > 0:
            upper = mediant
        elif order < 0:
            lower = mediant
        else:
            lower = mediant
            break

        if upper.subtract(lower).compare(deviation_bound) <= 0:
            break

    logger.debug(
        "nth_root: %d bisection iterations (root=%d, precision=%d)",
        iterations, root, precision,
        extra={"extra_data": {**details, "iterations": iterations}},
    )
    return lower


def sqrt(value: Any, precision: int | None = None, max_iterations: int | None = None) -> Fraction:
    """Square root of a non-negative rational (see ``nth_root``)."""
    return nth_root(value, 2, precision, max_iterations)
