"""Well-known BigDecimal constants.

ZERO, ONE, TEN, MINUS_ONE and ONE_HALF are built under the configuration
active at import time. E and PI carry 200 decimal places; get_pi_digits()
produces π to up to a million decimal places on request.
"""

from __future__ import annotations

import math
from functools import lru_cache

import structlog

from bigdecimal.core import BigDecimal
from bigdecimal.errors import RangeError

__all__ = [
    "ZERO",
    "ONE",
    "TEN",
    "MINUS_ONE",
    "ONE_HALF",
    "E",
    "PI",
    "CONSTANT_DIGITS",
    "MAX_PI_DIGITS",
    "get_pi_digits",
]

logger = structlog.get_logger()

# Decimal places carried by E and PI
CONSTANT_DIGITS = 200

MAX_PI_DIGITS = 1_000_000

# π: leading 3 followed by 200 decimal places
_PI_TEXT = (
    "3141592653589793238462643383279502884197169399375105820974944592307816406286"
    "2089986280348253421170679821480865132823066470938446095505822317253594081284"
    "811174502841027019385211055596446229489549303819"
    "6"
)

# Extra digits computed beyond the requested count, then truncated away
_GUARD_DIGITS = 10

# Chudnovsky series constants
_C = 640320
_C3_OVER_24 = _C**3 // 24
# log10(C^3 / 72): decimal digits gained per series term
_DIGITS_PER_TERM = 14.181647462725477


def _e_scaled(digits: int) -> int:
    """floor(e × 10^digits), summing 1/k! in integer arithmetic."""
    one = 10 ** (digits + _GUARD_DIGITS)
    term = one
    total = 0
    k = 0
    while term:
        total += term
        k += 1
        term //= k
    return total // 10**_GUARD_DIGITS


def _binary_split(a: int, b: int) -> tuple[int, int, int]:
    """P, Q, T products of Chudnovsky terms a..b-1."""
    if b - a == 1:
        if a == 0:
            p = q = 1
        else:
            p = (6 * a - 5) * (2 * a - 1) * (6 * a - 1)
            q = a * a * a * _C3_OVER_24
        t = p * (13591409 + 545140134 * a)
        if a & 1:
            t = -t
        return p, q, t

    m = (a + b) // 2
    p_am, q_am, t_am = _binary_split(a, m)
    p_mb, q_mb, t_mb = _binary_split(m, b)
    return p_am * p_mb, q_am * q_mb, q_mb * t_am + p_am * t_mb


def _pi_scaled(digits: int) -> int:
    """floor(π × 10^digits) via the Chudnovsky series."""
    scale = digits + _GUARD_DIGITS
    terms = int(scale / _DIGITS_PER_TERM) + 1
    _, q, t = _binary_split(0, terms)
    one = 10**scale
    sqrt_c = math.isqrt(10005 * one * one)
    return (q * 426880 * sqrt_c) // t // 10**_GUARD_DIGITS


@lru_cache(maxsize=8)
def _pi_mantissa(digits: int) -> int:
    if digits < len(_PI_TEXT):
        return int(_PI_TEXT[: digits + 1])

    mantissa = _pi_scaled(digits)
    logger.debug("pi_digits_computed", digits=digits)
    return mantissa


def get_pi_digits(digits: int = 8192) -> BigDecimal:
    """Return π truncated to `digits` decimal places.

    Args:
        digits: Decimal places, from 1 to 1,000,000 (default: 8192)

    Raises:
        RangeError: If digits is outside [1, MAX_PI_DIGITS]
    """
    if not 1 <= digits <= MAX_PI_DIGITS:
        raise RangeError(f"π digits must be between 1 and {MAX_PI_DIGITS}, got {digits}")
    return BigDecimal(_pi_mantissa(digits), -digits)


ZERO = BigDecimal(0)
ONE = BigDecimal(1)
TEN = BigDecimal(10)
MINUS_ONE = BigDecimal(-1)
ONE_HALF = BigDecimal.from_float(0.5)

E = BigDecimal(_e_scaled(CONSTANT_DIGITS), -CONSTANT_DIGITS)
PI = BigDecimal(int(_PI_TEXT), -CONSTANT_DIGITS)
