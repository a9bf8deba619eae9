"""Digit-level helpers over (mantissa, exponent) integer pairs.

These functions work on plain ints so the BigDecimal class can apply them
without constructing intermediate values. None of them consult the
process-wide configuration.

Digit counting is arithmetic and text conversion goes through
decimal.Decimal, so mantissas beyond the interpreter's int/str conversion
limit (4300 digits by default) are handled like any other.
"""

from __future__ import annotations

import math
from decimal import Decimal

__all__ = [
    "div_trunc",
    "int_to_text",
    "text_to_int",
    "number_of_digits",
    "trailing_zeros",
    "significant_digits",
    "normalize_components",
    "truncate_components",
    "align",
    "sign_of",
    "decimal_index",
]


def div_trunc(a: int, b: int) -> int:
    """Integer division with truncation toward zero.

    Python's // operator rounds toward negative infinity; digit truncation
    must drop digits toward zero instead. This matters for negative mantissas.

    Examples:
        -7 // 3 = -3 (rounds toward -inf)
        div_trunc(-7, 3) = -2 (truncates toward zero)

    Raises:
        ZeroDivisionError: If b is zero
    """
    if b == 0:
        raise ZeroDivisionError("Division by zero in div_trunc")

    # Same sign: floor and truncation agree
    if (a >= 0) == (b >= 0):
        return a // b
    return -(abs(a) // abs(b))


def int_to_text(value: int) -> str:
    """Decimal digits of value, with a leading '-' when negative.

    Unlike str(), not subject to sys.get_int_max_str_digits().
    """
    return str(Decimal(value))


def text_to_int(text: str) -> int:
    """Parse an already-validated integer literal of any length.

    Unlike int(), not subject to sys.get_int_max_str_digits().
    """
    return int(Decimal(text))


def number_of_digits(value: int) -> int:
    """Count decimal digits of value, ignoring the sign. Zero has one digit."""
    value = abs(value)
    if value < 10:
        return 1

    # log10(2) estimate from the bit length, off by at most one either way
    count = int((value.bit_length() - 1) * math.log10(2)) + 1
    while value >= 10**count:
        count += 1
    while count > 1 and value < 10 ** (count - 1):
        count -= 1
    return count


def trailing_zeros(value: int) -> int:
    """Count trailing zero digits of value. Zero has none."""
    value = abs(value)
    if value == 0:
        return 0

    count = 0
    step = 1
    # Strip blocks of doubling size, then finish with halving blocks
    while value % 10**step == 0:
        value //= 10**step
        count += step
        step *= 2
    while step > 1:
        step //= 2
        if value % 10**step == 0:
            value //= 10**step
            count += step
    return count


def significant_digits(mantissa: int) -> int:
    """Count digits of mantissa after discarding sign and trailing zeros.

    Zero has zero significant digits.
    """
    if mantissa == 0:
        return 0
    return number_of_digits(mantissa) - trailing_zeros(mantissa)


def normalize_components(mantissa: int, exponent: int) -> tuple[int, int]:
    """Fold trailing zeros of mantissa into the exponent.

    Zero is returned unchanged, exponent included.
    """
    zeros = trailing_zeros(mantissa)
    if zeros == 0:
        return mantissa, exponent

    # Exact division, so the sign survives //
    return mantissa // 10**zeros, exponent + zeros


def truncate_components(mantissa: int, exponent: int, precision: int) -> tuple[int, int]:
    """Drop least-significant digits so the significant count fits precision.

    The mantissa is divided by 10^(significant_digits - precision), truncating
    toward zero. The exponent only grows by the same amount when it was
    nonzero to begin with; an integer-scaled value (exponent 0) keeps exponent
    0. Non-positive precision is a no-op.

    The significant count excludes trailing zeros but the division applies to
    the full mantissa, so one pass may leave more than `precision` digits.
    """
    if precision <= 0:
        return mantissa, exponent

    difference = significant_digits(mantissa) - precision
    if difference < 1:
        return mantissa, exponent

    mantissa = div_trunc(mantissa, 10**difference)
    if exponent != 0:
        exponent += difference
    return mantissa, exponent


def align(mantissa: int, exponent: int, reference_exponent: int) -> int:
    """Rescale mantissa to reference_exponent.

    Assumes exponent >= reference_exponent.
    """
    return mantissa * 10 ** (exponent - reference_exponent)


def sign_of(mantissa: int, exponent: int) -> int:
    """Sign of mantissa × 10^exponent, with the sub-unit rounding rule.

    A positive value in [0.1, 1) (digit count plus exponent is zero) reports
    1 when its leading digit is 5 or more and 0 otherwise. Everything else
    follows the sign of the mantissa.
    """
    if mantissa == 0:
        return 0
    if mantissa < 0:
        return -1
    if exponent != 0:
        length = number_of_digits(mantissa)
        if length + exponent == 0:
            leading = mantissa // 10 ** (length - 1)
            return 1 if leading >= 5 else 0
    return 1


def decimal_index(mantissa: int, exponent: int) -> int:
    """Zero-based index of the separator in the rendered mantissa.

    A leading negative sign counts as one character.
    """
    length = number_of_digits(mantissa)
    if mantissa < 0:
        length += 1
    return length + exponent
