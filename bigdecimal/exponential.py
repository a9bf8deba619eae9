"""Exponential and float-exponent power.

Both functions work in float arithmetic and convert each float step exactly
into a BigDecimal. Exponents beyond ±100 are peeled off in steps of e^±100
(or base^±100) so no single float step overflows; the remainder is applied
last. Precision is therefore bounded by float precision, not by the
configured precision.
"""

from __future__ import annotations

import math
from collections.abc import Callable

from bigdecimal.core import BigDecimal
from bigdecimal.errors import DecimalOverflowError, DomainError, NotANumberError

__all__ = ["exp", "pow_float"]

# Largest exponent applied in a single float step
STEP = 100

# Largest exponent magnitude accepted; each STEP costs one multiplication
MAX_EXPONENT = 100_000


def _float_step(func: Callable[[float], float], x: float) -> BigDecimal:
    """Evaluate one float step and convert it exactly."""
    try:
        value = func(x)
    except OverflowError as err:
        raise DecimalOverflowError(f"Float step overflowed at exponent {x}") from err
    except ValueError as err:
        raise DomainError(f"Float step undefined at exponent {x}") from err
    return BigDecimal.from_float(value)


def _reduce(exponent: float | int, func: Callable[[float], float]) -> BigDecimal:
    # One multiplication per step, so the cost grows linearly with the exponent
    if abs(exponent) > MAX_EXPONENT:
        raise DecimalOverflowError(f"Exponent {exponent} is too large to reduce")

    result = BigDecimal(1)
    while abs(exponent) > STEP:
        step = STEP if exponent > 0 else -STEP
        result = result * _float_step(func, step)
        exponent -= step

    return result * _float_step(func, float(exponent))


def _check_exponent(exponent: float | int) -> None:
    if isinstance(exponent, float):
        if math.isnan(exponent):
            raise NotANumberError("exponent is not a number (NaN)")
        if math.isinf(exponent):
            raise DecimalOverflowError("exponent is infinite")


def exp(exponent: float | int) -> BigDecimal:
    """Return e raised to `exponent`.

    Int exponents are reduced exactly; float exponents are reduced in float
    arithmetic.

    Raises:
        DecimalOverflowError: If exponent is infinite or its magnitude exceeds
            MAX_EXPONENT
        NotANumberError: If exponent is NaN
    """
    _check_exponent(exponent)
    return _reduce(exponent, math.exp)


def pow_float(basis: float, exponent: float | int) -> BigDecimal:
    """Return basis raised to a float exponent.

    Raises:
        DomainError: If the power is undefined in float arithmetic
            (e.g. a negative basis with a fractional exponent, or zero to a
            negative power)
        DecimalOverflowError: If a float step overflows, inputs are infinite,
            or the exponent magnitude exceeds MAX_EXPONENT
        NotANumberError: If basis or exponent is NaN
    """
    if math.isnan(basis):
        raise NotANumberError("basis is not a number (NaN)")
    if math.isinf(basis):
        raise DecimalOverflowError("basis is infinite")
    _check_exponent(exponent)
    return _reduce(exponent, lambda x: math.pow(basis, x))
