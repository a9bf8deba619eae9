"""BigDecimal error classes.

Every error also derives from the closest builtin exception so callers can
catch either the library type or the standard one.
"""


class BigDecimalError(ArithmeticError):
    """Base error for BigDecimal operations."""

    pass


class FormatError(BigDecimalError, ValueError):
    """Numeric text contains characters where a digit is required."""

    pass


class DivisionByZeroError(BigDecimalError, ZeroDivisionError):
    """Divisor is the zero value."""

    pass


class DomainError(BigDecimalError):
    """Operation is undefined for its input (e.g. zero to a negative power)."""

    pass


class DecimalOverflowError(BigDecimalError, OverflowError):
    """Input or intermediate float is infinite."""

    pass


class NotANumberError(BigDecimalError, ValueError):
    """Input float or Decimal is NaN."""

    pass


class RangeError(BigDecimalError, ValueError):
    """Requested digit count is outside the supported bounds."""

    pass
