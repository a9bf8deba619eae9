"""Arbitrary-precision decimal number.

A BigDecimal is an integer mantissa scaled by a power of ten:

    value = mantissa × 10^exponent

Addition, subtraction and multiplication are exact. Division is the only
inexact operation: it stops once the quotient reaches the configured
precision in significant digits.

Equality is structural. Two values denoting the same number but stored with
different exponents, e.g. (10, -1) and (1, 0), are NOT equal unless both are
normalized. Ordering (<, <=, >, >=) and compare_to() are numeric.

Usage:
    from bigdecimal import BigDecimal

    price = BigDecimal.parse("123.456")
    total = price * 3 + BigDecimal.parse("0.544")   # exact
    share = total / 7                                # capped at precision
    print(share.round())
"""

from __future__ import annotations

import math
from decimal import Decimal, localcontext

import structlog

from bigdecimal.config import DecimalConfig, get_config
from bigdecimal.digits import (
    align,
    decimal_index,
    div_trunc,
    int_to_text,
    normalize_components,
    number_of_digits,
    sign_of,
    significant_digits,
    text_to_int,
    truncate_components,
)
from bigdecimal.errors import (
    DecimalOverflowError,
    DivisionByZeroError,
    DomainError,
    NotANumberError,
)
from bigdecimal.formatting import INVARIANT, NumberFormat, parse_components, render
from bigdecimal.rounding import MidpointRounding

__all__ = ["BigDecimal"]

logger = structlog.get_logger()


class BigDecimal:
    """Immutable arbitrary-precision decimal.

    New values pass through the construction policy of the active
    DecimalConfig: truncated to `precision` significant digits when
    always_truncate is set, otherwise normalized when always_normalize is set.

    Operators accept BigDecimal and int operands. Floats and decimal.Decimal
    must be converted explicitly with from_float() / from_fixed() / parse().

    Attributes:
        mantissa: Signed integer coefficient (read-only)
        exponent: Power-of-ten scale (read-only)
    """

    __slots__ = ("_mantissa", "_exponent")
    _mantissa: int
    _exponent: int

    def __init__(
        self,
        mantissa: int = 0,
        exponent: int = 0,
        *,
        config: DecimalConfig | None = None,
    ) -> None:
        """Create a BigDecimal from a mantissa and exponent.

        Args:
            mantissa: Signed integer coefficient
            exponent: Power-of-ten scale
            config: Configuration to apply instead of the active one

        Raises:
            TypeError: If mantissa or exponent is not an int
        """
        if not isinstance(mantissa, int):
            raise TypeError(f"BigDecimal mantissa must be int, got {type(mantissa).__name__}")
        if not isinstance(exponent, int):
            raise TypeError(f"BigDecimal exponent must be int, got {type(exponent).__name__}")

        cfg = config or get_config()
        if cfg.always_truncate:
            mantissa, exponent = _truncate_until_stable(mantissa, exponent, cfg.precision)
        elif cfg.always_normalize:
            mantissa, exponent = normalize_components(mantissa, exponent)

        self._mantissa = int(mantissa)
        self._exponent = int(exponent)

    @classmethod
    def _from_components(cls, mantissa: int, exponent: int) -> BigDecimal:
        """Build a value without applying the construction policy."""
        value = object.__new__(cls)
        value._mantissa = mantissa
        value._exponent = exponent
        return value

    # --- Constructors ---

    @classmethod
    def from_integer(cls, value: int) -> BigDecimal:
        """Create from an integer (exponent 0 before the policy applies)."""
        return cls(value, 0)

    @classmethod
    def from_float(cls, value: float) -> BigDecimal:
        """Create from a float by scaling until the value is integral.

        Starting from the truncated integer, the float is multiplied by
        growing powers of ten until the scaled float equals the integer
        mantissa exactly. When the scale factor leaves the float range the
        shortest repr of the float is parsed instead.

        Raises:
            DecimalOverflowError: If value is infinite
            NotANumberError: If value is NaN
        """
        _check_finite_float(value)

        mantissa = int(value)
        exponent = 0
        scale = 1.0
        while abs(value * scale - float(mantissa)) > 0:
            exponent -= 1
            scale *= 10
            scaled = value * scale
            if math.isinf(scaled):
                return cls.parse(repr(value))
            mantissa = int(scaled)

        return cls(mantissa, exponent)

    @classmethod
    def from_fixed(cls, value: Decimal) -> BigDecimal:
        """Create from a decimal.Decimal by scaling until the value is integral.

        The scaling runs in a local context wide enough to keep every
        intermediate product exact.

        Raises:
            DecimalOverflowError: If value is infinite
            NotANumberError: If value is NaN
        """
        _check_finite_decimal(value)

        _, digits, exp = value.as_tuple()
        with localcontext() as ctx:
            ctx.prec = len(digits) + max(0, -int(exp)) + 2
            mantissa = int(value)
            exponent = 0
            scale = Decimal(1)
            while Decimal(mantissa) != value * scale:
                exponent -= 1
                scale *= 10
                mantissa = int(value * scale)

        return cls(mantissa, exponent)

    @classmethod
    def parse(
        cls,
        value: str | float | Decimal,
        fmt: NumberFormat = INVARIANT,
        *,
        config: DecimalConfig | None = None,
    ) -> BigDecimal:
        """Parse decimal text (or a float / Decimal via its string form).

        Args:
            value: Text such as "-12.5" or "1.5E3"; floats and Decimals are
                rendered with Python's own formatting first
            fmt: Glyph provider for text input (default: INVARIANT)
            config: Configuration to apply instead of the active one

        Raises:
            FormatError: If the text is not a valid decimal
            DecimalOverflowError: If a float/Decimal input is infinite
            NotANumberError: If a float/Decimal input is NaN
        """
        if isinstance(value, float):
            _check_finite_float(value)
            text, fmt = repr(value), INVARIANT
        elif isinstance(value, Decimal):
            _check_finite_decimal(value)
            text, fmt = str(value), INVARIANT
        elif isinstance(value, str):
            text = value
        else:
            raise TypeError(f"Cannot parse {type(value).__name__} as BigDecimal")

        mantissa, exponent = parse_components(text, fmt)
        return cls(mantissa, exponent, config=config)

    # --- Representation ---

    @property
    def mantissa(self) -> int:
        """The signed integer coefficient."""
        return self._mantissa

    @property
    def exponent(self) -> int:
        """The power-of-ten scale."""
        return self._exponent

    @property
    def sign(self) -> int:
        """Sign of the value: -1, 0 or 1.

        A positive value in [0.1, 1) reports 1 only when its leading digit is
        5 or more, 0 otherwise.
        """
        return sign_of(self._mantissa, self._exponent)

    @property
    def significant_digits(self) -> int:
        """Digits of the mantissa excluding sign and trailing zeros."""
        return significant_digits(self._mantissa)

    @property
    def decimal_places(self) -> int:
        """Significant digits plus exponent."""
        return self.significant_digits + self._exponent

    @property
    def length(self) -> int:
        """Same as decimal_places."""
        return self.decimal_places

    @property
    def decimal_index(self) -> int:
        """Zero-based index of the separator if the mantissa were rendered."""
        return decimal_index(self._mantissa, self._exponent)

    @property
    def is_zero(self) -> bool:
        return self._mantissa == 0

    @property
    def is_positive(self) -> bool:
        return self._mantissa > 0

    @property
    def is_negative(self) -> bool:
        return self._mantissa < 0

    @property
    def whole_value(self) -> int:
        """The whole part as an int (see whole_part)."""
        return self.whole_part()

    def normalize(self) -> BigDecimal:
        """Fold trailing zeros of the mantissa into the exponent.

        Idempotent and value-preserving; zero is returned unchanged. The
        construction policy is not re-applied.
        """
        mantissa, exponent = normalize_components(self._mantissa, self._exponent)
        if mantissa == self._mantissa and exponent == self._exponent:
            return self
        return BigDecimal._from_components(mantissa, exponent)

    def truncate(self, precision: int) -> BigDecimal:
        """Drop least-significant digits beyond `precision` significant digits.

        One truncation pass (see digits.truncate_components): the exponent
        only moves when it was nonzero, so values with exponent 0 lose
        magnitude. Use truncate_to_precision() for plain significant-digit
        truncation. The result goes through the construction policy.
        """
        mantissa, exponent = truncate_components(self._mantissa, self._exponent, precision)
        return BigDecimal(mantissa, exponent)

    def truncate_to_precision(self, precision: int | None = None) -> BigDecimal:
        """Keep at most `precision` digits, dividing by ten per dropped digit.

        The value is normalized first. Each dropped digit raises the exponent
        by one, so the magnitude is preserved.

        Args:
            precision: Digit count to keep (default: the configured precision)

        Raises:
            ValueError: If precision is less than 1
        """
        if precision is None:
            precision = get_config().precision
        if precision < 1:
            raise ValueError(f"precision must be positive, got {precision}")

        mantissa, exponent = _truncate_digits(self._mantissa, self._exponent, precision)
        return BigDecimal(mantissa, exponent)

    # --- Arithmetic ---

    def negate(self) -> BigDecimal:
        """Return the value multiplied by -1 (policy not re-applied)."""
        return BigDecimal._from_components(-self._mantissa, self._exponent)

    def add(self, other: BigDecimal | int) -> BigDecimal:
        """Add exactly. The result takes the smaller exponent."""
        other = _require(other)
        if self._exponent > other._exponent:
            return BigDecimal(
                align(self._mantissa, self._exponent, other._exponent) + other._mantissa,
                other._exponent,
            )
        return BigDecimal(
            align(other._mantissa, other._exponent, self._exponent) + self._mantissa,
            self._exponent,
        )

    def subtract(self, other: BigDecimal | int) -> BigDecimal:
        """Subtract exactly (addition of the negation)."""
        return self.add(_require(other).negate())

    def multiply(self, other: BigDecimal | int) -> BigDecimal:
        """Multiply exactly: mantissas multiply, exponents add."""
        other = _require(other)
        return BigDecimal(self._mantissa * other._mantissa, self._exponent + other._exponent)

    def divide(self, divisor: BigDecimal | int, *, config: DecimalConfig | None = None) -> BigDecimal:
        """Divide, producing at most `precision` significant digits.

        When the dividend is exactly ±1 the reciprocal is taken in float
        arithmetic and parsed back, so that path carries float precision
        (about 17 significant digits), capped by the configured precision.
        Otherwise long division runs digit by digit until the remainder is
        zero or the quotient holds `precision` significant digits.

        Args:
            divisor: Value to divide by
            config: Configuration to apply instead of the active one

        Raises:
            DivisionByZeroError: If divisor is zero
        """
        divisor = _require(divisor)
        cfg = config or get_config()

        if divisor._mantissa == 0:
            raise DivisionByZeroError(f"Division by zero: {self} / {divisor}")

        if self._exponent == 0 and abs(self._mantissa) == 1:
            reciprocal = self._divide_reciprocal(divisor, cfg)
            if reciprocal is not None:
                return reciprocal

        return self._divide_long(divisor, cfg)

    def _divide_reciprocal(self, divisor: BigDecimal, cfg: DecimalConfig) -> BigDecimal | None:
        """Float reciprocal of divisor, signed like self. None if out of float range."""
        approx = float(divisor)
        if approx == 0.0 or math.isinf(approx):
            logger.debug(
                "division_reciprocal_out_of_range",
                divisor_digits=number_of_digits(divisor._mantissa),
                divisor_exponent=divisor._exponent,
            )
            return None

        reciprocal = 1.0 / approx
        if reciprocal == 0.0 or math.isinf(reciprocal):
            return None

        mantissa, exponent = parse_components(repr(reciprocal))
        if self._mantissa < 0:
            mantissa = -mantissa
        mantissa, exponent = _truncate_digits(mantissa, exponent, cfg.precision)
        return BigDecimal(mantissa, exponent, config=cfg)

    def _divide_long(self, divisor: BigDecimal, cfg: DecimalConfig) -> BigDecimal:
        """Long division of the mantissas, one decimal digit per step."""
        negative = (self._mantissa < 0) != (divisor._mantissa < 0)
        denominator = abs(divisor._mantissa)
        quotient, remainder = divmod(abs(self._mantissa), denominator)

        # Significant digits of the quotient, tracked incrementally: trailing
        # zeros only count once a nonzero digit follows them
        sig = significant_digits(quotient)
        trailing = number_of_digits(quotient) - sig if quotient else 0

        counter = 0
        max_steps = _division_step_limit(cfg.precision, number_of_digits(denominator))
        while remainder != 0 and sig < cfg.precision:
            if counter >= max_steps:
                logger.warning(
                    "division_iteration_cap_reached",
                    steps=counter,
                    precision=cfg.precision,
                )
                break

            digit, remainder = divmod(remainder * 10, denominator)
            quotient = quotient * 10 + digit
            counter += 1

            if digit == 0:
                if quotient:
                    trailing += 1
            else:
                sig += trailing + 1
                trailing = 0

        if negative:
            quotient = -quotient
        return BigDecimal(quotient, self._exponent - divisor._exponent - counter, config=cfg)

    def mod(self, modulus: BigDecimal | int) -> BigDecimal:
        """Remainder: value - floor(value / modulus) × modulus.

        Inherits the precision limits of division.

        Raises:
            DivisionByZeroError: If modulus is zero
        """
        modulus = _require(modulus)
        quotient = self.divide(modulus)
        return self.subtract(quotient.floor().multiply(modulus))

    def power(self, exponent: int) -> BigDecimal:
        """Raise to an integer power by repeated multiplication.

        Negative exponents invert the base first (ONE / base), so they carry
        division's precision limits.

        Raises:
            DomainError: If the base is zero and exponent is negative
            TypeError: If exponent is not an int
        """
        if not isinstance(exponent, int):
            raise TypeError(f"power exponent must be int, got {type(exponent).__name__}")
        if exponent == 0:
            return BigDecimal(1)

        base = self
        if exponent < 0:
            if base._mantissa == 0:
                raise DomainError("Cannot raise zero to a negative power")
            base = BigDecimal(1).divide(base)
            exponent = -exponent

        result = base
        for _ in range(exponent - 1):
            result = result.multiply(base)
        return result

    def __add__(self, other: object) -> BigDecimal:
        other_val = _coerce(other)
        if other_val is None:
            return NotImplemented
        return self.add(other_val)

    def __radd__(self, other: object) -> BigDecimal:
        other_val = _coerce(other)
        if other_val is None:
            return NotImplemented
        return other_val.add(self)

    def __sub__(self, other: object) -> BigDecimal:
        other_val = _coerce(other)
        if other_val is None:
            return NotImplemented
        return self.subtract(other_val)

    def __rsub__(self, other: object) -> BigDecimal:
        other_val = _coerce(other)
        if other_val is None:
            return NotImplemented
        return other_val.subtract(self)

    def __mul__(self, other: object) -> BigDecimal:
        other_val = _coerce(other)
        if other_val is None:
            return NotImplemented
        return self.multiply(other_val)

    def __rmul__(self, other: object) -> BigDecimal:
        other_val = _coerce(other)
        if other_val is None:
            return NotImplemented
        return other_val.multiply(self)

    def __truediv__(self, other: object) -> BigDecimal:
        other_val = _coerce(other)
        if other_val is None:
            return NotImplemented
        return self.divide(other_val)

    def __rtruediv__(self, other: object) -> BigDecimal:
        other_val = _coerce(other)
        if other_val is None:
            return NotImplemented
        return other_val.divide(self)

    def __mod__(self, other: object) -> BigDecimal:
        other_val = _coerce(other)
        if other_val is None:
            return NotImplemented
        return self.mod(other_val)

    def __rmod__(self, other: object) -> BigDecimal:
        other_val = _coerce(other)
        if other_val is None:
            return NotImplemented
        return other_val.mod(self)

    def __pow__(self, exponent: object, modulo: object = None) -> BigDecimal:
        if modulo is not None or not isinstance(exponent, int):
            return NotImplemented
        return self.power(exponent)

    def __neg__(self) -> BigDecimal:
        return self.negate()

    def __pos__(self) -> BigDecimal:
        return self

    def __abs__(self) -> BigDecimal:
        if self._mantissa < 0:
            return self.negate()
        return self

    # --- Comparison ---

    def _aligned(self, other: BigDecimal) -> tuple[int, int]:
        """Both mantissas rescaled to the smaller of the two exponents."""
        if self._exponent > other._exponent:
            return align(self._mantissa, self._exponent, other._exponent), other._mantissa
        return self._mantissa, align(other._mantissa, other._exponent, self._exponent)

    def compare_to(self, other: BigDecimal | int) -> int:
        """Numeric ordering: -1 if self < other, 1 if self > other, else 0.

        Unlike ==, returns 0 for equal numbers stored with different exponents.

        Raises:
            TypeError: If other is not a BigDecimal or int
        """
        left, right = self._aligned(_require(other))
        if left > right:
            return 1
        if left < right:
            return -1
        return 0

    def __eq__(self, other: object) -> bool:
        other_val = _coerce(other)
        if other_val is None:
            return NotImplemented
        return (
            self._mantissa == other_val._mantissa
            and self._exponent == other_val._exponent
            and self.sign == other_val.sign
        )

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return NotImplemented
        return not result

    def __lt__(self, other: object) -> bool:
        other_val = _coerce(other)
        if other_val is None:
            return NotImplemented
        left, right = self._aligned(other_val)
        return left < right

    def __le__(self, other: object) -> bool:
        other_val = _coerce(other)
        if other_val is None:
            return NotImplemented
        left, right = self._aligned(other_val)
        return left <= right

    def __gt__(self, other: object) -> bool:
        other_val = _coerce(other)
        if other_val is None:
            return NotImplemented
        left, right = self._aligned(other_val)
        return left > right

    def __ge__(self, other: object) -> bool:
        other_val = _coerce(other)
        if other_val is None:
            return NotImplemented
        left, right = self._aligned(other_val)
        return left >= right

    def __hash__(self) -> int:
        # Numeric hash: structurally equal values are numerically equal, and
        # integral values hash like the matching int
        return hash(self.to_decimal())

    def __bool__(self) -> bool:
        """True if non-zero."""
        return self._mantissa != 0

    # --- Rounding & decomposition ---

    def _split(self) -> tuple[int, str]:
        """Whole part and fractional digit string of the rendered value."""
        whole, _, fraction = render(self._mantissa, self._exponent).partition(".")
        return text_to_int(whole), fraction

    def whole_part(self) -> int:
        """Digits left of the separator, i.e. truncation toward zero.

        Example: BigDecimal.parse("-3.7").whole_part() == -3
        """
        return self._split()[0]

    def fractional_part(self) -> BigDecimal:
        """Digits right of the separator as a nonnegative value.

        Returns ZERO when the value has no fractional digits; an integral
        value and a zero fraction are indistinguishable here.

        Example: BigDecimal.parse("-3.75").fractional_part() == parse("0.75")
        """
        _, fraction = self._split()
        if not fraction:
            return BigDecimal(0)
        return BigDecimal(text_to_int(fraction), -len(fraction))

    def round(self, mode: MidpointRounding = MidpointRounding.AWAY_FROM_ZERO) -> int:
        """Round to the nearest integer.

        Fractions above one half round away from zero. Exactly one half
        rounds away with AWAY_FROM_ZERO, and with TO_EVEN only when the whole
        part is odd.
        """
        whole = self.whole_part()
        fraction = self.fractional_part()
        step = -1 if self.is_negative else 1

        if fraction > _ONE_HALF:
            whole += step
        elif fraction == _ONE_HALF:
            if mode == MidpointRounding.AWAY_FROM_ZERO or whole % 2 != 0:
                whole += step
        return whole

    def floor(self) -> BigDecimal:
        """Largest integral value not greater than self."""
        whole, fraction = self._split()
        if fraction and self.is_negative:
            whole -= 1
        return BigDecimal(whole)

    def ceiling(self) -> BigDecimal:
        """Smallest integral value not less than self."""
        whole, fraction = self._split()
        if fraction and self.is_positive:
            whole += 1
        return BigDecimal(whole)

    # --- Conversion ---

    def to_integer(self) -> int:
        """Floor of the value as an int (exact for integral values)."""
        # floor() is built from an int, so its exponent is never negative
        floored = self.floor()
        return floored._mantissa * 10**floored._exponent

    def to_decimal(self) -> Decimal:
        """Convert to an exact decimal.Decimal."""
        return Decimal(f"{int_to_text(self._mantissa)}E{self._exponent}")

    def to_string(self, fmt: NumberFormat = INVARIANT) -> str:
        """Render as fixed-point text with the given glyph provider."""
        return render(self._mantissa, self._exponent, fmt)

    def __int__(self) -> int:
        """Truncate toward zero, like int() on a float."""
        return self.whole_part()

    def __trunc__(self) -> int:
        return self.whole_part()

    def __floor__(self) -> int:
        return self.to_integer()

    def __ceil__(self) -> int:
        return self.ceiling().to_integer()

    def __round__(self, ndigits: int | None = None) -> int:
        """Builtin round(): half-to-even, matching Python's convention."""
        if ndigits is not None:
            raise TypeError("BigDecimal.__round__ does not support ndigits")
        return self.round(MidpointRounding.TO_EVEN)

    def __float__(self) -> float:
        return float(self.to_decimal())

    def __repr__(self) -> str:
        return f"BigDecimal({int_to_text(self._mantissa)}, {self._exponent})"

    def __str__(self) -> str:
        return render(self._mantissa, self._exponent)


def _division_step_limit(precision: int, divisor_digits: int) -> int:
    """Upper bound on long-division steps.

    A run of zero quotient digits is always shorter than the divisor, so the
    significant-digit guard ends the loop within precision + divisor_digits
    steps. The limit sits above that and only fires if the guard is broken.
    """
    return precision + 2 * divisor_digits


def _truncate_until_stable(mantissa: int, exponent: int, precision: int) -> tuple[int, int]:
    """Repeat single truncation passes until the pair stops changing."""
    while True:
        truncated = truncate_components(mantissa, exponent, precision)
        if truncated == (mantissa, exponent):
            return mantissa, exponent
        mantissa, exponent = truncated


def _truncate_digits(mantissa: int, exponent: int, precision: int) -> tuple[int, int]:
    """Normalize, then keep at most `precision` digits, raising the exponent."""
    mantissa, exponent = normalize_components(mantissa, exponent)
    excess = number_of_digits(mantissa) - precision
    if excess > 0:
        mantissa = div_trunc(mantissa, 10**excess)
        exponent += excess
    return mantissa, exponent


def _check_finite_float(value: float) -> None:
    if math.isinf(value):
        raise DecimalOverflowError("BigDecimal cannot represent infinity")
    if math.isnan(value):
        raise NotANumberError("value is not a number (NaN)")


def _check_finite_decimal(value: Decimal) -> None:
    if value.is_infinite():
        raise DecimalOverflowError("BigDecimal cannot represent infinity")
    if value.is_nan():
        raise NotANumberError("value is not a number (NaN)")


def _coerce(x: object) -> BigDecimal | None:
    """Operand as BigDecimal, or None if the type is not supported."""
    if isinstance(x, BigDecimal):
        return x
    if isinstance(x, int):
        return BigDecimal.from_integer(x)
    return None


def _require(x: object) -> BigDecimal:
    """Operand as BigDecimal, raising TypeError if the type is not supported."""
    value = _coerce(x)
    if value is None:
        raise TypeError(f"BigDecimal operand must be BigDecimal or int, got {type(x).__name__}")
    return value


_ONE_HALF = BigDecimal._from_components(5, -1)
