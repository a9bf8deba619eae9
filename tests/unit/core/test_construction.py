"""Tests for building BigDecimal values and inspecting their representation."""

from decimal import Decimal

import pytest

from bigdecimal import (
    BigDecimal,
    DecimalConfig,
    DecimalOverflowError,
    FormatError,
    NotANumberError,
)
from tests.helpers import D, components


class TestConstructionPolicy:
    """Tests for the policy applied to every new value."""

    def test_normalizes_by_default(self):
        """Trailing zeros are folded into the exponent."""
        assert components(BigDecimal(1500)) == (15, 2)
        assert components(BigDecimal(1500, -2)) == (15, 0)

    def test_zero_keeps_exponent(self):
        """Normalizing zero leaves it untouched."""
        assert components(BigDecimal(0, -4)) == (0, -4)

    def test_raw_values_kept_verbatim(self, raw_values):
        """With both flags off the pair is stored as given."""
        assert components(BigDecimal(1500, -2)) == (1500, -2)

    def test_truncation_takes_priority(self, truncating_10):
        """Truncation replaces normalization when enabled."""
        value = BigDecimal(12345678901234, -4)
        assert components(value) == (1234567890, 0)

    def test_truncation_keeps_zero_exponent(self, truncating_10):
        """Integer-scaled values drop digits without moving the exponent."""
        value = BigDecimal(12345678901234)
        assert components(value) == (1234567890, 0)

    def test_truncation_repeats_until_stable(self, truncating_10):
        """Trailing zeros left by one pass are cut by the next."""
        value = BigDecimal(123456789012300000, -5)
        assert components(value) == (1234567890, 3)
        assert value.significant_digits <= 10

    def test_explicit_config(self):
        """A config argument overrides the active one."""
        raw = DecimalConfig(always_normalize=False)
        assert components(BigDecimal(1500, config=raw)) == (1500, 0)

    def test_rejects_non_int_components(self):
        """Mantissa and exponent must be ints."""
        with pytest.raises(TypeError, match="mantissa must be int"):
            BigDecimal(1.5)  # type: ignore[arg-type]
        with pytest.raises(TypeError, match="exponent must be int"):
            BigDecimal(1, "2")  # type: ignore[arg-type]


class TestFromFloat:
    """Tests for exact float conversion."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (0.5, (5, -1)),
            (2.5, (25, -1)),
            (-1.25, (-125, -2)),
            (0.125, (125, -3)),
            (100.0, (1, 2)),
            (0.0, (0, 0)),
        ],
    )
    def test_exact_binary_fractions(self, value, expected):
        """Values exactly representable in binary convert digit for digit."""
        assert components(BigDecimal.from_float(value)) == expected

    def test_tiny_value_falls_back_to_repr(self):
        """Subnormal floats go through their shortest repr."""
        assert components(BigDecimal.from_float(1e-320)) == (1, -320)

    def test_infinity_raises(self):
        """Infinite floats cannot be represented."""
        with pytest.raises(DecimalOverflowError):
            BigDecimal.from_float(float("inf"))
        with pytest.raises(OverflowError):
            BigDecimal.from_float(float("-inf"))

    def test_nan_raises(self):
        """NaN is rejected."""
        with pytest.raises(NotANumberError, match="NaN"):
            BigDecimal.from_float(float("nan"))


class TestFromFixed:
    """Tests for decimal.Decimal conversion."""

    def test_fraction(self):
        """Fractional Decimals keep every digit."""
        assert components(BigDecimal.from_fixed(Decimal("123.456"))) == (123456, -3)
        assert components(BigDecimal.from_fixed(Decimal("-0.05"))) == (-5, -2)

    def test_exponent_notation(self):
        """Positive-exponent Decimals are integral."""
        assert components(BigDecimal.from_fixed(Decimal("1.5E+3"))) == (15, 2)

    def test_many_digits(self):
        """Conversion is exact beyond the default Decimal context precision."""
        text = "1234567890123456789012345678901234567890.0987654321"
        assert BigDecimal.from_fixed(Decimal(text)) == D(text)

    def test_special_values_raise(self):
        """Infinity and NaN are rejected."""
        with pytest.raises(DecimalOverflowError):
            BigDecimal.from_fixed(Decimal("Infinity"))
        with pytest.raises(NotANumberError):
            BigDecimal.from_fixed(Decimal("NaN"))


class TestParse:
    """Tests for parsing text, floats and Decimals."""

    def test_text(self):
        """Decimal text parses and normalizes."""
        assert components(D("123.456")) == (123456, -3)
        assert components(D("1.5E3")) == (15, 2)
        assert components(D("-12.50")) == (-125, -1)

    def test_float_uses_repr(self):
        """Floats parse through their shortest repr, not their binary value."""
        assert components(BigDecimal.parse(0.1)) == (1, -1)
        assert components(BigDecimal.parse(1e-7)) == (1, -7)

    def test_decimal(self):
        """Decimals parse through their string form."""
        assert components(BigDecimal.parse(Decimal("1.50"))) == (15, -1)

    def test_invalid_text(self):
        """Garbage text raises FormatError."""
        with pytest.raises(FormatError):
            D("12,5")

    def test_nan_float(self):
        """NaN floats are rejected before parsing."""
        with pytest.raises(NotANumberError):
            BigDecimal.parse(float("nan"))

    def test_unsupported_type(self):
        """Only str, float and Decimal are accepted."""
        with pytest.raises(TypeError, match="Cannot parse"):
            BigDecimal.parse(123)  # type: ignore[arg-type]


class TestRepresentation:
    """Tests for derived properties."""

    def test_digit_counts(self):
        """Significant digits, decimal places and separator index."""
        value = D("123.456")
        assert value.significant_digits == 6
        assert value.decimal_places == 3
        assert value.length == 3
        assert value.decimal_index == 3

    def test_negative_index_counts_sign(self):
        """The separator index includes the sign character."""
        assert D("-123.456").decimal_index == 4

    def test_predicates(self):
        """Zero, positive and negative flags follow the mantissa."""
        assert BigDecimal(0).is_zero
        assert D("0.001").is_positive
        assert D("-0.001").is_negative
        assert not D("-0.001").is_positive

    def test_sign(self):
        """Sign follows the mantissa, with the sub-unit leading-digit rule."""
        assert D("-0.7").sign == -1
        assert D("0").sign == 0
        assert D("12").sign == 1
        assert D("0.3").sign == 0
        assert D("0.7").sign == 1
        assert D("0.07").sign == 1

    def test_whole_value(self):
        """whole_value includes appended zeros."""
        assert D("1.5E3").whole_value == 1500

    def test_repr_and_str(self):
        """repr shows the pair, str the fixed-point text."""
        value = D("-12.5")
        assert repr(value) == "BigDecimal(-125, -1)"
        assert str(value) == "-12.5"


class TestNormalizeAndTruncate:
    """Tests for explicit normalization and truncation."""

    def test_normalize(self, raw_values):
        """normalize folds zeros without re-applying the policy."""
        value = BigDecimal(1500, -1).normalize()
        assert components(value) == (15, 1)
        assert value.normalize() is value

    def test_truncate(self):
        """truncate drops trailing significant digits."""
        assert str(D("3.14159").truncate(3)) == "3.14"

    def test_truncate_zero_precision_is_noop(self):
        """Non-positive precision leaves the value alone."""
        value = D("3.14159")
        assert value.truncate(0) == value

    def test_truncate_to_precision_preserves_magnitude(self):
        """Dropped digits always raise the exponent."""
        value = BigDecimal(123456).truncate_to_precision(3)
        assert components(value) == (123, 3)

    def test_truncate_to_precision_uses_config(self, precision_10):
        """The configured precision is the default."""
        value = D("1.23456789012345").truncate_to_precision()
        assert str(value) == "1.23456789"

    def test_truncate_to_precision_rejects_zero(self):
        """Precision below one is an error."""
        with pytest.raises(ValueError, match="precision must be positive"):
            D("1.5").truncate_to_precision(0)
