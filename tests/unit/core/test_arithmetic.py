"""Tests for exact BigDecimal arithmetic and operator coercion."""

import pytest

from bigdecimal import BigDecimal, DivisionByZeroError, DomainError
from tests.helpers import D, components


class TestAddSubtract:
    """Tests for addition and subtraction."""

    def test_add_aligns_exponents(self):
        """The result takes the smaller exponent."""
        assert components(D("1.5").add(D("2.25"))) == (375, -2)

    def test_no_binary_rounding(self):
        """0.1 + 0.2 is exactly 0.3."""
        assert D("0.1") + D("0.2") == D("0.3")

    def test_add_large_and_small(self):
        """Magnitudes far apart are added without loss."""
        result = D("1E30") + D("0.000001")
        assert str(result) == "1000000000000000000000000000000.000001"

    def test_subtract(self):
        """Subtraction is addition of the negation."""
        assert D("5.75").subtract(D("0.75")) == D("5")
        assert D("1") - D("2.5") == D("-1.5")

    def test_cancellation_to_zero(self):
        """Subtracting a value from itself yields zero."""
        result = D("123.456") - D("123.456")
        assert result.is_zero
        assert result.compare_to(0) == 0

    def test_int_operands(self):
        """ints are coerced on either side."""
        assert D("1.5") + 1 == D("2.5")
        assert 1 + D("1.5") == D("2.5")
        assert 3 - D("0.5") == D("2.5")
        assert D("0.5") - 3 == D("-2.5")

    def test_float_operand_rejected(self):
        """Floats must be converted explicitly."""
        with pytest.raises(TypeError):
            D("1.5") + 1.5
        with pytest.raises(TypeError, match="must be BigDecimal or int"):
            D("1.5").add(1.5)  # type: ignore[arg-type]


class TestMultiply:
    """Tests for multiplication."""

    def test_exponents_add(self):
        """Mantissas multiply and exponents add."""
        assert components(D("1.5").multiply(D("0.02"))) == (3, -2)

    def test_sign(self):
        """Signs multiply."""
        assert D("1.5") * D("-2") == D("-3")
        assert D("-1.5") * D("-2") == D("3")

    def test_int_operands(self):
        """ints are coerced on either side."""
        assert D("0.25") * 4 == D("1")
        assert 4 * D("0.25") == D("1")

    def test_large_exact(self):
        """Products keep every digit."""
        a = D("123456789012345678901234567890.123")
        mantissa = 123456789012345678901234567890123
        assert components(a * a) == (mantissa * mantissa, -6)


class TestUnary:
    """Tests for negation and absolute value."""

    def test_negate(self):
        """negate flips the mantissa sign."""
        assert components(-D("2.5")) == (-25, -1)
        assert D("2.5").negate().negate() == D("2.5")

    def test_abs(self):
        """abs drops a negative sign."""
        assert abs(D("-2.5")) == D("2.5")
        assert abs(D("2.5")) == D("2.5")

    def test_pos_is_identity(self):
        """Unary plus returns the value itself."""
        value = D("2.5")
        assert +value is value


class TestPower:
    """Tests for integer powers."""

    def test_positive_exponent(self):
        """Repeated multiplication is exact."""
        assert D("1.5") ** 2 == D("2.25")
        assert D("-2").power(3) == D("-8")

    def test_zero_exponent(self):
        """Anything to the zeroth power is one."""
        assert D("7.25") ** 0 == 1
        assert BigDecimal(0) ** 0 == 1

    def test_negative_exponent(self):
        """Negative exponents invert the base first."""
        assert D("2") ** -3 == D("0.125")

    def test_zero_to_negative_power(self):
        """Zero cannot be inverted."""
        with pytest.raises(DomainError, match="negative power"):
            BigDecimal(0).power(-1)

    def test_non_int_exponent(self):
        """Float exponents need pow_float."""
        with pytest.raises(TypeError):
            D("2") ** 0.5
        with pytest.raises(TypeError, match="must be int"):
            D("2").power(0.5)  # type: ignore[arg-type]


class TestMod:
    """Tests for the floored remainder."""

    def test_positive(self):
        """The remainder of a positive value."""
        assert D("7.5") % 2 == D("1.5")
        assert D("10") % D("3") == D("1")

    def test_negative_dividend(self):
        """The remainder follows the floor of the quotient."""
        assert D("-7.5") % 2 == D("0.5")

    def test_exact_multiple(self):
        """An exact multiple leaves zero."""
        assert (D("7.5") % D("2.5")).is_zero

    def test_rmod(self):
        """int % BigDecimal is supported."""
        assert 7 % D("2") == D("1")

    def test_by_zero(self):
        """A zero modulus raises."""
        with pytest.raises(DivisionByZeroError):
            D("7.5") % 0
