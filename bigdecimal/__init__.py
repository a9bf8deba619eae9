"""Arbitrary-precision decimal arithmetic.

All operations are exact except division, which never produces more
significant digits than the configured precision.
"""

from bigdecimal.config import (
    DEFAULT_DECIMAL_CONFIG,
    DecimalConfig,
    config_override,
    get_config,
    set_config,
)
from bigdecimal.constants import (
    E,
    MINUS_ONE,
    ONE,
    ONE_HALF,
    PI,
    TEN,
    ZERO,
    get_pi_digits,
)
from bigdecimal.core import BigDecimal
from bigdecimal.errors import (
    BigDecimalError,
    DecimalOverflowError,
    DivisionByZeroError,
    DomainError,
    FormatError,
    NotANumberError,
    RangeError,
)
from bigdecimal.exponential import exp, pow_float
from bigdecimal.formatting import INVARIANT, NumberFormat
from bigdecimal.rounding import MidpointRounding

__version__ = "0.1.0"
__all__ = [
    # Classes
    "BigDecimal",
    "MidpointRounding",
    "NumberFormat",
    "INVARIANT",
    # Configuration
    "DecimalConfig",
    "DEFAULT_DECIMAL_CONFIG",
    "get_config",
    "set_config",
    "config_override",
    # Errors
    "BigDecimalError",
    "FormatError",
    "DivisionByZeroError",
    "DomainError",
    "DecimalOverflowError",
    "NotANumberError",
    "RangeError",
    # Functions
    "exp",
    "pow_float",
    "get_pi_digits",
    # Constants
    "ZERO",
    "ONE",
    "TEN",
    "MINUS_ONE",
    "ONE_HALF",
    "E",
    "PI",
    "__version__",
]
