"""Decimal text parsing and rendering.

Rendering always produces fixed-point text (no exponent marker), so very large
exponents render as long digit strings. Parsing accepts an optional sign, an
optional separator and an optional trailing ``E<integer>`` marker.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache

from bigdecimal.digits import int_to_text, text_to_int
from bigdecimal.errors import FormatError

__all__ = [
    "NumberFormat",
    "INVARIANT",
    "render",
    "parse_components",
]

ASCII_DIGITS = tuple("0123456789")

# Optional surrounding whitespace and a single leading sign, ASCII digits only
_INTEGER_RE = re.compile(r"\s*[+-]?[0-9]+\s*")


@dataclass(frozen=True)
class NumberFormat:
    """Glyphs used when rendering and parsing decimal text.

    Attributes:
        negative_sign: Prefix marking a negative value
        decimal_separator: Separator between whole and fractional digits
        digits: The ten digit glyphs, zero first
    """

    negative_sign: str = "-"
    decimal_separator: str = "."
    digits: tuple[str, ...] = ASCII_DIGITS

    def __post_init__(self) -> None:
        if len(self.digits) != 10 or any(len(d) != 1 for d in self.digits):
            raise ValueError(f"digits must be ten single characters, got {self.digits!r}")
        if not self.negative_sign or not self.decimal_separator:
            raise ValueError("negative_sign and decimal_separator must be non-empty")
        if self.negative_sign == self.decimal_separator:
            raise ValueError("negative_sign and decimal_separator must differ")


INVARIANT = NumberFormat()


@lru_cache(maxsize=16)
def _to_native(digits: tuple[str, ...]) -> dict[int, str]:
    return str.maketrans(dict(zip(ASCII_DIGITS, digits)))


@lru_cache(maxsize=16)
def _to_ascii(digits: tuple[str, ...]) -> dict[int, str]:
    return str.maketrans(dict(zip(digits, ASCII_DIGITS)))


def render(mantissa: int, exponent: int, fmt: NumberFormat = INVARIANT) -> str:
    """Render mantissa × 10^exponent as fixed-point text.

    Negative exponents place the separator |exponent| digits from the right,
    zero-padding on the left when the mantissa is too short, then trim
    trailing fractional zeros (and a bare trailing separator). Nonnegative
    exponents append that many zeros.

    Args:
        mantissa: Signed integer coefficient
        exponent: Power-of-ten scale
        fmt: Glyph provider (default: INVARIANT)

    Returns:
        The rendered text, e.g. render(123456, -3) == "123.456"
    """
    sep = fmt.decimal_separator
    result = int_to_text(abs(mantissa))

    if exponent < 0:
        abs_exp = -exponent
        if abs_exp > len(result):
            result = "0" + sep + "0" * (abs_exp - len(result)) + result
        else:
            index = len(result) - abs_exp
            result = result[:index] + sep + result[index:]
            if index == 0:
                result = "0" + result

        result = result.rstrip("0")
        if result.endswith(sep):
            result = result[: -len(sep)]
    else:
        result += "0" * exponent

    if fmt.digits != ASCII_DIGITS:
        result = result.translate(_to_native(fmt.digits))

    if mantissa < 0:
        return fmt.negative_sign + result
    return result


def parse_components(text: str, fmt: NumberFormat = INVARIANT) -> tuple[int, int]:
    """Parse decimal text into a (mantissa, exponent) pair.

    Whitespace is trimmed only when the text does not already start and end
    with a digit. Every occurrence of a leading negative sign is removed. A
    trailing exponent marker (``E`` or ``e``) is consumed only when the text
    after it is an integer; otherwise it stays and fails mantissa parsing.

    Args:
        text: Decimal text such as "-12.5", "1.5E3" or "4e-07"
        fmt: Glyph provider (default: INVARIANT)

    Returns:
        (mantissa, exponent); empty text parses to (0, 0)

    Raises:
        FormatError: If the mantissa text is not a valid integer
    """
    if fmt.digits != ASCII_DIGITS:
        text = text.translate(_to_ascii(fmt.digits))

    if not text or not text[0].isdigit() or not text[-1].isdigit():
        text = text.strip()

    if not text:
        return 0, 0

    exponent = 0
    is_negative = False

    if text.startswith(fmt.negative_sign):
        is_negative = True
        text = text.replace(fmt.negative_sign, "")

    pos_e = max(text.rfind("E"), text.rfind("e")) + 1
    if pos_e > 0:
        suffix = text[pos_e:]
        if _INTEGER_RE.fullmatch(suffix):
            exponent = int(suffix)
            text = text[: pos_e - 1]

    sep = fmt.decimal_separator
    if sep in text:
        decimal_place = text.index(sep)
        exponent += decimal_place + len(sep) - len(text)
        text = text.replace(sep, "")

    if not _INTEGER_RE.fullmatch(text):
        raise FormatError(f"Invalid decimal text: {text!r}")

    mantissa = text_to_int(text)
    if is_negative:
        mantissa = -mantissa
    return mantissa, exponent
