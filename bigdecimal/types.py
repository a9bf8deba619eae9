"""Pydantic field types for BigDecimal values.

DecimalText accepts decimal text, ints or BigDecimal instances and
serializes back to fixed-point text, so models round-trip through JSON
without going through float.

    class Invoice(BaseModel):
        total: DecimalText
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import Field, GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

from bigdecimal.core import BigDecimal
from bigdecimal.errors import FormatError

__all__ = ["DecimalText", "validate_decimal"]


def validate_decimal(value: Any) -> BigDecimal:
    """Validate that a value is a BigDecimal, int or decimal text.

    Args:
        value: Value to validate

    Returns:
        The parsed BigDecimal

    Raises:
        ValueError: If value has the wrong type or is not valid decimal text
    """
    if isinstance(value, BigDecimal):
        return value

    # bool is an int subclass but never a meaningful decimal
    if isinstance(value, bool):
        raise ValueError("Decimal must be string or int, got bool")
    if isinstance(value, int):
        return BigDecimal.from_integer(value)

    if not isinstance(value, str):
        raise ValueError(f"Decimal must be string or int, got {type(value).__name__}")

    try:
        return BigDecimal.parse(value)
    except FormatError as err:
        raise ValueError(f"Invalid decimal text: '{value}'") from err


class _DecimalTextAnnotation:
    """Pydantic schema hooks for BigDecimal fields."""

    @classmethod
    def __get_pydantic_core_schema__(
        cls, _source_type: Any, _handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            validate_decimal,
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, _core_schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return handler(core_schema.str_schema())


# Arbitrary-precision decimal exchanged as fixed-point text
DecimalText = Annotated[
    BigDecimal,
    _DecimalTextAnnotation,
    Field(description="Arbitrary-precision decimal as fixed-point text"),
]
