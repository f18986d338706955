"""Pydantic field type for BigInteger values.

Lets models carry arbitrary-precision integers as decimal strings on the
wire:

    class Transfer(BaseModel):
        amount: BigIntegerStr

    Transfer(amount="123456789012345678901234567890").amount  # BigInteger
    Transfer(amount=5).model_dump()  # {"amount": "5"}
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

from bignumber.big_integer import BigInteger

DECIMAL_INTEGER_PATTERN = r"^[+-]?[0-9]+$"


def validate_big_integer(value: Any) -> BigInteger:
    """Validate that a value is a valid BigInteger input.

    Args:
        value: BigInteger, int or decimal string

    Returns:
        Valid BigInteger

    Raises:
        ValueError: If value has another type or does not hold a number
    """
    if isinstance(value, bool) or not isinstance(value, (BigInteger, int, str)):
        raise ValueError(f"BigInteger must be string or int, got {type(value).__name__}")

    result = BigInteger(value)
    if not result.is_valid:
        raise ValueError(f"{result.state.value}: {value!r}")
    return result


def serialize_big_integer(value: BigInteger) -> str:
    return value.to_decimal_string()


class _BigIntegerSchema:
    """Pydantic schema hooks for BigInteger fields."""

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            validate_big_integer,
            serialization=core_schema.plain_serializer_function_ser_schema(
                serialize_big_integer, return_schema=core_schema.str_schema()
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return {"type": "string", "pattern": DECIMAL_INTEGER_PATTERN}


# Arbitrary-precision integer as decimal string (validated)
BigIntegerStr = Annotated[BigInteger, _BigIntegerSchema]
