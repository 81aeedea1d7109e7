"""
String coercion types for request data.

Query strings and form bodies only carry strings. These annotated types turn
the common string encodings into Python values and report a readable message
when the string does not match.
"""

import re
from typing import Annotated, Any, Optional

from pydantic import BeforeValidator, Field
from pydantic_core import PydanticCustomError

INT_PATTERN = re.compile(r"^-?\d+$")
NUMBER_PATTERN = re.compile(r"^-?(\d+\.?\d*|\.\d+)$")


def _require_string(value: Any) -> str:
    if not isinstance(value, str):
        raise PydanticCustomError("string_expected", "Expected a string")
    return value


def parse_bool_string(value: Any) -> bool:
    """Parse ``"true"``/``"false"``."""
    value = _require_string(value)
    if value == "true":
        return True
    if value == "false":
        return False
    raise PydanticCustomError(
        "bool_as_string", 'Must be a boolean string ("true" or "false")'
    )


def parse_checkbox(value: Optional[Any]) -> bool:
    """Parse an HTML checkbox: ``"on"`` when checked, absent otherwise."""
    if value is None:
        return False
    if _require_string(value) == "on":
        return True
    raise PydanticCustomError("checkbox_as_string", 'Must be "on" or absent')


def parse_int_string(value: Any) -> int:
    """Parse a whole number such as ``"10"`` or ``"-3"``."""
    value = _require_string(value)
    if not INT_PATTERN.match(value):
        raise PydanticCustomError("int_as_string", "Must be a whole number")
    return int(value)


def parse_number_string(value: Any) -> float:
    """Parse a decimal number such as ``"1.5"`` or ``"-.25"``."""
    value = _require_string(value)
    if not NUMBER_PATTERN.match(value):
        raise PydanticCustomError("num_as_string", "Must be a number")
    return float(value)


BoolAsString = Annotated[bool, BeforeValidator(parse_bool_string)]
# Unchecked boxes are absent from the form, so the field defaults to False
CheckboxAsString = Annotated[bool, BeforeValidator(parse_checkbox), Field(default=False)]
IntAsString = Annotated[int, BeforeValidator(parse_int_string)]
NumAsString = Annotated[float, BeforeValidator(parse_number_string)]
