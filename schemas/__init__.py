"""
Schemas package for request data validation.
"""

from .coercions import BoolAsString, CheckboxAsString, IntAsString, NumAsString
from .errors import VALIDATION_ERRORS, SchemaValidationError
from .results import Failure, Issue, StructuredError, Success, ValidationOutcome
from .validation import (
    AsyncSchema,
    array_fields,
    resolve_schema,
    resolve_validator,
    validate,
    validate_safe,
)

__all__ = [
    "BoolAsString",
    "CheckboxAsString",
    "IntAsString",
    "NumAsString",
    "VALIDATION_ERRORS",
    "SchemaValidationError",
    "Failure",
    "Issue",
    "StructuredError",
    "Success",
    "ValidationOutcome",
    "AsyncSchema",
    "array_fields",
    "resolve_schema",
    "resolve_validator",
    "validate",
    "validate_safe",
]
