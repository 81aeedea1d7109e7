"""
Schema resolution and validation wrappers.

This module runs extracted request data through a caller-supplied schema.
A schema may validate synchronously (pydantic models, type adapters, plain
validators) or return an awaitable; both are awaited the same way, so callers
never need to know which kind they hold.
"""

import collections.abc
import inspect
from collections.abc import Mapping
from typing import Annotated, Any, Callable, List, Optional, Type, Union, get_args, get_origin
import logging
import types

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, create_model
from pydantic.fields import FieldInfo
from pydantic_core import PydanticUndefined

from .errors import VALIDATION_ERRORS
from .results import Failure, StructuredError, Success, ValidationOutcome

logger = logging.getLogger(__name__)

SEQUENCE_ORIGINS = (
    list,
    tuple,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
)

Validator = Callable[[Any], Any]


def shape_model(shape: Mapping) -> Type[BaseModel]:
    """
    Build a pydantic model from a field shape.

    Each entry is either a bare annotation (required unless the annotation
    carries its own default) or an ``(annotation, default)`` tuple, where the
    default may also be a ``Field(...)``.

    Shape keys become field aliases over generated field names, so keys such as
    ``_csrf`` or ``json`` validate like any other key.

    Args:
        shape: Mapping of input key to definition

    Returns:
        Type[BaseModel]: Model validating the shape by alias
    """
    fields = {}
    for index, (key, definition) in enumerate(shape.items()):
        annotation, default = (
            definition if isinstance(definition, tuple) else (definition, PydanticUndefined)
        )
        if isinstance(default, FieldInfo):
            annotation = Annotated[annotation, default]
            default = PydanticUndefined
        field_info = (
            Field(alias=key)
            if default is PydanticUndefined
            else Field(default=default, alias=key)
        )
        fields[f"field_{index}"] = (annotation, field_info)

    return create_model(
        "RequestShape",
        __config__=ConfigDict(arbitrary_types_allowed=True),
        **fields,
    )


class ShapeSchema:
    """Field shape compiled once into a pydantic model; validates to a plain dict."""

    def __init__(self, shape: Mapping):
        self.model = shape_model(shape)

    def validate(self, value: Any) -> dict:
        instance = self.model.model_validate(value)
        # Optional fields the input did not mention stay out of the result
        omitted = {
            name
            for name in self.model.model_fields
            if name not in instance.model_fields_set and getattr(instance, name) is None
        }
        return instance.model_dump(by_alias=True, exclude=omitted)


def resolve_schema(schema: Any) -> Any:
    """Compile a field shape into a ShapeSchema; other schemas pass through."""
    if isinstance(schema, Mapping):
        return ShapeSchema(schema)
    return schema


def resolve_validator(schema: Any) -> Validator:
    """
    Turn any supported schema into a validator callable.

    Args:
        schema: Field shape, BaseModel subclass, TypeAdapter, object with a
            ``validate`` method, or plain callable

    Returns:
        Validator: Callable returning the validated value or an awaitable

    Raises:
        TypeError: If the schema is none of the supported kinds
    """
    if isinstance(schema, Mapping):
        return ShapeSchema(schema).validate
    if isinstance(schema, type) and issubclass(schema, BaseModel):
        return schema.model_validate
    if isinstance(schema, TypeAdapter):
        return schema.validate_python

    validate_method = getattr(schema, "validate", None)
    if callable(validate_method):
        return validate_method
    if callable(schema):
        return schema

    raise TypeError(f"Unsupported schema type: {type(schema).__name__}")


def schema_model(schema: Any) -> Optional[Type[BaseModel]]:
    """Get the pydantic model behind a schema, if there is one."""
    if isinstance(schema, Mapping):
        return shape_model(schema)
    if isinstance(schema, ShapeSchema):
        return schema.model
    if isinstance(schema, type) and issubclass(schema, BaseModel):
        return schema
    if isinstance(schema, AsyncSchema):
        return schema_model(schema.schema)
    return None


def _is_sequence_annotation(annotation: Any) -> bool:
    origin = get_origin(annotation)
    if origin is Annotated:
        return _is_sequence_annotation(get_args(annotation)[0])
    if origin is Union or origin is types.UnionType:
        return any(
            _is_sequence_annotation(arg)
            for arg in get_args(annotation)
            if arg is not type(None)
        )
    return (origin or annotation) in SEQUENCE_ORIGINS


def array_fields(schema: Any) -> List[str]:
    """
    List the input keys a schema declares as sequence fields.

    Args:
        schema: Any supported schema

    Returns:
        List[str]: Field aliases (or names) of list/tuple/set fields; empty
        for schemas without a pydantic model
    """
    model = schema_model(schema)
    if model is None:
        return []
    return [
        field.alias or name
        for name, field in model.model_fields.items()
        if _is_sequence_annotation(field.annotation)
    ]


async def _settle(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


class AsyncSchema:
    """
    Schema whose validation is a coroutine.

    Wraps any supported schema and optionally runs an async ``refine`` step on
    the validated value, e.g. a uniqueness lookup. ``refine`` may raise
    ``SchemaValidationError`` to report field issues.
    """

    def __init__(self, schema: Any, refine: Optional[Callable[[Any], Any]] = None):
        self.schema = resolve_schema(schema)
        self.refine = refine

    async def validate(self, value: Any) -> Any:
        """Validate with the wrapped schema, then refine."""
        result = await _settle(resolve_validator(self.schema)(value))
        if self.refine is not None:
            result = await _settle(self.refine(result))
        return result


async def validate(data: Any, schema: Any) -> Any:
    """
    Validate data against a schema, raising on failure.

    Args:
        data: Extracted request data
        schema: Any supported schema, synchronous or async

    Returns:
        Any: The validated value

    Raises:
        pydantic.ValidationError: Propagated unmodified from pydantic schemas
        SchemaValidationError: Propagated unmodified from custom schemas
    """
    validator = resolve_validator(schema)
    logger.debug("Validating %s with %s", type(data).__name__, type(schema).__name__)
    return await _settle(validator(data))


async def validate_safe(data: Any, schema: Any) -> ValidationOutcome:
    """
    Validate data against a schema, returning a result instead of raising.

    Only validation errors become a Failure; anything else propagates.

    Args:
        data: Extracted request data
        schema: Any supported schema, synchronous or async

    Returns:
        ValidationOutcome: Success with the data, or Failure with the issues
    """
    try:
        value = await validate(data, schema)
    except VALIDATION_ERRORS as e:
        error = StructuredError.from_exception(e)
        logger.info("Validation failed with %d issue(s)", len(error.issues))
        return Failure(error=error)
    return Success(data=value)
