"""
Public entry points for parsing request data against a schema.

Each source kind (route params, query string, form body) has a raising
variant and a safe variant. All of them accept ``parser=`` to replace the
default extraction strategy for that call.
"""

from collections.abc import Mapping
from typing import Any, Optional
import logging

from parsers import (
    ExtractedObject,
    Parser,
    parse_route_params,
    parse_search_params,
    resolve_form_source,
    resolve_query_source,
    wrap_array_fields,
)
from schemas import (
    ValidationOutcome,
    array_fields,
    resolve_schema,
    validate,
    validate_safe,
)

logger = logging.getLogger(__name__)


def _extract_params(
    params: Mapping, schema: Any, parser: Optional[Parser]
) -> ExtractedObject:
    if parser is not None:
        logger.debug("Extracting params with %s", getattr(parser, "__name__", parser))
        return parser(params)
    return wrap_array_fields(parse_route_params(params), array_fields(schema))


def _extract_query(source: Any, parser: Optional[Parser]) -> ExtractedObject:
    query = resolve_query_source(source)
    return (parser or parse_search_params)(query)


async def _extract_form(source: Any, parser: Optional[Parser]) -> ExtractedObject:
    form = await resolve_form_source(source)
    return (parser or parse_search_params)(form)


async def parse_params(
    params: Mapping, schema: Any, *, parser: Optional[Parser] = None
) -> Any:
    """
    Parse and validate route params.

    Args:
        params: Route params mapping, e.g. ``request.view_args``
        schema: Field shape, pydantic model or adapter, or custom schema
        parser: Optional replacement for the default extraction

    Returns:
        Any: The validated value

    Raises:
        pydantic.ValidationError: If the params do not match a pydantic schema
        SchemaValidationError: If the params do not match a custom schema
    """
    schema = resolve_schema(schema)
    data = _extract_params(params, schema, parser)
    return await validate(data, schema)


async def parse_params_safe(
    params: Mapping, schema: Any, *, parser: Optional[Parser] = None
) -> ValidationOutcome:
    """Parse and validate route params, returning Success or Failure."""
    schema = resolve_schema(schema)
    data = _extract_params(params, schema, parser)
    return await validate_safe(data, schema)


async def parse_query(
    source: Any, schema: Any, *, parser: Optional[Parser] = None
) -> Any:
    """
    Parse and validate a query string.

    Args:
        source: Request, multi-dict, mapping, pairs, or raw query string
        schema: Field shape, pydantic model or adapter, or custom schema
        parser: Optional replacement for the default extraction; receives
            the request's query data when given a request

    Returns:
        Any: The validated value
    """
    schema = resolve_schema(schema)
    data = _extract_query(source, parser)
    return await validate(data, schema)


async def parse_query_safe(
    source: Any, schema: Any, *, parser: Optional[Parser] = None
) -> ValidationOutcome:
    """Parse and validate a query string, returning Success or Failure."""
    schema = resolve_schema(schema)
    data = _extract_query(source, parser)
    return await validate_safe(data, schema)


async def parse_form(
    source: Any, schema: Any, *, parser: Optional[Parser] = None
) -> Any:
    """
    Parse and validate a form body.

    Uploaded files are passed to the schema untouched.

    Args:
        source: Request, multi-dict, mapping, or pairs
        schema: Field shape, pydantic model or adapter, or custom schema
        parser: Optional replacement for the default extraction; receives
            the request's form data when given a request

    Returns:
        Any: The validated value
    """
    schema = resolve_schema(schema)
    data = await _extract_form(source, parser)
    return await validate(data, schema)


async def parse_form_safe(
    source: Any, schema: Any, *, parser: Optional[Parser] = None
) -> ValidationOutcome:
    """Parse and validate a form body, returning Success or Failure."""
    schema = resolve_schema(schema)
    data = await _extract_form(source, parser)
    return await validate_safe(data, schema)
