"""
Parsers Package

Extraction layer turning route params, query strings and form bodies into
plain dicts. The default strategy can be replaced per call with any parser
function.
"""

from .base import ExtractedObject, Parser, RawEntry, iter_entries
from .default import (
    collapse_entries,
    parse_route_params,
    parse_search_params,
    wrap_array_fields,
)
from .presets import bracket_array_parser, decoded_fields_parser
from .sources import resolve_form_source, resolve_query_source

__all__ = [
    "ExtractedObject",
    "Parser",
    "RawEntry",
    "iter_entries",
    "collapse_entries",
    "parse_route_params",
    "parse_search_params",
    "wrap_array_fields",
    "bracket_array_parser",
    "decoded_fields_parser",
    "resolve_form_source",
    "resolve_query_source",
]
