"""
Services package exposing the request parsing entry points.
"""

from .request_parser import (
    parse_form,
    parse_form_safe,
    parse_params,
    parse_params_safe,
    parse_query,
    parse_query_safe,
)

__all__ = [
    "parse_form",
    "parse_form_safe",
    "parse_params",
    "parse_params_safe",
    "parse_query",
    "parse_query_safe",
]
