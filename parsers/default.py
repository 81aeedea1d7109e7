"""
Default extraction strategy.

Repeated keys collapse into ordered lists, keys seen once stay scalar.
"""

from collections.abc import Mapping
from typing import Any, Dict, Iterable, List
import logging

from .base import ExtractedObject, RawEntry, iter_entries

logger = logging.getLogger(__name__)


def collapse_entries(entries: Iterable[RawEntry]) -> ExtractedObject:
    """
    Collapse key/value pairs into a plain dict.

    A key seen once maps to its value, a key seen N >= 2 times maps to a
    list of its N values in occurrence order. Values are stored as-is.

    Args:
        entries: Key/value pairs in source order

    Returns:
        ExtractedObject: Keys in first-occurrence order
    """
    grouped: Dict[str, List[Any]] = {}
    for key, value in entries:
        grouped.setdefault(key, []).append(value)

    return {
        key: values[0] if len(values) == 1 else values
        for key, values in grouped.items()
    }


def parse_search_params(source: Any) -> ExtractedObject:
    """Default parser for query strings and form bodies."""
    extracted = collapse_entries(iter_entries(source))
    logger.debug("Extracted %d keys from %s", len(extracted), type(source).__name__)
    return extracted


def parse_route_params(params: Mapping) -> ExtractedObject:
    """Default parser for route params; values pass through unchanged."""
    return dict(params)


def wrap_array_fields(extracted: ExtractedObject, names: Iterable[str]) -> ExtractedObject:
    """
    Wrap scalar values of sequence-typed fields into one-element lists.

    Args:
        extracted: Extracted data
        names: Keys the schema declares as sequence fields

    Returns:
        ExtractedObject: New dict with the listed keys wrapped
    """
    wrapped = dict(extracted)
    for name in names:
        if name in wrapped and not isinstance(wrapped[name], list):
            wrapped[name] = [wrapped[name]]
    return wrapped
