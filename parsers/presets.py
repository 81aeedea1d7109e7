"""
Ready-made custom parsers for the ``parser=`` option.
"""

from typing import Any, Callable, Dict, List, Mapping
import logging

from config.settings import settings
from .base import ExtractedObject, Parser, iter_entries
from .default import collapse_entries

logger = logging.getLogger(__name__)


def bracket_array_parser(source: Any) -> ExtractedObject:
    """
    Parse array-style keys such as ``friends[]`` into clean keys.

    Bracketed keys always produce a list, even for a single value, unlike the
    default collapse rule where a key seen once stays scalar. Other keys follow
    the default collapse rule.

    Args:
        source: Key/value source

    Returns:
        ExtractedObject: Parsed data with the suffix removed from keys
    """
    suffix = settings.ARRAY_KEY_SUFFIX
    arrays: Dict[str, List[Any]] = {}
    plain = []

    for key, value in iter_entries(source):
        if suffix and key.endswith(suffix):
            arrays.setdefault(key[: -len(suffix)], []).append(value)
        else:
            plain.append((key, value))

    values = collapse_entries(plain)
    for key, items in arrays.items():
        if key not in values:
            values[key] = items
            continue
        current = values[key]
        if isinstance(current, list):
            current.extend(items)
        else:
            values[key] = [current, *items]
    return values


def decoded_fields_parser(decoders: Mapping[str, Callable[[str], Any]]) -> Parser:
    """
    Build a parser that decodes serialized values of selected keys.

    String values of a decoded key go through its decoder, e.g. ``json.loads``
    or a factory rebuilding an uploaded file handle. Non-string values are
    stored as-is. A decoded key is always scalar; its last occurrence wins.

    Args:
        decoders: Mapping of key to decoder callable

    Returns:
        Parser: Parser function for the ``parser=`` option
    """

    def parse(source: Any) -> ExtractedObject:
        decoded: Dict[str, Any] = {}
        rest = []
        for key, value in iter_entries(source):
            if key in decoders:
                decoded[key] = decoders[key](value) if isinstance(value, str) else value
            else:
                rest.append((key, value))

        values = collapse_entries(rest)
        values.update(decoded)
        logger.debug("Decoded fields: %s", list(decoded))
        return values

    return parse
