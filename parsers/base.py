"""
Shared types and entry iteration for request data sources.

A source is anything that can be read as an ordered sequence of key/value
pairs: werkzeug multi-dicts, Starlette-style form/query objects, plain
mappings, raw query strings, or iterables of pairs.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Callable, Dict, Iterator, List, Tuple, Union
from urllib.parse import parse_qsl

from werkzeug.datastructures import MultiDict


RawEntry = Tuple[str, Any]
ExtractedValue = Union[Any, List[Any]]
ExtractedObject = Dict[str, ExtractedValue]
Parser = Callable[[Any], ExtractedObject]


def iter_entries(source: Any) -> Iterator[RawEntry]:
    """
    Iterate the raw key/value pairs of a source in source order.

    Args:
        source: Multi-dict, mapping, query string or iterable of pairs

    Returns:
        Iterator[RawEntry]: Key/value pairs, repeated keys included

    Raises:
        TypeError: If the source cannot be read as key/value pairs
    """
    if isinstance(source, MultiDict):
        return iter(source.items(multi=True))

    # Starlette FormData / QueryParams
    multi_items = getattr(source, "multi_items", None)
    if callable(multi_items):
        return iter(multi_items())

    if isinstance(source, Mapping):
        return iter(source.items())

    if isinstance(source, str):
        return iter(parse_qsl(source.lstrip("?"), keep_blank_values=True))

    if isinstance(source, Iterable):
        return _iter_pairs(source)

    raise TypeError(
        f"Cannot read key/value pairs from {type(source).__name__} source"
    )


def _iter_pairs(pairs: Iterable) -> Iterator[RawEntry]:
    for pair in pairs:
        try:
            key, value = pair
        except (TypeError, ValueError) as e:
            raise TypeError(f"Expected a (key, value) pair, got {pair!r}") from e
        yield key, value
