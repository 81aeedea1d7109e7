"""
Tests for the extraction layer: sources, default strategy and preset parsers.
"""

import io
import json

import pytest
from werkzeug.datastructures import FileStorage, MultiDict
from werkzeug.wrappers import Request

from config.settings import settings
from parsers import (
    bracket_array_parser,
    collapse_entries,
    decoded_fields_parser,
    iter_entries,
    parse_route_params,
    parse_search_params,
    resolve_form_source,
    resolve_query_source,
    wrap_array_fields,
)


def test_collapse_keeps_single_values_scalar():
    """Keys seen once map to their value unchanged."""
    assert collapse_entries([("id", "id1"), ("age", "10")]) == {"id": "id1", "age": "10"}


def test_collapse_repeated_keys_into_ordered_lists():
    """Keys seen N >= 2 times map to all N values in occurrence order."""
    entries = [("friends", "a"), ("id", "id1"), ("friends", "b"), ("friends", "c")]
    extracted = collapse_entries(entries)

    assert extracted == {"friends": ["a", "b", "c"], "id": "id1"}
    assert list(extracted) == ["friends", "id"]


def test_collapse_passes_opaque_values_through():
    """Non-string values are stored as the same object."""
    upload = FileStorage(io.BytesIO(b"data"), filename="a.png")
    marker = ["not", "a", "sequence", "of", "values"]

    extracted = collapse_entries([("image", upload), ("blob", marker)])

    assert extracted["image"] is upload
    assert extracted["blob"] is marker


def test_collapse_empty_source():
    assert collapse_entries([]) == {}


def test_scalar_extraction_is_source_independent():
    """A mapping and a pairs iterable with unique keys extract identically."""
    mapping = {"id": "id1", "age": "10"}
    pairs = [("id", "id1"), ("age", "10")]

    assert parse_search_params(mapping) == parse_search_params(pairs) == mapping
    assert parse_route_params(mapping) == mapping


def test_iter_entries_reads_multidict_with_repeats():
    source = MultiDict([("friends", "a"), ("id", "id1"), ("friends", "b")])
    assert sorted(iter_entries(source)) == [("friends", "a"), ("friends", "b"), ("id", "id1")]
    assert parse_search_params(source) == {"friends": ["a", "b"], "id": "id1"}


def test_iter_entries_reads_query_string():
    """Raw query strings keep blank values and ignore a leading '?'."""
    extracted = parse_search_params("?id=id1&age=10&friends=a&friends=b&note=")
    assert extracted == {"id": "id1", "age": "10", "friends": ["a", "b"], "note": ""}


def test_iter_entries_reads_multi_items_objects():
    """Objects exposing multi_items() (Starlette style) are supported."""

    class FormData:
        def multi_items(self):
            return [("tag", "x"), ("tag", "y")]

    assert parse_search_params(FormData()) == {"tag": ["x", "y"]}


def test_iter_entries_rejects_unreadable_sources():
    with pytest.raises(TypeError):
        list(iter_entries(42))
    with pytest.raises(TypeError, match="key, value"):
        list(iter_entries(["abc"]))


def test_route_params_are_copied():
    params = {"id": "id1"}
    extracted = parse_route_params(params)
    extracted["id"] = "changed"
    assert params == {"id": "id1"}


def test_wrap_array_fields_only_wraps_named_scalars():
    extracted = {"tags": "a", "ids": ["1", "2"], "name": "n"}
    wrapped = wrap_array_fields(extracted, ["tags", "ids", "missing"])

    assert wrapped == {"tags": ["a"], "ids": ["1", "2"], "name": "n"}
    assert extracted["tags"] == "a"


def test_resolve_query_source_from_request():
    request = Request.from_values("/?id=id1&age=10")
    query = resolve_query_source(request)

    assert isinstance(query, MultiDict)
    assert parse_search_params(query) == {"id": "id1", "age": "10"}


def test_resolve_query_source_from_query_params_attribute():
    class StarletteRequest:
        query_params = {"id": "id1"}

    assert resolve_query_source(StarletteRequest()) == {"id": "id1"}


def test_resolve_query_source_passes_plain_sources_through():
    source = MultiDict([("a", "1")])
    assert resolve_query_source(source) is source


@pytest.mark.asyncio
async def test_resolve_form_source_combines_fields_and_files():
    request = Request.from_values(
        method="POST",
        data={"id": "id1", "avatar": (io.BytesIO(b"png"), "avatar.png")},
    )
    form = await resolve_form_source(request)
    extracted = parse_search_params(form)

    assert extracted["id"] == "id1"
    assert isinstance(extracted["avatar"], FileStorage)
    assert extracted["avatar"].filename == "avatar.png"


@pytest.mark.asyncio
async def test_resolve_form_source_without_files(monkeypatch):
    monkeypatch.setattr(settings, "INCLUDE_UPLOADED_FILES", False)
    request = Request.from_values(
        method="POST",
        data={"id": "id1", "avatar": (io.BytesIO(b"png"), "avatar.png")},
    )
    form = await resolve_form_source(request)

    assert parse_search_params(form) == {"id": "id1"}


@pytest.mark.asyncio
async def test_resolve_form_source_awaits_async_form_method():
    class StarletteRequest:
        async def form(self):
            return MultiDict([("id", "id1"), ("friends", "a"), ("friends", "b")])

    form = await resolve_form_source(StarletteRequest())
    assert parse_search_params(form) == {"id": "id1", "friends": ["a", "b"]}


@pytest.mark.asyncio
async def test_resolve_form_source_passes_plain_sources_through():
    source = [("id", "id1")]
    assert await resolve_form_source(source) is source


def test_bracket_array_parser_strips_suffix():
    source = MultiDict(
        [("id", "id1"), ("friends[]", "friend1"), ("friends[]", "friend2")]
    )
    assert bracket_array_parser(source) == {"id": "id1", "friends": ["friend1", "friend2"]}


def test_bracket_array_parser_single_bracket_value_is_a_list():
    assert bracket_array_parser("tags[]=a&page=2") == {"tags": ["a"], "page": "2"}


def test_bracket_array_parser_merges_plain_and_bracketed_keys():
    assert bracket_array_parser([("tags", "a"), ("tags[]", "b")]) == {"tags": ["a", "b"]}


def test_decoded_fields_parser_rebuilds_values():
    parser = decoded_fields_parser({"image": json.loads})
    source = [
        ("id", "id1"),
        ("image", json.dumps({"filepath": "public/image.jpeg", "type": "image/jpeg"})),
        ("friends", "a"),
        ("friends", "b"),
    ]

    assert parser(source) == {
        "id": "id1",
        "friends": ["a", "b"],
        "image": {"filepath": "public/image.jpeg", "type": "image/jpeg"},
    }


def test_decoded_fields_parser_keeps_opaque_values_and_last_occurrence():
    upload = FileStorage(io.BytesIO(b"data"), filename="b.png")
    parser = decoded_fields_parser({"image": json.loads})

    extracted = parser([("image", '{"n": 1}'), ("image", upload)])

    assert extracted == {"image": upload}
