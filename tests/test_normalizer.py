"""Tests for the response normalizer."""

import json
from types import SimpleNamespace

import pytest

from viberoute.api.llm import ModelReply
from viberoute.api.models import Category, SourceCitation
from viberoute.api.normalizer import extract_sources, normalize, parse_data

from .conftest import GROUNDING, ROMA_ITINERARY


class TestParseData:
    def test_valid_list_is_returned_unchanged(self) -> None:
        assert parse_data(json.dumps(ROMA_ITINERARY), Category.ITINERARY) == ROMA_ITINERARY

    def test_valid_overview_is_returned_unchanged(self) -> None:
        overview = {"description": "Roma eterna", "typicalFoods": [], "monuments": []}
        assert parse_data(json.dumps(overview), Category.OVERVIEW) == overview

    @pytest.mark.parametrize("text", [None, ""])
    @pytest.mark.parametrize("category", [c for c in Category if c.is_list])
    def test_missing_text_gives_empty_list(self, text, category: Category) -> None:
        assert parse_data(text, category) == []

    @pytest.mark.parametrize("text", [None, ""])
    def test_missing_text_gives_empty_overview(self, text) -> None:
        assert parse_data(text, Category.OVERVIEW) == {}

    def test_unparseable_text_gives_empty_collection(self) -> None:
        assert parse_data("not json {", Category.SAFETY) == []
        assert parse_data("not json {", Category.OVERVIEW) == {}

    def test_wrong_top_level_kind_gives_empty_collection(self) -> None:
        assert parse_data('{"a": 1}', Category.BITES) == []
        assert parse_data("[1, 2]", Category.OVERVIEW) == {}


class TestExtractSources:
    def test_absent_metadata_gives_no_sources(self) -> None:
        assert extract_sources(None) == []
        assert extract_sources({}) == []
        assert extract_sources({"grounding_chunks": None}) == []

    def test_dict_metadata_keeps_order(self) -> None:
        sources = extract_sources(GROUNDING)

        assert sources == [
            SourceCitation(uri="https://example.com/roma", title="Guida di Roma"),
            SourceCitation(uri="https://example.com/pantheon", title=None),
        ]

    def test_sdk_objects_are_supported(self) -> None:
        """Metadata from the SDK exposes attributes rather than keys."""
        chunks = [
            SimpleNamespace(web=SimpleNamespace(uri=f"https://example.com/{i}", title=f"T{i}"))
            for i in range(3)
        ]
        metadata = SimpleNamespace(grounding_chunks=chunks)

        sources = extract_sources(metadata)

        assert [s.uri for s in sources] == [
            "https://example.com/0",
            "https://example.com/1",
            "https://example.com/2",
        ]

    def test_chunks_without_web_are_skipped(self) -> None:
        metadata = {
            "grounding_chunks": [
                {"retrieved_context": {"uri": "gs://bucket/doc"}},
                {"web": {"uri": "https://example.com/a", "title": "A"}},
            ]
        }
        assert extract_sources(metadata) == [SourceCitation(uri="https://example.com/a", title="A")]


def test_normalize_builds_result() -> None:
    reply = ModelReply(text=json.dumps(ROMA_ITINERARY), grounding_metadata=GROUNDING)

    result = normalize(reply, Category.ITINERARY)

    assert result.ok
    assert result.category is Category.ITINERARY
    assert result.data == ROMA_ITINERARY
    assert len(result.sources) == 2


def test_normalize_missing_text_and_metadata() -> None:
    result = normalize(ModelReply(text=None), Category.OVERVIEW)

    assert result.data == {}
    assert result.sources == []
    assert result.error is None
