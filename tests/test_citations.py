from types import SimpleNamespace

import pytest
from fakes import grounding
from google.genai import types

from tools.web import Citation, extract_citations, extract_response_metadata

pytestmark = pytest.mark.unit


def test_duplicate_url_keeps_first_title():
    metadata = grounding(("First", "https://a.example"), ("Second", "https://a.example"))
    citations = extract_citations(metadata)
    assert citations == [Citation(title="First", url="https://a.example", snippet="")]


def test_duplicate_url_does_not_merge_snippets():
    metadata = grounding(
        ("First", "https://a.example"),
        ("Second", "https://a.example"),
        supports=[("from first", [0]), ("from second", [1])],
    )
    citations = extract_citations(metadata)
    assert len(citations) == 1
    assert citations[0].snippet == "from first"


def test_order_follows_chunk_order():
    urls = [f"https://site{i}.example" for i in (3, 1, 2, 5)]
    metadata = grounding(*[(f"T{i}", url) for i, url in enumerate(urls)])
    assert [c.url for c in extract_citations(metadata)] == urls


def test_absent_metadata_is_empty():
    assert extract_citations(None) == []
    assert extract_citations({}) == []
    assert extract_citations() == []


def test_missing_supports_gives_empty_snippets():
    citations = extract_citations({"groundingChunks": [{"web": {"title": "T", "uri": "https://t.example"}}]})
    assert citations == [Citation(title="T", url="https://t.example", snippet="")]


def test_missing_chunks_is_empty():
    assert extract_citations({"groundingSupports": [{"segment": {"text": "x"}, "groundingChunkIndices": [0]}]}) == []


def test_snippets_joined_in_support_order():
    metadata = grounding(
        ("Source", "https://s.example"),
        supports=[("X", [0]), ("unrelated", [1]), ("Y", [1, 0])],
    )
    assert extract_citations(metadata)[0].snippet == "X Y"


def test_chunks_without_url_or_title_skipped():
    metadata = {
        "groundingChunks": [
            {"web": {"uri": "https://no-title.example"}},
            {"web": {"title": "No url"}},
            {},
            {"web": {"title": "Kept", "uri": "https://kept.example"}},
        ],
        "groundingSupports": [{"segment": {"text": "kept text"}, "groundingChunkIndices": [3]}],
    }
    citations = extract_citations(metadata)
    assert citations == [Citation(title="Kept", url="https://kept.example", snippet="kept text")]


def test_support_without_segment_text_contributes_empty_string():
    metadata = {
        "groundingChunks": [{"web": {"title": "T", "uri": "https://t.example"}}],
        "groundingSupports": [
            {"segment": {}, "groundingChunkIndices": [0]},
            {"segment": {"text": "tail"}, "groundingChunkIndices": [0]},
        ],
    }
    assert extract_citations(metadata)[0].snippet == " tail"


def test_snake_case_dict():
    metadata = {
        "grounding_chunks": [{"web": {"title": "T", "uri": "https://t.example"}}],
        "grounding_supports": [{"segment": {"text": "s"}, "grounding_chunk_indices": [0]}],
    }
    assert extract_citations(metadata) == [Citation(title="T", url="https://t.example", snippet="s")]


def test_genai_grounding_metadata():
    metadata = types.GroundingMetadata(
        grounding_chunks=[
            types.GroundingChunk(web=types.GroundingChunkWeb(uri="https://g.example", title="Google")),
            types.GroundingChunk(web=types.GroundingChunkWeb(uri="https://g.example", title="Dup")),
            types.GroundingChunk(web=types.GroundingChunkWeb(uri="https://h.example", title="Other")),
        ],
        grounding_supports=[
            types.GroundingSupport(segment=types.Segment(text="X"), grounding_chunk_indices=[0, 2]),
            types.GroundingSupport(segment=types.Segment(text="Y"), grounding_chunk_indices=[0]),
        ],
    )
    citations = extract_citations(metadata)
    assert [c.title for c in citations] == ["Google", "Other"]
    assert citations[0].snippet == "X Y"
    assert citations[1].snippet == "X"


def test_every_citation_has_title_url_and_string_snippet():
    metadata = grounding(("A", "https://a.example"), ("B", "https://b.example"), supports=[("s", [1])])
    for citation in extract_citations(metadata):
        assert citation.title
        assert citation.url
        assert isinstance(citation.snippet, str)


def test_response_metadata_from_first_candidate():
    first = grounding(("A", "https://a.example"))
    response = SimpleNamespace(
        candidates=[SimpleNamespace(grounding_metadata=first), SimpleNamespace(grounding_metadata=None)]
    )
    assert extract_response_metadata(response) is first


def test_response_metadata_absent():
    assert extract_response_metadata(SimpleNamespace(candidates=None)) is None
    assert extract_response_metadata(SimpleNamespace(candidates=[SimpleNamespace(grounding_metadata=None)])) is None
    assert extract_response_metadata({"candidates": [{"groundingMetadata": {"groundingChunks": []}}]}) == {
        "groundingChunks": []
    }
