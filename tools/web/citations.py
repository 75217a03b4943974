"""
Citation extraction from Gemini grounding metadata.

Grounding metadata carries two parallel sequences:

- chunks: the web sources the model consulted (``web.uri`` / ``web.title``)
- supports: answer segments, each listing the indices of the chunks that
  corroborate it

The metadata may be a google-genai ``GroundingMetadata`` model, a snake_case
dict (``model_dump()``) or the camelCase dict of the REST payload.
"""

from typing import Any

from .contracts import Citation


def _field(obj: Any, *names: str) -> Any:
    """Read the first present attribute or key out of ``names``."""
    if obj is None:
        return None
    for name in names:
        if isinstance(obj, dict):
            value = obj.get(name)
        else:
            value = getattr(obj, name, None)
        if value is not None:
            return value
    return None


def _chunk_source(chunk: Any) -> tuple[str | None, str | None]:
    web = _field(chunk, "web")
    return _field(web, "uri", "url"), _field(web, "title")


def _snippet_for(index: int, supports: list) -> str:
    texts = []
    for support in supports:
        indices = _field(support, "grounding_chunk_indices", "groundingChunkIndices") or []
        if index in indices:
            text = _field(_field(support, "segment"), "text")
            texts.append(text or "")
    return " ".join(texts)


def extract_citations(grounding_metadata: Any = None) -> list[Citation]:
    """
    Build the ordered, url-unique citation list for one response.

    Order follows the chunk order. The first chunk seen for a url wins; later
    chunks with the same url are ignored, title and snippet included. Chunks
    without both a url and a title are skipped. Absent metadata gives ``[]``.
    """
    chunks = _field(grounding_metadata, "grounding_chunks", "groundingChunks") or []
    supports = _field(grounding_metadata, "grounding_supports", "groundingSupports") or []

    citations: dict[str, Citation] = {}
    for index, chunk in enumerate(chunks):
        url, title = _chunk_source(chunk)
        if not url or not title or url in citations:
            continue
        citations[url] = Citation(title=title, url=url, snippet=_snippet_for(index, supports))

    return list(citations.values())


def extract_response_metadata(response: Any) -> Any:
    """Grounding metadata of the first candidate of a provider response, if any."""
    candidates = _field(response, "candidates") or []
    if not candidates:
        return None
    return _field(candidates[0], "grounding_metadata", "groundingMetadata")
