"""Grounded web search helpers."""

from .citations import extract_citations, extract_response_metadata
from .contracts import Citation

__all__ = ["Citation", "extract_citations", "extract_response_metadata"]
