"""
Models package for conversation state and search results.
"""

from .conversation import ConversationTurn, Session
from .errors import SearchProviderError
from .search_result import SearchResult

__all__ = ["ConversationTurn", "SearchProviderError", "SearchResult", "Session"]
