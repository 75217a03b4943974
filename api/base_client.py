from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Sequence

from models.conversation import ConversationTurn


@dataclass(frozen=True)
class ProviderReply:
    """Text answer plus the optional grounding metadata for one turn."""

    text: str
    grounding_metadata: Any = None


class BaseSearchClient(ABC):
    """
    Abstract base class for grounded search providers.

    Clients are stateless with respect to conversations: the caller passes the
    transcript so far and gets back one new reply.
    """

    @abstractmethod
    def __init__(self, api_key: str, **kwargs):
        """
        Initialize the search client.

        Args:
            api_key: API key for the provider
            **kwargs: Additional provider-specific parameters
        """
        self.api_key = api_key
        self.model_name = kwargs.get('model_name')

    @property
    def provider_name(self) -> str:
        return "unknown"

    @abstractmethod
    async def generate_turn(
        self, history: Sequence[ConversationTurn], query: str
    ) -> ProviderReply:
        """
        Answer ``query`` as the next turn of ``history`` with web search grounding enabled.

        Args:
            history: Earlier turns of the conversation, oldest first
            query: The new user question

        Returns:
            The provider's reply

        Raises:
            SearchProviderError: the provider failed or returned no answer
        """
        pass
