from typing import Any, Sequence

from google import genai
from google.genai import types

from config.config import DEFAULT_GEMINI_MODEL
from models.conversation import ConversationTurn
from models.errors import SearchProviderError
from tools.web.citations import extract_response_metadata
from utils.logger import get_logger

from .base_client import BaseSearchClient, ProviderReply

logger = get_logger(__name__)


class GeminiSearchClient(BaseSearchClient):
    """
    Gemini client with the Google Search grounding tool enabled on every call.

    Each turn replays the conversation transcript as alternating ``user`` /
    ``model`` contents, so no chat state lives in the SDK.
    """

    def __init__(
        self,
        api_key: str,
        model_name: str = DEFAULT_GEMINI_MODEL,
        generation_config: dict[str, Any] | None = None,
        client: Any = None,
        **kwargs,
    ):
        """
        Initialize the Gemini client.

        Args:
            api_key: The Google API key
            model_name: The name of the model to use
            generation_config: Sampling parameters (temperature, top_p, top_k, max_output_tokens)
            client: Pre-built ``genai.Client``; built from ``api_key`` when omitted
        """
        super().__init__(api_key, model_name=model_name, **kwargs)

        if client is None:
            if not api_key:
                raise ValueError("API key is required for Gemini")
            client = genai.Client(api_key=api_key)

        self.client = client
        self.model_name = model_name
        self.generation_config = dict(generation_config or {})

    @property
    def provider_name(self) -> str:
        return "gemini"

    def build_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            tools=[types.Tool(google_search=types.GoogleSearch())],
            **self.generation_config,
        )

    @staticmethod
    def build_contents(history: Sequence[ConversationTurn], query: str) -> list[types.Content]:
        contents = []
        for turn in history:
            contents.append(types.Content(role="user", parts=[types.Part(text=turn.query)]))
            contents.append(types.Content(role="model", parts=[types.Part(text=turn.raw_answer)]))
        contents.append(types.Content(role="user", parts=[types.Part(text=query)]))
        return contents

    async def generate_turn(
        self, history: Sequence[ConversationTurn], query: str
    ) -> ProviderReply:
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model_name,
                contents=self.build_contents(history, query),
                config=self.build_config(),
            )
        except Exception as e:
            logger.error(
                f"Gemini request failed: {e}",
                extra={"extra_fields": {"model": self.model_name, "history_turns": len(history)}},
            )
            raise SearchProviderError(str(e) or type(e).__name__, provider=self.provider_name, cause=e) from e

        text = getattr(response, "text", None)
        if not text:
            raise SearchProviderError("Gemini returned an empty response", provider=self.provider_name)

        usage = getattr(response, "usage_metadata", None)
        logger.debug(
            "Gemini turn completed",
            extra={
                "extra_fields": {
                    "model": self.model_name,
                    "history_turns": len(history),
                    "total_tokens": getattr(usage, "total_token_count", None),
                }
            },
        )
        return ProviderReply(text=text, grounding_metadata=extract_response_metadata(response))


def create_search_client_from_env() -> GeminiSearchClient:
    """Build the Gemini search client from configuration."""
    from config.config import get_config

    config = get_config()
    return GeminiSearchClient(
        api_key=config.GOOGLE_API_KEY,
        model_name=config.GEMINI_MODEL,
        generation_config=config.generation_config(),
    )
