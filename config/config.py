import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_GEMINI_MODEL = "gemini-2.0-flash-exp"


class Config:
    """Configuration management for the search service."""

    def __init__(self):
        """Initialize configuration with environment variables."""
        # Load environment variables from .env file if it exists
        env_path = Path(__file__).parent.parent / '.env'
        if env_path.exists():
            load_dotenv(dotenv_path=env_path)

        # API Configuration
        self.GOOGLE_API_KEY = os.getenv('GOOGLE_API_KEY')

        # Model Configuration
        self.GEMINI_MODEL = os.getenv('GEMINI_MODEL', DEFAULT_GEMINI_MODEL)
        self.GEMINI_TEMPERATURE = float(os.getenv('GEMINI_TEMPERATURE', '0.9'))
        self.GEMINI_TOP_P = float(os.getenv('GEMINI_TOP_P', '1.0'))
        self.GEMINI_TOP_K = int(os.getenv('GEMINI_TOP_K', '1'))
        self.GEMINI_MAX_OUTPUT_TOKENS = int(os.getenv('GEMINI_MAX_OUTPUT_TOKENS', '2048'))

        # Session store (0 disables the bound / expiry)
        self.SESSION_MAX_ENTRIES = int(os.getenv('SESSION_MAX_ENTRIES', '0'))
        self.SESSION_TTL_SECONDS = int(os.getenv('SESSION_TTL_SECONDS', '0'))

    def validate(self) -> bool:
        """
        Validate that all required configuration is present.

        Returns:
            bool: True if configuration is valid, False otherwise
        """
        if not self.GOOGLE_API_KEY:
            return False
        if self.SESSION_MAX_ENTRIES < 0 or self.SESSION_TTL_SECONDS < 0:
            return False
        return True

    def generation_config(self) -> dict:
        """Sampling parameters sent with every Gemini request."""
        return {
            'temperature': self.GEMINI_TEMPERATURE,
            'top_p': self.GEMINI_TOP_P,
            'top_k': self.GEMINI_TOP_K,
            'max_output_tokens': self.GEMINI_MAX_OUTPUT_TOKENS,
        }

    def get_model_info(self) -> str:
        """
        Get information about the currently selected model.

        Returns:
            str: Formatted string with model information
        """
        return f"Google Gemini ({self.GEMINI_MODEL}) with Google Search grounding"


@lru_cache(maxsize=1)
def get_config() -> Config:
    return Config()
