"""Failures that reach the caller of the search core."""


class SearchProviderError(Exception):
    """
    The grounded search provider failed or returned an unusable response.

    Not retried. ``message`` is the underlying provider message and is what the
    HTTP layer shows to the user.
    """

    def __init__(self, message: str, *, provider: str = "gemini", cause: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.provider = provider
        self.cause = cause

    def __str__(self) -> str:
        return self.message
