"""Data contracts for grounded web search results."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Citation:
    """A de-duplicated source backing a grounded answer."""

    title: str
    url: str
    snippet: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"title": self.title, "url": self.url, "snippet": self.snippet}
