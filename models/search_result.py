from dataclasses import dataclass, field
from typing import Literal, Optional

from tools.web.contracts import Citation

SearchOutcome = Literal["started", "continued", "restarted"]
RestartReason = Optional[Literal["session_miss"]]


@dataclass(frozen=True)
class SearchResult:
    """The formatted answer to one turn, with its sources."""

    session_id: str
    formatted_answer: str
    sources: list[Citation] = field(default_factory=list)

    # started: new session, continued: existing session, restarted: follow-up
    # on an unknown session that fell back to a new one
    outcome: SearchOutcome = "started"
    restart_reason: RestartReason = None

    def __post_init__(self):
        if self.outcome not in {"started", "continued", "restarted"}:
            raise ValueError(f"Unknown search outcome: {self.outcome}")
        if self.outcome == "restarted" and self.restart_reason is None:
            object.__setattr__(self, "restart_reason", "session_miss")
        if self.outcome != "restarted":
            object.__setattr__(self, "restart_reason", None)

    @property
    def is_new_session(self) -> bool:
        return self.outcome != "continued"

    def to_dict(self) -> dict:
        return {
            "session_id": self.session_id,
            "formatted_answer": self.formatted_answer,
            "sources": [source.to_dict() for source in self.sources],
            "outcome": self.outcome,
            "restart_reason": self.restart_reason,
        }
