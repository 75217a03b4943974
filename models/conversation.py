"""Conversation state owned by the session store."""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timezone

from tools.web.contracts import Citation


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ConversationTurn:
    """One query/answer exchange. Immutable once recorded."""

    query: str
    raw_answer: str
    citations: tuple[Citation, ...] = ()


@dataclass(eq=False)
class Session:
    """
    Identifier-keyed conversational context.

    The transcript is the only conversation state; the provider adapter replays
    it on every follow-up. ``lock`` serializes turns on this session so that
    concurrent follow-ups are appended in arrival order.
    """

    id: str
    transcript: list[ConversationTurn] = field(default_factory=list)
    created_at: datetime = field(default_factory=_utcnow)
    last_accessed: datetime = field(default_factory=_utcnow)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False)

    def append(self, turn: ConversationTurn) -> None:
        self.transcript.append(turn)
        self.touch()

    def touch(self) -> None:
        self.last_accessed = _utcnow()

    @property
    def turn_count(self) -> int:
        return len(self.transcript)
