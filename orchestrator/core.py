"""
SearchOrchestrator - conversation flow for grounded search.

Key guarantees:
- One provider call per turn, never retried
- Turns on one session are appended in arrival order (per-session lock)
- A follow-up on an unknown session starts a new one and says so in the result
- A new session is registered only after its first turn succeeded
- Provider failures surface as SearchProviderError; nothing else raises
"""

import time

from api.base_client import BaseSearchClient
from context.session_store import SessionStore
from models.conversation import ConversationTurn, Session
from models.errors import SearchProviderError
from models.search_result import SearchOutcome, SearchResult
from tools.web.citations import extract_citations
from utils.logger import get_logger
from utils.markdown_formatter import format_response

logger = get_logger(__name__)


class SearchOrchestrator:
    def __init__(self, client: BaseSearchClient, store: SessionStore):
        self.client = client
        self.store = store

    async def _run_turn(self, session: Session, query: str, outcome: SearchOutcome) -> SearchResult:
        async with session.lock:
            start = time.perf_counter()
            try:
                reply = await self.client.generate_turn(tuple(session.transcript), query)
            except SearchProviderError:
                logger.exception(
                    "Search provider failed",
                    extra={"extra_fields": {"session_id": session.id, "outcome": outcome}},
                )
                raise
            except Exception as e:
                logger.exception(
                    "Search provider raised unexpectedly",
                    extra={"extra_fields": {"session_id": session.id, "outcome": outcome}},
                )
                raise SearchProviderError(str(e) or type(e).__name__, cause=e) from e

            formatted = await format_response(reply.text)
            citations = extract_citations(reply.grounding_metadata)
            session.append(ConversationTurn(query=query, raw_answer=reply.text, citations=tuple(citations)))
            turn_count = session.turn_count

        logger.info(
            "Search turn completed",
            extra={
                "extra_fields": {
                    "session_id": session.id,
                    "outcome": outcome,
                    "turn": turn_count,
                    "sources": len(citations),
                    "latency_ms": int((time.perf_counter() - start) * 1000),
                }
            },
        )
        return SearchResult(
            session_id=session.id,
            formatted_answer=formatted,
            sources=citations,
            outcome=outcome,
        )

    async def start_search(self, query: str) -> SearchResult:
        """Start a new grounded conversation with ``query`` as its first turn."""
        return await self._start_session(query, "started")

    async def _start_session(self, query: str, outcome: SearchOutcome) -> SearchResult:
        # registered only once the first turn succeeded
        session = self.store.new_session()
        logger.info("Starting new search session", extra={"extra_fields": {"session_id": session.id}})
        result = await self._run_turn(session, query, outcome)
        self.store.add(session)
        return result

    async def continue_search(self, session_id: str, query: str) -> SearchResult:
        """
        Ask ``query`` as the next turn of an existing conversation.

        An unknown or expired ``session_id`` is not an error: a new session is
        started and the result is tagged ``restarted`` with the new id.
        """
        session = self.store.get(session_id)
        if session is None:
            logger.warning(
                "Session not found, starting new search",
                extra={"extra_fields": {"session_id": session_id, "reason": "session_miss"}},
            )
            return await self._start_session(query, "restarted")

        return await self._run_turn(session, query, "continued")
