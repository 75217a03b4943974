"""FastAPI dependencies for orchestrator and session store access."""

from fastapi import HTTPException, status

from context.session_store import SessionStore, get_session_store
from utils.logger import get_logger

logger = get_logger(__name__)


def get_store() -> SessionStore:
    """Dependency to get the process-wide session store."""
    return get_session_store()


def get_orchestrator():
    """Dependency to get orchestrator instance (singleton pattern)."""
    from api.google_gemini_client import create_search_client_from_env
    from orchestrator.core import SearchOrchestrator

    if not hasattr(get_orchestrator, "_instance"):
        try:
            client = create_search_client_from_env()
        except ValueError as e:
            logger.error(f"Search client not configured: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Search provider is not configured: set GOOGLE_API_KEY",
            ) from e
        get_orchestrator._instance = SearchOrchestrator(client=client, store=get_session_store())
        logger.info("Search orchestrator initialized")
    return get_orchestrator._instance
