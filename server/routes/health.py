"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from context.session_store import SessionStore
from server.dependencies import get_store
from server.schemas.responses import HealthResponseDTO

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponseDTO)
async def health_check(store: SessionStore = Depends(get_store)):
    """Health check endpoint."""
    return HealthResponseDTO(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        version="1.0.0",
        active_sessions=len(store),
    )
