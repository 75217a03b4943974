"""Search and follow-up endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from orchestrator.core import SearchOrchestrator
from server.dependencies import get_orchestrator
from server.schemas.requests import FollowUpRequest
from server.schemas.responses import ErrorResponseDTO, SearchResponseDTO
from utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Search"])

_ERROR_RESPONSES = {
    400: {"model": ErrorResponseDTO},
    500: {"model": ErrorResponseDTO},
}


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "unknown")


async def _new_search(q: str | None, request: Request, orchestrator: SearchOrchestrator):
    if not q:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Query parameter 'q' is required",
        )

    logger.info(
        "Search request",
        extra={"extra_fields": {"request_id": _request_id(request), "query_len": len(q)}},
    )
    result = await orchestrator.start_search(q)
    return SearchResponseDTO.from_search_result(result)


async def _follow_up(body: FollowUpRequest, request: Request, orchestrator: SearchOrchestrator):
    logger.info(
        "Follow-up request",
        extra={
            "extra_fields": {
                "request_id": _request_id(request),
                "session_id": body.session_id,
                "query_len": len(body.query),
            }
        },
    )
    result = await orchestrator.continue_search(body.session_id, body.query)
    return SearchResponseDTO.from_search_result(result, include_session_id=False)


@router.get(
    "/search",
    response_model=SearchResponseDTO,
    response_model_exclude_none=True,
    responses=_ERROR_RESPONSES,
)
async def search(
    request: Request,
    q: str | None = Query(None),
    orchestrator: SearchOrchestrator = Depends(get_orchestrator),
):
    """Start a new grounded search conversation."""
    return await _new_search(q, request, orchestrator)


@router.post(
    "/follow-up",
    response_model=SearchResponseDTO,
    response_model_exclude_none=True,
    responses=_ERROR_RESPONSES,
)
async def follow_up(
    body: FollowUpRequest,
    request: Request,
    orchestrator: SearchOrchestrator = Depends(get_orchestrator),
):
    """Continue a conversation; unknown sessions restart with a new sessionId."""
    return await _follow_up(body, request, orchestrator)


@router.get(
    "/chat",
    response_model=SearchResponseDTO,
    response_model_exclude_none=True,
    responses=_ERROR_RESPONSES,
)
async def chat_search(
    request: Request,
    q: str | None = Query(None),
    orchestrator: SearchOrchestrator = Depends(get_orchestrator),
):
    """Combined endpoint: GET starts a search."""
    return await _new_search(q, request, orchestrator)


@router.post(
    "/chat",
    response_model=SearchResponseDTO,
    response_model_exclude_none=True,
    responses=_ERROR_RESPONSES,
)
async def chat_follow_up(
    body: FollowUpRequest,
    request: Request,
    orchestrator: SearchOrchestrator = Depends(get_orchestrator),
):
    """Combined endpoint: POST asks a follow-up."""
    return await _follow_up(body, request, orchestrator)
