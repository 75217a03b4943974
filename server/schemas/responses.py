"""Pydantic response models (DTOs) for FastAPI endpoints."""

from pydantic import BaseModel, Field

from models.search_result import SearchResult


class SourceDTO(BaseModel):
    title: str
    url: str
    snippet: str = ""


class SearchResponseDTO(BaseModel):
    session_id: str | None = Field(None, serialization_alias="sessionId")
    summary: str
    sources: list[SourceDTO] = Field(default_factory=list)
    outcome: str
    restart_reason: str | None = Field(None, serialization_alias="restartReason")

    @classmethod
    def from_search_result(cls, result: SearchResult, *, include_session_id: bool = True):
        """Convert SearchResult to DTO. Continued follow-ups omit the session id."""
        data = result.to_dict()
        return cls(
            session_id=data["session_id"] if include_session_id or result.is_new_session else None,
            summary=data["formatted_answer"],
            sources=[SourceDTO(**source) for source in data["sources"]],
            outcome=data["outcome"],
            restart_reason=data["restart_reason"],
        )


class ErrorResponseDTO(BaseModel):
    message: str


class HealthResponseDTO(BaseModel):
    status: str
    timestamp: str
    version: str = "1.0.0"
    active_sessions: int = 0
