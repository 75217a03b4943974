"""Pydantic request models for FastAPI endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class FollowUpRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., min_length=1, alias="sessionId")
    query: str = Field(..., min_length=1)
