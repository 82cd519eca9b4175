"""Request/response schemas for problem endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from studybuddy.schemas import ApiModel, UserIdRequest


class ProblemCreateRequest(UserIdRequest):
    ocr_text: str = Field(..., min_length=1, max_length=10_000)
    image_url: str | None = Field(None, max_length=2048)


class ProblemResponse(ApiModel):
    id: str
    user_id: str
    image_url: str | None = None
    ocr_text: str
    created_at: datetime | None = None
