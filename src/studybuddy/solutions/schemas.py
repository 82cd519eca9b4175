"""Request/response schemas for solution endpoints."""

from __future__ import annotations

from uuid import UUID

from studybuddy.schemas import ApiModel, UserIdRequest


class PublicSolutionResponse(ApiModel):
    """Listing view. ``content`` is deliberately absent."""

    id: str
    title: str
    description: str
    difficulty: str
    token_cost: int
    category: str
    similarity: int


class SolutionDetailResponse(PublicSolutionResponse):
    """Owner view with the gated content."""

    content: str


class SolutionPurchaseRequest(UserIdRequest):
    solution_id: UUID
    problem_id: UUID | None = None
