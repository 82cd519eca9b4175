"""Shared request/response base models.

The client speaks camelCase JSON; models accept either spelling on input
and emit camelCase. Request models reject unknown fields so a client can
never smuggle in economic values such as ``tokensEarned`` or ``tokenCost``.
"""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for response models."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiRequest(BaseModel):
    """Base for request bodies."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class UserIdRequest(ApiRequest):
    """Body carrying only the anonymous user id."""

    user_id: UUID
