from typing import List, Optional

from pydantic import Field, field_validator

from zvcapi.schemas.common import ApiSchema
from zvcapi.utils.player_id import normalize_player_id


class ReducedLuckEntry(ApiSchema):
    player_id: str
    added_at: int = Field(..., description="등록 시각 (unix seconds)")
    reason: Optional[str] = None


class ReducedLuckListResponse(ApiSchema):
    reduced_luck_users: List[ReducedLuckEntry]


class SetReducedLuckRequest(ApiSchema):
    player_id: str = Field(..., min_length=1, max_length=64)
    has_reduced_luck: bool
    reason: Optional[str] = Field(None, max_length=255)

    @field_validator("player_id")
    @classmethod
    def normalize(cls, value: str) -> str:
        return normalize_player_id(value)


class SetReducedLuckResponse(ReducedLuckListResponse):
    success: bool = True
    message: str
