from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from zvcapi.schemas.common import ApiSchema
from zvcapi.utils.player_id import normalize_player_id

# 관리자 1회 조정 한도
MAX_ADJUST_AMOUNT = 1_000_000_000


class BalanceResponse(ApiSchema):
    """ZVC 잔액 응답"""

    player_id: str
    balance: int = Field(..., description="현재 ZVC 잔액")


class LedgerEntry(ApiSchema):
    """원장 항목"""

    id: int
    delta: int = Field(..., description="잔액 변화량 (양수: 지급, 음수: 차감)")
    balance_after: int
    reason: str
    ref_id: str
    created_at: Optional[datetime] = None


class LedgerResponse(ApiSchema):
    """원장 조회 응답 (최신순)"""

    balance: int
    entries: List[LedgerEntry]
    total_count: int
    has_next: bool


class BalanceAdjustment(ApiSchema):
    """원장 조정 결과

    idempotent=True 이면 같은 ref_id로 이미 처리된 항목을 그대로 돌려준 것입니다.
    """

    transaction_id: int
    delta: int
    balance_after: int
    idempotent: bool = False


class IntegrityCheckResponse(ApiSchema):
    """잔액 정합성 검증 응답"""

    status: str = Field(..., description="OK 또는 MISMATCH")
    player_id: str
    calculated_balance: int = Field(..., description="원장 delta 합계")
    recorded_balance: int = Field(..., description="계정에 저장된 잔액")
    entry_count: int
    error: Optional[str] = None
    entry_id: Optional[int] = Field(None, description="체인이 끊긴 첫 원장 항목")


class GameStats(ApiSchema):
    game: str
    plays: int
    wins: int
    total_wagered: int
    total_paid_out: int


class GameStatsResponse(ApiSchema):
    player_id: str
    games: List[GameStats]


class AdminAdjustRequest(ApiSchema):
    """관리자 잔액 조정 요청"""

    player_id: str = Field(..., min_length=1, max_length=64)
    amount: int = Field(
        ...,
        ge=-MAX_ADJUST_AMOUNT,
        le=MAX_ADJUST_AMOUNT,
        description="조정량 (양수: 지급, 음수: 차감)",
    )
    reason: str = Field(..., min_length=1, max_length=255)

    @field_validator("player_id")
    @classmethod
    def normalize(cls, value: str) -> str:
        return normalize_player_id(value)

    @field_validator("amount")
    @classmethod
    def non_zero(cls, value: int) -> int:
        if value == 0:
            raise ValueError("amount must not be zero")
        return value


class AdminAdjustResponse(ApiSchema):
    player_id: str
    delta: int
    balance_after: int
    transaction_id: int
