from datetime import datetime
from typing import List, Optional

from pydantic import Field

from zvcapi.models.coinflip import CoinflipState
from zvcapi.schemas.common import ApiSchema


class CoinflipCreateRequest(ApiSchema):
    bet: int = Field(..., gt=0)


class CoinflipChallengeResponse(ApiSchema):
    id: int
    initiator_id: str
    stake: int
    state: CoinflipState
    opponent_id: Optional[str] = None
    winner_id: Optional[str] = None
    fee: int = 0
    payout: int = 0
    created_at: Optional[datetime] = None
    settled_at: Optional[datetime] = None


class CoinflipOpenListResponse(ApiSchema):
    challenges: List[CoinflipChallengeResponse]


class CoinflipResultResponse(ApiSchema):
    """수락 즉시 정산된 결과 (호출자 = 상대방 기준)"""

    challenge: CoinflipChallengeResponse
    side: str
    won: bool
    payout: int
    new_balance: int


class CoinflipCancelResponse(ApiSchema):
    challenge: CoinflipChallengeResponse
    refunded: int
    new_balance: int


class CoinflipInfoResponse(ApiSchema):
    min_bet: int
    max_bet: int
    fee_percent: float
