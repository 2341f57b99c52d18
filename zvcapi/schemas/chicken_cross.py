from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from zvcapi.models.chicken_cross import ChickenCrossState
from zvcapi.schemas.common import ApiSchema
from zvcapi.utils.randomness import SEED_UPPER_BOUND


class ChickenCrossIntent(str, Enum):
    MOVE = "MOVE"
    CASHOUT = "CASHOUT"


class ChickenCrossRequest(ApiSchema):
    """
    - MOVE + seed 없음: 새 게임 시작 (bet 필수, 즉시 escrow)
    - MOVE + seed: 한 칸 전진
    - CASHOUT + seed: currentPayout 지급 후 종료
    """

    intent: ChickenCrossIntent
    seed: Optional[int] = Field(None, gt=0, lt=SEED_UPPER_BOUND)
    bet: Optional[int] = Field(None, gt=0)


class ChickenCrossMoveResponse(ApiSchema):
    seed: int
    state: ChickenCrossState
    current_payout: int
    step: int


class ChickenCrossGameResponse(ApiSchema):
    seed: int
    initial_wager: int
    current_payout: int
    step: int
    state: ChickenCrossState
    last_updated_at: datetime
    next_multiplier: Optional[float] = Field(None, description="ACTIVE일 때 다음 칸 배수")
    next_survival_chance: Optional[float] = None


class ChickenCrossActiveResponse(ApiSchema):
    active_game_seed: Optional[int] = None


class ChickenCrossInfoResponse(ApiSchema):
    min_bet: int
    max_bet: int
