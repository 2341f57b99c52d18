"""Request/response schemas for the single-shot games (slot, roulette, lucky wheel)."""

from typing import Dict, List, Optional

from pydantic import Field, model_validator

from zvcapi.games.roulette import RouletteBetType
from zvcapi.games.slot_machine import SlotTier
from zvcapi.schemas.common import ApiSchema, WagerResult


class BetRequest(ApiSchema):
    bet: int = Field(..., gt=0, description="배팅 금액 (ZVC)")


# Slot machine
class SlotSpinRequest(BetRequest):
    bet: int = Field(10, gt=0, description="배팅 금액 (기본 10 ZVC)")


class SlotSpinResponse(WagerResult):
    result: List[str] = Field(..., description="세 릴의 심볼")
    tier: SlotTier
    multiplier: int


class SlotPayoutTier(ApiSchema):
    tier: SlotTier
    multiplier: int


class SlotInfoResponse(ApiSchema):
    min_bet: int
    max_bet: int
    symbols: List[str]
    jackpot_symbol: str
    payout_table: List[SlotPayoutTier]


# Roulette
class RouletteBetRequest(BetRequest):
    type: RouletteBetType
    value: Optional[int] = Field(None, ge=0, le=36, description="number 배팅 시 0-36")

    @model_validator(mode="after")
    def value_required_for_number(self):
        if self.type == RouletteBetType.NUMBER and self.value is None:
            raise ValueError("value is required for number bets")
        return self


class RouletteSpinResponse(WagerResult):
    spin_result: int
    color: str
    bet_type: RouletteBetType
    multiplier: int


class RouletteBetTypeInfo(ApiSchema):
    description: str
    multiplier: int
    win_probability: float


class RouletteInfoResponse(ApiSchema):
    min_bet: int
    max_bet: int
    zero_probability: float
    bet_types: Dict[str, RouletteBetTypeInfo]
    numbers: List[int]
    red_numbers: List[int]


# Lucky wheel
class LuckyWheelSpinResponse(WagerResult):
    multiplier: float


class LuckyWheelSegment(ApiSchema):
    multiplier: float
    weight: int


class LuckyWheelInfoResponse(ApiSchema):
    min_bet: int
    max_bet: int
    payout_table: List[LuckyWheelSegment]
