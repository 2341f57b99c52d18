"""Slot machine rules: three independent symbols, first matching tier wins."""

from enum import Enum
from typing import List, Optional, Sequence, Tuple

from zvcapi.games.outcome import WagerOutcome
from zvcapi.utils.randomness import RandomSource

SLOT_SYMBOLS: Tuple[str, ...] = (
    "🍎", "🍏", "🍐", "🍊", "🍋", "🍌", "🍉", "🍇", "🍓", "🍈", "🍒", "🍑",
)
JACKPOT_SYMBOL = "🍒"
REEL_COUNT = 3


class SlotTier(str, Enum):
    JACKPOT = "JACKPOT"
    TRIPLE = "TRIPLE"
    PAIR = "PAIR"
    LOSS = "LOSS"


# 우선순위 순서 (위에서부터 평가, 첫 일치만 적용)
PAYOUT_TABLE: Tuple[Tuple[SlotTier, int], ...] = (
    (SlotTier.JACKPOT, 50),
    (SlotTier.TRIPLE, 10),
    (SlotTier.PAIR, 2),
    (SlotTier.LOSS, 0),
)


def _matches(tier: SlotTier, reels: Sequence[str]) -> bool:
    if tier == SlotTier.JACKPOT:
        return all(symbol == JACKPOT_SYMBOL for symbol in reels)
    if tier == SlotTier.TRIPLE:
        return len(set(reels)) == 1
    if tier == SlotTier.PAIR:
        return len(set(reels)) < len(reels)
    return True


def evaluate_reels(reels: Sequence[str]) -> Tuple[SlotTier, int]:
    for tier, multiplier in PAYOUT_TABLE:
        if _matches(tier, reels):
            return tier, multiplier
    return SlotTier.LOSS, 0


def spin_reels(rng: RandomSource) -> List[str]:
    return [SLOT_SYMBOLS[rng.uniform_int(len(SLOT_SYMBOLS))] for _ in range(REEL_COUNT)]


def spin_losing_reels(rng: RandomSource) -> List[str]:
    """모든 릴이 서로 다른 심볼 (항상 LOSS)"""
    remaining = list(SLOT_SYMBOLS)
    reels = []
    for _ in range(REEL_COUNT):
        reels.append(remaining.pop(rng.uniform_int(len(remaining))))
    return reels


def compute_outcome(
    bet: int,
    rng: RandomSource,
    reduced_luck: bool = False,
    reels: Optional[Sequence[str]] = None,
) -> WagerOutcome:
    if reels is None:
        reels = spin_losing_reels(rng) if reduced_luck else spin_reels(rng)
    tier, multiplier = evaluate_reels(reels)
    payout = bet * multiplier
    return WagerOutcome(
        won=tier != SlotTier.LOSS,
        payout=payout,
        details={"result": list(reels), "tier": tier, "multiplier": multiplier},
    )


def payout_table() -> List[dict]:
    return [{"tier": tier.value, "multiplier": multiplier} for tier, multiplier in PAYOUT_TABLE]
