"""Lucky wheel: weighted multiplier table sampled with a single uniform draw."""

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from zvcapi.games.outcome import WagerOutcome
from zvcapi.utils.randomness import RandomSource


@dataclass(frozen=True)
class WheelEntry:
    multiplier: float
    weight: int


LUCKYWHEEL_TABLE: Sequence[WheelEntry] = (
    WheelEntry(multiplier=0, weight=1),
    WheelEntry(multiplier=0.3, weight=6),
    WheelEntry(multiplier=0.7, weight=5),
    WheelEntry(multiplier=1.2, weight=4),
    WheelEntry(multiplier=2, weight=2),
    WheelEntry(multiplier=4, weight=1),
)


def total_weight(table: Sequence[WheelEntry] = LUCKYWHEEL_TABLE) -> int:
    return sum(entry.weight for entry in table)


def max_multiplier(table: Sequence[WheelEntry] = LUCKYWHEEL_TABLE) -> float:
    return max(entry.multiplier for entry in table)


def select_entry(draw: float, table: Sequence[WheelEntry] = LUCKYWHEEL_TABLE) -> WheelEntry:
    """누적 가중치 선형 탐색

    draw([0,1))에 전체 가중치를 곱한 뒤 가중치를 순서대로 빼서 처음으로 0 이하가
    되는 항목을 선택합니다. (이진 탐색이 아닌 선형 스캔)
    """
    remainder = draw * total_weight(table)
    for entry in table:
        remainder -= entry.weight
        if remainder <= 0:
            return entry
    return table[0]


def losing_entry(table: Sequence[WheelEntry] = LUCKYWHEEL_TABLE) -> WheelEntry:
    return min(table, key=lambda entry: entry.multiplier)


def compute_outcome(
    bet: int,
    rng: RandomSource,
    reduced_luck: bool = False,
    table: Sequence[WheelEntry] = LUCKYWHEEL_TABLE,
    draw: Optional[float] = None,
) -> WagerOutcome:
    if reduced_luck:
        entry = losing_entry(table)
    else:
        entry = select_entry(rng.uniform() if draw is None else draw, table)

    payout = math.floor(bet * entry.multiplier)
    return WagerOutcome(
        won=payout > bet,
        payout=payout,
        details={"multiplier": entry.multiplier},
    )


def payout_table(table: Sequence[WheelEntry] = LUCKYWHEEL_TABLE) -> List[dict]:
    return [{"multiplier": entry.multiplier, "weight": entry.weight} for entry in table]
