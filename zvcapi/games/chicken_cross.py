"""Chicken Cross: push-your-luck game bound to one server seed per session.

The odds curve is a pure function of (seed, step) so it can be published and
audited. Whether a single move survives is decided by the secure random source.
"""

import math
from dataclasses import dataclass

from zvcapi.utils.randomness import RandomSource, seeded_unit

BASE_MULTIPLIER = 1.08
VARIANCE_SPREAD = 0.03
SAFETY_FACTOR = 0.95


@dataclass(frozen=True)
class MoveResult:
    survived: bool
    step: int
    multiplier: float
    survival_chance: float
    current_payout: int


def multiplier_for_step(seed: int, step: int) -> float:
    variance = 1 + seeded_unit(seed, step) * VARIANCE_SPREAD
    return round(BASE_MULTIPLIER**step * variance, 2)


def survival_chance(multiplier: float) -> float:
    if multiplier <= 0:
        return 0.0
    return min(1.0, SAFETY_FACTOR / multiplier)


def advance(
    stake: int,
    seed: int,
    current_step: int,
    rng: RandomSource,
    reduced_luck: bool = False,
) -> MoveResult:
    """한 칸 전진

    다음 step의 배수로 생존 확률을 정하고, 보안 난수 한 번으로 생존 여부를 결정합니다.
    reduced_luck 플레이어는 난수를 뽑지 않고 항상 탈락합니다.
    """
    next_step = current_step + 1
    multiplier = multiplier_for_step(seed, next_step)
    chance = survival_chance(multiplier)

    survived = False if reduced_luck else rng.uniform() < chance

    if not survived:
        return MoveResult(
            survived=False,
            step=next_step,
            multiplier=multiplier,
            survival_chance=chance,
            current_payout=0,
        )

    return MoveResult(
        survived=True,
        step=next_step,
        multiplier=multiplier,
        survival_chance=chance,
        current_payout=math.floor(stake * multiplier),
    )
