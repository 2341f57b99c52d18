"""European-style roulette with an explicit, configurable bias towards zero."""

from enum import Enum
from typing import Dict, List, Optional

from zvcapi.games.outcome import WagerOutcome
from zvcapi.utils.randomness import RandomSource

ROULETTE_NUMBERS: List[int] = list(range(37))
RED_NUMBERS = frozenset({1, 3, 5, 7, 9, 12, 14, 16, 18, 19, 21, 23, 25, 27, 30, 32, 34, 36})
DEFAULT_ZERO_PROBABILITY = 0.10


class RouletteBetType(str, Enum):
    RED = "red"
    BLACK = "black"
    ODD = "odd"
    EVEN = "even"
    LOW = "1to18"
    HIGH = "19to36"
    NUMBER = "number"


BET_MULTIPLIERS: Dict[RouletteBetType, int] = {
    RouletteBetType.RED: 2,
    RouletteBetType.BLACK: 2,
    RouletteBetType.ODD: 2,
    RouletteBetType.EVEN: 2,
    RouletteBetType.LOW: 2,
    RouletteBetType.HIGH: 2,
    RouletteBetType.NUMBER: 36,
}

BET_DESCRIPTIONS: Dict[RouletteBetType, str] = {
    RouletteBetType.RED: "Red (2:1)",
    RouletteBetType.BLACK: "Black (2:1)",
    RouletteBetType.ODD: "Odd (2:1)",
    RouletteBetType.EVEN: "Even (2:1)",
    RouletteBetType.LOW: "1-18 (2:1)",
    RouletteBetType.HIGH: "19-36 (2:1)",
    RouletteBetType.NUMBER: "Single number (36:1)",
}


def color_of(number: int) -> str:
    if number == 0:
        return "green"
    return "red" if number in RED_NUMBERS else "black"


def is_winning(bet_type: RouletteBetType, value: Optional[int], spin_result: int) -> bool:
    if bet_type == RouletteBetType.NUMBER:
        return value is not None and spin_result == value
    # 0은 모든 outside bet에서 패배
    if spin_result == 0:
        return False
    if bet_type == RouletteBetType.RED:
        return spin_result in RED_NUMBERS
    if bet_type == RouletteBetType.BLACK:
        return spin_result not in RED_NUMBERS
    if bet_type == RouletteBetType.ODD:
        return spin_result % 2 == 1
    if bet_type == RouletteBetType.EVEN:
        return spin_result % 2 == 0
    if bet_type == RouletteBetType.LOW:
        return 1 <= spin_result <= 18
    if bet_type == RouletteBetType.HIGH:
        return 19 <= spin_result <= 36
    return False


def spin_wheel(rng: RandomSource, zero_probability: float = DEFAULT_ZERO_PROBABILITY) -> int:
    """0에 zero_probability 만큼의 질량을 먼저 배정하고, 나머지는 1-36 균등"""
    if rng.uniform() < zero_probability:
        return 0
    return 1 + rng.uniform_int(36)


def spin_losing(rng: RandomSource, bet_type: RouletteBetType, value: Optional[int]) -> int:
    losing = [n for n in ROULETTE_NUMBERS if not is_winning(bet_type, value, n)]
    return losing[rng.uniform_int(len(losing))]


def compute_outcome(
    bet: int,
    bet_type: RouletteBetType,
    value: Optional[int],
    rng: RandomSource,
    zero_probability: float = DEFAULT_ZERO_PROBABILITY,
    reduced_luck: bool = False,
    spin_result: Optional[int] = None,
) -> WagerOutcome:
    if spin_result is None:
        if reduced_luck:
            spin_result = spin_losing(rng, bet_type, value)
        else:
            spin_result = spin_wheel(rng, zero_probability)

    won = is_winning(bet_type, value, spin_result)
    multiplier = BET_MULTIPLIERS[bet_type]
    payout = bet * multiplier if won else 0
    return WagerOutcome(
        won=won,
        payout=payout,
        details={
            "spin_result": spin_result,
            "color": color_of(spin_result),
            "multiplier": multiplier,
        },
    )


def bet_type_table(
    zero_probability: float = DEFAULT_ZERO_PROBABILITY,
) -> Dict[str, Dict[str, object]]:
    return {
        bet_type.value: {
            "description": BET_DESCRIPTIONS[bet_type],
            "multiplier": BET_MULTIPLIERS[bet_type],
            # number 배팅은 1-36 중 임의의 번호 기준
            "win_probability": round(win_probability(bet_type, 1, zero_probability), 4),
        }
        for bet_type in RouletteBetType
    }


def win_probability(
    bet_type: RouletteBetType,
    value: Optional[int] = None,
    zero_probability: float = DEFAULT_ZERO_PROBABILITY,
) -> float:
    """편향(zero bias)을 반영한 이론적 당첨 확률"""
    non_zero_mass = (1.0 - zero_probability) / 36
    probability = 0.0
    for number in ROULETTE_NUMBERS:
        if is_winning(bet_type, value, number):
            probability += zero_probability if number == 0 else non_zero_mass
    return probability

