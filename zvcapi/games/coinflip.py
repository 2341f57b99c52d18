"""Coinflip duel: one fair draw between exactly two participants."""

from dataclasses import dataclass

from zvcapi.utils.randomness import RandomSource

HEADS = "heads"
TAILS = "tails"


@dataclass(frozen=True)
class DuelResult:
    winner_id: str
    loser_id: str
    side: str
    pot: int
    fee: int
    payout: int


def compute_fee(stake: int, fee_percent: float) -> int:
    """수수료 = floor(판돈 합계 * fee_percent / 100)"""
    if fee_percent <= 0:
        return 0
    return int(2 * stake * fee_percent // 100)


def flip(
    initiator_id: str,
    opponent_id: str,
    stake: int,
    rng: RandomSource,
    fee_percent: float = 0,
    initiator_reduced_luck: bool = False,
    opponent_reduced_luck: bool = False,
) -> DuelResult:
    # 한쪽만 reduced luck이면 그 쪽이 패배, 둘 다면 일반 추첨
    if initiator_reduced_luck and not opponent_reduced_luck:
        side = TAILS
    elif opponent_reduced_luck and not initiator_reduced_luck:
        side = HEADS
    else:
        side = HEADS if rng.uniform_int(2) == 0 else TAILS

    if side == HEADS:
        winner_id, loser_id = initiator_id, opponent_id
    else:
        winner_id, loser_id = opponent_id, initiator_id

    pot = 2 * stake
    fee = compute_fee(stake, fee_percent)
    return DuelResult(
        winner_id=winner_id,
        loser_id=loser_id,
        side=side,
        pot=pot,
        fee=fee,
        payout=pot - fee,
    )
