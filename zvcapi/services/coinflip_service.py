import logging

from zvcapi.core.exceptions import (
    AuthorizationError,
    BaseAPIException,
    ChallengeClosedError,
    NotFoundError,
    SelfChallengeError,
)
from zvcapi.games import coinflip
from zvcapi.models.coinflip import CoinflipChallenge
from zvcapi.repositories.coinflip_repository import CoinflipRepository
from zvcapi.schemas.coinflip import (
    CoinflipCancelResponse,
    CoinflipChallengeResponse,
    CoinflipInfoResponse,
    CoinflipOpenListResponse,
    CoinflipResultResponse,
)
from zvcapi.services.game_service import GameService

logger = logging.getLogger(__name__)


class CoinflipService(GameService):
    """두 플레이어 간 코인플립

    개설: 개설자 stake escrow -> 수락: OPEN->ACCEPTED 점유 + 상대 stake escrow
    -> 추첨 -> 승자에게 2*stake - fee 지급 -> SETTLED
    """

    game = "coinflip"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.repo = CoinflipRepository(self.db)

    def get_info(self) -> CoinflipInfoResponse:
        return CoinflipInfoResponse(
            min_bet=self.settings.COINFLIP_MIN_BET,
            max_bet=self.settings.COINFLIP_MAX_BET,
            fee_percent=self.settings.COINFLIP_FEE_PERCENT,
        )

    def list_open(self, limit: int = 50) -> CoinflipOpenListResponse:
        return CoinflipOpenListResponse(challenges=self.repo.list_open(limit=limit))

    def create_challenge(self, player_id: str, bet: int) -> CoinflipChallengeResponse:
        bet = self.validate_bet(bet, self.settings.COINFLIP_MIN_BET, self.settings.COINFLIP_MAX_BET)
        self.ledger_service.ensure_player(player_id)

        challenge = self.repo.create(player_id, bet)
        try:
            self.ledger_service.debit(
                player_id,
                bet,
                f"{self.game}:stake",
                f"{self.game}_{challenge.id}_stake_initiator",
                commit=False,
            )
        except BaseAPIException:
            self.db.rollback()
            raise
        self.db.commit()

        logger.info(f"Coinflip challenge {challenge.id} opened by {player_id} for {bet}")
        return self.repo.to_response(challenge)

    async def accept_challenge(self, player_id: str, challenge_id: int) -> CoinflipResultResponse:
        challenge = self._get_challenge(challenge_id)
        if challenge.initiator_id == player_id:
            raise SelfChallengeError()
        self.ledger_service.ensure_player(player_id)

        if not self.repo.claim(challenge_id, player_id):
            self.db.rollback()
            raise ChallengeClosedError()
        try:
            self.ledger_service.debit(
                player_id,
                challenge.stake,
                f"{self.game}:stake",
                f"{self.game}_{challenge_id}_stake_opponent",
                commit=False,
            )
        except BaseAPIException:
            # 점유도 함께 취소되어 챌린지는 다시 OPEN
            self.db.rollback()
            raise
        self.db.commit()

        initiator_flagged = await self.reduced_luck_service.has_reduced_luck(challenge.initiator_id)
        opponent_flagged = await self.reduced_luck_service.has_reduced_luck(player_id)
        result = coinflip.flip(
            challenge.initiator_id,
            player_id,
            challenge.stake,
            self.rng,
            fee_percent=self.settings.COINFLIP_FEE_PERCENT,
            initiator_reduced_luck=initiator_flagged,
            opponent_reduced_luck=opponent_flagged,
        )

        if result.payout > 0:
            self.ledger_service.credit(
                result.winner_id,
                result.payout,
                f"{self.game}:payout",
                f"{self.game}_{challenge_id}_payout",
                commit=False,
            )
        self.repo.mark_settled(challenge_id, result.winner_id, result.fee, result.payout)
        self.db.commit()

        stake = challenge.stake
        self.settlement_service.record_stats(result.winner_id, self.game, stake, result.payout, True)
        self.settlement_service.record_stats(result.loser_id, self.game, stake, 0, False)

        logger.info(
            f"Coinflip {challenge_id} settled: {challenge.initiator_id} vs {player_id}, "
            f"side={result.side} winner={result.winner_id} stake={stake} "
            f"fee={result.fee} payout={result.payout}"
        )

        won = result.winner_id == player_id
        return CoinflipResultResponse(
            challenge=self.repo.to_response(self.repo.get(challenge_id)),
            side=result.side,
            won=won,
            payout=result.payout if won else 0,
            new_balance=self.ledger_service.get_balance(player_id).balance,
        )

    def cancel_challenge(self, player_id: str, challenge_id: int) -> CoinflipCancelResponse:
        challenge = self._get_challenge(challenge_id)
        if challenge.initiator_id != player_id:
            raise AuthorizationError("Only the initiator can cancel this challenge")

        if not self.repo.cancel(challenge_id, player_id):
            self.db.rollback()
            raise ChallengeClosedError()
        refund = self.ledger_service.credit(
            player_id,
            challenge.stake,
            f"{self.game}:refund",
            f"{self.game}_{challenge_id}_refund",
            commit=False,
        )
        self.db.commit()

        logger.info(f"Coinflip challenge {challenge_id} cancelled, refunded {challenge.stake}")
        return CoinflipCancelResponse(
            challenge=self.repo.to_response(self.repo.get(challenge_id)),
            refunded=challenge.stake,
            new_balance=refund.balance_after,
        )

    def _get_challenge(self, challenge_id: int) -> CoinflipChallenge:
        challenge = self.repo.get(challenge_id)
        if challenge is None:
            raise NotFoundError("Challenge not found")
        return challenge
