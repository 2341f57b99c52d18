"""
Chicken Cross 게임 서비스

- 시작: stake 차감과 ACTIVE 세션 생성을 한 트랜잭션으로 커밋
  (플레이어당 ACTIVE 세션 1개는 partial unique index가 보장)
- MOVE: step 조건부 갱신 (같은 step에서 동시 MOVE는 하나만 반영)
- CASHOUT: CASHED_OUT 전이와 payout 지급을 한 트랜잭션으로 커밋 (중복 지급 불가)
"""

from typing import Optional

from fastapi import BackgroundTasks
from sqlalchemy.exc import IntegrityError

from zvcapi.core.exceptions import (
    AuthorizationError,
    ConflictError,
    GameNotActiveError,
    InternalServerError,
    NotFoundError,
    SessionAlreadyActiveError,
    ValidationError,
)
from zvcapi.games import chicken_cross
from zvcapi.models.chicken_cross import ChickenCrossGame, ChickenCrossState
from zvcapi.repositories.chicken_cross_repository import ChickenCrossRepository
from zvcapi.schemas.chicken_cross import (
    ChickenCrossActiveResponse,
    ChickenCrossGameResponse,
    ChickenCrossInfoResponse,
    ChickenCrossIntent,
    ChickenCrossMoveResponse,
    ChickenCrossRequest,
)
from zvcapi.services.game_service import GameService
from zvcapi.services.notification_service import chicken_cross_win_payload
from zvcapi.utils.randomness import generate_seed
import logging

logger = logging.getLogger(__name__)

MAX_SEED_ATTEMPTS = 10


class ChickenCrossService(GameService):
    game = "chickencross"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.repo = ChickenCrossRepository(self.db)

    def get_info(self) -> ChickenCrossInfoResponse:
        return ChickenCrossInfoResponse(
            min_bet=self.settings.CHICKENCROSS_MIN_BET,
            max_bet=self.settings.CHICKENCROSS_MAX_BET,
        )

    def get_active(self, player_id: str) -> ChickenCrossActiveResponse:
        game = self.repo.get_active_for_player(player_id)
        return ChickenCrossActiveResponse(active_game_seed=game.seed if game else None)

    def get_game(self, player_id: str, seed: int) -> ChickenCrossGameResponse:
        game = self._get_owned_game(player_id, seed)
        response = self.repo.to_response(game)
        if game.is_active:
            next_multiplier = chicken_cross.multiplier_for_step(game.seed, game.step + 1)
            response.next_multiplier = next_multiplier
            response.next_survival_chance = round(
                chicken_cross.survival_chance(next_multiplier), 4
            )
        return response

    async def play(
        self,
        player_id: str,
        request: ChickenCrossRequest,
        background_tasks: Optional[BackgroundTasks] = None,
    ) -> ChickenCrossMoveResponse:
        if request.intent == ChickenCrossIntent.MOVE and not request.seed:
            if not request.bet:
                raise ValidationError("Missing bet amount for new game")
            return self.start(player_id, request.bet)

        if not request.seed:
            raise ValidationError("Missing seed for game action")

        if request.intent == ChickenCrossIntent.CASHOUT:
            return self.cash_out(player_id, request.seed, background_tasks)
        return await self.move(player_id, request.seed)

    def start(self, player_id: str, bet: int) -> ChickenCrossMoveResponse:
        bet = self.validate_bet(
            bet, self.settings.CHICKENCROSS_MIN_BET, self.settings.CHICKENCROSS_MAX_BET
        )
        self.ledger_service.ensure_player(player_id)

        existing = self.repo.get_active_for_player(player_id)
        if existing:
            raise SessionAlreadyActiveError(existing.seed)

        seed = self._new_seed()
        self.ledger_service.debit(
            player_id, bet, f"{self.game}:stake", f"{self.game}_{seed}_stake", commit=False
        )
        try:
            game = self.repo.create(seed, player_id, bet)
            self.db.commit()
        except IntegrityError:
            # 동시에 시작한 다른 요청이 먼저 ACTIVE 세션을 만든 경우 (stake 차감도 함께 롤백)
            self.db.rollback()
            existing = self.repo.get_active_for_player(player_id)
            if existing:
                raise SessionAlreadyActiveError(existing.seed)
            raise ConflictError("Could not start game, please retry")

        logger.info(f"Chicken cross started: player={player_id} seed={seed} stake={bet}")
        return self._move_response(game)

    async def move(self, player_id: str, seed: int) -> ChickenCrossMoveResponse:
        game = self._get_active_owned_game(player_id, seed)
        reduced_luck = await self.reduced_luck_service.has_reduced_luck(player_id)

        result = chicken_cross.advance(
            game.initial_wager, game.seed, game.step, self.rng, reduced_luck=reduced_luck
        )
        state = ChickenCrossState.ACTIVE if result.survived else ChickenCrossState.LOST

        if not self.repo.record_move(
            seed,
            expected_step=game.step,
            new_step=result.step,
            current_payout=result.current_payout,
            state=state,
        ):
            self.db.rollback()
            raise ConflictError("Game was updated by another request")
        self.db.commit()

        if not result.survived:
            self.settlement_service.record_stats(player_id, self.game, game.initial_wager, 0, False)

        logger.info(
            f"Chicken cross move: player={player_id} seed={seed} step={result.step} "
            f"survived={result.survived} chance={result.survival_chance:.4f} "
            f"payout={result.current_payout}"
        )
        return ChickenCrossMoveResponse(
            seed=seed,
            state=state,
            current_payout=result.current_payout,
            step=result.step,
        )

    def cash_out(
        self,
        player_id: str,
        seed: int,
        background_tasks: Optional[BackgroundTasks] = None,
    ) -> ChickenCrossMoveResponse:
        game = self._get_active_owned_game(player_id, seed)
        stake, payout, step = game.initial_wager, game.current_payout, game.step

        if not self.repo.mark_cashed_out(seed, expected_step=step):
            self.db.rollback()
            raise GameNotActiveError()
        adjustment = self.ledger_service.credit(
            player_id, payout, f"{self.game}:cashout", f"{self.game}_{seed}_cashout", commit=False
        )
        self.db.commit()

        self.settlement_service.record_stats(player_id, self.game, stake, payout, payout > stake)
        logger.info(
            f"Chicken cross cashed out: player={player_id} seed={seed} step={step} "
            f"stake={stake} payout={payout} balance_after={adjustment.balance_after}"
        )

        if payout >= stake * 2 and stake >= self.settings.CHICKENCROSS_NOTIFY_MIN_BET:
            self.schedule_notification(
                background_tasks, chicken_cross_win_payload(player_id, stake, payout, step)
            )

        return ChickenCrossMoveResponse(
            seed=seed,
            state=ChickenCrossState.CASHED_OUT,
            current_payout=payout,
            step=step,
        )

    def _new_seed(self) -> int:
        for _ in range(MAX_SEED_ATTEMPTS):
            seed = generate_seed(self.rng)
            if not self.repo.seed_exists(seed):
                return seed
        raise InternalServerError("Failed to allocate a game seed")

    def _get_owned_game(self, player_id: str, seed: int) -> ChickenCrossGame:
        game = self.repo.get(seed)
        if game is None:
            raise NotFoundError("Game not found")
        if game.player_id != player_id:
            raise AuthorizationError("Unauthorized: You do not own this game")
        return game

    def _get_active_owned_game(self, player_id: str, seed: int) -> ChickenCrossGame:
        game = self._get_owned_game(player_id, seed)
        if not game.is_active:
            raise GameNotActiveError()
        return game

    @staticmethod
    def _move_response(game: ChickenCrossGame) -> ChickenCrossMoveResponse:
        return ChickenCrossMoveResponse(
            seed=game.seed,
            state=game.state,
            current_payout=game.current_payout,
            step=game.step,
        )
