from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from zvcapi.models.chicken_cross import ChickenCrossGame, ChickenCrossState
from zvcapi.repositories.base import BaseRepository
from zvcapi.schemas.chicken_cross import ChickenCrossGameResponse


class ChickenCrossRepository(BaseRepository[ChickenCrossGame, ChickenCrossGameResponse]):
    """Chicken Cross 세션 저장소

    상태 변경은 모두 `state = 'ACTIVE'` 조건부 UPDATE로 수행하고, 영향받은 행 수로
    다른 요청이 먼저 세션을 바꿨는지 판단합니다.
    """

    def __init__(self, db: Session):
        super().__init__(ChickenCrossGame, ChickenCrossGameResponse, db)

    def get(self, seed: int) -> Optional[ChickenCrossGame]:
        return self.db.get(self.model_class, seed, populate_existing=True)

    def get_active_for_player(self, player_id: str) -> Optional[ChickenCrossGame]:
        return (
            self.db.query(self.model_class)
            .filter(
                self.model_class.player_id == player_id,
                self.model_class.state == ChickenCrossState.ACTIVE,
            )
            .populate_existing()
            .first()
        )

    def seed_exists(self, seed: int) -> bool:
        return (
            self.db.query(self.model_class.seed)
            .filter(self.model_class.seed == seed)
            .first()
            is not None
        )

    def create(self, seed: int, player_id: str, stake: int) -> ChickenCrossGame:
        """ACTIVE 세션 생성 (커밋은 호출자 몫: stake 차감과 같은 트랜잭션)"""
        game = self.model_class(
            seed=seed,
            player_id=player_id,
            initial_wager=stake,
            current_payout=stake,
            step=0,
            state=ChickenCrossState.ACTIVE,
            last_updated_at=datetime.now(timezone.utc),
        )
        self.db.add(game)
        self.db.flush()
        return game

    def record_move(
        self,
        seed: int,
        expected_step: int,
        new_step: int,
        current_payout: int,
        state: ChickenCrossState,
    ) -> bool:
        """step이 expected_step인 ACTIVE 세션만 갱신 (동시 MOVE 중 하나만 반영)"""
        result = self.db.execute(
            update(self.model_class)
            .where(
                self.model_class.seed == seed,
                self.model_class.state == ChickenCrossState.ACTIVE,
                self.model_class.step == expected_step,
            )
            .values(
                step=new_step,
                current_payout=current_payout,
                state=state,
                last_updated_at=datetime.now(timezone.utc),
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def mark_cashed_out(self, seed: int, expected_step: int) -> bool:
        """ACTIVE -> CASHED_OUT 전이 (이미 종료됐거나 그 사이 MOVE가 반영됐으면 False)"""
        result = self.db.execute(
            update(self.model_class)
            .where(
                self.model_class.seed == seed,
                self.model_class.state == ChickenCrossState.ACTIVE,
                self.model_class.step == expected_step,
            )
            .values(
                state=ChickenCrossState.CASHED_OUT,
                last_updated_at=datetime.now(timezone.utc),
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def to_response(self, game: ChickenCrossGame) -> ChickenCrossGameResponse:
        return self._to_schema(game)
