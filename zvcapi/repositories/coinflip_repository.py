from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import desc, update
from sqlalchemy.orm import Session

from zvcapi.models.coinflip import CoinflipChallenge, CoinflipState
from zvcapi.repositories.base import BaseRepository
from zvcapi.schemas.coinflip import CoinflipChallengeResponse


class CoinflipRepository(BaseRepository[CoinflipChallenge, CoinflipChallengeResponse]):
    """코인플립 챌린지 저장소 - 상태 전이는 조건부 UPDATE (OPEN에서만 출발)"""

    def __init__(self, db: Session):
        super().__init__(CoinflipChallenge, CoinflipChallengeResponse, db)

    def get(self, challenge_id: int) -> Optional[CoinflipChallenge]:
        return self.db.get(self.model_class, challenge_id, populate_existing=True)

    def create(self, initiator_id: str, stake: int) -> CoinflipChallenge:
        challenge = self.model_class(
            initiator_id=initiator_id,
            stake=stake,
            state=CoinflipState.OPEN,
            fee=0,
            payout=0,
        )
        self.db.add(challenge)
        self.db.flush()
        return challenge

    def list_open(self, limit: int = 50) -> List[CoinflipChallengeResponse]:
        return self.find_all(
            filters={"state": CoinflipState.OPEN},
            order_by=desc(self.model_class.id),
            limit=limit,
        )

    def claim(self, challenge_id: int, opponent_id: str) -> bool:
        """OPEN -> ACCEPTED (두 명이 동시에 수락해도 한 명만 성공)"""
        result = self.db.execute(
            update(self.model_class)
            .where(
                self.model_class.id == challenge_id,
                self.model_class.state == CoinflipState.OPEN,
                self.model_class.initiator_id != opponent_id,
            )
            .values(state=CoinflipState.ACCEPTED, opponent_id=opponent_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def cancel(self, challenge_id: int, initiator_id: str) -> bool:
        """OPEN -> CANCELLED (개설자 본인만)"""
        result = self.db.execute(
            update(self.model_class)
            .where(
                self.model_class.id == challenge_id,
                self.model_class.state == CoinflipState.OPEN,
                self.model_class.initiator_id == initiator_id,
            )
            .values(state=CoinflipState.CANCELLED, settled_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def mark_settled(self, challenge_id: int, winner_id: str, fee: int, payout: int) -> bool:
        result = self.db.execute(
            update(self.model_class)
            .where(
                self.model_class.id == challenge_id,
                self.model_class.state == CoinflipState.ACCEPTED,
            )
            .values(
                state=CoinflipState.SETTLED,
                winner_id=winner_id,
                fee=fee,
                payout=payout,
                settled_at=datetime.now(timezone.utc),
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def to_response(self, challenge: CoinflipChallenge) -> CoinflipChallengeResponse:
        return self._to_schema(challenge)
