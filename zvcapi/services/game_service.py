from typing import Any, Dict, Optional

from fastapi import BackgroundTasks
from sqlalchemy.orm import Session

from zvcapi.config import Settings
from zvcapi.core.exceptions import ValidationError
from zvcapi.services.ledger_service import LedgerService
from zvcapi.services.notification_service import NotificationService
from zvcapi.services.reduced_luck_service import ReducedLuckService
from zvcapi.services.settlement_service import SettlementService
from zvcapi.utils.randomness import RandomSource


class GameService:
    """게임 서비스 공통 의존성 (요청 단위로 생성)"""

    game: str = ""

    def __init__(
        self,
        db: Session,
        settings: Settings,
        random_source: RandomSource,
        reduced_luck_service: ReducedLuckService,
        notification_service: NotificationService,
    ):
        self.db = db
        self.settings = settings
        self.rng = random_source
        self.reduced_luck_service = reduced_luck_service
        self.notification_service = notification_service
        self.ledger_service = LedgerService(db)
        self.settlement_service = SettlementService(db, self.ledger_service)

    @staticmethod
    def validate_bet(bet: Optional[int], min_bet: int, max_bet: int) -> int:
        if bet is None:
            raise ValidationError("Missing bet amount")
        if bet < min_bet or bet > max_bet:
            raise ValidationError(
                f"Bet must be between {min_bet} and {max_bet}",
                details={"minBet": min_bet, "maxBet": max_bet},
            )
        return bet

    def schedule_notification(
        self, background_tasks: Optional[BackgroundTasks], payload: Dict[str, Any]
    ) -> None:
        """응답 이후 실행 (응답과 정산을 막지 않음)"""
        if background_tasks is None:
            return
        background_tasks.add_task(self.notification_service.dispatch, payload)
