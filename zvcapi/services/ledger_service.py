from datetime import datetime, timezone

from sqlalchemy.orm import Session

from zvcapi.core.exceptions import InsufficientBalanceError, PlayerNotFoundError
from zvcapi.repositories.ledger_repository import LedgerRepository
from zvcapi.repositories.player_repository import PlayerRepository
from zvcapi.schemas.ledger import (
    AdminAdjustRequest,
    AdminAdjustResponse,
    BalanceAdjustment,
    BalanceResponse,
    GameStatsResponse,
    IntegrityCheckResponse,
    LedgerResponse,
)
import logging

logger = logging.getLogger(__name__)


class LedgerService:
    """ZVC 잔액 관련 비즈니스 로직을 담당하는 서비스

    모든 잔액 변경은 adjust(원자적 조건부 증감)를 거칩니다. 차감이 잔액을 음수로
    만들면 거부하며 0으로 맞추지 않습니다.
    """

    def __init__(self, db: Session):
        self.db = db
        self.ledger_repo = LedgerRepository(db)
        self.player_repo = PlayerRepository(db)

    def ensure_player(self, player_id: str) -> int:
        """첫 상호작용 시 잔액 0으로 계정 생성 후 현재 잔액 반환"""
        balance = self.player_repo.get_balance(player_id)
        if balance is None:
            balance = self.player_repo.ensure_player(player_id)
            logger.info(f"Provisioned ZVC account for {player_id}")
        return balance

    def get_balance(self, player_id: str) -> BalanceResponse:
        return BalanceResponse(player_id=player_id, balance=self.ensure_player(player_id))

    def debit(
        self,
        player_id: str,
        amount: int,
        reason: str,
        ref_id: str,
        commit: bool = True,
    ) -> BalanceAdjustment:
        """잔액 차감

        Raises:
            PlayerNotFoundError: 계정 없음
            InsufficientBalanceError: 잔액 부족 (잔액은 변경되지 않음)
        """
        result = self.ledger_repo.adjust(player_id, -amount, reason, ref_id, commit=commit)
        if result is not None:
            return result

        current = self.player_repo.get_balance(player_id)
        if current is None:
            raise PlayerNotFoundError(player_id)
        logger.info(
            f"Debit rejected for {player_id}: required={amount}, current={current}, ref={ref_id}"
        )
        raise InsufficientBalanceError(required=amount, current=current)

    def credit(
        self,
        player_id: str,
        amount: int,
        reason: str,
        ref_id: str,
        commit: bool = True,
    ) -> BalanceAdjustment:
        result = self.ledger_repo.adjust(player_id, amount, reason, ref_id, commit=commit)
        if result is None:
            raise PlayerNotFoundError(player_id)
        return result

    def get_ledger(self, player_id: str, limit: int = 50, offset: int = 0) -> LedgerResponse:
        if limit > 100:
            limit = 100
        ledger = self.ledger_repo.get_player_ledger(player_id, limit=limit, offset=offset)
        logger.info(f"Retrieved ledger for {player_id}: {ledger.total_count} entries")
        return ledger

    def verify_integrity(self, player_id: str) -> IntegrityCheckResponse:
        result = self.ledger_repo.verify_integrity_for_player(player_id)
        if result.status != "OK":
            logger.warning(f"Ledger integrity mismatch for {player_id}: {result.error}")
        return result

    def get_stats(self, player_id: str) -> GameStatsResponse:
        return GameStatsResponse(
            player_id=player_id, games=self.player_repo.get_stats(player_id)
        )

    def admin_adjust(self, request: AdminAdjustRequest, admin_id: str) -> AdminAdjustResponse:
        """관리자 잔액 조정 (지급 시 계정 자동 생성, 차감은 잔액 부족 시 거부)"""
        ref_id = f"admin_adjust_{admin_id}_{datetime.now(timezone.utc).timestamp()}"
        reason = f"admin:{admin_id}: {request.reason}"

        if request.amount > 0:
            self.ensure_player(request.player_id)
            result = self.credit(request.player_id, request.amount, reason, ref_id)
        else:
            result = self.debit(request.player_id, -request.amount, reason, ref_id)

        logger.info(
            f"Admin {admin_id} adjusted {request.player_id} by {request.amount}: "
            f"balance_after={result.balance_after}"
        )
        return AdminAdjustResponse(
            player_id=request.player_id,
            delta=result.delta,
            balance_after=result.balance_after,
            transaction_id=result.transaction_id,
        )
