"""
ZVC 원장 리포지토리

1. 잔액 조정 (원자적 증감 + 원장 기록)
2. 멱등성 보장 (ref_id 중복 처리 방지)
3. 음수 잔액 거부 (clamp 하지 않음)
4. 거래 내역 조회
5. 데이터 정합성 검증

잔액 조정과 원장 기록은 같은 트랜잭션에서 이뤄집니다. commit=False로 호출하면
호출자가 다른 쓰기(예: 게임 세션 생성)와 묶어서 커밋할 수 있습니다.
"""

from typing import Optional

from sqlalchemy import asc, desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from zvcapi.models.ledger import BalanceLedger
from zvcapi.repositories.base import BaseRepository
from zvcapi.repositories.player_repository import PlayerRepository
from zvcapi.schemas.ledger import (
    BalanceAdjustment,
    IntegrityCheckResponse,
    LedgerEntry,
    LedgerResponse,
)


class LedgerRepository(BaseRepository[BalanceLedger, LedgerEntry]):
    def __init__(self, db: Session):
        super().__init__(BalanceLedger, LedgerEntry, db)
        self.players = PlayerRepository(db)

    def get_by_ref_id(self, ref_id: str) -> Optional[BalanceLedger]:
        return (
            self.db.query(self.model_class)
            .filter(self.model_class.ref_id == ref_id)
            .first()
        )

    def adjust(
        self,
        player_id: str,
        delta: int,
        reason: str,
        ref_id: str,
        commit: bool = True,
    ) -> Optional[BalanceAdjustment]:
        """
        잔액 조정의 핵심 로직

        Returns:
            BalanceAdjustment. 계정이 없거나 잔액이 부족하면 None (아무것도 변경하지 않음)

        멱등성:
        - 같은 ref_id로 다시 호출하면 기존 항목을 그대로 반환하고 잔액은 건드리지 않음
        """
        existing_entry = self.get_by_ref_id(ref_id)
        if existing_entry:
            return self._idempotent_result(existing_entry)

        new_balance = self.players.increment_balance(player_id, delta)
        if new_balance is None:
            return None

        ledger_entry = self.model_class(
            player_id=player_id,
            delta=delta,
            balance_after=new_balance,
            reason=reason,
            ref_id=ref_id,
        )
        self.db.add(ledger_entry)

        try:
            self.db.flush()
            if commit:
                self.db.commit()
        except IntegrityError as e:
            # 동시에 같은 ref_id가 들어온 경우: 롤백하면 증감도 함께 취소됨
            self.db.rollback()
            if "ref_id" not in str(e):
                raise
            existing_entry = self.get_by_ref_id(ref_id)
            if existing_entry is None:
                raise
            return self._idempotent_result(existing_entry)

        return BalanceAdjustment(
            transaction_id=ledger_entry.id,
            delta=delta,
            balance_after=new_balance,
        )

    def _idempotent_result(self, entry: BalanceLedger) -> BalanceAdjustment:
        return BalanceAdjustment(
            transaction_id=entry.id,
            delta=entry.delta,
            balance_after=entry.balance_after,
            idempotent=True,
        )

    def get_player_ledger(
        self, player_id: str, limit: int = 50, offset: int = 0
    ) -> LedgerResponse:
        """플레이어 원장 조회 (최신순, 페이징)"""
        total_count = self.count(filters={"player_id": player_id})

        model_instances = (
            self.db.query(self.model_class)
            .filter(self.model_class.player_id == player_id)
            .order_by(desc(self.model_class.id))
            .limit(limit)
            .offset(offset)
            .all()
        )

        return LedgerResponse(
            balance=self.players.get_balance(player_id) or 0,
            entries=[self._to_schema(instance) for instance in model_instances],
            total_count=total_count,
            has_next=offset + limit < total_count,
        )

    def verify_integrity_for_player(self, player_id: str) -> IntegrityCheckResponse:
        """
        플레이어 잔액 정합성 검증

        1. 각 항목의 balance_after가 직전 항목에서 delta만큼 이어지는지 확인
        2. delta 합계가 계정에 저장된 잔액과 같은지 확인
        """
        entries = (
            self.db.query(self.model_class)
            .filter(self.model_class.player_id == player_id)
            .order_by(asc(self.model_class.id))
            .all()
        )
        recorded_balance = self.players.get_balance(player_id) or 0

        running_balance = 0
        for entry in entries:
            running_balance += entry.delta
            if entry.balance_after != running_balance:
                return IntegrityCheckResponse(
                    status="MISMATCH",
                    player_id=player_id,
                    calculated_balance=running_balance,
                    recorded_balance=recorded_balance,
                    entry_count=len(entries),
                    error=(
                        f"Ledger chain broken at entry {entry.id}: "
                        f"expected {running_balance}, got {entry.balance_after}"
                    ),
                    entry_id=entry.id,
                )

        if running_balance != recorded_balance:
            return IntegrityCheckResponse(
                status="MISMATCH",
                player_id=player_id,
                calculated_balance=running_balance,
                recorded_balance=recorded_balance,
                entry_count=len(entries),
                error=(
                    f"Balance mismatch: ledger sums to {running_balance}, "
                    f"account holds {recorded_balance}"
                ),
            )

        return IntegrityCheckResponse(
            status="OK",
            player_id=player_id,
            calculated_balance=running_balance,
            recorded_balance=recorded_balance,
            entry_count=len(entries),
        )
