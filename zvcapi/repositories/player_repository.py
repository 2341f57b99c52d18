"""
플레이어 계정 리포지토리

잔액은 조건부 원자적 증감(UPDATE ... SET balance = balance + :delta
WHERE balance + :delta >= 0) 한 번으로만 바뀝니다. 읽은 값을 다시 쓰는 방식은 쓰지 않습니다.
"""

from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from zvcapi.models.player import PlayerAccount, PlayerGameStats
from zvcapi.repositories.base import BaseRepository
from zvcapi.schemas.ledger import GameStats
from zvcapi.schemas.player import PlayerAccountSchema


class PlayerRepository(BaseRepository[PlayerAccount, PlayerAccountSchema]):
    def __init__(self, db: Session):
        super().__init__(PlayerAccount, PlayerAccountSchema, db)

    def get_balance(self, player_id: str) -> Optional[int]:
        """DB의 현재 잔액 (계정이 없으면 None)"""
        return self.db.execute(
            select(PlayerAccount.balance).where(PlayerAccount.id == player_id)
        ).scalar_one_or_none()

    def ensure_player(self, player_id: str, commit: bool = True) -> int:
        """계정이 없으면 잔액 0으로 생성하고 현재 잔액을 반환"""
        self._insert_ignoring_conflicts(
            {"id": player_id, "balance": 0, "username": "", "is_active": True}
        )
        self._commit_or_flush(commit)
        return self.get_balance(player_id) or 0

    def increment_balance(self, player_id: str, delta: int) -> Optional[int]:
        """
        원자적 잔액 증감

        Returns:
            증감 후 잔액. 계정이 없거나 잔액이 음수가 되는 경우 None (아무것도 변경하지 않음)
        """
        table = PlayerAccount.__table__
        stmt = (
            update(table)
            .where(table.c.id == player_id)
            .where(table.c.balance + delta >= 0)
            .values(balance=table.c.balance + delta)
            .returning(table.c.balance)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def increment_stats(
        self,
        player_id: str,
        game: str,
        wagered: int,
        paid_out: int,
        won: bool,
        commit: bool = True,
    ) -> None:
        table = PlayerGameStats.__table__
        self._insert_ignoring_conflicts(
            {
                "player_id": player_id,
                "game": game,
                "plays": 0,
                "wins": 0,
                "total_wagered": 0,
                "total_paid_out": 0,
            },
            table=table,
        )
        self.db.execute(
            update(table)
            .where(table.c.player_id == player_id, table.c.game == game)
            .values(
                plays=table.c.plays + 1,
                wins=table.c.wins + (1 if won else 0),
                total_wagered=table.c.total_wagered + wagered,
                total_paid_out=table.c.total_paid_out + paid_out,
            )
        )
        self._commit_or_flush(commit)

    def get_stats(self, player_id: str) -> List[GameStats]:
        rows = (
            self.db.query(PlayerGameStats)
            .filter(PlayerGameStats.player_id == player_id)
            .order_by(PlayerGameStats.game)
            .all()
        )
        return [GameStats.model_validate(row) for row in rows]
