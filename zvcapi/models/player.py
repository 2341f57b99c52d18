from typing import Optional

from sqlalchemy import BigInteger, Boolean, CheckConstraint, Index, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.schema import PrimaryKeyConstraint

from zvcapi.models.base import BaseModel


class PlayerAccount(BaseModel):
    """
    플레이어 ZVC 계정

    - balance는 ledger 조정(원자적 증감)으로만 변경됩니다.
    - 계정은 삭제되지 않습니다. 비활성화된 계정도 잔액 이력을 유지합니다.
    """

    __tablename__ = "players"
    __table_args__ = (
        CheckConstraint("balance >= 0", name="ck_players_balance_non_negative"),
        Index("idx_players_discord_id", "discord_id"),
    )

    # "<steamId>@steam" 형식
    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    discord_id: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    username: Mapped[str] = mapped_column(String(100), default="", nullable=False)
    balance: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def __repr__(self):
        return f"<PlayerAccount(id={self.id}, balance={self.balance})>"


class PlayerGameStats(BaseModel):
    """게임별 누적 통계 (플레이 수, 승리 수, 총 배팅액, 총 지급액)"""

    __tablename__ = "player_game_stats"
    __table_args__ = (PrimaryKeyConstraint("player_id", "game"),)

    player_id: Mapped[str] = mapped_column(String(64), nullable=False)
    game: Mapped[str] = mapped_column(String(32), nullable=False)
    plays: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    wins: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    total_wagered: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    total_paid_out: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
