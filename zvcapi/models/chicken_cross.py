import enum
from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Enum, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column

from zvcapi.models.base import BaseModel


class ChickenCrossState(enum.Enum):
    ACTIVE = "ACTIVE"
    LOST = "LOST"  # terminal
    CASHED_OUT = "CASHED_OUT"  # terminal


class ChickenCrossGame(BaseModel):
    """Chicken Cross 세션 (seed가 세션 키)"""

    __tablename__ = "chicken_cross_games"
    __table_args__ = (
        # 플레이어당 ACTIVE 세션은 최대 1개
        Index(
            "uq_chicken_cross_one_active_per_player",
            "player_id",
            unique=True,
            postgresql_where=text("state = 'ACTIVE'"),
            sqlite_where=text("state = 'ACTIVE'"),
        ),
        Index("idx_chicken_cross_player_state", "player_id", "state"),
    )

    seed: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    player_id: Mapped[str] = mapped_column(String(64), nullable=False)
    initial_wager: Mapped[int] = mapped_column(BigInteger, nullable=False)
    current_payout: Mapped[int] = mapped_column(BigInteger, nullable=False)
    step: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    state: Mapped[ChickenCrossState] = mapped_column(
        Enum(ChickenCrossState, native_enum=False, length=16),
        nullable=False,
        default=ChickenCrossState.ACTIVE,
    )
    last_updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __repr__(self):
        return f"<ChickenCrossGame(seed={self.seed}, player={self.player_id}, state={self.state.value})>"

    @property
    def is_active(self) -> bool:
        return self.state == ChickenCrossState.ACTIVE
