import enum
from datetime import datetime
from typing import Optional

from sqlalchemy import BigInteger, DateTime, Enum, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from zvcapi.models.base import BaseModel


class CoinflipState(enum.Enum):
    OPEN = "OPEN"  # 개설자 stake만 escrow된 상태
    ACCEPTED = "ACCEPTED"  # 상대가 점유, 정산 진행 중
    SETTLED = "SETTLED"
    CANCELLED = "CANCELLED"


class CoinflipChallenge(BaseModel):
    __tablename__ = "coinflip_challenges"
    __table_args__ = (Index("idx_coinflip_state", "state"),)

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True
    )
    initiator_id: Mapped[str] = mapped_column(String(64), nullable=False)
    stake: Mapped[int] = mapped_column(BigInteger, nullable=False)
    state: Mapped[CoinflipState] = mapped_column(
        Enum(CoinflipState, native_enum=False, length=16),
        nullable=False,
        default=CoinflipState.OPEN,
    )
    opponent_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    winner_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    fee: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    payout: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    settled_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    def __repr__(self):
        return f"<CoinflipChallenge(id={self.id}, initiator={self.initiator_id}, state={self.state.value})>"
