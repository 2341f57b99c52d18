"""
ZVC 원장(Ledger) 데이터 모델

잔액 변동은 모두 이 테이블에 기록되어 감사 추적(Audit Trail)을 제공합니다.
배팅 정산은 차감(stake)과 지급(payout)을 별도 항목으로 남기므로,
차감 후 지급 전에 실패한 요청은 짝이 없는 stake 항목으로 드러납니다.
"""

from sqlalchemy import Column, BigInteger, ForeignKey, Index, Integer, String, Text
from sqlalchemy.schema import UniqueConstraint
from zvcapi.models.base import AppendOnlyModel


class BalanceLedger(AppendOnlyModel):
    """
    원장 테이블 - 불변(Immutable) 레코드

    - ref_id는 유니크 (중복 거래 방지, 멱등성)
    - balance_after로 각 거래 직후 잔액을 추적
    """

    __tablename__ = "balance_ledger"
    __table_args__ = (
        UniqueConstraint("ref_id", name="uq_balance_ledger_ref_id"),
        Index("idx_balance_ledger_player", "player_id", "id"),
    )

    # SQLite는 INTEGER PRIMARY KEY만 자동 증가
    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)

    player_id = Column(String(64), ForeignKey("players.id"), nullable=False)

    # 변동량 - 양수면 지급, 음수면 차감
    delta = Column(BigInteger, nullable=False)

    # 거래 후 잔액
    balance_after = Column(BigInteger, nullable=False)

    # 예: "roulette:stake", "chickencross:cashout"
    reason = Column(Text, nullable=False)

    # 예: "roulette_<wager_id>_stake", "coinflip_12_refund"
    ref_id = Column(String(128), nullable=False)
