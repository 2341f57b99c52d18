"""
단발성 배팅 정산

순서는 항상 (1) stake 차감 커밋 -> (2) 결과 계산 -> (3) payout 지급 커밋 -> (4) 통계 갱신.
차감과 지급은 별도의 원장 항목이므로, 차감 뒤 지급 전에 실패한 배팅은
``<game>_<wager_id>_stake`` 항목만 남아 감사 시 드러납니다.
"""

import uuid
from dataclasses import dataclass
from typing import Callable

from sqlalchemy.orm import Session

from zvcapi.games.outcome import WagerOutcome
from zvcapi.repositories.player_repository import PlayerRepository
from zvcapi.services.ledger_service import LedgerService
import logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SettledWager:
    wager_id: str
    outcome: WagerOutcome
    bet: int
    balance_before: int
    balance_after: int

    @property
    def net_change(self) -> int:
        return self.outcome.payout - self.bet


def new_wager_id() -> str:
    return uuid.uuid4().hex


class SettlementService:
    def __init__(self, db: Session, ledger_service: LedgerService):
        self.db = db
        self.ledger_service = ledger_service
        self.player_repo = PlayerRepository(db)

    def settle(
        self,
        player_id: str,
        game: str,
        bet: int,
        compute: Callable[[], WagerOutcome],
    ) -> SettledWager:
        wager_id = new_wager_id()
        self.ledger_service.ensure_player(player_id)

        stake = self.ledger_service.debit(
            player_id, bet, f"{game}:stake", f"{game}_{wager_id}_stake"
        )
        balance_before = stake.balance_after + bet

        try:
            outcome = compute()
        except Exception:
            logger.error(
                f"Outcome computation failed after stake debit: game={game} "
                f"player={player_id} wager={wager_id} bet={bet}"
            )
            raise

        balance_after = stake.balance_after
        if outcome.payout > 0:
            payout = self.ledger_service.credit(
                player_id, outcome.payout, f"{game}:payout", f"{game}_{wager_id}_payout"
            )
            balance_after = payout.balance_after

        self.record_stats(player_id, game, bet, outcome.payout, outcome.won)

        logger.info(
            f"Wager settled: game={game} player={player_id} wager={wager_id} bet={bet} "
            f"won={outcome.won} payout={outcome.payout} "
            f"balance={balance_before}->{balance_after}"
        )
        return SettledWager(
            wager_id=wager_id,
            outcome=outcome,
            bet=bet,
            balance_before=balance_before,
            balance_after=balance_after,
        )

    def record_stats(self, player_id: str, game: str, wagered: int, paid_out: int, won: bool) -> None:
        # 통계 실패는 정산 결과에 영향을 주지 않음
        try:
            self.player_repo.increment_stats(player_id, game, wagered, paid_out, won)
        except Exception as e:
            self.db.rollback()
            logger.warning(f"Failed to update {game} stats for {player_id}: {e}")
