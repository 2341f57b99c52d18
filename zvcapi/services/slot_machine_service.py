from typing import Optional

from fastapi import BackgroundTasks

from zvcapi.games import slot_machine
from zvcapi.games.slot_machine import SlotTier
from zvcapi.schemas.games import SlotInfoResponse, SlotPayoutTier, SlotSpinResponse
from zvcapi.services.game_service import GameService
from zvcapi.services.notification_service import slot_win_payload

NOTIFY_TIERS = (SlotTier.JACKPOT, SlotTier.TRIPLE)


class SlotMachineService(GameService):
    game = "slotmachine"

    def get_info(self) -> SlotInfoResponse:
        return SlotInfoResponse(
            min_bet=self.settings.SLOT_MIN_BET,
            max_bet=self.settings.SLOT_MAX_BET,
            symbols=list(slot_machine.SLOT_SYMBOLS),
            jackpot_symbol=slot_machine.JACKPOT_SYMBOL,
            payout_table=[
                SlotPayoutTier(tier=tier, multiplier=multiplier)
                for tier, multiplier in slot_machine.PAYOUT_TABLE
            ],
        )

    async def spin(
        self,
        player_id: str,
        bet: int,
        background_tasks: Optional[BackgroundTasks] = None,
    ) -> SlotSpinResponse:
        bet = self.validate_bet(bet, self.settings.SLOT_MIN_BET, self.settings.SLOT_MAX_BET)
        reduced_luck = await self.reduced_luck_service.has_reduced_luck(player_id)

        settled = self.settlement_service.settle(
            player_id,
            self.game,
            bet,
            lambda: slot_machine.compute_outcome(bet, self.rng, reduced_luck=reduced_luck),
        )
        outcome = settled.outcome
        tier = outcome.details["tier"]

        if tier in NOTIFY_TIERS and bet >= self.settings.SLOT_NOTIFY_MIN_BET:
            self.schedule_notification(
                background_tasks,
                slot_win_payload(player_id, bet, outcome.details["result"], tier.value, outcome.payout),
            )

        return SlotSpinResponse(
            result=outcome.details["result"],
            tier=tier,
            multiplier=outcome.details["multiplier"],
            won=outcome.won,
            payout=outcome.payout,
            bet_amount=bet,
            net_change=settled.net_change,
            new_balance=settled.balance_after,
            message=_message(tier, outcome.payout),
        )


def _message(tier: SlotTier, payout: int) -> str:
    if tier == SlotTier.JACKPOT:
        return f"JACKPOT! You won {payout} ZVC"
    if tier == SlotTier.LOSS:
        return "No win this time"
    return f"You won {payout} ZVC"
