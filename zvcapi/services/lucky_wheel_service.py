from typing import Optional

from fastapi import BackgroundTasks

from zvcapi.games import lucky_wheel
from zvcapi.schemas.games import LuckyWheelInfoResponse, LuckyWheelSegment, LuckyWheelSpinResponse
from zvcapi.services.game_service import GameService
from zvcapi.services.notification_service import lucky_wheel_win_payload


class LuckyWheelService(GameService):
    game = "luckywheel"

    def get_info(self) -> LuckyWheelInfoResponse:
        return LuckyWheelInfoResponse(
            min_bet=self.settings.LUCKYWHEEL_MIN_BET,
            max_bet=self.settings.LUCKYWHEEL_MAX_BET,
            payout_table=[LuckyWheelSegment(**row) for row in lucky_wheel.payout_table()],
        )

    async def spin(
        self,
        player_id: str,
        bet: int,
        background_tasks: Optional[BackgroundTasks] = None,
    ) -> LuckyWheelSpinResponse:
        bet = self.validate_bet(
            bet, self.settings.LUCKYWHEEL_MIN_BET, self.settings.LUCKYWHEEL_MAX_BET
        )
        reduced_luck = await self.reduced_luck_service.has_reduced_luck(player_id)

        settled = self.settlement_service.settle(
            player_id,
            self.game,
            bet,
            lambda: lucky_wheel.compute_outcome(bet, self.rng, reduced_luck=reduced_luck),
        )
        outcome = settled.outcome
        multiplier = outcome.details["multiplier"]

        if (
            multiplier == lucky_wheel.max_multiplier()
            and bet >= self.settings.LUCKYWHEEL_NOTIFY_MIN_BET
        ):
            self.schedule_notification(
                background_tasks,
                lucky_wheel_win_payload(player_id, bet, multiplier, outcome.payout),
            )

        return LuckyWheelSpinResponse(
            multiplier=multiplier,
            won=outcome.won,
            payout=outcome.payout,
            bet_amount=bet,
            net_change=settled.net_change,
            new_balance=settled.balance_after,
            message=f"{multiplier}x - you received {outcome.payout} ZVC",
        )
