from typing import Optional

from fastapi import BackgroundTasks

from zvcapi.games import roulette
from zvcapi.games.roulette import RouletteBetType
from zvcapi.schemas.games import (
    RouletteBetRequest,
    RouletteBetTypeInfo,
    RouletteInfoResponse,
    RouletteSpinResponse,
)
from zvcapi.services.game_service import GameService
from zvcapi.services.notification_service import roulette_win_payload


class RouletteService(GameService):
    game = "roulette"

    def get_info(self) -> RouletteInfoResponse:
        zero_probability = self.settings.ROULETTE_ZERO_PROBABILITY
        return RouletteInfoResponse(
            min_bet=self.settings.ROULETTE_MIN_BET,
            max_bet=self.settings.ROULETTE_MAX_BET,
            zero_probability=zero_probability,
            bet_types={
                name: RouletteBetTypeInfo(**info)
                for name, info in roulette.bet_type_table(zero_probability).items()
            },
            numbers=roulette.ROULETTE_NUMBERS,
            red_numbers=sorted(roulette.RED_NUMBERS),
        )

    async def spin(
        self,
        player_id: str,
        request: RouletteBetRequest,
        background_tasks: Optional[BackgroundTasks] = None,
    ) -> RouletteSpinResponse:
        bet = self.validate_bet(
            request.bet, self.settings.ROULETTE_MIN_BET, self.settings.ROULETTE_MAX_BET
        )
        value = request.value if request.type == RouletteBetType.NUMBER else None
        reduced_luck = await self.reduced_luck_service.has_reduced_luck(player_id)

        settled = self.settlement_service.settle(
            player_id,
            self.game,
            bet,
            lambda: roulette.compute_outcome(
                bet,
                request.type,
                value,
                self.rng,
                zero_probability=self.settings.ROULETTE_ZERO_PROBABILITY,
                reduced_luck=reduced_luck,
            ),
        )
        outcome = settled.outcome
        spin_result = outcome.details["spin_result"]

        if (
            outcome.won
            and request.type == RouletteBetType.NUMBER
            and bet >= self.settings.ROULETTE_NOTIFY_MIN_BET
        ):
            self.schedule_notification(
                background_tasks,
                roulette_win_payload(player_id, bet, spin_result, outcome.payout),
            )

        return RouletteSpinResponse(
            spin_result=spin_result,
            color=outcome.details["color"],
            bet_type=request.type,
            multiplier=outcome.details["multiplier"],
            won=outcome.won,
            payout=outcome.payout,
            bet_amount=bet,
            net_change=settled.net_change,
            new_balance=settled.balance_after,
            message=(
                f"The ball landed on {spin_result}. You won {outcome.payout} ZVC"
                if outcome.won
                else f"The ball landed on {spin_result}. You lost {bet} ZVC"
            ),
        )
