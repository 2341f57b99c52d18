from typing import Any, Dict

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from sqlalchemy.orm import Session

from zvcapi.config import Settings
from zvcapi.containers import Container
from zvcapi.database.session import get_db
from zvcapi.services.notification_service import NotificationService
from zvcapi.services.reduced_luck_service import ReducedLuckService
from zvcapi.utils.randomness import RandomSource

# Services
from zvcapi.services.ledger_service import LedgerService
from zvcapi.services.slot_machine_service import SlotMachineService
from zvcapi.services.roulette_service import RouletteService
from zvcapi.services.lucky_wheel_service import LuckyWheelService
from zvcapi.services.chicken_cross_service import ChickenCrossService
from zvcapi.services.coinflip_service import CoinflipService


@inject
def get_game_dependencies(
    db: Session = Depends(get_db),
    settings: Settings = Depends(Provide[Container.config.config]),
    random_source: RandomSource = Depends(Provide[Container.services.random_source]),
    reduced_luck_service: ReducedLuckService = Depends(
        Provide[Container.services.reduced_luck_service]
    ),
    notification_service: NotificationService = Depends(
        Provide[Container.services.notification_service]
    ),
) -> Dict[str, Any]:
    return {
        "db": db,
        "settings": settings,
        "random_source": random_source,
        "reduced_luck_service": reduced_luck_service,
        "notification_service": notification_service,
    }


def get_ledger_service(db: Session = Depends(get_db)) -> LedgerService:
    return LedgerService(db=db)


def get_slot_machine_service(
    deps: Dict[str, Any] = Depends(get_game_dependencies),
) -> SlotMachineService:
    return SlotMachineService(**deps)


def get_roulette_service(
    deps: Dict[str, Any] = Depends(get_game_dependencies),
) -> RouletteService:
    return RouletteService(**deps)


def get_lucky_wheel_service(
    deps: Dict[str, Any] = Depends(get_game_dependencies),
) -> LuckyWheelService:
    return LuckyWheelService(**deps)


def get_chicken_cross_service(
    deps: Dict[str, Any] = Depends(get_game_dependencies),
) -> ChickenCrossService:
    return ChickenCrossService(**deps)


def get_coinflip_service(
    deps: Dict[str, Any] = Depends(get_game_dependencies),
) -> CoinflipService:
    return CoinflipService(**deps)
