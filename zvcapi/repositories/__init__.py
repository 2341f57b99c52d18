# Repository layer - Data access with Pydantic responses

from .base import BaseRepository
from .player_repository import PlayerRepository
from .ledger_repository import LedgerRepository
from .chicken_cross_repository import ChickenCrossRepository
from .coinflip_repository import CoinflipRepository

__all__ = [
    "BaseRepository",
    "PlayerRepository",
    "LedgerRepository",
    "ChickenCrossRepository",
    "CoinflipRepository",
]
