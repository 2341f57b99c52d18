from zvcapi.models.base import Base
from zvcapi.models.player import PlayerAccount, PlayerGameStats
from zvcapi.models.ledger import BalanceLedger
from zvcapi.models.chicken_cross import ChickenCrossGame, ChickenCrossState
from zvcapi.models.coinflip import CoinflipChallenge, CoinflipState
