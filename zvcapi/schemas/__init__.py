from .common import ApiSchema, WagerResult
from .auth import CurrentPlayer, SessionStatus, SessionValidation
from .ledger import BalanceAdjustment, BalanceResponse, LedgerEntry, LedgerResponse
from .health import HealthCheckResponse
