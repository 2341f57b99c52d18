"""
ZVC 잔액 API 라우터

- GET /zvc/balance: 내 잔액 (첫 조회 시 계정 생성)
- GET /zvc/ledger: 내 원장 (최신순)
- GET /zvc/integrity: 내 잔액 정합성 검증
- GET /zvc/stats: 게임별 통계
"""

from fastapi import APIRouter, Depends, Query

from zvcapi.core.auth_middleware import get_current_player
from zvcapi.deps import get_ledger_service
from zvcapi.schemas.auth import CurrentPlayer
from zvcapi.schemas.ledger import (
    BalanceResponse,
    GameStatsResponse,
    IntegrityCheckResponse,
    LedgerResponse,
)
from zvcapi.services.ledger_service import LedgerService

router = APIRouter(prefix="/zvc", tags=["zvc"])


@router.get("/balance", response_model=BalanceResponse)
async def get_my_balance(
    current_player: CurrentPlayer = Depends(get_current_player),
    ledger_service: LedgerService = Depends(get_ledger_service),
) -> BalanceResponse:
    return ledger_service.get_balance(current_player.player_id)


@router.get("/ledger", response_model=LedgerResponse)
async def get_my_ledger(
    limit: int = Query(50, ge=1, le=100, description="페이지 크기"),
    offset: int = Query(0, ge=0, description="오프셋"),
    current_player: CurrentPlayer = Depends(get_current_player),
    ledger_service: LedgerService = Depends(get_ledger_service),
) -> LedgerResponse:
    return ledger_service.get_ledger(current_player.player_id, limit=limit, offset=offset)


@router.get("/integrity", response_model=IntegrityCheckResponse)
async def verify_my_integrity(
    current_player: CurrentPlayer = Depends(get_current_player),
    ledger_service: LedgerService = Depends(get_ledger_service),
) -> IntegrityCheckResponse:
    return ledger_service.verify_integrity(current_player.player_id)


@router.get("/stats", response_model=GameStatsResponse)
async def get_my_stats(
    current_player: CurrentPlayer = Depends(get_current_player),
    ledger_service: LedgerService = Depends(get_ledger_service),
) -> GameStatsResponse:
    return ledger_service.get_stats(current_player.player_id)
