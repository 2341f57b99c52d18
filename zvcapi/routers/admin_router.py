"""
관리자 API 라우터 (ADMIN_PLAYER_IDS에 등록된 플레이어만)

- GET /admin/reduced-luck: reduced luck 플레이어 목록
- POST /admin/reduced-luck: 플래그 설정/해제
- POST /admin/zvc/adjust: 잔액 지급/차감
"""

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends

from zvcapi.containers import Container
from zvcapi.core.auth_middleware import require_admin
from zvcapi.deps import get_ledger_service
from zvcapi.schemas.auth import CurrentPlayer
from zvcapi.schemas.ledger import AdminAdjustRequest, AdminAdjustResponse
from zvcapi.schemas.reduced_luck import (
    ReducedLuckListResponse,
    SetReducedLuckRequest,
    SetReducedLuckResponse,
)
from zvcapi.services.ledger_service import LedgerService
from zvcapi.services.reduced_luck_service import ReducedLuckService

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/reduced-luck", response_model=ReducedLuckListResponse)
@inject
async def list_reduced_luck(
    admin: CurrentPlayer = Depends(require_admin),
    reduced_luck_service: ReducedLuckService = Depends(
        Provide[Container.services.reduced_luck_service]
    ),
) -> ReducedLuckListResponse:
    return ReducedLuckListResponse(
        reduced_luck_users=await reduced_luck_service.list_flagged()
    )


@router.post("/reduced-luck", response_model=SetReducedLuckResponse)
@inject
async def set_reduced_luck(
    request: SetReducedLuckRequest,
    admin: CurrentPlayer = Depends(require_admin),
    reduced_luck_service: ReducedLuckService = Depends(
        Provide[Container.services.reduced_luck_service]
    ),
) -> SetReducedLuckResponse:
    await reduced_luck_service.set_flag(
        request.player_id, request.has_reduced_luck, request.reason
    )
    return SetReducedLuckResponse(
        message=(
            "Player added to reduced luck list"
            if request.has_reduced_luck
            else "Player removed from reduced luck list"
        ),
        reduced_luck_users=await reduced_luck_service.list_flagged(),
    )


@router.post("/zvc/adjust", response_model=AdminAdjustResponse)
async def adjust_balance(
    request: AdminAdjustRequest,
    admin: CurrentPlayer = Depends(require_admin),
    ledger_service: LedgerService = Depends(get_ledger_service),
) -> AdminAdjustResponse:
    return ledger_service.admin_adjust(request, admin_id=admin.player_id)
