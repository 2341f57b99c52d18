from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends

from zvcapi.core.auth_middleware import get_current_player
from zvcapi.deps import get_slot_machine_service
from zvcapi.schemas.auth import CurrentPlayer
from zvcapi.schemas.games import SlotInfoResponse, SlotSpinRequest, SlotSpinResponse
from zvcapi.services.slot_machine_service import SlotMachineService

router = APIRouter(prefix="/slotmachine", tags=["slotmachine"])


@router.get("/info", response_model=SlotInfoResponse)
async def get_slot_info(
    service: SlotMachineService = Depends(get_slot_machine_service),
) -> SlotInfoResponse:
    return service.get_info()


@router.post("", response_model=SlotSpinResponse)
async def spin_slot(
    background_tasks: BackgroundTasks,
    request: Optional[SlotSpinRequest] = None,
    current_player: CurrentPlayer = Depends(get_current_player),
    service: SlotMachineService = Depends(get_slot_machine_service),
) -> SlotSpinResponse:
    """슬롯 1회 (body 생략 시 기본 10 ZVC)"""
    bet = request.bet if request else SlotSpinRequest().bet
    return await service.spin(current_player.player_id, bet, background_tasks)
