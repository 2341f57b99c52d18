from fastapi import APIRouter, BackgroundTasks, Depends

from zvcapi.core.auth_middleware import get_current_player
from zvcapi.deps import get_lucky_wheel_service
from zvcapi.schemas.auth import CurrentPlayer
from zvcapi.schemas.games import BetRequest, LuckyWheelInfoResponse, LuckyWheelSpinResponse
from zvcapi.services.lucky_wheel_service import LuckyWheelService

router = APIRouter(prefix="/luckywheel", tags=["luckywheel"])


@router.get("/info", response_model=LuckyWheelInfoResponse)
async def get_lucky_wheel_info(
    service: LuckyWheelService = Depends(get_lucky_wheel_service),
) -> LuckyWheelInfoResponse:
    return service.get_info()


@router.post("", response_model=LuckyWheelSpinResponse)
async def spin_lucky_wheel(
    request: BetRequest,
    background_tasks: BackgroundTasks,
    current_player: CurrentPlayer = Depends(get_current_player),
    service: LuckyWheelService = Depends(get_lucky_wheel_service),
) -> LuckyWheelSpinResponse:
    return await service.spin(current_player.player_id, request.bet, background_tasks)
