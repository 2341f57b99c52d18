from fastapi import APIRouter, BackgroundTasks, Depends

from zvcapi.core.auth_middleware import get_current_player
from zvcapi.deps import get_roulette_service
from zvcapi.schemas.auth import CurrentPlayer
from zvcapi.schemas.games import RouletteBetRequest, RouletteInfoResponse, RouletteSpinResponse
from zvcapi.services.roulette_service import RouletteService

router = APIRouter(prefix="/roulette", tags=["roulette"])


@router.get("/info", response_model=RouletteInfoResponse)
async def get_roulette_info(
    service: RouletteService = Depends(get_roulette_service),
) -> RouletteInfoResponse:
    return service.get_info()


@router.post("", response_model=RouletteSpinResponse)
async def spin_roulette(
    request: RouletteBetRequest,
    background_tasks: BackgroundTasks,
    current_player: CurrentPlayer = Depends(get_current_player),
    service: RouletteService = Depends(get_roulette_service),
) -> RouletteSpinResponse:
    return await service.spin(current_player.player_id, request, background_tasks)
