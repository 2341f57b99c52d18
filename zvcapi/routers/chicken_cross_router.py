"""
Chicken Cross API 라우터

- GET /chickencross/info: 최소/최대 배팅
- GET /chickencross/active: 진행 중인 게임 seed (없으면 null)
- GET /chickencross?seed=N: 게임 상세 (본인 게임만)
- POST /chickencross: { intent: MOVE|CASHOUT, seed?, bet? }
"""

from fastapi import APIRouter, BackgroundTasks, Depends, Query

from zvcapi.core.auth_middleware import get_current_player
from zvcapi.deps import get_chicken_cross_service
from zvcapi.schemas.auth import CurrentPlayer
from zvcapi.schemas.chicken_cross import (
    ChickenCrossActiveResponse,
    ChickenCrossGameResponse,
    ChickenCrossInfoResponse,
    ChickenCrossMoveResponse,
    ChickenCrossRequest,
)
from zvcapi.services.chicken_cross_service import ChickenCrossService
from zvcapi.utils.randomness import SEED_UPPER_BOUND

router = APIRouter(prefix="/chickencross", tags=["chickencross"])


@router.get("/info", response_model=ChickenCrossInfoResponse)
async def get_chicken_cross_info(
    service: ChickenCrossService = Depends(get_chicken_cross_service),
) -> ChickenCrossInfoResponse:
    return service.get_info()


@router.get("/active", response_model=ChickenCrossActiveResponse)
async def get_active_game(
    current_player: CurrentPlayer = Depends(get_current_player),
    service: ChickenCrossService = Depends(get_chicken_cross_service),
) -> ChickenCrossActiveResponse:
    return service.get_active(current_player.player_id)


@router.get("", response_model=ChickenCrossGameResponse)
async def get_game(
    seed: int = Query(..., gt=0, lt=SEED_UPPER_BOUND, description="게임 seed"),
    current_player: CurrentPlayer = Depends(get_current_player),
    service: ChickenCrossService = Depends(get_chicken_cross_service),
) -> ChickenCrossGameResponse:
    return service.get_game(current_player.player_id, seed)


@router.post("", response_model=ChickenCrossMoveResponse)
async def play(
    request: ChickenCrossRequest,
    background_tasks: BackgroundTasks,
    current_player: CurrentPlayer = Depends(get_current_player),
    service: ChickenCrossService = Depends(get_chicken_cross_service),
) -> ChickenCrossMoveResponse:
    return await service.play(current_player.player_id, request, background_tasks)
