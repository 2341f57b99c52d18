from fastapi import APIRouter, Depends, Path, Query

from zvcapi.core.auth_middleware import get_current_player
from zvcapi.deps import get_coinflip_service
from zvcapi.schemas.auth import CurrentPlayer
from zvcapi.schemas.common import MAX_BIGINT
from zvcapi.schemas.coinflip import (
    CoinflipCancelResponse,
    CoinflipChallengeResponse,
    CoinflipCreateRequest,
    CoinflipInfoResponse,
    CoinflipOpenListResponse,
    CoinflipResultResponse,
)
from zvcapi.services.coinflip_service import CoinflipService

router = APIRouter(prefix="/coinflip", tags=["coinflip"])


@router.get("/info", response_model=CoinflipInfoResponse)
async def get_coinflip_info(
    service: CoinflipService = Depends(get_coinflip_service),
) -> CoinflipInfoResponse:
    return service.get_info()


@router.get("/open", response_model=CoinflipOpenListResponse)
async def list_open_challenges(
    limit: int = Query(50, ge=1, le=100),
    current_player: CurrentPlayer = Depends(get_current_player),
    service: CoinflipService = Depends(get_coinflip_service),
) -> CoinflipOpenListResponse:
    return service.list_open(limit=limit)


@router.post("", response_model=CoinflipChallengeResponse)
async def create_challenge(
    request: CoinflipCreateRequest,
    current_player: CurrentPlayer = Depends(get_current_player),
    service: CoinflipService = Depends(get_coinflip_service),
) -> CoinflipChallengeResponse:
    """오픈 챌린지 생성 (stake 즉시 escrow)"""
    return service.create_challenge(current_player.player_id, request.bet)


@router.post("/{challenge_id}/accept", response_model=CoinflipResultResponse)
async def accept_challenge(
    challenge_id: int = Path(..., gt=0, le=MAX_BIGINT),
    current_player: CurrentPlayer = Depends(get_current_player),
    service: CoinflipService = Depends(get_coinflip_service),
) -> CoinflipResultResponse:
    return await service.accept_challenge(current_player.player_id, challenge_id)


@router.post("/{challenge_id}/cancel", response_model=CoinflipCancelResponse)
async def cancel_challenge(
    challenge_id: int = Path(..., gt=0, le=MAX_BIGINT),
    current_player: CurrentPlayer = Depends(get_current_player),
    service: CoinflipService = Depends(get_coinflip_service),
) -> CoinflipCancelResponse:
    return service.cancel_challenge(current_player.player_id, challenge_id)
