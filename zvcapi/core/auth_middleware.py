from dependency_injector.wiring import Provide, inject
from fastapi import Depends, Request

from zvcapi.containers import Container
from zvcapi.core.exceptions import AuthenticationError, AuthorizationError
from zvcapi.schemas.auth import CurrentPlayer, SessionStatus
from zvcapi.services.auth_service import AuthService


@inject
async def get_current_player(
    request: Request,
    auth_service: AuthService = Depends(Provide[Container.services.auth_service]),
) -> CurrentPlayer:
    """필수 인증 - 유효한 세션(Bearer 또는 session 쿠키)이 필요함"""
    validation = await auth_service.validate_session(request)
    if validation.status != SessionStatus.VALID or not validation.player_id:
        raise AuthenticationError(
            "Session expired"
            if validation.status == SessionStatus.EXPIRED
            else "Not authenticated"
        )

    request.state.player_id = validation.player_id
    return CurrentPlayer(
        player_id=validation.player_id,
        is_admin=auth_service.is_admin(validation.player_id),
    )


def require_admin(
    current_player: CurrentPlayer = Depends(get_current_player),
) -> CurrentPlayer:
    """관리자 권한이 필요한 엔드포인트용 의존성"""
    if not current_player.is_admin:
        raise AuthorizationError("Admin access required")
    return current_player
