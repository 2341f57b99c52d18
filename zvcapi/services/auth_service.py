from datetime import datetime, timezone
from typing import Optional

from fastapi import Request

from zvcapi.config import Settings
from zvcapi.schemas.auth import SessionStatus, SessionValidation
from zvcapi.services.redis_service import RedisService
from zvcapi.utils.player_id import normalize_player_id
import logging

logger = logging.getLogger(__name__)

SESSION_COOKIE_NAME = "session"


class AuthService:
    """로그인 세션 검증 (세션 발급은 로그인 서비스 담당)

    세션 저장 형식: ``session:<id>`` -> ``{"steamId": "...", "expiresAt": <ms epoch>}``
    """

    def __init__(self, redis_service: RedisService, settings: Settings):
        self.redis_service = redis_service
        self.settings = settings

    @staticmethod
    def extract_session_id(request: Request) -> Optional[str]:
        """Authorization: Bearer <id> 우선, 없으면 session 쿠키"""
        auth_header = request.headers.get("authorization")
        if auth_header:
            parts = auth_header.split(" ", 1)
            if len(parts) == 2 and parts[0].lower() == "bearer" and parts[1].strip():
                return parts[1].strip()
        return request.cookies.get(SESSION_COOKIE_NAME) or None

    async def validate_session(self, request: Request) -> SessionValidation:
        session_id = self.extract_session_id(request)
        if not session_id:
            return SessionValidation(status=SessionStatus.INVALID)

        key = f"{self.settings.SESSION_KEY_PREFIX}{session_id}"
        session = await self.redis_service.get(key)
        if not isinstance(session, dict) or not session.get("steamId"):
            return SessionValidation(status=SessionStatus.INVALID)

        now_ms = int(datetime.now(timezone.utc).timestamp() * 1000)
        expires_at = session.get("expiresAt")
        if not isinstance(expires_at, (int, float)) or expires_at <= now_ms:
            await self.redis_service.delete(key)
            logger.info(f"Expired session removed for {session.get('steamId')}")
            return SessionValidation(status=SessionStatus.EXPIRED)

        return SessionValidation(
            status=SessionStatus.VALID,
            player_id=normalize_player_id(str(session["steamId"])),
        )

    def is_admin(self, player_id: str) -> bool:
        admins = {normalize_player_id(admin) for admin in self.settings.ADMIN_PLAYER_IDS}
        return player_id in admins
