"""
Reduced luck 플래그 저장소

플레이어별 키 ``reduced_luck:<playerId>`` 에 ``{"addedAt": <unix s>, "reason": ...}`` 를
저장합니다. 정산 시점에 조회되어 게임 규칙 모듈에 bool로 전달됩니다.
"""

from datetime import datetime, timezone
from typing import List, Optional

from zvcapi.config import Settings
from zvcapi.core.exceptions import InternalServerError
from zvcapi.schemas.reduced_luck import ReducedLuckEntry
from zvcapi.services.redis_service import RedisService
import logging

logger = logging.getLogger(__name__)


class ReducedLuckService:
    def __init__(self, redis_service: RedisService, settings: Settings):
        self.redis_service = redis_service
        self.prefix = settings.REDUCED_LUCK_KEY_PREFIX

    def _key(self, player_id: str) -> str:
        return f"{self.prefix}{player_id}"

    async def has_reduced_luck(self, player_id: str) -> bool:
        if await self.redis_service.get(self._key(player_id)) is not None:
            return True
        if not await self.redis_service.ping():
            # Redis 장애 시 플래그 없음으로 간주 (일반 확률로 진행)
            logger.warning(
                f"Reduced luck lookup unavailable for {player_id}: Redis is down, "
                f"playing with normal odds"
            )
        return False

    async def list_flagged(self) -> List[ReducedLuckEntry]:
        entries = []
        for key in await self.redis_service.keys_with_prefix(self.prefix):
            value = await self.redis_service.get(key)
            if value is None:
                continue
            entries.append(
                ReducedLuckEntry(
                    player_id=key[len(self.prefix):],
                    added_at=int(value.get("addedAt", 0)),
                    reason=value.get("reason"),
                )
            )
        return sorted(entries, key=lambda entry: entry.added_at)

    async def set_flag(
        self, player_id: str, has_reduced_luck: bool, reason: Optional[str] = None
    ) -> None:
        if has_reduced_luck:
            existing = await self.redis_service.get(self._key(player_id))
            if existing is not None:
                # 이미 등록된 경우 최초 등록 정보를 유지
                return
            ok = await self.redis_service.set(
                self._key(player_id),
                {
                    "addedAt": int(datetime.now(timezone.utc).timestamp()),
                    "reason": reason,
                },
            )
        else:
            ok = await self.redis_service.delete(self._key(player_id))

        if not ok:
            logger.error(f"Failed to update reduced luck flag for {player_id}")
            raise InternalServerError("Failed to update reduced luck list")

        logger.info(
            f"Reduced luck {'enabled' if has_reduced_luck else 'disabled'} for {player_id}"
        )
