"""
Redis service with async operations and graceful error handling.
- Never raises exceptions (returns None/False/[] on failure)
- Lazy connection with health checks
- Automatic JSON serialization/deserialization
"""

from typing import Any, List, Optional
import redis.asyncio as redis
import json
import logging
from zvcapi.config import Settings

logger = logging.getLogger(__name__)


class RedisService:
    def __init__(self, settings: Settings):
        self._settings = settings
        self._client: Optional[redis.Redis] = None

    async def _get_client(self) -> Optional[redis.Redis]:
        """Lazy connection with health check"""
        if self._client is None:
            try:
                redis_kwargs = {
                    "host": self._settings.REDIS_HOST,
                    "port": self._settings.REDIS_PORT,
                    "db": self._settings.REDIS_DB,
                    "decode_responses": True,
                    "socket_connect_timeout": 5,
                    "socket_keepalive": True,
                    "health_check_interval": 30,
                }

                if self._settings.REDIS_PASSWORD:
                    redis_kwargs["password"] = self._settings.REDIS_PASSWORD

                self._client = redis.Redis(**redis_kwargs)
                await self._client.ping()
            except Exception as e:
                logger.warning(f"Redis connection failed: {e}")
                self._client = None
        return self._client

    async def ping(self) -> bool:
        client = await self._get_client()
        return client is not None

    async def get(self, key: str) -> Optional[Any]:
        """Get value, returns None if not found or error"""
        try:
            client = await self._get_client()
            if client is None:
                return None
            value = await client.get(key)
            return json.loads(value) if value else None
        except Exception as e:
            logger.warning(f"Redis GET failed for {key}: {e}")
            return None

    async def set(self, key: str, value: Any, ttl_seconds: Optional[int] = None) -> bool:
        """Set value (no expiry when ttl_seconds is None), returns success status"""
        try:
            client = await self._get_client()
            if client is None:
                return False
            serialized = json.dumps(value)
            if ttl_seconds:
                await client.setex(key, ttl_seconds, serialized)
            else:
                await client.set(key, serialized)
            return True
        except Exception as e:
            logger.warning(f"Redis SET failed for {key}: {e}")
            return False

    async def delete(self, key: str) -> bool:
        try:
            client = await self._get_client()
            if client is None:
                return False
            await client.delete(key)
            return True
        except Exception as e:
            logger.warning(f"Redis DELETE failed for {key}: {e}")
            return False

    async def keys_with_prefix(self, prefix: str) -> List[str]:
        """SCAN으로 prefix에 해당하는 키 목록 조회 (KEYS 명령은 쓰지 않음)"""
        try:
            client = await self._get_client()
            if client is None:
                return []
            return [key async for key in client.scan_iter(match=f"{prefix}*")]
        except Exception as e:
            logger.warning(f"Redis SCAN failed for {prefix}: {e}")
            return []

    async def close(self):
        """Close connection pool on app shutdown"""
        if self._client:
            await self._client.aclose()
