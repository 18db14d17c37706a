import json
import logging
from typing import Any, Optional
import redis.asyncio as redis
from partner_app.core.config import settings

logger = logging.getLogger(__name__)

class KeyValueStorage:
    """
    Device-local key-value storage backed by Redis.
    Reads and writes never raise: a storage outage only means nothing is restored.
    """

    def __init__(self, redis_client: Optional[redis.Redis]):
        self.redis = redis_client

    async def get_item(self, key: str) -> Optional[str]:
        if self.redis is None:
            logger.warning(f"Storage unavailable, cannot read '{key}'.")
            return None
        try:
            return await self.redis.get(key)
        except Exception as e:
            logger.error(f"Storage read error for '{key}': {e}", exc_info=True)
            return None

    async def set_item(self, key: str, value: str) -> bool:
        if self.redis is None:
            logger.warning(f"Storage unavailable, cannot write '{key}'.")
            return False
        try:
            await self.redis.set(key, value)
            return True
        except Exception as e:
            logger.warning(f"Storage write error for '{key}': {e}", exc_info=True)
            return False

    async def remove_item(self, key: str) -> None:
        if self.redis is None:
            return
        try:
            await self.redis.delete(key)
        except Exception as e:
            logger.warning(f"Storage delete error for '{key}': {e}", exc_info=True)

    async def get_json(self, key: str) -> Optional[Any]:
        raw = await self.get_item(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning(f"Discarding corrupt JSON stored under '{key}'.")
            return None

    async def set_json(self, key: str, value: Any) -> bool:
        return await self.set_item(key, json.dumps(value))


class TokenStore:
    def __init__(self, storage: KeyValueStorage, key: str = settings.ACCESS_TOKEN_KEY):
        self.storage = storage
        self.key = key

    async def get_access_token(self) -> Optional[str]:
        return await self.storage.get_item(self.key)

    async def set_access_token(self, token: str) -> bool:
        return await self.storage.set_item(self.key, token)

    async def clear(self) -> None:
        await self.storage.remove_item(self.key)
