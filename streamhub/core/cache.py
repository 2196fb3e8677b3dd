import json
import logging
import zlib
from typing import Optional, Any
import redis
from .config import get_settings

logger = logging.getLogger(__name__)


class CacheService:
    """Basit Redis cache servisi (JSON + opsiyonel zlib)

    Every failure is treated as a cache miss so discovery reads never depend
    on Redis being reachable.
    """

    def __init__(self, url: Optional[str] = None, compress: bool = True, client=None, enabled: Optional[bool] = None):
        settings = get_settings()
        self.enabled = settings.CACHE_ENABLED if enabled is None else enabled
        self.compress = compress
        self.redis = client
        if self.redis is None and self.enabled:
            self.redis = redis.Redis.from_url(url or settings.REDIS_URL, decode_responses=False)

    @staticmethod
    def epg_key(channel_id: int, day) -> str:
        return f"epg:{channel_id}:{day.isoformat()}"

    def get_json(self, key: str) -> Optional[Any]:
        if not self.enabled:
            return None
        try:
            data = self.redis.get(key)
        except redis.RedisError as e:
            logger.warning(f"Cache read failed for {key}: {str(e)}")
            return None
        if data is None:
            return None
        if self.compress:
            try:
                data = zlib.decompress(data)
            except zlib.error:
                pass
        try:
            if isinstance(data, bytes):
                data = data.decode("utf-8")
            return json.loads(data)
        except ValueError:
            logger.warning(f"Discarding undecodable cache entry {key}")
            return None

    def set_json(self, key: str, value: Any, ttl_seconds: int) -> bool:
        if not self.enabled:
            return False
        raw = json.dumps(value, ensure_ascii=False, default=str).encode("utf-8")
        payload = zlib.compress(raw) if self.compress else raw
        try:
            self.redis.setex(key, ttl_seconds, payload)
        except redis.RedisError as e:
            logger.warning(f"Cache write failed for {key}: {str(e)}")
            return False
        return True

    def delete(self, key: str) -> int:
        if not self.enabled:
            return 0
        try:
            return int(self.redis.delete(key))
        except redis.RedisError as e:
            logger.warning(f"Cache delete failed for {key}: {str(e)}")
            return 0


_cache: Optional[CacheService] = None

def get_cache() -> CacheService:
    """Process-wide cache; one Redis connection pool shared by all requests"""
    global _cache
    if _cache is None:
        _cache = CacheService()
    return _cache
