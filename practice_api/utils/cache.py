"""
Redis cache utility for generated test snapshots
"""
import redis
import json
import logging
from typing import Optional, Any
from practice_api.config import settings

logger = logging.getLogger(__name__)


class CacheService:
    """
    Redis-based cache for immutable generated-test snapshots

    Snapshots never change after creation, so entries are only ever
    written once and expire by TTL. Any Redis failure degrades to a miss.
    """

    def __init__(self, redis_url: Optional[str] = None, enabled: bool = True):
        self.redis_client = None
        if not enabled:
            logger.info("Snapshot cache disabled by configuration")
            return

        try:
            self.redis_client = redis.from_url(
                redis_url or settings.REDIS_URL,
                decode_responses=True,
                socket_connect_timeout=5
            )
            # Test connection
            self.redis_client.ping()
            logger.info("Redis connection established")
        except redis.RedisError as e:
            logger.warning(f"Redis connection failed: {str(e)}. Caching disabled.")
            self.redis_client = None

    @staticmethod
    def snapshot_key(test_id) -> str:
        """Cache key for a generated test snapshot"""
        return f"practice_test:snapshot:{test_id}"

    def get(self, key: str) -> Optional[Any]:
        """
        Get value from cache

        Args:
            key: Cache key

        Returns:
            Cached value or None
        """
        if not self.redis_client:
            return None

        try:
            value = self.redis_client.get(key)
            if value:
                logger.debug(f"Cache hit: {key}")
                return json.loads(value)
            logger.debug(f"Cache miss: {key}")
            return None
        except (redis.RedisError, ValueError) as e:
            logger.error(f"Cache get error: {str(e)}")
            return None

    def set(self, key: str, value: Any, ttl: int = None) -> bool:
        """
        Set value in cache

        Args:
            key: Cache key
            value: Value to cache (must be JSON serializable)
            ttl: Time to live in seconds (default from settings)

        Returns:
            Success status
        """
        if not self.redis_client:
            return False

        try:
            ttl = ttl or settings.SNAPSHOT_CACHE_TTL
            self.redis_client.setex(key, ttl, json.dumps(value))
            logger.debug(f"Cache set: {key} (TTL: {ttl}s)")
            return True
        except (redis.RedisError, TypeError) as e:
            logger.error(f"Cache set error: {str(e)}")
            return False


# Global instance
cache_service = CacheService(enabled=settings.CACHE_ENABLED)
