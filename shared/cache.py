"""
Shared Redis cache utilities.
"""
import json
import logging
from typing import Any, Callable, Optional

from django.core.cache import cache
from django.core.serializers.json import DjangoJSONEncoder

logger = logging.getLogger(__name__)


class CacheService:
    """Redis cache wrapper with prefix support.

    Structured values are stored as JSON so cached payloads stay readable
    from redis-cli and other consumers.
    """

    def __init__(self, prefix: str = "", timeout: int = 300):
        self.prefix = prefix
        self.timeout = timeout

    def _key(self, key: str) -> str:
        return f"{self.prefix}:{key}" if self.prefix else key

    def get(self, key: str) -> Optional[Any]:
        value = cache.get(self._key(key))
        if isinstance(value, str):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                return value
        return value

    def set(self, key: str, value: Any, timeout: int = None) -> None:
        if isinstance(value, (dict, list)):
            value = json.dumps(value, cls=DjangoJSONEncoder)
        cache.set(self._key(key), value, timeout if timeout is not None else self.timeout)

    def delete(self, *keys: str) -> None:
        cache.delete_many([self._key(key) for key in keys])

    def get_or_set(self, key: str, default_func: Callable[[], Any], timeout: int = None) -> Any:
        """Return the cached value, computing and storing it on a miss."""
        value = self.get(key)
        if value is None:
            logger.debug(f"Cache miss for {self._key(key)}")
            value = default_func()
            self.set(key, value, timeout)
            # Hand back what a later hit would return
            value = self.get(key)
        return value


category_cache = CacheService(prefix="category", timeout=60 * 60)
