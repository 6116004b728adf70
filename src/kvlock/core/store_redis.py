"""Redis-backed store client using SETNX/GET/GETSET/DEL."""

from __future__ import annotations

from typing import Optional

from redis import Redis
from redis.exceptions import RedisError

from .exceptions import StoreUnavailable
from kvlock.utils.env import get_str_env


DEFAULT_REDIS_URL = "redis://localhost:6379/0"


class RedisStore:
    def __init__(self, url: Optional[str] = None, *, client: Optional[Redis] = None) -> None:
        if client is None:
            client = Redis.from_url(url or get_str_env("REDIS_URL", default=DEFAULT_REDIS_URL), decode_responses=True)
        self._redis = client

    def try_insert(self, key: str, value: str) -> bool:
        try:
            return bool(self._redis.setnx(key, value))
        except RedisError as exc:
            raise StoreUnavailable(f"setnx failed for {key}: {exc}", key=key) from exc

    def read(self, key: str) -> Optional[str]:
        try:
            return self._decode(self._redis.get(key))
        except (RedisError, UnicodeDecodeError) as exc:
            raise StoreUnavailable(f"get failed for {key}: {exc}", key=key) from exc

    def swap(self, key: str, value: str) -> Optional[str]:
        try:
            return self._decode(self._redis.getset(key, value))
        except (RedisError, UnicodeDecodeError) as exc:
            raise StoreUnavailable(f"getset failed for {key}: {exc}", key=key) from exc

    def delete(self, key: str) -> int:
        try:
            return int(self._redis.delete(key))
        except RedisError as exc:
            raise StoreUnavailable(f"del failed for {key}: {exc}", key=key) from exc

    def close(self) -> None:
        self._redis.close()

    @staticmethod
    def _decode(raw) -> Optional[str]:
        # clients built without decode_responses hand back bytes
        if isinstance(raw, bytes):
            return raw.decode("utf-8")
        return raw
