"""Lock manager backed by a Redis store."""

from __future__ import annotations

from typing import Optional

from redis import Redis

from .locks import StoreLockManager
from .models import LockDefaults
from .store_redis import RedisStore


class RedisLockManager(StoreLockManager):
    def __init__(
        self,
        url: Optional[str] = None,
        *,
        client: Optional[Redis] = None,
        defaults: Optional[LockDefaults] = None,
    ) -> None:
        super().__init__(RedisStore(url, client=client), defaults)
