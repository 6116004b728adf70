"""Data models shared across kvlock."""

from __future__ import annotations

from pydantic import BaseModel, Field


LOCK_KEY_SUFFIX = "_lock"


class LockDefaults(BaseModel):
    """Timing parameters applied to every lock a manager hands out."""

    acquire_timeout_ms: int = Field(default=10_000, ge=0)
    expire_ms: int = Field(default=60_000, gt=0)
    poll_interval_ms: int = Field(default=100, gt=0)


class LockConfig(LockDefaults):
    """Configuration for a single named lock."""

    name: str = Field(min_length=1)

    @property
    def key(self) -> str:
        return f"{self.name}{LOCK_KEY_SUFFIX}"
