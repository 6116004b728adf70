"""Settings loader for lock managers."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from .models import LockDefaults


class LockSettings(BaseModel):
    redis_url: Optional[str] = None
    lock_name: str = Field(default="kvlock", min_length=1)
    defaults: LockDefaults = Field(default_factory=LockDefaults)

    @classmethod
    def from_file(cls, path: Path) -> "LockSettings":
        data = yaml.safe_load(path.read_text()) or {}
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ValueError(f"Invalid lock settings: {exc}") from exc
