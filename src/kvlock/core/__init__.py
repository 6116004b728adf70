"""Core lock primitives for kvlock."""

from .exceptions import AcquireInterrupted, KVLockError, LockTimeout, StoreUnavailable
from .locks import LockManager, StoreLock, StoreLockManager
from .models import LockConfig, LockDefaults
from .settings import LockSettings
from .store import InMemoryStore, StoreClient

__all__ = [
    "AcquireInterrupted",
    "KVLockError",
    "LockTimeout",
    "StoreUnavailable",
    "LockManager",
    "StoreLock",
    "StoreLockManager",
    "LockConfig",
    "LockDefaults",
    "LockSettings",
    "InMemoryStore",
    "StoreClient",
]
