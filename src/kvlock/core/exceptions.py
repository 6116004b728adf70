"""kvlock exception classes."""


class KVLockError(Exception):
    """Base exception for all kvlock errors."""


class StoreUnavailable(KVLockError):
    """Raised by a store client when a primitive call fails."""

    def __init__(self, message: str, *, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


class LockTimeout(KVLockError):
    """Raised when the acquisition budget ran out and the caller asked for an exception."""

    def __init__(self, message: str, *, name: str | None = None, timeout_ms: int | None = None) -> None:
        super().__init__(message)
        self.name = name
        self.timeout_ms = timeout_ms


class AcquireInterrupted(KVLockError):
    """Raised when a waiting acquirer is interrupted between polls."""
