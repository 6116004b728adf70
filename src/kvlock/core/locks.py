"""Mutual-exclusion lock built on four key-value store primitives.

The stored value is the absolute expiry (epoch milliseconds) of the current
claim, never the identity of its owner. A claimant either inserts the key when
it is absent, or takes over a claim whose expiry has passed by swapping in its
own expiry and checking that the value it replaced is the one it just read.
"""

from __future__ import annotations

import abc
import logging
import threading
import time
from typing import Any, Callable, Optional

from pydantic import ValidationError

from .exceptions import AcquireInterrupted, LockTimeout, StoreUnavailable
from .models import LockConfig, LockDefaults
from .store import StoreClient
from kvlock.utils.logging import get_logger


Clock = Callable[[], int]


def _now_ms() -> int:
    return int(time.time() * 1000)


class StoreLock:
    """Timeout-bounded, self-healing lock over a :class:`StoreClient`.

    ``held`` only reflects what this instance last observed. After its claim
    expires another claimant may take the lock over without this instance
    noticing.
    """

    def __init__(
        self,
        store: StoreClient,
        name: str,
        acquire_timeout_ms: int = 10_000,
        expire_ms: int = 60_000,
        poll_interval_ms: int = 100,
        *,
        clock: Optional[Clock] = None,
        cancel_event: Optional[threading.Event] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        try:
            self.config = LockConfig(
                name=name,
                acquire_timeout_ms=acquire_timeout_ms,
                expire_ms=expire_ms,
                poll_interval_ms=poll_interval_ms,
            )
        except ValidationError as exc:
            raise ValueError(f"Invalid lock configuration for {name!r}: {exc}") from exc
        self._store = store
        self._clock = clock or _now_ms
        self._interrupt = cancel_event or threading.Event()
        self._owns_interrupt = cancel_event is None
        self._mutex = threading.RLock()
        self._held = False
        self.logger = logger or get_logger("StoreLock")

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def key(self) -> str:
        return self.config.key

    @property
    def held(self) -> bool:
        return self._held

    def acquire(self) -> bool:
        """Try to claim the lock until the acquisition budget runs out.

        Returns True once the lock is claimed and False when the budget is
        exhausted. Store failures count as a failed attempt. Raises
        :class:`AcquireInterrupted` if :meth:`interrupt` is called while waiting.
        """
        with self._mutex:
            remaining = self.config.acquire_timeout_ms
            poll_ms = self.config.poll_interval_ms
            while remaining >= 0:
                if self._attempt():
                    self._held = True
                    return True
                remaining -= poll_ms
                self._sleep(poll_ms)
            self.logger.info(
                "Gave up on %s after %d ms", self.key, self.config.acquire_timeout_ms
            )
            return False

    def acquire_or_raise(self) -> None:
        if not self.acquire():
            raise LockTimeout(
                f"Timed out acquiring {self.key}",
                name=self.name,
                timeout_ms=self.config.acquire_timeout_ms,
            )

    def release(self) -> None:
        """Delete the lock key if this instance believes it holds the lock.

        The delete is unconditional: if the claim already expired and was taken
        over, this removes the new holder's claim. When nothing was deleted
        ``held`` stays True.
        """
        with self._mutex:
            if not self._held:
                return
            try:
                removed = self._store.delete(self.key)
            except StoreUnavailable as exc:
                self.logger.error("Release of %s failed: %s", self.key, exc)
                return
            except Exception as exc:
                self.logger.error("Release of %s failed: %s", self.key, exc, exc_info=True)
                return
            if removed > 0:
                self._held = False
                self.logger.debug("Released %s", self.key)
            else:
                self.logger.warning("Release of %s removed nothing; lock may have been taken over", self.key)

    def interrupt(self) -> None:
        """Abort a current or upcoming wait between acquisition attempts."""
        self._interrupt.set()

    def _attempt(self) -> bool:
        key = self.key
        candidate = str(self._clock() + self.config.expire_ms + 1)
        try:
            if self._store.try_insert(key, candidate):
                self.logger.debug("Claimed %s until %s", key, candidate)
                return True

            observed = self._store.read(key)
            if observed is None or not self._is_expired(observed):
                return False

            previous = self._store.swap(key, candidate)
        except StoreUnavailable as exc:
            self.logger.error("Store error while acquiring %s: %s", key, exc)
            return False
        except Exception as exc:
            self.logger.error("Unexpected store failure while acquiring %s: %s", key, exc, exc_info=True)
            return False

        if previous is not None and previous == observed:
            self.logger.info("Took over expired claim on %s (expired at %s)", key, observed)
            return True
        # another claimant swapped first
        self.logger.debug("Lost takeover race on %s", key)
        return False

    def _is_expired(self, observed: str) -> bool:
        try:
            expires_at = int(observed)
        except ValueError:
            self.logger.warning("Ignoring unparseable expiry %r on %s", observed, self.key)
            return False
        return expires_at < self._clock()

    def _sleep(self, poll_ms: int) -> None:
        if self._interrupt.wait(poll_ms / 1000):
            if self._owns_interrupt:
                self._interrupt.clear()
            raise AcquireInterrupted(f"Interrupted while waiting for {self.key}")

    def __enter__(self) -> bool:
        return self.acquire()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def __repr__(self) -> str:
        return f"StoreLock(key={self.key!r}, held={self._held})"


class LockManager(abc.ABC):
    @abc.abstractmethod
    def lock(self, name: str, **overrides: Any) -> StoreLock:  # pragma: no cover - interface
        """Return a new lock for ``name``; usable as a context manager yielding the acquired flag."""
        raise NotImplementedError

    def close(self) -> None:
        """Release resources held by the manager."""


class StoreLockManager(LockManager):
    """Hands out independent :class:`StoreLock` instances sharing one store."""

    def __init__(self, store: StoreClient, defaults: Optional[LockDefaults] = None) -> None:
        self._store = store
        self.defaults = defaults or LockDefaults()

    def lock(self, name: str, **overrides: Any) -> StoreLock:
        params = self.defaults.model_dump()
        params.update(overrides)
        return StoreLock(self._store, name, **params)

    def close(self) -> None:
        close = getattr(self._store, "close", None)
        if close is not None:
            close()
