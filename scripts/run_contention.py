"""CLI entrypoint that makes several worker threads contend for one lock."""

from __future__ import annotations

import argparse
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from kvlock.core import AcquireInterrupted, InMemoryStore, LockManager, LockSettings, StoreLockManager
from kvlock.utils.logging import get_logger


logger = get_logger("ContentionDemo")


def _load_settings(path: Path | None) -> LockSettings:
    if path is None or not path.exists():
        logger.warning("No settings file provided; using built-in lock defaults.")
        return LockSettings()
    return LockSettings.from_file(path)


def _build_manager(settings: LockSettings, *, memory: bool) -> LockManager:
    if memory:
        return StoreLockManager(InMemoryStore(), settings.defaults)
    from kvlock.core.locks_redis import RedisLockManager

    return RedisLockManager(settings.redis_url, defaults=settings.defaults)


def _worker(manager: LockManager, name: str, work_ms: int) -> bool:
    worker = threading.current_thread().name
    lock = manager.lock(name)
    try:
        with lock as acquired:
            if not acquired:
                logger.info("%s could not acquire %s", worker, lock.key)
                return False
            logger.info("%s acquired %s; working for %d ms", worker, lock.key, work_ms)
            time.sleep(work_ms / 1000)
        logger.info("%s released %s (still held locally: %s)", worker, lock.key, lock.held)
        return True
    except AcquireInterrupted:
        logger.warning("%s was interrupted while waiting for %s", worker, lock.key)
        return False


def main() -> None:
    parser = argparse.ArgumentParser(description="Run several threads against one store-backed lock.")
    parser.add_argument("--config", type=Path, default=Path("config/locks.example.yml"), help="Path to settings YAML")
    parser.add_argument("--name", default=None, help="Lock name (overrides the settings file)")
    parser.add_argument("--workers", type=int, default=5, help="Number of contending threads")
    parser.add_argument("--work-ms", type=int, default=200, help="Simulated critical section length")
    parser.add_argument("--memory", action="store_true", help="Use an in-process store instead of Redis")
    args = parser.parse_args()

    settings = _load_settings(args.config)
    name = args.name or settings.lock_name
    manager = _build_manager(settings, memory=args.memory)
    logger.info("Starting %d workers on lock %r", args.workers, name)
    try:
        with ThreadPoolExecutor(max_workers=args.workers, thread_name_prefix="worker") as pool:
            futures = [pool.submit(_worker, manager, name, args.work_ms) for _ in range(args.workers)]
            results = [future.result() for future in futures]
    finally:
        manager.close()
    logger.info("%d of %d workers acquired the lock", sum(results), len(results))


if __name__ == "__main__":
    main()
