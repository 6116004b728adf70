from __future__ import annotations

import logging

from kvlock.utils.env import get_bool_env, get_str_env
from kvlock.utils.logging import get_logger


def test_bool_env(monkeypatch):
    monkeypatch.delenv("KVLOCK_FLAG", raising=False)
    assert get_bool_env("KVLOCK_FLAG", default=True) is True

    monkeypatch.setenv("KVLOCK_FLAG", "off")
    assert get_bool_env("KVLOCK_FLAG", default=True) is False

    monkeypatch.setenv("KVLOCK_FLAG", " yes ")
    assert get_bool_env("KVLOCK_FLAG") is True


def test_str_env(monkeypatch):
    monkeypatch.setenv("KVLOCK_URL", "   ")
    assert get_str_env("KVLOCK_URL", default="fallback") == "fallback"

    monkeypatch.setenv("KVLOCK_URL", " redis://x ")
    assert get_str_env("KVLOCK_URL") == "redis://x"


def test_logger_is_configured_once():
    first = get_logger("kvlock-test-plain", rich=False)
    second = get_logger("kvlock-test-plain", rich=True)

    assert first is second
    assert len(first.handlers) == 1
    assert isinstance(first.handlers[0], logging.StreamHandler)
    assert first.propagate is False
