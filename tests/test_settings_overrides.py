from __future__ import annotations

from typing import Iterable

import pytest

from services.publisher import build_default_publisher
from settings import get_settings
from transport.udp import build_default_transmitter


def _clear_caches(caches: Iterable) -> None:
    for cache in caches:
        cache.cache_clear()


_CACHES = (get_settings, build_default_transmitter, build_default_publisher)


@pytest.fixture(autouse=True)
def clear_caches():
    _clear_caches(_CACHES)
    yield
    _clear_caches(_CACHES)


def test_defaults_without_environment(monkeypatch) -> None:
    for name in ("PANEL_HOST", "PANEL_PORT", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings.panel_host == "127.0.0.1"
    assert settings.panel_port == 48620
    assert settings.log_level == "INFO"


def test_environment_overrides_apply(monkeypatch) -> None:
    monkeypatch.setenv("PANEL_HOST", " 192.168.1.20 ")
    monkeypatch.setenv("PANEL_PORT", "50123")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    publisher = build_default_publisher()

    assert get_settings().log_level == "DEBUG"
    assert publisher.destination == ("192.168.1.20", 50123)


@pytest.mark.parametrize("raw", ["", "   ", "not-a-port", "0", "70000", "-1"])
def test_invalid_port_falls_back_to_default(monkeypatch, raw: str) -> None:
    monkeypatch.setenv("PANEL_PORT", raw)

    assert get_settings().panel_port == 48620


def test_blank_host_falls_back_to_default(monkeypatch) -> None:
    monkeypatch.setenv("PANEL_HOST", "  ")

    assert build_default_transmitter().destination == ("127.0.0.1", 48620)
