from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


DEFAULT_PANEL_HOST = "127.0.0.1"
DEFAULT_PANEL_PORT = 48620

_PANEL_HOST_ENV = "PANEL_HOST"
_PANEL_PORT_ENV = "PANEL_PORT"
_LOG_LEVEL_ENV = "LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    panel_host: str
    panel_port: int
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_port(default: int) -> int:
    value = os.getenv(_PANEL_PORT_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if 0 < parsed <= 65535 else default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        panel_host=_read_str_env(_PANEL_HOST_ENV, DEFAULT_PANEL_HOST),
        panel_port=_read_port(DEFAULT_PANEL_PORT),
        log_level=_read_log_level("INFO"),
    )
