"""
Taskboard Settings
==================
One ``Settings`` object for the whole app, read from environment
variables with the ``TASKBOARD_`` prefix. Plain ``PORT`` is honoured as a
fallback so the server runs unchanged on hosts that set it.

    TASKBOARD_HOST       bind address          (127.0.0.1)
    TASKBOARD_PORT       listen port           (3000, or $PORT)
    TASKBOARD_SEED_PATH  seed JSON file        (packaged tasks.json)
    TASKBOARD_LOG_LEVEL  logging level name    (INFO)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from taskboard.seed import DEFAULT_SEED_PATH

ENV_PREFIX = "TASKBOARD"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000
DEFAULT_LOG_LEVEL = "INFO"


def _k(suffix: str) -> str:
    return f"{ENV_PREFIX}_{suffix}"


def _first(env: Mapping[str, str], *names: str) -> Optional[str]:
    for name in names:
        value = env.get(name)
        if value is not None and value.strip() != "":
            return value.strip()
    return None


def _int(raw: Optional[str], default: int) -> int:
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    seed_path: str = DEFAULT_SEED_PATH
    log_level: str = DEFAULT_LOG_LEVEL


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from ``env`` (defaults to ``os.environ``)."""
    env = os.environ if env is None else env
    return Settings(
        host=_first(env, _k("HOST")) or DEFAULT_HOST,
        port=_int(_first(env, _k("PORT"), "PORT"), DEFAULT_PORT),
        seed_path=_first(env, _k("SEED_PATH")) or DEFAULT_SEED_PATH,
        log_level=(_first(env, _k("LOG_LEVEL")) or DEFAULT_LOG_LEVEL).upper(),
    )
