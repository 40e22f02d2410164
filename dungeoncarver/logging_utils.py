"""Minimal structured logging helper.

Emits key=value pairs with a timestamp and level (or one JSON object per line)
so generation runs are easy to grep and parse.

Usage:
    from dungeoncarver.logging_utils import get_logger
    log = get_logger("dungeon")
    log.info(event="dungeon_generated", seed="abc", rooms=7)

Non-numeric values are str()'d with spaces replaced. Reserved keys: level, ts.
Threshold and format come from DUNGEONCARVER_LOG_LEVEL / DUNGEONCARVER_LOG_JSON,
read when each line is emitted so tests and .env files can change them late.
"""

from __future__ import annotations

import json
import os
import sys
import time
from contextlib import contextmanager

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}

# Used when DUNGEONCARVER_LOG_LEVEL is unset; see default_level()
_default_level = "info"


def _current_level() -> int:
    return LEVELS.get(os.getenv("DUNGEONCARVER_LOG_LEVEL", _default_level).lower(), 20)


@contextmanager
def default_level(level: str):
    """Temporarily change the threshold used when the env var is unset.

    An explicit DUNGEONCARVER_LOG_LEVEL still wins.
    """
    global _default_level
    previous = _default_level
    _default_level = level
    try:
        yield
    finally:
        _default_level = previous


def _json_mode() -> bool:
    return os.getenv("DUNGEONCARVER_LOG_JSON", "0").lower() in ("1", "true", "yes", "on")


def _format(level: str, **fields):
    if _json_mode():
        rec = {k: v for k, v in fields.items() if v is not None}
        rec["level"] = level
        rec["ts"] = int(time.time())
        return json.dumps(rec, separators=(",", ":"), default=str)
    parts = [f"level={level}", f"ts={int(time.time())}"]
    for k, v in fields.items():
        if v is None:
            continue
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            parts.append(f"{k}={v}")
        else:
            s = str(v).replace(" ", "_")
            parts.append(f"{k}={s}")
    return " ".join(parts)


class _Logger:
    def __init__(self, name: str | None = None):
        self.name = name or "dungeoncarver"

    def _log(self, lvl: str, **fields):
        if LEVELS[lvl] < _current_level():
            return
        if "logger" not in fields:
            fields["logger"] = self.name
        print(_format(lvl, **fields), file=sys.stdout if lvl in ("debug", "info") else sys.stderr)

    def debug(self, **fields):
        self._log("debug", **fields)

    def info(self, **fields):
        self._log("info", **fields)

    def warn(self, **fields):
        self._log("warn", **fields)

    def error(self, **fields):
        self._log("error", **fields)


_LOGGER_CACHE = {}


def get_logger(name: str):
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


log = get_logger("dungeoncarver")
