from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Any, Mapping

from .tiles import TileSymbols

MIN_DIMENSION = 5
MAX_DIMENSION = 501


class ConfigError(ValueError):
    """Generation options rejected before any carving starts."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message

    def to_dict(self):
        return {"error": self.message, "field": self.field}


def max_dimension() -> int:
    """Largest accepted width or height (env DUNGEON_MAX_DIMENSION, default 501).

    Grid memory grows with width * height, so request input is capped.
    """
    raw = os.getenv("DUNGEON_MAX_DIMENSION")
    if not raw:
        return MAX_DIMENSION
    return _coerce_int("DUNGEON_MAX_DIMENSION", raw)


@dataclass(frozen=True)
class GeneratorOptions:
    height: int = 41
    width: int = 41
    seed: str = ""
    room_tries: int = 100
    extra_room_size: int = 0
    winding_percent: int = 0
    tiles: TileSymbols = field(default_factory=TileSymbols)
    start_index: int = 0

    def validate(self) -> "GeneratorOptions":
        for name in ("height", "width", "room_tries", "extra_room_size", "winding_percent", "start_index"):
            value = getattr(self, name)
            # bool is an int subclass; True as a width is a caller bug
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(name, "must be an integer")
        if not isinstance(self.seed, str):
            raise ConfigError("seed", "must be a string")
        if not isinstance(self.tiles, TileSymbols):
            raise ConfigError("tiles", "must be a TileSymbols instance")
        if self.height < MIN_DIMENSION:
            raise ConfigError("height", f"must be at least {MIN_DIMENSION}")
        if self.width < MIN_DIMENSION:
            raise ConfigError("width", f"must be at least {MIN_DIMENSION}")
        limit = max_dimension()
        if self.height > limit:
            raise ConfigError("height", f"must be at most {limit}")
        if self.width > limit:
            raise ConfigError("width", f"must be at most {limit}")
        if self.room_tries < 0:
            raise ConfigError("room_tries", "must not be negative")
        if self.extra_room_size < 0:
            raise ConfigError("extra_room_size", "must not be negative")
        if not 0 <= self.winding_percent <= 100:
            raise ConfigError("winding_percent", "must be between 0 and 100")
        return self

    def cache_key(self):
        return (
            self.height,
            self.width,
            self.seed,
            self.room_tries,
            self.extra_room_size,
            self.winding_percent,
            self.tiles,
            self.start_index,
        )


INT_FIELDS = ("height", "width", "room_tries", "extra_room_size", "winding_percent", "start_index")

# env var -> option field; read by defaults_from_env()
ENV_DEFAULTS = {
    "DUNGEON_DEFAULT_WIDTH": "width",
    "DUNGEON_DEFAULT_HEIGHT": "height",
    "DUNGEON_DEFAULT_ROOM_TRIES": "room_tries",
    "DUNGEON_DEFAULT_EXTRA_ROOM_SIZE": "extra_room_size",
    "DUNGEON_DEFAULT_WINDING_PERCENT": "winding_percent",
}


def _coerce_int(name: str, raw: Any) -> int:
    if isinstance(raw, bool):
        raise ConfigError(name, "must be an integer")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        s = raw.strip()
        try:
            return int(s)
        except ValueError:
            raise ConfigError(name, "must be an integer") from None
    raise ConfigError(name, "must be an integer")


def options_from_mapping(data: Mapping[str, Any], base: GeneratorOptions | None = None) -> GeneratorOptions:
    """Build validated options from loosely typed input (query args, CLI, env).

    Unknown keys are ignored; missing keys fall back to ``base`` (or defaults).
    Integer fields accept numeric strings.
    """
    changes: dict[str, Any] = {}
    for name in INT_FIELDS:
        if name in data and data[name] not in (None, ""):
            changes[name] = _coerce_int(name, data[name])
    if data.get("seed") is not None:
        changes["seed"] = str(data["seed"])
    return replace(base if base is not None else GeneratorOptions(), **changes).validate()


def defaults_from_env(environ: Mapping[str, str] | None = None) -> GeneratorOptions:
    environ = os.environ if environ is None else environ
    values = {attr: environ[key] for key, attr in ENV_DEFAULTS.items() if environ.get(key)}
    return options_from_mapping(values)


__all__ = [
    "ConfigError",
    "GeneratorOptions",
    "MAX_DIMENSION",
    "MIN_DIMENSION",
    "max_dimension",
    "defaults_from_env",
    "options_from_mapping",
]
