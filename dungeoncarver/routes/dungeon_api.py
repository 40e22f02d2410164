"""
project: Dungeon Carver
module: dungeon_api.py
License: MIT

Dungeon generation API routes.

GET /api/dungeon/generate builds (or reuses) a dungeon for the query options
and returns its JSON document; GET /api/dungeon/tiles lists the default tile
symbols and type names.
"""

import threading

from flask import Blueprint, current_app, jsonify, request

from dungeoncarver.dungeon import Dungeon, Generator, Tile, TileSymbols, options_from_mapping
from dungeoncarver.logging_utils import get_logger

log = get_logger("dungeon_api")

# Simple in-process cache options-key -> Dungeon. Guarded by a lock because the
# dev server and WSGI servers may serve requests from several threads.
_dungeon_cache = {}
_dungeon_cache_lock = threading.Lock()


def get_cached_dungeon(options) -> Dungeon:
    if current_app.config.get("DUNGEON_DISABLE_CACHE"):
        return Generator(options).run()
    key = options.cache_key()
    with _dungeon_cache_lock:
        dungeon = _dungeon_cache.get(key)
        if dungeon is not None:
            return dungeon
    dungeon = Generator(options).run()
    limit = current_app.config.get("DUNGEON_CACHE_MAX", 8)
    with _dungeon_cache_lock:
        _dungeon_cache[key] = dungeon
        while len(_dungeon_cache) > limit:
            first_key = next(iter(_dungeon_cache.keys()))
            _dungeon_cache.pop(first_key, None)
    return dungeon


def clear_cache():
    with _dungeon_cache_lock:
        _dungeon_cache.clear()


bp_dungeon = Blueprint("dungeon", __name__)


@bp_dungeon.route("/api/dungeon/generate")
def generate():
    """
    Generate a dungeon from query options.
    Query: seed, width, height, room_tries, extra_room_size, winding_percent, start_index
    Response: Dungeon.to_dict() ; 400 {'error', 'field'} on invalid options
    """
    options = options_from_mapping(request.args, base=current_app.config["DUNGEON_DEFAULTS"])
    dungeon = get_cached_dungeon(options)
    log.debug(event="api_generate", seed=options.seed, width=options.width, height=options.height)
    return jsonify(dungeon.to_dict())


@bp_dungeon.route("/api/dungeon/tiles")
def tiles():
    symbols = TileSymbols()
    return jsonify({t.name.lower(): {"code": t.value, "symbol": symbols.symbol_for(t)} for t in Tile})
