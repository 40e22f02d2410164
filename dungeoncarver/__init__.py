"""
project: Dungeon Carver
module: __init__.py
License: MIT

Flask application factory.

The web layer is a thin JSON wrapper over ``dungeoncarver.dungeon``.
Configuration is sourced from environment variables (optionally loaded from a
local ``.env``) with defaults suitable for development.
"""

import os

from dotenv import load_dotenv
from flask import Flask, jsonify

# Load .env if present so generation defaults can be supplied without
# exporting shell variables during development.
load_dotenv()

__version__ = "0.1.0"


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")


def create_app(overrides: dict | None = None) -> Flask:
    """Build a Flask app exposing the dungeon generation API."""
    from dungeoncarver.dungeon import ConfigError, defaults_from_env
    from dungeoncarver.routes.dungeon_api import bp_dungeon

    app = Flask(__name__, instance_relative_config=True)
    app.config.update(
        DUNGEON_DEFAULTS=defaults_from_env(),
        DUNGEON_DISABLE_CACHE=_env_flag("DUNGEON_DISABLE_CACHE", "0"),
        DUNGEON_CACHE_MAX=int(os.getenv("DUNGEON_CACHE_MAX", "8")),
    )
    if overrides:
        app.config.update(overrides)

    app.register_blueprint(bp_dungeon)

    @app.errorhandler(ConfigError)
    def invalid_options(e: ConfigError):
        return jsonify(e.to_dict()), 400

    return app
