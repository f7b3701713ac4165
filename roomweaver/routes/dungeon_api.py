"""
project: roomweaver
module: dungeon_api.py
License: MIT

Layout configuration and retrieval API routes.

A configuration-editing client mutates the active DungeonConfig through these
endpoints; every accepted change regenerates the layout from scratch. A
rendering client reads the current rooms/corridors/edges (or the rasterised
tile map) after each change.
"""

import dataclasses
import threading

from flask import Blueprint, current_app, jsonify, request

from roomweaver.dungeon import Dungeon, DungeonConfig, InvalidConfigError, coerce_seed
from roomweaver.dungeon.config import RANDOM_SEED
from roomweaver.dungeon.render import char_to_type, rasterize
from roomweaver.logging_utils import get_logger

log = get_logger("roomweaver.api")

bp_dungeon = Blueprint("dungeon", __name__)

# One active layout per process. Requests may arrive on several threads, so
# swaps of the active config/dungeon pair happen under the lock.
_active = {"config": None, "dungeon": None}
_active_lock = threading.Lock()


def _initial_config() -> DungeonConfig:
    cfg = DungeonConfig.from_env()
    if "ROOMWEAVER_ENABLE_GENERATION_METRICS" in current_app.config:
        cfg.enable_metrics = bool(current_app.config["ROOMWEAVER_ENABLE_GENERATION_METRICS"])
    return cfg


def get_active_dungeon() -> Dungeon:
    with _active_lock:
        if _active["dungeon"] is None:
            cfg = _active["config"] or _initial_config()
            _active["config"] = cfg
            _active["dungeon"] = Dungeon(dataclasses.replace(cfg))
        return _active["dungeon"]


def _activate(cfg: DungeonConfig) -> Dungeon:
    dungeon = Dungeon(dataclasses.replace(cfg))
    with _active_lock:
        _active["config"] = cfg
        _active["dungeon"] = dungeon
    log.info(event="layout_regenerated", seed=dungeon.seed, rooms=len(dungeon.rooms))
    return dungeon


def reset_active_dungeon() -> None:
    with _active_lock:
        _active["config"] = None
        _active["dungeon"] = None


def _error(message, details=None, status=400):
    payload = {"error": message}
    if details:
        payload["details"] = details
    return jsonify(payload), status


@bp_dungeon.route("/api/dungeon/config", methods=["GET"])
def get_config():
    """
    Return the active generation config.
    Response: { 'seed': 39129, 'room_size_min': 3, ... }
    """
    get_active_dungeon()
    return jsonify(_active["config"].to_dict())


@bp_dungeon.route("/api/dungeon/config", methods=["POST"])
def update_config():
    """Apply a partial config update and regenerate.

    Body JSON: any subset of DungeonConfig fields.
    Response: { 'config': {...}, 'seed': <resolved seed>, 'rooms': <count> }
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return _error("expected a JSON object")
    get_active_dungeon()
    cfg = dataclasses.replace(_active["config"])
    try:
        cfg.update(**data)
    except KeyError as exc:
        return _error("unknown config field", [str(exc.args[0])])
    except (TypeError, ValueError) as exc:
        return _error("invalid config value", [str(exc)])
    errors = cfg.validate()
    if errors:
        return _error("invalid config", errors)
    try:
        dungeon = _activate(cfg)
    except InvalidConfigError as exc:
        return _error("invalid config", exc.errors)
    return jsonify({"config": cfg.to_dict(), "seed": dungeon.seed, "rooms": len(dungeon.rooms)})


@bp_dungeon.route("/api/dungeon/seed", methods=["POST"])
def set_seed():
    """Set (or randomise) the seed and regenerate.

    Body JSON (all optional):
      { "seed": <int|str|null>, "regenerate": <bool> }
    - seed omitted/null with regenerate true => random seed.
    - int or string seed => deterministic (strings are hashed).

    Response: { "seed": <resolved int> }
    """
    data = request.get_json(silent=True) or {}
    provided = data.get("seed")
    if data.get("regenerate") and provided is None:
        seed = RANDOM_SEED
    else:
        try:
            seed = coerce_seed(provided)
        except ValueError as exc:
            return _error("invalid seed", [str(exc)])
    get_active_dungeon()
    cfg = dataclasses.replace(_active["config"], seed=seed)
    dungeon = _activate(cfg)
    return jsonify({"seed": dungeon.seed})


@bp_dungeon.route("/api/dungeon/layout")
def dungeon_layout():
    """
    Return the generated layout for drawing.
    Response: { 'seed', 'width', 'height', 'rooms': [...], 'corridors': [...], 'edges': [...], 'metrics': {...} }
    """
    return jsonify(get_active_dungeon().to_dict())


@bp_dungeon.route("/api/dungeon/map")
def dungeon_map():
    """
    Return the rasterised tile map, row-major so grid[y][x] matches screen orientation.
    Response: { 'seed', 'width', 'height', 'grid': [[type, ...], ...] }
    """
    dungeon = get_active_dungeon()
    tiles = rasterize(dungeon)
    grid = [[char_to_type(tiles[x][y]) for x in range(dungeon.width)] for y in range(dungeon.height)]
    return jsonify({"seed": dungeon.seed, "width": dungeon.width, "height": dungeon.height, "grid": grid})
