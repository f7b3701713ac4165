"""Public dungeon package interface."""

from .config import RANDOM_SEED, DungeonConfig, coerce_seed
from .corridors import L_SHAPED, STRAIGHT, Corridor
from .dungeon import Dungeon, InvalidConfigError
from .geometry import Edge, Point, Side
from .grid import OccupancyGrid
from .rooms import Room
from .tiles import CAVE, DOOR, ROOM, TUNNEL  # noqa: F401

__all__ = [
    "Dungeon",
    "DungeonConfig",
    "InvalidConfigError",
    "RANDOM_SEED",
    "coerce_seed",
    "Room",
    "Corridor",
    "STRAIGHT",
    "L_SHAPED",
    "Edge",
    "Point",
    "Side",
    "OccupancyGrid",
    "CAVE",
    "ROOM",
    "TUNNEL",
    "DOOR",
]
