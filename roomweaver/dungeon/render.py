"""Rasterise a generated layout into tile characters.

Display collaborators (the CLI and the map endpoint) read these grids; the
generator itself never depends on them.
"""

from typing import List

from .geometry import Side
from .tiles import CAVE, DOOR, ROOM, TUNNEL

GLYPHS = {CAVE: " ", ROOM: ".", TUNNEL: "#", DOOR: "+"}


def rasterize(dungeon) -> List[List[str]]:
    """Column-major tile grid (``grid[x][y]``) for ``dungeon``."""
    w, h = dungeon.config.width, dungeon.config.height
    grid = [[CAVE for _ in range(h)] for _ in range(w)]
    for corridor in dungeon.corridors:
        for x, y in corridor.cells():
            if 0 <= x < w and 0 <= y < h:
                grid[x][y] = TUNNEL
    for room in dungeon.rooms:
        for x, y in room.cells():
            grid[x][y] = ROOM
    for room in dungeon.rooms:
        for side in Side:
            cell = room.door_cell(side)
            if cell is None:
                continue
            x, y = cell
            if 0 <= x < w and 0 <= y < h and grid[x][y] == TUNNEL:
                grid[x][y] = DOOR
    return grid


def char_to_type(ch: str) -> str:
    if ch == ROOM:
        return "room"
    if ch == TUNNEL:
        return "tunnel"
    if ch == DOOR:
        return "door"
    return "cave"


def to_rows(grid: List[List[str]]) -> List[List[str]]:
    """Row-major view (``rows[y][x]``) of a column-major tile grid."""
    if not grid:
        return []
    return [[grid[x][y] for x in range(len(grid))] for y in range(len(grid[0]))]


def to_text(grid: List[List[str]], border: bool = True) -> str:
    lines = ["".join(GLYPHS.get(ch, "?") for ch in row) for row in to_rows(grid)]
    if border and lines:
        edge = "+" + "-" * len(lines[0]) + "+"
        lines = [edge] + ["|" + line + "|" for line in lines] + [edge]
    return "\n".join(lines)


__all__ = ["rasterize", "char_to_type", "to_rows", "to_text", "GLYPHS"]
