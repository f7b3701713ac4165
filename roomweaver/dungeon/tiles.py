# Tile constants used when a layout is rasterised for display
CAVE = "C"
ROOM = "R"
TUNNEL = "T"
DOOR = "D"

WALKABLE = {ROOM, TUNNEL, DOOR}

__all__ = ["CAVE", "ROOM", "TUNNEL", "DOOR", "WALKABLE"]
