import random

from roomweaver.dungeon import DungeonConfig, OccupancyGrid, Point, Side
from roomweaver.dungeon.metrics import init_metrics
from roomweaver.dungeon.rooms import Room, find_candidates, place_rooms
from tests.dungeon_test_utils import rooms_separated


def _place(seed, **overrides):
    cfg = DungeonConfig(**overrides)
    grid = OccupancyGrid(cfg.width, cfg.height)
    metrics = init_metrics()
    rooms = place_rooms(grid, cfg, random.Random(seed), metrics)
    return cfg, grid, rooms, metrics


def test_first_room_at_grid_midpoint():
    _, _, rooms, _ = _place(5)
    assert rooms[0].pos == Point(25, 25)


def test_rooms_respect_size_bounds_and_border():
    cfg, _, rooms, _ = _place(11)
    assert len(rooms) > 1
    for r in rooms:
        assert cfg.room_size_min <= r.size.x <= cfg.room_size_max
        assert cfg.room_size_min <= r.size.y <= cfg.room_size_max
        assert r.pos.x >= 0 and r.pos.y >= 0
        assert r.pos.x + r.size.x < cfg.width
        assert r.pos.y + r.size.y < cfg.height


def test_rooms_keep_spacing_margin():
    cfg, _, rooms, _ = _place(23)
    for i, a in enumerate(rooms):
        for b in rooms[i + 1 :]:
            assert not a.overlaps(b)
            assert rooms_separated(a, b, cfg.minimal_room_distance), f"{a} too close to {b}"


def test_grid_marks_exactly_the_room_cells():
    _, grid, rooms, _ = _place(31)
    assert grid.count_occupied() == sum(r.size.x * r.size.y for r in rooms)


def test_metrics_account_for_every_pooled_size():
    cfg, _, rooms, metrics = _place(8)
    assert metrics["rooms_requested"] == cfg.room_pool_size
    assert metrics["rooms_placed"] == len(rooms)
    assert metrics["rooms_placed"] + metrics["rooms_dropped"] == metrics["rooms_requested"]


def test_single_room_pool():
    _, _, rooms, metrics = _place(3, room_pool_size=1)
    assert len(rooms) == 1
    assert rooms[0].pos == Point(25, 25)
    assert metrics["direction_rotations"] == 0


def test_empty_pool_places_nothing():
    _, grid, rooms, _ = _place(3, room_pool_size=0)
    assert rooms == []
    assert grid.count_occupied() == 0


def test_exhaustion_discards_remaining_pool():
    # Nothing fits beside the central room on a 12x12 grid with these distances.
    _, _, rooms, metrics = _place(1, width=12, height=12, room_size_min=3, room_size_max=3, room_pool_size=20)
    assert len(rooms) == 1
    assert metrics["placement_exhausted"] is True
    assert metrics["rooms_dropped"] == 19
    assert metrics["direction_rotations"] == 4


def test_same_rng_same_rooms():
    _, _, a, _ = _place(77)
    _, _, b, _ = _place(77)
    assert [(r.pos, r.size) for r in a] == [(r.pos, r.size) for r in b]


def test_candidates_from_top_edge_share_first_feasible_row():
    cfg = DungeonConfig(width=30, height=30)
    grid = OccupancyGrid(30, 30)
    found = find_candidates(grid, Point(3, 3), Side.UP, cfg)
    assert found
    assert {p.y for p in found} == {cfg.minimal_directional_room_distance}
    assert min(p.x for p in found) == 3 and max(p.x for p in found) == 23


def test_candidates_from_left_edge_are_transposed():
    cfg = DungeonConfig(width=30, height=30)
    grid = OccupancyGrid(30, 30)
    found = find_candidates(grid, Point(3, 3), Side.LEFT, cfg)
    assert found
    assert {p.x for p in found} == {cfg.minimal_directional_room_distance}
    assert min(p.y for p in found) == 3 and max(p.y for p in found) == 23


def test_no_candidates_on_full_grid():
    cfg = DungeonConfig(width=30, height=30)
    grid = OccupancyGrid(30, 30)
    grid.place(Point(0, 0), Point(29, 29))
    for side in Side:
        assert find_candidates(grid, Point(3, 3), side, cfg) == []


def test_room_geometry_helpers():
    r = Room(Point(4, 6), Point(5, 3))
    assert r.center == Point(6, 7)
    assert r.x_range == (4, 9) and r.y_range == (6, 9)
    assert len(list(r.cells())) == 15
    assert all(v is None for v in r.doors.values())
    r.set_door(Side.LEFT, 7)
    r.set_door(Side.DOWN, 5)
    assert r.door_cell(Side.LEFT) == (3, 7)
    assert r.door_cell(Side.DOWN) == (5, 9)
    assert r.door_cell(Side.UP) is None
    assert r.to_dict()["doors"] == {"up": None, "down": 5, "left": 7, "right": None}
