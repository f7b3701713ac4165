from roomweaver.dungeon import OccupancyGrid, Point
from roomweaver.dungeon.grid import can_place, place


def test_new_grid_is_free():
    g = OccupancyGrid(10, 8)
    assert g.size == Point(10, 8)
    assert g.count_occupied() == 0
    assert g.can_place(Point(0, 0), Point(3, 3))
    assert len(g.rows()) == 8 and len(g.rows()[0]) == 10


def test_far_row_and_column_are_border():
    g = OccupancyGrid(10, 10)
    # pos + size must stay strictly inside the extent
    assert g.can_place(Point(6, 0), Point(3, 3))
    assert not g.can_place(Point(7, 0), Point(3, 3))
    assert not g.can_place(Point(0, 7), Point(3, 3))


def test_negative_position_rejected():
    g = OccupancyGrid(10, 10)
    assert not g.can_place(Point(-1, 2), Point(2, 2))
    assert not g.can_place(Point(2, -1), Point(2, 2))


def test_place_then_overlap_rejected():
    g = OccupancyGrid(10, 10)
    place(g, Point(2, 2), Point(3, 3))
    assert g.count_occupied() == 9
    assert g.occupied(Point(4, 4))
    assert not g.occupied(Point(5, 5))
    assert not can_place(g, Point(4, 4), Point(2, 2))
    assert can_place(g, Point(5, 5), Point(2, 2))


def test_negative_extent_grows_backward():
    g = OccupancyGrid(10, 10)
    g.place(Point(2, 2), Point(3, 3))
    # (5,5) growing back by 3 covers (2..4, 2..4)
    assert not g.can_place(Point(5, 5), Point(-3, -3))
    assert g.can_place(Point(8, 8), Point(-3, -3))
    g.place(Point(8, 8), Point(-1, -2))
    assert g.occupied(Point(7, 6)) and g.occupied(Point(7, 7))
    assert not g.occupied(Point(8, 8))


def test_zero_extent_is_always_free_inside_bounds():
    g = OccupancyGrid(5, 5)
    g.place(Point(0, 0), Point(4, 4))
    assert g.occupied(Point(2, 2))
    assert g.can_place(Point(2, 2), Point(0, 2))
    assert g.can_place(Point(2, 2), Point(2, 0))


def test_set_invalidates_cached_sums():
    g = OccupancyGrid(6, 6)
    assert g.can_place(Point(1, 1), Point(2, 2))
    g.set(Point(2, 2), True)
    assert not g.can_place(Point(1, 1), Point(2, 2))
    g.set(Point(2, 2), False)
    assert g.can_place(Point(1, 1), Point(2, 2))


def test_in_bounds():
    g = OccupancyGrid(4, 3)
    assert g.in_bounds(Point(3, 2))
    assert not g.in_bounds(Point(4, 0))
    assert not g.in_bounds(Point(0, -1))
