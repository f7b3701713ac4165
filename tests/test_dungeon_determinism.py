from roomweaver.dungeon import Dungeon, DungeonConfig
from tests.dungeon_test_utils import layout_signature


def test_same_seed_same_layout():
    runs = [Dungeon(DungeonConfig(seed=314159)) for _ in range(3)]
    signatures = [layout_signature(d) for d in runs]
    assert signatures[0] == signatures[1] == signatures[2]


def test_regenerate_is_idempotent():
    d = Dungeon(DungeonConfig(seed=2718))
    before = layout_signature(d)
    d.generate()
    assert layout_signature(d) == before
    assert d.grid.count_occupied() == Dungeon(DungeonConfig(seed=2718)).grid.count_occupied()


def test_different_seeds_differ():
    a = layout_signature(Dungeon(DungeonConfig(seed=1)))
    b = layout_signature(Dungeon(DungeonConfig(seed=2)))
    assert a != b


def test_random_seed_is_resolved_and_reproducible():
    d = Dungeon(DungeonConfig(seed=-1))
    assert isinstance(d.seed, int) and 0 <= d.seed <= 2**31 - 1
    replay = Dungeon(DungeonConfig(seed=d.seed))
    assert layout_signature(replay)["rooms"] == layout_signature(d)["rooms"]
    assert layout_signature(replay)["corridors"] == layout_signature(d)["corridors"]


def test_metrics_do_not_change_layout():
    with_metrics = Dungeon(DungeonConfig(seed=99, enable_metrics=True))
    without = Dungeon(DungeonConfig(seed=99, enable_metrics=False))
    assert without.metrics == {}
    assert layout_signature(with_metrics) == layout_signature(without)
