import random

import pytest

from pairlink.components.tile import TileKind
from pairlink.constants import EMPTY_KIND
from pairlink.errors import ConfigurationError
from pairlink.events.bus import EventBus
from pairlink.systems.grid import GridModel, build_kind_pool
from pairlink.world import create_world


def _grid(seed=99):
    world = create_world(EventBus(), rng=random.Random(seed))
    return world, GridModel(world)


def test_pool_assigns_kinds_round_robin_in_pairs():
    assert build_kind_pool(2, 3, 2) == [1, 1, 2, 2, 1, 1]
    assert build_kind_pool(1, 3, 4) == [1, 1]


@pytest.mark.parametrize("rows, cols, kinds", [(8, 10, 6), (3, 3, 2), (5, 7, 4), (1, 2, 1), (4, 4, 9)])
def test_initialize_deals_complete_pairs(rows, cols, kinds):
    _, grid = _grid()
    grid.initialize(rows, cols, kinds)

    active = grid.active_cells()
    assert len(active) == 2 * ((rows * cols) // 2)
    for kind, count in grid.kind_counts().items():
        assert 1 <= kind <= kinds
        assert count % 2 == 0


def test_odd_cell_count_leaves_last_cell_empty():
    _, grid = _grid()
    grid.initialize(3, 3, 2)
    assert grid.kind_at(2, 2) == EMPTY_KIND
    assert len(grid.active_cells()) == 8


def test_every_position_has_one_cell_entity():
    world, grid = _grid()
    grid.initialize(3, 4, 3)
    assert sorted(grid.board.cells) == [(r, c) for r in range(3) for c in range(4)]
    assert len(list(world.get_component(TileKind))) == 12


def test_reinitialize_replaces_old_cells():
    world, grid = _grid()
    grid.initialize(4, 4, 2)
    grid.initialize(2, 3, 1)
    assert (grid.rows, grid.cols) == (2, 3)
    assert len(list(world.get_component(TileKind))) == 6
    assert grid.get(3, 3) is None


def test_same_seed_gives_same_board():
    _, first = _grid(seed=5)
    _, second = _grid(seed=5)
    first.initialize(6, 6, 4)
    second.initialize(6, 6, 4)
    assert first.snapshot() == second.snapshot()


def test_get_out_of_bounds_returns_none():
    _, grid = _grid()
    grid.initialize(2, 2, 1)
    assert grid.get(-1, 0) is None
    assert grid.get(0, 2) is None
    assert grid.kind_at(2, 0) is None
    assert grid.get(1, 1).pos == (1, 1)


def test_clear_is_idempotent():
    _, grid = _grid()
    grid.initialize(2, 2, 1)
    cell = grid.get(0, 0)
    grid.clear(cell)
    assert cell.is_empty
    grid.clear(cell)
    grid.clear((0, 0))
    assert grid.kind_at(0, 0) == EMPTY_KIND
    assert len(grid.active_cells()) == 3


def test_clear_outside_grid_is_ignored():
    _, grid = _grid()
    grid.initialize(2, 2, 1)
    grid.clear((5, 5))
    assert len(grid.active_cells()) == 4


def test_set_kind_outside_grid_raises():
    _, grid = _grid()
    grid.initialize(2, 2, 1)
    with pytest.raises(IndexError):
        grid.set_kind((2, 0), 1)


def test_cells_iterate_row_major():
    _, grid = _grid()
    grid.initialize(2, 3, 1)
    assert [cell.pos for cell in grid.cells()] == [(0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2)]


def test_invalid_dimensions_leave_existing_grid_untouched():
    _, grid = _grid()
    grid.initialize(2, 2, 1)
    before = grid.snapshot()
    with pytest.raises(ConfigurationError):
        grid.initialize(1, 1, 1)
    with pytest.raises(ConfigurationError):
        grid.initialize(2, 2, 0)
    assert grid.snapshot() == before


def test_load_layout_and_snapshot():
    _, grid = _grid()
    grid.initialize(2, 3, 2)
    grid.load_layout([[1, 0, 2], [2, 0, 1]])
    snapshot = grid.snapshot()
    assert snapshot.kinds == ((1, 0, 2), (2, 0, 1))
    assert snapshot.active_positions() == [(0, 0), (0, 2), (1, 0), (1, 2)]
    assert snapshot.kind_counts() == {1: 2, 2: 2}
    assert snapshot.kind_at(5, 5) is None
    assert snapshot.pretty() == "1 . 2\n2 . 1"
    with pytest.raises(ValueError):
        grid.load_layout([[1, 1]])


def test_is_empty_after_clearing_everything():
    _, grid = _grid()
    grid.initialize(2, 2, 1)
    for cell in grid.cells():
        grid.clear(cell)
    assert grid.is_empty()
    assert grid.snapshot().is_empty()
