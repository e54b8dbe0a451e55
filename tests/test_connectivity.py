import itertools
import random

from pairlink.constants import EMPTY_KIND
from pairlink.systems.connectivity import (
    can_connect,
    find_connectable_pairs,
    find_path,
    has_valid_moves,
    is_segment_clear,
)
from pairlink.systems.grid import GridSnapshot


def snap(layout):
    return GridSnapshot(rows=len(layout), cols=len(layout[0]), kinds=tuple(tuple(line) for line in layout))


def _random_board(seed, rows=6, cols=6, kinds=3, empty_ratio=0.4):
    rng = random.Random(seed)
    layout = [
        [EMPTY_KIND if rng.random() < empty_ratio else rng.randint(1, kinds) for _ in range(cols)]
        for _ in range(rows)
    ]
    return snap(layout)


def _assert_valid_path(grid, path, a, b):
    assert path[0] == a and path[-1] == b
    assert 2 <= len(path) <= 4
    for start, end in zip(path, path[1:]):
        assert start[0] == end[0] or start[1] == end[1]
        assert is_segment_clear(grid, start, end)
    for corner in path[1:-1]:
        assert grid.kind_at(*corner) == EMPTY_KIND


def test_adjacent_tiles_connect_directly():
    grid = snap([[1, 1], [2, 2]])
    assert find_path(grid, (0, 0), (0, 1)) == ((0, 0), (0, 1))


def test_straight_line_blocked_then_cleared():
    blocked = snap([[1, 2, 0, 1]])
    assert not can_connect(blocked, (0, 0), (0, 3))
    cleared = snap([[1, 0, 0, 1]])
    assert find_path(cleared, (0, 0), (0, 3)) == ((0, 0), (0, 3))


def test_vertical_line_connects_through_empty_cells():
    grid = snap([[1], [0], [0], [1]])
    assert find_path(grid, (3, 0), (0, 0)) == ((3, 0), (0, 0))


def test_one_turn_through_free_corner():
    grid = snap([
        [1, 0, 0],
        [2, 2, 0],
        [2, 2, 1],
    ])
    assert find_path(grid, (0, 0), (2, 2)) == ((0, 0), (0, 2), (2, 2))


def test_one_turn_prefers_first_row_corner():
    grid = snap([
        [1, 0],
        [0, 1],
    ])
    assert find_path(grid, (0, 0), (1, 1)) == ((0, 0), (0, 1), (1, 1))
    assert find_path(grid, (1, 1), (0, 0)) == ((1, 1), (1, 0), (0, 0))


def test_two_turn_detour_around_blocker():
    grid = snap([
        [1, 2, 1],
        [0, 0, 0],
    ])
    assert find_path(grid, (0, 0), (0, 2)) == ((0, 0), (1, 0), (1, 2), (0, 2))


def test_two_turn_through_free_column():
    grid = snap([
        [1, 2, 0],
        [2, 2, 0],
        [0, 1, 0],
    ])
    path = find_path(grid, (0, 0), (2, 1))
    assert path is None

    grid = snap([
        [1, 0, 0],
        [2, 2, 0],
        [2, 1, 0],
    ])
    path = find_path(grid, (0, 0), (2, 1))
    assert path == ((0, 0), (0, 2), (2, 2), (2, 1))


def test_paths_do_not_leave_the_grid():
    grid = snap([[1, 2, 1]])
    assert not can_connect(grid, (0, 0), (0, 2))
    grid = snap([[1, 2, 1], [0, 3, 0]])
    assert not can_connect(grid, (0, 0), (0, 2))


def test_invalid_pairs_never_connect():
    grid = snap([[1, 1, 2], [0, 0, 0]])
    assert not can_connect(grid, (0, 0), (0, 0))
    assert not can_connect(grid, (0, 1), (0, 2))
    assert not can_connect(grid, (1, 0), (1, 1))
    assert not can_connect(grid, (0, 0), (5, 5))
    assert not can_connect(grid, (-1, 0), (0, 0))


def test_segment_requires_alignment():
    grid = snap([[0, 0], [0, 0]])
    assert not is_segment_clear(grid, (0, 0), (1, 1))
    assert is_segment_clear(grid, (0, 0), (0, 1))


def test_connection_is_symmetric_and_paths_are_valid():
    for seed in range(20):
        grid = _random_board(seed)
        active = grid.active_positions()
        for a, b in itertools.combinations(active, 2):
            forward = find_path(grid, a, b)
            backward = find_path(grid, b, a)
            assert (forward is None) == (backward is None)
            if forward is not None:
                _assert_valid_path(grid, forward, a, b)
                _assert_valid_path(grid, backward, b, a)


def test_find_connectable_pairs_row_major():
    grid = snap([[1, 1], [2, 2]])
    assert find_connectable_pairs(grid) == [((0, 0), (0, 1)), ((1, 0), (1, 1))]
    assert find_connectable_pairs(grid, limit=1) == [((0, 0), (0, 1))]


def test_has_valid_moves_on_deadlocked_board():
    grid = snap([[1, 2], [2, 1]])
    assert not has_valid_moves(grid)
    assert find_connectable_pairs(grid) == []


def test_has_valid_moves_on_empty_board():
    assert not has_valid_moves(snap([[0, 0], [0, 0]]))


def test_same_kind_tiles_block_a_straight_line():
    grid = snap([[1, 1, 1, 1]])
    assert not can_connect(grid, (0, 0), (0, 3))
    assert not can_connect(grid, (0, 0), (0, 2))
    cleared = snap([[1, 0, 0, 1]])
    assert can_connect(cleared, (0, 0), (0, 3))
