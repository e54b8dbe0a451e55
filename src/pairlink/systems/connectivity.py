"""Path search deciding whether two tiles can be linked.

A link is a path of at most three axis-aligned segments (two bends) whose
interior cells are all Empty. Every function here is stateless and works on any
grid exposing ``rows``, ``cols`` and ``kind_at(row, col)`` (``GridModel`` or a
``GridSnapshot``).
"""
from __future__ import annotations

from typing import Iterator, List, Optional, Protocol, Tuple

from pairlink.constants import EMPTY_KIND

Position = Tuple[int, int]
Path = Tuple[Position, ...]


class GridView(Protocol):
    @property
    def rows(self) -> int: ...

    @property
    def cols(self) -> int: ...

    def kind_at(self, row: int, col: int) -> int | None: ...


def can_connect(grid: GridView, a: Position, b: Position) -> bool:
    return find_path(grid, a, b) is not None


def find_path(grid: GridView, a: Position, b: Position) -> Optional[Path]:
    """Return the first connecting path from a to b, or None.

    Candidates are tried in a fixed order: direct line, one turn through
    ``(a.row, b.col)`` then ``(b.row, a.col)``, two turns through each free
    column then each free row.
    """
    if not _is_matching_pair(grid, a, b):
        return None
    return (
        _direct_path(grid, a, b)
        or _one_turn_path(grid, a, b)
        or _two_turn_path(grid, a, b)
    )


def _is_matching_pair(grid: GridView, a: Position, b: Position) -> bool:
    if a == b:
        return False
    kind_a = grid.kind_at(*a)
    kind_b = grid.kind_at(*b)
    if kind_a is None or kind_b is None:
        return False
    if kind_a == EMPTY_KIND:
        return False
    return kind_a == kind_b


def _is_empty(grid: GridView, position: Position) -> bool:
    return grid.kind_at(*position) == EMPTY_KIND


def is_segment_clear(grid: GridView, start: Position, end: Position) -> bool:
    """True when every cell strictly between two aligned points is Empty.

    Points that share neither row nor column never form a segment.
    """
    (r1, c1), (r2, c2) = start, end
    if r1 == r2:
        low, high = sorted((c1, c2))
        return all(grid.kind_at(r1, col) == EMPTY_KIND for col in range(low + 1, high))
    if c1 == c2:
        low, high = sorted((r1, r2))
        return all(grid.kind_at(row, c1) == EMPTY_KIND for row in range(low + 1, high))
    return False


def _direct_path(grid: GridView, a: Position, b: Position) -> Optional[Path]:
    if a[0] != b[0] and a[1] != b[1]:
        return None
    if is_segment_clear(grid, a, b):
        return (a, b)
    return None


def _one_turn_path(grid: GridView, a: Position, b: Position) -> Optional[Path]:
    for corner in ((a[0], b[1]), (b[0], a[1])):
        if not _is_empty(grid, corner):
            continue
        if is_segment_clear(grid, a, corner) and is_segment_clear(grid, corner, b):
            return (a, corner, b)
    return None


def _two_turn_path(grid: GridView, a: Position, b: Position) -> Optional[Path]:
    for mid1, mid2 in _two_turn_midpoints(grid, a, b):
        if not (_is_empty(grid, mid1) and _is_empty(grid, mid2)):
            continue
        if (
            is_segment_clear(grid, a, mid1)
            and is_segment_clear(grid, mid1, mid2)
            and is_segment_clear(grid, mid2, b)
        ):
            return (a, mid1, mid2, b)
    return None


def _two_turn_midpoints(grid: GridView, a: Position, b: Position) -> Iterator[Tuple[Position, Position]]:
    # Columns first, then rows; the rows/cols holding either endpoint are skipped.
    for col in range(grid.cols):
        if col == a[1] or col == b[1]:
            continue
        yield (a[0], col), (b[0], col)
    for row in range(grid.rows):
        if row == a[0] or row == b[0]:
            continue
        yield (row, a[1]), (row, b[1])


def find_connectable_pairs(grid: GridView, *, limit: int | None = None) -> List[Tuple[Position, Position]]:
    """Enumerate connectable pairs among active cells, row-major order."""
    active = _active_positions(grid)
    pairs: List[Tuple[Position, Position]] = []
    for i, first in enumerate(active):
        kind = grid.kind_at(*first)
        for second in active[i + 1:]:
            if grid.kind_at(*second) != kind:
                continue
            if can_connect(grid, first, second):
                pairs.append((first, second))
                if limit is not None and len(pairs) >= limit:
                    return pairs
    return pairs


def has_valid_moves(grid: GridView) -> bool:
    return bool(find_connectable_pairs(grid, limit=1))


def _active_positions(grid: GridView) -> List[Position]:
    return [
        (row, col)
        for row in range(grid.rows)
        for col in range(grid.cols)
        if grid.kind_at(row, col) not in (None, EMPTY_KIND)
    ]
