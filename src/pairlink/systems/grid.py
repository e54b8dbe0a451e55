"""Grid model: the rectangular array of cell entities and their tile kinds."""
from __future__ import annotations

import random
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Tuple

from esper import World

from pairlink.components.board import Board
from pairlink.components.board_position import BoardPosition
from pairlink.components.tile import TileKind
from pairlink.config import validate_dimensions
from pairlink.constants import EMPTY_KIND
from pairlink.world import get_board_entity

Position = Tuple[int, int]


@dataclass(frozen=True, slots=True)
class Cell:
    """View over one cell entity.

    The coordinate is fixed; ``kind`` reads the live TileKind component, so a
    Cell obtained before a removal reports Empty afterwards.
    """
    entity: int
    position: BoardPosition
    tile: TileKind = field(compare=False, repr=False)

    @property
    def row(self) -> int:
        return self.position.row

    @property
    def col(self) -> int:
        return self.position.col

    @property
    def pos(self) -> Position:
        return self.position.as_tuple()

    @property
    def kind(self) -> int:
        return self.tile.kind

    @property
    def is_empty(self) -> bool:
        return self.tile.kind == EMPTY_KIND


@dataclass(frozen=True, slots=True)
class GridSnapshot:
    """Immutable copy of the grid's kinds, row-major."""
    rows: int
    cols: int
    kinds: Tuple[Tuple[int, ...], ...]

    def kind_at(self, row: int, col: int) -> int | None:
        if 0 <= row < self.rows and 0 <= col < self.cols:
            return self.kinds[row][col]
        return None

    def active_positions(self) -> List[Position]:
        return [
            (row, col)
            for row in range(self.rows)
            for col in range(self.cols)
            if self.kinds[row][col] != EMPTY_KIND
        ]

    def kind_counts(self) -> Dict[int, int]:
        counts: Counter[int] = Counter(kind for line in self.kinds for kind in line if kind != EMPTY_KIND)
        return dict(counts)

    def is_empty(self) -> bool:
        return all(kind == EMPTY_KIND for line in self.kinds for kind in line)

    def pretty(self) -> str:
        return "\n".join(" ".join("." if kind == EMPTY_KIND else str(kind) for kind in line) for line in self.kinds)


def build_kind_pool(rows: int, cols: int, kind_count: int) -> List[int]:
    """Return the unshuffled pair pool: kind ``(i mod kind_count) + 1`` twice for each pair i."""
    pairs = (rows * cols) // 2
    pool: List[int] = []
    for pair_index in range(pairs):
        kind = (pair_index % kind_count) + 1
        pool.append(kind)
        pool.append(kind)
    return pool


class GridModel:
    """Owns the board's cell entities and every read/write of their kinds."""

    def __init__(self, world: World):
        self.world = world
        self.board_entity = get_board_entity(world)

    @property
    def board(self) -> Board:
        return self.world.component_for_entity(self.board_entity, Board)

    @property
    def rows(self) -> int:
        return self.board.rows

    @property
    def cols(self) -> int:
        return self.board.cols

    @property
    def kind_count(self) -> int:
        return self.board.kind_count

    def initialize(self, rows: int, cols: int, kind_count: int, *, rng: random.Random | None = None) -> None:
        """Recreate every cell and deal a shuffled, fully paired layout."""
        validate_dimensions(rows, cols, kind_count)
        rng = rng or getattr(self.world, "random", None) or random.Random()
        board = self.board
        for entity in list(board.cells.values()):
            self.world.delete_entity(entity, immediate=True)
        board.rows = rows
        board.cols = cols
        board.kind_count = kind_count
        board.cells = {}
        pool = build_kind_pool(rows, cols, kind_count)
        rng.shuffle(pool)
        index = 0
        for row in range(rows):
            for col in range(cols):
                kind = pool[index] if index < len(pool) else EMPTY_KIND
                index += 1
                entity = self.world.create_entity(BoardPosition(row=row, col=col), TileKind(kind=kind))
                board.cells[(row, col)] = entity

    def in_bounds(self, row: int, col: int) -> bool:
        board = self.board
        return 0 <= row < board.rows and 0 <= col < board.cols

    def get(self, row: int, col: int) -> Cell | None:
        entity = self.board.cells.get((row, col))
        if entity is None:
            return None
        return Cell(
            entity=entity,
            position=self.world.component_for_entity(entity, BoardPosition),
            tile=self.world.component_for_entity(entity, TileKind),
        )

    def kind_at(self, row: int, col: int) -> int | None:
        entity = self.board.cells.get((row, col))
        if entity is None:
            return None
        return self.world.component_for_entity(entity, TileKind).kind

    def set_kind(self, position: Position, kind: int) -> None:
        cell = self.get(*position)
        if cell is None:
            raise IndexError(f"Cell {position} is outside the {self.rows}x{self.cols} grid")
        cell.tile.kind = kind

    def clear(self, cell: Cell | Position) -> None:
        """Set the cell's kind to Empty. Clearing an Empty cell is a no-op."""
        if not isinstance(cell, Cell):
            found = self.get(*cell)
            if found is None:
                return
            cell = found
        cell.tile.kind = EMPTY_KIND

    def cells(self) -> Iterator[Cell]:
        """Iterate every cell in row-major order."""
        board = self.board
        for row in range(board.rows):
            for col in range(board.cols):
                cell = self.get(row, col)
                if cell is not None:
                    yield cell

    def is_empty(self) -> bool:
        return all(cell.is_empty for cell in self.cells())

    def active_cells(self) -> List[Cell]:
        return [cell for cell in self.cells() if not cell.is_empty]

    def kind_counts(self) -> Dict[int, int]:
        return dict(Counter(cell.kind for cell in self.active_cells()))

    def snapshot(self) -> GridSnapshot:
        board = self.board
        kinds = tuple(
            tuple(self.kind_at(row, col) or EMPTY_KIND for col in range(board.cols))
            for row in range(board.rows)
        )
        return GridSnapshot(rows=board.rows, cols=board.cols, kinds=kinds)

    def load_layout(self, layout: List[List[int]]) -> None:
        """Overwrite kinds from a row-major layout matching the grid's dimensions."""
        board = self.board
        if len(layout) != board.rows or any(len(line) != board.cols for line in layout):
            raise ValueError(f"Layout does not match the {board.rows}x{board.cols} grid")
        for row, line in enumerate(layout):
            for col, kind in enumerate(line):
                self.set_kind((row, col), kind)
