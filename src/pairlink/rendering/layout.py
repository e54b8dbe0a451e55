"""Grid <-> screen geometry shared by rendering and input.

Row 0 is drawn at the top of the board; arcade's y axis points up.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from pairlink.constants import BOARD_PADDING, MIN_TILE_SIZE, TILE_SIZE, TILE_SPACING

Point = Tuple[float, float]


@dataclass(frozen=True, slots=True)
class BoardGeometry:
    rows: int
    cols: int
    tile_size: float
    spacing: float
    left: float
    top: float

    @property
    def pitch(self) -> float:
        return self.tile_size + self.spacing

    @property
    def width(self) -> float:
        return self.cols * self.pitch - self.spacing

    @property
    def height(self) -> float:
        return self.rows * self.pitch - self.spacing

    @property
    def bottom(self) -> float:
        return self.top - self.height

    def cell_center(self, row: int, col: int) -> Point:
        x = self.left + self.tile_size / 2 + col * self.pitch
        y = self.top - self.tile_size / 2 - row * self.pitch
        return (x, y)

    def cell_at_point(self, x: float, y: float) -> Optional[Tuple[int, int]]:
        """Map a screen point to the cell under it; gaps between tiles map to nothing."""
        dx = x - self.left
        dy = self.top - y
        if dx < 0 or dy < 0:
            return None
        col = int(dx // self.pitch)
        row = int(dy // self.pitch)
        if row >= self.rows or col >= self.cols:
            return None
        if dx - col * self.pitch > self.tile_size or dy - row * self.pitch > self.tile_size:
            return None
        return (row, col)


def compute_board_geometry(
    window_width: float,
    window_height: float,
    rows: int,
    cols: int,
    *,
    tile_size: float = TILE_SIZE,
    spacing: float = TILE_SPACING,
    padding: float = BOARD_PADDING,
) -> BoardGeometry:
    """Return board geometry centred in the window, scaled down (never up) to fit inside the padding."""
    grid_w = cols * (tile_size + spacing) - spacing
    grid_h = rows * (tile_size + spacing) - spacing
    avail_w = max(1.0, window_width - padding * 2)
    avail_h = max(1.0, window_height - padding * 2)
    scale = min(avail_w / grid_w, avail_h / grid_h)
    if scale < 1:
        tile_size *= scale
        spacing *= scale
    if tile_size < MIN_TILE_SIZE:
        spacing = spacing * MIN_TILE_SIZE / tile_size
        tile_size = MIN_TILE_SIZE
    width = cols * (tile_size + spacing) - spacing
    height = rows * (tile_size + spacing) - spacing
    left = (window_width - width) / 2
    top = (window_height + height) / 2
    return BoardGeometry(rows=rows, cols=cols, tile_size=tile_size, spacing=spacing, left=left, top=top)


def path_to_screen(path: Sequence[Tuple[int, int]], geometry: BoardGeometry) -> List[Point]:
    return [geometry.cell_center(row, col) for row, col in path]


def polyline_length(points: Sequence[Point]) -> float:
    return sum(math.dist(points[i], points[i + 1]) for i in range(len(points) - 1))


def partial_polyline(points: Sequence[Point], progress: float) -> List[Point]:
    """Return the prefix of a polyline covering ``progress`` (0..1) of its length."""
    if len(points) < 2 or progress <= 0:
        return []
    if progress >= 1:
        return list(points)
    target = polyline_length(points) * progress
    drawn = 0.0
    result = [points[0]]
    for start, end in zip(points, points[1:]):
        segment = math.dist(start, end)
        if drawn + segment <= target:
            result.append(end)
            drawn += segment
            continue
        ratio = (target - drawn) / segment if segment else 0.0
        result.append((start[0] + (end[0] - start[0]) * ratio, start[1] + (end[1] - start[1]) * ratio))
        break
    return result
