from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pairlink.components.tile_kinds import TileKinds
    from pairlink.rendering.layout import BoardGeometry
    from pairlink.systems.grid import GridModel
    from pairlink.systems.render import RenderSystem

HIGHLIGHT_SCALE = 1.1
HIGHLIGHT_TINT = (255, 255, 200)
HINT_OUTLINE = (120, 200, 255)
TILE_BACKGROUND = (235, 230, 215)
TILE_OUTLINE = (90, 80, 70)


class BoardRenderer:
    def __init__(self, render_system: RenderSystem, padding: int = 4):
        self._rs = render_system
        self._padding = padding

    def render(self, arcade, grid: GridModel, geometry: BoardGeometry, registry: TileKinds, headless: bool) -> None:
        rs = self._rs
        rs._last_tile_layout = {}
        highlight_commands: list[tuple[float, float, float, tuple[int, int, int]]] = []

        for cell in grid.active_cells():
            center_x, center_y = geometry.cell_center(cell.row, cell.col)
            size = max(geometry.tile_size - self._padding, 4)
            selected = rs.selected == cell.pos
            if selected:
                size *= HIGHLIGHT_SCALE
            rs._last_tile_layout[cell.pos] = {
                "entity": cell.entity,
                "center": (center_x, center_y),
                "size": size,
                "kind": cell.kind,
            }
            if headless:
                continue
            half = size / 2
            background = HIGHLIGHT_TINT if selected else TILE_BACKGROUND
            arcade.draw_lrbt_rectangle_filled(center_x - half, center_x + half, center_y - half, center_y + half, background)
            arcade.draw_circle_filled(center_x, center_y, half * 0.7, registry.color_for(cell.kind))
            arcade.draw_lrbt_rectangle_outline(center_x - half, center_x + half, center_y - half, center_y + half, TILE_OUTLINE, 2)
            if selected:
                highlight_commands.append((center_x, center_y, half + 3, (255, 255, 255)))
            elif cell.pos in rs.hinted:
                highlight_commands.append((center_x, center_y, half + 3, HINT_OUTLINE))

        if headless:
            return
        for center_x, center_y, half, outline in highlight_commands:
            arcade.draw_lrbt_rectangle_outline(center_x - half, center_x + half, center_y - half, center_y + half, outline, 3)

