from __future__ import annotations

from typing import TYPE_CHECKING

from pairlink.components.path_animation import PathAnimation
from pairlink.constants import PATH_LINE_COLOR, PATH_LINE_WIDTH
from pairlink.rendering.layout import partial_polyline, path_to_screen

if TYPE_CHECKING:
    from esper import World
    from pairlink.rendering.layout import BoardGeometry


class PathRenderer:
    """Draws in-flight connection paths: a growing polyline, then a fade."""

    def __init__(self, world: World, line_width: float = PATH_LINE_WIDTH, color=PATH_LINE_COLOR):
        self.world = world
        self.line_width = line_width
        self.color = color

    def visible_polylines(self, geometry: BoardGeometry) -> list[tuple[list[tuple[float, float]], float]]:
        """Return (points, alpha) for every path currently on screen."""
        lines = []
        for _, anim in self.world.get_component(PathAnimation):
            points = partial_polyline(path_to_screen(anim.path, geometry), anim.progress)
            if len(points) >= 2 and anim.alpha > 0:
                lines.append((points, anim.alpha))
        return lines

    def render(self, arcade, geometry: BoardGeometry, headless: bool) -> None:
        lines = self.visible_polylines(geometry)
        if headless:
            return
        r, g, b = self.color
        for points, alpha in lines:
            arcade.draw_line_strip(points, (r, g, b, int(255 * alpha)), self.line_width)
