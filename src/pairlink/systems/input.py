from typing import Optional

from pairlink.events.bus import EventBus, EVENT_MOUSE_PRESS, EVENT_TILE_CLICK
from pairlink.rendering.layout import compute_board_geometry
from pairlink.systems.grid import GridModel

LEFT_BUTTON = 1


class InputSystem:
    """Translates raw mouse presses into tile clicks; the core never sees screen coordinates."""

    def __init__(self, event_bus: EventBus, window, grid: Optional[GridModel] = None):
        self.event_bus = event_bus
        self.window = window
        self.grid = grid
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)

    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        button = kwargs.get('button', LEFT_BUTTON)
        if x is None or y is None:
            return
        if button != LEFT_BUTTON:
            return
        render_system = getattr(self.window, 'render_system', None)
        if render_system is not None and hasattr(render_system, 'get_tile_at_point'):
            cell = render_system.get_tile_at_point(x, y)
        elif self.grid is not None:
            geometry = compute_board_geometry(self.window.width, self.window.height, self.grid.rows, self.grid.cols)
            cell = geometry.cell_at_point(x, y)
        else:
            return
        if cell is None:
            return
        self.event_bus.emit(EVENT_TILE_CLICK, row=cell[0], col=cell[1])
