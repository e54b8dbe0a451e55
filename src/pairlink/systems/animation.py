from typing import Callable, Dict, Sequence, Tuple

from esper import World

from pairlink.components.path_animation import PathAnimation
from pairlink.constants import PATH_DRAW_DURATION, PATH_FADE_DURATION
from pairlink.events.bus import (
    EVENT_ANIMATION_COMPLETE,
    EVENT_ANIMATION_START,
    EVENT_GAME_STARTED,
    EVENT_TICK,
    EventBus,
)

Position = Tuple[int, int]


class PathAnimationSystem:
    """Default path animator: draws a connection over time, fades it, then reports back.

    Each path is its own PathAnimation entity; the renderer reads them to draw
    the partial line. The completion callback fires exactly once per path.
    """
    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        draw_duration: float = PATH_DRAW_DURATION,
        fade_duration: float = PATH_FADE_DURATION,
    ):
        self.world = world
        self.event_bus = event_bus
        self.draw_duration = draw_duration
        self.fade_duration = fade_duration
        self._callbacks: Dict[int, Callable[[], None]] = {}
        event_bus.subscribe(EVENT_TICK, self.on_tick)
        event_bus.subscribe(EVENT_GAME_STARTED, self.on_game_started)

    def draw_path(self, path: Sequence[Position], on_complete: Callable[[], None]) -> None:
        points = tuple(tuple(point) for point in path)
        if len(points) < 2:
            on_complete()
            return
        ent = self.world.create_entity(PathAnimation(path=points))
        self._callbacks[ent] = on_complete
        self.event_bus.emit(EVENT_ANIMATION_START, kind='path', items=list(points))

    def active_paths(self) -> list[PathAnimation]:
        return [anim for _, anim in self.world.get_component(PathAnimation)]

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 1/60)
        finished: list[int] = []
        for ent, anim in list(self.world.get_component(PathAnimation)):
            if anim.phase == 'draw':
                anim.progress = 1.0 if self.draw_duration <= 0 else anim.progress + dt / self.draw_duration
                if anim.progress >= 1.0:
                    anim.progress = 1.0
                    anim.phase = 'fade'
            elif anim.phase == 'fade':
                anim.alpha = 0.0 if self.fade_duration <= 0 else anim.alpha - dt / self.fade_duration
                if anim.alpha <= 0.0:
                    anim.alpha = 0.0
                    anim.phase = 'done'
            if anim.phase == 'done':
                finished.append(ent)
        for ent in finished:
            anim = self.world.component_for_entity(ent, PathAnimation)
            self.world.delete_entity(ent, immediate=True)
            callback = self._callbacks.pop(ent, None)
            self.event_bus.emit(EVENT_ANIMATION_COMPLETE, kind='path', items=list(anim.path))
            if callback is not None:
                callback()

    def on_game_started(self, sender, **kwargs):
        self.cancel_all()

    def cancel_all(self) -> None:
        """Drop in-flight paths without firing their callbacks."""
        for ent, _ in list(self.world.get_component(PathAnimation)):
            self.world.delete_entity(ent, immediate=True)
        self._callbacks.clear()
