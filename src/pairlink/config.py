"""Game configuration surface.

Recognised options (camelCase as delivered by hosts, or snake_case):

* ``rows`` - grid height
* ``columns`` - grid width
* ``tileKindsCount`` - number of distinct matchable kinds
* ``seed`` - optional RNG seed for deterministic boards
* ``shuffleOnDeadlock`` / ``maxShuffleAttempts`` - automatic deadlock recovery
* ``resolutionTimeout`` - seconds before a pending path animation is forced
"""
from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

from pairlink.constants import GRID_COLS, GRID_ROWS, MAX_SHUFFLE_ATTEMPTS, TILE_KINDS_COUNT
from pairlink.errors import ConfigurationError

_ALIASES = {
    "rows": "rows",
    "columns": "columns",
    "cols": "columns",
    "tileKindsCount": "tile_kinds_count",
    "tile_kinds_count": "tile_kinds_count",
    "kindCount": "tile_kinds_count",
    "kind_count": "tile_kinds_count",
    "seed": "seed",
    "shuffleOnDeadlock": "shuffle_on_deadlock",
    "shuffle_on_deadlock": "shuffle_on_deadlock",
    "maxShuffleAttempts": "max_shuffle_attempts",
    "max_shuffle_attempts": "max_shuffle_attempts",
    "resolutionTimeout": "resolution_timeout",
    "resolution_timeout": "resolution_timeout",
}


@dataclass(frozen=True, slots=True)
class GameConfig:
    rows: int = GRID_ROWS
    columns: int = GRID_COLS
    tile_kinds_count: int = TILE_KINDS_COUNT
    seed: int | None = None
    shuffle_on_deadlock: bool = True
    max_shuffle_attempts: int = MAX_SHUFFLE_ATTEMPTS
    resolution_timeout: float | None = None

    def __post_init__(self) -> None:
        validate_dimensions(self.rows, self.columns, self.tile_kinds_count)
        if isinstance(self.max_shuffle_attempts, bool) or not isinstance(self.max_shuffle_attempts, int):
            raise ConfigurationError("max_shuffle_attempts must be an integer")
        if self.max_shuffle_attempts < 1:
            raise ConfigurationError("max_shuffle_attempts must be at least 1")
        if not isinstance(self.shuffle_on_deadlock, bool):
            raise ConfigurationError(f"shuffle_on_deadlock must be a boolean, got {self.shuffle_on_deadlock!r}")
        timeout = self.resolution_timeout
        if timeout is not None:
            if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
                raise ConfigurationError(f"resolution_timeout must be a number of seconds, got {timeout!r}")
            if timeout <= 0:
                raise ConfigurationError("resolution_timeout must be positive when set")

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "GameConfig":
        kwargs: dict[str, Any] = {}
        for key, value in options.items():
            name = _ALIASES.get(key)
            if name is None:
                raise ConfigurationError(f"Unknown configuration option: {key!r}")
            kwargs[name] = value
        return cls(**kwargs)

    def with_dimensions(self, rows: int, columns: int, tile_kinds_count: int) -> "GameConfig":
        return replace(self, rows=rows, columns=columns, tile_kinds_count=tile_kinds_count)

    def as_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def validate_dimensions(rows: Any, cols: Any, kind_count: Any) -> None:
    """Reject grids that cannot hold a single pair or have no matchable kinds."""
    for name, value in (("rows", rows), ("columns", cols), ("tile_kinds_count", kind_count)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if rows < 1 or cols < 1:
        raise ConfigurationError(f"Grid dimensions must be positive, got {rows}x{cols}")
    if rows * cols < 2:
        raise ConfigurationError(f"Grid {rows}x{cols} cannot hold a tile pair")
    if kind_count < 1:
        raise ConfigurationError(f"tile_kinds_count must be at least 1, got {kind_count}")
