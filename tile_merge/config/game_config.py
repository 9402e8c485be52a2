from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GameConfig:
    """Rules of a single game: board size, seeding and spawn odds."""

    size: int = 4
    start_tiles: int = 2
    win_value: int = 2048
    four_probability: float = 0.1

    def __post_init__(self) -> None:
        if self.size < 1:
            raise ValueError("Board size must be at least 1")
        if self.start_tiles < 0:
            raise ValueError("start_tiles must not be negative")
        if not 0.0 <= self.four_probability <= 1.0:
            raise ValueError("four_probability must be within [0, 1]")
        # 2048 is reached by merging, so anything below 4 could never be won.
        if self.win_value < 4 or self.win_value & (self.win_value - 1):
            raise ValueError("win_value must be a power of two >= 4")


DEFAULT_CONFIG = GameConfig()
