from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict

from tile_merge.env.grid import Grid
from tile_merge.env.snapshot import validate_snapshot


@dataclass(frozen=True)
class GameState:
    """Immutable game snapshot.

    ``grid`` must not be mutated once it belongs to a state; transitions
    build a new grid and a new ``GameState``.
    """

    grid: Grid
    score: int = 0
    over: bool = False
    won: bool = False
    keep_playing: bool = False

    # Holds a mutable Grid, so states compare by value but are not hashable.
    __hash__ = None

    @property
    def is_terminated(self) -> bool:
        """Lost, or won without opting to keep playing."""
        return self.over or (self.won and not self.keep_playing)

    def with_keep_playing(self) -> "GameState":
        return replace(self, keep_playing=True)

    def serialize(self) -> Dict[str, Any]:
        return {
            "grid": self.grid.serialize(),
            "score": self.score,
            "over": self.over,
            "won": self.won,
            "keepPlaying": self.keep_playing,
        }

    @classmethod
    def from_snapshot(cls, snapshot: Dict[str, Any], *, size: int | None = None) -> "GameState":
        validate_snapshot(snapshot, size=size)
        return cls(
            grid=Grid.from_snapshot(snapshot["grid"]),
            score=snapshot["score"],
            over=snapshot["over"],
            won=snapshot["won"],
            keep_playing=snapshot["keepPlaying"],
        )
