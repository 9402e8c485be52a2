"""Tiles and board coordinates."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, NamedTuple, Optional, Tuple


class Position(NamedTuple):
    x: int
    y: int


@dataclass(frozen=True)
class Tile:
    """A numbered piece on the board.

    ``previous_position`` and ``merged_from`` only describe the turn that
    produced this tile: where it started, and which two tiles it replaced.
    They are never persisted.
    """

    x: int
    y: int
    value: int = 2
    previous_position: Optional[Position] = None
    merged_from: Optional[Tuple["Tile", "Tile"]] = None

    @property
    def position(self) -> Position:
        return Position(self.x, self.y)

    def moved_to(self, position: Tuple[int, int]) -> "Tile":
        x, y = position
        return replace(self, x=x, y=y)

    def saved(self) -> "Tile":
        """Remember the current position and drop merge provenance."""
        return replace(self, previous_position=self.position, merged_from=None)

    def serialize(self) -> Dict[str, object]:
        return {"position": {"x": self.x, "y": self.y}, "value": self.value}
