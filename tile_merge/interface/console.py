"""Plain text rendering of the board."""

from __future__ import annotations

from typing import Any, Dict, Sequence

from tile_merge.env.grid import Grid
from tile_merge.env.moves import Merged, MoveEvent, Spawned


def format_board(grid: Grid, width: int = 6) -> str:
    """Render ``grid`` as rows of right aligned values, ``.`` for empty cells."""
    lines = []
    for row in grid.values():
        lines.append("".join(f"{value:{width}d}" if value else f"{'.':>{width}}" for value in row))
    lines.append("-" * (grid.size * width))
    return "\n".join(lines)


def print_board(grid: Grid) -> None:
    print(format_board(grid))


class ConsoleActuator:
    """Prints the board and score after every update."""

    def __init__(self) -> None:
        self.score = 0
        self.message = ""

    def actuate(
        self, grid: Grid, metadata: Dict[str, Any], events: Sequence[MoveEvent] = ()
    ) -> None:
        print_board(grid)

        difference = metadata["score"] - self.score
        self.score = metadata["score"]
        line = f"Score: {self.score}"
        if difference > 0:
            line += f" (+{difference})"
        print(f"{line}  Best: {metadata['best_score']}")

        merges = sum(isinstance(event, Merged) for event in events)
        spawns = [event for event in events if isinstance(event, Spawned)]
        if merges:
            print(f"{merges} merge{'s' if merges > 1 else ''}")
        for spawn in spawns:
            print(f"New {spawn.value} at ({spawn.target.x}, {spawn.target.y})")

        if metadata["terminated"]:
            if metadata["over"]:
                self.message = "Game over!"
            elif metadata["won"]:
                self.message = "You win! (c to keep playing, r to restart)"
            print(self.message)
        print()

    def continue_game(self) -> None:
        self.message = ""
