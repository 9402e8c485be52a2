"""Move, merge and spawn rules.

``apply_move`` is a pure transition: it reads a ``GameState`` and returns a
new one together with the events that describe the turn.  Tiles are walked
from the edge the board is moving towards, so a tile always slides into
space already vacated by the tiles in front of it.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import List, NamedTuple, Optional, Tuple, Union

from tile_merge.config.game_config import DEFAULT_CONFIG, GameConfig
from tile_merge.env.grid import Grid
from tile_merge.env.state import GameState
from tile_merge.env.tile import Position, Tile


class Direction(IntEnum):
    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3

    @property
    def vector(self) -> Position:
        return _VECTORS[self]

    @classmethod
    def parse(cls, value: Union["Direction", int, str]) -> "Direction":
        """Accept a ``Direction``, its integer code or its name."""
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ValueError(f"Unknown direction {value!r}") from None
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown direction {value!r}") from None


_VECTORS = {
    Direction.UP: Position(0, -1),
    Direction.RIGHT: Position(1, 0),
    Direction.DOWN: Position(0, 1),
    Direction.LEFT: Position(-1, 0),
}


# Events ------------------------------------------------------------------
@dataclass(frozen=True)
class Moved:
    source: Position
    target: Position
    value: int


@dataclass(frozen=True)
class Merged:
    sources: Tuple[Position, Position]
    target: Position
    value: int


@dataclass(frozen=True)
class Spawned:
    target: Position
    value: int


MoveEvent = Union[Moved, Merged, Spawned]


class MoveResult(NamedTuple):
    state: GameState
    events: List[MoveEvent]
    moved: bool


# Board helpers -------------------------------------------------------------
def build_traversals(size: int, vector: Tuple[int, int]) -> Tuple[List[int], List[int]]:
    """Return the x and y visiting orders for a move along ``vector``."""
    xs = list(range(size))
    ys = list(range(size))
    if vector[0] == 1:
        xs.reverse()
    if vector[1] == 1:
        ys.reverse()
    return xs, ys


def find_farthest_position(
    grid: Grid, cell: Tuple[int, int], vector: Tuple[int, int]
) -> Tuple[Position, Position]:
    """Slide from ``cell`` along ``vector``.

    Returns ``(farthest, next)``: the last free cell reached and the first
    cell beyond it, which is either occupied or off the board.
    """
    previous = Position(*cell)
    candidate = Position(previous.x + vector[0], previous.y + vector[1])
    while grid.within_bounds(candidate) and grid.cell_available(candidate):
        previous = candidate
        candidate = Position(previous.x + vector[0], previous.y + vector[1])
    return previous, candidate


def tile_matches_available(grid: Grid) -> bool:
    """Return ``True`` if two orthogonal neighbours share a value."""
    for x, y, tile in grid.each_cell():
        if tile is None:
            continue
        for direction in Direction:
            dx, dy = direction.vector
            other = grid.cell_content((x + dx, y + dy))
            if other is not None and other.value == tile.value:
                return True
    return False


def moves_available(grid: Grid) -> bool:
    return grid.cells_available() or tile_matches_available(grid)


def random_tile_value(rng, four_probability: float = 0.1) -> int:
    return 2 if rng.random() < 1.0 - four_probability else 4


def add_random_tile(grid: Grid, rng, config: GameConfig = DEFAULT_CONFIG) -> Optional[Spawned]:
    """Place a 2 or a 4 on a random free cell of ``grid`` in place."""
    if not grid.cells_available():
        return None
    value = random_tile_value(rng, config.four_probability)
    cell = grid.random_available_cell(rng)
    grid.insert_tile(Tile(cell.x, cell.y, value))
    return Spawned(cell, value)


def _prepared_copy(grid: Grid) -> Grid:
    prepared = grid.copy()
    for tile in grid.tiles():
        prepared.insert_tile(tile.saved())
    return prepared


# Transition ----------------------------------------------------------------
def apply_move(
    state: GameState,
    direction: Union[Direction, int, str],
    rng,
    config: GameConfig = DEFAULT_CONFIG,
) -> MoveResult:
    """Slide every tile of ``state`` towards ``direction``.

    When nothing moves, or the game is already terminated, ``state`` itself
    is returned with ``moved=False`` and no events.
    """
    direction = Direction.parse(direction)
    if state.is_terminated:
        return MoveResult(state, [], False)

    vector = direction.vector
    grid = _prepared_copy(state.grid)
    xs, ys = build_traversals(grid.size, vector)
    score = state.score
    won = state.won
    events: List[MoveEvent] = []
    moved = False

    for x in xs:
        for y in ys:
            tile = grid.cell_content((x, y))
            if tile is None:
                continue

            farthest, next_cell = find_farthest_position(grid, (x, y), vector)
            occupant = grid.cell_content(next_cell)

            # Only one merger per tile per move.
            if (
                occupant is not None
                and occupant.value == tile.value
                and occupant.merged_from is None
            ):
                converged = tile.moved_to(next_cell)
                merged = Tile(
                    next_cell.x,
                    next_cell.y,
                    tile.value * 2,
                    merged_from=(converged, occupant),
                )
                grid.remove_tile(tile)
                grid.insert_tile(merged)
                score += merged.value
                if merged.value == config.win_value:
                    won = True
                events.append(
                    Merged(
                        (tile.previous_position, occupant.previous_position),
                        next_cell,
                        merged.value,
                    )
                )
                moved = True
            elif farthest != (x, y):
                grid.remove_tile(tile)
                grid.insert_tile(tile.moved_to(farthest))
                events.append(Moved(Position(x, y), farthest, tile.value))
                moved = True

    if not moved:
        return MoveResult(state, [], False)

    spawned = add_random_tile(grid, rng, config)
    if spawned is not None:
        events.append(spawned)

    new_state = replace(
        state,
        grid=grid,
        score=score,
        won=won,
        over=not moves_available(grid),
    )
    return MoveResult(new_state, events, True)
