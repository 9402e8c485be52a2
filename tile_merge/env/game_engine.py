"""Game orchestration for the tile merging puzzle."""

from __future__ import annotations

import random
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple, Union

from tile_merge.config.game_config import DEFAULT_CONFIG, GameConfig
from tile_merge.env.grid import Grid
from tile_merge.env.moves import (
    Direction,
    MoveEvent,
    MoveResult,
    Spawned,
    add_random_tile,
    apply_move,
)
from tile_merge.env.state import GameState
from tile_merge.env.snapshot import SnapshotError


class Storage(Protocol):
    def load_snapshot(self) -> Optional[Dict[str, Any]]: ...

    def save_snapshot(self, snapshot: Dict[str, Any]) -> None: ...

    def clear_snapshot(self) -> None: ...

    def get_best_score(self) -> int: ...

    def set_best_score(self, score: int) -> None: ...


class Actuator(Protocol):
    def actuate(
        self, grid: Grid, metadata: Dict[str, Any], events: Sequence[MoveEvent]
    ) -> None: ...

    def continue_game(self) -> None: ...


def new_game(rng, config: GameConfig = DEFAULT_CONFIG) -> Tuple[GameState, List[Spawned]]:
    """Return a fresh state seeded with ``config.start_tiles`` random tiles."""
    grid = Grid.empty(config.size)
    spawned: List[Spawned] = []
    for _ in range(config.start_tiles):
        event = add_random_tile(grid, rng, config)
        if event is not None:
            spawned.append(event)
    return GameState(grid), spawned


class GameEngine:
    """Drive one game session against storage and rendering collaborators.

    The engine is the only writer of its state.  It is not thread safe; a
    host that shares it between threads must serialise calls itself.
    """

    def __init__(
        self,
        storage: Storage,
        actuator: Actuator,
        *,
        config: GameConfig = DEFAULT_CONFIG,
        seed: int | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.storage = storage
        self.actuator = actuator
        self.config = config
        self.random = rng if rng is not None else random.Random(seed)
        self.state: GameState = GameState(Grid.empty(config.size))
        self.setup()

    # Lifecycle ------------------------------------------------------------
    def setup(self) -> None:
        """Resume the stored game if there is a valid one, else start fresh."""
        events: List[MoveEvent] = []
        restored = self._restore()
        if restored is not None:
            self.state = restored
        else:
            self.state, spawned = new_game(self.random, self.config)
            events.extend(spawned)
        self.actuate(events)

    def _restore(self) -> Optional[GameState]:
        try:
            snapshot = self.storage.load_snapshot()
            if snapshot is None:
                return None
            return GameState.from_snapshot(snapshot, size=self.config.size)
        except SnapshotError as exc:
            print(f"[engine] discarding stored game: {exc}")
            self.storage.clear_snapshot()
            return None

    def restart(self) -> None:
        self.storage.clear_snapshot()
        self.actuator.continue_game()
        self.setup()

    def keep_playing(self) -> None:
        """Continue after reaching the winning tile."""
        self.state = self.state.with_keep_playing()
        self.actuator.continue_game()
        self.actuate([])

    def is_terminated(self) -> bool:
        return self.state.is_terminated

    # Moves ----------------------------------------------------------------
    def move(self, direction: Union[Direction, int, str]) -> MoveResult:
        result = apply_move(self.state, direction, self.random, self.config)
        if result.moved:
            self.state = result.state
            if self.state.over:
                print(f"[engine] game over with score {self.state.score}")
            self.actuate(result.events)
        return result

    # Output ---------------------------------------------------------------
    def serialize(self) -> Dict[str, Any]:
        return self.state.serialize()

    def actuate(self, events: Sequence[MoveEvent]) -> None:
        """Persist the state and hand it to the actuator."""
        best_score = self.storage.get_best_score()
        if best_score < self.state.score:
            best_score = self.state.score
            self.storage.set_best_score(best_score)

        # A lost game is not resumed; a won one is.
        if self.state.over:
            self.storage.clear_snapshot()
        else:
            self.storage.save_snapshot(self.serialize())

        self.actuator.actuate(
            self.state.grid,
            {
                "score": self.state.score,
                "over": self.state.over,
                "won": self.state.won,
                "best_score": best_score,
                "terminated": self.is_terminated(),
            },
            events,
        )

    def bind(self, input_manager) -> None:
        """Route an input manager's events to this engine."""
        input_manager.on("move", self.move)
        input_manager.on("restart", lambda _=None: self.restart())
        input_manager.on("keep_playing", lambda _=None: self.keep_playing())

    # Convenience accessors -------------------------------------------------
    @property
    def grid(self) -> Grid:
        return self.state.grid

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def over(self) -> bool:
        return self.state.over

    @property
    def won(self) -> bool:
        return self.state.won
