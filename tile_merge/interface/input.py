"""Translate keys and swipes into game commands."""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Callable, Dict, List, Optional

from tile_merge.env.moves import Direction


KEY_MAP: Dict[str, Direction] = {
    "up": Direction.UP,
    "right": Direction.RIGHT,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    # Vim
    "k": Direction.UP,
    "l": Direction.RIGHT,
    "j": Direction.DOWN,
    "h": Direction.LEFT,
    # WASD
    "w": Direction.UP,
    "d": Direction.RIGHT,
    "s": Direction.DOWN,
    "a": Direction.LEFT,
}

RESTART_KEYS = {"r", "restart"}
KEEP_PLAYING_KEYS = {"c", "continue"}


def direction_from_swipe(dx: float, dy: float, threshold: float = 10) -> Optional[Direction]:
    """Map a swipe vector to a direction.

    Screen ``y`` grows downwards.  Swipes no longer than ``threshold`` on
    either axis are ignored.
    """
    if max(abs(dx), abs(dy)) <= threshold:
        return None
    if abs(dx) > abs(dy):
        return Direction.RIGHT if dx > 0 else Direction.LEFT
    return Direction.DOWN if dy > 0 else Direction.UP


class InputManager:
    """Minimal event emitter for ``move``, ``restart`` and ``keep_playing``."""

    def __init__(self) -> None:
        self.events: Dict[str, List[Callable[..., Any]]] = defaultdict(list)

    def on(self, event: str, callback: Callable[..., Any]) -> None:
        self.events[event].append(callback)

    def emit(self, event: str, data: Any = None) -> None:
        for callback in self.events.get(event, []):
            callback(data)

    def handle_key(self, key: str) -> bool:
        """Emit the command bound to ``key``; return ``False`` if unbound."""
        key = key.strip().lower()
        if key in KEY_MAP:
            self.emit("move", KEY_MAP[key])
        elif key in RESTART_KEYS:
            self.emit("restart")
        elif key in KEEP_PLAYING_KEYS:
            self.emit("keep_playing")
        else:
            return False
        return True

    def handle_swipe(self, dx: float, dy: float) -> bool:
        direction = direction_from_swipe(dx, dy)
        if direction is None:
            return False
        self.emit("move", direction)
        return True
