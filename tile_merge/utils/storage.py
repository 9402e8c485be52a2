"""Persistence collaborators for ``GameEngine``."""

from __future__ import annotations

import copy
import os
from typing import Any, Dict, Optional

from .serialization import (
    decode_snapshot,
    delete_path,
    encode_snapshot,
    load_bytes,
    path_exists,
    save_bytes,
)


class MemoryStorage:
    """Keeps the game and best score for the lifetime of the process."""

    def __init__(self) -> None:
        self.snapshot: Optional[Dict[str, Any]] = None
        self.best_score = 0

    def load_snapshot(self) -> Optional[Dict[str, Any]]:
        return copy.deepcopy(self.snapshot)

    def save_snapshot(self, snapshot: Dict[str, Any]) -> None:
        self.snapshot = copy.deepcopy(snapshot)

    def clear_snapshot(self) -> None:
        self.snapshot = None

    def get_best_score(self) -> int:
        return self.best_score

    def set_best_score(self, score: int) -> None:
        self.best_score = score


class FileStorage:
    """Stores the game under ``root``, a local directory or a ``gs://`` prefix."""

    STATE_FILE = "game_state.msgpack"
    BEST_SCORE_FILE = "best_score.txt"

    def __init__(self, root: str) -> None:
        self.root = root
        self.state_path = self._join(self.STATE_FILE)
        self.best_score_path = self._join(self.BEST_SCORE_FILE)

    def _join(self, name: str) -> str:
        if self.root.startswith("gs://"):
            return self.root.rstrip("/") + "/" + name
        return os.path.join(self.root, name)

    def load_snapshot(self) -> Optional[Dict[str, Any]]:
        """Return the stored game, ``None`` if absent.

        Raises ``SnapshotError`` if the stored bytes are not a valid game.
        """
        if not path_exists(self.state_path):
            return None
        return decode_snapshot(load_bytes(self.state_path))

    def save_snapshot(self, snapshot: Dict[str, Any]) -> None:
        save_bytes(encode_snapshot(snapshot), self.state_path)

    def clear_snapshot(self) -> None:
        delete_path(self.state_path)

    def get_best_score(self) -> int:
        if not path_exists(self.best_score_path):
            return 0
        text = load_bytes(self.best_score_path).decode("utf-8", errors="replace")
        try:
            return max(int(text.strip()), 0)
        except ValueError:
            print(f"[storage] ignoring unreadable best score in {self.best_score_path}")
            return 0

    def set_best_score(self, score: int) -> None:
        save_bytes(str(score).encode("utf-8"), self.best_score_path)
