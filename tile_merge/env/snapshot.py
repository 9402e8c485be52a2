"""Validation of persisted game snapshots.

A snapshot is the plain ``dict`` form of a game::

    {
        "grid": {"size": 4, "cells": [[None | {"position": {"x", "y"}, "value"}]]},
        "score": 0, "over": False, "won": False, "keepPlaying": False,
    }

``cells`` is indexed ``cells[x][y]``.
"""

from __future__ import annotations

from typing import Any, Optional


class SnapshotError(ValueError):
    """Raised when persisted state cannot describe a consistent game."""


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_tile(entry: Any, x: int, y: int) -> None:
    if not isinstance(entry, dict):
        raise SnapshotError(f"Cell ({x}, {y}) holds {type(entry).__name__}, expected a tile")
    position = entry.get("position")
    if not isinstance(position, dict):
        raise SnapshotError(f"Tile at ({x}, {y}) has no position")
    if position.get("x") != x or position.get("y") != y:
        raise SnapshotError(f"Tile stored at ({x}, {y}) claims position {position}")
    value = entry.get("value")
    if not _is_int(value) or value < 2 or value & (value - 1):
        raise SnapshotError(f"Tile at ({x}, {y}) has invalid value {value!r}")


def validate_grid_snapshot(snapshot: Any, *, size: Optional[int] = None) -> None:
    """Raise ``SnapshotError`` unless ``snapshot`` is a well formed grid."""
    if not isinstance(snapshot, dict):
        raise SnapshotError("Grid snapshot must be a mapping")
    grid_size = snapshot.get("size")
    if not _is_int(grid_size) or grid_size < 1:
        raise SnapshotError(f"Invalid grid size {grid_size!r}")
    if size is not None and grid_size != size:
        raise SnapshotError(f"Grid size {grid_size} does not match expected size {size}")
    cells = snapshot.get("cells")
    if not isinstance(cells, list) or len(cells) != grid_size:
        raise SnapshotError("Grid cells must be a list with one column per x")
    for x, column in enumerate(cells):
        if not isinstance(column, list) or len(column) != grid_size:
            raise SnapshotError(f"Column {x} must hold {grid_size} cells")
        for y, entry in enumerate(column):
            if entry is not None:
                _check_tile(entry, x, y)


def validate_snapshot(snapshot: Any, *, size: Optional[int] = None) -> None:
    """Raise ``SnapshotError`` unless ``snapshot`` is a well formed game."""
    if not isinstance(snapshot, dict):
        raise SnapshotError("Game snapshot must be a mapping")
    missing = {"grid", "score", "over", "won", "keepPlaying"} - snapshot.keys()
    if missing:
        raise SnapshotError(f"Game snapshot is missing {sorted(missing)}")
    validate_grid_snapshot(snapshot["grid"], size=size)
    score = snapshot["score"]
    if not _is_int(score) or score < 0:
        raise SnapshotError(f"Invalid score {score!r}")
    for flag in ("over", "won", "keepPlaying"):
        if not isinstance(snapshot[flag], bool):
            raise SnapshotError(f"Flag {flag!r} must be a bool")
