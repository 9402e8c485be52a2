"""Square board holding optional tiles."""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional, Tuple

from tile_merge.env.tile import Position, Tile
from tile_merge.env.snapshot import validate_grid_snapshot


Cells = List[List[Optional[Tile]]]


class Grid:
    """An ``size`` x ``size`` board.

    Cells are stored column-major, ``cells[x][y]``, and every tile in the
    board sits in the cell matching its own ``x``/``y``.
    """

    def __init__(self, size: int, cells: Cells | None = None) -> None:
        self.size = size
        self.cells: Cells = cells if cells is not None else [
            [None] * size for _ in range(size)
        ]

    # Construction ---------------------------------------------------------
    @classmethod
    def empty(cls, size: int) -> "Grid":
        return cls(size)

    @classmethod
    def from_snapshot(cls, snapshot: Dict[str, Any], *, size: int | None = None) -> "Grid":
        """Rebuild a grid from ``serialize`` output.

        Restored tiles carry no previous position or merge provenance.
        Raises ``SnapshotError`` on malformed input.
        """
        validate_grid_snapshot(snapshot, size=size)
        grid = cls(snapshot["size"])
        for x, column in enumerate(snapshot["cells"]):
            for y, entry in enumerate(column):
                if entry is not None:
                    grid.cells[x][y] = Tile(x, y, entry["value"])
        return grid

    def copy(self) -> "Grid":
        return Grid(self.size, [list(column) for column in self.cells])

    # Queries --------------------------------------------------------------
    def within_bounds(self, position: Tuple[int, int]) -> bool:
        x, y = position
        return 0 <= x < self.size and 0 <= y < self.size

    def cell_content(self, position: Tuple[int, int]) -> Optional[Tile]:
        if self.within_bounds(position):
            x, y = position
            return self.cells[x][y]
        return None

    def cell_occupied(self, position: Tuple[int, int]) -> bool:
        return self.cell_content(position) is not None

    def cell_available(self, position: Tuple[int, int]) -> bool:
        return not self.cell_occupied(position)

    def each_cell(self) -> Iterator[Tuple[int, int, Optional[Tile]]]:
        for x in range(self.size):
            for y in range(self.size):
                yield x, y, self.cells[x][y]

    def tiles(self) -> List[Tile]:
        return [tile for _, _, tile in self.each_cell() if tile is not None]

    def available_cells(self) -> List[Position]:
        return [Position(x, y) for x, y, tile in self.each_cell() if tile is None]

    def cells_available(self) -> bool:
        return bool(self.available_cells())

    def random_available_cell(self, rng) -> Optional[Position]:
        """Pick a free cell uniformly with ``rng``; ``None`` if the board is full."""
        cells = self.available_cells()
        if cells:
            return rng.choice(cells)
        return None

    # Mutation -------------------------------------------------------------
    def insert_tile(self, tile: Tile) -> None:
        self.cells[tile.x][tile.y] = tile

    def remove_tile(self, tile: Tile) -> None:
        self.cells[tile.x][tile.y] = None

    # Serialization --------------------------------------------------------
    def serialize(self) -> Dict[str, Any]:
        return {
            "size": self.size,
            "cells": [
                [tile.serialize() if tile else None for tile in column]
                for column in self.cells
            ],
        }

    def values(self) -> List[List[int]]:
        """Return tile values row by row (``[y][x]``), ``0`` for empty cells."""
        return [
            [self.cells[x][y].value if self.cells[x][y] else 0 for x in range(self.size)]
            for y in range(self.size)
        ]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.serialize() == other.serialize()

    def __repr__(self) -> str:
        return f"Grid(size={self.size}, rows={self.values()})"
