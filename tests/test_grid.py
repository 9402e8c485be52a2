import subprocess
import sys
from pathlib import Path

import pytest

from tile_merge.env.grid import Grid
from tile_merge.env.tile import Position, Tile
from tile_merge.env.snapshot import SnapshotError


def test_empty_grid_has_every_cell_available():
    grid = Grid.empty(4)
    assert len(grid.available_cells()) == 16
    assert grid.cells_available()
    assert grid.tiles() == []


def test_available_cells_scan_columns_first(make_grid):
    grid = make_grid([
        [2, 0],
        [0, 4],
    ])
    assert grid.available_cells() == [Position(0, 1), Position(1, 0)]


def test_out_of_bounds_queries_do_not_raise():
    grid = Grid.empty(3)
    for cell in [(-1, 0), (0, -1), (3, 0), (0, 3)]:
        assert not grid.within_bounds(cell)
        assert grid.cell_content(cell) is None
        assert not grid.cell_occupied(cell)


def test_insert_and_remove_use_tile_position():
    grid = Grid.empty(4)
    tile = Tile(1, 2, 8)
    grid.insert_tile(tile)
    assert grid.cell_content((1, 2)) is tile
    assert grid.cells[1][2] is tile
    assert grid.cell_occupied((1, 2))
    assert not grid.cell_available((1, 2))

    grid.remove_tile(tile)
    assert grid.cell_available((1, 2))


def test_random_available_cell_uses_injected_rng(make_grid, stub_rng):
    grid = make_grid([
        [2, 2],
        [0, 0],
    ])
    stub_rng.index = 1
    assert grid.random_available_cell(stub_rng) == Position(1, 1)
    assert stub_rng.choices == [[Position(0, 1), Position(1, 1)]]


def test_random_available_cell_on_full_grid_is_none(make_grid, stub_rng):
    grid = make_grid([
        [2, 4],
        [8, 16],
    ])
    assert not grid.cells_available()
    assert grid.random_available_cell(stub_rng) is None


def test_serialize_layout(make_grid):
    grid = make_grid([
        [0, 2],
        [0, 0],
    ])
    assert grid.serialize() == {
        "size": 2,
        "cells": [
            [None, None],
            [{"position": {"x": 1, "y": 0}, "value": 2}, None],
        ],
    }


def test_snapshot_round_trip_drops_turn_annotations(make_grid):
    grid = Grid.empty(4)
    source = Tile(0, 0, 2, previous_position=Position(0, 3))
    grid.insert_tile(Tile(0, 0, 4, previous_position=None, merged_from=(source, source)))
    grid.insert_tile(Tile(3, 1, 2, previous_position=Position(1, 1)))

    restored = Grid.from_snapshot(grid.serialize())

    assert restored == grid
    for tile in restored.tiles():
        assert tile.previous_position is None
        assert tile.merged_from is None


def test_copy_is_independent(make_grid):
    grid = make_grid([
        [2, 0],
        [0, 0],
    ])
    clone = grid.copy()
    clone.insert_tile(Tile(1, 1, 4))
    assert grid.cell_available((1, 1))
    assert clone != grid


@pytest.mark.parametrize(
    "snapshot",
    [
        {"size": 0, "cells": []},
        {"size": 2, "cells": [[None, None]]},
        {"size": 2, "cells": [[None], [None, None]]},
        {"size": 2, "cells": [[None, {"position": {"x": 1, "y": 1}, "value": 2}], [None, None]]},
        {"size": 2, "cells": [[{"position": {"x": 0, "y": 0}, "value": 3}, None], [None, None]]},
        {"size": 2, "cells": [[{"value": 2}, None], [None, None]]},
        {"size": True, "cells": [[None]]},
        [],
    ],
)
def test_from_snapshot_rejects_malformed_input(snapshot):
    with pytest.raises(SnapshotError):
        Grid.from_snapshot(snapshot)


def test_from_snapshot_checks_expected_size():
    with pytest.raises(SnapshotError):
        Grid.from_snapshot(Grid.empty(3).serialize(), size=4)


def test_engine_core_imports_without_storage_stack():
    root = Path(__file__).resolve().parents[1]
    code = (
        "import sys\n"
        "import tile_merge.env.game_engine\n"
        "loaded = [m for m in ('google.cloud.storage', 'flax', 'jax') if m in sys.modules]\n"
        "assert not loaded, loaded\n"
    )
    completed = subprocess.run(
        [sys.executable, "-c", code], cwd=root, capture_output=True, text=True
    )
    assert completed.returncode == 0, completed.stderr
