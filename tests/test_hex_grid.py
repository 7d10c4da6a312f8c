"""
Testy dla planszy hexagonalnej (kolaborator silnika).
"""

import pytest

from hexpath.core.hex_coord import HexCoord
from hexpath.core.hex_grid import FULL_GRID, SMALL_GRID, HexGrid, State, Team


@pytest.fixture
def grid():
    """Pusta plansza 5x5."""
    return HexGrid(SMALL_GRID)


# ═══════════════════════════════════════════════════════════════════════════
# TEST: NUMERACJA I GRANICE
# ═══════════════════════════════════════════════════════════════════════════

def test_ids_are_row_major(grid):
    """id = y * width + x + 1, układ odd-r."""
    assert grid.get_hex(1) == HexCoord(0, 0)
    assert grid.get_hex(5) == HexCoord(4, 0)
    assert grid.get_hex(13) == HexCoord(1, 2)
    assert grid.get_hex(21) == HexCoord(-2, 4)
    assert grid.get_hex(13).get_id() == 13


def test_full_grid_has_45_tiles():
    grid = HexGrid(FULL_GRID)
    tiles = grid.get_all_tiles()
    assert len(tiles) == 45
    assert [tile.hex.get_id() for tile in tiles] == list(range(1, 46))


def test_lookup_outside_grid_returns_none(grid):
    assert grid.get_tile(HexCoord(-1, 0)) is None
    assert not grid.is_valid(HexCoord(5, 0))
    assert grid.is_valid(HexCoord(-2, 4))


def test_get_hex_unknown_id_raises(grid):
    with pytest.raises(KeyError):
        grid.get_hex(26)


def test_resolve_assigns_id(grid):
    assert grid.resolve(1, 2).get_id() == 13
    with pytest.raises(ValueError):
        grid.resolve(9, 9)


# ═══════════════════════════════════════════════════════════════════════════
# TEST: MODYFIKACJE
# ═══════════════════════════════════════════════════════════════════════════

def test_place_and_remove_character(grid):
    pos = grid.get_hex(7)

    assert grid.place_character(pos, Team.ENEMY, "orc")
    tile = grid.get_tile(pos)
    assert tile.state == State.OCCUPIED_ENEMY
    assert tile.character == "orc"
    assert grid.characters_placed == 1

    assert grid.remove_character(pos)
    assert grid.get_tile(pos).state == State.DEFAULT
    assert grid.characters_placed == 0
    assert not grid.remove_character(pos)


def test_cannot_place_on_occupied_or_blocked(grid):
    grid.place_character(grid.get_hex(1), Team.ALLY, "knight")
    grid.block(grid.get_hex(2), breakable=True)

    assert not grid.place_character(grid.get_hex(1), Team.ENEMY, "orc")
    assert not grid.place_character(grid.get_hex(2), Team.ENEMY, "orc")
    assert grid.get_tile(grid.get_hex(2)).state == State.BLOCKED_BREAKABLE


def test_place_outside_grid_raises(grid):
    with pytest.raises(ValueError):
        grid.place_character(HexCoord(10, 10), Team.ALLY, "knight")


def test_every_mutation_bumps_version(grid):
    version = grid.version
    grid.block(grid.get_hex(3))
    grid.place_character(grid.get_hex(4), Team.ALLY, "knight")
    grid.remove_character(grid.get_hex(4))
    grid.set_state(grid.get_hex(5), State.AVAILABLE_ALLY)

    assert grid.version == version + 4


def test_debug_print(grid):
    grid.block(grid.get_hex(2))
    grid.place_character(grid.get_hex(1), Team.ALLY, "knight")
    grid.place_character(grid.get_hex(7), Team.ENEMY, "orc")

    lines = grid.debug_print().split("\n")
    assert len(lines) == 5
    assert lines[0] == "A # . . ."
    assert lines[1] == " . E . . ."
