"""
Testy dla algorytmów wyszukiwania: A*, odległość efektywna, BFS.

Plansza 5x5 (SMALL_GRID), numeracja pól wierszami od 1:

    r=0:   1  2  3  4  5        axial q:  0..4
    r=1:    6  7  8  9 10                 0..4
    r=2:  11 12 13 14 15                 -1..3
    r=3:   16 17 18 19 20                -1..3
    r=4:  21 22 23 24 25                 -2..2
"""

import math

import pytest

from hexpath.core.hex_coord import HexCoord
from hexpath.core.hex_grid import HexGrid, SMALL_GRID, Tile
from hexpath.pathfinding.cache import PathfindingCache
from hexpath.pathfinding.search import (
    MAX_BFS_LAYERS,
    calculate_effective_distance,
    calculate_ranged_movement_distance,
    default_can_traverse,
    find_path,
    find_path_distance,
)


# ═══════════════════════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def grid():
    """Pusta plansza 5x5."""
    return HexGrid(SMALL_GRID)


@pytest.fixture
def corridor_grid():
    """Rząd r=2 zablokowany poza jednym przejściem (hex 15)."""
    grid = HexGrid(SMALL_GRID)
    for hex_id in (11, 12, 13, 14):
        grid.block(grid.get_hex(hex_id))
    return grid


@pytest.fixture
def walled_grid():
    """Rząd r=2 całkowicie zablokowany - górna i dolna część rozdzielone."""
    grid = HexGrid(SMALL_GRID)
    for hex_id in (11, 12, 13, 14, 15):
        grid.block(grid.get_hex(hex_id), breakable=(hex_id == 15))
    return grid


def infinite_plane(pos: HexCoord) -> Tile:
    """Lookup bez granic - każdy hex istnieje i jest pusty."""
    return Tile(hex=pos)


# ═══════════════════════════════════════════════════════════════════════════
# TEST: A*
# ═══════════════════════════════════════════════════════════════════════════

def test_path_to_self(grid):
    """start == goal -> ścieżka jednoelementowa."""
    start = grid.get_hex(7)
    assert find_path(start, start, grid.get_tile, default_can_traverse) == [start]


def test_shortest_path_on_open_grid(grid):
    """Na pustej planszy długość ścieżki = odległość hex."""
    start, goal = grid.get_hex(1), grid.get_hex(13)
    path = find_path(start, goal, grid.get_tile, default_can_traverse)

    assert path is not None
    assert len(path) - 1 == start.distance(goal) == 3
    assert path[0] == start
    assert path[-1] == goal


def test_path_steps_are_adjacent_and_carry_ids(grid):
    """Kolejne kroki są sąsiadami; każdy hex niesie id pola planszy."""
    path = find_path(grid.get_hex(1), grid.get_hex(25), grid.get_tile, default_can_traverse)

    for a, b in zip(path, path[1:]):
        assert a.distance(b) == 1
    assert path[0].get_id() == 1
    assert path[-1].get_id() == 25
    assert all(pos.get_id() > 0 for pos in path)


def test_path_goes_through_corridor(corridor_grid):
    """Jedyna droga przez rząd r=2 prowadzi przez hex 15."""
    start, goal = corridor_grid.get_hex(1), corridor_grid.get_hex(21)
    path = find_path(start, goal, corridor_grid.get_tile, default_can_traverse)

    assert path is not None
    assert corridor_grid.get_hex(15) in path
    assert len(path) - 1 == 10
    assert find_path_distance(start, goal, corridor_grid.get_tile, default_can_traverse) == 10


def test_no_path_through_wall(walled_grid):
    """Zniszczalna przeszkoda też blokuje ruch."""
    start, goal = walled_grid.get_hex(1), walled_grid.get_hex(21)
    assert find_path(start, goal, walled_grid.get_tile, default_can_traverse) is None
    assert find_path_distance(start, goal, walled_grid.get_tile, default_can_traverse) is None


def test_path_never_leaves_grid(grid):
    """Lookup zwraca None poza planszą - A* tam nie wchodzi."""
    path = find_path(grid.get_hex(5), grid.get_hex(21), grid.get_tile, default_can_traverse)
    assert all(grid.is_valid(pos) for pos in path)


def test_custom_traverse_predicate(grid):
    """Predykat wywołującego decyduje o przechodniości."""
    avoid = {grid.get_hex(2), grid.get_hex(6), grid.get_hex(7)}
    path = find_path(
        grid.get_hex(1), grid.get_hex(12), grid.get_tile,
        lambda tile: tile.hex not in avoid,
    )
    assert path is None


# ═══════════════════════════════════════════════════════════════════════════
# TEST: ODLEGŁOŚĆ EFEKTYWNA
# ═══════════════════════════════════════════════════════════════════════════

def test_effective_distance_melee(grid):
    """Zasięg 1, cel 3 hexy dalej -> 2 kroki ruchu."""
    result = calculate_effective_distance(
        grid.get_hex(1), grid.get_hex(13), 1, grid.get_tile, default_can_traverse
    )
    assert result.can_reach
    assert result.movement_distance == 2
    assert result.direct_distance == 3


def test_effective_distance_already_in_range(grid):
    """Cel w zasięgu -> 0 kroków bez przeszukiwania."""
    def exploding_lookup(pos):
        raise AssertionError("lookup should not be called")

    result = calculate_effective_distance(
        grid.get_hex(1), grid.get_hex(13), 3, exploding_lookup, default_can_traverse
    )
    assert result.movement_distance == 0
    assert result.can_reach


def test_effective_distance_uses_path_not_direct_distance(corridor_grid):
    """Objazd przez korytarz wydłuża ruch."""
    result = calculate_effective_distance(
        corridor_grid.get_hex(1), corridor_grid.get_hex(21), 1,
        corridor_grid.get_tile, default_can_traverse,
    )
    assert result.direct_distance == 4
    assert result.movement_distance == 9


def test_effective_distance_unreachable(walled_grid):
    result = calculate_effective_distance(
        walled_grid.get_hex(1), walled_grid.get_hex(21), 1,
        walled_grid.get_tile, default_can_traverse,
    )
    assert not result.can_reach
    assert math.isinf(result.movement_distance)


def test_effective_distance_cached(grid):
    """Drugie wywołanie zwraca wynik z cache."""
    cache = PathfindingCache()
    first = calculate_effective_distance(
        grid.get_hex(1), grid.get_hex(13), 1, grid.get_tile, default_can_traverse,
        caching_enabled=True, cache=cache,
    )
    second = calculate_effective_distance(
        grid.get_hex(1), grid.get_hex(13), 1, grid.get_tile, default_can_traverse,
        caching_enabled=True, cache=cache,
    )
    assert second is first
    assert cache.get_stats()["effectiveDistanceCacheSize"] == 1


def test_effective_distance_without_cache_leaves_cache_empty(grid):
    cache = PathfindingCache()
    calculate_effective_distance(
        grid.get_hex(1), grid.get_hex(13), 1, grid.get_tile, default_can_traverse,
        caching_enabled=False, cache=cache,
    )
    assert cache.get_stats()["effectiveDistanceCacheSize"] == 0


# ═══════════════════════════════════════════════════════════════════════════
# TEST: BFS DLA JEDNOSTEK DYSTANSOWYCH
# ═══════════════════════════════════════════════════════════════════════════

def test_ranged_target_already_in_range(grid):
    result = calculate_ranged_movement_distance(
        grid.get_hex(1), [grid.get_hex(13)], 3, grid.get_tile, default_can_traverse
    )
    assert result.movement_distance == 0
    assert result.reachable_targets == [grid.get_hex(13)]


def test_ranged_one_step(grid):
    """Po jednym kroku cel jest w zasięgu 2."""
    result = calculate_ranged_movement_distance(
        grid.get_hex(1), [grid.get_hex(13)], 2, grid.get_tile, default_can_traverse
    )
    assert result.can_reach
    assert result.movement_distance == 1


def test_ranged_keeps_all_targets_of_same_layer(grid):
    """Cele osiągalne w tej samej warstwie zwracane są razem."""
    targets = [grid.get_hex(13), grid.get_hex(16)]
    result = calculate_ranged_movement_distance(
        grid.get_hex(1), targets, 2, grid.get_tile, default_can_traverse
    )
    assert result.movement_distance == 1
    assert set(result.reachable_targets) == set(targets)
    assert len(result.reachable_targets) == 2


def test_ranged_no_targets():
    result = calculate_ranged_movement_distance(
        HexCoord(0, 0), [], 3, infinite_plane, default_can_traverse
    )
    assert not result.can_reach
    assert math.isinf(result.movement_distance)
    assert result.reachable_targets == []


def test_ranged_enclosed_target(walled_grid):
    """Cel za ścianą - BFS wyczerpuje planszę."""
    result = calculate_ranged_movement_distance(
        walled_grid.get_hex(1), [walled_grid.get_hex(23)], 1,
        walled_grid.get_tile, default_can_traverse,
    )
    assert not result.can_reach
    assert result.reachable_targets == []


def test_ranged_layer_cap_boundary():
    """20 kroków to maksimum - cel 21 hexów dalej jest osiągalny."""
    result = calculate_ranged_movement_distance(
        HexCoord(0, 0), [HexCoord(21, 0)], 1, infinite_plane, default_can_traverse
    )
    assert MAX_BFS_LAYERS == 20
    assert result.can_reach
    assert result.movement_distance == 20


def test_ranged_layer_cap_exceeded():
    """Cel wymagający 21 kroków uznany za nieosiągalny."""
    result = calculate_ranged_movement_distance(
        HexCoord(0, 0), [HexCoord(22, 0)], 1, infinite_plane, default_can_traverse
    )
    assert not result.can_reach
    assert math.isinf(result.movement_distance)


def test_ranged_custom_layer_cap():
    """max_layers pozwala przesunąć limit."""
    result = calculate_ranged_movement_distance(
        HexCoord(0, 0), [HexCoord(30, 0)], 1, infinite_plane, default_can_traverse,
        max_layers=40,
    )
    assert result.movement_distance == 29

    capped = calculate_ranged_movement_distance(
        HexCoord(0, 0), [HexCoord(5, 0)], 1, infinite_plane, default_can_traverse,
        max_layers=3,
    )
    assert not capped.can_reach


def test_effective_distance_cache_with_hexes_without_board_id():
    """Hexy bez id planszy - wynik z cache zgodny z liczonym od nowa."""
    cache = PathfindingCache()
    origin = HexCoord(0, 0)

    near = calculate_effective_distance(
        origin, HexCoord(3, 0), 1, infinite_plane, default_can_traverse,
        caching_enabled=True, cache=cache,
    )
    far = calculate_effective_distance(
        origin, HexCoord(8, 0), 1, infinite_plane, default_can_traverse,
        caching_enabled=True, cache=cache,
    )
    uncached = calculate_effective_distance(
        origin, HexCoord(8, 0), 1, infinite_plane, default_can_traverse,
    )

    assert near.movement_distance == 2
    assert far == uncached
    assert far.movement_distance == 7
    assert far.direct_distance == 8
    assert cache.get_stats()["effectiveDistanceCacheSize"] == 2
