"""
Testy dla PathfindingService - cache posiadany przez serwis i jego unieważnianie.
"""

import logging

import pytest

from hexpath.core.config_loader import ConfigLoader
from hexpath.core.hex_coord import HexCoord
from hexpath.core.hex_grid import HexGrid, SMALL_GRID, Team
from hexpath.pathfinding.service import PathfindingService
from hexpath.pathfinding.targeting import TargetInfo, TargetResult


# ═══════════════════════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def grid():
    """Plansza 5x5: knight na 1, orc na 13."""
    grid = HexGrid(SMALL_GRID)
    grid.place_character(grid.get_hex(1), Team.ALLY, "knight")
    grid.place_character(grid.get_hex(13), Team.ENEMY, "orc")
    return grid


@pytest.fixture
def service(grid):
    return PathfindingService(grid, {"knight": 1, "orc": 1})


# ═══════════════════════════════════════════════════════════════════════════
# TEST: ZAPYTANIA
# ═══════════════════════════════════════════════════════════════════════════

def test_closest_maps(service):
    assert service.closest_enemy_map() == {1: TargetInfo(distance=2, enemy_hex_id=13)}
    assert service.closest_ally_map() == {13: TargetInfo(distance=2, ally_hex_id=1)}


def test_closest_target(service, grid):
    assert service.closest_target(grid.get_hex(1)) == TargetResult(hex_id=13, distance=2)
    assert service.closest_target(grid.get_hex(13)) == TargetResult(hex_id=1, distance=2)


def test_closest_target_on_empty_tile(service, grid):
    assert service.closest_target(grid.get_hex(25)) is None


def test_character_range_update(service):
    service.set_character_range("knight", 3)
    assert service.closest_enemy_map()[1].distance == 0
    assert service.range_of(service.grid.get_tile(service.grid.get_hex(1))) == 3

    service.set_character_ranges({})
    assert service.closest_enemy_map()[1].distance == 2


def test_find_path_is_cached(service, grid):
    first = service.find_path(grid.get_hex(1), grid.get_hex(25))
    second = service.find_path(grid.get_hex(1), grid.get_hex(25))

    assert second == first
    assert len(first) - 1 == 6
    assert service.cache_stats()["pathCacheSize"] == 1


def test_cache_disabled(grid):
    service = PathfindingService(grid, enable_cache=False)
    service.closest_enemy_map()
    service.find_path(grid.get_hex(1), grid.get_hex(25))

    assert sum(service.cache_stats().values()) == 0


def test_services_do_not_share_cache(grid):
    first = PathfindingService(grid)
    second = PathfindingService(grid)
    first.closest_enemy_map()

    assert first.cache_stats()["closestEnemyCacheSize"] == 1
    assert second.cache_stats()["closestEnemyCacheSize"] == 0


# ═══════════════════════════════════════════════════════════════════════════
# TEST: UNIEWAŻNIANIE
# ═══════════════════════════════════════════════════════════════════════════

def test_obstacle_change_invalidates_cache():
    """Przeszkoda nie zmienia klucza mapy - wersja planszy wymusza przeliczenie."""
    grid = HexGrid(SMALL_GRID)
    grid.place_character(grid.get_hex(1), Team.ALLY, "knight")
    grid.place_character(grid.get_hex(21), Team.ENEMY, "orc")
    service = PathfindingService(grid)

    assert service.closest_enemy_map()[1].distance == 3

    for hex_id in (11, 12, 13, 14):
        grid.block(grid.get_hex(hex_id))

    assert service.closest_enemy_map()[1].distance == 9


def test_path_cache_invalidated_by_obstacle(service, grid):
    start, goal = grid.get_hex(1), grid.get_hex(21)
    assert service.find_path(start, goal) is not None

    for hex_id in (11, 12, 13, 14, 15):
        grid.block(grid.get_hex(hex_id))

    assert service.find_path(start, goal) is None


def test_invalidate_clears_and_logs(service, caplog):
    service.closest_enemy_map()
    assert service.cache_stats()["closestEnemyCacheSize"] == 1

    with caplog.at_level(logging.INFO, logger="hexpath.pathfinding.service"):
        service.invalidate()

    assert sum(service.cache_stats().values()) == 0
    assert "invalidated" in caplog.text


# ═══════════════════════════════════════════════════════════════════════════
# TEST: ŚCIEŻKI DEBUGOWE
# ═══════════════════════════════════════════════════════════════════════════

def test_debug_paths(service):
    results = service.debug_pathfinding_results()

    assert [(r.team, r.from_hex_id, r.to_hex_id) for r in results] == [
        (Team.ALLY, 1, 13),
        (Team.ENEMY, 13, 1),
    ]
    assert len(results[0].path) == 4
    assert results[0].path[0].get_id() == 1
    assert results[0].path[-1].get_id() == 13


def test_debug_paths_bypass_cache(service):
    service.debug_pathfinding_results()
    assert sum(service.cache_stats().values()) == 0


def test_debug_paths_empty_grid():
    service = PathfindingService(HexGrid(SMALL_GRID))
    assert service.debug_pathfinding_results() == []


# ═══════════════════════════════════════════════════════════════════════════
# TEST: KONFIGURACJA
# ═══════════════════════════════════════════════════════════════════════════

def test_from_config(tmp_path, grid):
    (tmp_path / "pathfinding.yaml").write_text(
        "pathfinding:\n  max_bfs_layers: 30\n  enable_cache: false\n", encoding="utf-8"
    )
    service = PathfindingService.from_config(grid, ConfigLoader(str(tmp_path)), {"knight": 2})

    assert service.max_layers == 30
    assert not service.enable_cache
    assert service.character_ranges == {"knight": 2}


def test_cached_path_is_a_copy(service, grid):
    """Modyfikacja zwróconej ścieżki nie zmienia wpisu w cache."""
    first = service.find_path(grid.get_hex(1), grid.get_hex(13))
    first.clear()

    second = service.find_path(grid.get_hex(1), grid.get_hex(13))
    assert len(second) == 4
    second.append(grid.get_hex(25))

    assert len(service.find_path(grid.get_hex(1), grid.get_hex(13))) == 4


def test_find_path_cache_with_hexes_without_board_id(service, grid):
    """Hexy bez id planszy (id=0) nie dzielą jednego wpisu cache."""
    short = service.find_path(HexCoord(0, 0), HexCoord(1, 0))
    longer = service.find_path(HexCoord(0, 0), HexCoord(4, 0))

    assert short[-1] == HexCoord(1, 0)
    assert longer[-1] == HexCoord(4, 0)
    assert len(longer) - 1 == 4
    assert service.cache_stats()["pathCacheSize"] == 2
