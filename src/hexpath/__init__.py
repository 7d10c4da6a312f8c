"""
hexpath - silnik pathfindingu i wyboru celów na siatce hexagonalnej.

Zawiera:
- core: współrzędne hex, plansza, kolejka priorytetowa, cache LRU, konfiguracja
- pathfinding: A*, BFS dla jednostek dystansowych, tie-breaking, mapy celów
- api: backend FastAPI (zapytania zdalne / overlay debugowy)
"""

from .core import HexCoord, HexGrid, GridPreset, Tile, State, Team, FULL_GRID, ConfigLoader
from .pathfinding import (
    PathfindingCache,
    PathfindingService,
    find_path,
    find_path_distance,
    calculate_effective_distance,
    calculate_ranged_movement_distance,
    find_closest_target,
    get_closest_enemy_map,
    get_closest_ally_map,
)

__version__ = "1.0.0"

__all__ = [
    "HexCoord", "HexGrid", "GridPreset", "Tile", "State", "Team", "FULL_GRID", "ConfigLoader",
    "PathfindingCache", "PathfindingService",
    "find_path", "find_path_distance", "calculate_effective_distance",
    "calculate_ranged_movement_distance", "find_closest_target",
    "get_closest_enemy_map", "get_closest_ally_map",
]
