"""
Pathfinding module - wyszukiwanie ścieżek i wybór celów.

Zawiera:
- search: A*, odległość efektywna, BFS dla jednostek dystansowych
- tie_break: deterministyczne rozstrzyganie remisów
- targeting: najbliższy cel i mapy najbliższych celów
- cache: fasada czterech cache LRU
- service: PathfindingService z jawnym unieważnianiem cache
"""

from .cache import (
    CacheKind,
    PathfindingCache,
    get_default_cache,
    clear_pathfinding_cache,
    clear_specific_cache,
    get_cache_stats,
)
from .search import (
    MAX_BFS_LAYERS,
    DistanceResult,
    RangedDistanceResult,
    default_can_traverse,
    find_path,
    find_path_distance,
    calculate_effective_distance,
    calculate_ranged_movement_distance,
)
from .tie_break import (
    get_diagonal_row,
    are_hexes_in_same_diagonal_row,
    is_vertically_aligned,
    prefers,
    select_best_target,
)
from .targeting import (
    TargetResult,
    TargetInfo,
    find_closest_target,
    get_closest_enemy_map,
    get_closest_ally_map,
)
from .service import DebugPath, PathfindingService

__all__ = [
    "CacheKind", "PathfindingCache", "get_default_cache",
    "clear_pathfinding_cache", "clear_specific_cache", "get_cache_stats",
    "MAX_BFS_LAYERS", "DistanceResult", "RangedDistanceResult", "default_can_traverse",
    "find_path", "find_path_distance", "calculate_effective_distance",
    "calculate_ranged_movement_distance",
    "get_diagonal_row", "are_hexes_in_same_diagonal_row", "is_vertically_aligned",
    "prefers", "select_best_target",
    "TargetResult", "TargetInfo", "find_closest_target",
    "get_closest_enemy_map", "get_closest_ally_map",
    "DebugPath", "PathfindingService",
]
