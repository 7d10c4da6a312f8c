"""
Core module - podstawowe komponenty silnika.

Zawiera:
- HexCoord: System współrzędnych hexagonalnych
- HexGrid: Plansza z polami, przeszkodami i postaciami
- PriorityQueue: Min-heap z aktualizacją priorytetu (open set A*)
- MemoCache: Cache LRU i budowanie kluczy konfiguracji
- ConfigLoader: Wczytywanie konfiguracji z defaults
"""

from .hex_coord import HexCoord
from .hex_grid import HexGrid, GridPreset, Tile, State, Team, FULL_GRID, SMALL_GRID
from .priority_queue import PriorityQueue
from .memo_cache import MemoCache, CacheStats, generate_path_cache_key, generate_grid_cache_key
from .config_loader import ConfigLoader

__all__ = [
    "HexCoord", "HexGrid", "GridPreset", "Tile", "State", "Team", "FULL_GRID", "SMALL_GRID",
    "PriorityQueue", "MemoCache", "CacheStats",
    "generate_path_cache_key", "generate_grid_cache_key", "ConfigLoader",
]
