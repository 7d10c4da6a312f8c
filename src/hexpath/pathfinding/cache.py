"""
Fasada cache pathfindingu.

Cztery niezależne cache LRU:
    path               - surowe ścieżki A*                (500 wpisów)
    effectiveDistance  - wyniki calculate_effective_distance (500 wpisów)
    closestEnemy       - mapy sojusznik -> najbliższy wróg  (100 wpisów)
    closestAlly        - mapy wróg -> najbliższy sojusznik  (100 wpisów)

Własność:
    PathfindingService tworzy i posiada WŁASNY cache. Funkcje modułowe
    (find_closest_target, get_closest_enemy_map, ...) przyjmują cache
    jawnie; gdy go nie podano, używają współdzielonej instancji
    zwracanej przez get_default_cache() - wygoda na granicy wywołania.

Cache nie jest synchronizowany - przy prawdziwej równoległości
dostęp trzeba serializować (np. threading.Lock w warstwie API).
"""

from __future__ import annotations
from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Optional, Union

from ..core.memo_cache import MemoCache

if TYPE_CHECKING:
    from ..core.config_loader import ConfigLoader
    from ..core.hex_coord import HexCoord
    from .search import DistanceResult
    from .targeting import TargetInfo


class CacheKind(Enum):
    """Rodzaj cache do selektywnego czyszczenia."""

    PATH = "path"
    EFFECTIVE_DISTANCE = "effectiveDistance"
    CLOSEST_ENEMY = "closestEnemy"
    CLOSEST_ALLY = "closestAlly"


class PathfindingCache:
    """
    Zestaw cache używanych przez algorytmy pathfindingu.

    Example:
        >>> cache = PathfindingCache()
        >>> cache.get_stats()["pathCacheSize"]
        0
        >>> cache.clear_specific("path")
    """

    def __init__(
        self,
        path_capacity: int = 500,
        distance_capacity: int = 500,
        map_capacity: int = 100,
    ):
        self._path_cache: MemoCache[str, Optional[List["HexCoord"]]] = MemoCache(path_capacity)
        self._effective_distance_cache: MemoCache[str, "DistanceResult"] = MemoCache(distance_capacity)
        self._closest_enemy_cache: MemoCache[str, Dict[int, "TargetInfo"]] = MemoCache(map_capacity)
        self._closest_ally_cache: MemoCache[str, Dict[int, "TargetInfo"]] = MemoCache(map_capacity)

    @classmethod
    def from_config(cls, loader: "ConfigLoader") -> PathfindingCache:
        """Tworzy cache o pojemnościach z sekcji `cache` konfiguracji."""
        config = loader.get_cache_config()
        return cls(
            path_capacity=int(config["path_capacity"]),
            distance_capacity=int(config["effective_distance_capacity"]),
            map_capacity=int(config["closest_map_capacity"]),
        )

    # ─────────────────────────────────────────────────────────────────────────
    # ŚCIEŻKI
    # ─────────────────────────────────────────────────────────────────────────

    def has_path(self, key: str) -> bool:
        """Ścieżka None (brak drogi) też jest zapamiętywana - stąd osobne has."""
        return key in self._path_cache

    def get_path(self, key: str) -> Optional[List["HexCoord"]]:
        return self._path_cache.get(key)

    def set_path(self, key: str, value: Optional[List["HexCoord"]]) -> None:
        self._path_cache.set(key, value)

    # ─────────────────────────────────────────────────────────────────────────
    # ODLEGŁOŚCI EFEKTYWNE
    # ─────────────────────────────────────────────────────────────────────────

    def get_effective_distance(self, key: str) -> Optional["DistanceResult"]:
        return self._effective_distance_cache.get(key)

    def set_effective_distance(self, key: str, value: "DistanceResult") -> None:
        self._effective_distance_cache.set(key, value)

    # ─────────────────────────────────────────────────────────────────────────
    # MAPY NAJBLIŻSZYCH CELÓW
    # ─────────────────────────────────────────────────────────────────────────

    def get_closest_enemy_map(self, key: str) -> Optional[Dict[int, "TargetInfo"]]:
        return self._closest_enemy_cache.get(key)

    def set_closest_enemy_map(self, key: str, value: Dict[int, "TargetInfo"]) -> None:
        self._closest_enemy_cache.set(key, value)

    def get_closest_ally_map(self, key: str) -> Optional[Dict[int, "TargetInfo"]]:
        return self._closest_ally_cache.get(key)

    def set_closest_ally_map(self, key: str, value: Dict[int, "TargetInfo"]) -> None:
        self._closest_ally_cache.set(key, value)

    # ─────────────────────────────────────────────────────────────────────────
    # ZARZĄDZANIE
    # ─────────────────────────────────────────────────────────────────────────

    def clear(self) -> None:
        """Czyści wszystkie cache."""
        for cache in self._caches().values():
            cache.clear()

    def clear_specific(self, kind: Union[CacheKind, str]) -> None:
        """
        Czyści jeden rodzaj cache.

        Args:
            kind: CacheKind lub jego wartość ("path", "effectiveDistance",
                "closestEnemy", "closestAlly")

        Raises:
            ValueError: Dla nieznanego rodzaju cache
        """
        self._caches()[CacheKind(kind)].clear()

    def get_stats(self) -> Dict[str, int]:
        """Rozmiary cache - do debugowania."""
        return {
            "pathCacheSize": self._path_cache.size,
            "effectiveDistanceCacheSize": self._effective_distance_cache.size,
            "closestEnemyCacheSize": self._closest_enemy_cache.size,
            "closestAllyCacheSize": self._closest_ally_cache.size,
        }

    def _caches(self) -> Dict[CacheKind, MemoCache]:
        return {
            CacheKind.PATH: self._path_cache,
            CacheKind.EFFECTIVE_DISTANCE: self._effective_distance_cache,
            CacheKind.CLOSEST_ENEMY: self._closest_enemy_cache,
            CacheKind.CLOSEST_ALLY: self._closest_ally_cache,
        }


# ═══════════════════════════════════════════════════════════════════════════
# WSPÓŁDZIELONA INSTANCJA
# ═══════════════════════════════════════════════════════════════════════════

_default_cache: Optional[PathfindingCache] = None


def get_default_cache() -> PathfindingCache:
    """Zwraca współdzieloną instancję cache (tworzoną przy pierwszym użyciu)."""
    global _default_cache
    if _default_cache is None:
        _default_cache = PathfindingCache()
    return _default_cache


def clear_pathfinding_cache(cache: Optional[PathfindingCache] = None) -> None:
    """Czyści wszystkie cache pathfindingu."""
    (cache or get_default_cache()).clear()


def clear_specific_cache(
    kind: Union[CacheKind, str],
    cache: Optional[PathfindingCache] = None,
) -> None:
    """Czyści wybrany rodzaj cache."""
    (cache or get_default_cache()).clear_specific(kind)


def get_cache_stats(cache: Optional[PathfindingCache] = None) -> Dict[str, int]:
    """Statystyki rozmiarów cache."""
    return (cache or get_default_cache()).get_stats()
