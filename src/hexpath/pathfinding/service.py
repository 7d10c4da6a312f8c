"""
PathfindingService - orkiestracja zapytań pathfindingu dla jednej planszy.

Serwis posiada:
    - planszę (HexGrid) - źródło pól i postaci
    - mapę zasięgów postaci (character -> range)
    - WŁASNY PathfindingCache (brak ukrytego stanu globalnego)

Unieważnianie cache:
    Zamiast automatycznego śledzenia zależności serwis jawnie porównuje
    `grid.version` z wersją, dla której liczył ostatnio. Każda zmiana
    planszy (przeszkoda, postać) podbija wersję - następne zapytanie
    czyści cache. `invalidate()` robi to na żądanie.

    Klucze cache odległości (start, cel, zasięg) nie opisują przeszkód,
    dlatego po zmianie planszy czyszczony jest CAŁY cache.

Użycie:
    >>> grid = HexGrid(SMALL_GRID)
    >>> grid.place_character(grid.get_hex(1), Team.ALLY, "knight")
    >>> grid.place_character(grid.get_hex(13), Team.ENEMY, "orc")
    >>> service = PathfindingService(grid, {"knight": 1})
    >>> service.closest_enemy_map()[1]
    TargetInfo(distance=2, enemy_hex_id=13, ally_hex_id=None)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional
import logging

from ..core.config_loader import ConfigLoader
from ..core.hex_coord import HexCoord
from ..core.hex_grid import HexGrid, Team, Tile
from ..core.memo_cache import generate_path_cache_key
from .cache import PathfindingCache
from .search import MAX_BFS_LAYERS, default_can_traverse, find_path
from .targeting import (
    TargetInfo,
    TargetResult,
    find_closest_target,
    get_closest_ally_map,
    get_closest_enemy_map,
    tiles_by_hex_id,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DebugPath:
    """
    Ścieżka od postaci do jej najbliższego celu (overlay debugowy).

    Attributes:
        from_hex_id: Hex postaci
        to_hex_id: Hex wybranego celu
        path: Pełna ścieżka A* (włącznie z oboma końcami)
        team: Drużyna postaci
    """
    from_hex_id: int
    to_hex_id: int
    path: List[HexCoord]
    team: Team


class PathfindingService:
    """
    Zapytania o ścieżki i cele dla jednej planszy.

    Attributes:
        grid (HexGrid): Plansza
        character_ranges (Dict[str, int]): Zasięgi ataku postaci
        cache (PathfindingCache): Cache posiadany przez serwis
        enable_cache (bool): Globalny przełącznik cache
        max_layers (int): Limit warstw BFS
    """

    def __init__(
        self,
        grid: HexGrid,
        character_ranges: Optional[Mapping[str, int]] = None,
        cache: Optional[PathfindingCache] = None,
        enable_cache: bool = True,
        max_layers: int = MAX_BFS_LAYERS,
    ):
        self.grid = grid
        self.character_ranges: Dict[str, int] = dict(character_ranges or {})
        self.cache = cache if cache is not None else PathfindingCache()
        self.enable_cache = enable_cache
        self.max_layers = max_layers
        self._seen_version = grid.version

    @classmethod
    def from_config(
        cls,
        grid: HexGrid,
        loader: ConfigLoader,
        character_ranges: Optional[Mapping[str, int]] = None,
    ) -> PathfindingService:
        """Tworzy serwis z pojemnościami cache i limitem BFS z konfiguracji."""
        loader.validate()
        settings = loader.get_pathfinding_config()
        return cls(
            grid,
            character_ranges,
            cache=PathfindingCache.from_config(loader),
            enable_cache=bool(settings["enable_cache"]),
            max_layers=int(settings["max_bfs_layers"]),
        )

    # ─────────────────────────────────────────────────────────────────────────
    # ZASIĘGI I UNIEWAŻNIANIE
    # ─────────────────────────────────────────────────────────────────────────

    def set_character_range(self, character: str, range_: int) -> None:
        self.character_ranges[character] = range_

    def set_character_ranges(self, ranges: Mapping[str, int]) -> None:
        """Zastępuje całą mapę zasięgów."""
        self.character_ranges = dict(ranges)

    def invalidate(self) -> None:
        """Czyści cache serwisu."""
        self.cache.clear()
        self._seen_version = self.grid.version
        logger.info("Pathfinding cache invalidated for grid '%s'", self.grid.preset.name)

    def _sync(self) -> None:
        if self.grid.version != self._seen_version:
            self.invalidate()

    def range_of(self, tile: Tile) -> int:
        """Zasięg postaci na polu (1 gdy nieznany)."""
        if not tile.character:
            return 1
        return self.character_ranges.get(tile.character, 1)

    # ─────────────────────────────────────────────────────────────────────────
    # ZAPYTANIA
    # ─────────────────────────────────────────────────────────────────────────

    def closest_enemy_map(self) -> Dict[int, TargetInfo]:
        """hex_id sojusznika -> najbliższy wróg."""
        self._sync()
        return get_closest_enemy_map(
            self.grid.get_tiles_with_characters(),
            self.character_ranges,
            self.grid.preset,
            self.enable_cache,
            self.grid.get_tile,
            self.cache,
            self.max_layers,
        )

    def closest_ally_map(self) -> Dict[int, TargetInfo]:
        """hex_id wroga -> najbliższy sojusznik."""
        self._sync()
        return get_closest_ally_map(
            self.grid.get_tiles_with_characters(),
            self.character_ranges,
            self.grid.preset,
            self.enable_cache,
            self.grid.get_tile,
            self.cache,
            self.max_layers,
        )

    def find_path(self, start: HexCoord, goal: HexCoord) -> Optional[List[HexCoord]]:
        """
        Ścieżka A* z użyciem cache ścieżek.

        Brak ścieżki (None) również jest zapamiętywany. Zwracana lista
        jest kopią - jej modyfikacja nie zmienia wpisu w cache.
        """
        self._sync()
        if not self.enable_cache:
            return find_path(start, goal, self.grid.get_tile, default_can_traverse)

        key = generate_path_cache_key(start.cache_id, goal.cache_id, 0)
        if self.cache.has_path(key):
            cached = self.cache.get_path(key)
            return list(cached) if cached is not None else None

        path = find_path(start, goal, self.grid.get_tile, default_can_traverse)
        self.cache.set_path(key, list(path) if path is not None else None)
        return path

    def closest_target(self, source: HexCoord) -> Optional[TargetResult]:
        """
        Najbliższy przeciwnik dla postaci stojącej na `source`.

        Returns:
            Optional[TargetResult]: None gdy pole jest puste lub brak celu
        """
        self._sync()
        source_tile = self.grid.get_tile(source)
        if source_tile is None or source_tile.team is None:
            return None

        targets = [
            tile for tile in self.grid.get_tiles_with_characters()
            if tile.team != source_tile.team
        ]
        return find_closest_target(
            source_tile,
            targets,
            self.range_of(source_tile),
            self.grid.get_tile,
            default_can_traverse,
            self.grid.preset,
            self.enable_cache,
            self.cache,
            self.max_layers,
        )

    def debug_pathfinding_results(self) -> List[DebugPath]:
        """
        Ścieżki od każdej postaci do jej najbliższego celu.

        Zawsze liczone od nowa (bez cache).
        """
        tiles = self.grid.get_tiles_with_characters()
        if not tiles:
            return []

        results: List[DebugPath] = []
        for team, opponent in ((Team.ALLY, Team.ENEMY), (Team.ENEMY, Team.ALLY)):
            sources = [tile for tile in tiles if tile.team == team]
            targets = [tile for tile in tiles if tile.team == opponent]
            targets_by_id = tiles_by_hex_id(targets)

            for source_tile in sources:
                closest = find_closest_target(
                    source_tile,
                    targets,
                    self.range_of(source_tile),
                    self.grid.get_tile,
                    default_can_traverse,
                    self.grid.preset,
                    False,
                    max_layers=self.max_layers,
                )
                if closest is None:
                    continue

                target_tile = targets_by_id.get(closest.hex_id)
                if target_tile is None:
                    continue

                path = find_path(source_tile.hex, target_tile.hex, self.grid.get_tile, default_can_traverse)
                if path is not None:
                    results.append(DebugPath(
                        from_hex_id=source_tile.hex.get_id(),
                        to_hex_id=closest.hex_id,
                        path=path,
                        team=team,
                    ))

        return results

    def cache_stats(self) -> Dict[str, int]:
        return self.cache.get_stats()
