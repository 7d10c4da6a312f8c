"""
Wybór celu dla postaci (target acquisition).

find_closest_target:
    Wybór algorytmu zależy od zasięgu źródła:
    - Dystansowe (range > 1): jeden BFS względem wszystkich celów,
      potem tie-breaking spośród celów osiągalnych tym samym kosztem.
    - Wręcz (range == 1): A* osobno dla każdego celu
      (calculate_effective_distance), pole celu zawsze traktowane
      jako przechodnie - inaczej sam okupant blokowałby dojście.
      Remisy rozstrzygane na bieżąco tą samą polityką.

get_closest_enemy_map / get_closest_ally_map:
    Dla każdej postaci jednej drużyny najbliższy cel z drużyny
    przeciwnej. Wynik: hex_id źródła -> TargetInfo.
    Cała mapa jest cache'owana pod kluczem opisującym pełną
    konfigurację planszy (pozycje, drużyny, zasięgi).
    Z cache zwracane są płytkie kopie map.

Przykład:
    >>> result = find_closest_target(ally_tile, [enemy_tile], 1, grid.get_tile, default_can_traverse)
    >>> result
    TargetResult(hex_id=13, distance=2)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Sequence
import logging

from ..core.hex_coord import HexCoord
from ..core.hex_grid import FULL_GRID, GridPreset, Team, Tile
from ..core.memo_cache import generate_grid_cache_key
from .cache import PathfindingCache, get_default_cache
from .search import (
    MAX_BFS_LAYERS,
    Distance,
    TileLookup,
    TraversePredicate,
    calculate_effective_distance,
    calculate_ranged_movement_distance,
    default_can_traverse,
)
from .tie_break import prefers, select_best_target

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TargetResult:
    """
    Wybrany cel.

    Attributes:
        hex_id: Identyfikator hexa celu
        distance: Liczba kroków ruchu potrzebnych do ataku
    """
    hex_id: int
    distance: Distance


@dataclass(frozen=True)
class TargetInfo:
    """
    Wpis zagregowanej mapy najbliższych celów.

    Ustawione jest dokładnie jedno z enemy_hex_id / ally_hex_id -
    zależnie od tego, po której stronie szukano celu.
    """
    distance: Distance
    enemy_hex_id: Optional[int] = None
    ally_hex_id: Optional[int] = None

    @property
    def target_hex_id(self) -> Optional[int]:
        return self.enemy_hex_id if self.enemy_hex_id is not None else self.ally_hex_id


# ═══════════════════════════════════════════════════════════════════════════
# WYBÓR POJEDYNCZEGO CELU
# ═══════════════════════════════════════════════════════════════════════════

def find_closest_target(
    source_tile: Tile,
    target_tiles: Sequence[Tile],
    source_range: int,
    get_tile: TileLookup,
    can_traverse: TraversePredicate,
    grid_preset: GridPreset = FULL_GRID,
    caching_enabled: bool = False,
    cache: Optional[PathfindingCache] = None,
    max_layers: int = MAX_BFS_LAYERS,
) -> Optional[TargetResult]:
    """
    Znajduje najbliższy osiągalny cel.

    Args:
        source_tile: Pole postaci szukającej celu
        target_tiles: Pola potencjalnych celów
        source_range: Zasięg ataku postaci
        get_tile: Lookup pól planszy
        can_traverse: Predykat przechodniości
        grid_preset: Preset planszy (przekazywany dalej, nie ogranicza wyniku)
        caching_enabled: Czy korzystać z cache odległości
        cache: Cache (None = współdzielona instancja)
        max_layers: Limit warstw BFS dla jednostek dystansowych

    Returns:
        Optional[TargetResult]: Cel i koszt ruchu lub None, gdy lista
            celów jest pusta albo żaden cel nie jest osiągalny.
    """
    if not target_tiles:
        return None

    source = source_tile.hex

    if source_range > 1:
        ranged = calculate_ranged_movement_distance(
            source,
            [tile.hex for tile in target_tiles],
            source_range,
            get_tile,
            can_traverse,
            max_layers,
        )
        if not ranged.can_reach or not ranged.reachable_targets:
            return None

        reachable_keys = {target.key for target in ranged.reachable_targets}
        candidates = [tile for tile in target_tiles if tile.hex.key in reachable_keys]
        best = select_best_target(source, candidates)
        if best is None:
            return None

        return TargetResult(hex_id=best.hex.get_id(), distance=ranged.movement_distance)

    best_tile: Optional[Tile] = None
    best_distance: Distance = 0

    for target_tile in target_tiles:
        def can_traverse_to_target(tile: Tile, goal: HexCoord = target_tile.hex) -> bool:
            if tile.hex == goal:
                return True
            return can_traverse(tile)

        effective = calculate_effective_distance(
            source,
            target_tile.hex,
            source_range,
            get_tile,
            can_traverse_to_target,
            caching_enabled,
            cache,
        )
        if not effective.can_reach:
            continue

        distance = effective.movement_distance
        if best_tile is None or distance < best_distance:
            best_tile, best_distance = target_tile, distance
        elif distance == best_distance and prefers(source, target_tile.hex, best_tile.hex):
            best_tile = target_tile

    if best_tile is None:
        return None
    return TargetResult(hex_id=best_tile.hex.get_id(), distance=best_distance)


# ═══════════════════════════════════════════════════════════════════════════
# MAPY NAJBLIŻSZYCH CELÓW
# ═══════════════════════════════════════════════════════════════════════════

def _occupied_tiles_lookup(tiles_with_characters: Sequence[Tile]) -> TileLookup:
    """
    Domyślny lookup: widzi WYŁĄCZNIE podane pola z postaciami.

    Poprawny tylko, gdy wywołujący gwarantuje, że lista opisuje
    wszystkie istotne pola zapytania.
    """
    by_key: Dict[str, Tile] = {}
    for tile in tiles_with_characters:
        by_key.setdefault(tile.hex.key, tile)
    return lambda pos: by_key.get(pos.key)


def _build_target_map(
    source_team: Team,
    tiles_with_characters: Sequence[Tile],
    character_ranges: Mapping[str, int],
    grid_preset: GridPreset,
    caching_enabled: bool,
    get_tile: TileLookup,
    cache: Optional[PathfindingCache],
    max_layers: int,
) -> Dict[int, TargetInfo]:
    sources = [tile for tile in tiles_with_characters if tile.team == source_team]
    targets = [tile for tile in tiles_with_characters if tile.team is not None and tile.team != source_team]

    result: Dict[int, TargetInfo] = {}
    for source_tile in sources:
        range_ = character_ranges.get(source_tile.character, 1) if source_tile.character else 1
        closest = find_closest_target(
            source_tile,
            targets,
            range_,
            get_tile,
            default_can_traverse,
            grid_preset,
            caching_enabled,
            cache,
            max_layers,
        )
        if closest is None:
            continue

        if source_team == Team.ALLY:
            info = TargetInfo(distance=closest.distance, enemy_hex_id=closest.hex_id)
        else:
            info = TargetInfo(distance=closest.distance, ally_hex_id=closest.hex_id)
        result[source_tile.hex.get_id()] = info

    return result


def get_closest_enemy_map(
    tiles_with_characters: Sequence[Tile],
    character_ranges: Optional[Mapping[str, int]] = None,
    grid_preset: GridPreset = FULL_GRID,
    caching_enabled: bool = True,
    get_tile: Optional[TileLookup] = None,
    cache: Optional[PathfindingCache] = None,
    max_layers: int = MAX_BFS_LAYERS,
) -> Dict[int, TargetInfo]:
    """
    Najbliższy wróg dla każdego sojusznika.

    Args:
        tiles_with_characters: Pola zajęte przez postacie
        character_ranges: Mapa postać -> zasięg ataku (domyślnie 1)
        grid_preset: Preset planszy
        caching_enabled: Czy korzystać z cache
        get_tile: Lookup pól (None = tylko podane pola z postaciami)
        cache: Cache (None = współdzielona instancja)

    Returns:
        Dict[int, TargetInfo]: hex_id sojusznika -> {enemy_hex_id, distance}
    """
    ranges = character_ranges or {}
    if caching_enabled:
        cache = cache or get_default_cache()
        cache_key = generate_grid_cache_key(tiles_with_characters, ranges, grid_preset.name)
        cached = cache.get_closest_enemy_map(cache_key)
        if cached is not None:
            logger.debug("Closest enemy map cache hit")
            return dict(cached)

    result = _build_target_map(
        Team.ALLY,
        tiles_with_characters,
        ranges,
        grid_preset,
        caching_enabled,
        get_tile or _occupied_tiles_lookup(tiles_with_characters),
        cache,
        max_layers,
    )

    if caching_enabled:
        cache.set_closest_enemy_map(cache_key, dict(result))
    return result


def get_closest_ally_map(
    tiles_with_characters: Sequence[Tile],
    character_ranges: Optional[Mapping[str, int]] = None,
    grid_preset: GridPreset = FULL_GRID,
    caching_enabled: bool = True,
    get_tile: Optional[TileLookup] = None,
    cache: Optional[PathfindingCache] = None,
    max_layers: int = MAX_BFS_LAYERS,
) -> Dict[int, TargetInfo]:
    """
    Najbliższy sojusznik dla każdego wroga.

    Returns:
        Dict[int, TargetInfo]: hex_id wroga -> {ally_hex_id, distance}
    """
    ranges = character_ranges or {}
    if caching_enabled:
        cache = cache or get_default_cache()
        cache_key = generate_grid_cache_key(tiles_with_characters, ranges, grid_preset.name)
        cached = cache.get_closest_ally_map(cache_key)
        if cached is not None:
            logger.debug("Closest ally map cache hit")
            return dict(cached)

    result = _build_target_map(
        Team.ENEMY,
        tiles_with_characters,
        ranges,
        grid_preset,
        caching_enabled,
        get_tile or _occupied_tiles_lookup(tiles_with_characters),
        cache,
        max_layers,
    )

    if caching_enabled:
        cache.set_closest_ally_map(cache_key, dict(result))
    return result


def tiles_by_hex_id(tiles: Sequence[Tile]) -> Dict[int, Tile]:
    """Indeks pól po identyfikatorze hexa."""
    return {tile.hex.get_id(): tile for tile in tiles}

