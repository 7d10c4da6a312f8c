"""
Algorytmy wyszukiwania ścieżek na siatce hexagonalnej.

Funkcje:
    find_path                           - A* (najkrótsza ścieżka)
    find_path_distance                  - liczba kroków ścieżki A*
    calculate_effective_distance        - ruch potrzebny, by cel był w zasięgu
    calculate_ranged_movement_distance  - BFS warstwami dla jednostek dystansowych

Jak działa A*:
    1. Utrzymuj open set (PriorityQueue) i closed set (klucze hexów)
    2. Dla każdego węzła:
       - g: koszt od startu (każdy krok = 1)
       - h: heurystyka = odległość hex do celu (dopuszczalna i spójna)
       - f: g + h
    3. Zawsze rozwijaj węzeł z najniższym f
    4. Sukces, gdy cel zostanie ZDJĘTY z kolejki (nie tylko odkryty)

Kolaboratorzy (przekazywani przez wywołującego):
    get_tile(hex) -> Optional[Tile]   - None dla hexów poza planszą
    can_traverse(tile) -> bool        - czy przez pole można przejść

Brak wyniku NIE jest wyjątkiem:
    - brak ścieżki                -> None
    - cel nieosiągalny            -> can_reach=False, movement_distance=inf
Wyjątki rzucone przez get_tile / can_traverse propagują do wywołującego.

Przykład użycia:
    >>> grid = HexGrid(SMALL_GRID)
    >>> path = find_path(grid.get_hex(1), grid.get_hex(13), grid.get_tile, default_can_traverse)
    >>> len(path) - 1
    3
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Set, Union
import logging
import math

from ..core.hex_coord import HexCoord
from ..core.hex_grid import State, Tile
from ..core.memo_cache import generate_path_cache_key
from ..core.priority_queue import PriorityQueue
from .cache import PathfindingCache, get_default_cache

logger = logging.getLogger(__name__)

TileLookup = Callable[[HexCoord], Optional[Tile]]
TraversePredicate = Callable[[Tile], bool]
Distance = Union[int, float]

# Limit warstw BFS - zabezpieczenie przed przeszukiwaniem bez końca
MAX_BFS_LAYERS = 20


# ═══════════════════════════════════════════════════════════════════════════
# TYPY WYNIKÓW
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class PathNode:
    """
    Węzeł w algorytmie A*.

    Należy wyłącznie do jednego wywołania find_path.

    Attributes:
        hex: Pozycja węzła
        g: Koszt od startu
        h: Heurystyka (odległość do celu)
        f: g + h
        parent: Poprzedni węzeł na ścieżce
    """
    hex: HexCoord
    g: int
    h: int
    f: int
    parent: Optional["PathNode"] = None


@dataclass(frozen=True)
class DistanceResult:
    """
    Wynik calculate_effective_distance.

    Attributes:
        movement_distance: Liczba kroków ruchu potrzebnych, by cel
            znalazł się w zasięgu (math.inf gdy nieosiągalny)
        can_reach: Czy cel jest osiągalny
        direct_distance: Odległość hex ignorująca przeszkody
    """
    movement_distance: Distance
    can_reach: bool
    direct_distance: int


@dataclass(frozen=True)
class RangedDistanceResult:
    """
    Wynik calculate_ranged_movement_distance.

    Attributes:
        movement_distance: Minimalna liczba kroków (math.inf gdy brak)
        can_reach: Czy którykolwiek cel jest osiągalny
        reachable_targets: Wszystkie cele osiągalne tym samym minimalnym
            kosztem (remisy zachowane dla tie-breakingu)
    """
    movement_distance: Distance
    can_reach: bool
    reachable_targets: List[HexCoord] = field(default_factory=list)


def _unreachable() -> RangedDistanceResult:
    return RangedDistanceResult(movement_distance=math.inf, can_reach=False, reachable_targets=[])


def default_can_traverse(tile: Tile) -> bool:
    """Przechodnie są wszystkie pola poza przeszkodami."""
    return tile.state not in (State.BLOCKED, State.BLOCKED_BREAKABLE)


# ═══════════════════════════════════════════════════════════════════════════
# A*
# ═══════════════════════════════════════════════════════════════════════════

def find_path(
    start: HexCoord,
    goal: HexCoord,
    get_tile: TileLookup,
    can_traverse: TraversePredicate,
) -> Optional[List[HexCoord]]:
    """
    Znajduje najkrótszą ścieżkę między dwoma hexami (A*).

    Args:
        start: Pozycja startowa (jej pole nie jest sprawdzane)
        goal: Pozycja docelowa
        get_tile: Lookup pól planszy
        can_traverse: Predykat przechodniości

    Returns:
        Optional[List[HexCoord]]: Ścieżka od start do goal (włącznie z
            oboma), [start] gdy start == goal, None gdy ścieżki brak.

    Algorithm:
        1. Wstaw węzeł startowy do open set
        2. Dopóki open set nie jest pusty:
           a. Zdejmij węzeł z najniższym f
           b. Jeśli to goal - odtwórz i zwróć ścieżkę
           c. Dodaj do closed set
           d. Dla każdego z 6 sąsiadów (kierunki 0-5):
              - pomiń zamknięte, nieistniejące i nieprzechodnie
              - nowy węzeł albo relaksacja gdy tentative_g < g
        3. Open set pusty - brak ścieżki
    """
    open_set: PriorityQueue[PathNode] = PriorityQueue()
    closed_set: Set[str] = set()
    nodes: Dict[str, PathNode] = {}

    start_h = start.distance(goal)
    start_node = PathNode(hex=start, g=0, h=start_h, f=start_h)
    open_set.enqueue(start_node, start_node.f)
    nodes[start.key] = start_node

    while not open_set.is_empty():
        current = open_set.dequeue()
        if current is None:
            break

        if current.hex == goal:
            return _reconstruct_path(current)

        closed_set.add(current.hex.key)

        for direction in range(6):
            neighbor = current.hex.neighbor(direction)
            neighbor_key = neighbor.key

            if neighbor_key in closed_set:
                continue

            tile = get_tile(neighbor)
            if tile is None or not can_traverse(tile):
                continue

            tentative_g = current.g + 1
            node = nodes.get(neighbor_key)

            if node is None:
                h = neighbor.distance(goal)
                # tile.hex niesie id pola z planszy
                node = PathNode(hex=tile.hex, g=tentative_g, h=h, f=tentative_g + h, parent=current)
                nodes[neighbor_key] = node
                open_set.enqueue(node, node.f)
            elif tentative_g < node.g:
                node.g = tentative_g
                node.f = tentative_g + node.h
                node.parent = current
                open_set.update_priority(node, node.f, lambda a, b: a.hex == b.hex)

    logger.debug("No path from %s to %s", start, goal)
    return None


def _reconstruct_path(node: PathNode) -> List[HexCoord]:
    """Odtwarza ścieżkę od startu do węzła po łańcuchu rodziców."""
    path: List[HexCoord] = []
    current: Optional[PathNode] = node
    while current is not None:
        path.append(current.hex)
        current = current.parent
    path.reverse()
    return path


def find_path_distance(
    start: HexCoord,
    goal: HexCoord,
    get_tile: TileLookup,
    can_traverse: TraversePredicate,
) -> Optional[int]:
    """
    Długość najkrótszej ścieżki w krokach.

    Returns:
        Optional[int]: len(path) - 1 lub None gdy ścieżki brak
    """
    path = find_path(start, goal, get_tile, can_traverse)
    return len(path) - 1 if path is not None else None


# ═══════════════════════════════════════════════════════════════════════════
# ODLEGŁOŚĆ EFEKTYWNA (Z ZASIĘGIEM)
# ═══════════════════════════════════════════════════════════════════════════

def calculate_effective_distance(
    start: HexCoord,
    goal: HexCoord,
    range_: int,
    get_tile: TileLookup,
    can_traverse: TraversePredicate,
    caching_enabled: bool = False,
    cache: Optional[PathfindingCache] = None,
) -> DistanceResult:
    """
    Liczba kroków ruchu potrzebna, by cel znalazł się w zasięgu.

    Args:
        start: Pozycja jednostki
        goal: Pozycja celu
        range_: Zasięg ataku jednostki
        get_tile: Lookup pól planszy
        can_traverse: Predykat przechodniości
        caching_enabled: Czy korzystać z cache
        cache: Cache (None = współdzielona instancja)

    Returns:
        DistanceResult:
            - direct_distance <= range_  -> 0 kroków, bez przeszukiwania
            - brak ścieżki               -> can_reach=False, inf
            - ścieżka                    -> max(0, kroki - range_)

    Example:
        >>> result = calculate_effective_distance(a, b, 1, grid.get_tile, default_can_traverse)
        >>> result.movement_distance
        2
    """
    cache_key = generate_path_cache_key(start.cache_id, goal.cache_id, range_)
    if caching_enabled:
        cache = cache or get_default_cache()
        cached = cache.get_effective_distance(cache_key)
        if cached is not None:
            logger.debug("Effective distance cache hit for %s", cache_key)
            return cached

    direct_distance = start.distance(goal)

    if direct_distance <= range_:
        result = DistanceResult(movement_distance=0, can_reach=True, direct_distance=direct_distance)
    else:
        path = find_path(start, goal, get_tile, can_traverse)
        if path is None:
            result = DistanceResult(
                movement_distance=math.inf, can_reach=False, direct_distance=direct_distance
            )
        else:
            result = DistanceResult(
                movement_distance=max(0, len(path) - 1 - range_),
                can_reach=True,
                direct_distance=direct_distance,
            )

    if caching_enabled:
        cache.set_effective_distance(cache_key, result)
    return result


# ═══════════════════════════════════════════════════════════════════════════
# BFS DLA JEDNOSTEK DYSTANSOWYCH
# ═══════════════════════════════════════════════════════════════════════════

def calculate_ranged_movement_distance(
    start: HexCoord,
    targets: Sequence[HexCoord],
    range_: int,
    get_tile: TileLookup,
    can_traverse: TraversePredicate,
    max_layers: int = MAX_BFS_LAYERS,
) -> RangedDistanceResult:
    """
    Minimalny ruch, po którym którykolwiek cel jest w zasięgu (BFS).

    Przeszukuje planszę warstwami kosztu ruchu 0, 1, 2, ... aż do
    `max_layers`. Wszystkie cele osiągnięte w tej samej warstwie są
    zwracane razem, żeby tie-breaking mógł wybrać jeden z nich.

    Args:
        start: Pozycja jednostki
        targets: Pozycje celów
        range_: Zasięg ataku
        get_tile: Lookup pól planszy
        can_traverse: Predykat przechodniości
        max_layers: Limit warstw BFS

    Returns:
        RangedDistanceResult: koszt 0 gdy cel już w zasięgu, koszt
            warstwa + 1 przy pierwszym trafieniu, inf gdy brak celu
            w `max_layers` warstwach.
    """
    if not targets:
        return _unreachable()

    immediate = [target for target in targets if start.distance(target) <= range_]
    if immediate:
        return RangedDistanceResult(movement_distance=0, can_reach=True, reachable_targets=immediate)

    current_moves = 0
    frontier: List[HexCoord] = [start]
    visited: Set[str] = {start.key}

    while frontier and current_moves < max_layers:
        next_frontier: List[HexCoord] = []
        reachable: Dict[str, HexCoord] = {}

        for current in frontier:
            for direction in range(6):
                neighbor = current.neighbor(direction)
                neighbor_key = neighbor.key

                if neighbor_key in visited:
                    continue

                tile = get_tile(neighbor)
                if tile is None or not can_traverse(tile):
                    continue

                visited.add(neighbor_key)
                next_frontier.append(neighbor)

                for target in targets:
                    if neighbor.distance(target) <= range_:
                        reachable.setdefault(target.key, target)

        if reachable:
            return RangedDistanceResult(
                movement_distance=current_moves + 1,
                can_reach=True,
                reachable_targets=list(reachable.values()),
            )

        frontier = next_frontier
        current_moves += 1

    logger.debug("No target within range %d of %s after %d layers", range_, start, current_moves)
    return _unreachable()
