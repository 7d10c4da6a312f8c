"""
Pathfinding router - zapytania o ścieżki i najbliższe cele.

Każde zapytanie opisuje planszę: preset, przeszkody i rozstawione postacie.
Cache:
    Klucze cache odległości nie opisują przeszkód, dlatego router trzyma
    osobny PathfindingCache dla każdego układu planszy (preset +
    przeszkody) w małym cache LRU. Handlery są `async def`, więc
    wykonują się w jednym wątku pętli zdarzeń - dostęp do cache jest
    serializowany bez dodatkowych blokad.
"""

from typing import Any, Dict, List, Literal, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from ...core.config_loader import ConfigLoader
from ...core.hex_coord import HexCoord
from ...core.hex_grid import HexGrid, Team
from ...core.memo_cache import MemoCache
from ...pathfinding.cache import CacheKind, PathfindingCache
from ...pathfinding.service import PathfindingService
from ...pathfinding.targeting import TargetInfo


router = APIRouter()

_loader = ConfigLoader()
_layout_caches: MemoCache[str, PathfindingCache] = MemoCache(max_size=16)


def get_loader() -> ConfigLoader:
    return _loader


def clear_all_caches(kind: Optional[str] = None) -> None:
    """Czyści cache wszystkich układów planszy (lub wybrany rodzaj)."""
    if kind is None:
        _layout_caches.clear()
        return
    cache_kind = CacheKind(kind)
    for cache in _layout_caches.values():
        cache.clear_specific(cache_kind)


# ═══════════════════════════════════════════════════════════════════════════
# REQUEST/RESPONSE MODELS
# ═══════════════════════════════════════════════════════════════════════════

class CharacterPlacement(BaseModel):
    """Postać rozstawiona na planszy."""
    position: List[int]  # [q, r]
    team: Literal["ally", "enemy"]
    character: Optional[str] = None
    range: Optional[int] = None


class BoardRequest(BaseModel):
    """Opis planszy."""
    preset: str = "full"
    blocked: List[List[int]] = []
    breakable: List[List[int]] = []
    characters: List[CharacterPlacement] = []
    use_cache: bool = True


class PathRequest(BoardRequest):
    """Request o ścieżkę A*."""
    start: List[int]
    goal: List[int]


# ═══════════════════════════════════════════════════════════════════════════
# BUDOWANIE PLANSZY
# ═══════════════════════════════════════════════════════════════════════════

def _position(grid: HexGrid, position: List[int]) -> HexCoord:
    if len(position) != 2:
        raise HTTPException(status_code=422, detail=f"Position must be [q, r], got {position}")
    try:
        return grid.resolve(position[0], position[1])
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


def _layout_key(request: BoardRequest) -> str:
    blocked = sorted(f"{q},{r}" for q, r in request.blocked)
    breakable = sorted(f"{q},{r}" for q, r in request.breakable)
    return f"{request.preset}#{';'.join(blocked)}#{';'.join(breakable)}"


def _build_service(request: BoardRequest) -> PathfindingService:
    """
    Buduje planszę i serwis dla zapytania.

    Raises:
        HTTPException: 404 dla nieznanego presetu, 422 dla błędnych pozycji
    """
    try:
        preset = _loader.get_grid_preset(request.preset)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))

    grid = HexGrid(preset)
    for position in request.blocked:
        grid.block(_position(grid, position))
    for position in request.breakable:
        grid.block(_position(grid, position), breakable=True)

    ranges: Dict[str, int] = {}
    for index, placement in enumerate(request.characters):
        character = placement.character or f"unit_{index}"
        pos = _position(grid, placement.position)
        if not grid.place_character(pos, Team(placement.team), character):
            raise HTTPException(status_code=422, detail=f"Cannot place {character} at {placement.position}")
        if placement.range is not None:
            ranges[character] = placement.range

    layout_key = _layout_key(request)
    cache = _layout_caches.get(layout_key)
    if cache is None:
        cache = PathfindingCache.from_config(_loader)
        _layout_caches.set(layout_key, cache)

    settings = _loader.get_pathfinding_config()
    return PathfindingService(
        grid,
        ranges,
        cache=cache,
        enable_cache=request.use_cache and bool(settings["enable_cache"]),
        max_layers=int(settings["max_bfs_layers"]),
    )


def _hex_payload(pos: HexCoord) -> Dict[str, int]:
    return {"id": pos.get_id(), "q": pos.q, "r": pos.r}


def _map_payload(result: Dict[int, TargetInfo]) -> Dict[str, Dict[str, Any]]:
    return {
        str(source_id): {"target_hex_id": info.target_hex_id, "distance": info.distance}
        for source_id, info in sorted(result.items())
    }


# ═══════════════════════════════════════════════════════════════════════════
# ENDPOINTS
# ═══════════════════════════════════════════════════════════════════════════

@router.get("/presets")
async def get_presets() -> List[Dict[str, Any]]:
    """Lista presetów planszy z konfiguracji."""
    return [
        {"name": preset.name, "width": preset.width, "height": preset.height, "diameter": preset.diameter}
        for preset in _loader.get_grid_presets().values()
    ]


@router.post("/path")
async def get_path(request: PathRequest) -> Dict[str, Any]:
    """
    Najkrótsza ścieżka między dwoma hexami.

    Returns:
        {"path": [...] | None, "distance": int | None}
    """
    service = _build_service(request)
    start = _position(service.grid, request.start)
    goal = _position(service.grid, request.goal)

    path = service.find_path(start, goal)
    if path is None:
        return {"path": None, "distance": None}
    return {"path": [_hex_payload(pos) for pos in path], "distance": len(path) - 1}


@router.post("/closest-targets")
async def get_closest_targets(request: BoardRequest) -> Dict[str, Any]:
    """
    Mapy najbliższych celów dla obu drużyn.

    Returns:
        {"closest_enemy": {ally_id: {...}}, "closest_ally": {enemy_id: {...}}}
    """
    service = _build_service(request)
    return {
        "closest_enemy": _map_payload(service.closest_enemy_map()),
        "closest_ally": _map_payload(service.closest_ally_map()),
    }


@router.post("/debug-paths")
async def get_debug_paths(request: BoardRequest) -> List[Dict[str, Any]]:
    """Ścieżki od każdej postaci do jej najbliższego celu."""
    service = _build_service(request)
    return [
        {
            "from_hex_id": result.from_hex_id,
            "to_hex_id": result.to_hex_id,
            "team": result.team.value,
            "path": [_hex_payload(pos) for pos in result.path],
        }
        for result in service.debug_pathfinding_results()
    ]


@router.get("/cache/stats")
async def get_cache_stats() -> Dict[str, int]:
    """Zsumowane rozmiary cache wszystkich układów planszy."""
    totals: Dict[str, int] = {
        "layouts": _layout_caches.size,
        "pathCacheSize": 0,
        "effectiveDistanceCacheSize": 0,
        "closestEnemyCacheSize": 0,
        "closestAllyCacheSize": 0,
    }
    for cache in _layout_caches.values():
        for name, size in cache.get_stats().items():
            totals[name] += size
    return totals


@router.delete("/cache")
async def clear_cache(kind: Optional[str] = None) -> Dict[str, str]:
    """Czyści cache (wszystko albo wybrany rodzaj)."""
    try:
        clear_all_caches(kind)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {"status": "cleared", "kind": kind or "all"}
