#!/usr/bin/env python3
"""
Hex Pathfinding - Entry Point
═══════════════════════════════════════════════════════════════════════════

Buduje przykładową planszę z przeszkodami i postaciami obu drużyn,
po czym wypisuje mapy najbliższych celów oraz ścieżki debugowe.

Użycie:
    python main.py                    # Preset "full" z konfiguracji
    python main.py --preset small     # Mniejsza plansza 5x5
    python main.py --no-cache         # Obliczenia bez cache
    python main.py --verbose          # Logi DEBUG (trafienia cache itp.)
"""

import argparse
import logging
import sys
from pathlib import Path

# Dodaj src do path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from hexpath.core.config_loader import ConfigLoader
from hexpath.core.hex_grid import HexGrid, Team
from hexpath.pathfinding.service import PathfindingService


def build_demo_board(grid: HexGrid) -> dict:
    """
    Rozstawia przeszkody i postacie na planszy.

    Pozycje podawane są jako id pól, przycinane do rozmiaru planszy.

    Returns:
        dict: Mapa postać -> zasięg ataku
    """
    size = grid.preset.size

    def hex_at(hex_id: int):
        return grid.get_hex(min(hex_id, size))

    # Przeszkody w środkowym rzędzie
    middle = (grid.height // 2) * grid.width
    grid.block(hex_at(middle + 2))
    grid.block(hex_at(middle + 3), breakable=True)

    grid.place_character(hex_at(1), Team.ALLY, "knight")
    grid.place_character(hex_at(grid.width - 1), Team.ALLY, "archer")
    grid.place_character(hex_at(size - grid.width + 2), Team.ENEMY, "orc")
    grid.place_character(hex_at(size), Team.ENEMY, "shaman")

    return {"knight": 1, "archer": 3, "orc": 1, "shaman": 2}


def main():
    """Główna funkcja."""
    parser = argparse.ArgumentParser(
        description="Hex Pathfinding Demo",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--preset",
        type=str,
        default="full",
        help="Preset planszy z pathfinding.yaml (domyślnie: full)"
    )
    parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Wyłącz cache pathfindingu"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Szczegółowy output"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    loader = ConfigLoader()
    try:
        preset = loader.get_grid_preset(args.preset)
    except KeyError as e:
        print(f"Błąd: {e}. Dostępne presety: {', '.join(loader.get_preset_names())}")
        return 1

    print("=" * 60)
    print("HEX PATHFINDING DEMO")
    print("=" * 60)
    print(f"Preset: {preset.name} ({preset.width}x{preset.height}, średnica {preset.diameter})")
    print()

    grid = HexGrid(preset)
    ranges = build_demo_board(grid)

    service = PathfindingService.from_config(grid, loader, ranges)
    if args.no_cache:
        service.enable_cache = False

    print(grid.debug_print())
    print()

    # ─────────────────────────────────────────────────────────────────────────
    # MAPY NAJBLIŻSZYCH CELÓW
    # ─────────────────────────────────────────────────────────────────────────
    tiles = {tile.hex.get_id(): tile for tile in grid.get_tiles_with_characters()}

    print("Najbliższy wróg dla sojuszników:")
    for hex_id, info in sorted(service.closest_enemy_map().items()):
        print(f"  {tiles[hex_id].character:<8} (hex {hex_id:>2}) -> hex {info.enemy_hex_id:>2}, ruch: {info.distance}")

    print("Najbliższy sojusznik dla wrogów:")
    for hex_id, info in sorted(service.closest_ally_map().items()):
        print(f"  {tiles[hex_id].character:<8} (hex {hex_id:>2}) -> hex {info.ally_hex_id:>2}, ruch: {info.distance}")
    print()

    # ─────────────────────────────────────────────────────────────────────────
    # ŚCIEŻKI DEBUGOWE
    # ─────────────────────────────────────────────────────────────────────────
    print("Ścieżki:")
    for result in service.debug_pathfinding_results():
        steps = " -> ".join(str(pos.get_id()) for pos in result.path)
        print(f"  [{result.team.value}] {result.from_hex_id} -> {result.to_hex_id}: {steps}")
    print()

    print("=" * 60)
    print(f"Cache: {service.cache_stats()}")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
