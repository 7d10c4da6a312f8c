"""
Ograniczony cache LRU oraz budowanie kluczy cache.

MemoCache:
    Generyczny cache klucz -> wartość o stałej pojemności.
    Po przekroczeniu pojemności usuwany jest element najdawniej używany
    (Least Recently Used). Zarówno `get` (trafienie) jak i `set`
    oznaczają wpis jako ostatnio użyty.

    Cache jest przezroczysty: zwraca dokładnie tę wartość, którą zapisano.
    Obecność cache nigdy nie zmienia wyniku - tylko koszt obliczeń.

Klucze:
    generate_path_cache_key(start_id, goal_id, range_)
        -> "12-30-1"
    generate_grid_cache_key(tiles, ranges, preset_name)
        -> kanoniczny opis całej konfiguracji planszy (posortowany,
           niezależny od kolejności podanych pól)

Przykład:
    >>> cache = MemoCache(max_size=2)
    >>> cache.set("a", 1); cache.set("b", 2)
    >>> cache.get("a")
    1
    >>> cache.set("c", 3)     # wyrzuca "b" (najdawniej użyty)
    >>> cache.get("b") is None
    True
"""

from __future__ import annotations
from collections import OrderedDict
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, Iterable, List, Mapping, Optional, TypeVar, Union

if TYPE_CHECKING:
    from .hex_grid import Tile

K = TypeVar('K')
V = TypeVar('V')


@dataclass
class CacheStats:
    """Statystyki trafień cache."""

    hits: int = 0
    misses: int = 0
    evictions: int = 0

    @property
    def total_lookups(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        if self.total_lookups == 0:
            return 0.0
        return (self.hits / self.total_lookups) * 100.0


class MemoCache(Generic[K, V]):
    """
    Cache LRU o stałej pojemności.

    Attributes:
        max_size (int): Maksymalna liczba wpisów
        stats (CacheStats): Trafienia / chybienia / usunięcia
    """

    def __init__(self, max_size: int = 500):
        if max_size <= 0:
            raise ValueError("Cache max_size must be a positive integer.")
        self.max_size = max_size
        self._entries: OrderedDict[K, V] = OrderedDict()
        self.stats = CacheStats()

    def get(self, key: K) -> Optional[V]:
        """
        Zwraca wartość dla klucza i oznacza wpis jako ostatnio użyty.

        Returns:
            Optional[V]: Zapisana wartość lub None gdy brak wpisu
        """
        if key not in self._entries:
            self.stats.misses += 1
            return None

        self._entries.move_to_end(key)
        self.stats.hits += 1
        return self._entries[key]

    def set(self, key: K, value: V) -> None:
        """Zapisuje wartość; przy przepełnieniu usuwa najdawniej użyty wpis."""
        self._entries[key] = value
        self._entries.move_to_end(key)

        while len(self._entries) > self.max_size:
            self._entries.popitem(last=False)
            self.stats.evictions += 1

    def clear(self) -> None:
        """Usuwa wszystkie wpisy i zeruje statystyki."""
        self._entries.clear()
        self.stats = CacheStats()

    @property
    def size(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def values(self) -> List[V]:
        """Wartości w kolejności od najdawniej użytej (bez zmiany kolejności LRU)."""
        return list(self._entries.values())

    def __repr__(self) -> str:
        return f"<MemoCache size={self.size}/{self.max_size}>"


# ═══════════════════════════════════════════════════════════════════════════
# KLUCZE CACHE
# ═══════════════════════════════════════════════════════════════════════════

def generate_path_cache_key(start_id: Union[int, str], goal_id: Union[int, str], range_: int) -> str:
    """
    Klucz dla cache ścieżek i odległości efektywnych.

    Wywołujący przekazują `HexCoord.cache_id` - id planszy albo pozycję
    hexa bez id, więc klucze różnych par hexów się nie pokrywają.

    Example:
        >>> generate_path_cache_key(1, 13, 1)
        '1-13-1'
        >>> generate_path_cache_key(HexCoord(0, 0).cache_id, HexCoord(3, 0).cache_id, 1)
        '(0,0)-(3,0)-1'
    """
    return f"{start_id}-{goal_id}-{range_}"


def generate_grid_cache_key(
    tiles: Iterable["Tile"],
    character_ranges: Optional[Mapping[str, int]] = None,
    preset_name: str = "",
) -> str:
    """
    Klucz dla zagregowanych map najbliższych celów.

    Opisuje pełną konfigurację: pozycje, drużyny, postacie i ich zasięgi.
    Wpisy są sortowane, więc kolejność pól na wejściu nie ma znaczenia.

    Args:
        tiles: Pola z postaciami
        character_ranges: Mapa postać -> zasięg ataku
        preset_name: Nazwa presetu planszy

    Returns:
        str: Kanoniczny klucz konfiguracji
    """
    ranges = character_ranges or {}
    entries = []
    for tile in tiles:
        team = tile.team.value if tile.team is not None else "-"
        character = tile.character or "-"
        range_ = ranges.get(tile.character, 1) if tile.character else 1
        entries.append(f"{tile.hex.get_id()}:{tile.hex.key}:{team}:{character}:{range_}")
    entries.sort()
    return f"{preset_name}|" + "|".join(entries)
