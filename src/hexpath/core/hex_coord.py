"""
System współrzędnych hexagonalnych (Axial Coordinates).

Używamy Axial Coordinates (q, r) gdzie:
- q = kolumna (oś pozioma)
- r = wiersz (oś ukośna)

Konwersja do Cube Coordinates:
    s = -q - r
    Cube: (q, r, s) gdzie q + r + s = 0

Układ sąsiadów (pointy-top hexagons, zgodnie z zegarem od E):
    Kierunek   (dq, dr)
    ─────────────────────
    0  E  (→)     (+1,  0)
    1  SE (↘)     ( 0, +1)
    2  SW (↙)     (-1, +1)
    3  W  (←)     (-1,  0)
    4  NW (↖)     ( 0, -1)
    5  NE (↗)     (+1, -1)

Odległość między hexami:
    distance = (|dq| + |dr| + |ds|) / 2 = max(|dq|, |dr|, |ds|)

Identyfikator hexa:
    Każdy hex na planszy ma stabilny identyfikator `id` nadawany przez
    siatkę (HexGrid numeruje pola od 1, wierszami). Identyfikator NIE
    bierze udziału w porównaniach ani w hashu - dwa hexy o tych samych
    (q, r) są równe niezależnie od id. Hexy tworzone "z ręki" mają id=0.

Przykład użycia:
    >>> a = HexCoord(0, 0)
    >>> b = HexCoord(2, 1)
    >>> a.distance(b)
    3
    >>> a.neighbor(0)
    HexCoord(q=1, r=0)
    >>> a.key
    '0,0'
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Tuple


# Kierunki sąsiadów w układzie axial (pointy-top)
# Kolejność: E, SE, SW, W, NW, NE
HEX_DIRECTIONS: List[Tuple[int, int]] = [
    (+1, 0),   # E
    (0, +1),   # SE
    (-1, +1),  # SW
    (-1, 0),   # W
    (0, -1),   # NW
    (+1, -1),  # NE
]


@dataclass(frozen=True)
class HexCoord:
    """
    Współrzędna hexagonalna w systemie axial (q, r).

    Klasa jest niemutowalna (frozen=True).
    Może być używana jako klucz w słowniku lub element zbioru.

    Attributes:
        q (int): Współrzędna kolumny (oś pozioma)
        r (int): Współrzędna wiersza (oś ukośna)
        id (int): Stabilny identyfikator pola na planszy (0 = brak)

    Note:
        Współrzędna s w systemie cube jest wyliczana jako: s = -q - r
        Zachodzi zawsze: q + r + s = 0
    """
    q: int
    r: int
    id: int = field(default=0, compare=False)

    # ─────────────────────────────────────────────────────────────────────────
    # WŁAŚCIWOŚCI
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def s(self) -> int:
        """
        Trzecia współrzędna w systemie cube.

        Returns:
            int: Wartość s spełniająca q + r + s = 0
        """
        return -self.q - self.r

    @property
    def cube(self) -> Tuple[int, int, int]:
        """Konwersja do współrzędnych cube (q, r, s)."""
        return (self.q, self.r, self.s)

    @property
    def key(self) -> str:
        """
        Kanoniczna reprezentacja tekstowa "q,r".

        Używana jako klucz w zbiorach closed/visited oraz w kluczach cache.
        """
        return f"{self.q},{self.r}"

    def get_id(self) -> int:
        """Zwraca stabilny identyfikator hexa na planszy."""
        return self.id

    @property
    def cache_id(self) -> str:
        """
        Identyfikator do kluczy cache.

        Id planszy, a dla hexów bez id (id=0) klucz pozycji w nawiasach.
        W obrębie jednej planszy różne hexy mają różne identyfikatory.

        Example:
            >>> HexCoord(1, 2, 13).cache_id, HexCoord(1, 2).cache_id
            ('13', '(1,2)')
        """
        return str(self.id) if self.id else f"({self.key})"

    # ─────────────────────────────────────────────────────────────────────────
    # ODLEGŁOŚĆ
    # ─────────────────────────────────────────────────────────────────────────

    def distance(self, other: HexCoord) -> int:
        """
        Oblicza odległość między dwoma hexami (liczba kroków).

        Wzór (cube distance):
            distance = (|dq| + |dr| + |ds|) / 2

        Args:
            other: Druga współrzędna hexagonalna

        Returns:
            int: Odległość w liczbie kroków (hexów), ignoruje przeszkody

        Example:
            >>> HexCoord(0, 0).distance(HexCoord(2, 1))
            3
        """
        dq = abs(self.q - other.q)
        dr = abs(self.r - other.r)
        ds = abs(self.s - other.s)
        return (dq + dr + ds) // 2

    # ─────────────────────────────────────────────────────────────────────────
    # SĄSIEDZI
    # ─────────────────────────────────────────────────────────────────────────

    def neighbor(self, direction: int) -> HexCoord:
        """
        Zwraca sąsiada w określonym kierunku.

        Args:
            direction: Indeks kierunku (0-5)
                0 = E, 1 = SE, 2 = SW, 3 = W, 4 = NW, 5 = NE

        Returns:
            HexCoord: Sąsiad w podanym kierunku (id=0)

        Raises:
            IndexError: Jeśli direction nie jest w zakresie 0-5
        """
        if not 0 <= direction < len(HEX_DIRECTIONS):
            raise IndexError(f"Invalid hex direction: {direction}")
        dq, dr = HEX_DIRECTIONS[direction]
        return HexCoord(self.q + dq, self.r + dr)

    def neighbors(self) -> List[HexCoord]:
        """
        Zwraca listę 6 sąsiednich hexów w kolejności kierunków 0-5.

        Returns:
            List[HexCoord]: Lista 6 sąsiadów
        """
        return [self.neighbor(direction) for direction in range(len(HEX_DIRECTIONS))]

    # ─────────────────────────────────────────────────────────────────────────
    # REPREZENTACJA
    # ─────────────────────────────────────────────────────────────────────────

    def __repr__(self) -> str:
        if self.id:
            return f"HexCoord(q={self.q}, r={self.r}, id={self.id})"
        return f"HexCoord(q={self.q}, r={self.r})"

    def __str__(self) -> str:
        return self.key

    @classmethod
    def from_cube(cls, q: int, r: int, s: int, id: int = 0) -> HexCoord:
        """
        Tworzy HexCoord z współrzędnych cube.

        Args:
            q, r, s: Współrzędne cube (muszą spełniać q + r + s = 0)
            id: Opcjonalny identyfikator pola

        Returns:
            HexCoord: Współrzędna axial

        Raises:
            ValueError: Jeśli q + r + s != 0
        """
        if q + r + s != 0:
            raise ValueError(f"Invalid cube coordinates: {q} + {r} + {s} != 0")
        return cls(q, r, id)
