"""
Deterministyczne rozstrzyganie remisów przy wyborze celu.

Gdy kilka celów wymaga tej samej liczby kroków ruchu, wybieramy
jeden według stałej kolejności reguł:

    1. Cel w jednej kolumnie ze źródłem (to samo q) wygrywa z celem,
       który nie jest wyrównany pionowo.
    2. Jeśli oba (lub żaden) są wyrównane, a leżą w tym samym
       "rzędzie diagonalnym" - wygrywa niższy identyfikator hexa.
    3. Jeśli żaden nie jest wyrównany i leżą w różnych rzędach -
       wygrywa mniejsza odległość hex (ignorująca przeszkody).
    4. W pozostałych przypadkach zostaje dotychczasowy faworyt.

Rzędy diagonalne:
    Stała tabela grupująca identyfikatory hexów:

        [1,2] [3,4,5] [6,7] [8,9,10] [11..14] [15,16,17] [18..21]
        [22,23,24] [25..28] [29,30,31] [32..35] [36,37,38] [39,40]
        [41,42,43] [44,45]

    Dla id > 45 rozmiary kolejnych rzędów liczone są regułą
    okresową (4 gdy rząd % 4 == 1, 3 dla parzystych, 2 dla
    pozostałych). Wyniki tie-breakingu muszą zgadzać się
    z tą regułą bit w bit.

    TODO: zastąpić tabelę indeksem rzędu liczonym z geometrii presetu
    planszy (wymaga akceptacji zmiany zachowania domyślnego).
"""

from __future__ import annotations
from typing import TYPE_CHECKING, List, Optional, Sequence

if TYPE_CHECKING:
    from ..core.hex_coord import HexCoord
    from ..core.hex_grid import Tile


# Ostatnie id w każdym rzędzie (rząd 1 = indeks 0)
DIAGONAL_ROW_ENDINGS: List[int] = [
    2,   # Rząd 1: [1, 2]
    5,   # Rząd 2: [3, 4, 5]
    7,   # Rząd 3: [6, 7]
    10,  # Rząd 4: [8, 9, 10]
    14,  # Rząd 5: [11, 12, 13, 14]
    17,  # Rząd 6: [15, 16, 17]
    21,  # Rząd 7: [18, 19, 20, 21]
    24,  # Rząd 8: [22, 23, 24]
    28,  # Rząd 9: [25, 26, 27, 28]
    31,  # Rząd 10: [29, 30, 31]
    35,  # Rząd 11: [32, 33, 34, 35]
    38,  # Rząd 12: [36, 37, 38]
    40,  # Rząd 13: [39, 40]
    43,  # Rząd 14: [41, 42, 43]
    45,  # Rząd 15: [44, 45]
]


def get_diagonal_row(hex_id: int) -> int:
    """
    Numer rzędu diagonalnego dla identyfikatora hexa.

    Example:
        >>> get_diagonal_row(1), get_diagonal_row(13), get_diagonal_row(45)
        (1, 5, 15)
        >>> get_diagonal_row(46)
        17
    """
    for index, row_end in enumerate(DIAGONAL_ROW_ENDINGS):
        if hex_id <= row_end:
            return index + 1

    current_end = DIAGONAL_ROW_ENDINGS[-1]
    row_num = len(DIAGONAL_ROW_ENDINGS) + 1

    while hex_id > current_end:
        if row_num % 4 == 1 and row_num > 4:
            row_size = 4
        elif row_num % 2 == 0:
            row_size = 3
        else:
            row_size = 2

        current_end += row_size
        row_num += 1

        if hex_id <= current_end:
            return row_num

    return row_num


def are_hexes_in_same_diagonal_row(hex_id_1: int, hex_id_2: int) -> bool:
    """Czy dwa hexy należą do tego samego rzędu diagonalnego."""
    return get_diagonal_row(hex_id_1) == get_diagonal_row(hex_id_2)


def is_vertically_aligned(source: "HexCoord", target: "HexCoord") -> bool:
    """Czy cel leży w tej samej kolumnie co źródło (to samo q)."""
    return source.q == target.q


def prefers(source: "HexCoord", candidate: "HexCoord", incumbent: "HexCoord") -> bool:
    """
    Czy `candidate` powinien zastąpić `incumbent` przy równym koszcie ruchu.

    Args:
        source: Pozycja jednostki wybierającej cel
        candidate: Nowy kandydat
        incumbent: Dotychczasowy faworyt

    Returns:
        bool: True jeśli kandydat wygrywa remis
    """
    candidate_vertical = is_vertically_aligned(source, candidate)
    incumbent_vertical = is_vertically_aligned(source, incumbent)

    if candidate_vertical and not incumbent_vertical:
        return True
    if incumbent_vertical and not candidate_vertical:
        return False
    if are_hexes_in_same_diagonal_row(candidate.get_id(), incumbent.get_id()):
        return candidate.get_id() < incumbent.get_id()
    if not candidate_vertical and not incumbent_vertical:
        return source.distance(candidate) < source.distance(incumbent)
    return False


def select_best_target(source: "HexCoord", candidates: Sequence["Tile"]) -> Optional["Tile"]:
    """
    Wybiera jeden cel spośród kandydatów o równym koszcie ruchu.

    Kandydaci są przeglądani w podanej kolejności, faworyt zmienia się
    tylko gdy `prefers` tak rozstrzygnie.

    Returns:
        Optional[Tile]: Zwycięzca lub None dla pustej listy
    """
    if not candidates:
        return None

    best = candidates[0]
    for candidate in candidates[1:]:
        if prefers(source, candidate.hex, best.hex):
            best = candidate
    return best
