"""
Siatka hexagonalna (HexGrid) - plansza z polami, przeszkodami i postaciami.

HexGrid jest "kolaboratorem" silnika pathfindingu:
- Określa kształt planszy (GridPreset: width x height)
- Nadaje każdemu polu stabilny identyfikator (1..width*height)
- Przechowuje stan pól (Tile): przeszkody, strefy drużyn, postacie
- Udostępnia lookup `get_tile(hex) -> Optional[Tile]`

Silnik NIGDY nie modyfikuje pól - czyta je wyłącznie przez lookup.

Układ siatki:
    Używamy układu "odd-r" (offset coordinates) do mapowania
    na regularną siatkę width x height:

    r=0:  (0,0) (1,0) (2,0) (3,0) ...
    r=1:   (0,1) (1,1) (2,1) (3,1) ...  <- przesunięte o 0.5 wizualnie
    r=2:  (0,2) (1,2) (2,2) (3,2) ...

Konwersja offset <-> axial:
    axial.q = offset.x - (offset.y // 2)
    axial.r = offset.y

Numeracja pól:
    id = offset.y * width + offset.x + 1

Przykład użycia:
    >>> grid = HexGrid(SMALL_GRID)
    >>> hex_1 = grid.get_hex(1)
    >>> grid.place_character(grid.get_hex(13), Team.ENEMY, "orc")
    >>> grid.get_tile(grid.get_hex(13)).state
    <State.OCCUPIED_ENEMY: 'occupied_enemy'>
    >>> grid.get_tile(HexCoord(-5, 0)) is None
    True
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from itertools import combinations
from typing import Dict, List, Optional

from .hex_coord import HexCoord


# ═══════════════════════════════════════════════════════════════════════════
# STANY I DRUŻYNY
# ═══════════════════════════════════════════════════════════════════════════

class State(Enum):
    """Stan pola planszy (zajętość / przechodniość)."""

    DEFAULT = "default"
    BLOCKED = "blocked"
    BLOCKED_BREAKABLE = "blocked_breakable"
    AVAILABLE_ALLY = "available_ally"
    OCCUPIED_ALLY = "occupied_ally"
    AVAILABLE_ENEMY = "available_enemy"
    OCCUPIED_ENEMY = "occupied_enemy"


class Team(Enum):
    """Drużyna postaci zajmującej pole."""

    ALLY = "ally"
    ENEMY = "enemy"


OCCUPIED_STATE: Dict[Team, State] = {
    Team.ALLY: State.OCCUPIED_ALLY,
    Team.ENEMY: State.OCCUPIED_ENEMY,
}


@dataclass(frozen=True)
class Tile:
    """
    Pole planszy.

    Attributes:
        hex: Współrzędna pola (z nadanym id)
        state: Stan pola
        team: Drużyna postaci na polu (None = brak postaci)
        character: Identyfikator postaci (None = brak postaci)
    """
    hex: HexCoord
    state: State = State.DEFAULT
    team: Optional[Team] = None
    character: Optional[str] = None


# ═══════════════════════════════════════════════════════════════════════════
# PRESETY PLANSZY
# ═══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class GridPreset:
    """
    Kształt planszy.

    Attributes:
        name: Nazwa presetu (np. "full")
        width: Szerokość w hexach
        height: Wysokość w hexach
    """
    name: str
    width: int
    height: int

    @property
    def size(self) -> int:
        """Liczba pól planszy."""
        return self.width * self.height

    @property
    def diameter(self) -> int:
        """
        Największa odległość hex między dwoma polami planszy.

        Używane do walidacji limitu warstw BFS - limit musi być
        większy od średnicy każdej obsługiwanej planszy.
        """
        cells = [_offset_to_axial(x, y) for y in range(self.height) for x in range(self.width)]
        return max((a.distance(b) for a, b in combinations(cells, 2)), default=0)


FULL_GRID = GridPreset(name="full", width=9, height=5)
SMALL_GRID = GridPreset(name="small", width=5, height=5)


def _offset_to_axial(x: int, y: int, hex_id: int = 0) -> HexCoord:
    """Konwertuje offset (x, y) na axial (q, r) - układ odd-r."""
    return HexCoord(x - (y // 2), y, hex_id)


def _axial_to_offset(pos: HexCoord) -> tuple[int, int]:
    """Konwertuje axial (q, r) na offset (x, y) - układ odd-r."""
    return (pos.q + (pos.r // 2), pos.r)


# ═══════════════════════════════════════════════════════════════════════════
# SIATKA
# ═══════════════════════════════════════════════════════════════════════════

class HexGrid:
    """
    Plansza hexagonalna z polami i postaciami.

    Attributes:
        preset (GridPreset): Kształt planszy
        version (int): Licznik zmian - rośnie przy każdej modyfikacji pól.
            Pozwala odbiorcom (PathfindingService) jawnie unieważniać cache.
        _tiles (Dict[HexCoord, Tile]): Mapa pozycja -> pole
        _hexes_by_id (Dict[int, HexCoord]): Mapa id -> pozycja
    """

    def __init__(self, preset: GridPreset = FULL_GRID):
        self.preset = preset
        self.version = 0
        self._tiles: Dict[HexCoord, Tile] = {}
        self._hexes_by_id: Dict[int, HexCoord] = {}

        for y in range(preset.height):
            for x in range(preset.width):
                pos = _offset_to_axial(x, y, y * preset.width + x + 1)
                self._tiles[pos] = Tile(hex=pos)
                self._hexes_by_id[pos.id] = pos

    @property
    def width(self) -> int:
        return self.preset.width

    @property
    def height(self) -> int:
        return self.preset.height

    # ─────────────────────────────────────────────────────────────────────────
    # ZAPYTANIA
    # ─────────────────────────────────────────────────────────────────────────

    def is_valid(self, pos: HexCoord) -> bool:
        """
        Sprawdza czy pozycja jest w granicach siatki.

        Example:
            >>> HexGrid(SMALL_GRID).is_valid(HexCoord(-1, 0))
            False
        """
        offset_x, offset_y = _axial_to_offset(pos)
        return 0 <= offset_x < self.width and 0 <= offset_y < self.height

    def get_tile(self, pos: HexCoord) -> Optional[Tile]:
        """
        Lookup pola dla silnika pathfindingu.

        Args:
            pos: Pozycja (id nie ma znaczenia)

        Returns:
            Optional[Tile]: Pole lub None dla pozycji poza planszą
        """
        return self._tiles.get(pos)

    def get_hex(self, hex_id: int) -> HexCoord:
        """
        Zwraca hex o danym identyfikatorze.

        Raises:
            KeyError: Jeśli id nie istnieje na planszy
        """
        if hex_id not in self._hexes_by_id:
            raise KeyError(f"Hex id {hex_id} not on grid '{self.preset.name}'")
        return self._hexes_by_id[hex_id]

    def resolve(self, q: int, r: int) -> HexCoord:
        """
        Zwraca hex planszy (z nadanym id) dla współrzędnych axial.

        Raises:
            ValueError: Jeśli pozycja jest poza siatką
        """
        tile = self._tiles.get(HexCoord(q, r))
        if tile is None:
            raise ValueError(f"Position ({q}, {r}) is outside grid bounds")
        return tile.hex

    def get_all_tiles(self) -> List[Tile]:
        """Wszystkie pola planszy w kolejności id."""
        return list(self._tiles.values())

    def get_tiles_with_characters(self) -> List[Tile]:
        """Pola zajęte przez postacie, w kolejności id."""
        return [tile for tile in self._tiles.values() if tile.team is not None]

    @property
    def characters_placed(self) -> int:
        return len(self.get_tiles_with_characters())

    # ─────────────────────────────────────────────────────────────────────────
    # MODYFIKACJE
    # ─────────────────────────────────────────────────────────────────────────

    def _update(self, pos: HexCoord, **changes) -> Tile:
        tile = self._tiles.get(pos)
        if tile is None:
            raise ValueError(f"Position {pos} is outside grid bounds")
        tile = replace(tile, **changes)
        self._tiles[tile.hex] = tile
        self.version += 1
        return tile

    def set_state(self, pos: HexCoord, state: State) -> Tile:
        """
        Ustawia stan pola (np. przeszkoda, strefa drużyny).

        Raises:
            ValueError: Jeśli pozycja jest poza siatką
        """
        return self._update(pos, state=state)

    def block(self, pos: HexCoord, breakable: bool = False) -> Tile:
        """Stawia przeszkodę na polu."""
        return self.set_state(pos, State.BLOCKED_BREAKABLE if breakable else State.BLOCKED)

    def place_character(self, pos: HexCoord, team: Team, character: Optional[str] = None) -> bool:
        """
        Umieszcza postać na polu.

        Args:
            pos: Docelowa pozycja
            team: Drużyna postaci
            character: Identyfikator postaci (klucz zasięgu ataku)

        Returns:
            bool: True jeśli udało się umieścić, False jeśli pole zajęte
                lub zablokowane

        Raises:
            ValueError: Jeśli pozycja jest poza siatką
        """
        tile = self._tiles.get(pos)
        if tile is None:
            raise ValueError(f"Position {pos} is outside grid bounds")
        if tile.team is not None or tile.state in (State.BLOCKED, State.BLOCKED_BREAKABLE):
            return False

        self._update(pos, state=OCCUPIED_STATE[team], team=team, character=character)
        return True

    def remove_character(self, pos: HexCoord) -> bool:
        """
        Usuwa postać z pola.

        Returns:
            bool: True jeśli na polu była postać
        """
        tile = self._tiles.get(pos)
        if tile is None or tile.team is None:
            return False

        self._update(pos, state=State.DEFAULT, team=None, character=None)
        return True

    # ─────────────────────────────────────────────────────────────────────────
    # DEBUG / VISUALIZACJA
    # ─────────────────────────────────────────────────────────────────────────

    def debug_print(self) -> str:
        """
        Zwraca tekstową reprezentację siatki do debugowania.

        Legenda:
            . = puste pole
            # = przeszkoda
            % = przeszkoda zniszczalna
            A = sojusznik
            E = wróg
        """
        symbols = {
            State.BLOCKED: "#",
            State.BLOCKED_BREAKABLE: "%",
            State.OCCUPIED_ALLY: "A",
            State.OCCUPIED_ENEMY: "E",
        }
        lines = []
        for y in range(self.height):
            indent = " " if y % 2 == 1 else ""
            row = []
            for x in range(self.width):
                tile = self._tiles[_offset_to_axial(x, y)]
                row.append(symbols.get(tile.state, "."))
            lines.append(indent + " ".join(row))
        return "\n".join(lines)
