"""
Loader konfiguracji pathfindingu z automatycznym uzupełnianiem defaults.

Konfiguracja jest data-driven - plik YAML (domyślnie
`hexpath/data/pathfinding.yaml`) może nadpisać dowolną wartość bazową:

    pathfinding:
      max_bfs_layers: 20       # limit warstw BFS dla jednostek dystansowych
      enable_cache: true       # globalny przełącznik cache
    cache:
      path_capacity: 500
      effective_distance_capacity: 500
      closest_map_capacity: 100
    grid_presets:
      full:  {width: 9, height: 5}
      small: {width: 5, height: 5}

Logika merge:
    1. Zacznij od wbudowanych DEFAULTS
    2. Jeśli plik istnieje - nałóż go rekurencyjnie (_deep_merge)
    3. Brak pliku = same wartości domyślne

Walidacja:
    Limit warstw BFS jest arbitralnym zabezpieczeniem. `validate()`
    sprawdza czy jest większy od średnicy każdego presetu planszy -
    w przeciwnym razie osiągalne cele mogłyby zostać uznane za
    nieosiągalne (logowane jako WARNING).

Użycie:
    >>> loader = ConfigLoader()
    >>> loader.get_pathfinding_config()["max_bfs_layers"]
    20
    >>> loader.get_grid_preset("small")
    GridPreset(name='small', width=5, height=5)
"""

from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, List, Optional
import copy
import logging

import yaml

from .hex_grid import GridPreset

logger = logging.getLogger(__name__)

DEFAULT_DATA_PATH = Path(__file__).resolve().parent.parent / "data"
CONFIG_FILENAME = "pathfinding.yaml"

DEFAULTS: Dict[str, Any] = {
    "pathfinding": {
        "max_bfs_layers": 20,
        "enable_cache": True,
    },
    "cache": {
        "path_capacity": 500,
        "effective_distance_capacity": 500,
        "closest_map_capacity": 100,
    },
    "grid_presets": {
        "full": {"width": 9, "height": 5},
    },
}


class ConfigLoader:
    """
    Ładuje konfigurację z pliku YAML z automatycznym merge defaults.

    Attributes:
        data_path (Path): Ścieżka do folderu z plikiem konfiguracji
        _config (Dict): Cache wczytanej (zmergowanej) konfiguracji
    """

    def __init__(self, data_path: Optional[str] = None):
        """
        Args:
            data_path: Folder z pathfinding.yaml (None = dane pakietu)
        """
        self.data_path = Path(data_path) if data_path is not None else DEFAULT_DATA_PATH
        self._config: Optional[Dict[str, Any]] = None

    # ─────────────────────────────────────────────────────────────────────────
    # WCZYTYWANIE PLIKÓW
    # ─────────────────────────────────────────────────────────────────────────

    def _load_yaml(self, filename: str) -> Dict:
        """
        Wczytuje plik YAML.

        Returns:
            Dict: Zawartość pliku lub {} jeśli plik nie istnieje
        """
        filepath = self.data_path / filename
        if not filepath.exists():
            logger.info("No %s in %s, using built-in defaults", filename, self.data_path)
            return {}
        with open(filepath, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}

    def get_defaults(self) -> Dict[str, Any]:
        """
        Zwraca pełną konfigurację (defaults + plik).

        Cache'uje wynik - kolejne wywołania są szybkie.
        """
        if self._config is None:
            self._config = self._deep_merge(DEFAULTS, self._load_yaml(CONFIG_FILENAME))
            logger.info("Loaded pathfinding config from %s", self.data_path)
        return self._config

    def get_pathfinding_config(self) -> Dict[str, Any]:
        """Sekcja `pathfinding` (limit BFS, przełącznik cache)."""
        return self.get_defaults()["pathfinding"]

    def get_cache_config(self) -> Dict[str, int]:
        """Sekcja `cache` (pojemności poszczególnych cache)."""
        return self.get_defaults()["cache"]

    # ─────────────────────────────────────────────────────────────────────────
    # PRESETY PLANSZY
    # ─────────────────────────────────────────────────────────────────────────

    def get_grid_presets(self) -> Dict[str, GridPreset]:
        """
        Wszystkie zdefiniowane presety planszy.

        Returns:
            Dict[str, GridPreset]: Mapa nazwa -> preset
        """
        presets = self.get_defaults()["grid_presets"]
        return {
            name: GridPreset(name=name, width=int(data["width"]), height=int(data["height"]))
            for name, data in presets.items()
        }

    def get_grid_preset(self, name: str) -> GridPreset:
        """
        Zwraca preset planszy o podanej nazwie.

        Raises:
            KeyError: Jeśli preset nie istnieje
        """
        presets = self.get_grid_presets()
        if name not in presets:
            raise KeyError(f"Grid preset '{name}' not found in {CONFIG_FILENAME}")
        return presets[name]

    def get_preset_names(self) -> List[str]:
        return list(self.get_defaults()["grid_presets"].keys())

    # ─────────────────────────────────────────────────────────────────────────
    # WALIDACJA
    # ─────────────────────────────────────────────────────────────────────────

    def validate(self) -> List[str]:
        """
        Sprawdza spójność konfiguracji.

        Returns:
            List[str]: Ostrzeżenia (limit BFS nie pokrywa średnicy planszy)

        Raises:
            ValueError: Jeśli pojemność cache lub limit BFS nie jest dodatni
        """
        for name, capacity in self.get_cache_config().items():
            if int(capacity) <= 0:
                raise ValueError(f"cache.{name} must be positive, got {capacity}")

        max_layers = int(self.get_pathfinding_config()["max_bfs_layers"])
        if max_layers <= 0:
            raise ValueError(f"pathfinding.max_bfs_layers must be positive, got {max_layers}")

        warnings = []
        for preset in self.get_grid_presets().values():
            if max_layers <= preset.diameter:
                message = (
                    f"max_bfs_layers={max_layers} does not exceed diameter "
                    f"{preset.diameter} of grid preset '{preset.name}'"
                )
                logger.warning(message)
                warnings.append(message)
        return warnings

    # ─────────────────────────────────────────────────────────────────────────
    # HELPERY
    # ─────────────────────────────────────────────────────────────────────────

    @staticmethod
    def _deep_merge(base: Dict, override: Dict) -> Dict:
        """
        Głęboko łączy dwa słowniki.

        Override nadpisuje wartości w base.
        Nested dicts są merge'owane rekurencyjnie.
        """
        result = copy.deepcopy(base)

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = ConfigLoader._deep_merge(result[key], value)
            else:
                result[key] = copy.deepcopy(value)

        return result

    def reload(self) -> None:
        """
        Czyści cache i wymusza ponowne wczytanie pliku.

        Przydatne podczas edycji pliku YAML w runtime.
        """
        self._config = None
