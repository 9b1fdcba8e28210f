"""
Loader konfiguracji z automatycznym uzupełnianiem wartości domyślnych.

Nawigacja jest data-driven - parametry i mapy leżą w plikach YAML:
- defaults.yaml: parametry ruchu, układu siatki, persystencji, symulacji
- maps/<map_id>.yaml: lista opisów pól (tile descriptors) danej mapy

Logika merge (uzupełniania defaults):
    1. Wczytaj defaults.yaml
    2. Wczytaj mapę (np. "demo")
    3. Jeśli mapa ma sekcję `overrides`, nałóż ją na defaults
    4. Wszystko czego mapa nie nadpisze pochodzi z defaults

Przykład:
    defaults.yaml:
        navigation:
            move_speed: 3.0
            arrival_epsilon: 0.001

    maps/swamp.yaml:
        overrides:
            navigation:
                move_speed: 1.5   # nadpisuje default
        tiles: [...]

Użycie:
    >>> loader = ConfigLoader("data/")
    >>> config = loader.load_config("swamp")
    >>> config.move_speed
    1.5
    >>> tiles = loader.load_map("swamp")
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional
import copy

import yaml

from .errors import check_argument


@dataclass
class NavigationConfig:
    """
    Parametry nawigacji po mapie świata.

    Attributes:
        move_speed (float): Prędkość postaci (jednostki świata / s)
        animation_speed (float): Prędkość animacji chodu (dla renderera)
        arrival_epsilon (float): Odległość uznawana za dotarcie do punktu
        character_z_index (int): Warstwa postaci przy sortowaniu
        row_sort_multiplier (int): Mnożnik wiersza w sort order
        cell_width (float): Szerokość pola w jednostkach świata
        row_height (float): Odstęp pionowy między wierszami
        character_offset_y (float): Przesunięcie postaci względem środka pola
        storage_key (str): Klucz rekordu pozycji w storage
        storage_path (str): Plik JSON ze stanem między sesjami
        ticks_per_second (int): Ticki na sekundę pętli eksploracji
        max_ticks (int): Limit ticków dla run_until_idle
    """
    move_speed: float = 3.0
    animation_speed: float = 0.5
    arrival_epsilon: float = 0.001
    character_z_index: int = 10
    row_sort_multiplier: int = 100
    cell_width: float = 1.0
    row_height: float = 0.75
    character_offset_y: float = 2.25
    storage_key: str = "WorldPosition"
    storage_path: str = "output/positions.json"
    ticks_per_second: int = 30
    max_ticks: int = 3000

    def __post_init__(self):
        # Postać stoi na polu - jej warstwa musi zmieścić się w paśmie wiersza
        check_argument(
            self.row_sort_multiplier > self.character_z_index >= 0,
            f"row_sort_multiplier ({self.row_sort_multiplier}) must exceed "
            f"character_z_index ({self.character_z_index})",
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NavigationConfig":
        """
        Tworzy konfigurację ze słownika defaults.yaml (po merge).

        Brakujące sekcje/klucze dostają wartości domyślne klasy.
        """
        navigation = data.get("navigation", {})
        layout = data.get("layout", {})
        persistence = data.get("persistence", {})
        simulation = data.get("simulation", {})
        defaults = cls()

        return cls(
            move_speed=float(navigation.get("move_speed", defaults.move_speed)),
            animation_speed=float(navigation.get("animation_speed", defaults.animation_speed)),
            arrival_epsilon=float(navigation.get("arrival_epsilon", defaults.arrival_epsilon)),
            character_z_index=int(navigation.get("character_z_index", defaults.character_z_index)),
            row_sort_multiplier=int(navigation.get("row_sort_multiplier", defaults.row_sort_multiplier)),
            cell_width=float(layout.get("cell_width", defaults.cell_width)),
            row_height=float(layout.get("row_height", defaults.row_height)),
            character_offset_y=float(layout.get("character_offset_y", defaults.character_offset_y)),
            storage_key=str(persistence.get("key", defaults.storage_key)),
            storage_path=str(persistence.get("path", defaults.storage_path)),
            ticks_per_second=int(simulation.get("ticks_per_second", defaults.ticks_per_second)),
            max_ticks=int(simulation.get("max_ticks", defaults.max_ticks)),
        )


class ConfigLoader:
    """
    Ładuje konfigurację i mapy z plików YAML z automatycznym merge defaults.

    Attributes:
        data_path (Path): Ścieżka do folderu data/
        _defaults (Dict): Cache wczytanych defaults
        _maps (Dict): Cache wczytanych map (map_id -> zawartość pliku)

    Example:
        >>> loader = ConfigLoader("data/")
        >>> loader.get_map_ids()
        ['demo']
    """

    def __init__(self, data_path: str = "data/"):
        """
        Inicjalizuje loader z ścieżką do danych.

        Args:
            data_path: Ścieżka do folderu z plikami YAML
        """
        self.data_path = Path(data_path)
        self._defaults: Optional[Dict] = None
        self._maps: Dict[str, Dict] = {}

    # ─────────────────────────────────────────────────────────────────────────
    # WCZYTYWANIE PLIKÓW
    # ─────────────────────────────────────────────────────────────────────────

    def _load_yaml(self, relative_path: str) -> Dict:
        """
        Wczytuje plik YAML.

        Raises:
            FileNotFoundError: Jeśli plik nie istnieje
        """
        filepath = self.data_path / relative_path
        with open(filepath, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}

    def get_defaults(self) -> Dict:
        """
        Zwraca słownik z wartościami domyślnymi.

        Cache'uje wczytany plik. Brak defaults.yaml = pusty słownik
        (wtedy obowiązują wartości domyślne NavigationConfig).
        """
        if self._defaults is None:
            try:
                self._defaults = self._load_yaml("defaults.yaml")
            except FileNotFoundError:
                self._defaults = {}
        return self._defaults

    def load_config(self, map_id: Optional[str] = None) -> NavigationConfig:
        """
        Buduje NavigationConfig z defaults i (opcjonalnie) nadpisań mapy.

        Args:
            map_id: ID mapy której sekcja `overrides` ma zostać nałożona

        Returns:
            NavigationConfig: Konfiguracja po merge

        Raises:
            KeyError: Jeśli mapa nie istnieje
            ValueError: Jeśli character_z_index nie mieści się poniżej row_sort_multiplier
        """
        merged = copy.deepcopy(self.get_defaults())
        if map_id is not None:
            overrides = self._get_map_raw(map_id).get("overrides", {})
            merged = self._deep_merge(merged, overrides)
        return NavigationConfig.from_dict(merged)

    # ─────────────────────────────────────────────────────────────────────────
    # ŁADOWANIE MAP
    # ─────────────────────────────────────────────────────────────────────────

    def _get_map_raw(self, map_id: str) -> Dict:
        """Zwraca surową zawartość pliku mapy."""
        if map_id not in self._maps:
            try:
                self._maps[map_id] = self._load_yaml(f"maps/{map_id}.yaml")
            except FileNotFoundError:
                raise KeyError(f"Map '{map_id}' not found in {self.data_path / 'maps'}")
        return self._maps[map_id]

    def load_map(self, map_id: str) -> List[Dict[str, Any]]:
        """
        Wczytuje listę opisów pól mapy.

        Args:
            map_id: Nazwa pliku mapy bez rozszerzenia

        Returns:
            List[Dict]: Kopie opisów pól (gotowe dla WorldMap.update_tiles)

        Raises:
            KeyError: Jeśli mapa nie istnieje
        """
        return copy.deepcopy(self._get_map_raw(map_id).get("tiles", []))

    def get_map_ids(self) -> List[str]:
        """Zwraca posortowaną listę ID dostępnych map."""
        maps_dir = self.data_path / "maps"
        if not maps_dir.is_dir():
            return []
        return sorted(p.stem for p in maps_dir.glob("*.yaml"))

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
        """Czyści cache i wymusza ponowne wczytanie plików."""
        self._defaults = None
        self._maps = {}
