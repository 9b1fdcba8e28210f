"""
Core module - podstawowe komponenty nawigacji.

Zawiera:
- Vertex: Współrzędne pola (offset odd-r) i sąsiedztwo zależne od parzystości
- Graph: Interfejs grafu z domyślną wagą krawędzi
- dijkstra: Najkrótsza ścieżka (do celu / do najbliższego z celów)
- Direction: Kierunek zwrotu postaci
- ConfigLoader, NavigationConfig: Wczytywanie konfiguracji z defaults
- errors: Asercje fail-fast
"""

from .vertex import Vertex, neighbor_offsets
from .graph import Graph
from .dijkstra import (
    shortest_path,
    shortest_path_to_closest,
    shortest_distances,
    path_cost,
)
from .direction import Direction, facing_for_vector
from .config_loader import ConfigLoader, NavigationConfig
from .errors import NavigationError, MissingCollaboratorError, UnknownEnumValueError

__all__ = [
    "Vertex", "neighbor_offsets", "Graph",
    "shortest_path", "shortest_path_to_closest", "shortest_distances", "path_cost",
    "Direction", "facing_for_vector", "ConfigLoader", "NavigationConfig",
    "NavigationError", "MissingCollaboratorError", "UnknownEnumValueError",
]
