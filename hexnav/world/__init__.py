"""
World module - mapa świata jako siatka hex.

Zawiera:
- WorldMap: Rejestr pól + graf dla Dijkstry + obsługa kliknięć
- Tile, TileType, SpriteLayer, Occupant, TileId: Model pól
- HexLayout, WorldPoint: Konwersja pole <-> świat
- sort_order: Kolejność rysowania (teren i postacie)
"""

from .layout import HexLayout, WorldPoint
from .tile import (
    Tile,
    TileType,
    TileId,
    SpriteLayer,
    Occupant,
    sort_order,
    ROW_SORT_MULTIPLIER,
)
from .world_map import WorldMap

__all__ = [
    "HexLayout", "WorldPoint", "Tile", "TileType", "TileId", "SpriteLayer",
    "Occupant", "sort_order", "ROW_SORT_MULTIPLIER",
    "WorldMap",
]
