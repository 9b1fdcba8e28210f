"""
Pola mapy świata i ich warstwy wizualne.

Opis pola (tile descriptor) przychodzi z zewnątrz - z pliku YAML mapy
albo z API - jako zwykły słownik:

    {
        "position": [3, 4],
        "type": "walkable",            # walkable | visitable | blocked
        "layers": [
            {"sprite": "tiles/grass_01", "z_index": 0},
            {"sprite": "roads/road_ne", "z_index": 1},
            {"sprite": "icons/shop", "offset": [0, 1.28, 0],
             "scale": [0.6, 0.6, 1], "color": "#FFFFFF", "z_index": 3},
        ],
        "on_visit": {"action": "open_shop"},   # opcjonalne
        "occupant": {"appearance": "knight", "facing": "left"},  # opcjonalne
    }

TYPY PÓL:
═══════════════════════════════════════════════════════════════════

    WALKABLE   - można po nim chodzić i na nim stać
    VISITABLE  - cel "odwiedzin"; postać podchodzi do sąsiedniego pola
                 ale nigdy na nie nie wchodzi
    BLOCKED    - poza grafem, nieosiągalne
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional, Tuple

from ..core.direction import Direction
from ..core.errors import check_argument, unknown_enum_value
from ..core.vertex import Vertex


class TileType(Enum):
    """Klasyfikacja pola mapy."""

    BLOCKED = auto()
    WALKABLE = auto()
    VISITABLE = auto()

    @classmethod
    def parse(cls, value: Any) -> "TileType":
        """
        Parsuje typ pola z nazwy.

        "obstacle" jest akceptowany jako alias BLOCKED.

        Raises:
            UnknownEnumValueError: Dla nieznanej nazwy
        """
        if isinstance(value, TileType):
            return value
        name = str(value).upper()
        if name == "OBSTACLE":
            return cls.BLOCKED
        try:
            return cls[name]
        except KeyError:
            raise unknown_enum_value(cls, value) from None


@dataclass(frozen=True)
class TileId:
    """
    Klucz wpisu renderowania: pozycja pola + warstwa.

    Attributes:
        position (Vertex): Pole mapy
        z_index (int): Warstwa w stosie pola
    """
    position: Vertex
    z_index: int


ROW_SORT_MULTIPLIER = 100


def sort_order(position: Vertex, z_index: int, row_multiplier: int = ROW_SORT_MULTIPLIER) -> int:
    """
    Kolejność rysowania dla warstwy z_index na polu position.

    Wzór:
        order = y * -row_multiplier + z_index

    Wiersze niżej na ekranie (mniejsze y) rysowane są później.
    row_multiplier musi przekraczać zakres z_index, żeby warstwy
    nigdy nie "przeciekały" między wierszami. Ten sam wzór stosujemy
    do terenu i do postaci stojących na polu.

    Example:
        >>> sort_order(Vertex(0, 1), 0)
        -100
    """
    return position.y * -row_multiplier + z_index


@dataclass
class SpriteLayer:
    """
    Jedna warstwa wizualna pola.

    Attributes:
        sprite (str): Adres sprite'a (interpretuje go renderer)
        z_index (int): Pozycja w stosie warstw
        offset (Optional[Tuple]): Przesunięcie względem środka pola
        scale (Optional[Tuple]): Skala
        color (Optional[str]): Kolor (np. "#FFFFFF")
    """
    sprite: str
    z_index: int = 0
    offset: Optional[Tuple[float, ...]] = None
    scale: Optional[Tuple[float, ...]] = None
    color: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], default_z: int = 0) -> "SpriteLayer":
        """Tworzy warstwę z opisu; brak z_index = indeks w stosie."""
        offset = data.get("offset")
        scale = data.get("scale")
        return cls(
            sprite=str(data["sprite"]),
            z_index=int(data.get("z_index", default_z)),
            offset=tuple(float(v) for v in offset) if offset is not None else None,
            scale=tuple(float(v) for v in scale) if scale is not None else None,
            color=data.get("color"),
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"sprite": self.sprite, "z_index": self.z_index}
        if self.offset is not None:
            result["offset"] = list(self.offset)
        if self.scale is not None:
            result["scale"] = list(self.scale)
        if self.color is not None:
            result["color"] = self.color
        return result


@dataclass
class Occupant:
    """
    Postać niezależna (NPC) stojąca na polu.

    Attributes:
        appearance (str): Identyfikator wyglądu postaci
        facing (Direction): Kierunek zwrotu
    """
    appearance: str
    facing: Direction = Direction.RIGHT

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Occupant":
        facing = data.get("facing", Direction.RIGHT)
        if not isinstance(facing, Direction):
            facing = Direction.parse(str(facing))
        return cls(appearance=str(data["appearance"]), facing=facing)

    def to_dict(self) -> Dict[str, Any]:
        return {"appearance": self.appearance, "facing": self.facing.name.lower()}


@dataclass
class Tile:
    """
    Pole mapy świata.

    Attributes:
        position (Vertex): Współrzędne pola
        tile_type (TileType): Klasyfikacja
        layers (List[SpriteLayer]): Stos warstw wizualnych
        on_visit (Optional[Any]): Akcja przekazywana po dotarciu (nieprzezroczysta)
        occupant (Optional[Occupant]): NPC stojący na polu
    """
    position: Vertex
    tile_type: TileType = TileType.WALKABLE
    layers: List[SpriteLayer] = field(default_factory=list)
    on_visit: Optional[Any] = None
    occupant: Optional[Occupant] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tile":
        """
        Tworzy pole z opisu (tile descriptor).

        Raises:
            ValueError: Jeśli pozycja nie ma dokładnie dwóch współrzędnych
            UnknownEnumValueError: Dla nieznanego typu pola
        """
        raw_position = data["position"]
        if isinstance(raw_position, Vertex):
            position = raw_position.flat()
        elif isinstance(raw_position, str):
            position = Vertex.parse(raw_position)
        else:
            check_argument(
                len(raw_position) == 2,
                f"Tile position must be [x, y], got {raw_position!r}",
            )
            position = Vertex(int(raw_position[0]), int(raw_position[1]))

        layers = [
            SpriteLayer.from_dict(layer, default_z=index)
            for index, layer in enumerate(data.get("layers", []))
        ]
        occupant = data.get("occupant")

        return cls(
            position=position,
            tile_type=TileType.parse(data.get("type", "walkable")),
            layers=layers,
            on_visit=data.get("on_visit"),
            occupant=Occupant.from_dict(occupant) if occupant else None,
        )

    @property
    def is_walkable(self) -> bool:
        return self.tile_type == TileType.WALKABLE

    def to_dict(self) -> Dict[str, Any]:
        """Serializuje pole z powrotem do formatu opisu."""
        result: Dict[str, Any] = {
            "position": self.position.to_list(),
            "type": self.tile_type.name.lower(),
            "layers": [layer.to_dict() for layer in self.layers],
        }
        if self.on_visit is not None:
            result["on_visit"] = self.on_visit
        if self.occupant is not None:
            result["occupant"] = self.occupant.to_dict()
        return result
