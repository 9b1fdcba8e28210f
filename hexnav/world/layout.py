"""
Układ siatki: konwersja pole <-> pozycja w świecie.

Pola są hexami "pointy-top" w układzie odd-r:

    y=1:      *     *     *        <- przesunięte o cell_width / 2
    y=0:   *     *     *

Wzory (w = cell_width, h = row_height):
    world.x = (x + 0.5 * (y & 1)) * w
    world.y = y * h

Odwrotnie (przez ułamkowe axial + cube rounding):
    r = world.y / h
    q = world.x / w - r / 2
    vertex = cube_round(q, r)

Dla środków pól konwersja jest dokładnym round-tripem:
    world_to_vertex(vertex_to_world(v)) == v

Pozycja POSTACI jest przesunięta w osi y o character_offset_y względem
środka pola (żeby sprite postaci stał "na" polu przy sortowaniu).
"""

from __future__ import annotations
from dataclasses import dataclass
import math

from ..core.vertex import Vertex, cube_round


@dataclass(frozen=True)
class WorldPoint:
    """Ciągła pozycja w przestrzeni świata."""
    x: float
    y: float

    def distance_to(self, other: WorldPoint) -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def move_towards(self, target: WorldPoint, max_delta: float) -> WorldPoint:
        """
        Przesuwa punkt w stronę celu o co najwyżej max_delta.

        Nigdy nie przeskakuje celu - jeśli cel jest bliżej niż
        max_delta, zwraca dokładnie cel.
        """
        distance = self.distance_to(target)
        if distance <= max_delta or distance == 0.0:
            return target
        ratio = max_delta / distance
        return WorldPoint(
            self.x + (target.x - self.x) * ratio,
            self.y + (target.y - self.y) * ratio,
        )

    def to_list(self) -> list:
        return [self.x, self.y]


@dataclass(frozen=True)
class HexLayout:
    """
    Geometria siatki hex.

    Attributes:
        cell_width (float): Odległość między środkami pól w wierszu
        row_height (float): Odległość między wierszami
        character_offset_y (float): Przesunięcie postaci w dół od środka pola
    """
    cell_width: float = 1.0
    row_height: float = 0.75
    character_offset_y: float = 0.0

    def vertex_to_world(self, vertex: Vertex) -> WorldPoint:
        """Zwraca środek pola w przestrzeni świata."""
        return WorldPoint(
            (vertex.x + 0.5 * (vertex.y & 1)) * self.cell_width,
            vertex.y * self.row_height,
        )

    def world_to_vertex(self, point: WorldPoint) -> Vertex:
        """Zwraca pole zawierające punkt (najbliższy środek hexa)."""
        r = point.y / self.row_height
        q = point.x / self.cell_width - r / 2
        return cube_round(q, r)

    def to_character_position(self, vertex: Vertex) -> WorldPoint:
        """Pozycja postaci stojącej na polu."""
        center = self.vertex_to_world(vertex)
        return WorldPoint(center.x, center.y - self.character_offset_y)

    def from_character_position(self, point: WorldPoint) -> Vertex:
        """Pole, na którym stoi postać o danej pozycji."""
        return self.world_to_vertex(WorldPoint(point.x, point.y + self.character_offset_y))
