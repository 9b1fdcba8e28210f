"""
Kierunek, w którym zwrócona jest postać.

Wyznaczanie kierunku z wektora ruchu (dx, dy):

    znormalizuj (dx, dy)
    |dx| >  |dy|  ->  LEFT (dx < 0)  / RIGHT (dx >= 0)
    |dx| <= |dy|  ->  DOWN (dy < 0)  / UP    (dy >= 0)

Remis |dx| == |dy| rozstrzygany jest na korzyść osi pionowej.
"""

from __future__ import annotations
from enum import Enum, auto
import math

from .errors import unknown_enum_value


class Direction(Enum):
    """Kierunek zwrotu postaci."""

    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()

    @classmethod
    def parse(cls, value: str) -> "Direction":
        """
        Parsuje nazwę kierunku (bez rozróżniania wielkości liter).

        Raises:
            UnknownEnumValueError: Dla nieznanej nazwy
        """
        try:
            return cls[value.upper()]
        except KeyError:
            raise unknown_enum_value(cls, value) from None

    def __str__(self) -> str:
        return self.name


def facing_for_vector(dx: float, dy: float) -> Direction:
    """
    Zwraca kierunek zwrotu dla wektora ruchu.

    Args:
        dx, dy: Wektor od aktualnej pozycji do celu

    Returns:
        Direction: Kierunek zwrotu

    Example:
        >>> facing_for_vector(-2.0, 1.0)
        <Direction.LEFT: 3>
        >>> facing_for_vector(1.0, 1.0)
        <Direction.UP: 1>
    """
    length = math.hypot(dx, dy)
    if length > 0:
        dx, dy = dx / length, dy / length

    if abs(dx) > abs(dy):
        return Direction.LEFT if dx < 0 else Direction.RIGHT
    return Direction.DOWN if dy < 0 else Direction.UP
