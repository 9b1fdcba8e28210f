"""
Współrzędne pola mapy świata (Offset Coordinates, układ "odd-r").

Mapa eksploracji używa współrzędnych offset (x, y), gdzie:
- x = kolumna
- y = wiersz
- z = warstwa (dla wierzchołków grafu zawsze 0)

Nieparzyste wiersze są wizualnie przesunięte o pół pola w prawo:

    y=1:    (0,1) (1,1) (2,1) (3,1) ...
    y=0:  (0,0) (1,0) (2,0) (3,0) ...

Dlatego zbiór sąsiadów zależy od PARZYSTOŚCI wiersza:

    Parzyste y                     Nieparzyste y
    ──────────────────────         ──────────────────────
    LEFT       (-1,  0)            LEFT       (-1,  0)
    RIGHT      (+1,  0)            RIGHT      (+1,  0)
    DOWN       ( 0, -1)            DOWN       ( 0, -1)
    DOWN_LEFT  (-1, -1)            DOWN_RIGHT (+1, -1)
    UP         ( 0, +1)            UP         ( 0, +1)
    UP_LEFT    (-1, +1)            UP_RIGHT   (+1, +1)

Każdy offset jest odwracalny: jeśli B jest sąsiadem A, to A jest
sąsiadem B (liczonym z parzystością wiersza B).

Konwersja offset <-> axial (odd-r):
    q = x - (y // 2)
    r = y

Przykład użycia:
    >>> v = Vertex(2, 1)
    >>> v.neighbors()
    [Vertex(x=1, y=1), Vertex(x=3, y=1), Vertex(x=2, y=0), ...]
    >>> Vertex(0, 0).distance(Vertex(2, 2))
    3
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Tuple


LEFT = (-1, 0)
RIGHT = (1, 0)
DOWN = (0, -1)
DOWN_LEFT = (-1, -1)
DOWN_RIGHT = (1, -1)
UP = (0, 1)
UP_LEFT = (-1, 1)
UP_RIGHT = (1, 1)

# Kolejność ma znaczenie - wyznacza kolejność find_neighbors()
DIRECTIONS_WHEN_Y_IS_EVEN: List[Tuple[int, int]] = [
    LEFT, RIGHT, DOWN, DOWN_LEFT, UP, UP_LEFT,
]

DIRECTIONS_WHEN_Y_IS_ODD: List[Tuple[int, int]] = [
    LEFT, RIGHT, DOWN, DOWN_RIGHT, UP, UP_RIGHT,
]


def neighbor_offsets(y: int) -> List[Tuple[int, int]]:
    """
    Zwraca 6 offsetów sąsiadów dla wiersza o danej parzystości.

    Args:
        y: Numer wiersza (może być ujemny)

    Returns:
        List[Tuple[int, int]]: Lista (dx, dy)
    """
    return DIRECTIONS_WHEN_Y_IS_EVEN if y % 2 == 0 else DIRECTIONS_WHEN_Y_IS_ODD


@dataclass(frozen=True, order=True)
class Vertex:
    """
    Pole mapy świata identyfikowane przez współrzędne całkowite.

    Klasa jest niemutowalna (frozen=True) i porządkowalna (order=True).
    Porządek leksykograficzny (x, y, z) służy do deterministycznego
    rozstrzygania remisów w algorytmie Dijkstry.

    Attributes:
        x (int): Kolumna
        y (int): Wiersz
        z (int): Warstwa (0 dla pól grafu)
    """
    x: int
    y: int
    z: int = 0

    # ─────────────────────────────────────────────────────────────────────────
    # SĄSIEDZI
    # ─────────────────────────────────────────────────────────────────────────

    def neighbors(self) -> List[Vertex]:
        """
        Zwraca 6 sąsiednich pól (bez filtrowania po typie pola).

        Returns:
            List[Vertex]: Sąsiedzi w kolejności kierunków
        """
        return [
            Vertex(self.x + dx, self.y + dy, self.z)
            for dx, dy in neighbor_offsets(self.y)
        ]

    def is_adjacent(self, other: Vertex) -> bool:
        """Sprawdza czy pola sąsiadują ze sobą."""
        return (other.x - self.x, other.y - self.y) in neighbor_offsets(self.y)

    # ─────────────────────────────────────────────────────────────────────────
    # ODLEGŁOŚĆ
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def axial(self) -> Tuple[int, int]:
        """
        Współrzędne axial (q, r) odpowiadające temu polu.

        Returns:
            Tuple[int, int]: Krotka (q, r)
        """
        return (self.x - (self.y // 2), self.y)

    @classmethod
    def from_axial(cls, q: int, r: int) -> Vertex:
        """Tworzy Vertex ze współrzędnych axial."""
        return cls(q + (r // 2), r)

    def distance(self, other: Vertex) -> int:
        """
        Odległość w krokach hex między dwoma polami.

        Liczona w przestrzeni cube:
            distance = (|dq| + |dr| + |dq + dr|) / 2

        Args:
            other: Drugie pole

        Returns:
            int: Liczba kroków
        """
        q1, r1 = self.axial
        q2, r2 = other.axial
        dq = q1 - q2
        dr = r1 - r2
        return (abs(dq) + abs(dr) + abs(dq + dr)) // 2

    # ─────────────────────────────────────────────────────────────────────────
    # KONWERSJA
    # ─────────────────────────────────────────────────────────────────────────

    def flat(self) -> Vertex:
        """Zwraca to samo pole z warstwą 0."""
        return self if self.z == 0 else Vertex(self.x, self.y)

    def to_list(self) -> List[int]:
        """Serializacja do [x, y] (format logów i API)."""
        return [self.x, self.y]

    @classmethod
    def parse(cls, text: str) -> Vertex:
        """
        Parsuje pozycję w formacie "x,y".

        Raises:
            ValueError: Jeśli tekst nie ma dokładnie jednego przecinka
        """
        parts = text.split(",")
        if len(parts) != 2:
            raise ValueError(f"Expected exactly one ',' character in {text!r}")
        return cls(int(parts[0]), int(parts[1]))

    def __str__(self) -> str:
        return f"{self.x},{self.y}"


def cube_round(q: float, r: float) -> Vertex:
    """
    Zaokrągla ułamkowe współrzędne axial do najbliższego pola.

    Algorytm:
    1. Zaokrąglij q, r, s = -q - r do najbliższych int
    2. Znajdź współrzędną z największym błędem zaokrąglenia
    3. Skoryguj ją tak, żeby q + r + s = 0

    Args:
        q, r: Współrzędne axial (float)

    Returns:
        Vertex: Najbliższe pole (offset)
    """
    s = -q - r
    rq = round(q)
    rr = round(r)
    rs = round(s)

    dq = abs(rq - q)
    dr = abs(rr - r)
    ds = abs(rs - s)

    if dq > dr and dq > ds:
        rq = -rr - rs
    elif dr > ds:
        rr = -rq - rs

    return Vertex.from_axial(int(rq), int(rr))
