"""
Testy dla geometrii siatki hex.

Testuje:
- Sąsiedztwo zależne od parzystości wiersza (i jego symetrię)
- Odległość hex i konwersję axial
- Konwersję pole <-> świat (HexLayout)
- Ruch punktu bez przeskakiwania celu
- Wyznaczanie kierunku zwrotu
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from hexnav.core.vertex import (
    Vertex,
    neighbor_offsets,
    DIRECTIONS_WHEN_Y_IS_EVEN,
    DIRECTIONS_WHEN_Y_IS_ODD,
)
from hexnav.core.direction import Direction, facing_for_vector
from hexnav.core.errors import UnknownEnumValueError
from hexnav.world.layout import HexLayout, WorldPoint


# ═══════════════════════════════════════════════════════════════════════════
# TEST: SĄSIEDZTWO
# ═══════════════════════════════════════════════════════════════════════════

def test_even_row_offsets():
    """Parzysty wiersz: sąsiedzi po lewej stronie (DL, UL)."""
    assert set(neighbor_offsets(0)) == {(-1, 0), (1, 0), (0, -1), (-1, -1), (0, 1), (-1, 1)}
    assert neighbor_offsets(-2) is DIRECTIONS_WHEN_Y_IS_EVEN


def test_odd_row_offsets():
    """Nieparzysty wiersz: sąsiedzi po prawej stronie (DR, UR)."""
    assert set(neighbor_offsets(1)) == {(-1, 0), (1, 0), (0, -1), (1, -1), (0, 1), (1, 1)}
    assert neighbor_offsets(-1) is DIRECTIONS_WHEN_Y_IS_ODD


def test_adjacency_is_symmetric():
    """Jeśli B jest sąsiadem A, to A jest sąsiadem B."""
    for x in range(-4, 5):
        for y in range(-4, 5):
            vertex = Vertex(x, y)
            for neighbor in vertex.neighbors():
                assert neighbor.is_adjacent(vertex), f"{neighbor} -> {vertex}"


def test_neighbors_are_at_distance_one():
    """Każdy z 6 sąsiadów jest w odległości 1."""
    for vertex in [Vertex(0, 0), Vertex(3, 1), Vertex(-2, -3)]:
        neighbors = vertex.neighbors()
        assert len(set(neighbors)) == 6
        assert all(vertex.distance(n) == 1 for n in neighbors)


def test_distance_examples():
    assert Vertex(0, 0).distance(Vertex(0, 0)) == 0
    assert Vertex(0, 0).distance(Vertex(2, 2)) == 3
    assert Vertex(0, 0).distance(Vertex(4, 0)) == 4
    assert Vertex(1, 1).distance(Vertex(2, 2)) == 1


def test_axial_round_trip():
    for x in range(-3, 4):
        for y in range(-3, 4):
            vertex = Vertex(x, y)
            assert Vertex.from_axial(*vertex.axial) == vertex


def test_parse_vertex():
    assert Vertex.parse("3,4") == Vertex(3, 4)
    assert str(Vertex(-1, 2)) == "-1,2"


@pytest.mark.parametrize("text", ["3", "1,2,3", ""])
def test_parse_vertex_rejects_bad_input(text):
    """Dokładnie jeden przecinek - inaczej ValueError."""
    with pytest.raises(ValueError):
        Vertex.parse(text)


# ═══════════════════════════════════════════════════════════════════════════
# TEST: HEX LAYOUT
# ═══════════════════════════════════════════════════════════════════════════

@pytest.mark.parametrize("layout", [
    HexLayout(),
    HexLayout(cell_width=1.7, row_height=1.3),
    HexLayout(cell_width=0.5, row_height=0.433, character_offset_y=2.25),
])
def test_vertex_world_round_trip(layout):
    """Środek pola wraca na to samo pole."""
    for x in range(-5, 6):
        for y in range(-5, 6):
            vertex = Vertex(x, y)
            assert layout.world_to_vertex(layout.vertex_to_world(vertex)) == vertex


def test_odd_rows_are_shifted_half_cell():
    layout = HexLayout(cell_width=2.0, row_height=1.5)

    assert layout.vertex_to_world(Vertex(1, 0)) == WorldPoint(2.0, 0.0)
    assert layout.vertex_to_world(Vertex(1, 1)) == WorldPoint(3.0, 1.5)


def test_point_near_center_maps_to_vertex():
    """Punkt lekko obok środka nadal wskazuje to samo pole."""
    layout = HexLayout()
    center = layout.vertex_to_world(Vertex(2, 3))

    assert layout.world_to_vertex(WorldPoint(center.x + 0.2, center.y - 0.1)) == Vertex(2, 3)


def test_character_position_round_trip():
    """Pozycja postaci jest przesunięta, ale wraca na to samo pole."""
    layout = HexLayout(character_offset_y=2.25)
    position = layout.to_character_position(Vertex(3, 4))

    assert position.y == pytest.approx(4 * 0.75 - 2.25)
    assert layout.from_character_position(position) == Vertex(3, 4)


# ═══════════════════════════════════════════════════════════════════════════
# TEST: RUCH PUNKTU
# ═══════════════════════════════════════════════════════════════════════════

def test_move_towards_partial_step():
    point = WorldPoint(0.0, 0.0).move_towards(WorldPoint(3.0, 4.0), 1.0)
    assert point.x == pytest.approx(0.6)
    assert point.y == pytest.approx(0.8)


def test_move_towards_never_overshoots():
    """Krok dłuższy niż dystans kończy się DOKŁADNIE w celu."""
    target = WorldPoint(1.0, 1.0)
    assert WorldPoint(0.0, 0.0).move_towards(target, 100.0) == target
    assert target.move_towards(target, 1.0) == target


# ═══════════════════════════════════════════════════════════════════════════
# TEST: KIERUNEK ZWROTU
# ═══════════════════════════════════════════════════════════════════════════

@pytest.mark.parametrize("dx, dy, expected", [
    (2.0, 1.0, Direction.RIGHT),
    (-2.0, 1.0, Direction.LEFT),
    (0.5, 3.0, Direction.UP),
    (0.5, -3.0, Direction.DOWN),
    (1.0, 1.0, Direction.UP),      # remis -> oś pionowa
    (-1.0, -1.0, Direction.DOWN),  # remis -> oś pionowa
    (0.0, 0.0, Direction.UP),
])
def test_facing_for_vector(dx, dy, expected):
    assert facing_for_vector(dx, dy) == expected


def test_direction_parse():
    assert Direction.parse("left") == Direction.LEFT
    with pytest.raises(UnknownEnumValueError):
        Direction.parse("north")
