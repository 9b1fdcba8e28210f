"""
Testy dla algorytmu Dijkstry.

Testuje:
- Optymalność ścieżki (porównanie z pełnym przeszukaniem małych grafów)
- Przypadki brzegowe (source == destination, cel nieosiągalny)
- shortest_path_to_closest (wybór najbliższego celu, brak celów)
- Deterministyczne rozstrzyganie remisów (wierzchołki porównywalne)
"""

import itertools
import math
import random
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from hexnav.core.graph import Graph
from hexnav.core.dijkstra import (
    shortest_path,
    shortest_path_to_closest,
    shortest_distances,
    path_cost,
)


class WeightedGraph(Graph):
    """Skierowany graf testowy z wagami krawędzi."""

    def __init__(self, edges):
        self.edges = {}
        self.nodes = set()
        for a, b, w in edges:
            self.edges.setdefault(a, {})[b] = w
            self.nodes.update((a, b))

    def vertices(self):
        return sorted(self.nodes)

    def find_neighbors(self, vertex):
        return sorted(self.edges.get(vertex, {}))

    def get_distance(self, source, destination):
        return self.edges[source][destination]


class UnitGraph(Graph):
    """Nieskierowany graf bez wag (domyślne 1.0)."""

    def __init__(self, edges):
        self.adjacency = {}
        for a, b in edges:
            self.adjacency.setdefault(a, set()).add(b)
            self.adjacency.setdefault(b, set()).add(a)

    def vertices(self):
        return list(self.adjacency)

    def find_neighbors(self, vertex):
        return sorted(self.adjacency.get(vertex, ()))


class AdjacencyGraph(Graph):
    """Graf z gotowych list sąsiedztwa (bez sortowania wierzchołków)."""

    def __init__(self, adjacency):
        self.adjacency = adjacency

    def vertices(self):
        nodes = list(self.adjacency)
        for neighbors in self.adjacency.values():
            nodes.extend(n for n in neighbors if n not in nodes)
        return nodes

    def find_neighbors(self, vertex):
        return list(self.adjacency.get(vertex, ()))


def brute_force_cost(graph, source, destination):
    """Minimalny koszt po wszystkich prostych ścieżkach (DFS)."""
    best = math.inf

    def visit(node, cost, seen):
        nonlocal best
        if node == destination:
            best = min(best, cost)
            return
        for neighbor in graph.find_neighbors(node):
            if neighbor not in seen:
                visit(neighbor, cost + graph.get_distance(node, neighbor), seen | {neighbor})

    visit(source, 0.0, {source})
    return best


def random_graph(rng, size):
    edges = []
    for a, b in itertools.permutations(range(size), 2):
        if rng.random() < 0.35:
            edges.append((a, b, float(rng.randint(1, 9))))
    return WeightedGraph(edges + [(n, n, 1.0) for n in range(size)])


# ═══════════════════════════════════════════════════════════════════════════
# TEST: OPTYMALNOŚĆ
# ═══════════════════════════════════════════════════════════════════════════

@pytest.mark.parametrize("seed", range(25))
def test_path_cost_matches_brute_force(seed):
    """Koszt ścieżki Dijkstry == minimum po wszystkich ścieżkach."""
    rng = random.Random(seed)
    graph = random_graph(rng, size=rng.randint(3, 8))

    for source in graph.vertices():
        for destination in graph.vertices():
            if source == destination:
                continue
            expected = brute_force_cost(graph, source, destination)
            path = shortest_path(graph, source, destination)

            if expected == math.inf:
                assert path == []
            else:
                assert path[-1] == destination
                assert path_cost(graph, source, path) == pytest.approx(expected)


def test_path_follows_existing_edges():
    """Każdy krok ścieżki jest krawędzią grafu."""
    graph = WeightedGraph([(0, 1, 1.0), (1, 2, 1.0), (0, 2, 5.0), (2, 3, 1.0)])
    path = shortest_path(graph, 0, 3)

    assert path == [1, 2, 3]
    previous = 0
    for step in path:
        assert step in graph.find_neighbors(previous)
        previous = step


def test_default_edge_weight_is_one():
    """Graph bez nadpisanego get_distance ma wagi 1.0."""
    graph = UnitGraph([("a", "b")])
    assert graph.get_distance("a", "b") == 1.0


# ═══════════════════════════════════════════════════════════════════════════
# TEST: PRZYPADKI BRZEGOWE
# ═══════════════════════════════════════════════════════════════════════════

def test_same_source_and_destination_is_empty():
    """source == destination -> pusta ścieżka."""
    graph = UnitGraph([(0, 1), (1, 2)])
    assert shortest_path(graph, 1, 1) == []


def test_unreachable_destination_is_empty():
    """Cel w innej składowej -> pusta ścieżka."""
    graph = UnitGraph([(0, 1), (2, 3)])
    assert shortest_path(graph, 0, 3) == []


def test_destination_outside_graph_is_empty():
    """Cel spoza grafu -> pusta ścieżka (bez wyjątku)."""
    graph = UnitGraph([(0, 1)])
    assert shortest_path(graph, 0, 99) == []


def test_path_excludes_source():
    """Ścieżka zaczyna się od pierwszego kroku po źródle."""
    graph = UnitGraph([(0, 1), (1, 2)])
    assert shortest_path(graph, 0, 2) == [1, 2]


def test_distances_cover_all_vertices():
    """Nieosiągalne wierzchołki mają odległość +inf."""
    graph = UnitGraph([(0, 1), (1, 2), (5, 6)])
    distances, previous = shortest_distances(graph, 0)

    assert distances[0] == 0.0
    assert distances[2] == 2.0
    assert distances[5] == math.inf
    assert 0 not in previous


def test_tie_break_is_deterministic():
    """Dwie równie krótkie drogi - wygrywa mniejszy wierzchołek."""
    # 0 -> 1 -> 3 i 0 -> 2 -> 3, obie długości 2
    graph = UnitGraph([(0, 2), (0, 1), (2, 3), (1, 3)])

    assert shortest_path(graph, 0, 3) == [1, 3]
    assert all(shortest_path(graph, 0, 3) == [1, 3] for _ in range(5))


def test_tie_break_with_string_vertices():
    graph = UnitGraph([("start", "b"), ("start", "a"), ("b", "end"), ("a", "end")])

    assert shortest_path(graph, "start", "end") == ["a", "end"]


def test_unorderable_vertices_fail_on_tie():
    """Wierzchołki bez `<` - heapq nie rozstrzygnie remisu."""
    source, left, right, target = object(), object(), object(), object()
    graph = AdjacencyGraph({source: [left, right], left: [target], right: [target]})

    with pytest.raises(TypeError):
        shortest_path(graph, source, target)


# ═══════════════════════════════════════════════════════════════════════════
# TEST: NAJBLIŻSZY Z CELÓW
# ═══════════════════════════════════════════════════════════════════════════

def test_closest_picks_nearer_candidate():
    """Cele w odległości 2 i 3 - wybrany ten w odległości 2."""
    # 0 - 1 - 2 - 3 (linia), cele: 3 (dist 3) i 2 (dist 2)
    graph = UnitGraph([(0, 1), (1, 2), (2, 3)])

    assert shortest_path_to_closest(graph, 0, [3, 2]) == [1, 2]


def test_closest_ignores_unreachable_candidates():
    """Nieosiągalny kandydat jest pomijany."""
    graph = UnitGraph([(0, 1), (1, 2), (7, 8)])

    assert shortest_path_to_closest(graph, 0, [8, 2]) == [1, 2]


def test_closest_with_no_reachable_candidates_is_empty():
    """Żaden kandydat nie jest osiągalny -> pusta ścieżka, bez wyjątku."""
    graph = UnitGraph([(0, 1), (7, 8)])

    assert shortest_path_to_closest(graph, 0, [7, 8]) == []


def test_closest_with_empty_candidate_list_is_empty():
    """Pusta lista kandydatów -> pusta ścieżka."""
    graph = UnitGraph([(0, 1)])

    assert shortest_path_to_closest(graph, 0, []) == []


def test_closest_respects_weights():
    """Wybór po koszcie, nie po liczbie kroków."""
    graph = WeightedGraph([(0, 1, 10.0), (0, 2, 1.0), (2, 3, 1.0)])

    assert shortest_path_to_closest(graph, 0, [1, 3]) == [2, 3]
