"""
Algorytm Dijkstry dla dowolnego grafu (interfejs Graph).

Dijkstra znajduje najkrótsze ścieżki z jednego źródła do wszystkich
wierzchołków grafu o nieujemnych wagach krawędzi.

Jak działa:
    1. distance[v] = +inf dla każdego v, distance[source] = 0
    2. Zbiór "nieodwiedzonych" = graph.vertices() (+ source)
    3. Dopóki są nieodwiedzone wierzchołki:
       a. Wybierz nieodwiedzony u z najmniejszym (distance, u)
       b. Usuń u z nieodwiedzonych
       c. Dla każdego nieodwiedzonego sąsiada v:
          alt = distance[u] + graph.get_distance(u, v)
          jeśli alt < distance[v]: distance[v] = alt, previous[v] = u
    4. Ścieżkę odtwarzamy idąc po previous od celu do źródła

Remisy:
    Przy równych odległościach wybierany jest MNIEJSZY wierzchołek
    (porządek naturalny, dla Vertex leksykograficznie po (x, y, z)).
    Dzięki temu wynik jest deterministyczny.
    Wierzchołki muszą więc być porównywalne przez `<` (graph.Orderable) -
    heapq porównuje je przy remisie odległości.

Kolejka priorytetowa:
    Zamiast liniowego skanu O(V²) używamy heapq z leniwym usuwaniem.
    Kolejność wyboru wierzchołków jest identyczna jak przy skanie
    liniowym - wierzchołki z distance = +inf i tak niczego nie relaksują.

Format ścieżki:
    Lista wierzchołków OD pierwszego kroku po źródle DO celu włącznie.
    - source == destination: []
    - cel nieosiągalny: []

Przykład użycia:
    >>> path = shortest_path(world_map, Vertex(0, 0), Vertex(2, 2))
    >>> path
    [Vertex(x=0, y=1), Vertex(x=1, y=2), Vertex(x=2, y=2)]
"""

from __future__ import annotations
from typing import Dict, Iterable, List, Sequence, Set, Tuple
import heapq
import math

from .graph import Graph, V

INFINITY = math.inf


def shortest_distances(
    graph: Graph,
    source: V,
) -> Tuple[Dict[V, float], Dict[V, V]]:
    """
    Liczy najkrótsze odległości ze źródła do wszystkich wierzchołków.

    Args:
        graph: Graf do przeszukania
        source: Wierzchołek startowy

    Returns:
        Tuple[Dict, Dict]: (distances, previous)
            distances: wierzchołek -> odległość (+inf jeśli nieosiągalny)
            previous: wierzchołek -> poprzednik na najkrótszej ścieżce

    Complexity:
        Time: O((V + E) log V)
        Space: O(V)
    """
    distances: Dict[V, float] = {v: INFINITY for v in graph.vertices()}
    distances[source] = 0.0
    previous: Dict[V, V] = {}

    remaining: Set[V] = set(distances)
    queue: List[Tuple[float, V]] = [(0.0, source)]

    while queue:
        dist, subject = heapq.heappop(queue)

        # Przestarzały wpis (wierzchołek już odwiedzony)
        if subject not in remaining:
            continue
        remaining.remove(subject)

        for neighbor in graph.find_neighbors(subject):
            if neighbor not in remaining:
                continue

            alt = dist + graph.get_distance(subject, neighbor)
            if alt < distances[neighbor]:
                distances[neighbor] = alt
                previous[neighbor] = subject
                heapq.heappush(queue, (alt, neighbor))

    return distances, previous


def shortest_path(graph: Graph, source: V, destination: V) -> List[V]:
    """
    Zwraca najkrótszą ścieżkę z source do destination.

    Args:
        graph: Graf do przeszukania
        source: Wierzchołek startowy
        destination: Wierzchołek docelowy

    Returns:
        List[V]: Kroki po źródle aż do celu włącznie.
                 Pusta lista jeśli source == destination lub cel nieosiągalny.
    """
    _, previous = shortest_distances(graph, source)
    return path_to_source(destination, previous)


def shortest_path_to_closest(
    graph: Graph,
    source: V,
    destinations: Iterable[V],
) -> List[V]:
    """
    Zwraca ścieżkę do NAJBLIŻSZEGO z podanych celów.

    Wykonuje jedno przejście Dijkstry, potem wybiera osiągalny cel
    z najmniejszą odległością (remis -> mniejszy wierzchołek).

    Args:
        graph: Graf do przeszukania
        source: Wierzchołek startowy
        destinations: Kandydaci na cel

    Returns:
        List[V]: Ścieżka do najbliższego celu.
                 Pusta lista jeśli żaden cel nie jest osiągalny
                 (albo lista kandydatów jest pusta).

    Example:
        >>> shortest_path_to_closest(world_map, hero, world_map.walkable_neighbors(shop))
    """
    distances, previous = shortest_distances(graph, source)

    reachable = [
        d for d in destinations
        if distances.get(d, INFINITY) < INFINITY
    ]
    if not reachable:
        return []

    closest = min(reachable, key=lambda d: (distances[d], d))
    return path_to_source(closest, previous)


def path_to_source(destination: V, previous: Dict[V, V]) -> List[V]:
    """
    Odtwarza ścieżkę idąc po mapie poprzedników od celu wstecz.

    Źródło nie ma poprzednika, więc nie trafia do wyniku.
    """
    path: List[V] = []
    position = destination
    while position in previous:
        path.append(position)
        position = previous[position]

    path.reverse()
    return path


def path_cost(graph: Graph, source: V, path: Sequence[V]) -> float:
    """
    Sumuje wagi krawędzi ścieżki zaczynającej się w source.

    Returns:
        float: Łączny koszt (0.0 dla pustej ścieżki)
    """
    total = 0.0
    current = source
    for step in path:
        total += graph.get_distance(current, step)
        current = step
    return total
