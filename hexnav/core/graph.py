"""
Abstrakcja grafu dla algorytmu najkrótszej ścieżki.

Graf to zestaw trzech możliwości:
- vertices():        wszystkie wierzchołki, po których można chodzić
- find_neighbors(v): uporządkowana lista sąsiadów wierzchołka
- get_distance(a,b): waga krawędzi (domyślnie 1.0)

Algorytmy w `dijkstra` zależą wyłącznie od tego interfejsu,
więc dowolna klasa implementująca Graph (np. WorldMap albo
prosty graf testowy) może być przeszukiwana.
Wierzchołki muszą być hashowalne i porównywalne (Orderable):
int, str, krotki, Vertex.

Przykład:
    >>> class Line(Graph):
    ...     def vertices(self):
    ...         return [0, 1, 2]
    ...     def find_neighbors(self, v):
    ...         return [n for n in (v - 1, v + 1) if 0 <= n <= 2]
    >>> Line().get_distance(0, 1)
    1.0
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Generic, Iterable, List, Protocol, TypeVar


class Orderable(Protocol):
    """
    Wymagania wobec wierzchołka: hashowalny i porównywalny przez `<`.

    Kolejka priorytetowa Dijkstry porównuje wierzchołki przy remisie
    odległości, więc typ bez `__lt__` (np. goły `object()`) kończy
    się TypeError przy pierwszym remisie.
    """

    def __hash__(self) -> int: ...

    def __lt__(self, other: Any) -> bool: ...


V = TypeVar("V", bound=Orderable)

DEFAULT_EDGE_WEIGHT = 1.0


class Graph(ABC, Generic[V]):
    """
    Interfejs grafu z domyślną wagą krawędzi.

    Implementacja musi dostarczyć vertices() i find_neighbors().
    get_distance() można nadpisać dla niestandardowych wag.
    """

    @abstractmethod
    def vertices(self) -> Iterable[V]:
        """Zwraca wszystkie wierzchołki grafu."""

    @abstractmethod
    def find_neighbors(self, vertex: V) -> List[V]:
        """Zwraca sąsiadów wierzchołka w stałej kolejności."""

    def get_distance(self, source: V, destination: V) -> float:
        """
        Waga krawędzi source -> destination.

        Returns:
            float: 1.0 jeśli nie nadpisano
        """
        return DEFAULT_EDGE_WEIGHT
