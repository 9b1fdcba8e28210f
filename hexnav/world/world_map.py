"""
Mapa świata (WorldMap) - siatka hex jako graf dla Dijkstry.

WorldMap zarządza przestrzenią eksploracji:
- Trzyma rejestr pól (Vertex -> Tile) i wpisów renderowania
  (TileId -> SpriteLayer)
- Implementuje interfejs Graph: wierzchołki to WYŁĄCZNIE pola WALKABLE
- Zamienia kliknięcie w świecie na ścieżkę i zleca ruch bohaterowi

Cykl życia rejestru:
    update_tiles() podmienia CAŁY rejestr (clear-then-insert, bez diffów).
    vertices() liczone są od nowa przy każdym zapytaniu.

ROZWIĄZYWANIE KLIKNIĘCIA:
═══════════════════════════════════════════════════════════════════

    punkt świata -> najbliższe pole -> typ pola:

    WALKABLE   ścieżka = shortest_path(bohater, pole)
    VISITABLE  ścieżka = shortest_path_to_closest(bohater,
                             sąsiedzi WALKABLE pola)
               (podchodzimy, ale nigdy nie wchodzimy na pole)
    BLOCKED    brak ruchu

    Niepusta ścieżka:
        1. zapisz ostatnie pole w PositionStorage
        2. zamień pola na punkty świata (pozycje postaci)
        3. bohater.move_on_path(punkty, on_arrive -> visit_handler(on_visit))

Przykład użycia:
    >>> world_map = WorldMap(HexLayout())
    >>> world_map.update_tiles(loader.load_map("demo"))
    >>> world_map.attach(character_service, storage)
    >>> world_map.resolve_click(WorldPoint(2.0, 1.5))
    [Vertex(x=0, y=1), Vertex(x=1, y=2), Vertex(x=2, y=2)]
"""

from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, TYPE_CHECKING

from ..core.dijkstra import path_cost, shortest_path, shortest_path_to_closest
from ..core.errors import check_argument, check_not_none, unknown_enum_value
from ..core.graph import Graph
from ..core.vertex import Vertex, neighbor_offsets
from ..events.event_logger import EventLogger, NavEventType
from .layout import HexLayout, WorldPoint
from .tile import (
    ROW_SORT_MULTIPLIER,
    Occupant,
    SpriteLayer,
    Tile,
    TileId,
    TileType,
    sort_order,
)

if TYPE_CHECKING:
    from ..navigation.arrival import ArrivalSignal
    from ..navigation.character_service import WorldCharacterService
    from ..persistence.position_storage import PositionStorage


VisitHandler = Callable[[Any], None]


class WorldMap(Graph[Vertex]):
    """
    Siatka hex mapy świata.

    Attributes:
        layout (HexLayout): Geometria (pole <-> świat)
        row_multiplier (int): Mnożnik wiersza w sort order
        visit_handler (Optional[Callable]): Wywoływany z on_visit pola
            po dotarciu bohatera (zewnętrzny silnik zasad)
        last_signal (Optional[ArrivalSignal]): Sygnał ostatniego ruchu
        _tiles (Dict[Vertex, Tile]): Rejestr pól
        _render_entries (Dict[TileId, SpriteLayer]): Warstwy do narysowania
    """

    def __init__(
        self,
        layout: Optional[HexLayout] = None,
        row_multiplier: int = ROW_SORT_MULTIPLIER,
        logger: Optional[EventLogger] = None,
    ):
        self.layout = layout or HexLayout()
        self.row_multiplier = row_multiplier
        self.logger = logger
        self.visit_handler: Optional[VisitHandler] = None
        self.last_signal: Optional["ArrivalSignal"] = None

        self._tiles: Dict[Vertex, Tile] = {}
        self._render_entries: Dict[TileId, SpriteLayer] = {}
        self._character_service: Optional["WorldCharacterService"] = None
        self._storage: Optional["PositionStorage"] = None

    def attach(
        self,
        character_service: "WorldCharacterService",
        storage: "PositionStorage",
        visit_handler: Optional[VisitHandler] = None,
    ) -> None:
        """Podłącza współpracowników wymaganych przez resolve_click()."""
        self._character_service = character_service
        self._storage = storage
        if visit_handler is not None:
            self.visit_handler = visit_handler

    # ─────────────────────────────────────────────────────────────────────────
    # REJESTR PÓL
    # ─────────────────────────────────────────────────────────────────────────

    def update_tiles(self, descriptors: Iterable[Any]) -> None:
        """
        Podmienia cały rejestr pól (batch ingestion).

        Args:
            descriptors: Opisy pól (dict) albo gotowe obiekty Tile

        Note:
            Każda warstwa pola staje się osobnym wpisem renderowania
            o kluczu (pozycja, z_index). Duplikat pozycji w batchu
            nadpisuje wcześniejszy opis.

        Raises:
            UnknownEnumValueError: Jeśli typ pola jest nieznany
            ValueError: Jeśli z_index warstwy wychodzi poza [0, row_multiplier)
                (warstwa "przeciekłaby" do pasma innego wiersza)
        """
        tiles = [d if isinstance(d, Tile) else Tile.from_dict(d) for d in descriptors]

        # Walidacja przed czyszczeniem - błędny batch zostawia stary rejestr
        for tile in tiles:
            for layer in tile.layers:
                check_argument(
                    0 <= layer.z_index < self.row_multiplier,
                    f"Layer z_index {layer.z_index} on tile {tile.position} "
                    f"outside [0, {self.row_multiplier})",
                )

        self._tiles.clear()
        self._render_entries.clear()

        for tile in tiles:
            self._tiles[tile.position] = tile
        for tile in self._tiles.values():
            for layer in tile.layers:
                self._render_entries[TileId(tile.position, layer.z_index)] = layer

        if self.logger:
            self.logger.log_event(
                NavEventType.MAP_UPDATED,
                tile_count=len(self._tiles),
                walkable_count=sum(1 for t in self._tiles.values() if t.is_walkable),
                render_entries=len(self._render_entries),
            )

    def tile(self, vertex: Vertex) -> Optional[Tile]:
        """Zwraca pole albo None."""
        return self._tiles.get(vertex.flat())

    @property
    def tiles(self) -> List[Tile]:
        """Wszystkie pola w stałej kolejności (po pozycji)."""
        return [self._tiles[v] for v in sorted(self._tiles)]

    def tile_type(self, vertex: Vertex) -> TileType:
        """Typ pola; pole spoza mapy traktujemy jak BLOCKED."""
        tile = self.tile(vertex)
        return tile.tile_type if tile is not None else TileType.BLOCKED

    def is_walkable(self, vertex: Vertex) -> bool:
        return self.tile_type(vertex) == TileType.WALKABLE

    def occupants(self) -> Dict[Vertex, Occupant]:
        """NPC zapisani w polach mapy."""
        return {
            position: tile.occupant
            for position, tile in self._tiles.items()
            if tile.occupant is not None
        }

    # ─────────────────────────────────────────────────────────────────────────
    # GRAF
    # ─────────────────────────────────────────────────────────────────────────

    def vertices(self) -> List[Vertex]:
        """Pola WALKABLE (liczone od nowa przy każdym wywołaniu)."""
        return [v for v, tile in self._tiles.items() if tile.is_walkable]

    def find_neighbors(self, vertex: Vertex) -> List[Vertex]:
        """
        Sąsiedzi WALKABLE pola.

        Offsety zależą od parzystości wiersza (patrz core.vertex).
        """
        return [
            neighbor
            for neighbor in (
                Vertex(vertex.x + dx, vertex.y + dy)
                for dx, dy in neighbor_offsets(vertex.y)
            )
            if self.is_walkable(neighbor)
        ]

    def walkable_neighbors(self, vertex: Vertex) -> List[Vertex]:
        return self.find_neighbors(vertex)

    # ─────────────────────────────────────────────────────────────────────────
    # RENDEROWANIE
    # ─────────────────────────────────────────────────────────────────────────

    def sort_order(self, position: Vertex, z_index: int) -> int:
        """order = y * -100 + z (ten sam wzór dla terenu i postaci)."""
        return sort_order(position, z_index, self.row_multiplier)

    def render_entries(self) -> List[Tuple[TileId, SpriteLayer, int]]:
        """
        Wpisy renderowania z przypisaną kolejnością rysowania.

        Returns:
            List[Tuple[TileId, SpriteLayer, int]]: Posortowane rosnąco po order
        """
        entries = [
            (tile_id, layer, self.sort_order(tile_id.position, tile_id.z_index))
            for tile_id, layer in self._render_entries.items()
        ]
        entries.sort(key=lambda e: (e[2], e[0].position.x))
        return entries

    # ─────────────────────────────────────────────────────────────────────────
    # KLIKNIĘCIE
    # ─────────────────────────────────────────────────────────────────────────

    def find_path(self, source: Vertex, clicked: Vertex) -> List[Vertex]:
        """
        Ścieżka z source do klikniętego pola zgodnie z jego typem.

        Returns:
            List[Vertex]: Ścieżka (pusta = brak ruchu)
        """
        tile_type = self.tile_type(clicked)

        if tile_type == TileType.WALKABLE:
            return shortest_path(self, source, clicked)
        if tile_type == TileType.VISITABLE:
            return shortest_path_to_closest(self, source, self.walkable_neighbors(clicked))
        if tile_type == TileType.BLOCKED:
            return []
        raise unknown_enum_value(TileType, tile_type)

    def resolve_click(self, point: WorldPoint) -> List[Vertex]:
        """
        Obsługuje kliknięcie w punkcie świata.

        Args:
            point: Punkt kliknięcia w przestrzeni świata

        Returns:
            List[Vertex]: Ścieżka przekazana bohaterowi (pusta = brak ruchu)

        Raises:
            MissingCollaboratorError: Jeśli nie wywołano attach()
        """
        characters = check_not_none(self._character_service, "WorldMap has no character service")
        storage = check_not_none(self._storage, "WorldMap has no position storage")

        clicked = self.layout.world_to_vertex(point)
        source = characters.current_hero_position()
        path = self.find_path(source, clicked)

        if not path:
            if self.logger:
                self.logger.log_event(
                    NavEventType.PATH_NOT_FOUND,
                    point=point.to_list(),
                    clicked=clicked.to_list(),
                    reason=self.tile_type(clicked).name.lower(),
                )
            return []

        storage.store_position(path[-1])

        tile = self.tile(clicked)
        on_visit = tile.on_visit if tile is not None else None
        waypoints = [self.layout.to_character_position(v) for v in path]

        self.last_signal = characters.move_hero(
            waypoints,
            on_arrive=self._visit_callback(on_visit),
            payload=on_visit,
        )

        if self.logger:
            self.logger.log_event(
                NavEventType.CLICK_RESOLVED,
                point=point.to_list(),
                clicked=clicked.to_list(),
                tile_type=self.tile_type(clicked).name.lower(),
                path=[v.to_list() for v in path],
                cost=path_cost(self, source, path),
            )
        return path

    def _visit_callback(self, on_visit: Optional[Any]) -> Optional[Callable[[], None]]:
        if on_visit is None:
            return None

        def dispatch() -> None:
            if self.visit_handler is not None:
                self.visit_handler(on_visit)

        return dispatch

    # ─────────────────────────────────────────────────────────────────────────
    # DEBUG
    # ─────────────────────────────────────────────────────────────────────────

    def debug_print(self, path: Iterable[Vertex] = ()) -> str:
        """
        Tekstowa reprezentacja mapy (wiersze od góry, y malejąco).

        Legenda:
            . = WALKABLE, V = VISITABLE, # = BLOCKED, * = ścieżka,
            (spacja) = brak pola
        """
        if not self._tiles:
            return ""
        on_path = set(path)
        xs = [v.x for v in self._tiles]
        ys = [v.y for v in self._tiles]
        symbols = {TileType.WALKABLE: ".", TileType.VISITABLE: "V", TileType.BLOCKED: "#"}

        lines = []
        for y in range(max(ys), min(ys) - 1, -1):
            indent = " " if y % 2 == 1 else ""
            row = []
            for x in range(min(xs), max(xs) + 1):
                vertex = Vertex(x, y)
                tile = self._tiles.get(vertex)
                if vertex in on_path:
                    row.append("*")
                elif tile is None:
                    row.append(" ")
                else:
                    row.append(symbols[tile.tile_type])
            lines.append(indent + " ".join(row))
        return "\n".join(lines)
