"""
Sesja eksploracji - pętla ticków nawigacji.

Sesja spina wszystkie komponenty:

    ConfigLoader ─► NavigationConfig ─► HexLayout
                                          │
    PositionStorage ◄── WorldMap ◄────────┤
          │                │              │
          └──► WorldCharacterService ◄────┘
                     │
                  bohater + NPC

PĘTLA TICKA:
═══════════════════════════════════════════════════════════════════

    1. (opcjonalnie) kliknięcie -> WorldMap.resolve_click()
       Ścieżka liczona SYNCHRONICZNIE, do końca, w tym samym ticku.

    2. UPDATE_CHARACTERS
       ─────────────────────────────────────────────────────────
       • Każda postać przesuwa się o move_speed / ticks_per_second
       • Bohater po opróżnieniu kolejki odpala sygnał dotarcia

    3. tick += 1

Wątki:
    Jeden wątek, bez blokad. Nowe kliknięcie w trakcie ruchu po prostu
    zastępuje ścieżkę (stary sygnał nigdy nie odpala).

Przykład użycia:
    >>> session = ExplorationSession(session_id="abc")
    >>> session.load_tiles(loader.load_map("demo"))
    >>> session.click_vertex(Vertex(2, 2))
    >>> session.run_until_idle()
    >>> session.hero.current_vertex
    Vertex(x=2, y=2, z=0)
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional

from ..core.config_loader import NavigationConfig
from ..core.errors import check_not_none
from ..core.vertex import Vertex
from ..events.event_logger import EventLogger
from ..navigation.character import WorldCharacter
from ..navigation.character_service import WorldCharacterService
from ..persistence.position_storage import PositionStorage
from ..persistence.stores import InMemoryStore, KeyValueStore
from ..world.layout import HexLayout, WorldPoint
from ..world.world_map import VisitHandler, WorldMap


class ExplorationSession:
    """
    Jedna sesja eksploracji mapy świata.

    Attributes:
        session_id (str): Identyfikator sesji (zakres zapisanej pozycji)
        config (NavigationConfig): Parametry
        tick (int): Aktualny tick
        layout (HexLayout): Geometria siatki
        world_map (WorldMap): Mapa
        storage (PositionStorage): Zapis pozycji bohatera
        characters (WorldCharacterService): Bohater i NPC
        logger (EventLogger): Logger zdarzeń
        visits (List[Any]): Akcje on_visit, które już się wykonały
    """

    def __init__(
        self,
        session_id: str,
        config: Optional[NavigationConfig] = None,
        store: Optional[KeyValueStore] = None,
        visit_handler: Optional[VisitHandler] = None,
    ):
        self.session_id = session_id
        self.config = config or NavigationConfig()
        self.tick = 0
        self.visits: List[Any] = []
        self._external_visit_handler = visit_handler

        self.logger = EventLogger(
            session_id=session_id,
            ticks_per_second=self.config.ticks_per_second,
        )
        self.layout = HexLayout(
            cell_width=self.config.cell_width,
            row_height=self.config.row_height,
            character_offset_y=self.config.character_offset_y,
        )
        self.storage = PositionStorage(
            store if store is not None else InMemoryStore(),
            session_id,
            key=self.config.storage_key,
            logger=self.logger,
        )
        self.world_map = WorldMap(
            self.layout,
            row_multiplier=self.config.row_sort_multiplier,
            logger=self.logger,
        )
        self.characters = WorldCharacterService(
            self.layout,
            self.config,
            storage=self.storage,
            logger=self.logger,
        )
        self.world_map.attach(self.characters, self.storage, self._on_visit)

    # ─────────────────────────────────────────────────────────────────────────
    # SETUP
    # ─────────────────────────────────────────────────────────────────────────

    def load_tiles(self, descriptors: Iterable[Dict[str, Any]], start: Vertex = Vertex(0, 0)) -> None:
        """
        Wczytuje pola mapy i (za pierwszym razem) tworzy bohatera.

        Args:
            descriptors: Opisy pól
            start: Pole startowe bohatera, jeśli brak zapisanej pozycji
        """
        self.world_map.update_tiles(descriptors)
        first_load = self.characters.hero is None
        self.characters.initialize_if_needed(start)
        self.characters.sync_occupants(self.world_map.occupants())
        if first_load:
            self.logger.log_session_start(self.snapshot())

    @property
    def hero(self) -> WorldCharacter:
        """
        Bohater sesji.

        Raises:
            MissingCollaboratorError: Jeśli nie wywołano jeszcze load_tiles()
        """
        return check_not_none(self.characters.hero, "Hero not initialized; call load_tiles() first")

    # ─────────────────────────────────────────────────────────────────────────
    # WEJŚCIE
    # ─────────────────────────────────────────────────────────────────────────

    def click(self, point: WorldPoint) -> List[Vertex]:
        """Kliknięcie w punkcie świata. Zwraca ścieżkę (pusta = brak ruchu)."""
        self.logger.tick = self.tick
        return self.world_map.resolve_click(point)

    def click_vertex(self, vertex: Vertex) -> List[Vertex]:
        """Kliknięcie w środek pola."""
        return self.click(self.layout.vertex_to_world(vertex))

    # ─────────────────────────────────────────────────────────────────────────
    # PĘTLA
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def delta_time(self) -> float:
        return 1.0 / self.config.ticks_per_second

    def step(self) -> None:
        """Wykonuje jeden tick."""
        self.logger.tick = self.tick
        self.characters.update(self.delta_time)
        self.tick += 1

    def run_until_idle(self, max_ticks: Optional[int] = None) -> int:
        """
        Tickuje dopóki bohater się porusza.

        Args:
            max_ticks: Limit ticków (domyślnie config.max_ticks)

        Returns:
            int: Liczba wykonanych ticków
        """
        limit = self.config.max_ticks if max_ticks is None else max_ticks
        executed = 0
        while self.hero.is_moving and executed < limit:
            self.step()
            executed += 1
        return executed

    def _on_visit(self, on_visit: Any) -> None:
        self.visits.append(on_visit)
        if self._external_visit_handler is not None:
            self._external_visit_handler(on_visit)

    # ─────────────────────────────────────────────────────────────────────────
    # WYNIKI
    # ─────────────────────────────────────────────────────────────────────────

    def snapshot(self) -> Dict[str, Any]:
        """Stan sesji (bohater, NPC, zapisana pozycja)."""
        stored = self.storage.get_position()
        return {
            "session_id": self.session_id,
            "tick": self.tick,
            "hero": self.hero.to_dict(),
            "npcs": [c.to_dict() for c in self.characters.all_characters()[1:]],
            "stored_position": stored.to_list() if stored else None,
        }

    def finish(self) -> Dict[str, Any]:
        """Kończy sesję i zwraca stan końcowy."""
        self.logger.tick = self.tick
        state = self.snapshot()
        self.logger.log_session_end(state)
        return state

    def save_log(self, filepath: str) -> None:
        self.logger.save(filepath)
