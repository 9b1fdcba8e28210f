"""
Serwis postaci mapy świata.

Zarządza bohaterem (jednym na sesję) oraz postaciami niezależnymi
(NPC) stojącymi na polach mapy:

- initialize_if_needed(): tworzy bohatera RAZ, na pozycji wczytanej
  z PositionStorage (albo na polu startowym, jeśli brak zapisu)
- move_hero(): przekazuje punkty ruchu bohaterowi
- current_hero_position(): pole, na którym stoi bohater
- create_or_update_character(): NPC z opisu pola (occupant)
- update(dt): tick wszystkich postaci
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional, Sequence

from ..core.config_loader import NavigationConfig
from ..core.errors import check_not_none
from ..core.vertex import Vertex
from ..events.event_logger import EventLogger, NavEventType
from ..persistence.position_storage import PositionStorage
from ..world.layout import HexLayout, WorldPoint
from ..world.tile import Occupant
from .arrival import ArrivalCallback, ArrivalSignal
from .character import WorldCharacter

HERO_ID = "hero"


class WorldCharacterService:
    """
    Właściciel wszystkich postaci na mapie.

    Attributes:
        layout (HexLayout): Geometria siatki
        config (NavigationConfig): Parametry ruchu
        storage (Optional[PositionStorage]): Zapis pozycji bohatera
        characters (Dict[Vertex, WorldCharacter]): NPC po polu
    """

    def __init__(
        self,
        layout: HexLayout,
        config: Optional[NavigationConfig] = None,
        storage: Optional[PositionStorage] = None,
        logger: Optional[EventLogger] = None,
    ):
        self.layout = layout
        self.config = config or NavigationConfig()
        self.storage = storage
        self.logger = logger
        self.characters: Dict[Vertex, WorldCharacter] = {}
        self._hero: Optional[WorldCharacter] = None

    @property
    def hero(self) -> Optional[WorldCharacter]:
        return self._hero

    def _create_character(self, actor_id: str, vertex: Vertex) -> WorldCharacter:
        character = WorldCharacter(
            actor_id,
            self.layout,
            position=self.layout.to_character_position(vertex),
            move_speed=self.config.move_speed,
            arrival_epsilon=self.config.arrival_epsilon,
            animation_speed=self.config.animation_speed,
            z_index=self.config.character_z_index,
            row_multiplier=self.config.row_sort_multiplier,
            logger=self.logger,
        )
        return character

    # ─────────────────────────────────────────────────────────────────────────
    # BOHATER
    # ─────────────────────────────────────────────────────────────────────────

    def initialize_if_needed(self, start: Vertex = Vertex(0, 0)) -> WorldCharacter:
        """
        Tworzy bohatera przy pierwszym wywołaniu.

        Args:
            start: Pole startowe, gdy storage nie ma pozycji tej sesji

        Returns:
            WorldCharacter: Bohater (ten sam obiekt przy kolejnych wywołaniach)
        """
        if self._hero is not None:
            return self._hero

        stored = self.storage.get_position() if self.storage else None
        vertex = stored.flat() if stored is not None else start
        self._hero = self._create_character(HERO_ID, vertex)

        if self.logger:
            self.logger.log_event(
                NavEventType.CHARACTER_SPAWN,
                HERO_ID,
                position=vertex.to_list(),
                restored=stored is not None,
            )
        return self._hero

    def move_hero(
        self,
        waypoints: Sequence[WorldPoint],
        on_arrive: Optional[ArrivalCallback] = None,
        payload: Optional[Any] = None,
    ) -> ArrivalSignal:
        """
        Przekazuje ścieżkę bohaterowi.

        Raises:
            MissingCollaboratorError: Jeśli bohater nie istnieje
        """
        hero = check_not_none(self._hero, "Hero not initialized")
        return hero.move_on_path(waypoints, on_arrive, payload)

    def current_hero_position(self) -> Vertex:
        """
        Pole, na którym stoi bohater.

        Raises:
            MissingCollaboratorError: Jeśli bohater nie istnieje
        """
        return check_not_none(self._hero, "Hero not initialized").current_vertex

    # ─────────────────────────────────────────────────────────────────────────
    # NPC
    # ─────────────────────────────────────────────────────────────────────────

    def create_or_update_character(self, vertex: Vertex, occupant: Occupant) -> WorldCharacter:
        """
        Tworzy NPC na polu albo aktualizuje istniejącego.

        Args:
            vertex: Pole NPC
            occupant: Opis postaci (wygląd, kierunek)
        """
        character = self.characters.get(vertex)
        if character is None:
            character = self._create_character(f"npc_{vertex.x}_{vertex.y}", vertex)
            self.characters[vertex] = character
            if self.logger:
                self.logger.log_event(
                    NavEventType.CHARACTER_SPAWN,
                    character.actor_id,
                    position=vertex.to_list(),
                    facing=occupant.facing.name.lower(),
                )

        character.appearance = occupant.appearance
        character.set_facing(occupant.facing)
        return character

    def sync_occupants(self, occupants: Dict[Vertex, Occupant]) -> None:
        """
        Dopasowuje zbiór NPC do mapy: tworzy/aktualizuje obecnych,
        usuwa tych, których pole nie ma już occupanta.
        """
        for vertex in list(self.characters):
            if vertex not in occupants:
                del self.characters[vertex]
        for vertex, occupant in occupants.items():
            self.create_or_update_character(vertex, occupant)

    # ─────────────────────────────────────────────────────────────────────────
    # TICK
    # ─────────────────────────────────────────────────────────────────────────

    def all_characters(self) -> List[WorldCharacter]:
        result = [self._hero] if self._hero is not None else []
        result.extend(self.characters[v] for v in sorted(self.characters))
        return result

    def update(self, delta_time: float) -> None:
        """Tick wszystkich postaci (bohater pierwszy)."""
        for character in self.all_characters():
            character.update(delta_time)
