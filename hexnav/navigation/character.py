"""
Postać na mapie świata - wykonawca ruchu po liście punktów.

STANY:
═══════════════════════════════════════════════════════════════════

    IDLE (Bezczynność)
    ─────────────────────────────────────────────────────────────
    Kolejka punktów jest pusta. Stan początkowy.

    Wyjście:
        -> MOVING (move_on_path z niepustą listą)

    MOVING (Ruch)
    ─────────────────────────────────────────────────────────────
    Postać co tick przesuwa się w stronę pierwszego punktu kolejki
    o move_speed * delta_time (bez przeskakiwania celu).

    Wyjście:
        -> IDLE (ostatni punkt osiągnięty - sygnał dotarcia odpala RAZ)
        -> MOVING (nowe move_on_path - stara kolejka i sygnał porzucone)

DIAGRAM:
═══════════════════════════════════════════════════════════════════

            move_on_path([...])
    IDLE ─────────────────────────► MOVING ──┐
     ▲                                 │     │ move_on_path([...])
     │     kolejka pusta, fire()       │     │ (zastępuje, cancel())
     └─────────────────────────────────┘ ◄───┘

Kierunek zwrotu:
    Liczony z wektora (punkt docelowy - aktualna pozycja), patrz
    core.direction.facing_for_vector.

Sort order:
    Co tick: pole pod postacią -> sort_order(pole, character_z_index),
    dokładnie ten sam wzór co dla warstw terenu.

Wątki:
    Brak blokad - cały stan należy do postaci i jest modyfikowany
    wyłącznie z jednego wątku (pętla ticków).
"""

from __future__ import annotations
from collections import deque
from enum import Enum, auto
from typing import Any, Deque, List, Optional, Sequence

from ..core.direction import Direction, facing_for_vector
from ..core.errors import check_argument
from ..events.event_logger import EventLogger, NavEventType
from ..world.layout import HexLayout, WorldPoint
from ..world.tile import ROW_SORT_MULTIPLIER, sort_order
from ..core.vertex import Vertex
from .arrival import ArrivalCallback, ArrivalSignal


DEFAULT_MOVE_SPEED = 3.0
DEFAULT_ARRIVAL_EPSILON = 0.001
DEFAULT_ANIMATION_SPEED = 0.5
CHARACTER_Z_INDEX = 10


class CharacterState(Enum):
    """Stan wykonawcy ruchu."""

    IDLE = auto()    # Pusta kolejka
    MOVING = auto()  # W drodze do kolejnego punktu

    def __str__(self) -> str:
        return self.name


class WorldCharacter:
    """
    Postać poruszająca się po mapie świata.

    Attributes:
        actor_id (str): Identyfikator (np. "hero")
        layout (HexLayout): Geometria siatki (do wyznaczania pola)
        position (WorldPoint): Aktualna ciągła pozycja
        facing (Direction): Kierunek zwrotu
        speed (float): Aktualna prędkość (0 gdy IDLE)
        animation_speed (float): Prędkość animacji chodu w trakcie ruchu
        appearance (Optional[str]): Wygląd (dla renderera)

    Example:
        >>> hero = WorldCharacter("hero", HexLayout())
        >>> signal = hero.move_on_path([WorldPoint(1, 0)], on_arrive=lambda: print("!"))
        >>> hero.update(1.0)
        !
        >>> signal.done()
        True
    """

    def __init__(
        self,
        actor_id: str,
        layout: HexLayout,
        position: Optional[WorldPoint] = None,
        move_speed: float = DEFAULT_MOVE_SPEED,
        arrival_epsilon: float = DEFAULT_ARRIVAL_EPSILON,
        animation_speed: float = DEFAULT_ANIMATION_SPEED,
        z_index: int = CHARACTER_Z_INDEX,
        row_multiplier: int = ROW_SORT_MULTIPLIER,
        logger: Optional[EventLogger] = None,
    ):
        check_argument(move_speed > 0, f"move_speed must be > 0, got {move_speed}")
        check_argument(
            0 <= z_index < row_multiplier,
            f"z_index {z_index} outside [0, {row_multiplier})",
        )
        self.actor_id = actor_id
        self.layout = layout
        self.position = position or WorldPoint(0.0, 0.0)
        self.facing = Direction.RIGHT
        self.speed = 0.0
        self.appearance: Optional[str] = None
        self.move_speed = move_speed
        self.arrival_epsilon = arrival_epsilon
        self.animation_speed = animation_speed
        self.z_index = z_index
        self.row_multiplier = row_multiplier
        self.logger = logger

        self._targets: Deque[WorldPoint] = deque()
        self._signal: Optional[ArrivalSignal] = None

    # ─────────────────────────────────────────────────────────────────────────
    # STAN
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def state(self) -> CharacterState:
        return CharacterState.MOVING if self._targets else CharacterState.IDLE

    @property
    def is_moving(self) -> bool:
        return bool(self._targets)

    @property
    def waypoints(self) -> List[WorldPoint]:
        """Kopia pozostałych punktów ruchu."""
        return list(self._targets)

    @property
    def pending_signal(self) -> Optional[ArrivalSignal]:
        return self._signal

    @property
    def current_vertex(self) -> Vertex:
        """Pole, na którym aktualnie stoi postać."""
        return self.layout.from_character_position(self.position)

    @property
    def sort_order(self) -> int:
        """Kolejność rysowania postaci - ten sam wzór co dla terenu."""
        return sort_order(self.current_vertex, self.z_index, self.row_multiplier)

    # ─────────────────────────────────────────────────────────────────────────
    # RUCH
    # ─────────────────────────────────────────────────────────────────────────

    def move_on_path(
        self,
        waypoints: Sequence[WorldPoint],
        on_arrive: Optional[ArrivalCallback] = None,
        payload: Optional[Any] = None,
    ) -> ArrivalSignal:
        """
        Zastępuje kolejkę ruchu nową listą punktów.

        Poprzedni, jeszcze nieodpalony sygnał jest porzucany (cancel).
        Pusta lista: postać zatrzymuje się, a nowy sygnał odpala
        natychmiast.

        Args:
            waypoints: Punkty w przestrzeni świata, w kolejności
            on_arrive: Callback wywoływany raz po dotarciu
            payload: Dane doczepione do sygnału

        Returns:
            ArrivalSignal: Sygnał tej konkretnej ścieżki
        """
        signal = ArrivalSignal(on_arrive, payload)
        self._supersede()

        if not waypoints:
            self.speed = 0.0
            signal.fire()
            return signal

        self._targets.extend(waypoints)
        self.speed = self.move_speed
        self._face(self._targets[0])
        self._signal = signal

        if self.logger:
            self.logger.log_move_started(
                self.actor_id, [p.to_list() for p in waypoints]
            )
        return signal

    def update(self, delta_time: float) -> None:
        """
        Jeden tick ruchu.

        Args:
            delta_time: Czas od poprzedniego ticka (sekundy, >= 0)
        """
        check_argument(delta_time >= 0, f"delta_time must be >= 0, got {delta_time}")
        if not self._targets:
            return

        target = self._targets[0]
        self.position = self.position.move_towards(target, self.speed * delta_time)

        if self.position.distance_to(target) < self.arrival_epsilon:
            self._targets.popleft()
            if self.logger:
                self.logger.log_event(
                    NavEventType.WAYPOINT_REACHED,
                    self.actor_id,
                    position=target.to_list(),
                )

            if self._targets:
                self._face(self._targets[0])
            else:
                self._arrive()

    def teleport(self, position: WorldPoint) -> None:
        """Ustawia pozycję bez animacji ruchu (kolejka bez zmian)."""
        self.position = position

    def set_facing(self, direction: Direction) -> None:
        self._set_facing(direction)

    # ─────────────────────────────────────────────────────────────────────────
    # HELPERY
    # ─────────────────────────────────────────────────────────────────────────

    def _supersede(self) -> None:
        """Porzuca bieżącą kolejkę i nieodpalony sygnał."""
        discarded = len(self._targets)
        self._targets.clear()

        if self._signal is not None and self._signal.cancel() and self.logger:
            self.logger.log_event(
                NavEventType.MOVE_SUPERSEDED,
                self.actor_id,
                discarded=discarded,
            )
        self._signal = None

    def _arrive(self) -> None:
        self.speed = 0.0
        signal, self._signal = self._signal, None
        if self.logger:
            self.logger.log_arrived(self.actor_id, self.position.to_list())
        if signal is not None:
            signal.fire()

    def _face(self, target: WorldPoint) -> None:
        self._set_facing(
            facing_for_vector(target.x - self.position.x, target.y - self.position.y)
        )

    def _set_facing(self, direction: Direction) -> None:
        if direction == self.facing:
            return
        if self.logger:
            self.logger.log_facing_changed(self.actor_id, str(self.facing), str(direction))
        self.facing = direction

    def to_dict(self) -> dict:
        """Snapshot postaci (dla API / logów)."""
        return {
            "id": self.actor_id,
            "state": str(self.state),
            "position": self.position.to_list(),
            "vertex": self.current_vertex.to_list(),
            "facing": self.facing.name.lower(),
            "animation_speed": self.animation_speed if self._targets else 0.0,
            "sort_order": self.sort_order,
            "waypoints": [p.to_list() for p in self._targets],
            "appearance": self.appearance,
        }

    def __repr__(self) -> str:
        return f"WorldCharacter({self.actor_id}, {self.state}, pos={self.position})"
