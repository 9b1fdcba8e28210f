"""
System logowania zdarzeń nawigacji do formatu JSON.

Każde istotne zdarzenie (wczytanie mapy, kliknięcie, start ruchu,
dotarcie do celu, zapis pozycji) jest zapisywane z kontekstem.
Log można później odtworzyć albo przejrzeć przy debugowaniu.

TYPY ZDARZEŃ:
═══════════════════════════════════════════════════════════════════

    SESSION_START / SESSION_END
    ─────────────────────────────────────────────────────────────
    Początek / koniec sesji eksploracji.
    Data: session_id, hero position

    MAP_UPDATED
    ─────────────────────────────────────────────────────────────
    Podmieniono rejestr pól (batch ingestion).
    Data: tile_count, walkable_count, render_entries

    CLICK_RESOLVED
    ─────────────────────────────────────────────────────────────
    Kliknięcie zamienione na ścieżkę.
    Data: point, clicked, tile_type, path

    PATH_NOT_FOUND
    ─────────────────────────────────────────────────────────────
    Kliknięcie nie dało ruchu (pole zablokowane / brak ścieżki).
    Data: point, clicked, reason

    CHARACTER_SPAWN
    ─────────────────────────────────────────────────────────────
    Utworzono postać (bohater albo NPC).
    Data: position, facing

    MOVE_STARTED / MOVE_SUPERSEDED
    ─────────────────────────────────────────────────────────────
    Nowa lista punktów ruchu / poprzednia lista porzucona.
    Data: waypoints / discarded

    WAYPOINT_REACHED / ARRIVED
    ─────────────────────────────────────────────────────────────
    Postać dotarła do punktu / kolejka ruchu jest pusta.
    Data: position

    FACING_CHANGED
    ─────────────────────────────────────────────────────────────
    Data: from, to

    POSITION_STORED
    ─────────────────────────────────────────────────────────────
    Zapisano pozycję bohatera do storage.
    Data: session_id, position

FORMAT LOGU:
═══════════════════════════════════════════════════════════════════

{
    "metadata": {"version": "1.0", "session_id": "abc", ...},
    "initial_state": {...},
    "events": [
        {"tick": 0, "type": "MAP_UPDATED", "data": {...}},
        {"tick": 3, "type": "MOVE_STARTED", "actor_id": "hero", "data": {...}},
        ...
    ],
    "final_state": {...}
}
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from pathlib import Path
from typing import Any, Dict, List, Optional
import json


class NavEventType(Enum):
    """Typ zdarzenia nawigacji."""

    # Sesja
    SESSION_START = auto()
    SESSION_END = auto()

    # Mapa
    MAP_UPDATED = auto()
    CLICK_RESOLVED = auto()
    PATH_NOT_FOUND = auto()

    # Postacie
    CHARACTER_SPAWN = auto()
    MOVE_STARTED = auto()
    MOVE_SUPERSEDED = auto()
    WAYPOINT_REACHED = auto()
    ARRIVED = auto()
    FACING_CHANGED = auto()

    # Persystencja
    POSITION_STORED = auto()


@dataclass
class NavEvent:
    """
    Pojedyncze zdarzenie nawigacji.

    Attributes:
        tick (int): Numer ticka kiedy zdarzenie nastąpiło
        event_type (NavEventType): Typ zdarzenia
        actor_id (Optional[str]): ID postaci (jeśli dotyczy)
        data (Dict): Dodatkowe dane specyficzne dla typu
    """
    tick: int
    event_type: NavEventType
    actor_id: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Serializuje zdarzenie do słownika."""
        result: Dict[str, Any] = {
            "tick": self.tick,
            "type": self.event_type.name,
        }
        if self.actor_id:
            result["actor_id"] = self.actor_id
        if self.data:
            result["data"] = self.data
        return result


class EventLogger:
    """
    Logger zdarzeń nawigacji.

    Numer ticka jest ustawiany przez pętlę sesji (`tick`), więc komponenty
    logują bez znajomości zegara.

    Example:
        >>> logger = EventLogger(session_id="abc")
        >>> logger.log_event(NavEventType.MAP_UPDATED, tile_count=9)
        >>> logger.save("output/session_abc.json")
    """

    def __init__(self, session_id: str = "", ticks_per_second: int = 30):
        self.tick = 0
        self.events: List[NavEvent] = []
        self.metadata: Dict[str, Any] = {
            "version": "1.0",
            "session_id": session_id,
            "ticks_per_second": ticks_per_second,
            "timestamp": datetime.now().isoformat(),
        }
        self.initial_state: Dict[str, Any] = {}
        self.final_state: Dict[str, Any] = {}

    # ─────────────────────────────────────────────────────────────────────────
    # LOGOWANIE OGÓLNE
    # ─────────────────────────────────────────────────────────────────────────

    def log(self, event: NavEvent) -> None:
        """Dodaje zdarzenie do logu."""
        self.events.append(event)

    def log_event(
        self,
        event_type: NavEventType,
        actor_id: Optional[str] = None,
        **data: Any,
    ) -> NavEvent:
        """
        Tworzy i loguje zdarzenie w bieżącym ticku.

        Args:
            event_type: Typ zdarzenia
            actor_id: ID postaci
            **data: Dodatkowe dane

        Returns:
            NavEvent: Utworzone zdarzenie
        """
        event = NavEvent(
            tick=self.tick,
            event_type=event_type,
            actor_id=actor_id,
            data=dict(data),
        )
        self.log(event)
        return event

    # ─────────────────────────────────────────────────────────────────────────
    # POMOCNICZE METODY LOGOWANIA
    # ─────────────────────────────────────────────────────────────────────────

    def log_session_start(self, state: Dict[str, Any]) -> None:
        """Loguje start sesji."""
        self.initial_state = state
        self.log_event(NavEventType.SESSION_START, **state)

    def log_session_end(self, state: Dict[str, Any]) -> None:
        """Loguje koniec sesji."""
        self.final_state = dict(state, total_ticks=self.tick)
        self.log_event(NavEventType.SESSION_END, **state)

    def log_move_started(self, actor_id: str, waypoints: List[List[float]]) -> None:
        self.log_event(NavEventType.MOVE_STARTED, actor_id, waypoints=waypoints)

    def log_arrived(self, actor_id: str, position: List[float]) -> None:
        self.log_event(NavEventType.ARRIVED, actor_id, position=position)

    def log_facing_changed(self, actor_id: str, from_dir: str, to_dir: str) -> None:
        self.log_event(
            NavEventType.FACING_CHANGED,
            actor_id,
            **{"from": from_dir, "to": to_dir},
        )

    # ─────────────────────────────────────────────────────────────────────────
    # SERIALIZACJA
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> Dict[str, Any]:
        """Serializuje cały log do słownika."""
        return {
            "metadata": self.metadata,
            "initial_state": self.initial_state,
            "events": [e.to_dict() for e in self.events],
            "final_state": self.final_state,
        }

    def save(self, filepath: str) -> None:
        """
        Zapisuje log do pliku JSON.

        Args:
            filepath: Ścieżka do pliku
        """
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Zwraca log jako string JSON."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    # ─────────────────────────────────────────────────────────────────────────
    # ZAPYTANIA
    # ─────────────────────────────────────────────────────────────────────────

    def get_event_count(self) -> int:
        """Zwraca liczbę zdarzeń."""
        return len(self.events)

    def get_events_by_type(self, event_type: NavEventType) -> List[NavEvent]:
        """Filtruje zdarzenia po typie."""
        return [e for e in self.events if e.event_type == event_type]

    def get_events_for_actor(self, actor_id: str) -> List[NavEvent]:
        """Filtruje zdarzenia dla postaci."""
        return [e for e in self.events if e.actor_id == actor_id]

    def get_events_in_tick(self, tick: int) -> List[NavEvent]:
        """Filtruje zdarzenia w ticku."""
        return [e for e in self.events if e.tick == tick]
