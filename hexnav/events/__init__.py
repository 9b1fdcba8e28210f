"""
Events module - logowanie zdarzeń nawigacji do formatu JSON.

Zawiera:
- NavEvent: Dataclass reprezentująca zdarzenie
- NavEventType: Enum typów zdarzeń
- EventLogger: Klasa logująca zdarzenia
"""

from .event_logger import NavEvent, NavEventType, EventLogger

__all__ = ["NavEvent", "NavEventType", "EventLogger"]
