"""
Persystencja pozycji bohatera między uruchomieniami.

Pozycja zapisywana jest jako JEDEN string pod stałym kluczem:

    "{session_id}/{x}/{y}/{z}"

    np. "abc/3/4/0"

Zasady:
- store_position() zawsze nadpisuje poprzednią wartość
- get_position() zwraca None gdy:
    * rekordu nie ma
    * rekord należy do INNEJ sesji (dane innej sesji = brak danych,
      a nie błąd)
- rekord, którego nie da się sparsować, to uszkodzone dane -> ValueError

Session id może zawierać "/" - dekodujemy od prawej (rsplit).
"""

from __future__ import annotations
from typing import Optional, Tuple

from ..core.errors import check_argument
from ..core.vertex import Vertex
from ..events.event_logger import EventLogger, NavEventType
from .stores import KeyValueStore

DEFAULT_POSITION_KEY = "WorldPosition"


def encode_position(session_id: str, vertex: Vertex) -> str:
    """Koduje rekord pozycji."""
    return f"{session_id}/{vertex.x}/{vertex.y}/{vertex.z}"


def decode_position(record: str) -> Tuple[str, Vertex]:
    """
    Dekoduje rekord pozycji.

    Returns:
        Tuple[str, Vertex]: (session_id, pozycja)

    Raises:
        ValueError: Jeśli rekord ma zły format
    """
    parts = record.rsplit("/", 3)
    if len(parts) != 4:
        raise ValueError(f"Malformed position record: {record!r}")
    session_id, x, y, z = parts
    return session_id, Vertex(int(x), int(y), int(z))


class PositionStorage:
    """
    Zapis i odczyt ostatniej pozycji bohatera dla sesji.

    Attributes:
        store (KeyValueStore): Backend (pamięć, plik JSON, ...)
        session_id (str): Bieżąca sesja
        key (str): Klucz rekordu w store

    Example:
        >>> storage = PositionStorage(InMemoryStore(), "abc")
        >>> storage.store_position(Vertex(3, 4))
        >>> storage.get_position()
        Vertex(x=3, y=4, z=0)
    """

    def __init__(
        self,
        store: KeyValueStore,
        session_id: str,
        key: str = DEFAULT_POSITION_KEY,
        logger: Optional[EventLogger] = None,
    ):
        check_argument(bool(session_id), "session_id must not be empty")
        self.store = store
        self.session_id = session_id
        self.key = key
        self.logger = logger

    def store_position(self, vertex: Vertex) -> None:
        """Zapisuje pozycję (nadpisuje poprzednią)."""
        self.store.set(self.key, encode_position(self.session_id, vertex))
        if self.logger:
            self.logger.log_event(
                NavEventType.POSITION_STORED,
                session_id=self.session_id,
                position=[vertex.x, vertex.y, vertex.z],
            )

    def get_position(self, session_id: Optional[str] = None) -> Optional[Vertex]:
        """
        Odczytuje pozycję zapisaną dla sesji.

        Args:
            session_id: Sesja do sprawdzenia (domyślnie bieżąca)

        Returns:
            Optional[Vertex]: Pozycja albo None (brak / inna sesja)
        """
        record = self.store.get(self.key)
        if record is None:
            return None

        stored_session, vertex = decode_position(record)
        expected = self.session_id if session_id is None else session_id
        if stored_session != expected:
            return None
        return vertex

    def clear(self) -> None:
        self.store.delete(self.key)
