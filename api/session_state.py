"""
Stan sesji współdzielony przez routery API.

API obsługuje jedną aktywną sesję eksploracji na proces.
Sesja tworzona jest leniwie przy pierwszym zapytaniu, z mapą
domyślną z data/maps.
"""

from pathlib import Path
from typing import Optional

from hexnav.core.config_loader import ConfigLoader
from hexnav.persistence.stores import InMemoryStore, KeyValueStore
from hexnav.simulation.exploration import ExplorationSession


DATA_PATH = Path(__file__).parent.parent / "data"
DEFAULT_MAP_ID = "demo"
DEFAULT_SESSION_ID = "api"

_loader = ConfigLoader(str(DATA_PATH))
_store: KeyValueStore = InMemoryStore()
_session: Optional[ExplorationSession] = None


def get_loader() -> ConfigLoader:
    return _loader


def get_session() -> ExplorationSession:
    """Zwraca aktywną sesję (tworzy ją przy pierwszym wywołaniu)."""
    global _session
    if _session is None:
        _session = new_session(DEFAULT_SESSION_ID, DEFAULT_MAP_ID)
    return _session


def new_session(session_id: str, map_id: str = DEFAULT_MAP_ID) -> ExplorationSession:
    """
    Tworzy nową sesję i ustawia ją jako aktywną.

    Store jest współdzielony między sesjami - nowa sesja o tym samym
    session_id odzyskuje zapisaną pozycję bohatera.
    """
    global _session
    config = _loader.load_config(map_id)
    session = ExplorationSession(session_id, config=config, store=_store)
    session.load_tiles(_loader.load_map(map_id))
    _session = session
    return session


def reset() -> None:
    """Czyści sesję i store (testy)."""
    global _session, _store
    _session = None
    _store = InMemoryStore()
    _loader.reload()
