"""
Testy dla persystencji pozycji bohatera.

Testuje:
- Format rekordu "{session}/{x}/{y}/{z}"
- Odczyt dla własnej / obcej sesji
- Uszkodzony rekord
- Backend JsonFileStore (zapis między instancjami)
"""

import json
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from hexnav.core.vertex import Vertex
from hexnav.events.event_logger import EventLogger, NavEventType
from hexnav.persistence.position_storage import (
    PositionStorage,
    encode_position,
    decode_position,
    DEFAULT_POSITION_KEY,
)
from hexnav.persistence.stores import InMemoryStore, JsonFileStore


@pytest.fixture
def store():
    return InMemoryStore()


# ═══════════════════════════════════════════════════════════════════════════
# TEST: FORMAT REKORDU
# ═══════════════════════════════════════════════════════════════════════════

def test_encode_position():
    assert encode_position("abc", Vertex(3, 4)) == "abc/3/4/0"
    assert encode_position("abc", Vertex(-1, 2, 5)) == "abc/-1/2/5"


def test_decode_position_allows_slash_in_session():
    assert decode_position("team/abc/3/4/0") == ("team/abc", Vertex(3, 4, 0))


@pytest.mark.parametrize("record", ["abc/3/4", "garbage", "abc/x/4/0"])
def test_decode_malformed_record_raises(record):
    with pytest.raises(ValueError):
        decode_position(record)


# ═══════════════════════════════════════════════════════════════════════════
# TEST: POSITION STORAGE
# ═══════════════════════════════════════════════════════════════════════════

def test_store_and_read_same_session(store):
    storage = PositionStorage(store, "abc")
    storage.store_position(Vertex(3, 4, 0))

    assert store.get(DEFAULT_POSITION_KEY) == "abc/3/4/0"
    assert storage.get_position("abc") == Vertex(3, 4, 0)
    assert storage.get_position() == Vertex(3, 4, 0)


def test_other_session_reads_nothing(store):
    PositionStorage(store, "abc").store_position(Vertex(3, 4))

    assert PositionStorage(store, "xyz").get_position() is None
    assert PositionStorage(store, "abc").get_position("xyz") is None


def test_missing_record_reads_nothing(store):
    assert PositionStorage(store, "abc").get_position() is None


def test_store_overwrites_previous(store):
    storage = PositionStorage(store, "abc")
    storage.store_position(Vertex(1, 1))
    storage.store_position(Vertex(2, 0))

    assert storage.get_position() == Vertex(2, 0)


def test_corrupted_record_raises(store):
    store.set(DEFAULT_POSITION_KEY, "not-a-position")

    with pytest.raises(ValueError):
        PositionStorage(store, "abc").get_position()


def test_empty_session_id_rejected(store):
    with pytest.raises(ValueError):
        PositionStorage(store, "")


def test_clear_removes_record(store):
    storage = PositionStorage(store, "abc")
    storage.store_position(Vertex(1, 1))
    storage.clear()

    assert storage.get_position() is None


def test_store_position_is_logged(store):
    logger = EventLogger(session_id="abc")
    PositionStorage(store, "abc", logger=logger).store_position(Vertex(3, 4))

    events = logger.get_events_by_type(NavEventType.POSITION_STORED)
    assert events[0].data == {"session_id": "abc", "position": [3, 4, 0]}


# ═══════════════════════════════════════════════════════════════════════════
# TEST: JSON FILE STORE
# ═══════════════════════════════════════════════════════════════════════════

def test_json_store_persists_between_instances(tmp_path):
    path = tmp_path / "state" / "positions.json"
    PositionStorage(JsonFileStore(str(path)), "abc").store_position(Vertex(3, 4))

    assert json.loads(path.read_text(encoding="utf-8")) == {DEFAULT_POSITION_KEY: "abc/3/4/0"}
    assert PositionStorage(JsonFileStore(str(path)), "abc").get_position() == Vertex(3, 4)


def test_json_store_missing_file_is_empty(tmp_path):
    store = JsonFileStore(str(tmp_path / "missing.json"))

    assert store.get("anything") is None
    store.delete("anything")
    assert not (tmp_path / "missing.json").exists()


def test_json_store_keeps_other_keys(tmp_path):
    store = JsonFileStore(str(tmp_path / "prefs.json"))
    store.set("Volume", "0.5")
    store.set(DEFAULT_POSITION_KEY, "abc/0/0/0")
    store.delete(DEFAULT_POSITION_KEY)

    assert store.get("Volume") == "0.5"
    assert store.get(DEFAULT_POSITION_KEY) is None
