"""
Persistence module - zapis pozycji bohatera między sesjami.

Zawiera:
- PositionStorage: Zapis/odczyt rekordu "{session}/{x}/{y}/{z}"
- KeyValueStore, InMemoryStore, JsonFileStore: Backendy
"""

from .stores import KeyValueStore, InMemoryStore, JsonFileStore
from .position_storage import (
    PositionStorage,
    encode_position,
    decode_position,
    DEFAULT_POSITION_KEY,
)

__all__ = [
    "KeyValueStore", "InMemoryStore", "JsonFileStore",
    "PositionStorage", "encode_position", "decode_position", "DEFAULT_POSITION_KEY",
]
