"""
Backendy klucz-wartość dla persystencji (odpowiednik "player prefs").

- InMemoryStore: słownik w pamięci (testy, API bez dysku)
- JsonFileStore: jeden obiekt JSON {klucz: string} w pliku

Zapis do pliku jest atomowy: najpierw plik tymczasowy w tym samym
katalogu, potem os.replace().
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional
import json
import os
import tempfile


class KeyValueStore(ABC):
    """Minimalny interfejs magazynu stringów."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Zwraca wartość albo None."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Zapisuje (nadpisuje) wartość."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Usuwa klucz (brak klucza nie jest błędem)."""


class InMemoryStore(KeyValueStore):
    """Magazyn w pamięci procesu."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore(KeyValueStore):
    """
    Magazyn w pliku JSON.

    Plik jest czytany przy każdym get() - dzięki temu kilka instancji
    (np. kolejne uruchomienia CLI) widzi ten sam stan.

    Attributes:
        path (Path): Ścieżka do pliku
    """

    def __init__(self, path: str):
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        with open(self.path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object in {self.path}")
        return data

    def _write(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def get(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        return None if value is None else str(value)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def delete(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)
