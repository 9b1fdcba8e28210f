"""
Błędy i asercje nawigacji.

Zasady:
- "Brak ścieżki" NIE jest błędem - to zwykła pusta lista.
- Brak wymaganego współpracownika (mapa, postać, storage) to błąd
  programisty - zgłaszamy go natychmiast (fail fast).
- Wartość enuma spoza zdefiniowanego zbioru też kończy się wyjątkiem.
"""

from __future__ import annotations
from enum import Enum
from typing import Optional, Type, TypeVar

T = TypeVar("T")


class NavigationError(Exception):
    """Bazowy wyjątek pakietu hexnav."""


class MissingCollaboratorError(NavigationError):
    """Wymagany komponent nie został skonfigurowany."""


class UnknownEnumValueError(NavigationError, ValueError):
    """Wartość spoza zbioru enuma."""


def check_not_none(value: Optional[T], message: str = "") -> T:
    """
    Zwraca value lub zgłasza MissingCollaboratorError.

    Example:
        >>> hero = check_not_none(self._hero, "Hero not initialized")
    """
    if value is None:
        raise MissingCollaboratorError(f"Expected a non-null value. {message}".strip())
    return value


def check_argument(expression: bool, message: str) -> None:
    """Zgłasza ValueError dla nieprawidłowego argumentu."""
    if not expression:
        raise ValueError(message)


def unknown_enum_value(enum_type: Type[Enum], value: object) -> UnknownEnumValueError:
    """Tworzy wyjątek dla nieznanej wartości enuma (do `raise`)."""
    return UnknownEnumValueError(f"Unknown '{enum_type.__name__}' value: {value!r}")
