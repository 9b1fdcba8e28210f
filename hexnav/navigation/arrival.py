"""
Jednorazowy sygnał dotarcia do celu (ArrivalSignal).

Każde wywołanie move_on_path() tworzy NOWY sygnał. Sygnał może
skończyć się na dwa sposoby:

    fire()    - kolejka ruchu opróżniła się, callbacki wywołane RAZ
    cancel()  - ścieżka została zastąpiona nową, callbacki NIGDY
                nie zostaną wywołane

Po zakończeniu sygnał nie zmienia już stanu - kolejne fire()/cancel()
są ignorowane. To gwarantuje semantykę "co najwyżej raz".
"""

from __future__ import annotations
from typing import Any, Callable, List, Optional


ArrivalCallback = Callable[[], None]


class ArrivalSignal:
    """
    Jednorazowe powiadomienie o dotarciu do celu.

    Attributes:
        payload (Optional[Any]): Dane przekazane przez wywołującego
            (np. akcja on_visit klikniętego pola)

    Example:
        >>> signal = ArrivalSignal(lambda: print("arrived"))
        >>> signal.fire()
        arrived
        True
        >>> signal.fire()
        False
    """

    def __init__(
        self,
        callback: Optional[ArrivalCallback] = None,
        payload: Optional[Any] = None,
    ):
        self.payload = payload
        self._callbacks: List[ArrivalCallback] = [callback] if callback else []
        self._fired = False
        self._cancelled = False

    def add_callback(self, callback: ArrivalCallback) -> None:
        """
        Dodaje callback. Jeśli sygnał już odpalił, callback
        wywoływany jest natychmiast.
        """
        if self._fired:
            callback()
        elif not self._cancelled:
            self._callbacks.append(callback)

    def fire(self) -> bool:
        """
        Odpala sygnał.

        Returns:
            bool: True jeśli callbacki zostały wywołane teraz
        """
        if self._fired or self._cancelled:
            return False
        self._fired = True
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()
        return True

    def cancel(self) -> bool:
        """
        Porzuca sygnał bez wywoływania callbacków.

        Returns:
            bool: True jeśli sygnał był jeszcze aktywny
        """
        if self._fired or self._cancelled:
            return False
        self._cancelled = True
        self._callbacks = []
        return True

    def done(self) -> bool:
        """Czy sygnał odpalił."""
        return self._fired

    def cancelled(self) -> bool:
        """Czy sygnał został porzucony."""
        return self._cancelled

    def pending(self) -> bool:
        """Czy sygnał wciąż czeka na dotarcie."""
        return not (self._fired or self._cancelled)

    def __repr__(self) -> str:
        state = "fired" if self._fired else "cancelled" if self._cancelled else "pending"
        return f"ArrivalSignal({state}, payload={self.payload!r})"
