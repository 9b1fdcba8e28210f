"""
hexnav - nawigacja po heksagonalnej mapie świata (tryb eksploracji).

Przepływ danych:
    kliknięcie -> WorldMap (pole docelowe) -> Dijkstra (ścieżka)
    -> WorldMap (punkty świata, zapis pozycji) -> WorldCharacter
    (ruch co tick, jednorazowy sygnał dotarcia)
"""

__version__ = "1.0.0"
