#!/usr/bin/env python3
"""
Hexnav - Entry Point
═══════════════════════════════════════════════════════════════════════════

Wczytuje mapę, klika w wybrane pole i prowadzi bohatera aż do celu.
Pozycja bohatera jest zapamiętywana między uruchomieniami (per sesja).

Użycie:
    python main.py                          # mapa demo, klik w (4, 3)
    python main.py --target 3,4             # konkretne pole
    python main.py --session abc            # inna sesja
    python main.py --map demo --verbose     # statystyki zdarzeń

Wynik:
    - Wypisuje ścieżkę i mapę na konsolę
    - Zapisuje pełny log do output/session_{session}.json
"""

import argparse
import sys

from hexnav.core.config_loader import ConfigLoader
from hexnav.core.vertex import Vertex
from hexnav.events.event_logger import NavEventType
from hexnav.persistence.stores import JsonFileStore
from hexnav.simulation.exploration import ExplorationSession


def main():
    """Główna funkcja."""
    parser = argparse.ArgumentParser(
        description="Hex world-map navigation demo",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--data", default="data/", help="Folder z plikami YAML")
    parser.add_argument("--map", default="demo", help="ID mapy (domyślnie: demo)")
    parser.add_argument("--session", default="local", help="ID sesji (domyślnie: local)")
    parser.add_argument(
        "--target",
        type=Vertex.parse,
        default=Vertex(4, 3),
        help="Kliknięte pole w formacie x,y (domyślnie: 4,3)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Szczegółowy output")
    parser.add_argument("--no-save", action="store_true", help="Nie zapisuj logu do pliku")

    args = parser.parse_args()

    print("=" * 60)
    print("HEXNAV - EXPLORATION")
    print("=" * 60)

    loader = ConfigLoader(args.data)
    config = loader.load_config(args.map)

    session = ExplorationSession(
        args.session,
        config=config,
        store=JsonFileStore(config.storage_path),
        visit_handler=lambda action: print(f"🏁 Visit: {action}"),
    )
    session.load_tiles(loader.load_map(args.map))

    start = session.hero.current_vertex
    print(f"Sesja: {args.session}")
    print(f"Bohater: {start}")
    print(f"Cel:     {args.target}")
    print()

    path = session.click_vertex(args.target)
    if not path:
        print("Brak ścieżki - bohater zostaje na miejscu.")
    else:
        print("Ścieżka: " + " -> ".join(str(v) for v in path))
        print()
        print(session.world_map.debug_print(path))
        print()

        ticks = session.run_until_idle()
        print(f"Dotarł do {session.hero.current_vertex} po {ticks} tickach "
              f"({ticks / config.ticks_per_second:.2f}s), "
              f"zwrócony: {session.hero.facing.name.lower()}")

    session.finish()

    if not args.no_save:
        output_path = f"output/session_{args.session}.json"
        session.save_log(output_path)
        print()
        print(f"📄 Log zapisany: {output_path}")

    if args.verbose:
        print()
        print("-" * 60)
        print("STATYSTYKI ZDARZEŃ")
        print("-" * 60)
        for event_type in NavEventType:
            count = len(session.logger.get_events_by_type(event_type))
            if count > 0:
                print(f"  {event_type.name}: {count}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
