"""
Hero router - kliknięcia, ticki i stan bohatera.
"""

from fastapi import APIRouter
from pydantic import BaseModel
from typing import Any, Dict, List

from hexnav.world.layout import WorldPoint
from api import session_state


router = APIRouter()


class ClickRequest(BaseModel):
    """Kliknięcie w punkcie świata."""
    x: float
    y: float


class TickRequest(BaseModel):
    """Ile ticków wykonać (0 = do zatrzymania bohatera)."""
    ticks: int = 1


@router.post("/click")
async def click(request: ClickRequest) -> Dict[str, Any]:
    """
    Rozwiązuje kliknięcie na ścieżkę i zleca ruch bohaterowi.

    Returns:
        Dict z ścieżką (pusta = brak ruchu) i punktami ruchu
    """
    session = session_state.get_session()
    path = session.click(WorldPoint(request.x, request.y))
    return {
        "path": [v.to_list() for v in path],
        "waypoints": [p.to_list() for p in session.hero.waypoints],
        "moving": session.hero.is_moving,
    }


@router.post("/tick")
async def tick(request: TickRequest) -> Dict[str, Any]:
    """Przesuwa pętlę o podaną liczbę ticków."""
    session = session_state.get_session()
    if request.ticks <= 0:
        executed = session.run_until_idle()
    else:
        for _ in range(request.ticks):
            session.step()
        executed = request.ticks
    return {"executed": executed, "hero": session.hero.to_dict(), "visits": session.visits}


@router.get("/hero")
async def get_hero() -> Dict[str, Any]:
    """Stan bohatera i zapisana pozycja."""
    return session_state.get_session().snapshot()


@router.get("/events")
async def get_events() -> List[Dict[str, Any]]:
    """Log zdarzeń aktywnej sesji."""
    return [e.to_dict() for e in session_state.get_session().logger.events]
