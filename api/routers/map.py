"""
Map router - pola mapy świata i wpisy renderowania.
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from typing import Any, Dict, List, Optional

from hexnav.core.errors import UnknownEnumValueError
from api import session_state


router = APIRouter()


# ═══════════════════════════════════════════════════════════════════════════
# REQUEST/RESPONSE MODELS
# ═══════════════════════════════════════════════════════════════════════════

class LayerModel(BaseModel):
    """Warstwa wizualna pola."""
    sprite: str
    z_index: Optional[int] = None
    offset: Optional[List[float]] = None
    scale: Optional[List[float]] = None
    color: Optional[str] = None


class OccupantModel(BaseModel):
    """NPC stojący na polu."""
    appearance: str
    facing: str = "right"


class TileModel(BaseModel):
    """Opis pola (tile descriptor)."""
    position: List[int]  # [x, y]
    type: str = "walkable"
    layers: List[LayerModel] = []
    on_visit: Optional[Dict[str, Any]] = None
    occupant: Optional[OccupantModel] = None


class UpdateMapRequest(BaseModel):
    """Batch ingestion - podmienia cały rejestr pól."""
    tiles: List[TileModel]


class NewSessionRequest(BaseModel):
    session_id: str
    map_id: str = session_state.DEFAULT_MAP_ID


# ═══════════════════════════════════════════════════════════════════════════
# ENDPOINTS
# ═══════════════════════════════════════════════════════════════════════════

@router.get("/maps")
async def get_maps() -> List[str]:
    """Lista dostępnych map z data/maps."""
    return session_state.get_loader().get_map_ids()


@router.post("/session")
async def create_session(request: NewSessionRequest) -> Dict[str, Any]:
    """
    Rozpoczyna nową sesję eksploracji.

    Returns:
        Stan sesji (bohater na zapisanej pozycji jeśli sesja jest znana)
    """
    try:
        session = session_state.new_session(request.session_id, request.map_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return session.snapshot()


@router.get("/map")
async def get_map() -> Dict[str, Any]:
    """Zwraca wszystkie pola aktywnej sesji."""
    session = session_state.get_session()
    return {"tiles": [tile.to_dict() for tile in session.world_map.tiles]}


@router.put("/map")
async def update_map(request: UpdateMapRequest) -> Dict[str, Any]:
    """
    Podmienia pola mapy.

    Args:
        request.tiles: Nowy komplet pól

    Returns:
        Dict z liczbą pól i pól WALKABLE
    """
    session = session_state.get_session()
    # exclude_none: brak z_index w warstwie = indeks w stosie
    descriptors = [tile.model_dump(exclude_none=True) for tile in request.tiles]

    try:
        session.load_tiles(descriptors)
    except (UnknownEnumValueError, ValueError) as e:
        raise HTTPException(status_code=422, detail=str(e))

    return {
        "tile_count": len(session.world_map.tiles),
        "walkable_count": len(session.world_map.vertices()),
    }


@router.get("/render")
async def get_render() -> List[Dict[str, Any]]:
    """
    Wpisy renderowania: teren i postacie z kolejnością rysowania.
    """
    session = session_state.get_session()
    result = [
        {
            "kind": "tile",
            "position": tile_id.position.to_list(),
            "z_index": tile_id.z_index,
            "order": order,
            "layer": layer.to_dict(),
        }
        for tile_id, layer, order in session.world_map.render_entries()
    ]
    for character in session.characters.all_characters():
        result.append({
            "kind": "character",
            "id": character.actor_id,
            "position": character.current_vertex.to_list(),
            "z_index": character.z_index,
            "order": character.sort_order,
            "facing": character.facing.name.lower(),
        })
    return result
