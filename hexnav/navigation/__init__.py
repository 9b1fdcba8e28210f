"""
Navigation module - ruch postaci po mapie świata.

Zawiera:
- WorldCharacter: Wykonawca ruchu po liście punktów (IDLE/MOVING)
- ArrivalSignal: Jednorazowy sygnał dotarcia
- WorldCharacterService: Bohater + NPC, tick wszystkich postaci
"""

from .arrival import ArrivalSignal
from .character import WorldCharacter, CharacterState, CHARACTER_Z_INDEX
from .character_service import WorldCharacterService, HERO_ID

__all__ = [
    "ArrivalSignal", "WorldCharacter", "CharacterState", "CHARACTER_Z_INDEX",
    "WorldCharacterService", "HERO_ID",
]
