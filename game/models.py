"""
Data models for game management.

These represent game-specific data structures that operate within lobbies.
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any
from enum import Enum

class GameState(Enum):
    """Round state of a lobby."""
    FORMING = "forming"
    IN_PROGRESS = "in_progress"

@dataclass(frozen=True)
class OutboundEvent:
    """
    An event the engine wants delivered.

    ``target`` is a lobby code when ``broadcast`` is true, otherwise the
    session ID of a single connection.
    """
    target: str
    name: str
    payload: Any = None
    broadcast: bool = True

    @classmethod
    def to_lobby(cls, code: str, name: str, payload: Any = None) -> 'OutboundEvent':
        return cls(target=code, name=name, payload=payload, broadcast=True)

    @classmethod
    def to_player(cls, session_id: str, name: str, payload: Any = None) -> 'OutboundEvent':
        return cls(target=session_id, name=name, payload=payload, broadcast=False)

@dataclass
class PlacementEntry:
    """One row of the final placement table."""
    name: str
    number: Optional[int]
    placement: Optional[int]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'name': self.name,
            'number': self.number,
            'placement': self.placement
        }
