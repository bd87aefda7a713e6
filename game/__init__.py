"""
Game Module for the number elimination server.

Contains the round state machine: turn rotation, elimination
resolution, placements and replay.
"""

from .models import GameState, OutboundEvent, PlacementEntry
from .turn_manager import TurnManager
from .manager import GameManager

__all__ = [
    # Data models
    'GameState',
    'OutboundEvent',
    'PlacementEntry',

    # Managers
    'GameManager',
    'TurnManager'
]
