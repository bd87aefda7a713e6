"""
Lobby Module for the number elimination server.

Contains all lobby management logic and components.
Handles lobby creation, player rosters, and session binding.
"""

from .models import LobbyData, PlayerData, LobbyListItem
from .manager import LobbyManager
from .player_manager import PlayerManager

__all__ = [
    # Data models
    'LobbyData',
    'PlayerData',
    'LobbyListItem',
    
    # Managers
    'LobbyManager',
    'PlayerManager'
]
