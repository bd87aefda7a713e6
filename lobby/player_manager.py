"""
Player management for lobbies.

Handles roster operations: adding, removing and re-readying players.
Callers hold the lobby's lock.
"""

import logging
from typing import Optional, Tuple
from datetime import datetime, timezone
from .models import PlayerData, LobbyData
from utils.constants import ERROR_MESSAGES
from utils.helpers import get_random_available_name

logger = logging.getLogger(__name__)

class PlayerManager:
    """Manages player operations within lobbies."""

    def add_player(self, lobby_data: LobbyData, session_id: str,
                   name: str) -> Tuple[bool, str, Optional[PlayerData]]:
        """
        Add a player to a lobby.

        Names are taken as given; duplicates are allowed. A session already
        on the roster keeps its position. While a round is in progress its
        record is kept and only renamed; otherwise it is replaced.

        Args:
            lobby_data: The lobby to add player to
            session_id: Player's session ID
            name: Player's display name

        Returns:
            tuple: (success, message, player_data)
        """
        existing = lobby_data.get_player(session_id)
        if existing and lobby_data.game_started:
            existing.name = name
            logger.info(f"Player {name} rejoined lobby {lobby_data.code} mid-round")
            return True, "Player rejoined", existing

        if not existing and lobby_data.is_full:
            return False, ERROR_MESSAGES['LOBBY_FULL'], None

        player_data = PlayerData(
            session_id=session_id,
            name=name,
            joined_at=datetime.now(timezone.utc)
        )

        lobby_data.players[session_id] = player_data
        lobby_data.next_round_players.pop(session_id, None)

        logger.info(f"Player {name} added to lobby {lobby_data.code}")
        return True, "Player added successfully", player_data

    def remove_player(self, lobby_data: LobbyData,
                      session_id: str) -> Tuple[bool, str, Optional[PlayerData]]:
        """
        Remove a player from both the roster and the pending-replay roster.

        Returns:
            tuple: (success, message, removed_player)
        """
        player = lobby_data.players.pop(session_id, None)
        pending_name = lobby_data.next_round_players.pop(session_id, None)

        if player is None and pending_name is None:
            return False, "Player not found in lobby", None

        logger.info(f"Player {player.name if player else pending_name} removed from lobby {lobby_data.code}")
        return True, "Player removed", player

    def ready_for_replay(self, lobby_data: LobbyData,
                         session_id: str) -> Tuple[bool, str, Optional[PlayerData]]:
        """
        Put a player back on the roster with a fresh record.

        Existing roster members are reset in place. Otherwise the player is
        inserted under their remembered name, or a generated one.

        Returns:
            tuple: (success, message, player_data)
        """
        existing = lobby_data.get_player(session_id)
        if existing:
            existing.reset()
            lobby_data.next_round_players.pop(session_id, None)
            return True, "Player reset", existing

        name = lobby_data.next_round_players.get(session_id)
        if not name:
            name = get_random_available_name(lobby_data.player_names())
            logger.debug(f"Generated name {name} for {session_id} in lobby {lobby_data.code}")

        return self.add_player(lobby_data, session_id, name)
