"""
Main lobby management system.

Owns the in-memory lobby registry and the session -> lobby code binding,
and handles lobby creation, joining and teardown.
"""

import logging
import threading
from typing import Optional, List, Dict, Tuple
from .models import LobbyData, PlayerData, LobbyListItem
from .player_manager import PlayerManager
from utils.constants import GAME_CONFIG, ERROR_MESSAGES
from utils.helpers import generate_lobby_code, coerce_board_size

logger = logging.getLogger(__name__)

class LobbyManager:
    """Main lobby management coordinator."""

    def __init__(self, max_players: int = GAME_CONFIG['MAX_PLAYERS'],
                 default_board_size: int = GAME_CONFIG['DEFAULT_BOARD_SIZE'],
                 code_max_attempts: int = GAME_CONFIG['LOBBY_CODE_MAX_ATTEMPTS']):
        self.player_manager = PlayerManager()
        self.max_players = max_players
        self.default_board_size = default_board_size
        self.code_max_attempts = max(1, code_max_attempts)
        self.active_lobbies: Dict[str, LobbyData] = {}
        self.session_lobby_map: Dict[str, str] = {}  # session_id -> lobby_code
        self._lock = threading.RLock()

    def create_lobby(self, board_size=None) -> Tuple[bool, str, Optional[LobbyData]]:
        """
        Create a new, empty lobby.

        Args:
            board_size: Highest number in the pool; falls back to the default
                when missing or not an integer >= 1

        Returns:
            tuple: (success, message, lobby_data)
        """
        size = coerce_board_size(board_size, self.default_board_size)

        with self._lock:
            lobby_code = self._generate_unused_code()
            if lobby_code in self.active_lobbies:
                logger.warning(f"Lobby code {lobby_code} collided {self.code_max_attempts} times, replacing existing lobby")
                self._drop_bindings(lobby_code)

            lobby_data = LobbyData(
                code=lobby_code,
                board_size=size,
                max_players=self.max_players
            )
            self.active_lobbies[lobby_code] = lobby_data

        logger.info(f"Created lobby: {lobby_code} (board size {size})")
        return True, "Lobby created successfully", lobby_data

    def get_lobby(self, lobby_code: Optional[str]) -> Optional[LobbyData]:
        """Get lobby data by code."""
        if not lobby_code:
            return None
        with self._lock:
            return self.active_lobbies.get(lobby_code)

    def get_player_lobby(self, session_id: str) -> Optional[str]:
        """Get the lobby code bound to a session."""
        with self._lock:
            return self.session_lobby_map.get(session_id)

    def resolve_lobby(self, session_id: str) -> Optional[LobbyData]:
        """
        Get the lobby bound to a session.

        A binding to a lobby that no longer exists is dropped.

        Returns:
            Lobby data or None if the session has no (live) lobby
        """
        with self._lock:
            lobby_code = self.session_lobby_map.get(session_id)
            if not lobby_code:
                return None
            lobby_data = self.active_lobbies.get(lobby_code)
            if lobby_data is None:
                logger.debug(f"Dropping stale binding {session_id} -> {lobby_code}")
                del self.session_lobby_map[session_id]
            return lobby_data

    def bind_session(self, session_id: str, lobby_code: str):
        with self._lock:
            self.session_lobby_map[session_id] = lobby_code

    def unbind_session(self, session_id: str) -> Optional[str]:
        with self._lock:
            return self.session_lobby_map.pop(session_id, None)

    def join_lobby(self, session_id: str, lobby_code: Optional[str],
                   name: Optional[str]) -> Tuple[bool, str, Optional[LobbyData]]:
        """
        Add a player to a lobby and bind their session to it.

        Args:
            session_id: Player's session ID
            lobby_code: Code of the lobby to join
            name: Player's display name

        Returns:
            tuple: (success, message, lobby_data)
        """
        lobby_data = self.get_lobby(str(lobby_code).strip().upper()) if lobby_code else None
        if not lobby_data:
            return False, ERROR_MESSAGES['LOBBY_NOT_FOUND'], None

        with lobby_data.lock:
            success, message, player_data = self.player_manager.add_player(
                lobby_data, session_id, '' if name is None else str(name)
            )
            if not success:
                logger.info(f"Join rejected for lobby {lobby_data.code}: {message}")
                return False, message, lobby_data

            self.bind_session(session_id, lobby_data.code)

        logger.info(f"Player {player_data.name} joined lobby {lobby_data.code}")
        return True, message, lobby_data

    def remove_player(self, lobby_data: LobbyData, session_id: str,
                      unbind: bool = True) -> Optional[PlayerData]:
        """
        Remove a player from a lobby the caller has locked.

        Args:
            unbind: Also drop the session binding (False when the session
                has already been bound to another lobby)
        """
        if unbind:
            self.unbind_session(session_id)
        _, _, player = self.player_manager.remove_player(lobby_data, session_id)
        return player

    def destroy_if_empty(self, lobby_code: str) -> bool:
        """
        Drop a lobby with no players and nobody waiting to rejoin.

        Returns:
            True if the lobby was removed
        """
        with self._lock:
            lobby_data = self.active_lobbies.get(lobby_code)
            if lobby_data is None or not lobby_data.is_empty:
                return False
            del self.active_lobbies[lobby_code]
            self._drop_bindings(lobby_code)

        logger.info(f"Cleaned up lobby {lobby_code}")
        return True

    def get_active_lobbies(self) -> List[LobbyListItem]:
        """
        Get list of all active lobbies.

        Returns:
            List of lobby info
        """
        with self._lock:
            lobbies = list(self.active_lobbies.values())

        return [
            LobbyListItem(
                code=lobby_data.code,
                player_count=lobby_data.player_count,
                max_players=lobby_data.max_players,
                board_size=lobby_data.board_size,
                is_full=lobby_data.is_full,
                game_started=lobby_data.game_started,
                created_at=lobby_data.created_at
            )
            for lobby_data in lobbies
        ]

    def _generate_unused_code(self) -> str:
        """Draw codes until one is free; the last draw is returned regardless."""
        code = generate_lobby_code()
        attempts = 1
        while code in self.active_lobbies and attempts < self.code_max_attempts:
            logger.debug(f"Lobby code {code} already in use, retrying")
            code = generate_lobby_code()
            attempts += 1
        return code

    def _drop_bindings(self, lobby_code: str):
        sessions_to_remove = [
            session_id for session_id, mapped_code in self.session_lobby_map.items()
            if mapped_code == lobby_code
        ]
        for session_id in sessions_to_remove:
            del self.session_lobby_map[session_id]
