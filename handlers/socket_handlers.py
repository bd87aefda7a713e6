"""
Socket.IO Event Handlers for the number elimination server.

Pure routing layer that delegates to the lobby and game managers.
Contains no game rules - only intent routing and event delivery.
"""

import logging
from typing import Iterable
from flask import request
from flask_socketio import emit, join_room, leave_room
from game.models import OutboundEvent
from utils.constants import EVENTS

logger = logging.getLogger(__name__)

def dispatch_events(socketio, outbound: Iterable[OutboundEvent]):
    """
    Deliver engine events in order.

    Broadcasts go to the lobby room, unicasts to the session's own room.
    """
    for event in outbound:
        socketio.emit(event.name, event.payload, to=event.target)

def register_socket_handlers(socketio, lobby_manager, game_manager):
    """
    Register all Socket.IO event handlers.

    Args:
        socketio: SocketIO instance
        lobby_manager: Lobby management instance
        game_manager: Game management instance
    """

    def _fail(message):
        emit(EVENTS['ERROR'], message)

    @socketio.on('connect')
    def handle_connect(auth=None):
        """Handle client connection."""
        logger.info(f"Client connected: {request.sid}")

    @socketio.on('disconnect')
    def handle_disconnect(reason=None):
        """Handle client disconnection."""
        logger.info(f"Client disconnected: {request.sid}")

        try:
            dispatch_events(socketio, game_manager.disconnect_player(request.sid))
        except Exception as e:
            logger.error(f"Error handling disconnect: {e}")

    @socketio.on('createLobby')
    def handle_create_lobby(data=None):
        """Handle lobby creation request."""
        try:
            board_size = data.get('boardSize') if isinstance(data, dict) else None

            success, message, lobby = lobby_manager.create_lobby(board_size)

            if success and lobby:
                logger.info(f"Lobby created with code: {lobby.code} for socket: {request.sid}")
                emit(EVENTS['LOBBY_CREATED'], lobby.code)
            else:
                _fail(message)

        except Exception as e:
            logger.error(f"Error creating lobby: {e}")
            _fail('Failed to create lobby')

    @socketio.on('joinLobby')
    def handle_join_lobby(data=None):
        """Handle player joining a lobby."""
        try:
            data = data if isinstance(data, dict) else {}
            player_sid = request.sid
            previous_code = lobby_manager.get_player_lobby(player_sid)

            outbound = game_manager.join_lobby(
                player_sid, data.get('code'), data.get('playerName')
            )

            # Switch rooms before any roster broadcast goes out
            lobby_code = lobby_manager.get_player_lobby(player_sid)
            if lobby_code:
                if previous_code and previous_code != lobby_code:
                    leave_room(previous_code)
                join_room(lobby_code)

            dispatch_events(socketio, outbound)

        except Exception as e:
            logger.error(f"Error joining lobby: {e}")
            _fail('Failed to join lobby')

    @socketio.on('selectNumber')
    def handle_select_number(data=None):
        """Handle a player picking their secret number."""
        try:
            dispatch_events(socketio, game_manager.select_number(request.sid, data))
        except Exception as e:
            logger.error(f"Error selecting number: {e}")
            _fail('Failed to select number')

    @socketio.on('eliminateNumber')
    def handle_eliminate_number(data=None):
        """Handle the turn holder eliminating a number."""
        try:
            dispatch_events(socketio, game_manager.eliminate_number(request.sid, data))
        except Exception as e:
            logger.error(f"Error eliminating number: {e}")
            _fail('Failed to eliminate number')

    @socketio.on('startGame')
    def handle_start_game(data=None):
        """Handle game start request."""
        try:
            dispatch_events(socketio, game_manager.start_game(request.sid))
        except Exception as e:
            logger.error(f"Error starting game: {e}")
            _fail('Failed to start game')

    @socketio.on('replayGame')
    def handle_replay_game(data=None):
        """Handle a request to replay with the same roster."""
        try:
            dispatch_events(socketio, game_manager.replay_game(request.sid))
        except Exception as e:
            logger.error(f"Error replaying game: {e}")
            _fail('Failed to replay game')

    @socketio.on('playerReadyForReplay')
    def handle_player_ready_for_replay(data=None):
        """Handle a player rejoining the roster between rounds."""
        try:
            dispatch_events(socketio, game_manager.player_ready_for_replay(request.sid))
        except Exception as e:
            logger.error(f"Error readying player for replay: {e}")
            _fail('Failed to rejoin for replay')

    @socketio.on('leaveLobby')
    def handle_leave_lobby(data=None):
        """Handle player leaving a lobby."""
        try:
            player_sid = request.sid
            lobby_code = lobby_manager.get_player_lobby(player_sid)

            outbound = game_manager.leave_lobby(player_sid)

            if lobby_code:
                leave_room(lobby_code)

            dispatch_events(socketio, outbound)

        except Exception as e:
            logger.error(f"Error leaving lobby: {e}")
            _fail('Failed to leave lobby')

    logger.info("Socket.IO handlers registered successfully")
