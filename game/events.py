"""
Outbound event builders.

Every payload the server sends is shaped here so handlers and game logic
agree on the wire format.
"""

from typing import List
from lobby.models import LobbyData, PlayerData
from utils.constants import EVENTS, RESET_NUMBERS_MESSAGE
from .models import OutboundEvent, PlacementEntry

def player_list(lobby: LobbyData) -> OutboundEvent:
    return OutboundEvent.to_lobby(lobby.code, EVENTS['PLAYER_LIST'], lobby.player_list())

def lobby_joined(session_id: str, lobby: LobbyData) -> OutboundEvent:
    return OutboundEvent.to_player(session_id, EVENTS['LOBBY_JOINED'], {
        'code': lobby.code,
        'boardSize': lobby.board_size
    })

def error(session_id: str, message: str) -> OutboundEvent:
    """Unicast a human-readable error to one connection."""
    return OutboundEvent.to_player(session_id, EVENTS['ERROR'], message)

def game_started(lobby: LobbyData) -> OutboundEvent:
    turn_holder = lobby.players[lobby.current_turn]
    return OutboundEvent.to_lobby(lobby.code, EVENTS['GAME_STARTED'], {
        'currentTurn': lobby.current_turn,
        'currentPlayerName': turn_holder.name,
        'numbers': list(lobby.numbers)
    })

def reset_numbers(lobby: LobbyData) -> OutboundEvent:
    return OutboundEvent.to_lobby(lobby.code, EVENTS['RESET_NUMBERS'], {
        'message': RESET_NUMBERS_MESSAGE
    })

def player_eliminated(lobby: LobbyData, player: PlayerData) -> OutboundEvent:
    return OutboundEvent.to_lobby(lobby.code, EVENTS['PLAYER_ELIMINATED'], {
        'playerName': player.name,
        'number': player.selected_number,
        'placement': player.placement,
        'totalPlayers': lobby.player_count
    })

def you_won(lobby: LobbyData, player: PlayerData) -> OutboundEvent:
    """Sent to a player knocked out before the end: they placed."""
    return OutboundEvent.to_player(player.session_id, EVENTS['YOU_WON'], {
        'placement': player.placement,
        'totalPlayers': lobby.player_count,
        'number': player.selected_number
    })

def you_lost(lobby: LobbyData, player: PlayerData) -> OutboundEvent:
    return OutboundEvent.to_player(player.session_id, EVENTS['YOU_LOST'], {
        'placement': player.placement,
        'totalPlayers': lobby.player_count,
        'number': player.selected_number
    })

def number_eliminated(lobby: LobbyData, number: int) -> OutboundEvent:
    turn_holder = lobby.players[lobby.current_turn]
    return OutboundEvent.to_lobby(lobby.code, EVENTS['NUMBER_ELIMINATED'], {
        'number': number,
        'remainingNumbers': list(lobby.numbers),
        'currentTurn': lobby.current_turn,
        'currentPlayerName': turn_holder.name
    })

def turn_changed(lobby: LobbyData) -> OutboundEvent:
    turn_holder = lobby.players[lobby.current_turn]
    return OutboundEvent.to_lobby(lobby.code, EVENTS['TURN_CHANGED'], {
        'currentTurn': lobby.current_turn,
        'currentPlayerName': turn_holder.name
    })

def game_over(lobby: LobbyData, placements: List[PlacementEntry]) -> OutboundEvent:
    return OutboundEvent.to_lobby(lobby.code, EVENTS['GAME_OVER'], {
        'placements': [entry.to_dict() for entry in placements]
    })

def lobby_reset_payload(lobby: LobbyData) -> dict:
    return {
        'boardSize': lobby.board_size,
        'players': lobby.player_list(),
        'numbers': list(lobby.numbers)
    }

def lobby_reset(lobby: LobbyData) -> OutboundEvent:
    return OutboundEvent.to_lobby(lobby.code, EVENTS['LOBBY_RESET'], lobby_reset_payload(lobby))

def lobby_reset_for(session_id: str, lobby: LobbyData) -> OutboundEvent:
    return OutboundEvent.to_player(session_id, EVENTS['LOBBY_RESET'], lobby_reset_payload(lobby))
