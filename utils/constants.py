"""
Game constants for the number elimination server.

This module contains all constant values used throughout the game,
including lobby limits, event names, error messages and fallback names.
"""

import string

# Lobby code alphabet: 26 uppercase letters + 10 digits
LOBBY_CODE_CHARACTERS = string.ascii_uppercase + string.digits
LOBBY_CODE_LENGTH = 5

# Lobby constants
MAX_PLAYERS_PER_LOBBY = 12
DEFAULT_BOARD_SIZE = 20

# Unset placements sort after every real placement
PLACEMENT_SENTINEL = 999

# Game configuration
GAME_CONFIG = {
    'MIN_PLAYERS': 2,
    'MAX_PLAYERS': MAX_PLAYERS_PER_LOBBY,
    'DEFAULT_BOARD_SIZE': DEFAULT_BOARD_SIZE,
    'LOBBY_CODE_LENGTH': LOBBY_CODE_LENGTH,
    'LOBBY_CODE_MAX_ATTEMPTS': 10,
}

# Outbound event names
EVENTS = {
    'LOBBY_CREATED': 'lobbyCreated',
    'LOBBY_JOINED': 'lobbyJoined',
    'PLAYER_LIST': 'playerList',
    'GAME_STARTED': 'gameStarted',
    'RESET_NUMBERS': 'resetNumbers',
    'PLAYER_ELIMINATED': 'playerEliminated',
    'NUMBER_ELIMINATED': 'numberEliminated',
    'TURN_CHANGED': 'turnChanged',
    'YOU_WON': 'youWon',
    'YOU_LOST': 'youLost',
    'GAME_OVER': 'gameOver',
    'LOBBY_RESET': 'lobbyReset',
    'ERROR': 'error',
}

# Messages surfaced to the originating connection only
ERROR_MESSAGES = {
    'LOBBY_NOT_FOUND': 'Lobby not found',
    'LOBBY_FULL': 'Game is full',
    'NOT_ENOUGH_PLAYERS': 'At least 2 players required to start the game.',
    'SELF_ELIMINATION_FORBIDDEN': "You can't eliminate your own secret number!",
}

RESET_NUMBERS_MESSAGE = 'Everyone picked the same number. Pick again!'

# Display names handed to players who come back without one
FALLBACK_NAMES = [
    "Alex", "Blake", "Casey", "Drew", "Ellis", "Finley", "Gray", "Harper",
    "Indigo", "Jules", "Kai", "Lane", "Morgan", "Nova", "Ocean", "Parker",
    "Quinn", "River", "Sage", "Taylor", "Avery", "Cameron", "Dakota", "Emery"
]
