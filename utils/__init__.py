"""
Utilities module for the number elimination server.

This module contains constants and helper functions
used throughout the application.
"""

from .constants import (
    GAME_CONFIG, EVENTS, ERROR_MESSAGES, FALLBACK_NAMES,
    LOBBY_CODE_CHARACTERS, LOBBY_CODE_LENGTH, PLACEMENT_SENTINEL
)
from .helpers import (
    generate_lobby_code, get_random_available_name,
    coerce_number, coerce_board_size
)

__all__ = [
    'GAME_CONFIG',
    'EVENTS',
    'ERROR_MESSAGES',
    'FALLBACK_NAMES',
    'LOBBY_CODE_CHARACTERS',
    'LOBBY_CODE_LENGTH',
    'PLACEMENT_SENTINEL',
    'generate_lobby_code',
    'get_random_available_name',
    'coerce_number',
    'coerce_board_size'
]
