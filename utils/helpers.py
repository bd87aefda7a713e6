"""
Helper utilities for the number elimination server.

This module contains utility functions used throughout the application
for code generation, name generation and payload coercion.
"""

import random
from typing import Any, List, Optional
from .constants import FALLBACK_NAMES, LOBBY_CODE_CHARACTERS, LOBBY_CODE_LENGTH

def generate_lobby_code(length: int = LOBBY_CODE_LENGTH,
                        characters: str = LOBBY_CODE_CHARACTERS) -> str:
    """Generate a random lobby code from independent character draws."""
    return ''.join(random.choices(characters, k=length))

def get_random_available_name(exclude_names: Optional[List[str]] = None) -> str:
    """
    Get a random display name that's not already taken.
    
    Args:
        exclude_names: List of names to exclude (already taken)
        
    Returns:
        A name from FALLBACK_NAMES, or "Player N" once all of them are taken
    """
    exclude_lower = {name.lower() for name in (exclude_names or []) if name}
    
    available = [
        name for name in FALLBACK_NAMES
        if name.lower() not in exclude_lower
    ]
    if available:
        return random.choice(available)
    
    suffix = 1
    while f"player {suffix}" in exclude_lower:
        suffix += 1
    return f"Player {suffix}"

def coerce_number(value: Any) -> Optional[int]:
    """
    Extract an integer from a number payload.
    
    Clients send either a bare number or ``{'number': n}``.
    
    Returns:
        The integer, or None when the payload is malformed
    """
    if isinstance(value, dict):
        value = value.get('number')
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float) and not value.is_integer():
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None

def coerce_board_size(value: Any, default: int) -> int:
    """Return ``value`` as a board size >= 1, or ``default`` if it isn't one."""
    size = coerce_number(value)
    if size is None or size < 1:
        return default
    return size
