"""
Turn management for the number elimination game.

Picks the opening turn holder and rotates the turn through
non-eliminated players in join order.
"""

import logging
import random
from typing import Optional
from lobby.models import LobbyData

logger = logging.getLogger(__name__)

class TurnManager:
    """Chooses and advances the turn holder of a lobby."""

    def __init__(self, rng: Optional[random.Random] = None):
        """
        Initialize turn manager.

        Args:
            rng: Random source for the opening turn (module ``random`` by default)
        """
        self.rng = rng or random

    def choose_first_turn(self, lobby: LobbyData) -> Optional[str]:
        """Pick the opening turn holder uniformly among the roster."""
        player_ids = list(lobby.players)
        if not player_ids:
            return None
        first = self.rng.choice(player_ids)
        logger.debug(f"Opening turn in lobby {lobby.code}: {first}")
        return first

    def next_turn(self, lobby: LobbyData, after_id: Optional[str]) -> Optional[str]:
        """
        Find the next non-eliminated player after ``after_id``, wrapping around.

        When ``after_id`` is no longer on the roster, rotation restarts
        from the leader.

        Returns:
            Session ID of the next turn holder or None if nobody remains
        """
        player_ids = list(lobby.players)
        if not player_ids:
            return None

        start = player_ids.index(after_id) if after_id in player_ids else -1
        for offset in range(1, len(player_ids) + 1):
            candidate = player_ids[(start + offset) % len(player_ids)]
            if not lobby.players[candidate].is_eliminated:
                return candidate
        return None
