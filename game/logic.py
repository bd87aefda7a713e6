"""
Elimination rules.

Pure functions over lobby data: no locking, no events, no I/O.
"""

from typing import Iterable, List, Optional
from lobby.models import LobbyData, PlayerData
from utils.constants import PLACEMENT_SENTINEL
from .models import PlacementEntry

def all_picks_identical(players: Iterable[PlayerData], require_picks: bool = False) -> bool:
    """
    Check whether every player holds the same secret number.

    Args:
        players: Players to compare
        require_picks: Treat an unpicked player as breaking the match
    """
    picks = [p.selected_number for p in players]
    if not picks:
        return False
    if require_picks and any(pick is None for pick in picks):
        return False
    return len(set(picks)) == 1

def find_players_with_number(lobby: LobbyData, number: int) -> List[PlayerData]:
    """Non-eliminated players whose secret number is ``number``."""
    return [
        p for p in lobby.players.values()
        if not p.is_eliminated and p.selected_number == number
    ]

def next_batch_placement(lobby: LobbyData) -> int:
    """Placement shared by everyone knocked out by the next elimination."""
    return lobby.eliminated_count + 1

def placement_sort_key(placement: Optional[int]) -> int:
    return placement if placement is not None else PLACEMENT_SENTINEL

def build_placement_table(lobby: LobbyData) -> List[PlacementEntry]:
    """Every player on the roster, ascending by placement."""
    entries = [
        PlacementEntry(name=p.name, number=p.selected_number, placement=p.placement)
        for p in lobby.players.values()
    ]
    return sorted(entries, key=lambda entry: placement_sort_key(entry.placement))
