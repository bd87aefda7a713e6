"""
Data models for lobby management.

These are pure data structures used to pass information between
lobby management, game systems, and handlers.
"""

import threading
from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any
from datetime import datetime, timezone
from utils.constants import DEFAULT_BOARD_SIZE, MAX_PLAYERS_PER_LOBBY

@dataclass
class PlayerData:
    """Represents a player in a lobby."""
    session_id: str
    name: str
    selected_number: Optional[int] = None
    is_eliminated: bool = False
    placement: Optional[int] = None
    joined_at: Optional[datetime] = None

    def reset(self):
        """Return the player to the state of a fresh join."""
        self.selected_number = None
        self.is_eliminated = False
        self.placement = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the player list wire format."""
        return {
            'id': self.session_id,
            'name': self.name,
            'selectedNumber': self.selected_number,
            'isEliminated': self.is_eliminated,
            'placement': self.placement
        }

def build_number_pool(board_size: int) -> List[int]:
    """The numbers 1..board_size in ascending order."""
    return list(range(1, board_size + 1))

@dataclass
class LobbyData:
    """Represents a lobby's current state."""
    code: str
    board_size: int = DEFAULT_BOARD_SIZE
    max_players: int = MAX_PLAYERS_PER_LOBBY
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    numbers: List[int] = field(default_factory=list)
    # Insertion order matters: the first entry is the leader
    players: Dict[str, PlayerData] = field(default_factory=dict)
    current_turn: Optional[str] = None
    game_started: bool = False
    winners: List[str] = field(default_factory=list)
    # session_id -> remembered name, for players waiting to rejoin after game over
    next_round_players: Dict[str, str] = field(default_factory=dict)
    lock: Any = field(default_factory=threading.RLock, repr=False, compare=False)

    def __post_init__(self):
        if not self.numbers:
            self.numbers = build_number_pool(self.board_size)

    @property
    def player_count(self) -> int:
        """Total number of players on the roster."""
        return len(self.players)

    @property
    def is_full(self) -> bool:
        """Check if lobby is at max capacity."""
        return self.player_count >= self.max_players

    @property
    def is_empty(self) -> bool:
        """No players and nobody waiting to rejoin."""
        return not self.players and not self.next_round_players

    @property
    def leader_id(self) -> Optional[str]:
        """Earliest surviving join, recomputed on every call."""
        return next(iter(self.players), None)

    @property
    def eliminated_count(self) -> int:
        return len([p for p in self.players.values() if p.is_eliminated])

    def get_player(self, session_id: str) -> Optional[PlayerData]:
        """Find player by session ID."""
        return self.players.get(session_id)

    def get_remaining_players(self) -> List[PlayerData]:
        """Players not yet eliminated, in join order."""
        return [p for p in self.players.values() if not p.is_eliminated]

    def player_names(self) -> List[str]:
        return [p.name for p in self.players.values()]

    def player_list(self) -> List[Dict[str, Any]]:
        """Ordered player list payload."""
        return [p.to_dict() for p in self.players.values()]

    def reset_round(self, clear_players: bool = False):
        """
        Fold the lobby back into its forming state.

        Args:
            clear_players: Drop the roster entirely (game over) instead of
                resetting every player's round fields (replay)
        """
        self.numbers = build_number_pool(self.board_size)
        self.current_turn = None
        self.game_started = False
        self.winners = []
        if clear_players:
            for session_id, player in self.players.items():
                self.next_round_players[session_id] = player.name
            self.players.clear()
        else:
            for player in self.players.values():
                player.reset()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'code': self.code,
            'boardSize': self.board_size,
            'maxPlayers': self.max_players,
            'playerCount': self.player_count,
            'isFull': self.is_full,
            'gameStarted': self.game_started,
            'numbers': list(self.numbers),
            'currentTurn': self.current_turn,
            'createdAt': self.created_at.isoformat(),
            'players': self.player_list()
        }

@dataclass
class LobbyListItem:
    """Lightweight lobby info for listing active lobbies."""
    code: str
    player_count: int
    max_players: int
    board_size: int
    is_full: bool
    game_started: bool
    created_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'code': self.code,
            'playerCount': self.player_count,
            'maxPlayers': self.max_players,
            'boardSize': self.board_size,
            'isFull': self.is_full,
            'gameStarted': self.game_started,
            'createdAt': self.created_at.isoformat()
        }
