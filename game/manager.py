"""
Game Manager - Coordinator for game operations.

Applies player intents to the lobby bound to their session and returns the
events to deliver. Holds no transport objects: callers dispatch the
returned OutboundEvents.
"""

import logging
from typing import Any, List, Optional
from lobby.manager import LobbyManager
from lobby.models import LobbyData
from utils.constants import GAME_CONFIG, ERROR_MESSAGES
from utils.helpers import coerce_number
from . import events
from .logic import (
    all_picks_identical, find_players_with_number,
    next_batch_placement, build_placement_table
)
from .models import GameState, OutboundEvent
from .turn_manager import TurnManager

logger = logging.getLogger(__name__)

class GameManager:
    """Runs the round state machine of every lobby."""

    def __init__(self, lobby_manager: LobbyManager,
                 turn_manager: Optional[TurnManager] = None):
        self.lobby_manager = lobby_manager
        self.turn_manager = turn_manager or TurnManager()

    @staticmethod
    def get_state(lobby: LobbyData) -> GameState:
        return GameState.IN_PROGRESS if lobby.game_started else GameState.FORMING

    def join_lobby(self, session_id: str, lobby_code: Optional[str],
                   name: Optional[str]) -> List[OutboundEvent]:
        """
        Handle a player joining a lobby by code.

        A session bound to a different lobby is moved: it leaves the old
        lobby only once the new join has succeeded.

        Returns:
            Events to deliver
        """
        previous = self.lobby_manager.resolve_lobby(session_id)

        success, message, lobby = self.lobby_manager.join_lobby(session_id, lobby_code, name)
        if not success:
            return [events.error(session_id, message)]

        outbound: List[OutboundEvent] = []
        if previous is not None and previous is not lobby:
            logger.info(f"Session {session_id} moving from lobby {previous.code} to {lobby.code}")
            outbound.extend(self._remove_from_lobby(previous, session_id, unbind=False))

        with lobby.lock:
            outbound.append(events.player_list(lobby))
            outbound.append(events.lobby_joined(session_id, lobby))
        return outbound

    def select_number(self, session_id: str, value: Any) -> List[OutboundEvent]:
        """
        Record a player's secret number.

        Picks are not checked against the pool or other players, so
        duplicates stay secret.
        """
        number = coerce_number(value)
        if number is None:
            logger.debug(f"Ignoring malformed pick from {session_id}: {value!r}")
            return []

        lobby = self.lobby_manager.resolve_lobby(session_id)
        if not lobby:
            logger.debug(f"Ignoring pick from unbound session {session_id}")
            return []

        with lobby.lock:
            player = lobby.get_player(session_id)
            if not player:
                logger.debug(f"Ignoring pick from unknown player {session_id} in lobby {lobby.code}")
                return []

            player.selected_number = number
            return [events.player_list(lobby)]

    def start_game(self, session_id: str) -> List[OutboundEvent]:
        """
        Start a round. Only the current leader may start.

        When every player has picked and all picks are the same, the picks
        are cleared instead and the round stays forming.
        """
        lobby = self.lobby_manager.resolve_lobby(session_id)
        if not lobby:
            return []

        with lobby.lock:
            if session_id != lobby.leader_id:
                logger.debug(f"Ignoring start from non-leader {session_id} in lobby {lobby.code}")
                return []

            if self.get_state(lobby) is GameState.IN_PROGRESS:
                logger.debug(f"Ignoring start in lobby {lobby.code}: round already in progress")
                return []

            if lobby.player_count < GAME_CONFIG['MIN_PLAYERS']:
                return [events.error(session_id, ERROR_MESSAGES['NOT_ENOUGH_PLAYERS'])]

            if all_picks_identical(lobby.players.values(), require_picks=True):
                for player in lobby.players.values():
                    player.selected_number = None
                logger.info(f"Everyone in lobby {lobby.code} picked the same number, picks cleared")
                return [events.player_list(lobby), events.reset_numbers(lobby)]

            lobby.game_started = True
            lobby.current_turn = self.turn_manager.choose_first_turn(lobby)

            logger.info(f"Started round in lobby {lobby.code} with {lobby.player_count} players")
            return [events.game_started(lobby)]

    def eliminate_number(self, session_id: str, value: Any) -> List[OutboundEvent]:
        """
        Remove a number from the pool on the caller's turn.

        Everyone holding that number is knocked out together and shares one
        placement. The round ends when one player remains or when every
        remaining player holds the same number.

        Returns:
            Events to deliver
        """
        lobby = self.lobby_manager.resolve_lobby(session_id)
        if not lobby:
            return []

        with lobby.lock:
            if not lobby.game_started or lobby.current_turn != session_id:
                logger.debug(f"Ignoring elimination from {session_id} in lobby {lobby.code}: not their turn")
                return []

            number = coerce_number(value)
            actor = lobby.get_player(session_id)
            if number is None or actor is None:
                return []

            if actor.selected_number == number:
                return [events.error(session_id, ERROR_MESSAGES['SELF_ELIMINATION_FORBIDDEN'])]

            if number not in lobby.numbers:
                logger.debug(f"Ignoring elimination of {number} in lobby {lobby.code}: not in pool")
                return []

            lobby.numbers.remove(number)

            knocked_out = find_players_with_number(lobby, number)
            placement = next_batch_placement(lobby)
            for player in knocked_out:
                player.is_eliminated = True
                player.placement = placement
                lobby.winners.append(player.name)

            outbound: List[OutboundEvent] = []
            for player in knocked_out:
                logger.info(f"{player.name} eliminated in lobby {lobby.code} with {number}, placement {placement}")
                outbound.append(events.player_eliminated(lobby, player))
                outbound.append(events.player_list(lobby))
                outbound.append(events.you_won(lobby, player))

            round_end = self._resolve_round_end(lobby)
            if round_end is not None:
                outbound.extend(round_end)
                return outbound

            lobby.current_turn = self.turn_manager.next_turn(lobby, session_id)
            outbound.append(events.number_eliminated(lobby, number))
            return outbound

    def replay_game(self, session_id: str) -> List[OutboundEvent]:
        """Reset the round while keeping the roster and code."""
        lobby = self.lobby_manager.resolve_lobby(session_id)
        if not lobby:
            return []

        with lobby.lock:
            lobby.reset_round()
            logger.info(f"Lobby {lobby.code} reset for replay")
            return [events.lobby_reset(lobby), events.player_list(lobby)]

    def player_ready_for_replay(self, session_id: str) -> List[OutboundEvent]:
        """
        Put the caller back on the roster with a fresh record.

        Ignored while a round is in progress.
        """
        lobby = self.lobby_manager.resolve_lobby(session_id)
        if not lobby:
            return []

        with lobby.lock:
            if lobby.game_started:
                logger.debug(f"Ignoring replay ready from {session_id}: round in progress in {lobby.code}")
                return []

            success, message, _ = self.lobby_manager.player_manager.ready_for_replay(lobby, session_id)
            if not success:
                return [events.error(session_id, message)]

            return [events.player_list(lobby), events.lobby_reset_for(session_id, lobby)]

    def leave_lobby(self, session_id: str) -> List[OutboundEvent]:
        """
        Remove a player from their lobby and unbind their session.

        A departure during a round can hand the turn on or end the round.
        Empty lobbies are dropped from the registry.
        """
        lobby = self.lobby_manager.resolve_lobby(session_id)
        if not lobby:
            self.lobby_manager.unbind_session(session_id)
            return []

        outbound = self._remove_from_lobby(lobby, session_id)
        logger.info(f"Session {session_id} left lobby {lobby.code}")
        return outbound

    def disconnect_player(self, session_id: str) -> List[OutboundEvent]:
        """Connection closed: same cleanup as an explicit leave."""
        logger.debug(f"Cleaning up after disconnect of {session_id}")
        return self.leave_lobby(session_id)

    def _remove_from_lobby(self, lobby: LobbyData, session_id: str,
                           unbind: bool = True) -> List[OutboundEvent]:
        with lobby.lock:
            held_turn = lobby.game_started and lobby.current_turn == session_id
            next_turn = self.turn_manager.next_turn(lobby, session_id) if held_turn else None

            player = self.lobby_manager.remove_player(lobby, session_id, unbind=unbind)
            outbound = [events.player_list(lobby)]

            if lobby.game_started and player is not None:
                round_end = self._resolve_round_end(lobby)
                if round_end is not None:
                    outbound.extend(round_end)
                elif held_turn and next_turn and next_turn != session_id:
                    lobby.current_turn = next_turn
                    outbound.append(events.turn_changed(lobby))

            self.lobby_manager.destroy_if_empty(lobby.code)
            return outbound

    def _resolve_round_end(self, lobby: LobbyData) -> Optional[List[OutboundEvent]]:
        """
        Apply the end-of-round rules.

        Returns:
            The game over events, or None while play continues
        """
        remaining = lobby.get_remaining_players()
        total_players = lobby.player_count

        if len(remaining) > 1 and all_picks_identical(remaining):
            for player in remaining:
                player.is_eliminated = True
                player.placement = total_players
            logger.info(f"Lobby {lobby.code} tied out: {len(remaining)} players share last place")
            outbound = [events.game_over(lobby, build_placement_table(lobby))]
            self._finish_round(lobby)
            return outbound

        if len(remaining) > 1:
            return None

        outbound = []
        if remaining:
            loser = remaining[0]
            loser.placement = total_players
            logger.info(f"{loser.name} is last in lobby {lobby.code}")
            outbound.append(events.you_lost(lobby, loser))
        outbound.append(events.game_over(lobby, build_placement_table(lobby)))
        self._finish_round(lobby)
        return outbound

    def _finish_round(self, lobby: LobbyData):
        """Clear the roster; former players wait in next_round_players."""
        lobby.reset_round(clear_players=True)
        logger.info(f"Game over in lobby {lobby.code}")
