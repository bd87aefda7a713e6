from game import GameState
from utils.constants import ERROR_MESSAGES, FALLBACK_NAMES


def names(events):
    return [event.name for event in events]


def find(events, name):
    return [event for event in events if event.name == name]


# --- picking -----------------------------------------------------------------

def test_select_number_updates_only_that_player(seat_players, game_manager):
    lobby, sids = seat_players([4, 9, None])
    before = {sid: p.to_dict() for sid, p in lobby.players.items() if sid != sids[2]}

    events = game_manager.select_number(sids[2], 13)

    assert names(events) == ['playerList']
    assert events[0].broadcast and events[0].target == lobby.code
    roster = {entry['id']: entry for entry in events[0].payload}
    assert roster[sids[2]]['selectedNumber'] == 13
    for sid, snapshot in before.items():
        assert roster[sid] == snapshot


def test_select_number_accepts_wrapped_payload(seat_players, game_manager):
    lobby, sids = seat_players([None, None])
    game_manager.select_number(sids[0], {'number': 6})
    assert lobby.get_player(sids[0]).selected_number == 6


def test_select_number_allows_duplicates_and_out_of_pool(seat_players, game_manager):
    lobby, sids = seat_players([3, 3], board_size=5)
    game_manager.select_number(sids[1], 50)
    assert lobby.get_player(sids[0]).selected_number == 3
    assert lobby.get_player(sids[1]).selected_number == 50


def test_select_number_ignores_malformed_or_unbound(seat_players, game_manager):
    lobby, sids = seat_players([2, 5])

    assert game_manager.select_number(sids[0], 'abc') == []
    assert game_manager.select_number('stranger', 4) == []
    assert lobby.get_player(sids[0]).selected_number == 2


# --- starting ----------------------------------------------------------------

def test_start_game_by_leader(seat_players, game_manager):
    lobby, sids = seat_players([1, 2, 3])

    events = game_manager.start_game(sids[0])

    assert names(events) == ['gameStarted']
    assert lobby.game_started
    assert game_manager.get_state(lobby) is GameState.IN_PROGRESS
    assert lobby.current_turn in sids
    payload = events[0].payload
    assert payload['currentTurn'] == lobby.current_turn
    assert payload['currentPlayerName'] == lobby.players[lobby.current_turn].name
    assert payload['numbers'] == list(range(1, 21))


def test_start_game_ignored_for_non_leader(seat_players, game_manager):
    lobby, sids = seat_players([1, 2])

    assert game_manager.start_game(sids[1]) == []
    assert not lobby.game_started


def test_start_game_needs_two_players(seat_players, game_manager):
    lobby, sids = seat_players([1])

    events = game_manager.start_game(sids[0])

    assert names(events) == ['error']
    assert not events[0].broadcast
    assert events[0].target == sids[0]
    assert events[0].payload == ERROR_MESSAGES['NOT_ENOUGH_PLAYERS']
    assert not lobby.game_started


def test_start_game_clears_identical_picks(seat_players, game_manager):
    lobby, sids = seat_players([7, 7, 7])

    events = game_manager.start_game(sids[0])

    assert names(events) == ['playerList', 'resetNumbers']
    assert not lobby.game_started
    assert lobby.current_turn is None
    assert all(p.selected_number is None for p in lobby.players.values())


def test_start_game_with_missing_pick_is_not_a_reset(seat_players, game_manager):
    lobby, sids = seat_players([7, 7, None])

    events = game_manager.start_game(sids[0])

    assert names(events) == ['gameStarted']
    assert lobby.get_player(sids[0]).selected_number == 7


def test_start_game_ignored_while_in_progress(seat_players, game_manager):
    lobby, sids = seat_players([1, 2])
    game_manager.start_game(sids[0])
    lobby.current_turn = sids[1]

    assert game_manager.start_game(sids[0]) == []
    assert lobby.current_turn == sids[1]


def test_leader_is_recomputed_after_leave(seat_players, game_manager):
    lobby, sids = seat_players([1, 2, 3])

    game_manager.leave_lobby(sids[0])
    events = game_manager.start_game(sids[1])

    assert names(events) == ['gameStarted']
    assert lobby.leader_id == sids[1]


def test_first_turn_uses_turn_manager_rng(seat_players, game_manager):
    lobby, sids = seat_players([1, 2, 3])
    game_manager.start_game(sids[0])
    assert lobby.current_turn == sids[0]


# --- eliminating -------------------------------------------------------------

def test_eliminate_by_non_turn_holder_is_ignored(seat_players, game_manager):
    lobby, sids = seat_players([1, 2, 3])
    game_manager.start_game(sids[0])
    pool = list(lobby.numbers)

    assert game_manager.eliminate_number(sids[1], 5) == []
    assert lobby.numbers == pool
    assert lobby.current_turn == sids[0]


def test_eliminate_before_start_is_ignored(seat_players, game_manager):
    lobby, sids = seat_players([1, 2])
    assert game_manager.eliminate_number(sids[0], 5) == []
    assert 5 in lobby.numbers


def test_self_elimination_is_rejected(seat_players, game_manager):
    lobby, sids = seat_players([4, 9])
    game_manager.start_game(sids[0])
    pool = list(lobby.numbers)

    events = game_manager.eliminate_number(sids[0], 4)

    assert names(events) == ['error']
    assert events[0].target == sids[0] and not events[0].broadcast
    assert events[0].payload == ERROR_MESSAGES['SELF_ELIMINATION_FORBIDDEN']
    assert lobby.numbers == pool
    assert lobby.current_turn == sids[0]


def test_eliminate_number_not_in_pool_is_ignored(seat_players, game_manager):
    lobby, sids = seat_players([4, 9, 11], board_size=10)
    game_manager.start_game(sids[0])

    assert game_manager.eliminate_number(sids[0], 15) == []
    assert game_manager.eliminate_number(sids[0], 'x') == []
    assert lobby.current_turn == sids[0]


def test_eliminating_an_unpicked_number_passes_the_turn(seat_players, game_manager):
    lobby, sids = seat_players([1, 2, 3])
    game_manager.start_game(sids[0])

    events = game_manager.eliminate_number(sids[0], 10)

    assert names(events) == ['numberEliminated']
    assert 10 not in lobby.numbers
    assert lobby.current_turn == sids[1]
    payload = events[0].payload
    assert payload['number'] == 10
    assert payload['remainingNumbers'] == lobby.numbers
    assert payload['currentTurn'] == sids[1]
    assert payload['currentPlayerName'] == 'P1'


def test_turn_skips_eliminated_players(seat_players, game_manager):
    lobby, sids = seat_players([1, 2, 3, 4])
    game_manager.start_game(sids[0])

    events = game_manager.eliminate_number(sids[0], 2)

    assert names(events) == ['playerEliminated', 'playerList', 'youWon', 'numberEliminated']
    assert lobby.current_turn == sids[2]


def test_turn_wraps_around(seat_players, game_manager):
    lobby, sids = seat_players([1, 2, 3])
    game_manager.start_game(sids[0])
    lobby.current_turn = sids[2]

    game_manager.eliminate_number(sids[2], 15)

    assert lobby.current_turn == sids[0]


def test_full_round_with_distinct_picks(seat_players, game_manager):
    lobby, sids = seat_players([1, 2, 3, 4])
    game_manager.start_game(sids[0])

    first = game_manager.eliminate_number(sids[0], 2)
    eliminated = find(first, 'playerEliminated')[0].payload
    assert eliminated == {'playerName': 'P1', 'number': 2, 'placement': 1, 'totalPlayers': 4}
    won = find(first, 'youWon')[0]
    assert won.target == sids[1] and not won.broadcast
    assert won.payload == {'placement': 1, 'totalPlayers': 4, 'number': 2}

    second = game_manager.eliminate_number(sids[2], 4)
    assert find(second, 'playerEliminated')[0].payload['placement'] == 2
    assert lobby.current_turn == sids[0]

    final = game_manager.eliminate_number(sids[0], 3)

    assert names(final) == ['playerEliminated', 'playerList', 'youWon', 'youLost', 'gameOver']
    lost = find(final, 'youLost')[0]
    assert lost.target == sids[0]
    assert lost.payload == {'placement': 4, 'totalPlayers': 4, 'number': 1}
    placements = find(final, 'gameOver')[0].payload['placements']
    assert placements == [
        {'name': 'P1', 'number': 2, 'placement': 1},
        {'name': 'P3', 'number': 4, 'placement': 2},
        {'name': 'P2', 'number': 3, 'placement': 3},
        {'name': 'P0', 'number': 1, 'placement': 4},
    ]
    assert sorted(entry['placement'] for entry in placements) == [1, 2, 3, 4]


def test_round_over_resets_lobby_and_clears_roster(seat_players, game_manager, lobby_manager):
    lobby, sids = seat_players([1, 2])
    game_manager.start_game(sids[0])

    game_manager.eliminate_number(sids[0], 2)

    assert not lobby.game_started
    assert lobby.current_turn is None
    assert lobby.numbers == list(range(1, 21))
    assert lobby.players == {}
    assert lobby.winners == []
    assert lobby.next_round_players == {sids[0]: 'P0', sids[1]: 'P1'}
    assert lobby_manager.get_lobby(lobby.code) is lobby
    assert lobby_manager.get_player_lobby(sids[0]) == lobby.code


def test_shared_number_eliminates_group_with_one_placement(seat_players, game_manager):
    lobby, sids = seat_players([7, 9, 5, 5, 5])
    game_manager.start_game(sids[0])

    game_manager.eliminate_number(sids[0], 9)
    assert lobby.get_player(sids[1]).placement == 1
    assert lobby.current_turn == sids[2]

    game_manager.eliminate_number(sids[2], 3)
    game_manager.eliminate_number(sids[3], 4)
    game_manager.eliminate_number(sids[4], 6)
    assert lobby.current_turn == sids[0]

    events = game_manager.eliminate_number(sids[0], 5)

    knocked_out = find(events, 'playerEliminated')
    assert [e.payload['playerName'] for e in knocked_out] == ['P2', 'P3', 'P4']
    assert {e.payload['placement'] for e in knocked_out} == {2}
    assert sorted(e.target for e in find(events, 'youWon')) == sorted(sids[2:])
    placements = find(events, 'gameOver')[0].payload['placements']
    assert [entry['placement'] for entry in placements] == [1, 2, 2, 2, 5]
    assert placements[-1]['name'] == 'P0'


def test_remaining_players_with_same_number_tie_out(seat_players, game_manager):
    lobby, sids = seat_players([1, 2, 3, 3])
    game_manager.start_game(sids[0])
    game_manager.eliminate_number(sids[0], 2)
    assert lobby.current_turn == sids[2]

    events = game_manager.eliminate_number(sids[2], 1)

    assert names(events) == ['playerEliminated', 'playerList', 'youWon', 'gameOver']
    placements = events[-1].payload['placements']
    assert placements == [
        {'name': 'P1', 'number': 2, 'placement': 1},
        {'name': 'P0', 'number': 1, 'placement': 2},
        {'name': 'P2', 'number': 3, 'placement': 4},
        {'name': 'P3', 'number': 3, 'placement': 4},
    ]
    assert not lobby.game_started
    assert lobby.players == {}


def test_tie_out_applies_to_more_than_two_survivors(seat_players, game_manager):
    lobby, sids = seat_players([8, 5, 5, 5])
    game_manager.start_game(sids[0])
    lobby.current_turn = sids[1]

    events = game_manager.eliminate_number(sids[1], 8)

    placements = find(events, 'gameOver')[0].payload['placements']
    assert [entry['placement'] for entry in placements] == [1, 4, 4, 4]


# --- replay ------------------------------------------------------------------

def test_replay_resets_round_but_keeps_roster(seat_players, game_manager, lobby_manager):
    lobby, sids = seat_players([1, 2, 3])
    game_manager.start_game(sids[0])
    game_manager.eliminate_number(sids[0], 2)
    code = lobby.code

    events = game_manager.replay_game(sids[2])

    assert names(events) == ['lobbyReset', 'playerList']
    assert list(lobby.players) == sids
    assert lobby.code == code
    assert lobby.numbers == list(range(1, 21))
    assert not lobby.game_started
    assert lobby.current_turn is None
    for player in lobby.players.values():
        assert player.selected_number is None
        assert not player.is_eliminated
        assert player.placement is None
    reset = events[0].payload
    assert reset['boardSize'] == 20
    assert reset['numbers'] == list(range(1, 21))
    assert [p['id'] for p in reset['players']] == sids


def test_replay_from_unbound_session_is_ignored(game_manager):
    assert game_manager.replay_game('stranger') == []


def test_ready_for_replay_restores_remembered_name(seat_players, game_manager):
    lobby, sids = seat_players([1, 2])
    game_manager.start_game(sids[0])
    game_manager.eliminate_number(sids[0], 2)

    events = game_manager.player_ready_for_replay(sids[1])

    assert names(events) == ['playerList', 'lobbyReset']
    assert events[1].target == sids[1] and not events[1].broadcast
    assert lobby.get_player(sids[1]).name == 'P1'
    assert sids[1] not in lobby.next_round_players
    assert list(lobby.players) == [sids[1]]


def test_ready_for_replay_is_idempotent(seat_players, game_manager):
    lobby, sids = seat_players([1, 2])
    lobby.get_player(sids[0]).selected_number = 6

    game_manager.player_ready_for_replay(sids[0])
    game_manager.player_ready_for_replay(sids[0])

    assert list(lobby.players) == sids
    assert lobby.get_player(sids[0]).selected_number is None
    assert lobby.get_player(sids[0]).name == 'P0'


def test_ready_for_replay_generates_name_when_unknown(seat_players, game_manager, lobby_manager):
    lobby, _ = seat_players([1])
    lobby_manager.bind_session('sid-new', lobby.code)

    game_manager.player_ready_for_replay('sid-new')

    assert lobby.get_player('sid-new').name in FALLBACK_NAMES


def test_ready_for_replay_ignored_mid_round(seat_players, game_manager):
    lobby, sids = seat_players([1, 2, 3])
    game_manager.start_game(sids[0])
    game_manager.eliminate_number(sids[0], 2)

    assert game_manager.player_ready_for_replay(sids[1]) == []
    assert lobby.get_player(sids[1]).is_eliminated


# --- leaving -----------------------------------------------------------------

def test_leave_broadcasts_roster_and_unbinds(seat_players, game_manager, lobby_manager):
    lobby, sids = seat_players([1, 2])

    events = game_manager.leave_lobby(sids[1])

    assert names(events) == ['playerList']
    assert [p['id'] for p in events[0].payload] == [sids[0]]
    assert lobby_manager.get_player_lobby(sids[1]) is None


def test_last_player_leaving_destroys_lobby(seat_players, game_manager, lobby_manager):
    lobby, sids = seat_players([1])

    game_manager.leave_lobby(sids[0])

    assert lobby_manager.get_lobby(lobby.code) is None
    assert names(game_manager.join_lobby('sid-late', lobby.code, 'Late')) == ['error']


def test_lobby_destroyed_once_pending_players_leave(seat_players, game_manager, lobby_manager):
    lobby, sids = seat_players([1, 2])
    game_manager.start_game(sids[0])
    game_manager.eliminate_number(sids[0], 2)

    game_manager.leave_lobby(sids[0])
    assert lobby_manager.get_lobby(lobby.code) is lobby

    game_manager.disconnect_player(sids[1])
    assert lobby_manager.get_lobby(lobby.code) is None


def test_turn_holder_leaving_passes_turn(seat_players, game_manager):
    lobby, sids = seat_players([1, 2, 3])
    game_manager.start_game(sids[0])

    events = game_manager.leave_lobby(sids[0])

    assert names(events) == ['playerList', 'turnChanged']
    assert lobby.current_turn == sids[1]
    assert events[1].payload == {'currentTurn': sids[1], 'currentPlayerName': 'P1'}


def test_leaving_mid_round_can_end_round(seat_players, game_manager):
    lobby, sids = seat_players([1, 2])
    game_manager.start_game(sids[0])

    events = game_manager.leave_lobby(sids[1])

    assert names(events) == ['playerList', 'youLost', 'gameOver']
    assert not lobby.game_started
    assert lobby.next_round_players == {sids[0]: 'P0'}


def test_leaving_mid_round_can_tie_out(seat_players, game_manager):
    lobby, sids = seat_players([5, 5, 9])
    game_manager.start_game(sids[0])

    events = game_manager.leave_lobby(sids[2])

    assert names(events) == ['playerList', 'gameOver']
    assert [e['placement'] for e in events[-1].payload['placements']] == [2, 2]


def test_join_switches_lobbies(seat_players, game_manager, lobby_manager):
    first, sids = seat_players([1, 2])
    _, _, second = lobby_manager.create_lobby()

    events = game_manager.join_lobby(sids[1], second.code, 'P1')

    assert names(events) == ['playerList', 'playerList', 'lobbyJoined']
    assert events[0].target == first.code
    assert list(first.players) == [sids[0]]
    assert list(second.players) == [sids[1]]
    assert lobby_manager.get_player_lobby(sids[1]) == second.code


def test_join_reports_errors_to_caller_only(game_manager):
    events = game_manager.join_lobby('sid-1', 'NOPE1', 'Ann')

    assert names(events) == ['error']
    assert events[0].target == 'sid-1' and not events[0].broadcast
    assert events[0].payload == ERROR_MESSAGES['LOBBY_NOT_FOUND']


def test_join_sends_snapshot_to_joiner(game_manager, lobby_manager):
    _, _, lobby = lobby_manager.create_lobby(12)

    events = game_manager.join_lobby('sid-1', lobby.code, 'Ann')

    assert names(events) == ['playerList', 'lobbyJoined']
    assert events[0].broadcast and events[0].target == lobby.code
    assert events[0].payload == [{
        'id': 'sid-1', 'name': 'Ann', 'selectedNumber': None,
        'isEliminated': False, 'placement': None
    }]
    assert events[1].target == 'sid-1' and not events[1].broadcast
    assert events[1].payload['boardSize'] == 12


def test_move_to_full_lobby_changes_nothing(seat_players, game_manager, lobby_manager):
    home, sids = seat_players([1, 2])
    game_manager.start_game(sids[0])
    _, _, full = lobby_manager.create_lobby()
    for index in range(12):
        game_manager.join_lobby(f'full-{index}', full.code, f'F{index}')

    events = game_manager.join_lobby(sids[1], full.code, 'P1')

    assert names(events) == ['error']
    assert events[0].payload == ERROR_MESSAGES['LOBBY_FULL']
    assert list(home.players) == sids
    assert home.game_started
    assert lobby_manager.get_player_lobby(sids[1]) == home.code
    assert sids[1] not in full.players


def test_move_keeps_new_binding_when_old_lobby_is_destroyed(seat_players, game_manager, lobby_manager):
    home, sids = seat_players([1])
    _, _, other = lobby_manager.create_lobby()

    game_manager.join_lobby(sids[0], other.code, 'P0')

    assert lobby_manager.get_lobby(home.code) is None
    assert lobby_manager.get_player_lobby(sids[0]) == other.code


# --- rejoining the same lobby ------------------------------------------------

def test_rejoin_keeps_roster_position(seat_players, game_manager):
    lobby, sids = seat_players([1, 2, 3])

    events = game_manager.join_lobby(sids[0], lobby.code, 'Renamed')

    assert names(events) == ['playerList', 'lobbyJoined']
    assert list(lobby.players) == sids
    assert lobby.leader_id == sids[0]
    assert lobby.get_player(sids[0]).name == 'Renamed'
    assert lobby.get_player(sids[0]).selected_number is None


def test_rejoin_mid_round_keeps_elimination(seat_players, game_manager):
    lobby, sids = seat_players([1, 2, 3])
    game_manager.start_game(sids[0])
    game_manager.eliminate_number(sids[0], 2)

    game_manager.join_lobby(sids[1], lobby.code, 'P1')

    rejoined = lobby.get_player(sids[1])
    assert rejoined.is_eliminated
    assert rejoined.placement == 1
    assert rejoined.selected_number == 2
    assert list(lobby.players) == sids


def test_rejoin_into_full_lobby_is_allowed_for_members(game_manager, lobby_manager):
    _, _, lobby = lobby_manager.create_lobby()
    for index in range(12):
        game_manager.join_lobby(f'sid-{index}', lobby.code, f'P{index}')

    events = game_manager.join_lobby('sid-3', lobby.code, 'P3')

    assert names(events) == ['playerList', 'lobbyJoined']
    assert lobby.player_count == 12


# --- join payload handling ---------------------------------------------------

def test_join_without_name_is_accepted(game_manager, lobby_manager):
    _, _, lobby = lobby_manager.create_lobby()

    events = game_manager.join_lobby('sid-1', lobby.code, None)

    assert names(events) == ['playerList', 'lobbyJoined']
    assert lobby.get_player('sid-1').name == ''


def test_join_without_code_is_lobby_not_found(game_manager):
    events = game_manager.join_lobby('sid-1', None, 'Ann')

    assert names(events) == ['error']
    assert events[0].payload == ERROR_MESSAGES['LOBBY_NOT_FOUND']
