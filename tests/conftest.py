import pytest

from app import create_app
from game import GameManager, TurnManager
from lobby import LobbyManager


class TestConfig:
    TESTING = True
    SECRET_KEY = 'test-secret'
    CORS_ORIGINS = '*'


class PickFirst:
    """Stands in for ``random`` so the leader always opens the round."""

    def choice(self, seq):
        return seq[0]


@pytest.fixture()
def lobby_manager():
    return LobbyManager()


@pytest.fixture()
def game_manager(lobby_manager):
    return GameManager(lobby_manager, TurnManager(rng=PickFirst()))


@pytest.fixture()
def seat_players(lobby_manager, game_manager):
    """Create a lobby and join one player per pick (None = no pick)."""

    def _seat(picks, board_size=20):
        _, _, lobby = lobby_manager.create_lobby(board_size)
        sids = []
        for index, pick in enumerate(picks):
            sid = f"sid-{index}"
            game_manager.join_lobby(sid, lobby.code, f"P{index}")
            if pick is not None:
                game_manager.select_number(sid, pick)
            sids.append(sid)
        return lobby, sids

    return _seat


@pytest.fixture()
def app_and_socketio():
    overrides = {k: v for k, v in vars(TestConfig).items() if k.isupper()}
    application, socketio = create_app(overrides)
    application.extensions['game_manager'].turn_manager.rng = PickFirst()
    return application, socketio


@pytest.fixture()
def flask_app(app_and_socketio):
    return app_and_socketio[0]


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_factory(app_and_socketio):
    application, socketio = app_and_socketio
    clients = []

    def _connect():
        test_client = socketio.test_client(application, flask_test_client=application.test_client())
        clients.append(test_client)
        return test_client

    yield _connect

    for test_client in clients:
        if test_client.is_connected():
            test_client.disconnect()
