"""
Number Elimination - Multiplayer Game Server

Flask-SocketIO backend that serves a browser frontend.
Players join a lobby, secretly pick a number, and take turns eliminating
numbers from the pool until one player is left.
"""

import logging
from flask import Flask
from flask_socketio import SocketIO
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix

from config import settings
from lobby import LobbyManager
from game import GameManager
from handlers import register_socket_handlers, register_api_handlers

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

def create_app(config_overrides=None):
    """
    Application factory that creates and configures the Flask app.

    Args:
        config_overrides: Optional mapping applied on top of the settings
            module (tests pass ``{'TESTING': True}``)

    Returns:
        tuple: (app, socketio)
    """

    # Flask configuration
    app = Flask(__name__)
    app.config['SECRET_KEY'] = settings.SECRET_KEY
    app.config['MAX_PLAYERS_PER_LOBBY'] = settings.MAX_PLAYERS_PER_LOBBY
    app.config['DEFAULT_BOARD_SIZE'] = settings.DEFAULT_BOARD_SIZE
    app.config['LOBBY_CODE_MAX_ATTEMPTS'] = settings.LOBBY_CODE_MAX_ATTEMPTS
    app.config['CORS_ORIGINS'] = settings.CORS_ORIGINS
    if config_overrides:
        app.config.update(config_overrides)

    cors_origins = app.config['CORS_ORIGINS'].split(',')

    # CORS configuration for the browser frontend
    CORS(app, origins=cors_origins, supports_credentials=True)

    # ProxyFix for deployment behind reverse proxy
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1)

    # SocketIO configuration
    socketio = SocketIO(
        app,
        cors_allowed_origins=cors_origins,
        async_mode=settings.SOCKETIO_ASYNC_MODE
    )

    # Process-scoped game state, shared by every handler (dependency injection)
    lobby_manager = LobbyManager(
        max_players=app.config['MAX_PLAYERS_PER_LOBBY'],
        default_board_size=app.config['DEFAULT_BOARD_SIZE'],
        code_max_attempts=app.config['LOBBY_CODE_MAX_ATTEMPTS']
    )
    game_manager = GameManager(lobby_manager)

    app.extensions['lobby_manager'] = lobby_manager
    app.extensions['game_manager'] = game_manager

    # Register all handlers (no logic in app.py - pure delegation)
    register_socket_handlers(socketio, lobby_manager, game_manager)
    register_api_handlers(app, lobby_manager)

    logger.info("Number elimination server initialized successfully")
    return app, socketio

def main():
    """Main entry point for development server."""
    app, socketio = create_app()

    logger.info(f"Starting server on port {settings.PORT}")
    logger.info(f"CORS origins: {settings.CORS_ORIGINS}")

    run_options = {}
    if socketio.async_mode == 'threading':
        run_options['allow_unsafe_werkzeug'] = True

    socketio.run(app, debug=settings.DEBUG, port=settings.PORT, host=settings.HOST, **run_options)

if __name__ == '__main__':
    main()
