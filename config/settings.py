import os
from dotenv import load_dotenv

from utils.constants import GAME_CONFIG

# Only load the .env file if we're not on Render (i.e., we are in a local environment)
if os.environ.get("RENDER") != "true":
    load_dotenv()

# Flask Configuration
SECRET_KEY = os.getenv('SECRET_KEY', 'a_very_secret_key_that_should_be_changed')
CORS_ORIGINS = os.getenv('CORS_ORIGINS', 'http://localhost:3000')

# Socket.IO Configuration (None lets Flask-SocketIO pick the best available mode)
SOCKETIO_ASYNC_MODE = os.getenv('SOCKETIO_ASYNC_MODE') or None

# Game Configuration
MAX_PLAYERS_PER_LOBBY = int(os.getenv('MAX_PLAYERS_PER_LOBBY', GAME_CONFIG['MAX_PLAYERS']))
DEFAULT_BOARD_SIZE = int(os.getenv('DEFAULT_BOARD_SIZE', GAME_CONFIG['DEFAULT_BOARD_SIZE']))
LOBBY_CODE_MAX_ATTEMPTS = int(os.getenv('LOBBY_CODE_MAX_ATTEMPTS', GAME_CONFIG['LOBBY_CODE_MAX_ATTEMPTS']))

# Logging Configuration
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

# Server Configuration
HOST = os.getenv('HOST', '0.0.0.0')
PORT = int(os.getenv('PORT', 3001))
DEBUG = os.environ.get('RENDER', '') != 'true' and os.getenv('FLASK_ENV') == 'development'

# Render Configuration
IS_RENDER = os.environ.get("RENDER", "") == "true"
