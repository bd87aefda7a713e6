"""
HTTP routes for the number elimination server.

Read-only views over the lobby registry plus a display-name helper for
the join screen. Gameplay itself only happens over Socket.IO.
"""

import logging
from flask import jsonify, request
from utils.helpers import get_random_available_name

logger = logging.getLogger(__name__)

def register_api_handlers(app, lobby_manager):
    """
    Register all API route handlers.

    Args:
        app: Flask application instance
        lobby_manager: Lobby management instance
    """

    @app.route('/api/health')
    def health_check():
        lobbies = lobby_manager.get_active_lobbies()
        return jsonify({
            'status': 'healthy',
            'activeLobbies': len(lobbies),
            'roundsInProgress': len([item for item in lobbies if item.game_started])
        })

    @app.route('/api/random-name')
    def get_random_name():
        """
        Suggest a display name.

        Query params:
            exclude: Comma-separated names already in use
            code: Lobby code whose roster names should be avoided
        """
        taken = [name.strip() for name in request.args.get('exclude', '').split(',') if name.strip()]

        lobby_code = request.args.get('code', '').strip().upper()
        if lobby_code:
            lobby_data = lobby_manager.get_lobby(lobby_code)
            if lobby_data is None:
                return jsonify({'error': 'Lobby not found'}), 404
            with lobby_data.lock:
                taken.extend(lobby_data.player_names())

        return jsonify({'name': get_random_available_name(taken)})

    @app.route('/api/lobbies/active')
    def get_active_lobbies():
        """Codes, sizes and round status of every open lobby."""
        try:
            lobbies = lobby_manager.get_active_lobbies()
            return jsonify({'lobbies': [item.to_dict() for item in lobbies]})

        except Exception as e:
            logger.error(f"Error listing active lobbies: {e}")
            return jsonify({'error': 'Failed to list lobbies'}), 500

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'error': 'Not found'}), 404

    @app.errorhandler(500)
    def internal_error(error):
        logger.error(f"Unhandled server error: {error}")
        return jsonify({'error': 'Internal server error'}), 500

    logger.info("API handlers registered successfully")
