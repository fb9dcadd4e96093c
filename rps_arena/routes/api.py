"""
REST API endpoints for RPS Arena.

The game itself is played over Socket.IO; HTTP only serves health and
monitoring endpoints. Everything else is a plain-text 404.
"""

import logging
from flask import Blueprint, jsonify

from container import get_container

logger = logging.getLogger(__name__)


def create_api_blueprint():
    """Create the API Blueprint. Services are resolved from the container per request."""
    api = Blueprint('api', __name__)

    @api.route('/health')
    def health():
        """Liveness probe."""
        return jsonify({'status': 'ok'})

    @api.route('/api/stats')
    def stats():
        """Current sessions, queue and connection counts."""
        container = get_container()
        data = container.get('SessionDirectory').get_stats()
        data['connections'] = container.get('ConnectionRegistry').get_connection_count()
        data['registered_bots'] = container.get('BotDirectory').get_bot_count()
        return jsonify(data)

    @api.app_errorhandler(404)
    def not_found(error):
        logger.debug(f'404: {error}')
        return 'Not found', 404, {'Content-Type': 'text/plain; charset=utf-8'}

    return api
