"""
Connection Handler

This module handles Socket.IO connect and disconnect events: registering the
player's connection and putting the player into (or taking them out of)
matchmaking.
"""

import logging

from rps_arena.utils.error_handling import with_error_handling
from .base_handler import BaseHandler

logger = logging.getLogger(__name__)


class ConnectionHandler(BaseHandler):
    """Handler for client connection lifecycle."""

    @with_error_handling
    def handle_connect(self, auth=None):
        """Handle client connection."""
        self.log_handler_start('handle_connect')
        session_id = self.connect_player(self.current_player_id())
        self.log_handler_success('handle_connect', f'placed in session {session_id}')

    def connect_player(self, player_id: str) -> str:
        """Register a player's connection and place them in a session."""
        self.connection_registry.add_connection(player_id)
        return self.game_flow_service.handle_new_player(player_id)

    def handle_disconnect(self, reason=None):
        """Handle client disconnection with game flow cleanup."""
        player_id = self.current_player_id()
        logger.info(f'Client disconnected: {player_id} (reason: {reason})')
        self.disconnect_player(player_id)

    def disconnect_player(self, player_id: str) -> None:
        """
        Take a player out of their session and forget their connection.
        Safe to call more than once.
        """
        try:
            self.game_flow_service.handle_player_disconnect(player_id)
        finally:
            self.bot_directory.unregister_bot(player_id)
            self.connection_registry.remove_connection(player_id)
