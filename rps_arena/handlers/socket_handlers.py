"""
Socket.IO event handlers for RPS Arena.

Players talk to the server with plain text `message` events; connect and
disconnect drive matchmaking.
"""

import logging

from .connection_handler import ConnectionHandler
from .message_handler import PlayerMessageHandler

logger = logging.getLogger(__name__)


def register_socket_handlers(socketio_instance):
    """Register all socket handlers with the SocketIO instance."""
    connection_handler = ConnectionHandler()
    message_handler = PlayerMessageHandler()

    socketio_instance.on_event('connect', connection_handler.handle_connect)
    socketio_instance.on_event('disconnect', connection_handler.handle_disconnect)
    socketio_instance.on_event('message', message_handler.handle_message)

    logger.info("Registered socket event handlers: connect, disconnect, message")
