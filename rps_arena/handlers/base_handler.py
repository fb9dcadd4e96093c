"""
Base Handler Classes

This module provides the base class for Socket.IO handlers with common
patterns for service access and logging.
"""

import logging
from abc import ABC
from typing import Any, Optional

from flask import request

from container import get_container

logger = logging.getLogger(__name__)


class BaseHandler(ABC):
    """
    Abstract base class for all Socket.IO handlers.

    Services are looked up in the application container on every access so
    handlers always see the currently configured instances.
    """

    @property
    def _container(self):
        return get_container()

    @property
    def session_directory(self):
        """Get the session directory."""
        return self._container.get('SessionDirectory')

    @property
    def game_flow_service(self):
        """Get the game flow service."""
        return self._container.get('GameFlowService')

    @property
    def bot_directory(self):
        """Get the bot directory."""
        return self._container.get('BotDirectory')

    @property
    def notifier(self):
        """Get the notifier."""
        return self._container.get('Notifier')

    @property
    def connection_registry(self):
        """Get the connection registry."""
        return self._container.get('ConnectionRegistry')

    @property
    def validation_service(self):
        """Get the validation service."""
        return self._container.get('ValidationService')

    def current_player_id(self) -> str:
        """The requesting client's player id (its Socket.IO session id)."""
        return request.sid  # type: ignore[attr-defined]

    def log_handler_start(self, handler_name: str, data: Any = None) -> None:
        """Log the start of handler execution."""
        logger.info(f'{handler_name} called by client: {self.current_player_id()}')
        if data:
            logger.debug(f'{handler_name} data: {data}')

    def log_handler_success(self, handler_name: str, message: Optional[str] = None) -> None:
        """Log successful handler completion."""
        log_msg = f'{handler_name} completed successfully for client: {self.current_player_id()}'
        if message:
            log_msg += f' - {message}'
        logger.info(log_msg)
