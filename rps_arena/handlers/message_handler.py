"""
Player Message Handler

Interprets the plain text messages players send. Checked in order:

1. "@<player id> <text>"  direct message to another player
2. "who's connected?"      list recently registered bots
3. "register as <name>"    register a bot name
4. anything else           a move for the player's current game
"""

import logging
import re
from enum import Enum

from rps_arena.core.errors import ErrorCode, ValidationError
from rps_arena.utils.error_handling import log_handler_action, with_error_handling
from .base_handler import BaseHandler

logger = logging.getLogger(__name__)


class MessageKind(Enum):
    DIRECT_MESSAGE = "direct_message"
    WHO_IS_CONNECTED = "who_is_connected"
    REGISTER = "register"
    MOVE = "move"


WHO_IS_CONNECTED_COMMAND = "who's connected"
REGISTER_PATTERN = re.compile(r'^register\s+as(?:\s+(.*))?$', re.IGNORECASE | re.DOTALL)


class PlayerMessageHandler(BaseHandler):
    """Handler for the Socket.IO `message` event."""

    @with_error_handling
    def handle_message(self, data):
        """Handle one text message from the requesting client."""
        self.log_handler_start('handle_message', data)
        kind = self.route_message(self.current_player_id(), data)
        self.log_handler_success('handle_message', kind.value)

    def route_message(self, player_id: str, data) -> MessageKind:
        """
        Dispatch a message from `player_id`.

        Returns:
            The kind of message that was handled

        Raises:
            ValidationError: If the message cannot be handled; its message is
                meant for the sender
        """
        text = self.validation_service.validate_message_text(data)

        direct_message = self.validation_service.parse_direct_message(text)
        if direct_message is not None:
            recipient_id, body = direct_message
            self._send_direct_message(player_id, recipient_id, body)
            return MessageKind.DIRECT_MESSAGE

        command = self.validation_service.normalize_command(text)
        if command.rstrip('?') == WHO_IS_CONNECTED_COMMAND:
            self.notifier.send_to(player_id, self.bot_directory.describe_recent_bots())
            return MessageKind.WHO_IS_CONNECTED

        register = REGISTER_PATTERN.match(text)
        if register is not None:
            name = self.validation_service.validate_bot_name(register.group(1) or '')
            self.bot_directory.register_bot(player_id, name)
            self.notifier.send_to(player_id, f"Registered as {name}.")
            return MessageKind.REGISTER

        self.game_flow_service.handle_player_move(player_id, text)
        return MessageKind.MOVE

    def _send_direct_message(self, sender_id: str, recipient_id: str, body: str) -> None:
        log_handler_action('PlayerMessageHandler', f'direct message {sender_id} -> {recipient_id}')
        if not self.notifier.send_direct(sender_id, recipient_id, body):
            raise ValidationError(
                ErrorCode.NOT_FOUND,
                f"Player {recipient_id} is not connected.",
                {"recipient_id": recipient_id}
            )
