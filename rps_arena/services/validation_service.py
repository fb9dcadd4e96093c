"""
Validation Service for RPS Arena

Turns raw client text into validated values: moves, bot names and direct
message addresses. Invalid input raises ValidationError with a message that
can be shown to the player as-is.
"""

import logging
import re
from typing import Any, Hashable, Optional, Tuple

from rps_arena.core.errors import ErrorCode, ValidationError

logger = logging.getLogger(__name__)


class ValidationService:
    """Service responsible for input validation and normalization."""

    MAX_MESSAGE_LENGTH = 4096
    DEFAULT_MAX_BOT_NAME_LENGTH = 50

    # "@<player id> <text>" anywhere in the message, where player ids are
    # UUIDs or Socket.IO sids. The "@" must open the message or follow whitespace.
    DIRECT_MESSAGE_PATTERN = re.compile(r'(?:^|\s)@([A-Za-z0-9_-]{8,64})\s+(.+)', re.DOTALL)

    def get_max_bot_name_length(self) -> int:
        """Get maximum bot name length from configuration"""
        from config_factory import get_config, ConfigError
        try:
            return get_config().max_bot_name_length
        except ConfigError:
            return self.DEFAULT_MAX_BOT_NAME_LENGTH

    def validate_message_text(self, data: Any) -> str:
        """
        Validate an incoming message payload.

        Args:
            data: Raw payload from the transport (str or UTF-8 bytes)

        Returns:
            The message text with surrounding whitespace removed

        Raises:
            ValidationError: If the payload is not text, is empty or too long
        """
        if isinstance(data, (bytes, bytearray)):
            try:
                data = bytes(data).decode('utf-8')
            except UnicodeDecodeError:
                raise ValidationError(ErrorCode.INVALID_DATA, "Messages must be UTF-8 text")

        if not isinstance(data, str):
            raise ValidationError(
                ErrorCode.INVALID_DATA,
                "Invalid data format - expected text"
            )

        text = data.strip()
        if not text:
            raise ValidationError(ErrorCode.INVALID_DATA, "Message cannot be empty")

        if len(text) > self.MAX_MESSAGE_LENGTH:
            raise ValidationError(
                ErrorCode.INVALID_DATA,
                f"Message must be {self.MAX_MESSAGE_LENGTH} characters or less",
                {"max_length": self.MAX_MESSAGE_LENGTH, "actual_length": len(text)}
            )

        return text

    @staticmethod
    def normalize_command(text: str) -> str:
        """Commands and moves are matched case-insensitively."""
        return text.strip().lower()

    def validate_move(self, text: str, resolver) -> Hashable:
        """
        Validate a move for the given resolver.

        Args:
            text: Raw move text
            resolver: OutcomeResolver that defines the legal moves

        Returns:
            The parsed move

        Raises:
            ValidationError: If the text is not one of the resolver's moves
        """
        token = self.normalize_command(text) if isinstance(text, str) else ''
        move = resolver.parse_move(token) if token else None
        if move is None:
            raise ValidationError(
                ErrorCode.INVALID_MOVE,
                f"Invalid choice. Please play {resolver.describe_moves()}.",
                {"allowed_moves": list(resolver.moves)}
            )
        return move

    def validate_bot_name(self, name: Any) -> str:
        """
        Validate a bot name for registration.

        Raises:
            ValidationError: If the name is empty or too long
        """
        if not isinstance(name, str) or not name.strip():
            raise ValidationError(ErrorCode.INVALID_BOT_NAME, "Bot name cannot be empty")

        name = name.strip()
        max_length = self.get_max_bot_name_length()
        if len(name) > max_length:
            raise ValidationError(
                ErrorCode.INVALID_BOT_NAME,
                f"Bot name must be {max_length} characters or less",
                {"max_length": max_length, "actual_length": len(name)}
            )
        return name

    def parse_direct_message(self, text: str) -> Optional[Tuple[str, str]]:
        """
        Find "@<player id> <text>" in a message and split it into recipient and body.

        Returns:
            (recipient id, body) or None if the text is not a direct message
        """
        match = self.DIRECT_MESSAGE_PATTERN.search(text.strip())
        if not match:
            return None
        return match.group(1), match.group(2).strip()
