"""
Game Flow Service - Drives a player through matchmaking, moves and departure.

Each entry point runs as one directory operation, so a move that completes
a round is resolved and rotated before any other player's event is seen.
"""

import logging

from rps_arena.core.errors import ErrorCode, ValidationError

logger = logging.getLogger(__name__)


class GameFlowService:
    """Glue between player events and SessionDirectory transitions."""

    def __init__(self, session_directory, validation_service):
        self.session_directory = session_directory
        self.validation_service = validation_service

    def handle_new_player(self, player_id: str) -> str:
        """Place a freshly connected player. Returns the session id."""
        session_id = self.session_directory.place_player(player_id)
        logger.info(f"Player {player_id} placed in session {session_id}")
        return session_id

    def handle_player_move(self, player_id: str, text: str) -> bool:
        """
        Record a move and resolve the round once both players have moved.

        Returns:
            True if the move completed the round

        Raises:
            ValidationError: If the move is invalid, the player is not seated,
                the session has not started, or the move was already made
        """
        directory = self.session_directory
        move = self.validation_service.validate_move(text, directory.resolver)

        with directory.operation():
            session_id = directory.session_of(player_id)
            if session_id is None:
                raise ValidationError(
                    ErrorCode.NOT_SEATED,
                    "You are not in a game. Reconnect to play again."
                )

            session = directory.get_session(session_id)
            if not session.is_in_progress():
                raise ValidationError(
                    ErrorCode.GAME_NOT_STARTED,
                    f"Game {session_id}: Waiting for more players to start the game..."
                )

            if not directory.submit_move(player_id, move):
                raise ValidationError(
                    ErrorCode.INVALID_TRANSITION,
                    f"Game {session_id}: You have already made your move this round."
                )

            if session.has_all_moves():
                directory.resolve_and_rotate(session_id)
                return True

            directory.queue_notification(
                [player_id],
                f"Game {session_id}: Move received. Waiting for your opponent..."
            )
            return False

    def handle_player_disconnect(self, player_id: str) -> None:
        """
        Remove a departing player. Their session ends and the remaining
        opponent is told and, with continuous play, matched again.
        Safe to call more than once for the same player.
        """
        opponent_id = self.session_directory.depart(player_id)
        if opponent_id is None:
            logger.debug(f"Player {player_id} departed with no opponent to release")
