"""
Session entity for RPS Arena

A Session is the state of one game: who is seated, which moves have been
submitted this round, and where the game is in its lifecycle. It knows
nothing about transport, notifications or other sessions; the
SessionDirectory is the only component that mutates it.
"""

import uuid
from datetime import datetime
from typing import Any, Dict, Hashable, Optional, Tuple

from rps_arena.core.errors import InvalidTransitionError, NotAParticipantError, SessionFullError
from rps_arena.core.session_phases import SessionPhase


class Session:
    """State machine for a single game between up to `capacity` participants."""

    def __init__(self, session_id: Optional[str] = None, capacity: int = 2):
        if capacity < 1:
            raise ValueError(f"Invalid session capacity: {capacity}")

        self._id = session_id or str(uuid.uuid4())
        self._capacity = capacity
        # dict keeps seating order and uniqueness
        self._participants: Dict[str, None] = {}
        self._moves: Dict[str, Hashable] = {}
        self._phase = SessionPhase.WAITING_FOR_PLAYERS
        self.created_at = datetime.now()

    @property
    def id(self) -> str:
        return self._id

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def phase(self) -> SessionPhase:
        return self._phase

    @property
    def participants(self) -> Tuple[str, ...]:
        """Seated player ids in seating order."""
        return tuple(self._participants)

    @property
    def moves(self) -> Dict[str, Hashable]:
        """Copy of the moves submitted this round."""
        return dict(self._moves)

    @property
    def move_count(self) -> int:
        return len(self._moves)

    def has_participant(self, player_id: str) -> bool:
        return player_id in self._participants

    def has_moved(self, player_id: str) -> bool:
        return player_id in self._moves

    def is_empty(self) -> bool:
        return not self._participants

    def is_full(self) -> bool:
        return len(self._participants) >= self._capacity

    def is_in_progress(self) -> bool:
        return self._phase == SessionPhase.IN_PROGRESS

    def has_ended(self) -> bool:
        return self._phase == SessionPhase.ENDED

    def is_ready_to_start(self) -> bool:
        return self._phase == SessionPhase.READY_TO_START

    def has_all_moves(self) -> bool:
        """True once every seat is filled and every participant has moved."""
        return self.is_full() and len(self._moves) == len(self._participants)

    def add_participant(self, player_id: str) -> bool:
        """
        Seat a player.

        Returns:
            True if the player was seated, False if already seated

        Raises:
            InvalidTransitionError: If the session has ended
            SessionFullError: If every seat is taken
        """
        if self._phase == SessionPhase.ENDED:
            raise InvalidTransitionError(self._id, "cannot add a participant to an ended session")

        if player_id in self._participants:
            return False

        if self.is_full():
            raise SessionFullError(self._id, f"all {self._capacity} seats are taken")

        self._participants[player_id] = None
        if self.is_full() and self._phase != SessionPhase.IN_PROGRESS:
            self._phase = SessionPhase.READY_TO_START
        return True

    def remove_participant(self, player_id: str) -> bool:
        """
        Unseat a player and discard any move they submitted this round.

        Returns:
            True if the player was seated, False otherwise
        """
        if player_id not in self._participants:
            return False

        del self._participants[player_id]
        self._moves.pop(player_id, None)

        if self._phase == SessionPhase.READY_TO_START and not self.is_full():
            self._phase = SessionPhase.WAITING_FOR_PLAYERS
        return True

    def submit_move(self, player_id: str, move: Hashable, overwrite: bool = True) -> bool:
        """
        Record a participant's move for the current round.

        Args:
            player_id: Seated player submitting the move
            move: The move value
            overwrite: Replace an earlier move from the same player this round

        Returns:
            True if the move was recorded, False if an earlier move was kept

        Raises:
            InvalidTransitionError: If the session has ended
            NotAParticipantError: If the player is not seated
        """
        if self._phase == SessionPhase.ENDED:
            raise InvalidTransitionError(self._id, "cannot submit a move to an ended session")

        if player_id not in self._participants:
            raise NotAParticipantError(self._id, f"player {player_id} is not seated")

        if self.has_moved(player_id) and not overwrite:
            return False

        self._moves[player_id] = move
        return True

    def start(self) -> None:
        """
        Move the session into play.

        Raises:
            InvalidTransitionError: If the session is already in progress or has ended
        """
        if self._phase in (SessionPhase.IN_PROGRESS, SessionPhase.ENDED):
            raise InvalidTransitionError(self._id, f"cannot start a session in phase {self._phase.value}")

        self._phase = SessionPhase.IN_PROGRESS

    def end(self) -> None:
        """End the session. Ending an ended session does nothing."""
        if self._phase == SessionPhase.ENDED:
            return

        self._participants.clear()
        self._moves.clear()
        self._phase = SessionPhase.ENDED

    def opponent_of(self, player_id: str) -> Optional[str]:
        """Return the first other participant in seating order, or None."""
        for participant in self._participants:
            if participant != player_id:
                return participant
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "session_id": self._id,
            "phase": self._phase.value,
            "participants": list(self._participants),
            "move_count": len(self._moves),
            "created_at": self.created_at.isoformat(),
        }

    def __repr__(self) -> str:
        return (
            f"Session(id={self._id!r}, phase={self._phase.value}, "
            f"participants={len(self._participants)}/{self._capacity}, moves={len(self._moves)})"
        )
