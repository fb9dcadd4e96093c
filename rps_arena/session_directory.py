"""
Session Directory for RPS Arena

Owns every live Session, the player to session index and the matchmaking
queue, and performs all lifecycle transitions on them. Every public
operation runs inside the directory's exclusive section, so the three
indices always change together.

Notifications produced by a transition are queued in an outbox and handed
to the Notifier only after the outermost operation has released the lock.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, Hashable, Iterable, List, Optional, Tuple

from rps_arena.config.game_settings import GameSettings, get_game_settings
from rps_arena.core.errors import SessionError
from rps_arena.core.outcome_resolver import OutcomeResolver, RoundResult
from rps_arena.core.session import Session
from rps_arena.services.concurrency_control_service import ConcurrencyControlService
from rps_arena.services.matchmaker import Matchmaker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    """A text message waiting to be delivered to one or more players."""
    player_ids: Tuple[str, ...]
    text: str


class SessionDirectory:
    """Creates, tracks and destroys sessions and maps players to them."""

    def __init__(
        self,
        resolver: OutcomeResolver,
        notifier,
        matchmaker: Optional[Matchmaker] = None,
        concurrency_control: Optional[ConcurrencyControlService] = None,
        game_settings: Optional[GameSettings] = None
    ):
        self.resolver = resolver
        self.notifier = notifier
        self.matchmaker = matchmaker if matchmaker is not None else Matchmaker()
        self.concurrency_control = (
            concurrency_control if concurrency_control is not None else ConcurrencyControlService()
        )
        self.game_settings = game_settings if game_settings is not None else get_game_settings()

        self._sessions: Dict[str, Session] = {}
        self._player_index: Dict[str, str] = {}
        # Each thread delivers only what it queued itself
        self._outbox = threading.local()
        self._delivery_lock = threading.Lock()

        self.concurrency_control.add_release_callback(self.flush_notifications)

    def operation(self):
        """Context manager holding the exclusive section for a compound operation."""
        return self.concurrency_control.directory_operation()

    @property
    def continuous_play(self) -> bool:
        return self.game_settings.continuous_play

    # Session lifecycle

    def create_session(self) -> str:
        """
        Allocate a new empty session and index it.

        Returns:
            The new session id
        """
        with self.operation():
            session = Session(capacity=self.game_settings.session_capacity)
            self._sessions[session.id] = session
            logger.info(f"Created session {session.id}")
            return session.id

    def add_player(self, player_id: str, session_id: str) -> bool:
        """
        Seat a player in a session.

        Only sessions that exist, are not in progress, have not ended and have
        a free seat accept players. A player seated elsewhere leaves their old
        session first; an opponent left behind there is handled as if the
        player had disconnected. A session still short of players is queued
        for matchmaking.

        Args:
            player_id: Player to seat
            session_id: Target session

        Returns:
            True if the player is seated in the session, False otherwise
        """
        with self.operation():
            session = self._sessions.get(session_id)
            if session is None:
                logger.debug(f"Cannot add player {player_id}: session {session_id} does not exist")
                return False

            if session.is_in_progress() or session.has_ended():
                logger.debug(f"Cannot add player {player_id}: session {session_id} is {session.phase.value}")
                return False

            if session.has_participant(player_id):
                self._player_index[player_id] = session_id
                return True

            if session.is_full():
                logger.debug(f"Cannot add player {player_id}: session {session_id} is full")
                return False

            abandoned = None
            current_session_id = self._player_index.get(player_id)
            if current_session_id is not None:
                logger.warning(f"Player {player_id} moved from session {current_session_id} to {session_id}")
                abandoned = self._vacate(player_id)

            session.add_participant(player_id)
            self._player_index[player_id] = session_id

            if session.is_full():
                self.matchmaker.discard(session_id)
            else:
                self.matchmaker.enqueue(session_id)

            logger.info(f"Player {player_id} joined session {session_id} ({len(session.participants)}/{session.capacity})")

            if abandoned is not None:
                self._release_opponent(abandoned[0], player_id, abandoned[1])
            return True

    def remove_player(self, player_id: str) -> bool:
        """
        Unseat a player. Tears the session down once nobody is left in it.
        The index entry is always cleared, so calling this twice is harmless.

        Returns:
            True if the player was seated, False otherwise
        """
        with self.operation():
            session_id = self._player_index.pop(player_id, None)
            if session_id is None:
                logger.debug(f"Player {player_id} is not seated in any session")
                return False

            session = self._sessions.get(session_id)
            if session is not None:
                session.remove_participant(player_id)
                logger.info(f"Player {player_id} left session {session_id}")
                if session.is_empty():
                    self._teardown(session_id)
            return True

    def depart(self, player_id: str) -> Optional[str]:
        """
        Take a player out of play. Their session ends and the opponent left
        behind is told and, with continuous play, matched again. Safe to call
        more than once for the same player.

        Returns:
            The opponent's id, or None if the player had no opponent
        """
        with self.operation():
            abandoned = self._vacate(player_id)
            if abandoned is None:
                return None

            session_id, opponent_id = abandoned
            self._release_opponent(session_id, player_id, opponent_id)
            logger.info(f"Player {player_id} left session {session_id}, opponent {opponent_id} notified")
            return opponent_id

    def _vacate(self, player_id: str) -> Optional[Tuple[str, str]]:
        """Unseat a player; ends their session if an opponent is left in it."""
        session_id = self._player_index.get(player_id)
        if session_id is None:
            logger.debug(f"Player {player_id} is not seated in any session")
            return None

        session = self._sessions.get(session_id)
        opponent_id = session.opponent_of(player_id) if session else None
        self.remove_player(player_id)
        if opponent_id is None:
            return None

        self.end_session(session_id)
        return session_id, opponent_id

    def _release_opponent(self, session_id: str, player_id: str, opponent_id: str) -> None:
        if self.continuous_play:
            self.queue_notification(
                [opponent_id],
                f"Game {session_id}: Player {player_id} has left the game. Waiting for a new opponent..."
            )
            self.place_player(opponent_id)
        else:
            self.queue_notification(
                [opponent_id],
                f"Game {session_id}: Player {player_id} has left the game. Reconnect to play again."
            )

    def start_session(self, session_id: str) -> bool:
        """
        Start a session that has exactly two participants and is not running.

        Returns:
            True if the session was started, False otherwise
        """
        with self.operation():
            session = self._sessions.get(session_id)
            if session is None:
                logger.debug(f"Cannot start session {session_id}: it does not exist")
                return False

            if not self._is_ready_to_start(session):
                logger.debug(f"Session {session_id} is not ready to start ({session!r})")
                return False

            session.start()
            logger.info(f"Session {session_id} started")
            return True

    def end_session(self, session_id: str) -> Tuple[str, ...]:
        """
        End a session, unbind its participants and forget it.

        Returns:
            The players that were seated, in seating order. Empty if the
            session does not exist or has already been ended.
        """
        with self.operation():
            session = self._sessions.pop(session_id, None)
            if session is None:
                logger.debug(f"Session {session_id}: attempt to end a session that does not exist or has already been ended")
                return ()

            participants = session.participants
            session.end()
            for player_id in participants:
                if self._player_index.get(player_id) == session_id:
                    del self._player_index[player_id]
            self.matchmaker.discard(session_id)

            logger.info(f"Session {session_id} ended and cleaned up")
            return participants

    def _teardown(self, session_id: str) -> None:
        session = self._sessions.pop(session_id, None)
        self.matchmaker.discard(session_id)
        if session is not None:
            session.end()
            logger.info(f"Session {session_id} torn down (no players left)")

    # Moves and resolution

    def submit_move(self, player_id: str, move: Hashable) -> bool:
        """
        Record a move for the player's current session.

        Returns:
            True if the move was recorded, False if the player is not seated,
            the session is not in progress, or an earlier move was kept
        """
        with self.operation():
            session = self._session_for(player_id)
            if session is None:
                logger.debug(f"Ignoring move from player {player_id}: not seated")
                return False

            if not session.is_in_progress():
                logger.debug(f"Ignoring move from player {player_id}: session {session.id} is {session.phase.value}")
                return False

            try:
                recorded = session.submit_move(player_id, move, overwrite=self.game_settings.overwrite_moves)
            except SessionError as e:
                logger.warning(f"Move rejected: {e}")
                return False

            if recorded:
                logger.info(f"Session {session.id}: player {player_id} made a move")
            else:
                logger.debug(f"Session {session.id}: kept earlier move from player {player_id}")
            return recorded

    def resolve(self, session_id: str) -> List[RoundResult]:
        """
        Resolve a round once both moves are in and queue the results.

        Returns:
            One RoundResult per participant in seating order, or an empty list
            if the session is unknown, not in progress or still missing a move
        """
        with self.operation():
            session = self._sessions.get(session_id)
            if session is None:
                logger.debug(f"Cannot resolve session {session_id}: it does not exist")
                return []

            if not session.is_in_progress() or not session.has_all_moves():
                logger.debug(f"Cannot resolve session {session_id}: {session.move_count} move(s) submitted")
                return []

            try:
                results = self.resolver.resolve(session_id, session.moves)
            except Exception as e:
                logger.error(f"Session {session_id}: outcome resolution failed: {e}", exc_info=True)
                return []

            ordered = [results[player_id] for player_id in session.participants]
            for result in ordered:
                self.queue_notification([result.player_id], self._format_result(result))

            logger.info(f"Session {session_id} resolved: " + ", ".join(
                f"{result.player_id}={result.outcome.value}" for result in ordered
            ))
            return ordered

    def resolve_and_rotate(self, session_id: str) -> List[RoundResult]:
        """
        Resolve a finished round, end its session and, with continuous play,
        put both players straight back into matchmaking.

        Returns:
            The round results, or an empty list if nothing was resolved
        """
        with self.operation():
            results = self.resolve(session_id)
            if not results:
                return []

            participants = self.end_session(session_id)
            if self.continuous_play:
                for player_id in participants:
                    self.place_player(player_id)
            else:
                self.queue_notification(participants, "Thanks for playing! Reconnect to play again.")
            return results

    @staticmethod
    def _format_result(result: RoundResult) -> str:
        opponent_move = result.to_dict()['opponent_move']
        return f"Game over. You {result.outcome.value}. Opponent chose {opponent_move}."

    # Matchmaking

    def place_player(self, player_id: str) -> str:
        """
        Put an arriving player into a session.

        Joins the oldest session waiting for an opponent, skipping stale
        entries; otherwise creates a new session and queues it. Starts the
        session when it fills up.

        Returns:
            The id of the session the player is seated in
        """
        with self.operation():
            existing = self._player_index.get(player_id)
            if existing is not None:
                logger.debug(f"Player {player_id} is already seated in session {existing}")
                return existing

            session_id = None
            while True:
                candidate = self.matchmaker.dequeue_or_none()
                if candidate is None:
                    break
                if self.add_player(player_id, candidate):
                    session_id = candidate
                    break
                logger.debug(f"Skipping stale waiting session {candidate}")

            if session_id is None:
                session_id = self.create_session()
                self.add_player(player_id, session_id)

            self.queue_notification([player_id], f"Game {session_id}: Welcome! You are Player {player_id}.")
            self._try_start(session_id)
            return session_id

    def _try_start(self, session_id: str) -> None:
        session = self._sessions[session_id]
        if self.start_session(session_id):
            self.queue_notification(
                session.participants,
                f"Game {session_id}: Game is starting. Please play {self.resolver.describe_moves()}."
            )
        else:
            self.queue_notification(
                session.participants,
                f"Game {session_id}: Waiting for more players to start the game..."
            )

    # Queries

    def is_ready_to_start(self, session_id: str) -> bool:
        with self.operation():
            session = self._sessions.get(session_id)
            return session is not None and self._is_ready_to_start(session)

    def _is_ready_to_start(self, session: Session) -> bool:
        return (
            len(session.participants) == self.game_settings.session_capacity
            and not session.is_in_progress()
            and not session.has_ended()
        )

    def opponent_of(self, player_id: str) -> Optional[str]:
        with self.operation():
            session = self._session_for(player_id)
            return session.opponent_of(player_id) if session else None

    def session_of(self, player_id: str) -> Optional[str]:
        """Id of the session the player is seated in, or None."""
        return self._player_index.get(player_id)

    def get_session(self, session_id: str) -> Optional[Session]:
        return self._sessions.get(session_id)

    def _session_for(self, player_id: str) -> Optional[Session]:
        session_id = self._player_index.get(player_id)
        if session_id is None:
            return None
        return self._sessions.get(session_id)

    def get_all_session_ids(self) -> List[str]:
        return list(self._sessions.keys())

    @property
    def session_count(self) -> int:
        return len(self._sessions)

    @property
    def waiting_count(self) -> int:
        return len(self.matchmaker)

    def get_stats(self) -> Dict[str, Any]:
        """Snapshot of directory state for monitoring."""
        with self.operation():
            phases: Dict[str, int] = {}
            for session in self._sessions.values():
                phases[session.phase.value] = phases.get(session.phase.value, 0) + 1
            return {
                'sessions': len(self._sessions),
                'seated_players': len(self._player_index),
                'waiting_sessions': len(self.matchmaker),
                'sessions_by_phase': phases
            }

    # Notifications

    def queue_notification(self, player_ids: Iterable[str], text: str) -> None:
        """Queue a message; it is delivered once the current operation completes."""
        notification = Notification(tuple(player_ids), text)
        if not notification.player_ids:
            return
        self._pending().append(notification)
        if not self.concurrency_control.in_operation():
            self.flush_notifications()

    def _pending(self) -> List[Notification]:
        pending = getattr(self._outbox, 'pending', None)
        if pending is None:
            pending = self._outbox.pending = []
        return pending

    def flush_notifications(self) -> int:
        """
        Deliver the messages the calling thread queued through the notifier.

        Deliveries from different threads are serialized, so each batch goes
        out in the order it was queued.

        Returns:
            Number of notifications delivered (0 while an operation is running)
        """
        if self.concurrency_control.in_operation():
            return 0

        pending = self._pending()
        if not pending:
            return 0
        self._outbox.pending = []

        with self._delivery_lock:
            for notification in pending:
                try:
                    self.notifier.send_to_all(notification.player_ids, notification.text)
                except Exception as e:
                    logger.error(f"Error delivering notification to {notification.player_ids}: {e}")
        return len(pending)

    def shutdown(self) -> None:
        """End every live session (process shutdown)."""
        with self.operation():
            session_ids = self.get_all_session_ids()
            for session_id in session_ids:
                self.end_session(session_id)
            self.matchmaker.clear()
        logger.info(f"Session directory shut down, ended {len(session_ids)} session(s)")
