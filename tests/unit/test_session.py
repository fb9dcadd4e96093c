"""
Session Unit Tests

Tests for the Session entity covering seating, phase transitions and move
recording.
"""

import pytest

from rps_arena.core.errors import ErrorCode, InvalidTransitionError, NotAParticipantError, SessionFullError
from rps_arena.core.outcome_resolver import Move
from rps_arena.core.session import Session
from rps_arena.core.session_phases import SessionPhase


class TestSessionSeating:
    """Test adding and removing participants"""

    def setup_method(self):
        self.session = Session()

    def test_new_session_is_waiting_and_empty(self):
        assert self.session.phase == SessionPhase.WAITING_FOR_PLAYERS
        assert self.session.is_empty()
        assert self.session.participants == ()
        assert self.session.capacity == 2
        assert self.session.id

    def test_session_ids_are_unique(self):
        assert Session().id != Session().id

    def test_explicit_session_id(self):
        assert Session(session_id='abc').id == 'abc'

    def test_invalid_capacity_rejected(self):
        with pytest.raises(ValueError):
            Session(capacity=0)

    def test_first_participant_keeps_session_waiting(self):
        assert self.session.add_participant('p1') is True
        assert self.session.phase == SessionPhase.WAITING_FOR_PLAYERS
        assert self.session.has_participant('p1')

    def test_second_participant_makes_session_ready(self):
        self.session.add_participant('p1')
        self.session.add_participant('p2')

        assert self.session.is_full()
        assert self.session.is_ready_to_start()
        assert self.session.participants == ('p1', 'p2')

    def test_adding_same_participant_twice_is_noop(self):
        self.session.add_participant('p1')
        assert self.session.add_participant('p1') is False
        assert self.session.participants == ('p1',)

    def test_third_participant_rejected(self):
        self.session.add_participant('p1')
        self.session.add_participant('p2')

        with pytest.raises(SessionFullError) as exc_info:
            self.session.add_participant('p3')
        assert exc_info.value.code == ErrorCode.SESSION_FULL

    def test_removing_from_ready_session_reverts_to_waiting(self):
        self.session.add_participant('p1')
        self.session.add_participant('p2')

        assert self.session.remove_participant('p2') is True
        assert self.session.phase == SessionPhase.WAITING_FOR_PLAYERS
        assert self.session.participants == ('p1',)

    def test_removing_unknown_participant_returns_false(self):
        assert self.session.remove_participant('ghost') is False

    def test_removing_participant_drops_their_move(self):
        self.session.add_participant('p1')
        self.session.add_participant('p2')
        self.session.start()
        self.session.submit_move('p1', Move.ROCK)

        self.session.remove_participant('p1')
        assert self.session.move_count == 0
        assert not self.session.has_moved('p1')

    def test_cannot_add_to_ended_session(self):
        self.session.end()
        with pytest.raises(InvalidTransitionError):
            self.session.add_participant('p1')

    def test_opponent_of(self):
        self.session.add_participant('p1')
        assert self.session.opponent_of('p1') is None

        self.session.add_participant('p2')
        assert self.session.opponent_of('p1') == 'p2'
        assert self.session.opponent_of('p2') == 'p1'


class TestSessionPhases:
    """Test start and end transitions"""

    def setup_method(self):
        self.session = Session()
        self.session.add_participant('p1')
        self.session.add_participant('p2')

    def test_start(self):
        self.session.start()
        assert self.session.is_in_progress()

    def test_cannot_start_twice(self):
        self.session.start()
        with pytest.raises(InvalidTransitionError) as exc_info:
            self.session.start()
        assert exc_info.value.code == ErrorCode.INVALID_TRANSITION

    def test_cannot_start_ended_session(self):
        self.session.end()
        with pytest.raises(InvalidTransitionError):
            self.session.start()

    def test_end_clears_state(self):
        self.session.start()
        self.session.submit_move('p1', Move.PAPER)
        self.session.end()

        assert self.session.has_ended()
        assert self.session.participants == ()
        assert self.session.moves == {}

    def test_end_is_idempotent(self):
        self.session.end()
        self.session.end()
        assert self.session.phase == SessionPhase.ENDED

    def test_in_progress_session_stays_in_progress_when_refilled(self):
        self.session.start()
        self.session.remove_participant('p2')
        self.session.add_participant('p3')
        assert self.session.is_in_progress()


class TestSessionMoves:
    """Test move submission"""

    def setup_method(self):
        self.session = Session()
        self.session.add_participant('p1')
        self.session.add_participant('p2')
        self.session.start()

    def test_submit_move(self):
        assert self.session.submit_move('p1', Move.ROCK) is True
        assert self.session.has_moved('p1')
        assert self.session.move_count == 1
        assert not self.session.has_all_moves()

    def test_all_moves(self):
        self.session.submit_move('p1', Move.ROCK)
        self.session.submit_move('p2', Move.SCISSORS)
        assert self.session.has_all_moves()
        assert self.session.moves == {'p1': Move.ROCK, 'p2': Move.SCISSORS}

    def test_overwrite_replaces_move(self):
        self.session.submit_move('p1', Move.ROCK)
        assert self.session.submit_move('p1', Move.PAPER, overwrite=True) is True
        assert self.session.moves['p1'] == Move.PAPER
        assert self.session.move_count == 1

    def test_ignore_keeps_first_move(self):
        self.session.submit_move('p1', Move.ROCK)
        assert self.session.submit_move('p1', Move.PAPER, overwrite=False) is False
        assert self.session.moves['p1'] == Move.ROCK

    def test_non_participant_move_rejected(self):
        with pytest.raises(NotAParticipantError) as exc_info:
            self.session.submit_move('ghost', Move.ROCK)
        assert exc_info.value.code == ErrorCode.NOT_SEATED

    def test_move_on_ended_session_rejected(self):
        self.session.end()
        with pytest.raises(InvalidTransitionError):
            self.session.submit_move('p1', Move.ROCK)

    def test_moves_property_is_a_copy(self):
        self.session.submit_move('p1', Move.ROCK)
        moves = self.session.moves
        moves['p2'] = Move.PAPER
        assert self.session.move_count == 1

    def test_to_dict(self):
        self.session.submit_move('p1', Move.ROCK)
        data = self.session.to_dict()
        assert data['session_id'] == self.session.id
        assert data['phase'] == 'in_progress'
        assert data['participants'] == ['p1', 'p2']
        assert data['move_count'] == 1
