"""
Session Directory Concurrency Tests

Hammers the directory from many threads at once and checks that no session
is overfilled and the indices stay consistent.
"""

import threading
from concurrent.futures import ThreadPoolExecutor

from rps_arena.core.errors import ValidationError
from rps_arena.services.game_flow_service import GameFlowService
from rps_arena.services.validation_service import ValidationService
from tests.helpers.notifier_mocks import RecordingNotifier, make_directory
from tests.helpers.directory_assertions import assert_directory_consistent


class TestConcurrentPlacement:
    """Concurrent arrivals"""

    def test_concurrent_arrivals_never_overfill_a_session(self):
        directory = make_directory(RecordingNotifier())
        player_ids = [f'p{index}' for index in range(60)]

        with ThreadPoolExecutor(max_workers=12) as executor:
            list(executor.map(directory.place_player, player_ids))

        assert_directory_consistent(directory)
        assert directory.get_stats()['seated_players'] == 60
        assert directory.session_count == 30
        assert directory.waiting_count == 0
        for session_id in directory.get_all_session_ids():
            session = directory.get_session(session_id)
            assert len(session.participants) == 2
            assert session.is_in_progress()

    def test_odd_arrivals_leave_exactly_one_waiting(self):
        directory = make_directory(RecordingNotifier())

        with ThreadPoolExecutor(max_workers=8) as executor:
            list(executor.map(directory.place_player, [f'p{index}' for index in range(21)]))

        assert directory.waiting_count == 1
        assert directory.session_count == 11


class TestConcurrentFlows:
    """Arrivals, moves and departures interleaved across threads"""

    def test_mixed_operations_keep_directory_consistent(self):
        notifier = RecordingNotifier()
        directory = make_directory(notifier)
        flow = GameFlowService(directory, ValidationService())
        errors = []
        barrier = threading.Barrier(8)

        def worker(worker_index):
            barrier.wait()
            try:
                for round_index in range(25):
                    player_id = f'w{worker_index}-{round_index}'
                    flow.handle_new_player(player_id)
                    for move in ('rock', 'paper'):
                        try:
                            flow.handle_player_move(player_id, move)
                        except ValidationError:
                            pass
                    if round_index % 3 == 0:
                        flow.handle_player_disconnect(player_id)
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(index,)) for index in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert_directory_consistent(directory)

    def test_notifications_are_not_sent_while_lock_is_held(self):
        directory = make_directory(RecordingNotifier())
        observed = []

        class LockCheckingNotifier(RecordingNotifier):
            def send_to(self, player_id, text):
                observed.append(directory.concurrency_control.in_operation())
                return super().send_to(player_id, text)

        directory.notifier = LockCheckingNotifier()
        directory.place_player('a')
        directory.place_player('b')

        assert observed
        assert not any(observed)
