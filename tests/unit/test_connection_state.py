"""
Test suite for ConnectionState.

Tests the monotonic latch and its single-transition guarantee under
concurrent trips.

System role: Verification of the shared connection latch
"""

import threading

from debitor_store.boundary.db.guard import ConnectionState


class TestConnectionState:
    """Test suite for ConnectionState."""

    def test_new_state_should_not_be_failed(self) -> None:
        """Test the latch starts open."""
        assert ConnectionState().failed is False

    def test_trip_should_report_the_transition_once(self) -> None:
        """Test only the first trip returns True and the flag stays set."""
        # Arrange
        state = ConnectionState()

        # Act
        first = state.trip()
        second = state.trip()

        # Assert
        assert first is True
        assert second is False
        assert state.failed is True

    def test_concurrent_trips_should_produce_a_single_transition(self) -> None:
        """Test racing threads observe exactly one False -> True transition."""
        # Arrange
        state = ConnectionState()
        thread_count = 16
        barrier = threading.Barrier(thread_count)
        outcomes: list[bool] = []
        outcomes_lock = threading.Lock()

        def worker() -> None:
            barrier.wait()
            tripped = state.trip()
            with outcomes_lock:
                outcomes.append(tripped)

        threads = [threading.Thread(target=worker) for _ in range(thread_count)]

        # Act
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        # Assert
        assert outcomes.count(True) == 1
        assert len(outcomes) == thread_count
        assert state.failed is True
