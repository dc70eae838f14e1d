"""
Unit tests for session and screen tracking
"""
from product_analytics.session import SessionTracker


class TestScreenHistory:
    """Test two-deep screen history"""

    def test_rotation(self):
        session = SessionTracker()
        assert session.rotate_screen("A") == ("A", None)
        assert session.rotate_screen("B") == ("B", "A")
        assert session.rotate_screen("C") == ("C", "B")

    def test_clear(self):
        session = SessionTracker()
        session.rotate_screen("A")
        session.rotate_screen("B")

        session.clear_screens()

        assert session.current_screen is None
        assert session.previous_screen is None
        assert session.rotate_screen("X") == ("X", None)


class TestDurations:
    """Test session and named timers"""

    def test_no_session(self, fake_clock):
        session = SessionTracker(fake_clock)
        assert session.session_duration() == 0

    def test_session_duration(self, fake_clock):
        session = SessionTracker(fake_clock)
        session.start()
        fake_clock.advance(61.4)
        assert session.session_duration() == 61

    def test_named_mark(self, fake_clock):
        session = SessionTracker(fake_clock)
        assert session.elapsed("paywall") == 0
        session.mark("paywall")
        fake_clock.advance(12)
        assert session.elapsed("paywall") == 12
