"""
Pytest configuration and shared fixtures
"""
import pytest
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from product_analytics.client import AnalyticsClient
from product_analytics.config import AnalyticsConfig

from tests.fixtures.ingest_server import ingest_server  # noqa: F401


class FakePeople:
    """Stand-in for the native SDK's people/profile API"""

    def __init__(self):
        self.sets = []

    def set(self, properties):
        self.sets.append(dict(properties))


class FakeNativeSDK:
    """Records every call the native bridge transport makes"""

    def __init__(self, token, track_automatic_events):
        self.token = token
        self.track_automatic_events = track_automatic_events
        self.initialized = False
        self.super_properties = {}
        self.tracked = []
        self.identified = []
        self.people = FakePeople()
        self.reset_count = 0
        self.flush_count = 0

    def init(self):
        self.initialized = True

    def registerSuperProperties(self, properties):
        self.super_properties.update(properties)

    def track(self, name, properties):
        self.tracked.append((name, dict(properties)))

    def identify(self, user_id):
        self.identified.append(user_id)

    def getPeople(self):
        return self.people

    def reset(self):
        self.reset_count += 1

    def flush(self):
        self.flush_count += 1


class BrokenNativeSDK(FakeNativeSDK):
    """Native SDK whose init() blows up"""

    def init(self):
        raise RuntimeError("native module not linked")


@pytest.fixture
def analytics_config(tmp_path):
    """Config that never touches the network or the user's Desktop"""
    return AnalyticsConfig(
        token="test-token",
        api_host="http://127.0.0.1:9",
        app_version="2.3.4",
        build_number="42",
        native_bridge_module=None,
        http_timeout=1,
        debug=False,
        debug_log_file=tmp_path / "debug.log",
    )


@pytest.fixture
def http_client(analytics_config):
    """Client forced onto the HTTP fallback, sending inline"""
    return AnalyticsClient(analytics_config, bridge_probe=lambda: None, background=False)


@pytest.fixture
def native_client(analytics_config):
    """Client using the fake native SDK"""
    return AnalyticsClient(analytics_config, bridge_probe=lambda: FakeNativeSDK, background=False)


@pytest.fixture
def fake_clock():
    """Manually advanced clock for duration tests"""
    class Clock:
        def __init__(self):
            self.now = 1_700_000_000.0

        def __call__(self):
            return self.now

        def advance(self, seconds):
            self.now += seconds

    return Clock()
