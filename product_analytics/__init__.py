"""
Product Analytics

Best-effort usage analytics: events and identity delivered through a native
SDK bridge when the host provides one, or straight over HTTP otherwise.
"""

from .client import AnalyticsClient, TransportMode
from .config import AnalyticsConfig, load_config
from .events import ProductEvents
from .lifecycle import AppStateTracker

__all__ = [
    'AnalyticsClient',
    'AnalyticsConfig',
    'AppStateTracker',
    'ProductEvents',
    'TransportMode',
    'load_config',
]
