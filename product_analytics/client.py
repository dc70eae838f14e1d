"""
Analytics Client

Public surface used by the rest of the app: init, identify,
set_user_properties, track, track_screen and reset. The transport (native
bridge or HTTP fallback) is chosen once in init() and never re-evaluated.
Nothing here raises into the host app; failures are logged and dropped.
"""

import threading
import time
from enum import Enum
from typing import Optional, Dict, Any, Callable

from .config import AnalyticsConfig, load_config
from .encoding import Event, ProfileUpdate, utc_timestamp
from .identity import IdentityStore, collect_super_properties
from .session import SessionTracker
from .transports.http import HTTPTransport
from .transports.native import NativeBridgeTransport, probe_native_bridge

LIFECYCLE_INIT_EVENT = "$mp_init"
SCREEN_VIEWED_EVENT = "screen_viewed"


class TransportMode(Enum):
    UNINITIALIZED = "uninitialized"
    NATIVE = "native"
    HTTP_FALLBACK = "http_fallback"


class AnalyticsClient:
    """Best-effort product analytics client"""

    def __init__(
        self,
        config: Optional[AnalyticsConfig] = None,
        bridge_probe: Optional[Callable[[], Any]] = None,
        background: bool = True,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize analytics client (no I/O until init())

        Args:
            config: Settings; loaded from analytics_config.py when omitted
            bridge_probe: Callable returning the native SDK class or None
            background: If True, HTTP sends run on daemon threads (non-blocking)
            clock: Time source for session/duration tracking
        """
        self.config = config or load_config()

        self.identity = IdentityStore()
        self.session = SessionTracker(clock)
        self.mode = TransportMode.UNINITIALIZED
        self.transport = None
        self.telemetry_enabled = self.config.enabled_by_default
        self.background = background

        self._bridge_probe = bridge_probe or (
            lambda: probe_native_bridge(self.config.native_bridge_module, self.config.debug_log)
        )
        self._init_lock = threading.Lock()

    # ------------------------------------------------------------------
    # Initialization / transport selection
    # ------------------------------------------------------------------

    def init(self):
        """Select the transport and register super properties (once)"""
        with self._init_lock:
            if self.mode is not TransportMode.UNINITIALIZED:
                print("[Analytics] Already initialized")
                return

            self.identity.ensure_anonymous_id()
            self.identity.register(
                collect_super_properties(self.config.app_version, self.config.build_number)
            )

            native = self._create_native_transport()
            if native is not None:
                if self.identity.user_id:
                    # identify() ran before init; the SDK only knows its own anonymous id
                    self._dispatch("Identify", native.identify, self.identity.user_id, None)
                self.transport = native
                self.mode = TransportMode.NATIVE
                self.session.start()
                print("[Analytics] Native bridge initialized successfully")
                return

            self.transport = HTTPTransport(self.config, background=self.background)
            self.mode = TransportMode.HTTP_FALLBACK
            self.session.start()
            print("[Analytics] Using HTTP fallback transport")

        self.track(LIFECYCLE_INIT_EVENT, {"method": HTTPTransport.name})

    def _create_native_transport(self) -> Optional[NativeBridgeTransport]:
        try:
            sdk_class = self._bridge_probe()
        except Exception as e:
            print(f"[Analytics] Native bridge probe failed: {e}")
            return None

        if sdk_class is None:
            self.config.debug_log("Native bridge not available")
            return None

        try:
            transport = NativeBridgeTransport.create(sdk_class, self.config.token)
            transport.register_super_properties(self.identity.super_properties)
            return transport
        except Exception as e:
            print(f"[Analytics] Native bridge initialization error: {e}")
            return None

    @property
    def is_initialized(self) -> bool:
        return self.mode is not TransportMode.UNINITIALIZED

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    def identify(self, user_id: str, properties: Optional[Dict[str, Any]] = None):
        """Attribute all further events to user_id and optionally set profile properties"""
        previous_id = self.identity.identify(user_id)

        transport = self.transport
        if transport is None:
            print(f"[Analytics] Not initialized - identify recorded locally only: {user_id}")
            return
        if not self.telemetry_enabled:
            return

        self._dispatch("Identify", transport.identify, user_id, previous_id)
        if properties:
            self._dispatch(
                "Identify",
                transport.send_profile_update,
                ProfileUpdate(distinct_id=user_id, properties=dict(properties)),
            )
        self.config.debug_log(f"User identified: {user_id}")

    def set_user_properties(self, properties: Dict[str, Any]):
        """Set profile properties on the current distinct id"""
        transport = self.transport
        if transport is None:
            print(f"[Analytics] Not initialized - setUserProperties dropped: {properties}")
            return
        if not self.telemetry_enabled:
            return

        update = ProfileUpdate(distinct_id=self.identity.distinct_id, properties=dict(properties))
        self._dispatch("setUserProperties", transport.send_profile_update, update)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def track(self, event_name: str, properties: Optional[Dict[str, Any]] = None):
        """Send an event enriched with super properties and a timestamp"""
        transport = self.transport
        if transport is None:
            print(f"[Analytics] Not initialized - track dropped: {event_name}")
            return
        if not self.telemetry_enabled:
            return

        timestamp = utc_timestamp()
        enhanced = dict(properties or {})
        enhanced["timestamp"] = timestamp

        event = Event(
            name=event_name,
            distinct_id=self.identity.distinct_id,
            properties=self.identity.merge_properties(enhanced),
            timestamp=timestamp,
        )
        self._dispatch("Track", transport.send_event, event)
        self.config.debug_log(f"Tracked: {event_name}")

    def track_screen(self, screen_name: str, properties: Optional[Dict[str, Any]] = None):
        """Track a screen view with the previous screen as context"""
        # Rotate first so the event carries the new current / old previous pair
        _, previous = self.session.rotate_screen(screen_name)

        screen_properties = {
            "screen_name": screen_name,
            "previous_screen": previous,
        }
        if properties:
            screen_properties.update(properties)
        self.track(SCREEN_VIEWED_EVENT, screen_properties)

    def reset(self):
        """Forget screen history and identity (call on logout)"""
        self.session.clear_screens()

        transport = self.transport
        if transport is None:
            print("[Analytics] Not initialized - reset cleared session state only")
            return

        self._dispatch("Reset", transport.reset, self.identity)
        self.config.debug_log("Reset complete")

    def flush(self):
        """Ask the transport to deliver anything it buffers"""
        if self.transport is not None:
            self._dispatch("Flush", self.transport.flush)

    # ------------------------------------------------------------------
    # Preferences / transparency
    # ------------------------------------------------------------------

    def set_enabled(self, enabled: bool):
        """Enable or disable telemetry for this process"""
        self.telemetry_enabled = enabled
        print(f"[Analytics] Telemetry {'enabled' if enabled else 'disabled'}")

    def get_user_info(self) -> Dict[str, Any]:
        """Get identity info for display in settings (for transparency)"""
        return {
            "distinct_id": self.identity.distinct_id,
            "user_id": self.identity.user_id,
            "transport": self.mode.value,
            "enabled": self.telemetry_enabled,
            "session_started_at": self.session.started_at,
        }

    def get_session_duration(self) -> int:
        return self.session.session_duration()

    def get_onboarding_duration(self) -> int:
        return self.session.elapsed("onboarding")

    def _dispatch(self, label: str, operation: Callable, *args):
        try:
            operation(*args)
        except Exception as e:
            # Never crash the host app over analytics
            print(f"[Analytics] {label} error: {e}")
