"""
Native Bridge Transport

Thin delegate to a host-supplied analytics SDK. The SDK class is looked up at
startup; when it is missing or fails to initialize the client uses the HTTP
transport instead.
"""

import importlib
from typing import Dict, Any, Callable, Optional

from ..encoding import Event, ProfileUpdate
from ..identity import IdentityStore

SDK_CLASS_NAME = "Mixpanel"


def probe_native_bridge(module_name: Optional[str], debug_log: Optional[Callable[[str], None]] = None):
    """
    Look for the native SDK class

    Returns:
        The SDK class, or None if the module is absent or broken
    """
    if not module_name:
        return None
    try:
        module = importlib.import_module(module_name)
    except ImportError:
        if debug_log:
            debug_log(f"Native bridge module '{module_name}' not available")
        return None
    except Exception as e:
        print(f"[Analytics] Failed to load native bridge module: {e}")
        return None
    return getattr(module, SDK_CLASS_NAME, None)


class NativeBridgeTransport:
    """Forwards every call to the host SDK instance"""

    name = "native"

    def __init__(self, sdk):
        self.sdk = sdk

    @classmethod
    def create(cls, sdk_class, token: str) -> "NativeBridgeTransport":
        """Construct and initialize the SDK; errors propagate to the selector"""
        sdk = sdk_class(token, True)
        sdk.init()
        return cls(sdk)

    def register_super_properties(self, properties: Dict[str, Any]):
        self.sdk.registerSuperProperties(properties)

    def send_event(self, event: Event):
        self.sdk.track(event.name, event.properties)

    def send_profile_update(self, update: ProfileUpdate):
        self.sdk.getPeople().set(update.properties)

    def identify(self, user_id: str, previous_id: Optional[str]):
        # The SDK keeps its own anonymous id and aliases it itself
        self.sdk.identify(user_id)

    def reset(self, identity: IdentityStore):
        # Identity lives inside the SDK; local store is left as is
        self.sdk.reset()

    def flush(self):
        self.sdk.flush()
