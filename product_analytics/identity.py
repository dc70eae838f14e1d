"""
Identity Store

Holds the current distinct id / resolved user id and the super properties
merged into every event. Pure state, no I/O.
"""

import platform
import secrets
import sys
import threading
import time
from typing import Optional, Dict, Any


def platform_tag() -> str:
    """Short lowercase platform name, e.g. 'macos', 'linux', 'windows'"""
    os_name = platform.system()
    if os_name == "Darwin":
        return "macos"
    return os_name.lower() or "unknown"


def generate_device_id(tag: Optional[str] = None) -> str:
    """
    Generate an anonymous device identifier

    Format: ``<platform>_<unix millis>_<random hex>``. The random part makes
    two calls within the same millisecond distinct.
    """
    tag = tag or platform_tag()
    return f"{tag}_{int(time.time() * 1000)}_{secrets.token_hex(8)}"


def collect_super_properties(app_version: str, build_number: str) -> Dict[str, Any]:
    """Collect the properties attached to every event for this process"""
    os_name = platform.system()
    if os_name == "Darwin":
        # macOS - report the user-facing version rather than the kernel release
        mac_ver = platform.mac_ver()[0]
        os_name = "macOS"
        os_version = mac_ver if mac_ver else platform.release()
    else:
        os_version = platform.release()

    return {
        "platform": platform_tag(),
        "app_version": app_version,
        "build_number": build_number,
        "$os": os_name,
        "$os_version": os_version,
        "$model": platform.machine(),
        "python_version": f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
    }


class IdentityStore:
    """Current identity and super properties for the process"""

    def __init__(self):
        self.distinct_id: Optional[str] = None
        self.user_id: Optional[str] = None
        self.super_properties: Dict[str, Any] = {}
        self._lock = threading.Lock()

    def ensure_anonymous_id(self) -> str:
        """Generate an anonymous distinct id unless one is already set"""
        with self._lock:
            if not self.distinct_id:
                self.distinct_id = generate_device_id()
            return self.distinct_id

    def identify(self, user_id: str) -> Optional[str]:
        """
        Switch to a resolved user id

        Returns:
            The anonymous distinct id being replaced, or None when the
            previous id was already a resolved user (or nothing was set)
        """
        with self._lock:
            previous = self.distinct_id if self.user_id is None else None
            self.user_id = user_id
            self.distinct_id = user_id
            return previous

    def reset(self) -> str:
        """Forget the resolved user and start over with a fresh anonymous id"""
        with self._lock:
            self.user_id = None
            self.distinct_id = generate_device_id()
            return self.distinct_id

    def register(self, properties: Dict[str, Any]):
        self.super_properties = dict(properties)

    def merge_properties(self, properties: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Super properties overlaid with event properties (event values win)"""
        merged = dict(self.super_properties)
        if properties:
            merged.update(properties)
        return merged
