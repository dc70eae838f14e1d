"""
HTTP Transport

Sends events and profile updates straight to the ingestion API when no
native bridge is available.
"""

import json
import ssl
import threading
import urllib.request
import urllib.error
from typing import Dict, Any, List, Optional, Union

import certifi

from ..config import AnalyticsConfig
from ..encoding import (
    Event,
    ProfileUpdate,
    build_alias_envelope,
    build_event_envelope,
    build_profile_envelope,
    encode_form,
)
from ..identity import IdentityStore

SSL_CONTEXT = ssl.create_default_context(cafile=certifi.where())

Payload = Union[Dict[str, Any], List[Dict[str, Any]]]


class HTTPTransport:
    """Fallback transport posting directly to the track and engage endpoints"""

    name = "http_fallback"

    def __init__(self, config: AnalyticsConfig, background: bool = True):
        """
        Initialize HTTP transport

        Args:
            config: Resolved analytics settings (token, endpoints, timeout)
            background: If True, each send runs on its own daemon thread
        """
        self.config = config
        self.background = background

    def is_configured(self) -> bool:
        """Check if transport has a token and host"""
        return bool(self.config.token and self.config.api_host)

    def send_event(self, event: Event):
        self._submit(self.config.track_url, [build_event_envelope(event, self.config.token)], event.name)

    def send_profile_update(self, update: ProfileUpdate):
        self._submit(self.config.engage_url, build_profile_envelope(update, self.config.token), "$set")

    def identify(self, user_id: str, previous_id: Optional[str]):
        """Alias the previous anonymous id to the resolved user id"""
        if not previous_id or previous_id == user_id:
            return
        envelope = build_alias_envelope(user_id, previous_id, self.config.token)
        self._submit(self.config.track_url, [envelope], "$create_alias")

    def reset(self, identity: IdentityStore):
        """Drop the resolved user and switch to a fresh anonymous id"""
        identity.reset()

    def register_super_properties(self, properties: Dict[str, Any]):
        """Super properties are merged locally before each send"""

    def flush(self):
        """Nothing is buffered - every send is dispatched immediately"""

    def _submit(self, url: str, payload: Payload, label: str):
        try:
            body = encode_form(payload)
        except (TypeError, ValueError) as e:
            print(f"[Analytics] Could not encode {label}: {e}")
            return

        # Fire-and-forget: at-most-once and unordered on purpose. Nothing is
        # retried or queued; the backend orders events by their own `time`.
        if self.background:
            thread = threading.Thread(target=self.post, args=(url, body, label), daemon=True)
            thread.start()
        else:
            self.post(url, body, label)

    def post(self, url: str, body: bytes, label: str = "payload") -> bool:
        """
        POST an encoded form body

        Returns:
            True if the API accepted it, False otherwise (never raises)
        """
        self.config.debug_log(f"POST {label} to {url} ({len(body)} bytes)")
        try:
            req = urllib.request.Request(
                url,
                data=body,
                headers={
                    "Content-Type": "application/x-www-form-urlencoded",
                    "Accept": "application/json",
                },
                method='POST'
            )

            with urllib.request.urlopen(req, timeout=self.config.http_timeout, context=SSL_CONTEXT) as response:
                raw = response.read().decode('utf-8')

            status = parse_status(raw)
            if status == 1:
                self.config.debug_log(f"{label} accepted")
                return True
            print(f"[Analytics] {label} rejected: {raw}")
            return False

        except urllib.error.HTTPError as e:
            try:
                self.config.debug_log(f"HTTP error body: {e.read().decode('utf-8')}")
            except OSError:
                pass
            print(f"[Analytics] HTTP error sending {label}: {e.code} - {e.reason}")
            return False
        except urllib.error.URLError as e:
            print(f"[Analytics] Connection error sending {label}: {e.reason}")
            return False
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            print(f"[Analytics] Could not decode response for {label}: {e}")
            return False
        except Exception as e:
            # Telemetry must never take the host app down
            print(f"[Analytics] Unexpected error sending {label}: {e}")
            return False


def parse_status(raw: str) -> Optional[int]:
    """
    Read the acceptance status from a response body

    verbose=1 responses are ``{"status": 1, "error": null}``; plain ones are
    just ``1`` or ``0``.
    """
    decoded = json.loads(raw)
    if isinstance(decoded, dict):
        return decoded.get("status")
    if isinstance(decoded, int):
        return decoded
    return None
