"""Analytics transports"""

from .http import HTTPTransport
from .native import NativeBridgeTransport, probe_native_bridge

__all__ = ['HTTPTransport', 'NativeBridgeTransport', 'probe_native_bridge']
