"""
Analytics Configuration

Loads settings from an optional ``analytics_config.py`` module (see
``analytics_config.example.py``) and provides the debug log used across
the package.
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

DEFAULT_API_HOST = "https://api.mixpanel.com"
DEFAULT_TOKEN = "0ba6bd275e95b8b1c2dc08946f2cdf39"
DEFAULT_NATIVE_BRIDGE_MODULE = "mixpanel_native"
DEFAULT_DEBUG_LOG_FILE = Path.home() / "Desktop" / "product_analytics_debug.log"


@dataclass
class AnalyticsConfig:
    """Resolved analytics settings"""

    token: str = DEFAULT_TOKEN
    api_host: str = DEFAULT_API_HOST
    app_version: str = "1.0.0"
    build_number: str = "1"
    native_bridge_module: Optional[str] = DEFAULT_NATIVE_BRIDGE_MODULE
    http_timeout: float = 5
    enabled_by_default: bool = True
    debug: bool = False
    debug_log_file: Path = DEFAULT_DEBUG_LOG_FILE

    @property
    def track_url(self) -> str:
        return f"{self.api_host.rstrip('/')}/track?ip=1&verbose=1"

    @property
    def engage_url(self) -> str:
        return f"{self.api_host.rstrip('/')}/engage"

    def debug_log(self, message: str):
        """Write debug message to the telemetry log file (only if debug mode is enabled)"""
        if not self.debug:
            return
        try:
            with open(self.debug_log_file, 'a') as f:
                timestamp = datetime.now().isoformat()
                f.write(f"[{timestamp}] {message}\n")
        except OSError:
            pass  # Can't write log - never interrupt the host app


def load_config() -> AnalyticsConfig:
    """
    Load settings from analytics_config.py

    Returns:
        AnalyticsConfig with defaults for anything the module does not set
    """
    try:
        import analytics_config as config
    except ImportError:
        return AnalyticsConfig()
    except Exception as e:
        print(f"[Analytics] Error loading analytics_config - using defaults: {e}")
        return AnalyticsConfig()

    defaults = AnalyticsConfig()
    return AnalyticsConfig(
        token=getattr(config, 'MIXPANEL_TOKEN', defaults.token),
        api_host=getattr(config, 'API_HOST', defaults.api_host),
        app_version=str(getattr(config, 'APP_VERSION', defaults.app_version)),
        build_number=str(getattr(config, 'BUILD_NUMBER', defaults.build_number)),
        native_bridge_module=getattr(config, 'NATIVE_BRIDGE_MODULE', defaults.native_bridge_module),
        http_timeout=getattr(config, 'HTTP_TIMEOUT', defaults.http_timeout),
        enabled_by_default=getattr(config, 'TELEMETRY_ENABLED_BY_DEFAULT', defaults.enabled_by_default),
        debug=getattr(config, 'TELEMETRY_DEBUG', defaults.debug),
        debug_log_file=Path(getattr(config, 'DEBUG_LOG_FILE', defaults.debug_log_file)),
    )

