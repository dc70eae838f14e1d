"""
Analytics Configuration Example

Copy this file to 'analytics_config.py' and fill in your project settings.
Anything left out falls back to the built-in defaults.
"""

# Project token and ingestion host
MIXPANEL_TOKEN = 'your-project-token-here'
API_HOST = 'https://api.mixpanel.com'

# Reported with every event
APP_VERSION = '1.0.0'
BUILD_NUMBER = '1'

# Module providing the host's native SDK class (set to None to always use HTTP)
NATIVE_BRIDGE_MODULE = 'mixpanel_native'

# HTTP fallback request timeout in seconds
HTTP_TIMEOUT = 5

# Telemetry settings
TELEMETRY_ENABLED_BY_DEFAULT = True
TELEMETRY_DEBUG = False
# DEBUG_LOG_FILE = '/path/to/product_analytics_debug.log'
