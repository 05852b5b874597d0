"""
Local API Configuration
"""

from .env import env_str, env_int, env_float

# =============================================================================
# Helper Connection
# =============================================================================
HOST = env_str('HOST', '127.0.0.1')
PORT = env_int('PORT', 4370)  # the helper listens on 4370-4379
SCHEME = env_str('SCHEME', 'http')
STATUS_PATH = env_str('STATUS_PATH', '/remote/status.json')
REQUEST_TIMEOUT = env_float('REQUEST_TIMEOUT', 5.0)  # seconds

# The helper rejects requests without a browser-like Origin header
ORIGIN = env_str('ORIGIN', 'https://open.spotify.com')

# =============================================================================
# Status Poller Settings
# =============================================================================
POLL_INTERVAL = env_float('POLL_INTERVAL', 1.0)  # seconds between ticks
MAX_CONSECUTIVE_FAILURES = env_int('MAX_CONSECUTIVE_FAILURES', 0)  # 0 = unlimited
