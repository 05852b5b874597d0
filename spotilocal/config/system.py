"""
System-Wide Configuration
"""

from .env import env_str, env_float

# =============================================================================
# Logging
# =============================================================================
LOG_LEVEL = env_str('LOG_LEVEL', 'INFO')  # DEBUG, INFO, WARNING, ERROR, CRITICAL

# =============================================================================
# Threading
# =============================================================================
THREAD_JOIN_TIMEOUT = env_float('THREAD_JOIN_TIMEOUT', 5.0)  # seconds - max time to wait for the poll thread
