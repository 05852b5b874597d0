"""
spotilocal Configuration Package

Configuration split by component:
- local_api: helper connection and status poller settings
- system: logging and threading

You can import specific modules:
    from spotilocal.config import local_api
    print(local_api.HOST, local_api.PORT)

Or use the flat names:
    from spotilocal import config
    print(config.LOCAL_API_HOST, config.POLL_INTERVAL)
"""

from . import local_api
from . import system
from .env import ENV_PREFIX

# =============================================================================
# Flat Exports
# =============================================================================

# Local API Configuration
LOCAL_API_HOST = local_api.HOST
LOCAL_API_PORT = local_api.PORT
LOCAL_API_SCHEME = local_api.SCHEME
LOCAL_API_STATUS_PATH = local_api.STATUS_PATH
LOCAL_API_REQUEST_TIMEOUT = local_api.REQUEST_TIMEOUT
LOCAL_API_ORIGIN = local_api.ORIGIN

# Poller Configuration
POLL_INTERVAL = local_api.POLL_INTERVAL
POLL_MAX_CONSECUTIVE_FAILURES = local_api.MAX_CONSECUTIVE_FAILURES

# System Configuration
LOG_LEVEL = system.LOG_LEVEL
THREAD_JOIN_TIMEOUT = system.THREAD_JOIN_TIMEOUT

# =============================================================================
# Helper Functions
# =============================================================================

def get_config_dict() -> dict:
    """
    Get the effective settings, grouped by config module.
    
    Returns:
        {'local_api': {...}, 'system': {...}}
    """
    return {
        module.__name__.rsplit('.', 1)[-1]: {
            key: getattr(module, key) for key in dir(module) if key.isupper()
        }
        for module in (local_api, system)
    }


def print_config():
    """Print the effective settings and the environment variable overriding each."""
    for section, values in get_config_dict().items():
        print(f"[{section}]")
        for key, value in values.items():
            print(f"  {key} = {value!r}  ({ENV_PREFIX}{key})")


__all__ = [
    # Submodules
    'local_api',
    'system',
    # Helper functions
    'get_config_dict',
    'print_config',
]
