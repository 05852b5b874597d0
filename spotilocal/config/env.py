"""
Environment overrides for spotilocal configuration

Every configuration constant can be replaced by an environment variable
named ``SPOTILOCAL_<NAME>``, e.g. ``SPOTILOCAL_PORT=4371``.
"""

import os
from typing import Optional

ENV_PREFIX = 'SPOTILOCAL_'


def _raw(name: str) -> Optional[str]:
    value = os.getenv(f"{ENV_PREFIX}{name}", '')
    value = value.strip()
    return value if value else None


def env_str(name: str, default: str) -> str:
    """Get a string setting."""
    value = _raw(name)
    return value if value is not None else default


def env_int(name: str, default: int) -> int:
    """Get an integer setting."""
    value = _raw(name)
    return int(value) if value is not None else default


def env_float(name: str, default: float) -> float:
    """Get a float setting (seconds, mostly)."""
    value = _raw(name)
    return float(value) if value is not None else default
