"""Project-level configuration and path helpers."""

import os
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_LOG_PATH = LOGS_DIR / "flamespan.log"

# Seconds to wait for the registry lock before degrading
DEFAULT_LOCK_TIMEOUT = 1.0
LOCK_TIMEOUT_ENV = "FLAMESPAN_LOCK_TIMEOUT"


def resolve_lock_timeout(env_value: str | None = None) -> float:
    """Resolve FLAMESPAN_LOCK_TIMEOUT to a non-negative number of seconds."""
    if env_value is None:
        env_value = os.getenv(LOCK_TIMEOUT_ENV)

    if not env_value:
        return DEFAULT_LOCK_TIMEOUT

    try:
        timeout = float(env_value)
    except ValueError:
        return DEFAULT_LOCK_TIMEOUT

    return timeout if timeout >= 0 else DEFAULT_LOCK_TIMEOUT
