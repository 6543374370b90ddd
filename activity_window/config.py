"""Global configuration for the activity window service.

This module exposes configuration constants via the `Config` class. All values
are read from environment variables with defaults suited to a night-time
window near Wellington, NZ.
"""

import os  # Environment access
import re  # Robust parsing of numeric envs with comments

from .window import Window  # Built from the configured specs


def _env_int(name: str, default: int) -> int:
    """Parse an integer from an environment variable robustly.

    Accepts values like "300" or "300 # five minutes" and returns the first
    integer found. Falls back to default if parsing fails.
    """
    val = os.getenv(name)
    if val is None:
        return default
    s = str(val).strip().strip('"').strip("'")
    m = re.search(r"-?\d+", s)
    if not m:
        return default
    return int(m.group(0))


def _env_float(name: str, default: float) -> float:
    """Parse a float from an environment variable, like `_env_int`."""
    val = os.getenv(name)
    if val is None:
        return default
    s = str(val).strip().strip('"').strip("'")
    m = re.search(r"-?\d+(?:\.\d+)?", s)
    if not m:
        return default
    return float(m.group(0))


def _env_str(name: str, default: str) -> str:
    """Read a string env, stripping whitespace and surrounding quotes."""
    return os.getenv(name, default).strip().strip('"').strip("'")


class Config:
    """Application configuration sourced from environment variables.

    To override a setting, define the corresponding environment variable
    before launching the application.
    """
    # Window edges: "HH:MM" or a duration relative to sunset (start) / sunrise (end)
    WINDOW_START = _env_str("AW_WINDOW_START", "-30m")  # 30 minutes before sunset
    WINDOW_END = _env_str("AW_WINDOW_END", "30m")  # 30 minutes after sunrise

    # Coordinate for sunrise/sunset anchors
    LATITUDE = _env_float("AW_LATITUDE", -41.0)
    LONGITUDE = _env_float("AW_LONGITUDE", 175.0)

    # Interval tick length reported by the status API
    INTERVAL_SEC = _env_int("AW_INTERVAL_SEC", 300)

    # Web server
    HOST = os.getenv("AW_HOST", "0.0.0.0")  # Flask bind host
    PORT = _env_int("AW_PORT", 8000)  # Flask bind port
    DEBUG = os.getenv("AW_DEBUG", "0") == "1"  # Flask debug switch

    @classmethod
    def make_window(cls) -> Window:
        """Build the configured window; raises `ParseError` on bad specs."""
        return Window(cls.WINDOW_START, cls.WINDOW_END, cls.LATITUDE, cls.LONGITUDE)
