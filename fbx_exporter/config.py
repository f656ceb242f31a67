"""Configuration constants for the Freebox API client."""

import os
import re

__version__ = "0.0.1"

DEFAULT_BASE_URL = "https://mafreebox.freebox.fr"
DEFAULT_API_BASE_URL = "/api/"
DEFAULT_API_VERSION = 8

APP_ID = "com.github.vintzvintz.fbxexport"
DEFAULT_APP_NAME = "freebox-exporter"
APP_VERSION = __version__

LOGIN_PATH = "login/"
SESSION_PATH = "login/session/"
AUTH_HEADER = "X-Fbx-App-Auth"

# Transport tuning
REQUEST_TIMEOUT = 10.0          # seconds per HTTP call
POOL_MAXSIZE = 10               # idle connections kept per host
IDLE_TIMEOUT = 10 * 60.0        # drop pooled connections unused for this long

# Session handling
REFRESH_DEBOUNCE = 5.0          # a refresh younger than this is not redone
RETRY_MIN_DELAY = 5.0
RETRY_MAX_DELAY = 60.0

# Environment overrides
ENV_APP_NAME = "FBX_APPNAME"
ENV_APP_TOKEN = "FBX_APP_TOKEN"
ENV_RETRY_MIN_DELAY = "FBX_RETRY_MIN_DELAY"
ENV_RETRY_MAX_DELAY = "FBX_RETRY_MAX_DELAY"

# Device error codes that mean "log in again"
AUTH_REQUIRED = "auth_required"
INVALID_TOKEN = "invalid_token"

_DURATION_RE = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")
_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}


def parse_duration(text: str) -> float:
    """
    Parse a Go-style duration string ("5s", "1m30s", "250ms") into seconds.

    Raises ValueError on anything else, including negative durations.
    A bare "0" is accepted.
    """
    text = text.strip()
    if text == "0":
        return 0.0
    if not text:
        raise ValueError("empty duration")
    total = 0.0
    pos = 0
    for m in _DURATION_RE.finditer(text):
        if m.start() != pos:
            break
        total += float(m.group(1)) * _DURATION_UNITS[m.group(2)]
        pos = m.end()
    if pos != len(text):
        raise ValueError(f"invalid duration {text!r}")
    return total


def env_duration(name: str, default: float) -> float:
    """Read a duration from the environment, falling back to *default* if unset or invalid."""
    raw = os.environ.get(name, "")
    if not raw:
        return default
    try:
        return parse_duration(raw)
    except ValueError:
        return default
