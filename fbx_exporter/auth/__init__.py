"""Authentication submodule – login, session management, retry backoff."""

from fbx_exporter.auth.backoff import RetryPolicy
from fbx_exporter.auth.login import Authenticator, SessionInfo
from fbx_exporter.auth.password import derive_password
from fbx_exporter.auth.session import SessionManager

__all__ = [
    "Authenticator",
    "RetryPolicy",
    "SessionInfo",
    "SessionManager",
    "derive_password",
]
