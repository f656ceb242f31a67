"""
fbx_exporter
============
Authenticated client for the Freebox local HTTP API, used to feed a
metrics exporter.

Package structure
-----------------
fbx_exporter/
├── __init__.py       – package init and public API
├── config.py         – configuration constants and environment overrides
├── exceptions.py     – error taxonomy
├── identity.py       – application identity and app token
├── logging_setup.py  – package logger and colored console handler
├── cli.py            – argparse CLI (``python -m fbx_exporter``)
├── network/          – pinned-TLS transport, response envelope decoding
└── auth/             – challenge-response login, session refresh, backoff

Quick start
-----------
    from fbx_exporter import (
        ApplicationIdentity, Authenticator, SessionManager, Transport,
        api_url, load_app_token,
    )

    transport = Transport()
    identity = ApplicationIdentity.from_environment()
    auth = Authenticator.for_api(
        transport, load_app_token("token.txt"), identity,
        base_url="https://mafreebox.freebox.fr", api_version=8,
    )
    session = SessionManager(transport, auth)
    system = session.get(api_url("https://mafreebox.freebox.fr", 8, "system/"))
"""

from .config import __version__
from .exceptions import (
    ApiError,
    AuthenticationError,
    AuthRequiredError,
    FbxError,
    HttpStatusError,
    IdentityError,
    InvalidTokenError,
    ResponseDecodeError,
    TrustStoreError,
)
from .identity import ApplicationIdentity, AppToken, load_app_token
from .network import Transport, api_url
from .auth import Authenticator, RetryPolicy, SessionInfo, SessionManager

__all__ = [
    "__version__",
    "ApiError",
    "AppToken",
    "ApplicationIdentity",
    "AuthRequiredError",
    "AuthenticationError",
    "Authenticator",
    "FbxError",
    "HttpStatusError",
    "IdentityError",
    "InvalidTokenError",
    "ResponseDecodeError",
    "RetryPolicy",
    "SessionInfo",
    "SessionManager",
    "Transport",
    "TrustStoreError",
    "api_url",
    "load_app_token",
]
