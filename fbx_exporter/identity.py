"""Application identity and app token handling."""

from __future__ import annotations

import json
import os
import socket
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .config import APP_ID, APP_VERSION, DEFAULT_APP_NAME, ENV_APP_NAME, ENV_APP_TOKEN
from .exceptions import FbxError, IdentityError


@dataclass(frozen=True)
class ApplicationIdentity:
    """
    Static description of this application, as registered with the box.

    Build it once at startup with from_environment() and hand the same
    instance to everything that needs it.
    """

    app_id: str
    app_name: str
    app_version: str
    device_name: str

    @classmethod
    def from_environment(
        cls,
        environ: Mapping[str, str] | None = None,
        hostname_resolver: Callable[[], str] | None = None,
    ) -> ApplicationIdentity:
        """
        Derive the identity from the environment and the host name.

        FBX_APPNAME overrides the application name. There is no fallback
        device name: if the host name cannot be resolved, IdentityError is
        raised and the process should not start.
        """
        if environ is None:
            environ = os.environ
        if hostname_resolver is None:
            hostname_resolver = socket.gethostname

        try:
            hostname = hostname_resolver()
        except OSError as exc:
            raise IdentityError(f"could not determine host name: {exc}") from exc
        if not hostname:
            raise IdentityError("host name is empty")

        return cls(
            app_id=APP_ID,
            app_name=environ.get(ENV_APP_NAME) or DEFAULT_APP_NAME,
            app_version=APP_VERSION,
            device_name=hostname,
        )

    def as_authorize_payload(self) -> dict[str, str]:
        """Body of the one-time authorization request."""
        return {
            "app_id": self.app_id,
            "app_name": self.app_name,
            "app_version": self.app_version,
            "device_name": self.device_name,
        }


@dataclass(frozen=True)
class AppToken:
    """Long-lived secret obtained when the application was authorized."""

    value: bytes = field(repr=False)

    def __post_init__(self) -> None:
        if isinstance(self.value, str):
            object.__setattr__(self, "value", self.value.encode("utf-8"))
        if not self.value:
            raise FbxError("app token is empty")


def load_app_token(path: str | Path | None = None) -> AppToken:
    """
    Load the app token from *path*, or from FBX_APP_TOKEN when no path is given.

    The file may hold the bare token or a JSON object with an "app_token" key.
    Any other JSON document is rejected.
    """
    if path is None:
        raw = os.environ.get(ENV_APP_TOKEN, "")
        if not raw:
            raise FbxError(f"no token file given and {ENV_APP_TOKEN} is not set")
        return AppToken(raw.strip())

    text = Path(path).read_text(encoding="utf-8").strip()
    if text[:1] in ("{", "[", "\""):
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise FbxError(f"token file {path} is not valid JSON: {exc}") from exc
        token = data.get("app_token") if isinstance(data, dict) else None
        if not isinstance(token, str) or not token.strip():
            raise FbxError(f"token file {path} has no \"app_token\" string")
        text = token.strip()
    return AppToken(text)
