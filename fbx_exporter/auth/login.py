"""Challenge-response login against the Freebox API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..config import DEFAULT_API_VERSION, LOGIN_PATH, SESSION_PATH
from ..exceptions import ResponseDecodeError
from ..identity import ApplicationIdentity, AppToken
from ..logging_setup import log
from ..network.client import Transport, api_url
from .password import derive_password


@dataclass(frozen=True)
class SessionInfo:
    """A session token and the challenge it was obtained with."""

    session_token: str
    challenge: str


def _require_str(result: Any, key: str, url: str) -> str:
    value = result.get(key) if isinstance(result, dict) else None
    if not isinstance(value, str):
        raise ResponseDecodeError(f"response from {url} has no {key!r} string")
    return value


class Authenticator:
    """
    Two-step login: fetch a challenge, then trade HMAC(app_token, challenge)
    for a session token.
    """

    def __init__(
        self,
        transport: Transport,
        app_token: AppToken,
        identity: ApplicationIdentity,
        challenge_url: str,
        session_url: str,
    ) -> None:
        self.transport = transport
        self.identity = identity
        self.challenge_url = challenge_url
        self.session_url = session_url
        self._app_token = app_token

    @classmethod
    def for_api(
        cls,
        transport: Transport,
        app_token: AppToken,
        identity: ApplicationIdentity,
        base_url: str,
        api_version: int = DEFAULT_API_VERSION,
    ) -> Authenticator:
        return cls(
            transport,
            app_token,
            identity,
            challenge_url=api_url(base_url, api_version, LOGIN_PATH),
            session_url=api_url(base_url, api_version, SESSION_PATH),
        )

    def get_challenge(self) -> str:
        log.debug("GET challenge: %s", self.challenge_url)
        result = self.transport.get(self.challenge_url)
        challenge = _require_str(result, "challenge", self.challenge_url)
        log.debug("Challenge: %s", challenge)
        return challenge

    def get_session_token(self, challenge: str) -> str:
        log.debug("POST session: %s", self.session_url)
        payload = {
            "app_id": self.identity.app_id,
            "password": derive_password(self._app_token.value, challenge),
        }
        result = self.transport.post(self.session_url, payload)
        return _require_str(result, "session_token", self.session_url)

    def login(self) -> SessionInfo:
        challenge = self.get_challenge()
        return SessionInfo(
            session_token=self.get_session_token(challenge),
            challenge=challenge,
        )
