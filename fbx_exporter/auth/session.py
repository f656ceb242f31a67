"""
Session management for the Freebox API.

SessionManager holds the current session token, refreshes it when the box
rejects a request, and retries that request once with the new token.

Flow of a call
--------------
1. Send the request with ``X-Fbx-App-Auth: <session_token>``.
2. If the box answers auth_required / invalid_token, wait out the backoff
   window (if one is active) and refresh the session.
3. If the refresh fails, record the failure and raise the refresh error.
4. Otherwise send the request a second and last time.

Concurrent callers that all see an auth failure at once end up doing a
single login: refreshes are serialized by a lock, and a refresh that follows
a successful one by less than REFRESH_DEBOUNCE seconds does nothing.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable, Iterable
from typing import Any

import requests

from ..config import AUTH_HEADER, REFRESH_DEBOUNCE
from ..exceptions import AuthenticationError, FbxError
from ..logging_setup import log
from ..network.client import RequestCallback, Transport
from .backoff import RetryPolicy
from .login import Authenticator, SessionInfo


class SessionManager:
    """
    Authenticated JSON GET/POST on top of a shared Transport.

    The constructor logs in once and raises if that fails. The transport is
    not owned: close() is never called on it from here.
    """

    def __init__(
        self,
        transport: Transport,
        authenticator: Authenticator,
        retry_policy: RetryPolicy | None = None,
        refresh_debounce: float = REFRESH_DEBOUNCE,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._transport = transport
        self._authenticator = authenticator
        self._retry = retry_policy if retry_policy is not None else RetryPolicy(clock=clock)
        self._refresh_debounce = refresh_debounce
        self._clock = clock
        self._sleep = sleep

        self._lock = threading.Lock()
        self._session: SessionInfo | None = None
        # Kept until the next refresh; not used for headers
        self._previous_session: SessionInfo | None = None
        self._last_refresh: float | None = None

        self.refresh()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def session(self) -> SessionInfo | None:
        return self._session

    @property
    def previous_session(self) -> SessionInfo | None:
        return self._previous_session

    @property
    def retry_policy(self) -> RetryPolicy:
        return self._retry

    def get(self, url: str, callbacks: Iterable[RequestCallback] = ()) -> Any:
        callbacks = (self._add_header, *callbacks)
        return self._do(lambda: self._transport.get(url, callbacks))

    def post(
        self,
        url: str,
        payload: Any,
        callbacks: Iterable[RequestCallback] = (),
    ) -> Any:
        callbacks = (self._add_header, *callbacks)
        return self._do(lambda: self._transport.post(url, payload, callbacks))

    def refresh(self) -> None:
        """
        Log in again unless the last successful login is very recent.

        Only one refresh runs at a time; callers that were waiting on the
        lock find the fresh session and return without contacting the box.
        """
        with self._lock:
            if self._last_refresh is not None:
                since = self._clock() - self._last_refresh
                if since < self._refresh_debounce:
                    log.debug("Session updated %.1fs ago. Skipping refresh", since)
                    self._retry.reset()
                    return

            session = self._authenticator.login()
            self._previous_session = self._session
            self._session = session
            self._last_refresh = self._clock()
            self._retry.reset()
            log.debug("Session token refreshed")

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _do(self, action: Callable[[], Any]) -> Any:
        try:
            return action()
        except AuthenticationError as exc:
            log.debug("Request rejected (%s), refreshing session", exc.error_code)

        with self._lock:
            wait = self._retry.should_wait_before_retry()
            delay = self._retry.current_delay
            failures = self._retry.failure_count
        if wait:
            log.warning(
                "Login failure backoff: waiting %.1fs before retry (failure count: %d)",
                delay, failures,
            )
            self._sleep(delay)

        try:
            self.refresh()
        except (FbxError, requests.RequestException):
            with self._lock:
                self._retry.record_failure()
            raise

        return action()

    def _add_header(self, request: requests.Request) -> None:
        # Unlocked read: a header stale by one refresh is fixed by the retry
        session = self._session
        if session is not None:
            request.headers[AUTH_HEADER] = session.session_token
