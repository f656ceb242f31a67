"""
HTTP transport for talking to the Freebox API.

Provides a requests.Session whose HTTPS connections trust only the embedded
root certificates, plus decoding of the device's JSON response envelope.
"""

from __future__ import annotations

import ssl
import time
from collections.abc import Callable, Iterable
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..config import (
    APP_VERSION,
    AUTH_REQUIRED,
    DEFAULT_API_BASE_URL,
    DEFAULT_APP_NAME,
    IDLE_TIMEOUT,
    INVALID_TOKEN,
    POOL_MAXSIZE,
    REQUEST_TIMEOUT,
)
from ..exceptions import (
    ApiError,
    AuthRequiredError,
    HttpStatusError,
    InvalidTokenError,
    ResponseDecodeError,
    TrustStoreError,
)
from ..logging_setup import log
from .certs import ROOT_CERTIFICATES

RequestCallback = Callable[[requests.Request], None]

_ERROR_CLASSES: dict[str, type[ApiError]] = {
    AUTH_REQUIRED: AuthRequiredError,
    INVALID_TOKEN: InvalidTokenError,
}


def build_ssl_context(certificates: Iterable[str] = ROOT_CERTIFICATES) -> ssl.SSLContext:
    """
    Return a client SSLContext seeded with *certificates* and nothing else.

    Args:
        certificates: PEM encoded root certificates, one per item

    Returns:
        SSLContext requiring verification against those roots

    Raises:
        TrustStoreError: a certificate could not be parsed
    """
    certificates = tuple(certificates)
    if not certificates:
        raise TrustStoreError("no root certificates to trust")
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    for index, pem in enumerate(certificates):
        try:
            context.load_verify_locations(cadata=pem)
        except (ssl.SSLError, ValueError) as exc:
            raise TrustStoreError(
                f"could not load embedded root certificate #{index}: {exc}"
            ) from exc

    loaded = context.cert_store_stats()["x509_ca"]
    if loaded != len(certificates):
        raise TrustStoreError(
            f"trust store holds {loaded} CA certificate(s), expected {len(certificates)}"
        )
    return context


class PinnedTLSAdapter(HTTPAdapter):
    """HTTPAdapter whose pool manager uses a fixed SSLContext."""

    def __init__(self, ssl_context: ssl.SSLContext, **kwargs: Any) -> None:
        # HTTPAdapter.__init__ builds the pool manager, so this must come first
        self._ssl_context = ssl_context
        super().__init__(**kwargs)

    def init_poolmanager(self, connections, maxsize, block=False, **pool_kwargs):
        pool_kwargs["ssl_context"] = self._ssl_context
        super().init_poolmanager(connections, maxsize, block=block, **pool_kwargs)


def api_url(
    base_url: str,
    api_version: int,
    path: str,
    api_base_url: str = DEFAULT_API_BASE_URL,
) -> str:
    """
    Build the URL of an API endpoint.

    Args:
        base_url: Scheme and host of the box (e.g. 'https://mafreebox.freebox.fr')
        api_version: Major API version, 1 or greater
        path: Endpoint path relative to the versioned root (e.g. 'login/')
        api_base_url: API root advertised by the box

    Returns:
        Full URL string (e.g. 'https://mafreebox.freebox.fr/api/v8/login/')
    """
    if api_version < 1:
        raise ValueError(f"invalid API version {api_version}")
    root = api_base_url.strip("/")
    return f"{base_url.rstrip('/')}/{root}/v{api_version}/{path.lstrip('/')}"


def decode_response(resp: requests.Response) -> Any:
    """
    Unwrap the device's ``{"success", "result", "error_code", "msg"}`` envelope.

    Returns the ``result`` member on success. A JSON body without a
    ``success`` member is returned unchanged.
    """
    try:
        body = resp.json()
    except ValueError as exc:
        if not resp.ok:
            raise HttpStatusError(
                f"HTTP {resp.status_code} from {resp.url}",
                status_code=resp.status_code,
            ) from exc
        raise ResponseDecodeError(f"invalid JSON from {resp.url}: {exc}") from exc

    if isinstance(body, dict) and "success" in body:
        if body["success"]:
            return body.get("result", {})
        error_code = body.get("error_code")
        cls = _ERROR_CLASSES.get(error_code, ApiError)
        raise cls(
            body.get("msg") or f"request to {resp.url} failed",
            error_code=error_code,
            status_code=resp.status_code,
        )

    if not resp.ok:
        raise HttpStatusError(
            f"HTTP {resp.status_code} from {resp.url}",
            status_code=resp.status_code,
        )
    return body


class Transport:
    """
    JSON GET/POST over a pooled requests.Session.

    One instance is meant to be shared by every caller in the process.
    Network errors (requests.RequestException) are not caught here.
    """

    def __init__(
        self,
        timeout: float = REQUEST_TIMEOUT,
        pool_maxsize: int = POOL_MAXSIZE,
        idle_timeout: float = IDLE_TIMEOUT,
        certificates: Iterable[str] = ROOT_CERTIFICATES,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        for name, value in (
            ("timeout", timeout),
            ("pool_maxsize", pool_maxsize),
            ("idle_timeout", idle_timeout),
        ):
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value!r}")

        self.timeout = timeout
        self.idle_timeout = idle_timeout
        self._clock = clock
        self._last_used: float | None = None

        self.ssl_context = build_ssl_context(certificates)
        # No transport-level retries
        self._adapter = PinnedTLSAdapter(
            self.ssl_context,
            pool_maxsize=pool_maxsize,
            max_retries=Retry(total=0, read=False),
        )
        self._session = requests.Session()
        self._session.mount("http://", self._adapter)
        self._session.mount("https://", self._adapter)
        self._session.headers.update({
            "User-Agent": f"{DEFAULT_APP_NAME}/{APP_VERSION}",
            "Accept": "application/json",
        })

    def get(self, url: str, callbacks: Iterable[RequestCallback] = ()) -> Any:
        return self._send("GET", url, None, callbacks)

    def post(
        self,
        url: str,
        payload: Any,
        callbacks: Iterable[RequestCallback] = (),
    ) -> Any:
        return self._send("POST", url, payload, callbacks)

    def close(self) -> None:
        self._session.close()

    def _send(
        self,
        method: str,
        url: str,
        payload: Any,
        callbacks: Iterable[RequestCallback],
    ) -> Any:
        request = requests.Request(method, url, json=payload)
        for callback in callbacks:
            callback(request)

        self._expire_idle_connections()
        prepared = self._session.prepare_request(request)
        log.debug("%s %s", method, url)
        # send() skips the environment merge, so REQUESTS_CA_BUNDLE cannot
        # widen the trust store
        resp = self._session.send(prepared, timeout=self.timeout, verify=True)
        self._last_used = self._clock()
        return decode_response(resp)

    def _expire_idle_connections(self) -> None:
        last_used = self._last_used
        if last_used is not None and self._clock() - last_used > self.idle_timeout:
            log.debug("Connections idle for more than %.0fs, dropping pool", self.idle_timeout)
            self._adapter.poolmanager.clear()
