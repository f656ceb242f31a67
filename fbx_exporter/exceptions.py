"""Exceptions raised by the Freebox API client."""

from __future__ import annotations


class FbxError(Exception):
    """Base exception for library errors."""


class TrustStoreError(FbxError):
    """The embedded root certificates could not be loaded."""


class IdentityError(FbxError):
    """The application identity could not be derived from the host."""


class ResponseDecodeError(FbxError):
    """The device answered with something that is not the expected JSON."""


class ApiError(FbxError):
    """The device reported a failure for a request."""

    def __init__(
        self,
        msg: str = "",
        *,
        error_code: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(msg)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.error_code!r}, status={self.status_code})"

    def __str__(self) -> str:
        err_code = f" (error_code={self.error_code})" if self.error_code else ""
        return super().__str__() + err_code


class HttpStatusError(ApiError):
    """Non-2xx response that did not carry an API error envelope."""


class AuthenticationError(ApiError):
    """Base exception for errors fixed by logging in again."""


class AuthRequiredError(AuthenticationError):
    """The request was sent without a session the device accepts."""


class InvalidTokenError(AuthenticationError):
    """The session (or app) token was rejected by the device."""
