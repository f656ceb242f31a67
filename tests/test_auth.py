"""
Tests for the authentication module – password derivation and login exchange.
"""

import unittest
from unittest.mock import MagicMock

import requests

from fbx_exporter.auth.login import Authenticator, SessionInfo
from fbx_exporter.auth.password import derive_password
from fbx_exporter.config import APP_ID
from fbx_exporter.exceptions import InvalidTokenError, ResponseDecodeError
from fbx_exporter.identity import ApplicationIdentity, AppToken

BASE = "https://mafreebox.freebox.fr"
CHALLENGE_URL = f"{BASE}/api/v8/login/"
SESSION_URL = f"{BASE}/api/v8/login/session/"


def _identity():
    return ApplicationIdentity.from_environment(
        environ={}, hostname_resolver=lambda: "test-host",
    )


class TestDerivePassword(unittest.TestCase):
    def test_known_vector(self):
        self.assertEqual(
            derive_password(b"secret", "abc123"),
            "8657345ce1d0a7304b31540a34ec4355a86c2b69",
        )

    def test_rfc2202_vector(self):
        self.assertEqual(
            derive_password(b"Jefe", "what do ya want for nothing?"),
            "effcdf6ae5eb2fa2d27416d5f184df9c259a7c79",
        )

    def test_challenge_is_not_trimmed(self):
        self.assertNotEqual(
            derive_password(b"secret", " abc123 "),
            derive_password(b"secret", "abc123"),
        )

    def test_lowercase_hex(self):
        password = derive_password(b"secret", "abc123")
        self.assertEqual(len(password), 40)
        self.assertEqual(password, password.lower())


class TestAuthenticator(unittest.TestCase):
    def setUp(self):
        self.transport = MagicMock()
        self.transport.get.return_value = {"challenge": "abc123", "logged_in": False}
        self.transport.post.return_value = {"session_token": "session-1"}
        self.auth = Authenticator.for_api(
            self.transport, AppToken(b"secret"), _identity(), BASE, 8,
        )

    def test_for_api_builds_login_urls(self):
        self.assertEqual(self.auth.challenge_url, CHALLENGE_URL)
        self.assertEqual(self.auth.session_url, SESSION_URL)

    def test_get_challenge(self):
        self.assertEqual(self.auth.get_challenge(), "abc123")
        self.transport.get.assert_called_once_with(CHALLENGE_URL)

    def test_get_session_token_posts_app_id_and_password(self):
        self.assertEqual(self.auth.get_session_token("abc123"), "session-1")
        self.transport.post.assert_called_once_with(
            SESSION_URL,
            {"app_id": APP_ID, "password": "8657345ce1d0a7304b31540a34ec4355a86c2b69"},
        )

    def test_login_returns_session_info(self):
        info = self.auth.login()
        self.assertEqual(info, SessionInfo(session_token="session-1", challenge="abc123"))

    def test_missing_challenge_is_decode_error(self):
        self.transport.get.return_value = {"logged_in": False}
        with self.assertRaises(ResponseDecodeError):
            self.auth.get_challenge()

    def test_missing_session_token_is_decode_error(self):
        self.transport.post.return_value = {"challenge": "other"}
        with self.assertRaises(ResponseDecodeError):
            self.auth.login()

    def test_transport_error_propagates_unchanged(self):
        error = requests.ConnectionError("unreachable")
        self.transport.get.side_effect = error
        with self.assertRaises(requests.ConnectionError) as ctx:
            self.auth.login()
        self.assertIs(ctx.exception, error)
        self.transport.post.assert_not_called()

    def test_rejected_password_propagates(self):
        self.transport.post.side_effect = InvalidTokenError(
            "Invalid token", error_code="invalid_token", status_code=403,
        )
        with self.assertRaises(InvalidTokenError):
            self.auth.login()

    def test_session_info_is_immutable(self):
        info = self.auth.login()
        with self.assertRaises(AttributeError):
            info.session_token = "tampered"


if __name__ == "__main__":
    unittest.main()
