"""Password derivation for the challenge-response login."""

import hashlib
import hmac


def derive_password(app_token: bytes, challenge: str) -> str:
    """
    Hex-encoded HMAC-SHA1 of *challenge* keyed with the app token.

    The challenge is hashed exactly as received (UTF-8, no trimming).
    """
    return hmac.new(app_token, challenge.encode("utf-8"), hashlib.sha1).hexdigest()
