"""
This module provides utilities for password hashing and session tokens.
"""
import hashlib
import hmac
import secrets

from passlib.context import CryptContext
from passlib.exc import PasswordSizeError

from postboard.config import SESSION_SECRET

# This allows for easier testing as password hashing can now be easily swapped during testing by
# altering this constant.
CRYPT_CONTEXT = CryptContext(
    schemes=["bcrypt"],
    default="bcrypt",
    truncate_error=True
)

# bcrypt only looks at the first 72 bytes of a secret
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    return CRYPT_CONTEXT.hash(secret=password)


def verify_password(cleartext_password: str, password_hash: str) -> bool:
    try:
        return CRYPT_CONTEXT.verify(secret=cleartext_password, hash=password_hash)
    except PasswordSizeError:
        return False


def new_session_id() -> str:
    return secrets.token_urlsafe(32)


def _signature(session_id: str) -> str:
    return hmac.new(SESSION_SECRET.encode(), session_id.encode(), hashlib.sha256).hexdigest()


def sign_session_id(session_id: str) -> str:
    return f"{session_id}.{_signature(session_id)}"


def unsign_session_id(cookie_value: str | None) -> str | None:
    """Returns the session id carried by a signed cookie, or None if it was tampered with."""
    if not cookie_value:
        return None
    session_id, sep, signature = cookie_value.rpartition(".")
    if not sep or not session_id:
        return None
    if not hmac.compare_digest(signature, _signature(session_id)):
        return None
    return session_id
