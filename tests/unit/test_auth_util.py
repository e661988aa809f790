"""Password hashing and session cookie signing."""
from postboard.auth import auth_util


def test_hash_is_salted_and_verifiable():
    first = auth_util.hash_password("secretpw")
    second = auth_util.hash_password("secretpw")

    assert first != second, "Two hashes of the same password must differ (salt)"
    assert auth_util.verify_password("secretpw", first)
    assert auth_util.verify_password("secretpw", second)
    assert not auth_util.verify_password("wrongpw", first)


def test_verify_rejects_oversized_password():
    password_hash = auth_util.hash_password("secretpw")
    assert not auth_util.verify_password("x" * 100, password_hash)


def test_session_ids_are_unique():
    ids = {auth_util.new_session_id() for _ in range(50)}
    assert len(ids) == 50


def test_signed_session_id_roundtrip():
    session_id = auth_util.new_session_id()
    assert auth_util.unsign_session_id(auth_util.sign_session_id(session_id)) == session_id


def test_tampered_cookie_is_rejected():
    signed = auth_util.sign_session_id("abc")
    assert auth_util.unsign_session_id(signed.replace("abc", "abd", 1)) is None
    assert auth_util.unsign_session_id(signed + "0") is None
    assert auth_util.unsign_session_id("no-signature") is None
    assert auth_util.unsign_session_id("") is None
    assert auth_util.unsign_session_id(None) is None
