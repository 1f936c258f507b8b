"""Tests for admin token verification."""

import time

import pytest

from comicproxy.auth.token import base64url_decode, decode_payload, verify_admin_token
from conftest import TEST_SECRET, _b64url, make_token


def bearer(token: str) -> str:
    return f"Bearer {token}"


def test_valid_admin_token_without_exp():
    """Test that a signed admin token without expiry is accepted."""
    token = make_token({"role": "admin"})
    assert verify_admin_token(bearer(token), TEST_SECRET) is True


def test_valid_admin_token_with_future_exp():
    """Test that an unexpired admin token is accepted."""
    token = make_token({"role": "admin", "exp": int(time.time()) + 3600})
    assert verify_admin_token(bearer(token), TEST_SECRET) is True


def test_expired_token_rejected():
    """Test that an expired token is rejected."""
    token = make_token({"role": "admin", "exp": 1_000})
    assert verify_admin_token(bearer(token), TEST_SECRET, now=2_000) is False


def test_exp_equal_to_now_accepted():
    """Test that expiry is exclusive: exp == now is still valid."""
    token = make_token({"role": "admin", "exp": 2_000})
    assert verify_admin_token(bearer(token), TEST_SECRET, now=2_000) is True


def test_non_admin_role_rejected():
    """Test that a correctly signed non-admin token is rejected."""
    token = make_token({"role": "authenticated"})
    assert verify_admin_token(bearer(token), TEST_SECRET) is False


def test_missing_role_rejected():
    token = make_token({"sub": "user-1"})
    assert verify_admin_token(bearer(token), TEST_SECRET) is False


def test_wrong_secret_rejected():
    """Test that a token signed with another secret is rejected."""
    token = make_token({"role": "admin"}, secret="other-secret")
    assert verify_admin_token(bearer(token), TEST_SECRET) is False


def test_tampered_payload_rejected():
    """Test that swapping the payload invalidates the signature."""
    header, _payload, signature = make_token({"role": "user"}).split(".")
    forged_payload = _b64url(b'{"role": "admin"}')
    forged = f"{header}.{forged_payload}.{signature}"
    assert verify_admin_token(bearer(forged), TEST_SECRET) is False


@pytest.mark.parametrize(
    "header_value",
    [
        None,
        "",
        "Basic dXNlcjpwYXNz",
        "bearer abc.def.ghi",
        "Bearer ",
        "Bearer onlyone",
        "Bearer two.parts",
        "Bearer a.b.c.d",
        "Bearer a..c",
        "Bearer .b.c",
        "Bearer ###.$$$.%%%",
        "Bearer é.é.é",
    ],
)
def test_malformed_headers_fail_closed(header_value):
    """Test that malformed input returns False instead of raising."""
    assert verify_admin_token(header_value, TEST_SECRET) is False


def test_malformed_json_payload_rejected():
    """Test that a signed but non-JSON payload is rejected."""
    import hashlib
    import hmac

    header = _b64url(b'{"alg":"HS256"}')
    payload = _b64url(b"not json at all")
    sig = hmac.new(TEST_SECRET.encode(), f"{header}.{payload}".encode(), hashlib.sha256).digest()
    token = f"{header}.{payload}.{_b64url(sig)}"
    assert verify_admin_token(bearer(token), TEST_SECRET) is False


def test_non_object_payload_rejected():
    """Test that a signed JSON array payload is rejected."""
    token = make_token(["admin"])
    assert verify_admin_token(bearer(token), TEST_SECRET) is False


def test_non_numeric_exp_rejected():
    token = make_token({"role": "admin", "exp": "tomorrow"})
    assert verify_admin_token(bearer(token), TEST_SECRET) is False


def test_missing_secret_rejects_everything():
    """Test that an unset secret never authorizes."""
    token = make_token({"role": "admin"}, secret="")
    assert verify_admin_token(bearer(token), "") is False
    assert verify_admin_token(bearer(token), None) is False


def test_base64url_decode_restores_padding():
    assert base64url_decode("YQ") == b"a"
    assert base64url_decode("YWI") == b"ab"
    assert base64url_decode("_-8") == b"\xff\xef"


def test_decode_payload_requires_object():
    with pytest.raises(ValueError):
        decode_payload(_b64url(b"[1, 2]"))
