"""Pytest configuration and shared fixtures."""

import base64
import hashlib
import hmac
import json

import httpx
import pytest

TEST_SECRET = "test-admin-secret"


def _b64url(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def make_token(claims, secret: str = TEST_SECRET, header: dict | None = None) -> str:
    """Sign a compact HS256 token for tests."""
    header_b64 = _b64url(json.dumps(header or {"alg": "HS256", "typ": "JWT"}).encode())
    payload_b64 = _b64url(json.dumps(claims).encode())
    signing_input = f"{header_b64}.{payload_b64}".encode("ascii")
    signature = hmac.new(secret.encode(), signing_input, hashlib.sha256).digest()
    return f"{header_b64}.{payload_b64}.{_b64url(signature)}"


class RecordingProvider:
    """Simulated storage provider answering by host."""

    def __init__(self, statuses: dict[str, int] | None = None, default_status: int = 201, body: str = ""):
        self.statuses = statuses or {}
        self.default_status = default_status
        self.body = body
        self.requests: list[httpx.Request] = []

    @property
    def hosts(self) -> list[str]:
        return [r.url.host for r in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status = self.statuses.get(request.url.host, self.default_status)
        return httpx.Response(status, text=self.body or f"status {status}")

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def provider():
    """Provider that accepts every request."""
    return RecordingProvider()


@pytest.fixture
def admin_token():
    """Valid admin token without expiry."""
    return make_token({"sub": "user-1", "role": "admin"})


@pytest.fixture
def storage_settings(monkeypatch):
    """Configure storage and token settings."""
    from comicproxy.core.config import settings

    monkeypatch.setattr(settings, "ENV", "test")
    monkeypatch.setattr(settings, "ADMIN_JWT_SECRET", TEST_SECRET)
    monkeypatch.setattr(settings, "BUNNY_STORAGE_ZONE", "comics-zone")
    monkeypatch.setattr(settings, "BUNNY_STORAGE_API_KEY", "zone-password")
    monkeypatch.setattr(settings, "BUNNY_CDN_HOSTNAME", "cdn.example.com")
    monkeypatch.setattr(settings, "BUNNY_STORAGE_REGION", "")
    monkeypatch.setattr(settings, "BUNNY_STORAGE_DOMAIN", "bunnycdn.com")
    return settings
