"""
Unit tests for the access/refresh guards in api.v1.deps.

A bare FastAPI app with counting handlers is used so rejections can be
checked without a database: every rejection below happens before lookup.
"""
import datetime as dt
import uuid
from types import SimpleNamespace

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from furniture_store.api.v1.deps import bearer_token, get_current_principal, get_refresh_principal, get_token_codec
from furniture_store.core.errors import AppError
from furniture_store.core.security import TokenCodec, TokenConfig, TokenKind
from furniture_store.main import app_error_handler

CONFIG = TokenConfig(
    access_secret="guard-access-secret-0123456789abcdef",
    refresh_secret="guard-refresh-secret-0123456789abcdef",
)
T0 = dt.datetime(2024, 1, 1, tzinfo=dt.timezone.utc)


def make_principal():
    return SimpleNamespace(id=uuid.uuid4(), name="Alice Smith", email="a@x.com", role="user")


@pytest.fixture
def guarded():
    calls = {"access": 0, "refresh": 0}
    guard_app = FastAPI()
    guard_app.add_exception_handler(AppError, app_error_handler)
    guard_app.dependency_overrides[get_token_codec] = lambda: TokenCodec(CONFIG)

    @guard_app.get("/protected")
    async def protected(principal=Depends(get_current_principal)):
        calls["access"] += 1
        return {"ok": True}

    @guard_app.post("/refresh")
    async def refresh(principal=Depends(get_refresh_principal)):
        calls["refresh"] += 1
        return {"ok": True}

    return TestClient(guard_app), calls


class TestBearerToken:
    def test_extracts_token(self):
        assert bearer_token("Bearer abc.def") == "abc.def"
        assert bearer_token("bearer abc") == "abc"

    def test_rejects_other_schemes(self):
        assert bearer_token(None) is None
        assert bearer_token("") is None
        assert bearer_token("Basic abc") is None
        assert bearer_token("Bearer ") is None


class TestAccessGuard:
    def test_no_header_rejects_before_handler(self, guarded):
        client, calls = guarded
        resp = client.get("/protected")
        assert resp.status_code == 401
        assert resp.json()["detail"]["code"] == "AUTH_REQUIRED"
        assert calls["access"] == 0

    def test_legacy_header_is_not_accepted(self, guarded):
        client, calls = guarded
        token = TokenCodec(CONFIG).issue(make_principal(), TokenKind.ACCESS)
        resp = client.get("/protected", headers={"x-auth-token": token})
        assert resp.status_code == 401
        assert resp.json()["detail"]["code"] == "AUTH_REQUIRED"
        assert calls["access"] == 0

    def test_expired_token(self, guarded):
        client, calls = guarded
        token = TokenCodec(CONFIG, clock=lambda: T0).issue(make_principal(), TokenKind.ACCESS)
        resp = client.get("/protected", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401
        assert resp.json()["detail"]["code"] == "AUTH_TOKEN_EXPIRED"
        assert calls["access"] == 0

    def test_wrong_secret(self, guarded):
        client, calls = guarded
        other = TokenConfig(access_secret="x" * 40, refresh_secret="y" * 40)
        token = TokenCodec(other).issue(make_principal(), TokenKind.ACCESS)
        resp = client.get("/protected", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401
        assert resp.json()["detail"]["code"] == "AUTH_INVALID_TOKEN"
        assert calls["access"] == 0

    def test_refresh_token_is_not_an_access_token(self, guarded):
        client, calls = guarded
        token = TokenCodec(CONFIG).issue(make_principal(), TokenKind.REFRESH)
        resp = client.get("/protected", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401
        assert resp.json()["detail"]["code"] == "AUTH_INVALID_TOKEN"
        assert calls["access"] == 0


class TestRefreshGuard:
    def test_no_header(self, guarded):
        client, calls = guarded
        resp = client.post("/refresh")
        assert resp.status_code == 401
        assert resp.json()["detail"]["code"] == "AUTH_REQUIRED"
        assert calls["refresh"] == 0

    def test_access_token_under_wrong_secret_is_invalid(self, guarded):
        client, calls = guarded
        token = TokenCodec(CONFIG).issue(make_principal(), TokenKind.ACCESS)
        resp = client.post("/refresh", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401
        assert resp.json()["detail"]["code"] == "AUTH_INVALID_TOKEN"
        assert calls["refresh"] == 0

    def test_expired_refresh_token(self, guarded):
        client, calls = guarded
        token = TokenCodec(CONFIG, clock=lambda: T0).issue(make_principal(), TokenKind.REFRESH)
        resp = client.post("/refresh", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401
        assert resp.json()["detail"]["code"] == "AUTH_TOKEN_EXPIRED"
        assert calls["refresh"] == 0
