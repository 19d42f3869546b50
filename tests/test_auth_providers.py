"""Tests for the local JWT provider and the hosted auth provider."""

import json
from datetime import datetime, timedelta, timezone

import httpx
import pytest
from jose import jwt

from common.auth import JWTAuth, SupabaseAuth
from common.auth.dependencies import extract_bearer_token
from common.database import BackendUnavailableError
from common.utils import password_strength, validate_password


SECRET = "test-jwt-secret"


def hosted_auth(handler):
    seen = []

    def wrapped(request):
        seen.append(request)
        return handler(request)

    auth = SupabaseAuth(
        url="https://project.example.co",
        anon_key="anon-key",
        jwt_secret=SECRET,
        transport=httpx.MockTransport(wrapped),
    )
    return auth, seen


# ─────────────────────────────────────────────────────────────────
# JWTAuth
# ─────────────────────────────────────────────────────────────────


class TestJWTAuth:
    @pytest.mark.asyncio
    async def test_create_and_verify(self):
        auth = JWTAuth(secret=SECRET)
        token = await auth.create_token("user-1", email="lena@example.com")

        claims = await auth.verify_token(token)

        assert claims["sub"] == "user-1"
        assert claims["email"] == "lena@example.com"
        assert claims["aud"] == "authenticated"

    @pytest.mark.asyncio
    async def test_wrong_secret_rejected(self):
        token = await JWTAuth(secret="other").create_token("user-1")
        with pytest.raises(ValueError, match="Invalid token"):
            await JWTAuth(secret=SECRET).verify_token(token)

    @pytest.mark.asyncio
    async def test_expired_token_rejected(self):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"sub": "user-1", "aud": "authenticated", "exp": now - timedelta(minutes=1)},
            SECRET,
            algorithm="HS256",
        )
        with pytest.raises(ValueError, match="expired"):
            await JWTAuth(secret=SECRET).verify_token(token)

    @pytest.mark.asyncio
    async def test_wrong_audience_rejected(self):
        token = await JWTAuth(secret=SECRET, audience="other").create_token("user-1")
        with pytest.raises(ValueError):
            await JWTAuth(secret=SECRET).verify_token(token)

    @pytest.mark.asyncio
    async def test_revoked_after_sign_out(self):
        auth = JWTAuth(secret=SECRET)
        token = await auth.create_token("user-1")
        await auth.sign_out(token)
        with pytest.raises(ValueError, match="revoked"):
            await auth.verify_token(token)

    @pytest.mark.asyncio
    async def test_get_user_from_claims(self):
        auth = JWTAuth(secret=SECRET)
        token = await auth.create_token("user-1", email="lena@example.com")
        user = await auth.get_user(token)
        assert user["id"] == "user-1"
        assert await auth.get_user("garbage") is None

    @pytest.mark.asyncio
    async def test_account_operations_unavailable(self):
        with pytest.raises(NotImplementedError):
            await JWTAuth(secret=SECRET).sign_in("a@b.de", "Password1")


# ─────────────────────────────────────────────────────────────────
# SupabaseAuth
# ─────────────────────────────────────────────────────────────────


class TestSupabaseAuth:
    @pytest.mark.asyncio
    async def test_sign_up_pending_confirmation(self):
        auth, seen = hosted_auth(lambda r: httpx.Response(200, json={"id": "user-1", "email": "a@b.de"}))

        result = await auth.sign_up(
            "a@b.de", "Password1", metadata={"full_name": "Anna"}, redirect_to="https://site.example"
        )

        assert result == {"user": {"id": "user-1", "email": "a@b.de"}, "session": None}
        request = seen[0]
        assert request.url.path == "/auth/v1/signup"
        assert request.url.params["redirect_to"] == "https://site.example"
        assert request.headers["apikey"] == "anon-key"
        assert json.loads(request.content)["data"] == {"full_name": "Anna"}

    @pytest.mark.asyncio
    async def test_sign_up_existing_email(self):
        auth, _ = hosted_auth(lambda r: httpx.Response(422, json={"msg": "User already registered"}))
        with pytest.raises(ValueError, match="already registered"):
            await auth.sign_up("a@b.de", "Password1")

    @pytest.mark.asyncio
    async def test_sign_in_returns_session(self):
        auth, seen = hosted_auth(lambda r: httpx.Response(200, json={
            "access_token": "at", "refresh_token": "rt", "expires_in": 3600,
            "token_type": "bearer", "user": {"id": "user-1"},
        }))

        session = await auth.sign_in("a@b.de", "Password1")

        assert session["access_token"] == "at"
        assert session["user"] == {"id": "user-1"}
        assert seen[0].url.params["grant_type"] == "password"

    @pytest.mark.asyncio
    async def test_sign_in_errors(self):
        auth, _ = hosted_auth(lambda r: httpx.Response(400, json={"error_description": "Email not confirmed"}))
        with pytest.raises(ValueError, match="not confirmed"):
            await auth.sign_in("a@b.de", "Password1")

        auth, _ = hosted_auth(lambda r: httpx.Response(429, json={"msg": "rate limit"}))
        with pytest.raises(ValueError, match="Too many"):
            await auth.sign_in("a@b.de", "Password1")

        auth, _ = hosted_auth(lambda r: httpx.Response(400, json={"error_description": "Invalid login credentials"}))
        with pytest.raises(ValueError, match="Invalid email or password"):
            await auth.sign_in("a@b.de", "wrong")

    @pytest.mark.asyncio
    async def test_server_error_is_unavailable(self):
        auth, _ = hosted_auth(lambda r: httpx.Response(503))
        with pytest.raises(BackendUnavailableError):
            await auth.sign_in("a@b.de", "Password1")

    @pytest.mark.asyncio
    async def test_update_user_sends_bearer(self):
        auth, seen = hosted_auth(lambda r: httpx.Response(200, json={"id": "user-1"}))
        await auth.update_user("user-token", password="NewPass123", ignored="x")
        assert seen[0].method == "PUT"
        assert seen[0].headers["authorization"] == "Bearer user-token"
        assert json.loads(seen[0].content) == {"password": "NewPass123"}

    @pytest.mark.asyncio
    async def test_password_reset_rate_limited(self):
        auth, _ = hosted_auth(lambda r: httpx.Response(429))
        with pytest.raises(ValueError):
            await auth.send_password_reset("a@b.de")

    @pytest.mark.asyncio
    async def test_password_reset_unknown_email_is_silent(self):
        auth, seen = hosted_auth(lambda r: httpx.Response(400, json={"msg": "User not found"}))
        await auth.send_password_reset("nobody@b.de", redirect_to="https://site.example/reset-password")
        assert seen[0].url.params["redirect_to"] == "https://site.example/reset-password"

    @pytest.mark.asyncio
    async def test_sign_out_revokes_locally(self):
        auth, _ = hosted_auth(lambda r: httpx.Response(204))
        token = await auth.create_token("user-1")
        await auth.sign_out(token)
        with pytest.raises(ValueError):
            await auth.verify_token(token)


# ─────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────


class TestHelpers:
    def test_extract_bearer_token(self):
        assert extract_bearer_token("Bearer abc") == "abc"
        assert extract_bearer_token("Basic abc") is None
        assert extract_bearer_token("Bearer ") is None
        assert extract_bearer_token(None) is None

    def test_password_rules(self):
        assert validate_password("StrongPass1") == (True, [])
        is_valid, errors = validate_password("weak")
        assert not is_valid
        assert len(errors) == 3

    def test_password_strength(self):
        assert password_strength("") == 0
        assert password_strength("abc") == 1
        assert password_strength("StrongPass1") == 4
