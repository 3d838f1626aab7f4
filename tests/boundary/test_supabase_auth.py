"""
Tests for SupabaseAuthProvider against a mocked Supabase client.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from supabase import AuthError

from student_dashboard.boundary.auth import SupabaseAuthProvider
from student_dashboard.core.exceptions import RemoteError

REDIRECT = "http://localhost:3000/dashboard/default"


def gotrue_user(user_id="u1", email="student@example.com", full_name="Student"):
    return SimpleNamespace(id=user_id, email=email, user_metadata={"full_name": full_name})


def gotrue_session(user=None):
    return SimpleNamespace(
        access_token="access",
        refresh_token="refresh",
        expires_at=1700000000,
        user=user or gotrue_user(),
    )


@pytest.fixture
def supabase_client():
    client = MagicMock()
    client.auth.get_session = AsyncMock()
    client.auth.sign_in_with_password = AsyncMock()
    client.auth.sign_up = AsyncMock()
    client.auth.sign_out = AsyncMock()
    client.auth.get_user = AsyncMock()
    client.auth.admin.sign_out = AsyncMock()
    return client


@pytest.fixture
def provider(supabase_client):
    return SupabaseAuthProvider(supabase_client, email_redirect_to=REDIRECT)


class TestSupabaseAuthProvider:
    @pytest.mark.asyncio
    async def test_get_session_converts_session(self, provider, supabase_client):
        supabase_client.auth.get_session.return_value = gotrue_session()

        session = await provider.get_session()

        assert session.access_token == "access"
        assert session.user.id == "u1"
        assert session.user.full_name == "Student"

    @pytest.mark.asyncio
    async def test_get_session_without_session_is_none(self, provider, supabase_client):
        supabase_client.auth.get_session.return_value = None

        assert await provider.get_session() is None

    @pytest.mark.asyncio
    async def test_network_failure_becomes_remote_error(self, provider, supabase_client):
        supabase_client.auth.get_session.side_effect = httpx.ConnectError("refused")

        with pytest.raises(RemoteError) as exc_info:
            await provider.get_session()

        assert exc_info.value.operation == "get_session"

    @pytest.mark.asyncio
    async def test_sign_up_sends_redirect_and_profile(self, provider, supabase_client):
        # Arrange
        supabase_client.auth.sign_up.return_value = SimpleNamespace(user=gotrue_user("new"))

        # Act
        user = await provider.sign_up("a@b.c", "secret1", full_name="Ani")

        # Assert
        assert user.id == "new"
        credentials = supabase_client.auth.sign_up.await_args.args[0]
        assert credentials["options"]["email_redirect_to"] == REDIRECT
        assert credentials["options"]["data"] == {"full_name": "Ani"}

    @pytest.mark.asyncio
    async def test_rejected_sign_in_becomes_remote_error(self, provider, supabase_client):
        supabase_client.auth.sign_in_with_password.side_effect = AuthError(
            "Invalid login credentials", "invalid_credentials"
        )

        with pytest.raises(RemoteError) as exc_info:
            await provider.sign_in_with_password("a@b.c", "wrong")

        assert exc_info.value.message == "Invalid login credentials"
        assert exc_info.value.operation == "sign_in"

    @pytest.mark.asyncio
    async def test_get_user_with_rejected_token_is_none(self, provider, supabase_client):
        error = AuthError("invalid JWT", "bad_jwt")
        error.status = 401
        supabase_client.auth.get_user.side_effect = error

        assert await provider.get_user("expired") is None

    @pytest.mark.asyncio
    async def test_get_user_resolves_user(self, provider, supabase_client):
        supabase_client.auth.get_user.return_value = SimpleNamespace(user=gotrue_user("u9"))

        user = await provider.get_user("token")

        assert user.id == "u9"
        supabase_client.auth.get_user.assert_awaited_once_with("token")

    @pytest.mark.asyncio
    async def test_sign_out_with_token_revokes_that_session(self, provider, supabase_client):
        await provider.sign_out("token")

        supabase_client.auth.admin.sign_out.assert_awaited_once_with("token")
        supabase_client.auth.sign_out.assert_not_awaited()

    def test_change_stream_events_are_forwarded(self, provider, supabase_client):
        # Arrange
        received = []
        provider.on_auth_state_change(lambda event, session: received.append((event, session)))
        forward = supabase_client.auth.on_auth_state_change.call_args.args[0]

        # Act
        forward(SimpleNamespace(value="SIGNED_IN"), gotrue_session())
        forward("SIGNED_OUT", None)

        # Assert
        assert received[0][0] == "SIGNED_IN"
        assert received[0][1].user.id == "u1"
        assert received[1] == ("SIGNED_OUT", None)
