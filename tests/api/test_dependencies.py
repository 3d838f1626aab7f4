"""
Tests for request-scoped Supabase clients created by the DI container.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from student_dashboard.api.deps import dependencies
from student_dashboard.configs import Settings


def supabase_client():
    client = MagicMock()
    client.postgrest.aclose = AsyncMock()
    client.auth.close = AsyncMock()
    client.auth.sign_in_with_password = AsyncMock(
        return_value=SimpleNamespace(
            session=SimpleNamespace(
                access_token="access",
                refresh_token="refresh",
                expires_at=1700000000,
                user=SimpleNamespace(id="u1", email="student@example.com", user_metadata={}),
            )
        )
    )
    return client


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def request_client(monkeypatch):
    client = supabase_client()
    create = AsyncMock(return_value=client)
    monkeypatch.setattr(dependencies, "create_store_client", create)
    return client, create


class TestStoreClientDependency:
    @pytest.mark.asyncio
    async def test_client_carries_token_and_is_closed_after_request(self, request_client, settings):
        # Arrange
        client, create = request_client
        dependency = dependencies.get_store_client(token="abc", settings=settings)

        # Act
        yielded = await anext(dependency)
        closed_while_in_use = client.postgrest.aclose.await_count
        await dependency.aclose()

        # Assert
        assert yielded is client
        create.assert_awaited_once_with(settings.supabase, access_token="abc")
        assert closed_while_in_use == 0
        client.postgrest.aclose.assert_awaited_once()
        client.auth.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_client_is_closed_when_request_fails(self, request_client, settings):
        client, _ = request_client
        dependency = dependencies.get_store_client(token=None, settings=settings)
        await anext(dependency)

        with pytest.raises(RuntimeError):
            await dependency.athrow(RuntimeError("handler failed"))

        client.postgrest.aclose.assert_awaited_once()


class TestSignInProviderDependency:
    @pytest.mark.asyncio
    async def test_sign_in_never_touches_shared_client(
        self, request_client, settings, monkeypatch
    ):
        # Arrange
        throwaway, create = request_client
        shared = supabase_client()
        monkeypatch.setattr(dependencies.get_client_cache(), "_anon_client", shared)
        dependency = dependencies.get_sign_in_provider(settings=settings)

        # Act
        provider = await anext(dependency)
        session = await provider.sign_in_with_password("student@example.com", "secret")
        await dependency.aclose()

        # Assert
        assert session.user.id == "u1"
        create.assert_awaited_once_with(settings.supabase)
        throwaway.auth.sign_in_with_password.assert_awaited_once()
        shared.auth.sign_in_with_password.assert_not_awaited()
        throwaway.auth.close.assert_awaited_once()


class TestClientCache:
    @pytest.mark.asyncio
    async def test_clear_closes_shared_client(self, request_client, settings):
        client, create = request_client
        cache = dependencies.ClientCache()
        assert await cache.anon_client(settings) is client

        await cache.clear()
        await cache.clear()

        client.postgrest.aclose.assert_awaited_once()
        client.auth.close.assert_awaited_once()
