"""Tests for the FastAPI application factory and its lifespan."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from app import APP_VERSION, create_app
from infrastructure.directory.in_memory import InMemoryPeopleDirectory


@pytest.fixture
def auth_provider():
    return AsyncMock()


class TestLifespan:
    @pytest.mark.asyncio
    async def test_startup_ensures_indexes_and_shutdown_closes(self, auth_provider):
        repository = MagicMock()
        repository.ensure_indexes = AsyncMock()
        repository.close = AsyncMock()
        application = create_app(
            repository=repository,
            directory=InMemoryPeopleDirectory(),
            auth_provider=auth_provider,
        )

        async with application.router.lifespan_context(application):
            repository.ensure_indexes.assert_awaited_once()
            repository.close.assert_not_called()

        repository.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_in_memory_store_needs_no_setup(self, repository, auth_provider):
        application = create_app(
            repository=repository,
            directory=InMemoryPeopleDirectory(),
            auth_provider=auth_provider,
        )

        async with application.router.lifespan_context(application):
            pass


class TestHealth:
    @pytest.mark.asyncio
    async def test_health_reports_version(self, repository, auth_provider):
        application = create_app(
            repository=repository,
            directory=InMemoryPeopleDirectory(),
            auth_provider=auth_provider,
        )
        transport = ASGITransport(app=application)

        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/health")

        assert response.json() == {"status": "ok", "version": APP_VERSION}
