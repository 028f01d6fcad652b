"""Defines tests for the healthcheck router."""

from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI, status
from httpx import ASGITransport, AsyncClient

from app.routers import healthcheck


@pytest.fixture
def app() -> FastAPI:
    """
    Create a FastAPI application instance for testing.

    Returns:
        FastAPI: FastAPI application instance.

    """
    app = FastAPI(title="Test Healthcheck")
    app.include_router(healthcheck.router)
    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """
    Create a test client for the FastAPI application.

    Args:
        app (FastAPI): FastAPI application instance.

    Returns:
        AsyncClient: Test client for the FastAPI application.

    """
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client


async def test_healthcheck_success(client: AsyncClient) -> None:
    """Test the happy path of the healthcheck."""
    response = await client.get("/healthcheck/")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "ok"}
