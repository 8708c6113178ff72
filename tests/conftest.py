"""Test configuration and fixtures."""

from typing import Any, AsyncGenerator, Generator, Protocol
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from src.clients.provider_repository import get_provider_repository
from src.main import app
from src.schemas.provider_schemas import (
    NoMonetization,
    OneTimeOrder,
    Provider,
    Subscription,
)
from src.services.memory_provider_store import InMemoryProviderStore


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Configure pytest-anyio to use asyncio."""
    return "asyncio"


def make_provider(
    unique_id: str,
    service_types: list[str] | None = None,
    pincodes: list[str] | None = None,
    visible: bool = True,
    monetization: Any = None,
    **kwargs: Any,
) -> Provider:
    """Build a provider record with sensible test defaults."""
    return Provider(
        unique_id=unique_id,
        service_name=kwargs.pop("service_name", f"Service {unique_id}"),
        personal_email=kwargs.pop("personal_email", f"{unique_id.lower()}@example.com"),
        service_types=service_types if service_types is not None else ["Plumbing"],
        service_area_pincodes=pincodes if pincodes is not None else ["A, B, C"],
        visible_status=visible,
        monetization=monetization or NoMonetization(),
        **kwargs,
    )


def active_order(order_id: str = "order_1") -> OneTimeOrder:
    return OneTimeOrder(order_id=order_id, status="active")


def active_subscription(subscription_id: str = "sub_1") -> Subscription:
    return Subscription(
        subscription_id=subscription_id, subscription_type="basic", status="active"
    )


@pytest.fixture
def scenario_providers() -> list[Provider]:
    """P1 is order-active at "A, B, C"; P2 is not active at "A, B"."""
    return [
        make_provider("P2", ["Plumbing"], ["A, B"]),
        make_provider("P1", ["Plumbing"], ["A, B, C"], monetization=active_order()),
    ]


@pytest.fixture
def provider_store(scenario_providers: list[Provider]) -> InMemoryProviderStore:
    """In-memory store seeded with the P1/P2 scenario."""
    return InMemoryProviderStore(scenario_providers)


@pytest.fixture
def mock_provider_repository() -> AsyncMock:
    """Mock provider repository for testing."""
    mock = AsyncMock(spec=InMemoryProviderStore)
    mock.find_visible_by_category_and_location.return_value = []
    mock.find_by_id.return_value = None
    mock.find_by_email.return_value = None
    mock.health_check.return_value = True
    return mock


class ClientFactory(Protocol):
    """Protocol for client factory fixture."""

    def __call__(self, repository: Any | None = None) -> AsyncClient: ...


@pytest.fixture
def client_factory(
    provider_store: InMemoryProviderStore,
) -> Generator[ClientFactory, None, None]:
    """Factory for creating test clients over a given repository."""

    def _create_client(repository: Any | None = None) -> AsyncClient:
        repo = repository if repository is not None else provider_store
        app.dependency_overrides[get_provider_repository] = lambda: repo

        transport = ASGITransport(app=app)
        return AsyncClient(transport=transport, base_url="http://testserver")

    yield _create_client

    app.dependency_overrides.clear()


@pytest.fixture
async def client(
    client_factory: ClientFactory,
) -> AsyncGenerator[AsyncClient, None]:
    """Async client for testing endpoints."""
    async with client_factory() as c:
        yield c
