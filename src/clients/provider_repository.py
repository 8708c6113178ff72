"""Dependency provider for the provider repository."""

import logging

from src.services.document_store_service import create_document_store_service
from src.services.memory_provider_store import InMemoryProviderStore
from src.services.provider_repository import ProviderRepository
from src.settings import settings

logger = logging.getLogger(__name__)

_provider_repository: ProviderRepository | None = None


def create_provider_repository() -> ProviderRepository:
    """Build the repository selected by ``settings.provider_store_backend``."""
    if settings.provider_store_backend == "http":
        logger.info("Using document store at %s", settings.document_store_url)
        return create_document_store_service()

    if settings.provider_seed_file:
        return InMemoryProviderStore.from_json_file(settings.provider_seed_file)
    logger.info("Using empty in-memory provider store")
    return InMemoryProviderStore()


def get_provider_repository() -> ProviderRepository:
    """Get or create the ProviderRepository singleton."""
    global _provider_repository
    if _provider_repository is None:
        _provider_repository = create_provider_repository()
    return _provider_repository


async def close_provider_repository() -> None:
    """Release the repository's connections, if it holds any."""
    global _provider_repository
    close = getattr(_provider_repository, "close", None)
    if close is not None:
        await close()
    _provider_repository = None
