"""Shared dependencies for routers."""

from typing import Annotated

from fastapi import Depends

from src.clients.provider_repository import get_provider_repository
from src.search.provider_matcher import ProviderMatcher
from src.services.provider_repository import ProviderRepository
from src.services.review_service import ReviewService

# Typed dependency aliases for use in endpoint signatures
ProviderRepositoryDep = Annotated[ProviderRepository, Depends(get_provider_repository)]


def get_provider_matcher(repository: ProviderRepositoryDep) -> ProviderMatcher:
    """Build a matcher over the injected repository."""
    return ProviderMatcher(repository)


def get_review_service(repository: ProviderRepositoryDep) -> ReviewService:
    """Build a review service over the injected repository."""
    return ReviewService(repository)


ProviderMatcherDep = Annotated[ProviderMatcher, Depends(get_provider_matcher)]
ReviewServiceDep = Annotated[ReviewService, Depends(get_review_service)]
