"""
Provider search and ranking.

Matching strategy:
1. Expand every requested location into its right-truncated variants
2. For each location variant (most specific first), fetch visible
   providers in the active tier, then in the other tier
3. Concatenate all passes in that order, keep the first occurrence of
   each provider, then slice the requested page

Active providers therefore always rank ahead of their non-active matches
from the same pass, and a provider is never downgraded by a later
duplicate.
"""

import asyncio
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from src.exceptions import (
    NotFoundError,
    SearchTimeoutError,
    ValidationError,
)
from src.schemas.provider_schemas import Provider, Tier
from src.search.location import expand_location
from src.services.provider_repository import ProviderRepository
from src.settings import settings

logger = logging.getLogger(__name__)


@dataclass
class MatchQuery:
    """Criteria for one search request."""

    categories: list[str]
    # None searches every service area
    locations: list[str] | None
    offset: int = 0
    limit: int = 50
    service_name: str | None = None


@dataclass
class MatchPage:
    """A page of deduplicated, priority-ordered providers."""

    providers: list[Provider]
    total_count: int
    has_more: bool
    offset: int
    limit: int


@dataclass
class MatchPass:
    """One repository call: a location variant in one tier."""

    location: str | None
    tier: Tier
    providers: list[Provider] = field(default_factory=list)


def deduplicate(providers: Iterable[Provider]) -> list[Provider]:
    """Keep the first occurrence of every provider, in order."""
    seen: set[str] = set()
    unique: list[Provider] = []
    for provider in providers:
        if provider.unique_id in seen:
            continue
        seen.add(provider.unique_id)
        unique.append(provider)
    return unique


def paginate(providers: list[Provider], offset: int, limit: int) -> MatchPage:
    """Slice an already deduplicated list."""
    if offset < 0:
        raise ValidationError("offset must be a non-negative integer")
    if limit < 1:
        raise ValidationError("limit must be a positive integer")

    total = len(providers)
    return MatchPage(
        providers=providers[offset : offset + limit],
        total_count=total,
        has_more=offset + limit < total,
        offset=offset,
        limit=limit,
    )


class ProviderMatcher:
    """Finds, ranks and pages providers for a service request."""

    def __init__(
        self,
        repository: ProviderRepository,
        timeout: float | None = None,
        include_inactive: bool | None = None,
    ):
        self.repository = repository
        self.timeout = timeout or settings.search_timeout_seconds
        self.include_inactive = (
            settings.search_include_inactive
            if include_inactive is None
            else include_inactive
        )

    @property
    def tiers(self) -> tuple[Tier, ...]:
        if self.include_inactive:
            return (Tier.ACTIVE, Tier.OTHER)
        return (Tier.ACTIVE,)

    async def search(self, query: MatchQuery) -> MatchPage:
        """
        Run the full expansion, match, dedupe and paginate pipeline.

        Args:
            query: Search criteria and pagination

        Returns:
            MatchPage with the requested slice and the unique total

        Raises:
            ValidationError: If the criteria or pagination are malformed
            NotFoundError: If no provider matches at all
            SearchTimeoutError: If the request exceeds the configured timeout
            RepositoryError: If the provider store fails
        """
        self._validate(query)

        try:
            passes = await asyncio.wait_for(
                self.collect_passes(query), timeout=self.timeout
            )
        except asyncio.TimeoutError as e:
            logger.warning("Search timed out after %.1fs", self.timeout)
            raise SearchTimeoutError(
                f"Search timed out after {self.timeout:g} seconds"
            ) from e

        candidates = [p for match_pass in passes for p in match_pass.providers]
        if not candidates:
            raise NotFoundError("No providers found")

        unique = deduplicate(candidates)
        logger.info(
            "Search matched %d candidates across %d passes, %d unique providers",
            len(candidates),
            len(passes),
            len(unique),
        )
        return paginate(unique, query.offset, query.limit)

    async def collect_passes(self, query: MatchQuery) -> list[MatchPass]:
        """Execute every location-variant/tier pass in ranking order."""
        passes: list[MatchPass] = []
        for location in self._location_variants(query.locations):
            for tier in self.tiers:
                match_pass = MatchPass(location=location, tier=tier)
                match_pass.providers = (
                    await self.repository.find_visible_by_category_and_location(
                        query.categories,
                        location,
                        tier,
                        name_pattern=query.service_name,
                    )
                )
                passes.append(match_pass)
        return passes

    @staticmethod
    def _location_variants(locations: list[str] | None) -> Iterator[str | None]:
        if locations is None:
            yield None
            return
        for location in locations:
            yield from expand_location(location)

    @staticmethod
    def _validate(query: MatchQuery) -> None:
        if not query.categories and not query.service_name:
            raise ValidationError("serviceTypes must be a non-empty array")
        if query.locations is not None:
            if not query.locations:
                raise ValidationError("serviceAreaPincodes must be a non-empty array")
            for location in query.locations:
                if not expand_location(location):
                    raise ValidationError(f"Invalid service area location: {location!r}")
        if query.offset < 0:
            raise ValidationError("offset must be a non-negative integer")
        if query.limit < 1:
            raise ValidationError("limit must be a positive integer")
