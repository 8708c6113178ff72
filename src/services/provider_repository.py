"""Query interface the provider directory consumes from its storage layer."""

from typing import Any, Protocol

from src.schemas.provider_schemas import Provider, Tier


class ProviderRepository(Protocol):
    """
    Storage boundary for provider records.

    Implementations must increment ``Provider.version`` on every write and
    honour ``expected_version`` atomically (compare-and-swap).
    """

    async def find_visible_by_category_and_location(
        self,
        category_patterns: list[str],
        location_exact: str | None,
        tier: Tier,
        *,
        name_pattern: str | None = None,
    ) -> list[Provider]:
        """
        Visible providers in ``tier`` matching the given criteria.

        A provider matches when any category pattern is a case-insensitive
        substring of any of its service types (no patterns: no category
        filter), when ``location_exact`` equals one of its normalized
        service-area locations (None: no location filter), and when
        ``name_pattern`` is a case-insensitive substring of its service
        name (None: no name filter). Results come back in storage order.
        """
        ...

    async def find_by_id(self, unique_id: str) -> Provider | None: ...

    async def find_by_email(self, email: str) -> Provider | None: ...

    async def update_fields(
        self,
        unique_id: str,
        fields: dict[str, Any],
        *,
        expected_version: int | None = None,
    ) -> Provider:
        """
        Apply a partial update and return the stored result.

        Raises:
            NotFoundError: If no provider has ``unique_id``
            ConcurrencyError: If ``expected_version`` is given and stale
            RepositoryError: On storage failure
        """
        ...

    async def health_check(self) -> bool: ...
