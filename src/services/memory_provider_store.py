"""
In-process provider store.

Used for local development (optionally seeded from a JSON file) and tests.
Writes are compare-and-swap under a single lock so versioned updates
behave like the document store's ``If-Match`` semantics.
"""

import asyncio
import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from src.exceptions import ConcurrencyError, NotFoundError, ValidationError
from src.schemas.provider_schemas import Provider, Tier
from src.search.location import normalize_location

logger = logging.getLogger(__name__)


def _matches_category(patterns: list[str], service_types: list[str]) -> bool:
    if not patterns:
        return True
    lowered = [t.lower() for t in service_types]
    return any(p.lower() in t for p in patterns for t in lowered)


def _matches_location(location: str | None, pincodes: list[str]) -> bool:
    if location is None:
        return True
    return any(normalize_location(p) == location for p in pincodes)


def _matches_name(pattern: str | None, service_name: str | None) -> bool:
    if not pattern:
        return True
    return pattern.lower() in (service_name or "").lower()


class InMemoryProviderStore:
    """ProviderRepository backed by a dict, in insertion order."""

    def __init__(self, providers: Iterable[Provider] = ()):
        self._providers: dict[str, Provider] = {}
        self._lock = asyncio.Lock()
        for provider in providers:
            self._insert(provider)

    @classmethod
    def from_json_file(cls, path: str | Path) -> "InMemoryProviderStore":
        """Load a JSON array of provider records (camelCase keys)."""
        records = json.loads(Path(path).read_text(encoding="utf-8"))
        store = cls(Provider.model_validate(record) for record in records)
        logger.info("Loaded %d providers from %s", len(store._providers), path)
        return store

    def _insert(self, provider: Provider) -> Provider:
        if provider.unique_id in self._providers:
            raise ValidationError(f"Provider {provider.unique_id} already exists")
        if provider.personal_email and any(
            p.personal_email == provider.personal_email
            for p in self._providers.values()
        ):
            raise ValidationError(
                f"An account with email {provider.personal_email} already exists"
            )
        stored = provider.model_copy(deep=True)
        self._providers[stored.unique_id] = stored
        return stored.model_copy(deep=True)

    async def add(self, provider: Provider) -> Provider:
        """Store a new provider."""
        async with self._lock:
            return self._insert(provider)

    async def find_visible_by_category_and_location(
        self,
        category_patterns: list[str],
        location_exact: str | None,
        tier: Tier,
        *,
        name_pattern: str | None = None,
    ) -> list[Provider]:
        return [
            p.model_copy(deep=True)
            for p in self._providers.values()
            if p.visible_status
            and p.tier == tier
            and _matches_category(category_patterns, p.service_types)
            and _matches_location(location_exact, p.service_area_pincodes)
            and _matches_name(name_pattern, p.service_name)
        ]

    async def find_by_id(self, unique_id: str) -> Provider | None:
        provider = self._providers.get(unique_id)
        return provider.model_copy(deep=True) if provider else None

    async def find_by_email(self, email: str) -> Provider | None:
        for provider in self._providers.values():
            if provider.personal_email == email:
                return provider.model_copy(deep=True)
        return None

    async def update_fields(
        self,
        unique_id: str,
        fields: dict[str, Any],
        *,
        expected_version: int | None = None,
    ) -> Provider:
        async with self._lock:
            current = self._providers.get(unique_id)
            if current is None:
                raise NotFoundError(f"Provider {unique_id} not found")
            if expected_version is not None and current.version != expected_version:
                raise ConcurrencyError(
                    f"Provider {unique_id} changed (expected version "
                    f"{expected_version}, found {current.version})"
                )

            data = current.model_dump()
            data.update(fields)
            data["unique_id"] = unique_id
            data["version"] = current.version + 1
            updated = Provider.model_validate(data)

            self._providers[unique_id] = updated
            return updated.model_copy(deep=True)

    async def health_check(self) -> bool:
        return True
