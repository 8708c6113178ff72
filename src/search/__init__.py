"""
Provider search.

This module handles:
- Expanding free-form service-area locations into truncated variants
- Tiered matching against the provider repository
- First-occurrence deduplication and pagination
"""

from src.search.location import expand_location, normalize_location
from src.search.provider_matcher import (
    MatchPage,
    MatchQuery,
    ProviderMatcher,
    deduplicate,
    paginate,
)

__all__ = [
    "ProviderMatcher",
    "MatchQuery",
    "MatchPage",
    "deduplicate",
    "paginate",
    "expand_location",
    "normalize_location",
]
