"""
Provider reviews.

Appending a review is a read-modify-write of the provider record: the
review list, the count and the average rating change together. The write
is versioned, and on a concurrent modification the whole cycle is retried
against a fresh read.
"""

import logging
from dataclasses import dataclass

from src.exceptions import ConcurrencyError, NotFoundError
from src.schemas.provider_schemas import Provider, Review
from src.services.provider_repository import ProviderRepository
from src.settings import settings

logger = logging.getLogger(__name__)


@dataclass
class ReviewPage:
    """A page of a provider's reviews."""

    reviews: list[Review]
    total: int
    has_more: bool


def average_rating(reviews: list[Review]) -> float:
    """Arithmetic mean of every rating, or 0 with no reviews."""
    if not reviews:
        return 0.0
    return sum(review.rating for review in reviews) / len(reviews)


class ReviewService:
    """Appends and lists provider reviews."""

    def __init__(
        self,
        repository: ProviderRepository,
        max_attempts: int | None = None,
    ):
        self.repository = repository
        self.max_attempts = max_attempts or settings.review_max_retries

    async def get_provider(
        self,
        personal_email: str | None = None,
        unique_id: str | None = None,
    ) -> Provider:
        """
        Look up a provider by personal email or unique ID.

        Email takes precedence when both are given.

        Raises:
            NotFoundError: If the provider does not exist
        """
        if personal_email:
            provider = await self.repository.find_by_email(personal_email)
        elif unique_id:
            provider = await self.repository.find_by_id(unique_id)
        else:
            provider = None

        if provider is None:
            raise NotFoundError("Provider not found")
        return provider

    async def append_review(
        self,
        reviewer_name: str,
        rating: float,
        comment: str,
        personal_email: str | None = None,
        unique_id: str | None = None,
    ) -> Provider:
        """
        Append a review and recompute the provider's count and average.

        Args:
            reviewer_name: Display name of the reviewer
            rating: Rating between 0 and 5
            comment: Review text
            personal_email: Provider's personal email
            unique_id: Provider's unique ID (used when no email is given)

        Returns:
            The updated provider

        Raises:
            NotFoundError: If the provider does not exist
            ConcurrencyError: If every attempt lost to a concurrent update
        """
        review = Review(reviewer_name=reviewer_name, rating=rating, comment=comment)

        for attempt in range(1, self.max_attempts + 1):
            provider = await self.get_provider(personal_email, unique_id)
            reviews = [*provider.reviews, review]

            try:
                return await self.repository.update_fields(
                    provider.unique_id,
                    {
                        "reviews": reviews,
                        "reviews_count": provider.reviews_count + 1,
                        "rating": average_rating(reviews),
                    },
                    expected_version=provider.version,
                )
            except ConcurrencyError:
                logger.warning(
                    "Review append for %s conflicted (attempt %d/%d)",
                    provider.unique_id,
                    attempt,
                    self.max_attempts,
                )

        raise ConcurrencyError(
            f"Could not append review after {self.max_attempts} attempts"
        )

    async def list_reviews(
        self,
        offset: int = 0,
        limit: int | None = None,
        personal_email: str | None = None,
        unique_id: str | None = None,
    ) -> ReviewPage:
        """Return one page of a provider's reviews, oldest first."""
        page_size = limit or settings.reviews_default_limit
        provider = await self.get_provider(personal_email, unique_id)

        total = len(provider.reviews)
        return ReviewPage(
            reviews=provider.reviews[offset : offset + page_size],
            total=total,
            has_more=offset + page_size < total,
        )
