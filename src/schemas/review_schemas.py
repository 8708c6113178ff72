"""Schemas for review and provider lookup endpoints."""

from pydantic import Field, model_validator

from src.schemas.provider_schemas import CamelModel, Review


class ProviderIdentity(CamelModel):
    """Identifies a provider by personal email or unique ID."""

    personal_email: str | None = None
    unique_id: str | None = None

    @model_validator(mode="after")
    def validate_identity(self) -> "ProviderIdentity":
        if not self.personal_email and not self.unique_id:
            raise ValueError("personalEmail or uniqueId is required")
        return self


class ReviewCreateRequest(ProviderIdentity):
    """Request model for appending a review."""

    reviewer_name: str = Field(min_length=1)
    rating: float = Field(ge=0, le=5, strict=True)
    comment: str = Field(min_length=1)


class ReviewListRequest(ProviderIdentity):
    """Request model for paging through a provider's reviews."""

    offset: int = Field(default=0, ge=0, strict=True)
    limit: int | None = Field(default=None, ge=1, strict=True)


class ReviewListResponse(CamelModel):
    """A page of reviews."""

    reviews: list[Review]
    total: int
    has_more: bool
