"""Schemas for provider search endpoints."""

from typing import Annotated

from pydantic import Field, field_validator, model_validator

from src.schemas.provider_schemas import CamelModel, Provider
from src.settings import settings

NonEmptyStr = Annotated[str, Field(min_length=1)]


class PageParams(CamelModel):
    """Offset/limit pagination over the deduplicated result."""

    offset: int = Field(default=0, ge=0, strict=True)
    limit: int | None = Field(
        default=None,
        ge=1,
        strict=True,
        description="Page size. Defaults to the service's configured page size.",
    )

    @field_validator("limit")
    @classmethod
    def validate_limit(cls, v: int | None) -> int | None:
        """Reject page sizes larger than the configured maximum."""
        if v is not None and v > settings.search_max_limit:
            raise ValueError(f"limit must be at most {settings.search_max_limit}")
        return v

    @property
    def page_size(self) -> int:
        return self.limit if self.limit is not None else settings.search_default_limit


class SearchRequest(PageParams):
    """Request model for searching providers by category and service area."""

    service_types: list[NonEmptyStr] = Field(
        min_length=1, description="Requested service categories"
    )
    service_area_pincodes: list[NonEmptyStr] = Field(
        min_length=1,
        description="Free-form, comma-delimited service-area location strings",
    )


class TypeSearchRequest(PageParams):
    """Search that can additionally filter on the provider's service name."""

    service_name: str | None = Field(
        default=None, description="Case-insensitive service name fragment"
    )
    service_types: list[NonEmptyStr] | None = None
    service_area_pincodes: list[NonEmptyStr] | None = None

    @model_validator(mode="after")
    def validate_criteria(self) -> "TypeSearchRequest":
        """Require a service name, or both category and location lists."""
        if self.service_name:
            return self
        if not self.service_types or not self.service_area_pincodes:
            raise ValueError(
                "Either serviceName or both serviceTypes and "
                "serviceAreaPincodes are required"
            )
        return self


class SearchAllRequest(PageParams):
    """Search by category alone, across every service area."""

    service_types: list[NonEmptyStr] = Field(
        min_length=1, description="Requested service categories"
    )


class SearchResponse(CamelModel):
    """A page of matching providers."""

    users: list[Provider]
    has_more: bool
    total_count: int


class SearchAllResponse(SearchResponse):
    """Category-only search page, echoing the pagination it was served with."""

    offset: int
    limit: int
