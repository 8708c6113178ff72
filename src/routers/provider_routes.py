"""Provider lookup and review endpoints."""

from fastapi import APIRouter

from src.routers.deps import ReviewServiceDep
from src.schemas.provider_schemas import Provider
from src.schemas.review_schemas import (
    ProviderIdentity,
    ReviewCreateRequest,
    ReviewListRequest,
    ReviewListResponse,
)

router = APIRouter(tags=["Providers"])


@router.put("/update/reviews", response_model=Provider)
async def add_review(
    request: ReviewCreateRequest,
    review_service: ReviewServiceDep,
) -> Provider:
    """
    Append a review to a provider.

    The review count grows by one and the average rating is recomputed
    over every review, including the new one.
    """
    return await review_service.append_review(
        reviewer_name=request.reviewer_name,
        rating=request.rating,
        comment=request.comment,
        personal_email=request.personal_email,
        unique_id=request.unique_id,
    )


@router.post("/reviews", response_model=ReviewListResponse)
async def list_reviews(
    request: ReviewListRequest,
    review_service: ReviewServiceDep,
) -> ReviewListResponse:
    """Page through a provider's reviews."""
    page = await review_service.list_reviews(
        offset=request.offset,
        limit=request.limit,
        personal_email=request.personal_email,
        unique_id=request.unique_id,
    )
    return ReviewListResponse(
        reviews=page.reviews,
        total=page.total,
        has_more=page.has_more,
    )


@router.post("/providers/lookup", response_model=Provider)
async def get_provider(
    request: ProviderIdentity,
    review_service: ReviewServiceDep,
) -> Provider:
    """Fetch a provider by personal email or unique ID."""
    return await review_service.get_provider(
        personal_email=request.personal_email,
        unique_id=request.unique_id,
    )
