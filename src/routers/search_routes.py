"""Provider search endpoints."""

import logging

from fastapi import APIRouter

from src.routers.deps import ProviderMatcherDep
from src.schemas.search_schemas import (
    SearchAllRequest,
    SearchAllResponse,
    SearchRequest,
    SearchResponse,
    TypeSearchRequest,
)
from src.search.provider_matcher import MatchQuery

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Search"])


@router.post("/search", response_model=SearchResponse)
async def search_providers(
    request: SearchRequest,
    matcher: ProviderMatcherDep,
) -> SearchResponse:
    """
    Search visible providers by service category and service area.

    Every service-area string is expanded into its right-truncated variants,
    so providers registered at a coarser granularity are found too. Active
    (paid) providers rank ahead of the rest. Returns 404 when nothing
    matches; a page past the end of a non-empty result is an empty 200.
    """
    page = await matcher.search(
        MatchQuery(
            categories=request.service_types,
            locations=request.service_area_pincodes,
            offset=request.offset,
            limit=request.page_size,
        )
    )
    return SearchResponse(
        users=page.providers,
        has_more=page.has_more,
        total_count=page.total_count,
    )


@router.post("/type-search", response_model=SearchResponse)
async def type_search_providers(
    request: TypeSearchRequest,
    matcher: ProviderMatcherDep,
) -> SearchResponse:
    """
    Search providers, optionally narrowed by service name.

    With ``serviceName``, the category and location lists become optional;
    a missing location list searches every service area.
    """
    logger.debug("Type search for service name %r", request.service_name)
    page = await matcher.search(
        MatchQuery(
            categories=request.service_types or [],
            locations=request.service_area_pincodes,
            offset=request.offset,
            limit=request.page_size,
            service_name=request.service_name or None,
        )
    )
    return SearchResponse(
        users=page.providers,
        has_more=page.has_more,
        total_count=page.total_count,
    )


@router.post("/search-all", response_model=SearchAllResponse)
async def search_all_providers(
    request: SearchAllRequest,
    matcher: ProviderMatcherDep,
) -> SearchAllResponse:
    """Search providers by category across every service area."""
    page = await matcher.search(
        MatchQuery(
            categories=request.service_types,
            locations=None,
            offset=request.offset,
            limit=request.page_size,
        )
    )
    return SearchAllResponse(
        users=page.providers,
        has_more=page.has_more,
        total_count=page.total_count,
        offset=page.offset,
        limit=page.limit,
    )
