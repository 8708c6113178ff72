"""Health check endpoint."""

from fastapi import APIRouter

from src.routers.deps import ProviderRepositoryDep
from src.schemas.health import HealthResponse

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(
    repository: ProviderRepositoryDep,
) -> HealthResponse:
    """Check service health including provider store connectivity."""
    store_healthy = await repository.health_check()

    return HealthResponse(
        status="healthy" if store_healthy else "degraded",
        provider_store=store_healthy,
    )
