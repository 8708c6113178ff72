"""Provider Directory - service search and review API."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.clients.provider_repository import close_provider_repository
from src.core.logging import configure_logging
from src.exceptions import ProviderDirectoryError, RepositoryError
from src.routers import health, provider_routes, search_routes
from src.settings import settings

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan management."""
    # Startup
    configure_logging()
    yield
    # Shutdown
    await close_provider_repository()


app = FastAPI(
    title="Provider Directory",
    description="Find local service providers by category and service area",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ProviderDirectoryError)
async def handle_provider_directory_error(
    request: Request, exc: ProviderDirectoryError
) -> JSONResponse:
    """Render domain errors as ``{"error": kind, "detail": message}``."""
    if isinstance(exc, RepositoryError):
        logger.error("Provider store failure on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error_code, "detail": exc.message},
    )


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed request bodies are client errors (400)."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "validation_error",
            "detail": "Invalid request body",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


@app.exception_handler(Exception)
async def handle_unhandled_exceptions(request: Request, exc: Exception) -> JSONResponse:
    """Catch and log all unhandled exceptions."""
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "internal_error", "detail": "Internal server error"},
    )


# Register routers
app.include_router(health.router)
app.include_router(search_routes.router)
app.include_router(provider_routes.router)


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint."""
    return {"service": settings.service_name, "version": VERSION}
