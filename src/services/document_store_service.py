"""
Provider document store client.

Production ProviderRepository: the provider records live in a remote
document store exposed over REST. Versioned writes use ``If-Match``; the
store answers 412 when the version is stale.
"""

import logging
from typing import Any
from urllib.parse import quote

import httpx
from fastapi.encoders import jsonable_encoder
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from src.core.service_token import Permissions, create_service_token
from src.exceptions import ConcurrencyError, NotFoundError, RepositoryError
from src.schemas.provider_schemas import Provider, Tier
from src.settings import settings

logger = logging.getLogger(__name__)


class DocumentStoreService:
    """HTTP client for the provider document store."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        auth_secret: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.document_store_url).rstrip("/")
        self.timeout = timeout or settings.document_store_timeout
        self.auth_secret = auth_secret or settings.document_store_auth_secret
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _auth_headers(self) -> dict[str, str]:
        if not self.auth_secret:
            return {}
        token = create_service_token(
            settings.service_name,
            self.auth_secret,
            permissions=[Permissions.PROVIDERS_READ, Permissions.PROVIDERS_WRITE],
        )
        return {"Authorization": f"Bearer {token}"}

    async def _request(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        """Send a request, turning transport failures into RepositoryError."""
        client = await self._get_client()
        try:
            return await client.request(
                method,
                url,
                headers={**self._auth_headers(), **(headers or {})},
                **kwargs,
            )
        except httpx.HTTPError as e:
            logger.debug("Document store %s %s failed: %s", method, url, e)
            raise RepositoryError(f"Provider store unavailable: {e}") from e

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.debug(
                "Document store returned %d for %s %s",
                response.status_code,
                response.request.method,
                response.request.url,
            )
            raise RepositoryError(
                f"Provider store error: {response.status_code}"
            ) from e

    @staticmethod
    def _decode_json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            logger.debug(
                "Document store returned a non-JSON body for %s %s",
                response.request.method,
                response.request.url,
            )
            raise RepositoryError("Malformed provider store response") from e

    @staticmethod
    def _parse_provider(payload: Any) -> Provider:
        try:
            return Provider.model_validate(payload)
        except PydanticValidationError as e:
            raise RepositoryError(f"Malformed provider record: {e}") from e

    def _parse_providers(self, response: httpx.Response) -> list[Provider]:
        payload = self._decode_json(response)
        if not isinstance(payload, dict) or not isinstance(
            payload.get("entries", []), list
        ):
            raise RepositoryError("Malformed provider store response: expected entries")
        return [self._parse_provider(entry) for entry in payload.get("entries", [])]

    async def find_visible_by_category_and_location(
        self,
        category_patterns: list[str],
        location_exact: str | None,
        tier: Tier,
        *,
        name_pattern: str | None = None,
    ) -> list[Provider]:
        params: list[tuple[str, str]] = [
            ("visibleStatus", "true"),
            ("tier", tier.value),
        ]
        params.extend(("serviceType", pattern) for pattern in category_patterns)
        if location_exact is not None:
            params.append(("location", location_exact))
        if name_pattern:
            params.append(("serviceName", name_pattern))

        response = await self._request("GET", "/providers", params=params)
        self._raise_for_status(response)
        return self._parse_providers(response)

    async def find_by_id(self, unique_id: str) -> Provider | None:
        response = await self._request("GET", f"/providers/{quote(unique_id, safe='')}")
        if response.status_code == 404:
            return None
        self._raise_for_status(response)
        return self._parse_provider(self._decode_json(response))

    async def find_by_email(self, email: str) -> Provider | None:
        response = await self._request(
            "GET", "/providers", params={"personalEmail": email}
        )
        self._raise_for_status(response)
        providers = self._parse_providers(response)
        return providers[0] if providers else None

    async def update_fields(
        self,
        unique_id: str,
        fields: dict[str, Any],
        *,
        expected_version: int | None = None,
    ) -> Provider:
        body = {
            to_camel(name): value
            for name, value in jsonable_encoder(fields, by_alias=True).items()
        }
        headers = {}
        if expected_version is not None:
            headers["If-Match"] = str(expected_version)

        response = await self._request(
            "PATCH",
            f"/providers/{quote(unique_id, safe='')}",
            headers=headers,
            json=body,
        )
        if response.status_code == 404:
            raise NotFoundError(f"Provider {unique_id} not found")
        if response.status_code == 412:
            raise ConcurrencyError(
                f"Provider {unique_id} changed (expected version {expected_version})"
            )
        self._raise_for_status(response)
        return self._parse_provider(self._decode_json(response))

    async def health_check(self) -> bool:
        """Check if the document store is reachable."""
        try:
            response = await self._request("GET", "/health")
        except RepositoryError:
            return False
        return response.status_code == 200


def create_document_store_service() -> DocumentStoreService:
    """Create a DocumentStoreService with default configuration."""
    return DocumentStoreService()
