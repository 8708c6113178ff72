"""Tests for review and provider lookup endpoints."""

from unittest.mock import AsyncMock

import pytest

from src.exceptions import ConcurrencyError
from tests.conftest import ClientFactory, make_provider


class TestAddReviewEndpoint:
    """Tests for PUT /update/reviews."""

    @pytest.mark.anyio
    async def test_reviews_update_count_and_average(
        self,
        client_factory: ClientFactory,
    ) -> None:
        async with client_factory() as client:
            first = await client.put(
                "/update/reviews",
                json={
                    "uniqueId": "P2",
                    "reviewerName": "Asha",
                    "rating": 4,
                    "comment": "Fixed the leak quickly",
                },
            )
            second = await client.put(
                "/update/reviews",
                json={
                    "personalEmail": "p2@example.com",
                    "reviewerName": "Ravi",
                    "rating": 2,
                    "comment": "Late by an hour",
                },
            )

        assert first.status_code == 200
        assert first.json()["reviewsCount"] == 1
        assert first.json()["rating"] == 4.0

        assert second.status_code == 200
        data = second.json()
        assert data["reviewsCount"] == 2
        assert data["rating"] == 3.0
        assert [r["reviewerName"] for r in data["reviews"]] == ["Asha", "Ravi"]

    @pytest.mark.anyio
    async def test_unknown_provider_returns_404(
        self,
        client_factory: ClientFactory,
    ) -> None:
        async with client_factory() as client:
            response = await client.put(
                "/update/reviews",
                json={
                    "uniqueId": "missing",
                    "reviewerName": "Asha",
                    "rating": 4,
                    "comment": "Great",
                },
            )

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.anyio
    @pytest.mark.parametrize(
        "body",
        [
            {"reviewerName": "Asha", "rating": 4, "comment": "No identity"},
            {"uniqueId": "P2", "reviewerName": "Asha", "rating": "4", "comment": "x"},
            {"uniqueId": "P2", "reviewerName": "Asha", "rating": 6, "comment": "x"},
            {"uniqueId": "P2", "reviewerName": "Asha", "rating": 4},
            {"uniqueId": "P2", "reviewerName": "", "rating": 4, "comment": "x"},
        ],
    )
    async def test_invalid_review_returns_400(
        self,
        client_factory: ClientFactory,
        body: dict,
    ) -> None:
        async with client_factory() as client:
            response = await client.put("/update/reviews", json=body)

        assert response.status_code == 400

    @pytest.mark.anyio
    async def test_exhausted_retries_return_409(
        self,
        client_factory: ClientFactory,
        mock_provider_repository: AsyncMock,
    ) -> None:
        mock_provider_repository.find_by_id.return_value = make_provider("P9")
        mock_provider_repository.update_fields.side_effect = ConcurrencyError("stale")

        async with client_factory(mock_provider_repository) as client:
            response = await client.put(
                "/update/reviews",
                json={
                    "uniqueId": "P9",
                    "reviewerName": "Asha",
                    "rating": 5,
                    "comment": "Great",
                },
            )

        assert response.status_code == 409
        assert response.json()["error"] == "concurrency_conflict"


class TestReviewListEndpoint:
    """Tests for POST /reviews."""

    @pytest.mark.anyio
    async def test_pages_reviews(self, client_factory: ClientFactory) -> None:
        async with client_factory() as client:
            for rating in (5, 4, 3):
                await client.put(
                    "/update/reviews",
                    json={
                        "uniqueId": "P1",
                        "reviewerName": f"Reviewer {rating}",
                        "rating": rating,
                        "comment": "ok",
                    },
                )
            response = await client.post(
                "/reviews", json={"uniqueId": "P1", "offset": 1, "limit": 1}
            )

        assert response.status_code == 200
        data = response.json()
        assert [r["rating"] for r in data["reviews"]] == [4]
        assert data["total"] == 3
        assert data["hasMore"] is True


class TestProviderLookupEndpoint:
    """Tests for POST /providers/lookup."""

    @pytest.mark.anyio
    async def test_lookup_by_email(self, client_factory: ClientFactory) -> None:
        async with client_factory() as client:
            response = await client.post(
                "/providers/lookup", json={"personalEmail": "p1@example.com"}
            )

        assert response.status_code == 200
        data = response.json()
        assert data["uniqueId"] == "P1"
        assert data["monetization"] == {
            "kind": "order",
            "orderId": "order_1",
            "status": "active",
        }

    @pytest.mark.anyio
    async def test_lookup_missing_returns_404(
        self, client_factory: ClientFactory
    ) -> None:
        async with client_factory() as client:
            response = await client.post(
                "/providers/lookup", json={"uniqueId": "nobody"}
            )

        assert response.status_code == 404
