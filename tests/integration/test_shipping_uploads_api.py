"""Integration tests for shipping rates, proof uploads and health."""

from decimal import Decimal

import pytest


class TestShippingRates:

    @pytest.mark.asyncio
    async def test_calculate_returns_flat_rates(self, client):
        response = await client.post("/api/v1/shipping/calculate", json={"destination": "Karachi"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        rates = {rate["id"]: rate for rate in body["rates"]}
        assert Decimal(rates["fastpay"]["price"]) == Decimal("250")
        assert Decimal(rates["cod"]["price"]) == Decimal("300")
        assert rates["cod"]["estimatedDays"] == "3-5"

    @pytest.mark.asyncio
    async def test_calculate_without_body(self, client):
        response = await client.post("/api/v1/shipping/calculate")

        assert response.status_code == 200
        assert len(response.json()["rates"]) == 2


class TestShippingProofUpload:

    @pytest.mark.asyncio
    async def test_upload_returns_url(self, client, media_storage, merchant_headers):
        response = await client.post(
            "/api/v1/uploads/shipping-proof",
            files={"image": ("proof.png", b"\x89PNG fake bytes", "image/png")},
            headers=merchant_headers,
        )

        assert response.status_code == 201
        url = response.json()["imageUrl"]
        assert url.endswith("proof.png")
        assert media_storage.uploads[url] == b"\x89PNG fake bytes"

    @pytest.mark.asyncio
    async def test_non_image_is_rejected(self, client, merchant_headers):
        response = await client.post(
            "/api/v1/uploads/shipping-proof",
            files={"image": ("notes.txt", b"hello", "text/plain")},
            headers=merchant_headers,
        )

        assert response.status_code == 400
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_upload_requires_operator(self, client):
        response = await client.post(
            "/api/v1/uploads/shipping-proof",
            files={"image": ("proof.png", b"bytes", "image/png")},
        )

        assert response.status_code == 401


class TestHealth:

    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}
