"""Checkout boot configuration client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

from checkout_validation.adapters.checkout_models import BootResponse


class BootClient(Protocol):
    """Interface for fetching checkout boot configuration."""

    async def fetch_boot(self, boot_url: str, checkout_public_key: str) -> BootResponse:
        """Fetch and parse the boot configuration."""


@dataclass
class HttpxBootClient(BootClient):
    """HTTPX-backed boot client."""

    http_client: httpx.AsyncClient

    @classmethod
    def create(cls) -> "HttpxBootClient":
        """Create a boot client with a managed httpx session."""
        return cls(http_client=httpx.AsyncClient())

    async def fetch_boot(self, boot_url: str, checkout_public_key: str) -> BootResponse:
        """Fetch the boot configuration for a checkout public key."""
        response = await self.http_client.get(
            boot_url,
            headers={"X-Checkout-Token": checkout_public_key},
            timeout=15,
        )
        response.raise_for_status()
        return BootResponse.model_validate(response.json())

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
