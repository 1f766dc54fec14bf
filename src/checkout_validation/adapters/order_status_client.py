"""Order-status API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class OrderStatusClient(Protocol):
    """Interface for polling the order-status endpoint."""

    async def get_order_status(
        self, validate_url: str, session_token: str, checkout_public_key: str
    ) -> object:
        """Fetch the order status and return the decoded JSON body."""


@dataclass
class HttpxOrderStatusClient(OrderStatusClient):
    """HTTPX-backed order-status client."""

    http_client: httpx.AsyncClient
    timeout_seconds: float = 10

    @classmethod
    def create(cls, timeout_seconds: float = 10) -> "HttpxOrderStatusClient":
        """Create an order-status client with a managed httpx session."""
        return cls(http_client=httpx.AsyncClient(), timeout_seconds=timeout_seconds)

    async def get_order_status(
        self, validate_url: str, session_token: str, checkout_public_key: str
    ) -> object:
        """Fetch the order status for a checkout session."""
        response = await self.http_client.get(
            validate_url,
            headers={
                "X-Checkout-Token": checkout_public_key,
                "Authorization": f"Bearer {session_token}",
            },
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
