"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field

import pytest

from checkout_validation.adapters.boot_client import BootClient
from checkout_validation.adapters.checkout_models import BootResponse
from checkout_validation.adapters.loading_affordance import StatusLoadingAffordance
from checkout_validation.adapters.order_status_client import OrderStatusClient
from checkout_validation.adapters.url_launcher import UrlLauncher
from checkout_validation.config import Settings
from checkout_validation.containers import AppContainer
from checkout_validation.domain.boot import (
    BootConfiguration,
    LaunchParameters,
    PollOptions,
)
from checkout_validation.services.poller import ValidationPoller
from checkout_validation.services.purchase_results import PurchaseResultLog
from checkout_validation.services.scheduler import AsyncioTickScheduler
from checkout_validation.services.supervisor import SessionSupervisor

PENDING = {"state": "created"}

SUCCESS_PAYLOAD = {
    "state": "charge_succeed",
    "totalSum": 4.99,
    "totalSumCurrency": "USD",
    "sessionId": "token123",
    "userId": "customer-1",
    "paymentMethodName": "card",
    "bundleSKU": "gems_pack",
    "bundleName": "Gems Pack",
    "date": "2026-10-19T10:00:00Z",
    "userCountry": "US",
    "orderId": "order-42",
    "products": [
        {"name": "Gems", "sku": "gems", "amount": 500},
        {"name": "Coins", "sku": "coins", "amount": 1000},
    ],
}


@dataclass
class FakeClock:
    """Manually advanced monotonic clock."""

    now: float = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@dataclass
class FakeOrderStatusClient(OrderStatusClient):
    """Order-status client replaying queued responses.

    The last queued response repeats once the queue is drained. Exceptions are
    raised instead of returned.
    """

    responses: list[object] = field(default_factory=lambda: [PENDING])
    calls: list[tuple[str, str, str]] = field(default_factory=list)

    async def get_order_status(
        self, validate_url: str, session_token: str, checkout_public_key: str
    ) -> object:
        self.calls.append((validate_url, session_token, checkout_public_key))
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response


@dataclass
class BlockingOrderStatusClient(OrderStatusClient):
    """Order-status client that answers only after ``release`` is set."""

    response: object = field(default_factory=lambda: dict(SUCCESS_PAYLOAD))
    release: asyncio.Event = field(default_factory=asyncio.Event)
    calls: int = 0

    async def get_order_status(
        self, validate_url: str, session_token: str, checkout_public_key: str
    ) -> object:
        self.calls += 1
        await self.release.wait()
        return self.response


@dataclass
class FakeUrlLauncher(UrlLauncher):
    """Launcher that records opened URLs."""

    urls: list[str] = field(default_factory=list)

    def launch(self, url: str) -> None:
        self.urls.append(url)


@dataclass
class FakeBootClient(BootClient):
    """Boot client returning a fixed payload."""

    payload: dict[str, object] = field(default_factory=dict)
    requests: list[tuple[str, str]] = field(default_factory=list)

    async def fetch_boot(self, boot_url: str, checkout_public_key: str) -> BootResponse:
        self.requests.append((boot_url, checkout_public_key))
        return BootResponse.model_validate(self.payload)


async def settle(poller: ValidationPoller) -> None:
    """Wait for the poll attempt in flight, if any."""
    task = poller.pending
    if task is not None:
        await task


def boot_configuration(**overrides: object) -> BootConfiguration:
    values: dict[str, object] = {
        "base_url": "https://api.checkout.test",
        "order_path": "/checkout/v1/order",
        "checkout_public_key": "public-key",
        "customer_id": "customer-1",
        "poll_options": PollOptions(
            timeout_seconds=600, poll_interval_seconds=1, request_delay_seconds=0
        ),
    }
    values.update(overrides)
    return BootConfiguration(**values)  # type: ignore[arg-type]


@dataclass
class SupervisorHarness:
    """A supervisor wired to fakes, with handles on each collaborator."""

    supervisor: SessionSupervisor
    client: OrderStatusClient
    launcher: FakeUrlLauncher
    affordance: StatusLoadingAffordance
    results: PurchaseResultLog
    scheduler: AsyncioTickScheduler
    clock: FakeClock


def build_harness(client: OrderStatusClient | None = None) -> SupervisorHarness:
    resolved_client = client or FakeOrderStatusClient()
    launcher = FakeUrlLauncher()
    affordance = StatusLoadingAffordance()
    results = PurchaseResultLog()
    scheduler = AsyncioTickScheduler()
    clock = FakeClock()
    supervisor = SessionSupervisor(
        boot=boot_configuration(),
        client=resolved_client,
        launcher=launcher,
        affordance=affordance,
        callback=results,
        scheduler=scheduler,
        launch_parameters=LaunchParameters(platform="desktop", browser_type="external"),
        clock=clock,
    )
    return SupervisorHarness(
        supervisor=supervisor,
        client=resolved_client,
        launcher=launcher,
        affordance=affordance,
        results=results,
        scheduler=scheduler,
        clock=clock,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        checkout_public_key="public-key",
        customer_id="customer-1",
        checkout_base_url="https://api.checkout.test",
        order_validation_delay_ms=0,
    )


@pytest.fixture
def harness() -> SupervisorHarness:
    return build_harness()


@pytest.fixture
def boot_client() -> FakeBootClient:
    return FakeBootClient()


@pytest.fixture
def container(
    settings: Settings, harness: SupervisorHarness, boot_client: FakeBootClient
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        scheduler=harness.scheduler,
        affordance=harness.affordance,
        purchase_results=harness.results,
        supervisor=harness.supervisor,
        boot_client=boot_client,
        close_resources=close_resources,
    )
