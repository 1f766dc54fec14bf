"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from checkout_validation.adapters.boot_client import BootClient, HttpxBootClient
from checkout_validation.adapters.loading_affordance import StatusLoadingAffordance
from checkout_validation.adapters.order_status_client import HttpxOrderStatusClient
from checkout_validation.adapters.url_launcher import WebbrowserUrlLauncher
from checkout_validation.config import Settings
from checkout_validation.services.boot import (
    boot_configuration_from_settings,
    launch_parameters_from_settings,
)
from checkout_validation.services.purchase_results import PurchaseResultLog
from checkout_validation.services.scheduler import AsyncioTickScheduler
from checkout_validation.services.supervisor import SessionSupervisor


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    scheduler: AsyncioTickScheduler
    affordance: StatusLoadingAffordance
    purchase_results: PurchaseResultLog
    supervisor: SessionSupervisor
    boot_client: BootClient
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    scheduler = AsyncioTickScheduler(
        frame_seconds=resolved_settings.scheduler_frame_ms / 1000
    )
    affordance = StatusLoadingAffordance()
    purchase_results = PurchaseResultLog()
    order_status_client = HttpxOrderStatusClient.create(
        timeout_seconds=resolved_settings.order_request_timeout_seconds
    )
    boot_client = HttpxBootClient.create()
    supervisor = SessionSupervisor(
        boot=boot_configuration_from_settings(resolved_settings),
        client=order_status_client,
        launcher=WebbrowserUrlLauncher(),
        affordance=affordance,
        callback=purchase_results,
        scheduler=scheduler,
        launch_parameters=launch_parameters_from_settings(resolved_settings),
    )

    async def close_resources() -> None:
        await order_status_client.close()
        await boot_client.close()

    return AppContainer(
        settings=resolved_settings,
        scheduler=scheduler,
        affordance=affordance,
        purchase_results=purchase_results,
        supervisor=supervisor,
        boot_client=boot_client,
        close_resources=close_resources,
    )
