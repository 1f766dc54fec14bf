"""Resolve checkout boot configuration."""

from dataclasses import replace

from checkout_validation.adapters.checkout_models import BootResponse
from checkout_validation.config import Settings
from checkout_validation.domain.boot import (
    BootConfiguration,
    LaunchParameters,
    PollOptions,
)


def boot_configuration_from_settings(settings: Settings) -> BootConfiguration:
    """Build the boot configuration from application settings."""
    return BootConfiguration(
        base_url=settings.checkout_base_url,
        order_path=settings.order_status_path,
        checkout_public_key=settings.checkout_public_key,
        customer_id=settings.customer_id,
        poll_options=PollOptions.from_milliseconds(
            timeout=settings.order_validation_timeout_ms,
            poll_rate=settings.order_validation_rate_ms,
            request_delay=settings.order_validation_delay_ms,
        ),
    )


def launch_parameters_from_settings(settings: Settings) -> LaunchParameters:
    """Build launch query parameters from application settings."""
    return LaunchParameters(
        platform=settings.checkout_platform,
        browser_type=settings.browser_type,
        redirect_url=settings.redirect_url,
    )


def apply_boot_response(
    config: BootConfiguration, response: BootResponse
) -> BootConfiguration:
    """Override endpoints and timings with values from a boot response."""
    paths = response.paths
    base_url = paths.base_url if paths and paths.base_url else config.base_url
    order_path = (
        paths.get_order_path if paths and paths.get_order_path else config.order_path
    )
    options = config.poll_options
    validation = response.order_validation
    if validation is not None:
        if validation.timeout and validation.timeout > 0:
            options = replace(options, timeout_seconds=validation.timeout / 1000)
        if validation.rate and validation.rate > 0:
            options = replace(options, poll_interval_seconds=validation.rate / 1000)
    return replace(
        config, base_url=base_url, order_path=order_path, poll_options=options
    )
