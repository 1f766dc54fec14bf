"""Boot configuration models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PollOptions:
    """Timing options for order validation, in seconds."""

    timeout_seconds: float = 600.0
    poll_interval_seconds: float = 1.0
    request_delay_seconds: float = 2.0

    @classmethod
    def from_milliseconds(
        cls,
        timeout: int = 600_000,
        poll_rate: int = 1000,
        request_delay: int = 2000,
    ) -> "PollOptions":
        """Build options from millisecond values."""
        return cls(
            timeout_seconds=timeout / 1000,
            poll_interval_seconds=poll_rate / 1000,
            request_delay_seconds=request_delay / 1000,
        )


@dataclass(frozen=True)
class LaunchParameters:
    """Query parameters identifying the launching client."""

    platform: str = "desktop"
    browser_type: str = "external"
    redirect_url: str = "acnative://action"


@dataclass(frozen=True)
class BootConfiguration:
    """Endpoints and credentials required to validate orders."""

    base_url: str
    order_path: str
    checkout_public_key: str
    customer_id: str
    poll_options: PollOptions = field(default_factory=PollOptions)
