"""Purchase result callbacks."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from checkout_validation.domain.orders import OutcomeRecord

_logger = logging.getLogger(__name__)


class PurchaseCallback(Protocol):
    """Sink notified once per launched checkout."""

    def on_purchase_success(self, outcome: OutcomeRecord) -> None:
        """Handle a validated purchase."""

    def on_purchase_failed(self, reason: str) -> None:
        """Handle a failed, timed out or canceled purchase."""


@dataclass
class PurchaseResultLog(PurchaseCallback):
    """Callback that logs results and keeps the most recent ones."""

    max_entries: int = 50
    successes: list[OutcomeRecord] = field(default_factory=list)
    failures: list[str] = field(default_factory=list)

    def on_purchase_success(self, outcome: OutcomeRecord) -> None:
        _logger.info(
            "Purchase succeeded: purchase_id=%s order_id=%s",
            outcome.purchase_id,
            outcome.order_id,
        )
        self.successes.append(outcome)
        del self.successes[: -self.max_entries]

    def on_purchase_failed(self, reason: str) -> None:
        _logger.info("Purchase failed: %s", reason)
        self.failures.append(reason)
        del self.failures[: -self.max_entries]
