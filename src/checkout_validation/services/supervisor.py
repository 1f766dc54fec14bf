"""Supervise the single active checkout validation session."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from checkout_validation.adapters.loading_affordance import LoadingAffordance
from checkout_validation.adapters.order_status_client import OrderStatusClient
from checkout_validation.adapters.url_launcher import UrlLauncher
from checkout_validation.domain.boot import BootConfiguration, LaunchParameters
from checkout_validation.domain.orders import OutcomeRecord
from checkout_validation.domain.sessions import ValidationSession
from checkout_validation.services.checkout_urls import (
    TokenExtractionError,
    build_launch_url,
    build_token_checkout_url,
    build_validate_url,
    extract_session_token,
)
from checkout_validation.services.outcomes import SUPERSEDED_REASON
from checkout_validation.services.poller import ValidationPoller
from checkout_validation.services.purchase_results import PurchaseCallback
from checkout_validation.services.scheduler import TickScheduler

_logger = logging.getLogger(__name__)


@dataclass
class SessionSupervisor:
    """Launch checkouts and own at most one active validation poller."""

    boot: BootConfiguration
    client: OrderStatusClient
    launcher: UrlLauncher
    affordance: LoadingAffordance
    callback: PurchaseCallback
    scheduler: TickScheduler
    launch_parameters: LaunchParameters = field(default_factory=LaunchParameters)
    clock: Callable[[], float] = time.monotonic
    _active: ValidationPoller | None = field(default=None, init=False, repr=False)
    _last_outcome: OutcomeRecord | None = field(default=None, init=False, repr=False)

    @property
    def active(self) -> ValidationPoller | None:
        """The poller currently validating a checkout, if any."""
        return self._active

    @property
    def last_outcome(self) -> OutcomeRecord | None:
        """The most recently delivered outcome."""
        return self._last_outcome

    def launch(self, purchase_id: str, redirect_url: str) -> ValidationSession:
        """Open a checkout redirect URL and start validating its order."""
        _require_purchase_id(purchase_id)
        session_token = extract_session_token(redirect_url)
        if not session_token:
            raise TokenExtractionError(
                "Failed to extract session token from redirect URL"
            )
        return self._launch(purchase_id, session_token, redirect_url)

    def launch_with_token(
        self, purchase_id: str, checkout_url: str, session_token: str
    ) -> ValidationSession:
        """Open a checkout for an explicit session token and validate its order."""
        _require_purchase_id(purchase_id)
        if not session_token:
            raise TokenExtractionError("session_token must not be empty")
        if not checkout_url:
            raise ValueError("checkout_url must not be empty")
        url = build_token_checkout_url(checkout_url, session_token)
        return self._launch(purchase_id, session_token, url)

    def cancel_active(self) -> bool:
        """Cancel the active validation, returning True if one was running."""
        poller = self._active
        if poller is None:
            return False
        poller.cancel()
        return True

    def shutdown(self) -> None:
        """Cancel and release the active poller."""
        self._release_active(reason="Order validation stopped on shutdown.")

    def _launch(
        self, purchase_id: str, session_token: str, checkout_url: str
    ) -> ValidationSession:
        session = ValidationSession(
            session_token=session_token,
            purchase_id=purchase_id,
            validate_url=build_validate_url(
                self.boot.base_url,
                self.boot.order_path,
                purchase_id,
                self.boot.customer_id,
            ),
        )
        # Outcome callbacks may launch again; tear those sessions down too.
        while self._active is not None:
            self._release_active(reason=SUPERSEDED_REASON)

        launch_url = build_launch_url(
            checkout_url, self.boot.checkout_public_key, self.launch_parameters
        )
        self.launcher.launch(launch_url)

        poller = ValidationPoller(
            session=session,
            client=self.client,
            checkout_public_key=self.boot.checkout_public_key,
            on_outcome=lambda outcome: self._deliver(poller, outcome),
            options=self.boot.poll_options,
            affordance=self.affordance,
            clock=self.clock,
        )
        self.affordance.show(poller.cancel)
        self._active = poller
        poller.start(self.scheduler)
        _logger.info("Checkout launched: purchase_id=%s", purchase_id)
        return session

    def _release_active(self, reason: str) -> None:
        poller = self._active
        if poller is None:
            return
        poller.cancel(reason=reason)
        poller.dispose()
        if self._active is poller:
            self._active = None

    def _deliver(self, poller: ValidationPoller, outcome: OutcomeRecord) -> None:
        poller.dispose()
        if self._active is poller:
            self._active = None
        self._last_outcome = outcome
        if outcome.succeeded:
            self.callback.on_purchase_success(outcome)
        else:
            self.callback.on_purchase_failed(outcome.reason or "")


def _require_purchase_id(purchase_id: str) -> None:
    if not purchase_id:
        raise ValueError("purchase_id must not be empty")
