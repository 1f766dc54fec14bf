"""Order validation poller state machine."""

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field

import httpx
from pydantic import ValidationError

from checkout_validation.adapters.checkout_models import parse_order_status
from checkout_validation.adapters.loading_affordance import LoadingAffordance
from checkout_validation.adapters.order_status_client import OrderStatusClient
from checkout_validation.domain.boot import PollOptions
from checkout_validation.domain.orders import ChargeState, OutcomeRecord
from checkout_validation.domain.sessions import (
    SessionStateError,
    ValidationSession,
    ValidationState,
)
from checkout_validation.services.outcomes import (
    CANCELED_REASON,
    canceled_outcome,
    failed_outcome,
    timeout_outcome,
    translate_order_status,
)
from checkout_validation.services.scheduler import Registration, TickScheduler

_logger = logging.getLogger(__name__)


@dataclass
class ValidationPoller:
    """Poll the order-status endpoint until the session reaches a terminal state.

    The poller is driven by ``tick`` from a cooperative scheduler. At most one
    poll attempt is in flight at a time, and every terminal transition emits
    exactly one outcome through ``on_outcome``.
    """

    session: ValidationSession
    client: OrderStatusClient
    checkout_public_key: str
    on_outcome: Callable[[OutcomeRecord], None]
    options: PollOptions = field(default_factory=PollOptions)
    affordance: LoadingAffordance | None = None
    clock: Callable[[], float] = time.monotonic
    transport_failures: int = field(default=0, init=False)
    malformed_responses: int = field(default=0, init=False)
    unexpected_errors: int = field(default=0, init=False)
    _registration: Registration | None = field(default=None, init=False, repr=False)
    _pending: "asyncio.Task[None] | None" = field(default=None, init=False, repr=False)
    _disposed: bool = field(default=False, init=False, repr=False)

    @property
    def state(self) -> ValidationState:
        return self.session.state

    @property
    def pending(self) -> "asyncio.Task[None] | None":
        """The poll attempt currently in flight, if any."""
        return self._pending

    def start(self, scheduler: TickScheduler) -> None:
        """Begin polling on the given scheduler."""
        if self._disposed:
            raise SessionStateError("Poller has been disposed")
        self.session.mark_started(self.clock())
        self._registration = scheduler.register(self.tick)
        _logger.info(
            "Order validation started: purchase_id=%s", self.session.purchase_id
        )

    def tick(self) -> None:
        """Advance the poller by one scheduling frame."""
        if self.session.state is not ValidationState.POLLING:
            return
        now = self.clock()
        if self.session.elapsed(now) > self.options.timeout_seconds:
            _logger.warning(
                "Order validation timed out: purchase_id=%s transport_failures=%s "
                "malformed_responses=%s unexpected_errors=%s",
                self.session.purchase_id,
                self.transport_failures,
                self.malformed_responses,
                self.unexpected_errors,
            )
            self._finish(
                ValidationState.TIMED_OUT, timeout_outcome(self.session.purchase_id)
            )
            return
        if self._pending is not None:
            return
        last_poll = self.session.last_poll_time
        if last_poll is None or now - last_poll >= self.options.poll_interval_seconds:
            loop = asyncio.get_running_loop()
            self.session.mark_polled(now)
            self._pending = loop.create_task(self._poll_once())

    def cancel(self, reason: str = CANCELED_REASON) -> None:
        """Stop polling and emit a canceled outcome."""
        if self.session.state is not ValidationState.POLLING:
            return
        _logger.info(
            "Order validation canceled: purchase_id=%s reason=%s",
            self.session.purchase_id,
            reason,
        )
        self._finish(
            ValidationState.CANCELED,
            canceled_outcome(self.session.purchase_id, reason=reason),
        )

    def dispose(self) -> None:
        """Detach from the scheduler and release host-visible resources."""
        self._detach()
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        if self._disposed:
            return
        self._disposed = True
        if self.affordance is not None:
            self.affordance.hide()

    async def _poll_once(self) -> None:
        try:
            await asyncio.sleep(self.options.request_delay_seconds)
            if self.session.state is not ValidationState.POLLING:
                return
            payload = await self.client.get_order_status(
                self.session.validate_url,
                self.session.session_token,
                self.checkout_public_key,
            )
            status = parse_order_status(payload)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            self.transport_failures += 1
            _logger.warning(
                "Order status request failed: purchase_id=%s error=%s",
                self.session.purchase_id,
                exc,
            )
            return
        except (ValidationError, ValueError) as exc:
            self.malformed_responses += 1
            _logger.warning(
                "Malformed order status response (%s so far): purchase_id=%s error=%s",
                self.malformed_responses,
                self.session.purchase_id,
                exc,
            )
            return
        except Exception:
            self.unexpected_errors += 1
            _logger.exception(
                "Order status attempt failed: purchase_id=%s",
                self.session.purchase_id,
            )
            return
        finally:
            if self._pending is asyncio.current_task():
                self._pending = None

        if self.session.state is not ValidationState.POLLING:
            _logger.debug(
                "Discarding late order status: purchase_id=%s",
                self.session.purchase_id,
            )
            return
        if status.charge_state is ChargeState.SUCCEEDED:
            self._finish(
                ValidationState.SUCCEEDED,
                translate_order_status(status, self.session.purchase_id),
            )
        elif status.charge_state is ChargeState.FAILED:
            self._finish(
                ValidationState.FAILED,
                failed_outcome(status, self.session.purchase_id),
            )

    def _finish(self, state: ValidationState, outcome: OutcomeRecord) -> None:
        self.session.transition(state)
        self._detach()
        _logger.info(
            "Order validation finished: purchase_id=%s state=%s",
            self.session.purchase_id,
            state.value,
        )
        self.on_outcome(outcome)

    def _detach(self) -> None:
        if self._registration is not None:
            self._registration.cancel()
