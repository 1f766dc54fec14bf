"""FastAPI application factory."""

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, HTTPException, Request, status
from pydantic import ValidationError

from checkout_validation.api.models import (
    LaunchRequest,
    OutcomeView,
    SessionView,
    StatusView,
)
from checkout_validation.app_logging import configure_logging
from checkout_validation.containers import AppContainer
from checkout_validation.services.boot import apply_boot_response
from checkout_validation.services.checkout_urls import TokenExtractionError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        await _refresh_boot(state_container, logger)
        ticker = asyncio.create_task(state_container.scheduler.run())
        yield
        state_container.supervisor.shutdown()
        ticker.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await ticker
        await state_container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/checkout/launch")
    async def launch_checkout(payload: LaunchRequest, request: Request) -> SessionView:
        """Open a checkout and start validating its order."""
        supervisor = request.app.state.container.supervisor
        try:
            if payload.redirect_url:
                session = supervisor.launch(payload.purchase_id, payload.redirect_url)
            else:
                session = supervisor.launch_with_token(
                    payload.purchase_id,
                    payload.checkout_url or "",
                    payload.session_token or "",
                )
        except (TokenExtractionError, ValueError) as exc:
            logger.warning("Checkout launch rejected: %s", exc)
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc
        return SessionView.from_session(session)

    @app.post("/checkout/cancel")
    async def cancel_checkout(request: Request) -> dict[str, bool]:
        """Trigger the cancel action of the loading indicator."""
        state_container: AppContainer = request.app.state.container
        return {"canceled": state_container.affordance.request_cancel()}

    @app.get("/checkout/status")
    async def checkout_status(request: Request) -> StatusView:
        """Return the active session and the latest outcome."""
        state_container: AppContainer = request.app.state.container
        supervisor = state_container.supervisor
        poller = supervisor.active
        outcome = supervisor.last_outcome
        return StatusView(
            active=SessionView.from_session(poller.session) if poller else None,
            request_in_flight=poller is not None and poller.pending is not None,
            loading_visible=state_container.affordance.visible,
            last_outcome=OutcomeView.from_outcome(outcome) if outcome else None,
        )

    return app


async def _refresh_boot(container: AppContainer, logger: logging.Logger) -> None:
    """Apply the remote boot configuration when a boot URL is configured."""
    boot_url = container.settings.boot_url
    if not boot_url:
        return
    supervisor = container.supervisor
    try:
        response = await container.boot_client.fetch_boot(
            boot_url, supervisor.boot.checkout_public_key
        )
    except (httpx.HTTPError, ValidationError, ValueError):
        logger.exception("Failed to load checkout boot configuration")
        return
    supervisor.boot = apply_boot_response(supervisor.boot, response)
    logger.info("Checkout boot configuration loaded from %s", boot_url)
