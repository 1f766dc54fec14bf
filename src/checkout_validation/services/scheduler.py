"""Cooperative tick scheduler."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from itertools import count
from typing import Protocol

_logger = logging.getLogger(__name__)


class Registration(Protocol):
    """Handle for a registered tick callback."""

    @property
    def cancelled(self) -> bool:
        """Return True once the callback has been detached."""

    def cancel(self) -> None:
        """Detach the callback; calling it again does nothing."""


class TickScheduler(Protocol):
    """Interface for registering periodic callbacks."""

    def register(self, callback: Callable[[], None]) -> Registration:
        """Invoke ``callback`` on every tick until the registration is cancelled."""


@dataclass
class _TickRegistration:
    key: int
    owner: "AsyncioTickScheduler"
    _cancelled: bool = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        self.owner._callbacks.pop(self.key, None)


@dataclass
class AsyncioTickScheduler(TickScheduler):
    """Tick scheduler driven from the asyncio event loop."""

    frame_seconds: float = 0.05
    _callbacks: dict[int, Callable[[], None]] = field(
        default_factory=dict, init=False, repr=False
    )
    _keys: count = field(default_factory=count, init=False, repr=False)

    def register(self, callback: Callable[[], None]) -> Registration:
        """Register a callback for every subsequent tick."""
        key = next(self._keys)
        self._callbacks[key] = callback
        return _TickRegistration(key=key, owner=self)

    @property
    def registered(self) -> int:
        """Number of live registrations."""
        return len(self._callbacks)

    def tick_once(self) -> None:
        """Run every registered callback once."""
        for key, callback in list(self._callbacks.items()):
            if key not in self._callbacks:
                continue
            try:
                callback()
            except Exception:
                _logger.exception("Tick callback failed")

    async def run(self) -> None:
        """Tick forever on the running event loop."""
        while True:
            self.tick_once()
            await asyncio.sleep(self.frame_seconds)
