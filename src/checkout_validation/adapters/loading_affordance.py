"""Loading affordance shown while a checkout is being validated."""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol


class LoadingAffordance(Protocol):
    """Interface for a cancel-capable loading indicator."""

    def show(self, on_cancel: Callable[[], None]) -> None:
        """Show the indicator and wire its cancel action."""

    def hide(self) -> None:
        """Hide the indicator."""


@dataclass
class StatusLoadingAffordance(LoadingAffordance):
    """Loading indicator surfaced through the status API."""

    visible: bool = False
    _on_cancel: Callable[[], None] | None = field(
        default=None, init=False, repr=False
    )

    def show(self, on_cancel: Callable[[], None]) -> None:
        """Mark the indicator visible and remember the cancel action."""
        self.visible = True
        self._on_cancel = on_cancel

    def hide(self) -> None:
        """Mark the indicator hidden and drop the cancel action."""
        self.visible = False
        self._on_cancel = None

    def request_cancel(self) -> bool:
        """Invoke the cancel action if the indicator is visible."""
        if not self.visible or self._on_cancel is None:
            return False
        on_cancel = self._on_cancel
        on_cancel()
        return True
