"""External URL launch adapter."""

import logging
import webbrowser
from dataclasses import dataclass
from typing import Protocol

_logger = logging.getLogger(__name__)


class UrlLauncher(Protocol):
    """Interface for opening the checkout flow outside the application."""

    def launch(self, url: str) -> None:
        """Open the given URL."""


@dataclass
class WebbrowserUrlLauncher(UrlLauncher):
    """Open URLs in the system browser."""

    new_window: bool = False

    def launch(self, url: str) -> None:
        """Open the URL with the default browser."""
        opened = webbrowser.open(url, new=1 if self.new_window else 2)
        if not opened:
            _logger.warning("No browser available to open checkout URL")
