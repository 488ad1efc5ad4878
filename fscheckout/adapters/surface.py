"""
Content surface contract for the FastSpring checkout sheet.

A surface renders the checkout page, runs the extraction script in it
and owns the channel the script posts to. One surface belongs to
exactly one checkout session.
"""
from abc import ABC, abstractmethod
from typing import Callable, Optional

from fscheckout.adapters.channel import LocalMessageChannel, MessageChannel
from fscheckout.generators.extraction_script import CHANNEL_NAME


# URLs a surface reports while showing nothing but the generated page
SYNTHETIC_SCHEMES = ("about:", "data:")


def is_synthetic_url(url: Optional[str]) -> bool:
    """True if the URL stands for 'no real page loaded yet'."""
    if not url:
        return True
    return url.startswith(SYNTHETIC_SCHEMES)


class ContentSurface(ABC):
    """
    Contract for a rendering surface.

    Commands (load_html, close) are one-way and never block; their
    effects show up later as events (load finished, navigation failed,
    closed) and as payloads on the channel.
    """

    def __init__(self, channel: Optional[MessageChannel] = None):
        self.channel = channel or LocalMessageChannel(CHANNEL_NAME)
        self._load_finished_handler: Optional[Callable[[], None]] = None
        self._navigation_failed_handler: Optional[Callable[[str], None]] = None
        self._closed_handler: Optional[Callable[[], None]] = None

    @abstractmethod
    def load_html(self, html: str) -> None:
        """Load a generated document without a base URL."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Tear the surface down. Must not emit the closed event."""
        ...

    @property
    @abstractmethod
    def current_url(self) -> Optional[str]:
        """URL of the document currently shown, if any."""
        ...

    @property
    def has_real_page(self) -> bool:
        """Whether a provider page (rather than the generated one) is shown."""
        return not is_synthetic_url(self.current_url)

    def on_load_finished(self, handler: Optional[Callable[[], None]]) -> None:
        self._load_finished_handler = handler

    def on_navigation_failed(self, handler: Optional[Callable[[str], None]]) -> None:
        self._navigation_failed_handler = handler

    def on_closed(self, handler: Optional[Callable[[], None]]) -> None:
        """Register the handler for the surface going away on its own."""
        self._closed_handler = handler

    def _notify_load_finished(self) -> None:
        if self._load_finished_handler is not None:
            self._load_finished_handler()

    def _notify_navigation_failed(self, error: str) -> None:
        if self._navigation_failed_handler is not None:
            self._navigation_failed_handler(error)

    def _notify_closed(self) -> None:
        if self._closed_handler is not None:
            self._closed_handler()
