"""Shared fixtures: an in-memory content surface and a controller using it."""

from typing import List, Optional

import pytest

from fscheckout.adapters.surface import ContentSurface
from fscheckout.layers.checkout_controller import CheckoutController


class FakeSurface(ContentSurface):
    """Surface that records commands and lets tests play the content side."""

    def __init__(self):
        super().__init__()
        self.loaded: List[str] = []
        self.closed = False
        self.url: Optional[str] = None

    @property
    def current_url(self) -> Optional[str]:
        return self.url

    def load_html(self, html: str) -> None:
        self.loaded.append(html)
        self.url = "about:blank"

    def close(self) -> None:
        self.closed = True
        self.channel.close()

    # content side

    def post(self, payload):
        self.channel.send(payload)

    def finish_load(self, url: Optional[str] = None):
        if url is not None:
            self.url = url
        self._notify_load_finished()

    def fail_navigation(self, error: str = "net::ERR_FAILED"):
        self._notify_navigation_failed(error)

    def disappear(self):
        self._notify_closed()


@pytest.fixture
def surfaces():
    return []


@pytest.fixture
def loading_changes():
    return []


@pytest.fixture
def controller(surfaces, loading_changes):
    def factory():
        surface = FakeSurface()
        surfaces.append(surface)
        return surface

    return CheckoutController(factory, on_loading_changed=loading_changes.append)


@pytest.fixture
def results():
    return []
