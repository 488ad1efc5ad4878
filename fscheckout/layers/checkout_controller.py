"""
Checkout Controller for the FastSpring checkout sheet.
Drives one checkout session: builds and loads the page, receives the
extraction script's payloads and delivers results to the caller.
"""
from enum import Enum
from typing import Any, Callable, Optional

from fscheckout.adapters.surface import ContentSurface
from fscheckout.generators.page_builder import PageBuilder
from fscheckout.layers.result_parser import ResultParser
from fscheckout.models.license import (
    CheckoutRequest,
    CheckoutResult,
    Failure,
    NoResult,
    Success,
)
from fscheckout.utils.logger import ComponentLogger, set_session_id


ResultCallback = Callable[[CheckoutResult], None]


class CheckoutPreconditionError(AssertionError):
    """Raised when a checkout is started while another one is pending."""


class CheckoutState(str, Enum):
    """Checkout session state."""
    IDLE = "idle"
    LOADING = "loading"
    AWAITING_RESULT = "awaiting_result"
    FAILED = "failed"
    DELIVERED = "delivered"
    DISMISSED = "dismissed"


class CheckoutController:
    """
    Checkout Controller - one checkout session at a time.

    Usage (on the event loop that owns the surface):

        controller = CheckoutController(lambda: PlaywrightSurface(context))
        controller.start(
            "soy-for-community-slacks",
            "zeezide.onfastspring.com/embedded",
            on_result=handle_licenses,
        )

    Delivery rules:
    - A success (possibly empty) is delivered once, then the callback
      is released.
    - A failure is delivered but the callback is kept, a later payload
      may still deliver a success.
    - Dismissing a session that delivered no success delivers an empty
      success, meaning "nothing was bought".

    Not thread-safe. All calls and all surface events must happen on
    the same thread.
    """

    def __init__(
        self,
        surface_factory: Callable[[], ContentSurface],
        page_builder: Optional[PageBuilder] = None,
        parser: Optional[ResultParser] = None,
        on_loading_changed: Optional[Callable[[bool], None]] = None,
    ):
        self.surface_factory = surface_factory
        self.page_builder = page_builder or PageBuilder()
        self.parser = parser or ResultParser()
        self.on_loading_changed = on_loading_changed
        self.logger = ComponentLogger("checkout_controller")

        self.state = CheckoutState.IDLE
        self.session_id: Optional[str] = None
        self.surface: Optional[ContentSurface] = None
        self._callback: Optional[ResultCallback] = None
        self._loading = False

    @property
    def loading(self) -> bool:
        """Whether the loading indicator should be shown."""
        return self._loading

    @property
    def has_pending_callback(self) -> bool:
        return self._callback is not None

    def start(
        self,
        product_path: str,
        store_front: str,
        quantity: int = 1,
        *,
        on_result: ResultCallback,
    ) -> "CheckoutController":
        """
        Start a checkout for a product.

        Args:
            product_path: The (internal) product name, e.g. "soy-for-community-slacks"
            store_front: The storefront, e.g. "zeezide.onfastspring.com/embedded"
            quantity: The product quantity to preconfigure
            on_result: Called with Success(records) or Failure(kind)

        Returns:
            self, acting as the session handle

        Raises:
            CheckoutPreconditionError: A session is already pending

        If creating or loading the surface fails, the session is rolled
        back to IDLE and the error is re-raised.
        """
        if self._callback is not None:
            raise CheckoutPreconditionError("callback already set!")

        request = CheckoutRequest(
            product_path=product_path,
            store_front=store_front,
            quantity=quantity,
        )

        # A delivered session may still hold its surface until dismissed
        self._release_surface()

        self.session_id = set_session_id()
        self._callback = on_result

        try:
            surface = self.surface_factory()
            surface.channel.on_message(self._handle_message)
            surface.on_load_finished(self._handle_load_finished)
            surface.on_navigation_failed(self._handle_navigation_failed)
            surface.on_closed(self.dismiss)
            self.surface = surface

            self.logger.log_action(
                "checkout",
                "started",
                session_id=self.session_id,
                product_path=request.product_path,
                store_front=request.store_front,
                quantity=request.quantity
            )

            self.state = CheckoutState.LOADING
            self._set_loading(True)
            surface.load_html(self.page_builder.build_for(request))
        except Exception as e:
            self.logger.log_error(
                f"Checkout start failed: {e}",
                error_type=type(e).__name__,
                session_id=self.session_id
            )
            self._callback = None
            self._release_surface()
            self._set_loading(False)
            self.state = CheckoutState.IDLE
            raise
        return self

    def dismiss(self) -> None:
        """
        End the session (user cancel, or the surface went away).

        Delivers an empty success if no success was delivered yet.
        """
        if self.state in (CheckoutState.IDLE, CheckoutState.DISMISSED):
            return

        self.logger.log_decision(
            decision="dismiss",
            reason="session ended by host",
            session_id=self.session_id,
            state=self.state.value,
            pending_callback=self.has_pending_callback
        )

        self._emit(Success(records=[]))
        self._release_surface()
        self._callback = None
        self._set_loading(False)
        self.state = CheckoutState.DISMISSED

    def _handle_message(self, payload: Any) -> None:
        if self._callback is None:
            self.logger.log_decision(
                decision="payload_ignored",
                reason="no pending callback",
                session_id=self.session_id,
                state=self.state.value
            )
            return

        if self.state == CheckoutState.LOADING:
            self.state = CheckoutState.AWAITING_RESULT

        outcome = self.parser.parse(payload)
        if isinstance(outcome, NoResult):
            return
        if isinstance(outcome, Failure):
            self.state = CheckoutState.FAILED
        self._emit(outcome)

    def _emit(self, result: CheckoutResult) -> None:
        callback = self._callback
        if callback is None:
            return

        released = isinstance(result, Success)
        if released:
            self._callback = None
            self.state = CheckoutState.DELIVERED

        self.logger.log_delivery(
            outcome="success" if released else result.kind.value,
            record_count=len(result.records) if released else 0,
            callback_released=released,
            session_id=self.session_id
        )
        callback(result)

    def _handle_load_finished(self) -> None:
        if self.surface is not None and self.surface.has_real_page:
            self._set_loading(False)

    def _handle_navigation_failed(self, error: str) -> None:
        self.logger.log_error(
            error,
            error_type="navigation_failed",
            session_id=self.session_id,
            state=self.state.value
        )
        self._set_loading(False)

    def _set_loading(self, loading: bool) -> None:
        if loading == self._loading:
            return
        self._loading = loading
        if self.on_loading_changed is not None:
            self.on_loading_changed(loading)

    def _release_surface(self) -> None:
        surface, self.surface = self.surface, None
        if surface is None:
            return
        surface.channel.on_message(None)
        surface.on_load_finished(None)
        surface.on_navigation_failed(None)
        surface.on_closed(None)
        surface.close()
