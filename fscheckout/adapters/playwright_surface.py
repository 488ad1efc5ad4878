"""
Playwright content surface for the FastSpring checkout sheet.
Renders the checkout page in a real browser page, injects the
extraction script and bridges its messages to the host channel.
"""
import asyncio
import webbrowser
from typing import Any, Awaitable, Callable, Optional, Tuple
from urllib.parse import quote

from playwright.async_api import (
    BrowserContext,
    Error as PlaywrightError,
    Page,
    Playwright,
    Request,
    TimeoutError as PlaywrightTimeoutError,
)

from fscheckout.adapters.surface import ContentSurface, is_synthetic_url
from fscheckout.config import config
from fscheckout.generators.extraction_script import load_extraction_script
from fscheckout.utils.logger import ComponentLogger


Command = Tuple[Callable[..., Awaitable[None]], Tuple[Any, ...]]


async def launch_browser_context(
    playwright: Playwright,
    browser_name: Optional[str] = None,
    headless: Optional[bool] = None,
) -> BrowserContext:
    """
    Launch the configured browser and open a context sized like the
    checkout sheet.
    """
    name = (browser_name or config.BROWSER).lower()
    if name not in config.SUPPORTED_BROWSERS:
        raise ValueError(f"Unsupported browser: {name}")

    browser_type = getattr(playwright, name)
    browser = await browser_type.launch(
        headless=config.HEADLESS if headless is None else headless,
        channel=config.BROWSER_CHANNEL,
    )
    return await browser.new_context(viewport=config.viewport())


class PlaywrightSurface(ContentSurface):
    """
    Content surface backed by a Playwright page.

    Commands are queued onto a worker task on the running event loop,
    so load_html() and close() return immediately. The page itself is
    created lazily by the first load.

    Outbound links: anything opening a new top level context (popups,
    target=_blank) is handed to the platform's default browser and
    the popup is closed.
    """

    def __init__(
        self,
        context: BrowserContext,
        popup_timeout_ms: Optional[int] = None,
        open_external: Callable[[str], Any] = webbrowser.open,
    ):
        super().__init__()
        self.context = context
        self.popup_timeout_ms = popup_timeout_ms or config.POPUP_TIMEOUT_MS
        self.open_external = open_external
        self.logger = ComponentLogger("playwright_surface")
        self.page: Optional[Page] = None
        self._commands: Optional["asyncio.Queue[Command]"] = None
        self._worker: Optional[asyncio.Task] = None
        self._closing = False

    @property
    def current_url(self) -> Optional[str]:
        if self.page is None or self.page.is_closed():
            return None
        return self.page.url

    def load_html(self, html: str) -> None:
        if self._closing:
            self.logger.log_decision(
                decision="load_ignored",
                reason="surface closed"
            )
            return
        self._schedule(self._load, html)

    def close(self) -> None:
        if self._closing:
            return
        self._closing = True
        self.channel.close()
        # Nothing was ever scheduled, so there is no page and no worker
        if self._commands is None:
            return
        self._schedule(self._close)

    async def join(self) -> None:
        """Wait until all queued commands ran."""
        if self._commands is not None:
            await self._commands.join()

    def _schedule(self, command: Callable[..., Awaitable[None]], *args: Any) -> None:
        if self._commands is None:
            self._commands = asyncio.Queue()
            self._worker = asyncio.get_running_loop().create_task(self._run_commands())
        self._commands.put_nowait((command, args))

    async def _run_commands(self) -> None:
        """Run queued commands in order; ends once the close command ran."""
        while True:
            command, args = await self._commands.get()
            try:
                await command(*args)
            except PlaywrightError as e:
                self.logger.log_error(
                    f"Surface command failed: {e.message}",
                    error_type="playwright_error",
                    command=command.__name__
                )
                if command == self._load:
                    self._notify_navigation_failed(e.message)
            except Exception as e:
                # later commands, close included, must still run
                self.logger.log_error(
                    f"Surface command crashed: {e}",
                    error_type=type(e).__name__,
                    command=command.__name__
                )
            finally:
                self._commands.task_done()
            if command == self._close:
                return

    async def _ensure_page(self) -> Page:
        if self.page is not None:
            return self.page

        script = load_extraction_script()
        page = await self.context.new_page()
        await page.add_init_script(script=script.source)
        await page.expose_function(self.channel.name, self.channel.send)

        page.on("load", self._handle_load)
        page.on("requestfailed", self._handle_request_failed)
        page.on("popup", self._handle_popup)
        page.on("close", self._handle_page_closed)

        self.logger.log_action(
            "page_created",
            "completed",
            script_version=script.version,
            channel=self.channel.name
        )
        self.page = page
        return page

    async def _load(self, html: str) -> None:
        page = await self._ensure_page()
        # A data: URL has no origin, which keeps the generated page
        # distinguishable from anything the provider navigates to.
        url = "data:text/html;charset=utf-8," + quote(html)
        self.logger.log_action("load_html", "started", page_length=len(html))
        await page.goto(url, wait_until="commit")

    async def _close(self) -> None:
        page, self.page = self.page, None
        if page is not None and not page.is_closed():
            await page.close()
        self.logger.log_action("surface_close", "completed")

    def _handle_load(self, page: Page) -> None:
        self.logger.log_action("page_load", "completed", url=page.url)
        self._notify_load_finished()

    def _handle_request_failed(self, request: Request) -> None:
        if self.page is None or not request.is_navigation_request():
            return
        if request.frame != self.page.main_frame:
            return
        error = request.failure or "navigation failed"
        self.logger.log_error(
            f"Navigation failed: {error}",
            error_type="navigation_failed",
            url=request.url
        )
        self._notify_navigation_failed(error)

    def _handle_page_closed(self, page: Page) -> None:
        if self._closing:
            return
        self.logger.log_decision(
            decision="surface_gone",
            reason="page closed outside the controller"
        )
        self.page = None
        self.channel.close()
        self._notify_closed()

    async def _handle_popup(self, popup: Page) -> None:
        url = popup.url
        if is_synthetic_url(url):
            try:
                await popup.wait_for_url(
                    lambda candidate: not is_synthetic_url(candidate),
                    wait_until="commit",
                    timeout=self.popup_timeout_ms,
                )
                url = popup.url
            except PlaywrightTimeoutError:
                self.logger.log_error(
                    "Popup never navigated to a real URL",
                    error_type="popup_timeout",
                    timeout_ms=self.popup_timeout_ms
                )

        if not is_synthetic_url(url):
            self.logger.log_decision(
                decision="open_external",
                reason="navigation targets a new top level context",
                url=url
            )
            self.open_external(url)

        await popup.close()
