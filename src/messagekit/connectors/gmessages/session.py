"""Playwright browser session owned by a single scrape run."""
from typing import Optional

from playwright.async_api import async_playwright, Page, ConsoleMessage

from messagekit.utils.logs import report
from messagekit.utils.cfg.schema import Browser

logger = report.settings(__file__)


class BrowserSession:
    """One Playwright instance, one Chromium browser, one page.

    Use as an async context manager or call `start()` / `close()` directly.
    `close()` is idempotent until the next `start()`, so teardown in a
    `finally` block is always safe.
    """
    def __init__(self, options: Optional[Browser] = None):
        self.options = options or Browser()
        self.page: Optional[Page] = None
        self.browser = None
        self._playwright = None
        self._closed = False

    async def start(self) -> Page:
        """Launch Chromium and open the working page."""
        opts = self.options
        self._closed = False
        self._playwright = await async_playwright().start()

        args = ["--start-maximized"] if opts.start_maximized else []
        self.browser = await self._playwright.chromium.launch(headless=opts.headless, args=args)
        self.page = await self.browser.new_page()
        await self.page.set_viewport_size({"width": opts.viewport_width, "height": opts.viewport_height})
        logger.info(
            "Browser started (headless=%s, viewport=%dx%d)",
            opts.headless, opts.viewport_width, opts.viewport_height,
        )

        if opts.log_console:
            self.page.on("console", self._on_console)
        return self.page

    @staticmethod
    def _on_console(message: ConsoleMessage) -> None:
        logger.debug("PAGE %s: %s", message.type, message.text)

    async def close(self) -> None:
        """Close the browser and stop Playwright; later calls are no-ops."""
        if self._closed:
            return
        self._closed = True
        try:
            if self.browser is not None:
                await self.browser.close()
        finally:
            if self._playwright is not None:
                await self._playwright.stop()
            logger.info("Browser session closed")

    async def __aenter__(self) -> Page:
        return await self.start()

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        await self.close()
        return False
