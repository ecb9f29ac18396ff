from __future__ import annotations

import logging
from typing import Optional

from playwright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright

from ariadriver.core.config import DriverConfig

logger = logging.getLogger("ariadriver.session")


class BrowserSession:
    """Owns the Playwright connection and the single page a driver controls.

    Three modes, chosen by ``config.endpoint``:
      1. None: launch a local browser of ``config.browser``
      2. http(s)://: attach to a running Chrome over CDP
      3. ws(s)://: connect to a Playwright browser server
    """

    def __init__(self, config: DriverConfig) -> None:
        self._config = config
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None
        self._owns_context = True

    @property
    def page(self) -> Page:
        if not self._page:
            raise RuntimeError("Browser session not initialized")
        return self._page

    @property
    def initialized(self) -> bool:
        return self._page is not None

    async def initialize(self) -> None:
        if self._page:
            logger.warning("[Session] Already initialized")
            return

        self._playwright = await async_playwright().start()
        endpoint = self._config.endpoint
        try:
            if endpoint and endpoint.startswith(("http://", "https://")):
                logger.info(f"[Session] Connecting over CDP at {endpoint}")
                self._browser = await self._playwright.chromium.connect_over_cdp(endpoint)
            elif endpoint:
                logger.info(f"[Session] Connecting to browser server at {endpoint}")
                browser_type = getattr(self._playwright, self._config.browser)
                self._browser = await browser_type.connect(endpoint)
            else:
                logger.info(f"[Session] Launching local {self._config.browser}")
                browser_type = getattr(self._playwright, self._config.browser)
                self._browser = await browser_type.launch(headless=self._config.headless)

            if self._browser.contexts:
                self._context = self._browser.contexts[0]
                self._owns_context = False
            else:
                self._context = await self._browser.new_context()
                self._owns_context = True

            self._page = self._context.pages[0] if self._context.pages else await self._context.new_page()
            self._page.set_default_timeout(self._config.command_timeout_ms)
        except Exception:
            await self.close()
            raise

        logger.info("[Session] Browser session ready")

    async def goto(self, url: str) -> None:
        await self.page.goto(url, wait_until="load")

    async def close(self) -> None:
        if self._context and self._owns_context:
            await self._context.close()
        if self._browser:
            # For CDP and browser-server connections this only disconnects.
            await self._browser.close()
        if self._playwright:
            await self._playwright.stop()
        self._page = None
        self._context = None
        self._browser = None
        self._playwright = None
        logger.info("[Session] Browser session closed")
