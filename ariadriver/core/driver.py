"""
AriaDriver - WAI-ARIA aware page driver

Interacts with a live web page using the design patterns and widgets of the
WAI-ARIA Authoring Practices Guide:
https://www.w3.org/TR/wai-aria-practices-1.1/

Every widget operation validates the trigger's markup, moves focus to it,
presses Enter and then waits, at most ``patience`` milliseconds, for the
widget's expected state. Structural problems fail the operation; discouraged
but usable markup is reported as a warning on ``diagnostics``.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from playwright.async_api import Page

from ariadriver.core.config import DriverConfig
from ariadriver.core.diagnostics import DiagnosticSink, WarningListener
from ariadriver.core.focus import FocusTransferVerifier
from ariadriver.core.protocol import InteractionRecord, WidgetInteraction
from ariadriver.core.resolver import SelectorResolver
from ariadriver.core.session import BrowserSession
from ariadriver.core.widgets import WidgetKind, descriptor_for

logger = logging.getLogger("ariadriver.driver")


class AriaDriver:
    """
    Drive a page through ARIA widget semantics instead of raw input.

    Usage:
        async with AriaDriver(DriverConfig(patience_ms=500)) as driver:
            await driver.get("http://localhost:8000/menu.html")
            await driver.open_popup('[aria-label="Actions"]')
    """

    def __init__(self, config: Optional[DriverConfig] = None, session: Any = None) -> None:
        """
        Args:
            config: Driver configuration, uses defaults if not provided
            session: Object exposing ``initialize``, ``goto``, ``close`` and
                ``page``; a BrowserSession built from ``config`` by default
        """
        self.config = config or DriverConfig()
        self._patience_ms = self.config.patience_ms
        self._session = session or BrowserSession(self.config)
        self._diagnostics = DiagnosticSink()
        self._last_interaction: Optional[InteractionRecord] = None
        self._initialized = False
        self._quit = False

    @property
    def patience(self) -> int:
        """Milliseconds to wait for expected UI events before a timeout error."""
        return self._patience_ms

    @property
    def diagnostics(self) -> DiagnosticSink:
        return self._diagnostics

    @property
    def last_interaction(self) -> Optional[InteractionRecord]:
        return self._last_interaction

    @property
    def page(self) -> Page:
        self._ensure_ready()
        return self._session.page

    def subscribe(self, listener: WarningListener) -> Callable[[], None]:
        """Register a warning listener; returns a callable that detaches it."""
        return self._diagnostics.subscribe(listener)

    def unsubscribe(self, listener: WarningListener) -> None:
        self._diagnostics.unsubscribe(listener)

    async def initialize(self) -> None:
        if self._quit:
            raise RuntimeError("AriaDriver has quit")
        if self._initialized:
            logger.warning("[Driver] Already initialized")
            return
        await self._session.initialize()
        self._initialized = True
        logger.info(f"[Driver] Ready (patience={self._patience_ms}ms)")

    async def __aenter__(self) -> "AriaDriver":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.quit()

    def _ensure_ready(self) -> None:
        if self._quit:
            raise RuntimeError("AriaDriver has quit")
        if not self._initialized:
            raise RuntimeError("AriaDriver not initialized")

    def _resolver(self) -> SelectorResolver:
        return SelectorResolver(self.page, self._diagnostics, self.config.command_timeout_ms)

    async def get(self, url: str) -> None:
        """Navigate the current top-level browsing context to ``url``."""
        self._ensure_ready()
        logger.info(f"[Driver] Navigating to {url}")
        await self._session.goto(url)

    async def count(self, selector: str) -> int:
        """Number of elements currently matching ``selector``."""
        return await self._resolver().count(selector)

    async def use(self, selector: str) -> None:
        """
        Bring the element matching ``selector`` into focus and press Enter.

        Raises:
            ElementNotFoundError: nothing matches ``selector``
            ElementUnfocusableError: the target is ``aria-hidden="true"`` or
                is not the document's active element after focusing
        """
        resolution = await self._resolver().resolve(selector)
        focus = FocusTransferVerifier(self.config.command_timeout_ms)
        await focus.activate(selector, resolution.element)

    async def _interact(self, kind: WidgetKind, selector: str) -> None:
        interaction = WidgetInteraction(
            page=self.page,
            descriptor=descriptor_for(kind),
            resolver=self._resolver(),
            focus=FocusTransferVerifier(self.config.command_timeout_ms),
            patience_ms=self._patience_ms,
            poll_interval_ms=self.config.poll_interval_ms,
            command_timeout_ms=self.config.command_timeout_ms,
        )
        try:
            await interaction.run(selector)
        finally:
            self._last_interaction = interaction.record

    async def open_popup(self, selector: str) -> None:
        """
        Open the popup controlled by the trigger matching ``selector``.

        The trigger must declare ``aria-haspopup`` with a value other than
        ``false``, and exactly one more visible ARIA role container must
        appear within ``patience`` milliseconds.

        Raises:
            InvalidMarkupError: ``aria-haspopup`` is missing, ``false`` or unrecognized
            ElementNotFoundError, ElementUnfocusableError: see ``use``
            PatienceTimeoutError: no popup appeared in time
        """
        await self._interact(WidgetKind.POPUP, selector)

    async def toggle_button(self, selector: str) -> None:
        """Press a toggle button and wait for its ``aria-pressed`` state to change."""
        await self._interact(WidgetKind.BUTTON, selector)

    async def open_dialog(self, selector: str) -> None:
        """Open a dialog from a trigger declaring ``aria-haspopup="dialog"``.

        Succeeds once one more visible dialog is present and focus has moved
        inside a dialog.
        """
        await self._interact(WidgetKind.DIALOG, selector)

    async def quit(self) -> None:
        """Terminate the browser session and detach every warning listener.

        The driver cannot be used afterwards.
        """
        if self._quit:
            return
        self._quit = True
        self._diagnostics.close()
        if self._initialized:
            await self._session.close()
        self._initialized = False
        logger.info("[Driver] Quit")
