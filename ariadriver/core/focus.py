from __future__ import annotations

import logging

from playwright.async_api import Locator

from ariadriver.core.errors import ElementUnfocusableError

logger = logging.getLogger("ariadriver.focus")

IS_ACTIVE_ELEMENT_SCRIPT = "(element) => element.ownerDocument.activeElement === element"

ACTIVATION_KEY = "Enter"


class FocusTransferVerifier:
    """Focus an element, confirm the page accepted focus, then press Enter."""

    def __init__(self, command_timeout_ms: int) -> None:
        self._timeout_ms = command_timeout_ms

    async def activate(self, selector: str, element: Locator) -> None:
        # Browsers that are not screen readers will focus aria-hidden elements
        # that are still rendered, so the attribute is checked explicitly.
        if await element.get_attribute("aria-hidden", timeout=self._timeout_ms) == "true":
            raise ElementUnfocusableError(selector)

        await element.focus(timeout=self._timeout_ms)

        accepted = await element.evaluate(IS_ACTIVE_ELEMENT_SCRIPT, timeout=self._timeout_ms)
        if not accepted:
            raise ElementUnfocusableError(selector)

        logger.debug("[Focus] %s focused, pressing %s", selector, ACTIVATION_KEY)
        await element.press(ACTIVATION_KEY, timeout=self._timeout_ms)
