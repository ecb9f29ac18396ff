from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional

from playwright.async_api import Locator, Page

from ariadriver.core.diagnostics import DiagnosticSink
from ariadriver.core.errors import DriverWarning, ElementNotFoundError, WarningCode

logger = logging.getLogger("ariadriver.resolver")

TAB_ORDER_LINK = "https://www.w3.org/TR/wai-aria-practices-1.1/#kbd_general_between"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_int(value: Optional[str]) -> Optional[int]:
    """Parse the leading integer of ``value`` the way HTML parsers read tabindex."""
    if value is None:
        return None
    match = _LEADING_INT.match(value)
    if not match:
        return None
    return int(match.group(1))


@dataclass(frozen=True)
class Resolution:
    selector: str
    element: Locator
    match_count: int

    @property
    def ambiguous(self) -> bool:
        return self.match_count > 1


class SelectorResolver:
    def __init__(self, page: Page, diagnostics: DiagnosticSink, command_timeout_ms: int) -> None:
        self._page = page
        self._diagnostics = diagnostics
        self._timeout_ms = command_timeout_ms

    async def count(self, selector: str) -> int:
        return await self._page.locator(selector).count()

    async def resolve(self, selector: str) -> Resolution:
        matches = self._page.locator(selector)
        match_count = await matches.count()

        if match_count == 0:
            logger.debug("[Resolver] No match for %s", selector)
            raise ElementNotFoundError(selector)

        if match_count > 1:
            self._diagnostics.publish(
                DriverWarning.create(WarningCode.AMBIGUOUS_REFERENCE, (selector,))
            )

        element = matches.first
        tab_index = await element.get_attribute("tabindex", timeout=self._timeout_ms)
        parsed = parse_int(tab_index)
        if parsed is not None and parsed > 0:
            self._diagnostics.publish(
                DriverWarning.create(
                    WarningCode.POOR_SEMANTICS,
                    detail=f"The tabindex property is set to {tab_index}, but it should not exceed 0.",
                    link=TAB_ORDER_LINK,
                )
            )

        logger.debug("[Resolver] %s resolved (%d match(es))", selector, match_count)
        return Resolution(selector=selector, element=element, match_count=match_count)
