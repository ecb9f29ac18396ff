"""
Widget descriptors.

Every supported widget kind is described by one WidgetDescriptor: the markup
rule its trigger must satisfy, a baseline captured before activation, and a
success predicate evaluated against that baseline while waiting. Adding a
kind means adding a descriptor to WIDGETS; the interaction protocol itself
never branches on kind.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable

from playwright.async_api import Locator, Page

from ariadriver.core.markup import MarkupRule

OPEN_CONTAINER_SELECTOR = '[role]:not([aria-hidden="true"])'
OPEN_DIALOG_SELECTOR = (
    '[role="dialog"]:not([aria-hidden="true"]), '
    '[role="alertdialog"]:not([aria-hidden="true"])'
)

VISIBLE_COUNT_SCRIPT = """
(selector) => Array.from(document.querySelectorAll(selector)).filter((element) => {
    if (!element.getClientRects().length) return false;
    return window.getComputedStyle(element).visibility !== 'hidden';
}).length
"""

FOCUS_WITHIN_SCRIPT = """
(selector) => {
    const active = document.activeElement;
    return Boolean(active && active.closest(selector));
}
"""


class WidgetKind(str, Enum):
    POPUP = "popup"
    BUTTON = "button"
    DIALOG = "dialog"


Baseline = Callable[[Page, Locator, int], Awaitable[Any]]
SuccessPredicate = Callable[[Page, Locator, Any, int], Awaitable[bool]]


@dataclass(frozen=True)
class WidgetDescriptor:
    kind: WidgetKind
    markup: MarkupRule
    baseline: Baseline
    succeeded: SuccessPredicate


async def count_visible(page: Page, selector: str) -> int:
    return int(await page.evaluate(VISIBLE_COUNT_SCRIPT, selector))


async def _open_container_count(page: Page, target: Locator, timeout_ms: int) -> int:
    return await count_visible(page, OPEN_CONTAINER_SELECTOR)


async def _one_more_container(page: Page, target: Locator, baseline: int, timeout_ms: int) -> bool:
    return await count_visible(page, OPEN_CONTAINER_SELECTOR) == baseline + 1


async def _pressed_state(page: Page, target: Locator, timeout_ms: int) -> str | None:
    return await target.get_attribute("aria-pressed", timeout=timeout_ms)


async def _pressed_state_changed(page: Page, target: Locator, baseline: str | None, timeout_ms: int) -> bool:
    return await target.get_attribute("aria-pressed", timeout=timeout_ms) != baseline


async def _open_dialog_count(page: Page, target: Locator, timeout_ms: int) -> int:
    return await count_visible(page, OPEN_DIALOG_SELECTOR)


async def _dialog_opened_with_focus(page: Page, target: Locator, baseline: int, timeout_ms: int) -> bool:
    if await count_visible(page, OPEN_DIALOG_SELECTOR) != baseline + 1:
        return False
    return bool(await page.evaluate(FOCUS_WITHIN_SCRIPT, OPEN_DIALOG_SELECTOR))


POPUP = WidgetDescriptor(
    kind=WidgetKind.POPUP,
    markup=MarkupRule(
        attribute="aria-haspopup",
        accepted=frozenset({"true", "menu", "listbox", "tree", "grid", "dialog"}),
        negative=frozenset({"false"}),
        link="https://www.w3.org/TR/wai-aria-1.1/#aria-haspopup",
    ),
    baseline=_open_container_count,
    succeeded=_one_more_container,
)

BUTTON = WidgetDescriptor(
    kind=WidgetKind.BUTTON,
    markup=MarkupRule(
        attribute="aria-pressed",
        accepted=frozenset({"true", "false", "mixed"}),
        link="https://www.w3.org/TR/wai-aria-practices-1.1/#button",
    ),
    baseline=_pressed_state,
    succeeded=_pressed_state_changed,
)

DIALOG = WidgetDescriptor(
    kind=WidgetKind.DIALOG,
    markup=MarkupRule(
        attribute="aria-haspopup",
        accepted=frozenset({"dialog"}),
        negative=frozenset({"false"}),
        link="https://www.w3.org/TR/wai-aria-practices-1.1/#dialog_modal",
    ),
    baseline=_open_dialog_count,
    succeeded=_dialog_opened_with_focus,
)

WIDGETS: dict[WidgetKind, WidgetDescriptor] = {
    WidgetKind.POPUP: POPUP,
    WidgetKind.BUTTON: BUTTON,
    WidgetKind.DIALOG: DIALOG,
}


def descriptor_for(kind: WidgetKind | str) -> WidgetDescriptor:
    try:
        return WIDGETS[WidgetKind(kind)]
    except ValueError as exc:
        raise ValueError(f"Unsupported widget kind: {kind}") from exc
