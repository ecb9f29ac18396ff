import pytest

from ariadriver.core.widgets import (
    OPEN_CONTAINER_SELECTOR,
    WIDGETS,
    WidgetKind,
    count_visible,
    descriptor_for,
)
from fakes import FakeElement, FakePage


def test_every_kind_has_a_descriptor() -> None:
    assert set(WIDGETS) == set(WidgetKind)
    for kind, descriptor in WIDGETS.items():
        assert descriptor.kind == kind


def test_descriptor_lookup_by_name() -> None:
    assert descriptor_for("popup") is WIDGETS[WidgetKind.POPUP]
    assert descriptor_for(WidgetKind.DIALOG) is WIDGETS[WidgetKind.DIALOG]


def test_unknown_kind_rejected() -> None:
    with pytest.raises(ValueError, match="Unsupported widget kind"):
        descriptor_for("carousel")


@pytest.mark.asyncio
async def test_count_visible_reads_page(page: FakePage) -> None:
    page.visible[OPEN_CONTAINER_SELECTOR] = 4

    assert await count_visible(page, OPEN_CONTAINER_SELECTOR) == 4


@pytest.mark.asyncio
async def test_button_predicate_compares_against_baseline(page: FakePage) -> None:
    element = FakeElement({"aria-pressed": "false"})
    page.add("#toggle", element)
    target = page.locator("#toggle").first
    descriptor = WIDGETS[WidgetKind.BUTTON]

    baseline = await descriptor.baseline(page, target, 1000)
    assert await descriptor.succeeded(page, target, baseline, 1000) is False

    element.attributes["aria-pressed"] = "true"
    assert await descriptor.succeeded(page, target, baseline, 1000) is True
