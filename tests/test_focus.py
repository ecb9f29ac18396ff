import pytest

from ariadriver.core.errors import ElementUnfocusableError
from ariadriver.core.focus import FocusTransferVerifier
from fakes import FakeElement, FakePage


def _target(page: FakePage, element: FakeElement):
    page.add("#target", element)
    return page.locator("#target").first


@pytest.mark.asyncio
async def test_focuses_then_presses_enter(page: FakePage) -> None:
    element = FakeElement()
    target = _target(page, element)

    await FocusTransferVerifier(command_timeout_ms=1000).activate("#target", target)

    assert page.active is element
    assert page.activation_commands() == [("focus", "#target"), ("press", "#target", "Enter")]


@pytest.mark.asyncio
async def test_aria_hidden_fails_before_focus(page: FakePage) -> None:
    target = _target(page, FakeElement({"aria-hidden": "true"}))

    with pytest.raises(ElementUnfocusableError) as info:
        await FocusTransferVerifier(command_timeout_ms=1000).activate("#target", target)

    assert info.value.code == "ARIADRIVER-ELEMENT-UNFOCUSABLE"
    assert page.activation_commands() == []


@pytest.mark.asyncio
async def test_aria_hidden_false_is_focusable(page: FakePage) -> None:
    target = _target(page, FakeElement({"aria-hidden": "false"}))

    await FocusTransferVerifier(command_timeout_ms=1000).activate("#target", target)

    assert ("press", "#target", "Enter") in page.commands


@pytest.mark.asyncio
async def test_rejected_focus_never_presses_enter(page: FakePage) -> None:
    target = _target(page, FakeElement(focusable=False))

    with pytest.raises(ElementUnfocusableError):
        await FocusTransferVerifier(command_timeout_ms=1000).activate("#target", target)

    assert page.activation_commands() == [("focus", "#target")]
