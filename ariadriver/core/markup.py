from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from playwright.async_api import Locator

from ariadriver.core.errors import InvalidMarkupError


class MarkupReason(str, Enum):
    ATTRIBUTE_OMITTED = "attribute-omitted"
    NEGATIVE_STATE = "negative-state"
    UNRECOGNIZED_VALUE = "unrecognized-value"


@dataclass(frozen=True)
class MarkupRule:
    attribute: str
    accepted: frozenset[str]
    negative: frozenset[str] = frozenset()
    link: Optional[str] = None

    def check(self, value: Optional[str]) -> Optional[MarkupReason]:
        if value is None:
            return MarkupReason.ATTRIBUTE_OMITTED
        if value in self.negative:
            return MarkupReason.NEGATIVE_STATE
        if value not in self.accepted:
            return MarkupReason.UNRECOGNIZED_VALUE
        return None


async def validate(rule: MarkupRule, selector: str, element: Locator, timeout_ms: int) -> str:
    """Read the rule's attribute and raise InvalidMarkupError if it does not conform.

    Returns the accepted attribute value.
    """
    value = await element.get_attribute(rule.attribute, timeout=timeout_ms)
    reason = rule.check(value)
    if reason is not None:
        raise InvalidMarkupError(selector, reason.value, rule.attribute, link=rule.link)
    return value
