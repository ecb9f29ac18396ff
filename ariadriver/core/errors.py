from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ErrorCode(str, Enum):
    ELEMENT_NOT_FOUND = "ARIADRIVER-ELEMENT-NOT-FOUND"
    ELEMENT_UNFOCUSABLE = "ARIADRIVER-ELEMENT-UNFOCUSABLE"
    INVALID_MARKUP = "ARIADRIVER-INVALID-MARKUP"
    TIMEOUT = "ARIADRIVER-TIMEOUT"


class WarningCode(str, Enum):
    AMBIGUOUS_REFERENCE = "ARIADRIVER-AMBIGUOUS-REFERENCE"
    POOR_SEMANTICS = "ARIADRIVER-POOR-SEMANTICS"


MESSAGES: dict[str, str] = {
    ErrorCode.ELEMENT_NOT_FOUND.value: "No element found matching selector {0}.",
    ErrorCode.ELEMENT_UNFOCUSABLE.value: "The element matching selector {0} could not be focused.",
    ErrorCode.INVALID_MARKUP.value: "The {2} attribute of the element matching selector {0} is invalid ({1}).",
    ErrorCode.TIMEOUT.value: "The expected state change for selector {0} did not occur within the allotted time.",
    WarningCode.AMBIGUOUS_REFERENCE.value: "More than one element matches selector {0}; using the first.",
    WarningCode.POOR_SEMANTICS.value: "The element uses discouraged markup.",
}


def format_message(code: str, arguments: tuple[Any, ...] = ()) -> str:
    template = MESSAGES.get(code)
    if template is None:
        return code
    try:
        return template.format(*arguments)
    except IndexError:
        return template


class AriaDriverError(Exception):
    """Fatal failure of a single driver operation.

    Carries a stable machine-readable ``code``, the positional ``arguments``
    used to build the message, and an optional documentation ``link``.
    """

    def __init__(
        self,
        code: str,
        arguments: tuple[Any, ...] | list[Any] | None = None,
        message: Optional[str] = None,
        link: Optional[str] = None,
    ) -> None:
        self.code = code.value if isinstance(code, Enum) else str(code)
        self.arguments = tuple(arguments or ())
        self.message = message or format_message(self.code, self.arguments)
        self.link = link
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": type(self).__name__,
            "code": self.code,
            "arguments": list(self.arguments),
            "message": self.message,
            "link": self.link,
        }


class ElementNotFoundError(AriaDriverError):
    def __init__(self, selector: str) -> None:
        super().__init__(ErrorCode.ELEMENT_NOT_FOUND, [selector])
        self.selector = selector


class ElementUnfocusableError(AriaDriverError):
    def __init__(self, selector: str) -> None:
        super().__init__(ErrorCode.ELEMENT_UNFOCUSABLE, [selector])
        self.selector = selector


class InvalidMarkupError(AriaDriverError):
    def __init__(self, selector: str, reason: str, attribute: str, link: Optional[str] = None) -> None:
        super().__init__(ErrorCode.INVALID_MARKUP, [selector, reason, attribute], link=link)
        self.selector = selector
        self.reason = reason
        self.attribute = attribute


class PatienceTimeoutError(AriaDriverError):
    def __init__(self, selector: str, patience_ms: int) -> None:
        super().__init__(ErrorCode.TIMEOUT, [selector])
        self.selector = selector
        self.patience_ms = patience_ms


@dataclass(frozen=True)
class DriverWarning:
    """Advisory diagnostic. Never aborts an operation."""

    code: str
    detail: str
    link: Optional[str] = None

    @classmethod
    def create(
        cls,
        code: WarningCode,
        arguments: tuple[Any, ...] = (),
        detail: Optional[str] = None,
        link: Optional[str] = None,
    ) -> "DriverWarning":
        return cls(
            code=code.value,
            detail=detail or format_message(code.value, arguments),
            link=link,
        )

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "detail": self.detail, "link": self.link}
