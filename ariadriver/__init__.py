"""ARIA-aware browser driver."""

from ariadriver.core import (
    AriaDriver,
    AriaDriverError,
    DriverConfig,
    DriverWarning,
    ElementNotFoundError,
    ElementUnfocusableError,
    InvalidMarkupError,
    PatienceTimeoutError,
)

__all__ = [
    "AriaDriver",
    "AriaDriverError",
    "DriverConfig",
    "DriverWarning",
    "ElementNotFoundError",
    "ElementUnfocusableError",
    "InvalidMarkupError",
    "PatienceTimeoutError",
]
