"""Core engine: element resolution, focus verification and widget protocols."""

from ariadriver.core.config import DriverConfig, get_driver_config
from ariadriver.core.diagnostics import DiagnosticSink
from ariadriver.core.driver import AriaDriver
from ariadriver.core.errors import (
    AriaDriverError,
    DriverWarning,
    ElementNotFoundError,
    ElementUnfocusableError,
    ErrorCode,
    InvalidMarkupError,
    PatienceTimeoutError,
    WarningCode,
)
from ariadriver.core.protocol import InteractionRecord, InteractionState
from ariadriver.core.widgets import WIDGETS, WidgetDescriptor, WidgetKind

__all__ = [
    "AriaDriver",
    "AriaDriverError",
    "DiagnosticSink",
    "DriverConfig",
    "DriverWarning",
    "ElementNotFoundError",
    "ElementUnfocusableError",
    "ErrorCode",
    "InteractionRecord",
    "InteractionState",
    "InvalidMarkupError",
    "PatienceTimeoutError",
    "WIDGETS",
    "WarningCode",
    "WidgetDescriptor",
    "WidgetKind",
    "get_driver_config",
]
