from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from playwright.async_api import Page, TimeoutError as PlaywrightTimeout

from ariadriver.core.errors import AriaDriverError, PatienceTimeoutError
from ariadriver.core.focus import FocusTransferVerifier
from ariadriver.core.markup import validate
from ariadriver.core.patience import poll
from ariadriver.core.resolver import SelectorResolver
from ariadriver.core.telemetry import Telemetry
from ariadriver.core.widgets import WidgetDescriptor, WidgetKind

logger = logging.getLogger("ariadriver.protocol")


class InteractionState(str, Enum):
    PENDING = "pending"
    VALIDATING = "validating"
    ACTIVATING = "activating"
    AWAITING_STATE = "awaiting_state"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


_TRANSITIONS: dict[InteractionState, frozenset[InteractionState]] = {
    InteractionState.PENDING: frozenset({InteractionState.VALIDATING}),
    InteractionState.VALIDATING: frozenset({InteractionState.ACTIVATING, InteractionState.FAILED}),
    InteractionState.ACTIVATING: frozenset({InteractionState.AWAITING_STATE, InteractionState.FAILED}),
    InteractionState.AWAITING_STATE: frozenset({InteractionState.SUCCEEDED, InteractionState.FAILED}),
    InteractionState.SUCCEEDED: frozenset(),
    InteractionState.FAILED: frozenset(),
}


@dataclass
class InteractionRecord:
    kind: WidgetKind
    selector: str
    state: InteractionState = InteractionState.PENDING
    error_code: Optional[str] = None
    telemetry: dict[str, Any] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.state == InteractionState.SUCCEEDED


class WidgetInteraction:
    """One-shot state machine driving a single widget operation.

    VALIDATING resolves the trigger and checks its markup, ACTIVATING focuses
    it and presses Enter, AWAITING_STATE polls the descriptor's success
    predicate for the configured patience. Terminal states are final and the
    sequence is never retried.
    """

    def __init__(
        self,
        page: Page,
        descriptor: WidgetDescriptor,
        resolver: SelectorResolver,
        focus: FocusTransferVerifier,
        patience_ms: int,
        poll_interval_ms: int,
        command_timeout_ms: int,
    ) -> None:
        self._page = page
        self._descriptor = descriptor
        self._resolver = resolver
        self._focus = focus
        self._patience_ms = patience_ms
        self._poll_interval_ms = poll_interval_ms
        self._timeout_ms = command_timeout_ms
        self._telemetry = Telemetry()
        self._record: Optional[InteractionRecord] = None

    @property
    def record(self) -> Optional[InteractionRecord]:
        return self._record

    def _transition(self, state: InteractionState, metadata: dict[str, Any] | None = None) -> None:
        if self._record is None:
            raise RuntimeError("Interaction has not started")
        current = self._record.state
        if state not in _TRANSITIONS[current]:
            raise RuntimeError(f"Illegal interaction transition {current.value} -> {state.value}")
        self._record.state = state
        self._telemetry.event(state.value, metadata)
        logger.debug("[Protocol] %s %s: %s", self._descriptor.kind.value, self._record.selector, state.value)

    async def run(self, selector: str) -> InteractionRecord:
        if self._record is not None:
            raise RuntimeError("WidgetInteraction instances are single-use")
        self._record = InteractionRecord(kind=self._descriptor.kind, selector=selector)

        try:
            self._transition(InteractionState.VALIDATING)
            resolution = await self._resolver.resolve(selector)
            target = resolution.element
            await validate(self._descriptor.markup, selector, target, self._timeout_ms)

            self._transition(InteractionState.ACTIVATING)
            baseline = await self._descriptor.baseline(self._page, target, self._timeout_ms)
            await self._focus.activate(selector, target)

            self._transition(InteractionState.AWAITING_STATE, {"patience_ms": self._patience_ms})
            deadline = time.monotonic() + self._patience_ms / 1000.0

            async def satisfied() -> bool:
                # Backend reads may auto-wait; none may outlive the patience deadline.
                remaining_ms = int((deadline - time.monotonic()) * 1000)
                timeout_ms = max(1, min(self._timeout_ms, remaining_ms))
                try:
                    return await self._descriptor.succeeded(self._page, target, baseline, timeout_ms)
                except PlaywrightTimeout:
                    logger.debug("[Protocol] %s state read timed out", selector)
                    return False

            outcome = await poll(satisfied, self._patience_ms, self._poll_interval_ms)
            if not outcome.satisfied:
                raise PatienceTimeoutError(selector, self._patience_ms)

            self._transition(
                InteractionState.SUCCEEDED,
                {"attempts": outcome.attempts, "elapsed_ms": outcome.elapsed_ms},
            )
        except AriaDriverError as exc:
            self._record.error_code = exc.code
            self._transition(InteractionState.FAILED, {"code": exc.code})
            logger.info("[Protocol] %s %s failed: %s", self._descriptor.kind.value, selector, exc.code)
            raise
        except Exception as exc:
            self._record.error_code = type(exc).__name__
            self._transition(InteractionState.FAILED, {"exception": str(exc)})
            logger.exception("[Protocol] %s %s aborted by backend error", self._descriptor.kind.value, selector)
            raise
        finally:
            self._record.telemetry = self._telemetry.snapshot()

        return self._record
