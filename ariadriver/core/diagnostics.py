from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Iterator

from ariadriver.core.errors import DriverWarning

logger = logging.getLogger("ariadriver.diagnostics")

WarningListener = Callable[[DriverWarning], None]


@dataclass(frozen=True)
class DiagnosticEvent:
    seq: int
    ts: str
    warning: DriverWarning


class DiagnosticSink:
    """Session-scoped channel for advisory warnings.

    Publishing never raises: a listener that fails is logged and skipped so
    diagnostics cannot change the outcome of the operation that produced them.
    """

    def __init__(self, max_events: int = 256) -> None:
        self._listeners: list[WarningListener] = []
        self._events: list[DiagnosticEvent] = []
        self._max_events = max_events
        self._seq = 0
        self._closed = False

    @property
    def sequence(self) -> int:
        return self._seq

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, listener: WarningListener) -> Callable[[], None]:
        if self._closed:
            raise RuntimeError("Diagnostic sink is closed")
        self._listeners.append(listener)

        def unsubscribe() -> None:
            self.unsubscribe(listener)

        return unsubscribe

    def unsubscribe(self, listener: WarningListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            return

    def clear(self) -> None:
        self._listeners.clear()

    def close(self) -> None:
        self.clear()
        self._events.clear()
        self._closed = True

    def publish(self, warning: DriverWarning) -> None:
        if self._closed:
            return
        self._seq += 1
        self._events.append(
            DiagnosticEvent(
                seq=self._seq,
                ts=datetime.now(tz=timezone.utc).isoformat(),
                warning=warning,
            )
        )
        if len(self._events) > self._max_events:
            self._events = self._events[-self._max_events :]

        logger.warning("[Diagnostics] %s: %s", warning.code, warning.detail)
        for listener in list(self._listeners):
            try:
                listener(warning)
            except Exception:
                logger.exception("[Diagnostics] Listener failed for %s", warning.code)

    def events_since(self, seq: int) -> list[DiagnosticEvent]:
        return [event for event in self._events if event.seq > seq]

    @contextmanager
    def capture(self) -> Iterator[list[DriverWarning]]:
        """Collect warnings published inside the block, then detach."""
        collected: list[DriverWarning] = []
        unsubscribe = self.subscribe(collected.append)
        try:
            yield collected
        finally:
            unsubscribe()
