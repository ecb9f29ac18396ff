from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass
class TimelineEvent:
    phase: str
    ts: str
    metadata: dict[str, Any] = field(default_factory=dict)


class Telemetry:
    def __init__(self) -> None:
        self._start = time.perf_counter()
        self._timeline: list[TimelineEvent] = []

    def event(self, phase: str, metadata: dict[str, Any] | None = None) -> None:
        self._timeline.append(
            TimelineEvent(
                phase=phase,
                ts=datetime.now(tz=timezone.utc).isoformat(),
                metadata=metadata or {},
            )
        )

    def elapsed_ms(self) -> int:
        return int((time.perf_counter() - self._start) * 1000)

    def snapshot(self) -> dict[str, Any]:
        return {
            "elapsed_ms": self.elapsed_ms(),
            "timeline": [
                {"phase": event.phase, "ts": event.ts, "metadata": event.metadata}
                for event in self._timeline
            ],
        }
