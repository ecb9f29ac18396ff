from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Awaitable, Callable

DEFAULT_INTERVAL_MS = 25

Predicate = Callable[[], Awaitable[bool]]


@dataclass(frozen=True)
class PollOutcome:
    satisfied: bool
    attempts: int
    elapsed_ms: int


async def poll(
    predicate: Predicate,
    patience_ms: int,
    interval_ms: int = DEFAULT_INTERVAL_MS,
) -> PollOutcome:
    """Evaluate ``predicate`` until it returns true or ``patience_ms`` expires.

    The last evaluation happens at or after the deadline, so an unsatisfied
    outcome is never reported early; sleeps are clipped to the time remaining
    so it is never reported more than one interval late.
    """
    if patience_ms < 0:
        raise ValueError("patience_ms must be >= 0")
    if interval_ms <= 0:
        raise ValueError("interval_ms must be > 0")

    start = time.monotonic()
    deadline = start + patience_ms / 1000.0
    attempts = 0

    while True:
        attempts += 1
        if await predicate():
            return PollOutcome(
                satisfied=True,
                attempts=attempts,
                elapsed_ms=int((time.monotonic() - start) * 1000),
            )

        remaining = deadline - time.monotonic()
        if remaining <= 0:
            return PollOutcome(
                satisfied=False,
                attempts=attempts,
                elapsed_ms=int((time.monotonic() - start) * 1000),
            )
        await asyncio.sleep(min(interval_ms / 1000.0, remaining))
