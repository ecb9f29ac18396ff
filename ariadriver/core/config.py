from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

BROWSER_ENGINES = ("chromium", "firefox", "webkit")


@dataclass(frozen=True)
class DriverConfig:
    """Configuration for AriaDriver.

    ``patience_ms`` bounds every wait for an expected UI state change and is
    fixed for the lifetime of a driver. ``endpoint`` locates a running
    browser: ``http(s)://`` for a DevTools endpoint, ``ws(s)://`` for a
    Playwright browser server, ``None`` to launch a local browser.
    """
    endpoint: Optional[str] = None
    patience_ms: int = 1000
    browser: str = "chromium"
    headless: bool = True
    command_timeout_ms: int = 5_000
    poll_interval_ms: int = 25

    def __post_init__(self) -> None:
        if isinstance(self.patience_ms, bool) or not isinstance(self.patience_ms, int):
            raise ValueError("patience_ms must be an integer")
        if self.patience_ms < 0:
            raise ValueError("patience_ms must be >= 0")
        if self.command_timeout_ms <= 0:
            raise ValueError("command_timeout_ms must be > 0")
        if self.poll_interval_ms <= 0:
            raise ValueError("poll_interval_ms must be > 0")
        if self.browser not in BROWSER_ENGINES:
            raise ValueError(f"Unsupported browser engine: {self.browser}")
        if self.endpoint and self.endpoint.startswith(("http://", "https://")) and self.browser != "chromium":
            raise ValueError("http(s) endpoints attach over CDP and require browser='chromium'")


def get_driver_config() -> DriverConfig:
    """Get driver configuration from environment variables."""
    return DriverConfig(
        endpoint=os.getenv("ARIADRIVER_ENDPOINT") or None,
        patience_ms=int(os.getenv("ARIADRIVER_PATIENCE_MS", "1000")),
        browser=os.getenv("ARIADRIVER_BROWSER", "chromium").lower(),
        headless=os.getenv("ARIADRIVER_HEADLESS", "true").lower() == "true",
        command_timeout_ms=int(os.getenv("ARIADRIVER_COMMAND_TIMEOUT_MS", "5000")),
        poll_interval_ms=int(os.getenv("ARIADRIVER_POLL_INTERVAL_MS", "25")),
    )
