from typing import Callable

import pytest

from ariadriver.core.config import DriverConfig
from ariadriver.core.driver import AriaDriver
from fakes import FakePage, FakeSession


@pytest.fixture
def page() -> FakePage:
    return FakePage()


@pytest.fixture
def session(page: FakePage) -> FakeSession:
    return FakeSession(page)


@pytest.fixture
def make_driver(session: FakeSession) -> Callable[..., AriaDriver]:
    def factory(patience_ms: int = 200, poll_interval_ms: int = 10) -> AriaDriver:
        config = DriverConfig(patience_ms=patience_ms, poll_interval_ms=poll_interval_ms)
        return AriaDriver(config, session=session)

    return factory
