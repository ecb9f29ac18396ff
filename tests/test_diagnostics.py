import pytest

from ariadriver.core.diagnostics import DiagnosticSink
from ariadriver.core.errors import DriverWarning


def warning(code: str = "ARIADRIVER-AMBIGUOUS-REFERENCE") -> DriverWarning:
    return DriverWarning(code=code, detail="detail")


def test_publish_reaches_every_listener() -> None:
    sink = DiagnosticSink()
    first: list[DriverWarning] = []
    second: list[DriverWarning] = []
    sink.subscribe(first.append)
    sink.subscribe(second.append)

    sink.publish(warning())

    assert len(first) == 1
    assert len(second) == 1


def test_unsubscribe_handle_detaches() -> None:
    sink = DiagnosticSink()
    received: list[DriverWarning] = []
    unsubscribe = sink.subscribe(received.append)

    unsubscribe()
    unsubscribe()
    sink.publish(warning())

    assert received == []
    assert sink.listener_count == 0


def test_capture_scope_does_not_leak() -> None:
    sink = DiagnosticSink()

    with sink.capture() as first_case:
        sink.publish(warning())
    with sink.capture() as second_case:
        pass

    assert len(first_case) == 1
    assert second_case == []
    assert sink.listener_count == 0


def test_listener_failure_is_contained() -> None:
    sink = DiagnosticSink()
    received: list[DriverWarning] = []

    def broken(_: DriverWarning) -> None:
        raise ValueError("boom")

    sink.subscribe(broken)
    sink.subscribe(received.append)
    sink.publish(warning())

    assert len(received) == 1


def test_events_since_and_buffer_bound() -> None:
    sink = DiagnosticSink(max_events=2)
    for _ in range(3):
        sink.publish(warning())

    assert sink.sequence == 3
    assert [event.seq for event in sink.events_since(0)] == [2, 3]
    assert [event.seq for event in sink.events_since(2)] == [3]


def test_closed_sink_rejects_listeners_and_drops_warnings() -> None:
    sink = DiagnosticSink()
    sink.close()

    sink.publish(warning())

    assert sink.closed is True
    assert sink.sequence == 0
    with pytest.raises(RuntimeError):
        sink.subscribe(lambda _: None)
