"""Tests for commonkit.events."""

from __future__ import annotations

import pytest

from commonkit.errors import ArgumentNullError, InvalidArgumentError
from commonkit.events import (
    Event,
    EventHandlers,
    add_event_handler,
    get_event,
    remove_event_handler,
)
from commonkit.operations import (
    ItemsOperationProgress,
    OperationProgressEventArgs,
    OperationState,
    Progress,
)


class Worker:
    status_updated = Event()
    finished = Event()

    def report(self, done: int, total: int) -> None:
        progress = ItemsOperationProgress(total_progress=Progress(current=done, maximum=total))
        self.status_updated(
            self, OperationProgressEventArgs(progress=progress, state=OperationState.RUNNING)
        )


class Recorder:
    def __init__(self) -> None:
        self.received: list[tuple[object, object]] = []

    def __call__(self, sender: object, args: object) -> None:
        self.received.append((sender, args))


class TestEventDescriptor:
    """Tests for the Event descriptor and EventHandlers."""

    def test_class_access_returns_descriptor(self) -> None:
        """Reading the attribute from the class gives the Event."""
        assert isinstance(Worker.status_updated, Event)
        assert Worker.status_updated.name == "status_updated"

    def test_instances_have_separate_handler_lists(self) -> None:
        """Handlers attached to one instance are not seen by another."""
        first, second = Worker(), Worker()
        recorder = Recorder()
        first.status_updated += recorder

        second.report(1, 2)
        assert recorder.received == []

        first.report(1, 2)
        assert len(recorder.received) == 1
        sender, args = recorder.received[0]
        assert sender is first
        assert isinstance(args, OperationProgressEventArgs)
        assert args.progress.total_progress.percentage == 50.0

    def test_handlers_run_in_attachment_order(self) -> None:
        """Handlers are invoked in the order they were attached."""
        worker = Worker()
        order: list[str] = []
        worker.finished += lambda sender, args: order.append("a")
        worker.finished += lambda sender, args: order.append("b")

        worker.finished(worker)

        assert order == ["a", "b"]

    def test_remove_drops_last_occurrence_only(self) -> None:
        """A handler attached twice is removed once per call."""
        worker = Worker()
        recorder = Recorder()
        worker.finished += recorder
        worker.finished += recorder
        worker.finished -= recorder

        worker.finished(worker, "done")

        assert recorder.received == [(worker, "done")]

    def test_removing_unknown_handler_is_noop(self) -> None:
        """Detaching a handler that was never attached does nothing."""
        worker = Worker()
        worker.finished -= Recorder()
        assert len(worker.finished) == 0

    def test_handler_may_detach_itself_while_raised(self) -> None:
        """The handler list is snapshotted before invocation."""
        worker = Worker()
        calls: list[int] = []

        def once(sender: object, args: object) -> None:
            calls.append(1)
            worker.finished.remove(once)

        worker.finished += once
        worker.finished(worker)
        worker.finished(worker)

        assert calls == [1]

    def test_direct_assignment_refused(self) -> None:
        """Replacing the handler list is not allowed."""
        worker = Worker()
        with pytest.raises(AttributeError, match="finished"):
            worker.finished = EventHandlers("finished")  # type: ignore[assignment]

    def test_non_callable_handler_rejected(self) -> None:
        """Only callables can be attached."""
        worker = Worker()
        with pytest.raises(InvalidArgumentError):
            worker.finished += "not callable"  # type: ignore[operator]

    def test_clear_and_contains(self) -> None:
        """Membership checks and clearing work on the handler list."""
        worker = Worker()
        recorder = Recorder()
        worker.finished += recorder
        assert recorder in worker.finished
        worker.finished.clear()
        assert recorder not in worker.finished


class TestReflectionWiring:
    """Tests for add_event_handler, remove_event_handler and get_event."""

    def test_add_by_name(self) -> None:
        """Events can be resolved from their attribute name."""
        worker = Worker()
        recorder = Recorder()

        add_event_handler("status_updated", worker, recorder)
        worker.report(3, 4)

        assert len(recorder.received) == 1

    def test_add_by_descriptor(self) -> None:
        """Events can be given as the descriptor itself."""
        worker = Worker()
        recorder = Recorder()

        add_event_handler(Worker.finished, worker, recorder)
        worker.finished(worker, 7)

        assert recorder.received == [(worker, 7)]

    def test_remove_by_name(self) -> None:
        """Handlers attached by name can be detached by name."""
        worker = Worker()
        recorder = Recorder()
        add_event_handler("finished", worker, recorder)

        remove_event_handler("finished", worker, recorder)
        worker.finished(worker)

        assert recorder.received == []

    def test_unknown_event_name_rejected(self) -> None:
        """Names that are not events raise InvalidArgumentError."""
        with pytest.raises(InvalidArgumentError, match="no event named 'report'"):
            add_event_handler("report", Worker(), Recorder())

    def test_get_event_accepts_class_or_instance(self) -> None:
        """The owner may be the class or an instance."""
        assert get_event(Worker, "finished") is Worker.finished
        assert get_event(Worker(), "finished") is Worker.finished

    @pytest.mark.parametrize("missing", ["event", "target", "handler"])
    def test_none_arguments_rejected(self, missing: str) -> None:
        """Each argument is required."""
        arguments: dict[str, object] = {
            "event": "finished",
            "target": Worker(),
            "handler": Recorder(),
        }
        arguments[missing] = None
        with pytest.raises(ArgumentNullError) as exc_info:
            add_event_handler(**arguments)  # type: ignore[arg-type]
        assert exc_info.value.argument == missing
