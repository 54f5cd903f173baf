"""Regression tests for workflow submission batching, resolution and queue status queries."""

from __future__ import annotations

import xml.etree.ElementTree as element_tree

import httpx

import pytest

from jdf_client.adapters import JmfReturnCodeError
from jdf_client.adapters.jmf_http_transport import JmfHttpTransport
import jdf_client.adapters.jmf_http_transport as transport_module
from jdf_client.config import AppSettings
from jdf_client.domain import (
    InvalidArgumentError,
    WorkflowBatchClosedError,
    WorkflowDescriptor,
    WorkflowNotFoundError,
)
from jdf_client.jobs import (
    EntryFailed,
    EntrySubmitted,
    InMemoryNotificationDispatcher,
    SubmissionBatchState,
    WorkflowSubmissionManager,
    job_flatten_queue_entries,
)
from jdf_client.messages import JmfMessage

_SERVER_URL = "http://jmf.test:8010/jmf"

_KNOWN_CONTROLLERS_REPLY = (
    b'<JMF xmlns="http://www.CIP4.org/JDFSchema_1_1"><Response Type="KnownControllers" ReturnCode="0">'
    b'<JDFController ControllerID="Brochure" URL="http://jmf.test/wf/Brochure"/>'
    b'<JDFController ControllerID="Posters" URL="http://jmf.test/wf/Posters"/>'
    b'<JDFController ControllerID="Brochure" URL="http://jmf.test/wf/Brochure-duplicate"/>'
    b"</Response></JMF>"
)
_SUBMIT_REPLY = (
    b'<JMF><Response Type="SubmitQueueEntry" ReturnCode="0">'
    b'<QueueEntry QueueEntryID="100" Status="Waiting"/></Response></JMF>'
)
_QUEUE_STATUS_REPLY = (
    b'<JMF><Response Type="QueueStatus" ReturnCode="0"><Queue DeviceID="FieryQueue" Status="Running">'
    b'<QueueEntry QueueEntryID="42" Status="Completed" SubmissionTime="2026-10-19T08:00:00+00:00" '
    b'StartTime="2026-10-19T08:01:00+00:00" EndTime="2026-10-19T08:05:00+00:00"/>'
    b'<QueueEntry QueueEntryID="43" Status="InProgress" DeviceID="Posters"/>'
    b"</Queue></Response></JMF>"
)


class _RecordingTransport:
    """Transport stub that records sent messages and answers by message type."""

    def __init__(
        self,
        queue_status_reply: bytes = _QUEUE_STATUS_REPLY,
        known_controllers_reply: bytes = _KNOWN_CONTROLLERS_REPLY,
    ):
        """Initialize recorded message list and canned replies.

        Args:
            queue_status_reply: Reply returned for QueueStatus queries.
            known_controllers_reply: Reply returned for KnownControllers queries.

        Returns:
            None: Initializer does not return values.

        Raises:
            RuntimeError: This stub does not raise runtime errors.
        """

        self.sent_messages: list[JmfMessage] = []
        self._queue_status_reply = queue_status_reply
        self._known_controllers_reply = known_controllers_reply

    def adapter_default_url(self) -> str:
        return _SERVER_URL

    def adapter_submit_message(self, message: JmfMessage, url: str | None = None) -> element_tree.Element:
        """Record the message and return the canned reply for its type.

        Args:
            message: Submitted JMF envelope.
            url: Optional endpoint override.

        Returns:
            xml.etree.ElementTree.Element: Parsed canned reply.

        Raises:
            AssertionError: Raised for unexpected message types.
        """

        _ = url
        self.sent_messages.append(message)
        message_type = _message_type(message)
        if message_type == "KnownControllers":
            return element_tree.fromstring(self._known_controllers_reply)
        if message_type == "QueueStatus":
            return element_tree.fromstring(self._queue_status_reply)
        if message_type == "SubmitQueueEntry":
            return element_tree.fromstring(_SUBMIT_REPLY)
        raise AssertionError(f"unexpected message type {message_type}")

    def sent_types(self) -> list[str | None]:
        return [_message_type(message) for message in self.sent_messages]

    def sent_commands(self) -> list[JmfMessage]:
        return [message for message in self.sent_messages if _message_type(message) == "SubmitQueueEntry"]


def _message_type(message: JmfMessage) -> str | None:
    for section_name in ("Query", "Command"):
        section = message.message_root().node_find_child(section_name)
        if section is not None:
            return section.node_get_attribute("Type")
    return None


def _build_settings() -> AppSettings:
    """Create deterministic settings for submission tests.

    Returns:
        AppSettings: Test settings with explicit sender, base path and callback URL.

    Raises:
        ValueError: Raised by AppSettings when values are invalid.
    """

    return AppSettings(
        environment_name="test",
        server_url=_SERVER_URL,
        server_file_path="/hotfolder/",
        sender_id="PrintHub",
        application_base_url="http://client.test",
    )


def _build_manager(
    transport: object | None = None,
    notification_sink: InMemoryNotificationDispatcher | None = None,
) -> WorkflowSubmissionManager:
    return WorkflowSubmissionManager(
        transport=transport or _RecordingTransport(),
        settings=_build_settings(),
        notification_sink=notification_sink,
    )


def test_jobs_queue_file_accepts_jdf_and_rejects_other_files_without_mutation() -> None:
    """Queue `.jdf` files and reject other suffixes without touching the batch.

    Returns:
        None: Assertions validate file validation.

    Raises:
        AssertionError: Raised when invalid files are queued.
    """

    manager = _build_manager()

    assert manager.job_queue_file("jobs/a.jdf") is manager
    assert manager.state == SubmissionBatchState.ACCUMULATING

    with pytest.raises(InvalidArgumentError, match="only send JDF files"):
        manager.job_queue_file("jobs/a.pdf")

    assert manager.job_pending_files() == ["jobs/a.jdf"]


def test_jobs_queue_files_keeps_files_before_first_invalid_entry() -> None:
    """Stop at the first invalid file and keep the files queued before it."""

    manager = _build_manager()

    with pytest.raises(InvalidArgumentError):
        manager.job_queue_files(["a.jdf", "b.pdf", "c.jdf"])

    assert manager.job_pending_files() == ["a.jdf"]


def test_jobs_to_destination_caches_known_controllers_after_one_query() -> None:
    """Resolve several workflows with a single KnownControllers query; first URL wins.

    Returns:
        None: Assertions validate resolution caching behavior.

    Raises:
        AssertionError: Raised when the server is queried repeatedly.
    """

    transport = _RecordingTransport()
    manager = _build_manager(transport=transport)

    manager.job_to_destination("Brochure").job_to_destination("Posters").job_to_destination("Brochure")

    assert transport.sent_types() == ["KnownControllers"]
    assert manager.job_pending_workflows() == [
        WorkflowDescriptor(name="Brochure", url="http://jmf.test/wf/Brochure"),
        WorkflowDescriptor(name="Posters", url="http://jmf.test/wf/Posters"),
        WorkflowDescriptor(name="Brochure", url="http://jmf.test/wf/Brochure"),
    ]


def test_jobs_to_destination_raises_for_unknown_workflow() -> None:
    """Raise WorkflowNotFoundError and leave targets unchanged for unknown workflows."""

    manager = _build_manager()

    with pytest.raises(WorkflowNotFoundError, match="Missing") as error_info:
        manager.job_to_destination("Missing")

    assert error_info.value.workflow_name == "Missing"
    assert manager.job_pending_workflows() == []


def test_jobs_to_destination_rejects_controller_without_url() -> None:
    """Treat a controller listed without URL as unknown so nothing is submitted to it.

    Returns:
        None: Assertions validate URL-less controller handling.

    Raises:
        AssertionError: Raised when a URL-less controller becomes a target.
    """

    transport = _RecordingTransport(
        known_controllers_reply=(
            b'<JMF><Response Type="KnownControllers" ReturnCode="0">'
            b'<JDFController ControllerID="NoUrl"/>'
            b'<JDFController ControllerID="Blank" URL="  "/>'
            b'<JDFController ControllerID="Posters" URL="http://jmf.test/wf/Posters"/>'
            b"</Response></JMF>"
        )
    )
    dispatcher = InMemoryNotificationDispatcher()
    manager = _build_manager(transport=transport, notification_sink=dispatcher)
    manager.job_queue_file("a.jdf")

    for workflow_name in ("NoUrl", "Blank"):
        with pytest.raises(WorkflowNotFoundError) as error_info:
            manager.job_to_destination(workflow_name)
        assert error_info.value.workflow_name == workflow_name

    manager.job_to_destination("Posters")
    assert manager.job_pending_workflows() == [WorkflowDescriptor(name="Posters", url="http://jmf.test/wf/Posters")]
    assert manager.job_submit_all() == 1
    assert all(isinstance(event, EntrySubmitted) for event in dispatcher.notification_published_events())


def test_jobs_submit_all_sends_every_file_to_every_workflow_in_order() -> None:
    """Submit the cross product with targets as outer loop and files as inner loop.

    Returns:
        None: Assertions validate submission order and command contents.

    Raises:
        AssertionError: Raised when order or command contents diverge.
    """

    transport = _RecordingTransport()
    dispatcher = InMemoryNotificationDispatcher()
    manager = _build_manager(transport=transport, notification_sink=dispatcher)
    manager.job_queue_files(["a.jdf", "http://files.test/b.jdf"])
    manager.job_to_destination("Brochure").job_to_destination("Posters")

    submitted_count = manager.job_submit_all()

    assert submitted_count == 4
    assert manager.state == SubmissionBatchState.DONE
    submitted_pairs = []
    for command_message in transport.sent_commands():
        command = command_message.command()
        submission_params = command.node_find_child("QueueSubmissionParams")
        assert command.node_get_attribute("xsi:type") == "CommandSubmitQueueEntry"
        assert submission_params.node_get_attribute("ReturnJMF") == "http://client.test/jmf/return-jmf"
        submitted_pairs.append((command.node_get_attribute("DeviceID"), submission_params.node_get_attribute("URL")))

    assert submitted_pairs == [
        ("http://jmf.test/wf/Brochure", "file:///hotfolder/a.jdf"),
        ("http://jmf.test/wf/Brochure", "http://files.test/b.jdf"),
        ("http://jmf.test/wf/Posters", "file:///hotfolder/a.jdf"),
        ("http://jmf.test/wf/Posters", "http://files.test/b.jdf"),
    ]
    events = dispatcher.notification_published_events()
    assert len(events) == 4
    assert all(isinstance(event, EntrySubmitted) for event in events)
    assert "SubmitQueueEntry" in events[0].outgoing_message


def test_jobs_submit_all_without_targets_sends_nothing() -> None:
    """Close the batch without traffic when no destination was added."""

    transport = _RecordingTransport()
    manager = _build_manager(transport=transport)
    manager.job_queue_file("a.jdf")

    assert manager.job_submit_all() == 0
    assert transport.sent_messages == []
    assert manager.state == SubmissionBatchState.DONE


def test_jobs_context_manager_flushes_on_clean_exit() -> None:
    """Submit queued work exactly once when the `with` block completes.

    Returns:
        None: Assertions validate scope-exit flushing.

    Raises:
        AssertionError: Raised when the batch is not flushed or flushed twice.
    """

    transport = _RecordingTransport()

    with _build_manager(transport=transport) as manager:
        manager.job_queue_file("a.jdf")
        manager.job_to_destination("Posters")
        assert transport.sent_commands() == []

    assert len(transport.sent_commands()) == 1
    assert manager.state == SubmissionBatchState.DONE
    assert manager.job_close() == 0
    assert len(transport.sent_commands()) == 1


def test_jobs_context_manager_drops_batch_when_block_raises() -> None:
    """Skip submission and close the batch when the `with` block raises."""

    transport = _RecordingTransport()

    with pytest.raises(RuntimeError, match="caller failure"):
        with _build_manager(transport=transport) as manager:
            manager.job_queue_file("a.jdf")
            manager.job_to_destination("Posters")
            raise RuntimeError("caller failure")

    assert transport.sent_commands() == []
    assert manager.state == SubmissionBatchState.DONE


def test_jobs_closed_batch_rejects_new_work() -> None:
    """Raise WorkflowBatchClosedError when queueing after the batch was flushed."""

    manager = _build_manager()
    manager.job_close()

    with pytest.raises(WorkflowBatchClosedError):
        manager.job_queue_file("late.jdf")
    with pytest.raises(WorkflowBatchClosedError):
        manager.job_to_destination("Brochure")


def test_jobs_submit_failure_publishes_one_entry_failed_and_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    """Publish EntryFailed with the outgoing message and re-raise a non-zero ReturnCode.

    Args:
        monkeypatch: Pytest monkeypatch fixture.

    Returns:
        None: Assertions validate failure propagation through the real transport.

    Raises:
        AssertionError: Raised when failure notification or propagation is incorrect.
    """

    def _fake_post(_self: object, url: str, content: bytes | None = None, **_kwargs: object) -> httpx.Response:
        if content is not None and b"KnownControllers" in content:
            payload = _KNOWN_CONTROLLERS_REPLY
        else:
            payload = (
                b'<JMF><Response Type="SubmitQueueEntry" ReturnCode="1"><Notification Class="Error">'
                b"<Comment>Queue is closed</Comment></Notification></Response></JMF>"
            )
        return httpx.Response(200, content=payload, request=httpx.Request("POST", url))

    monkeypatch.setattr(transport_module.httpx.Client, "post", _fake_post)
    dispatcher = InMemoryNotificationDispatcher()
    manager = _build_manager(transport=JmfHttpTransport(server_url=_SERVER_URL), notification_sink=dispatcher)
    manager.job_queue_file("a.jdf").job_to_destination("Brochure")

    with pytest.raises(JmfReturnCodeError, match="Queue is closed"):
        manager.job_submit_all()

    events = dispatcher.notification_published_events()
    assert len(events) == 1
    assert isinstance(events[0], EntryFailed)
    assert "SubmitQueueEntry" in events[0].outgoing_message
    assert "file:///hotfolder/a.jdf" in events[0].outgoing_message
    assert isinstance(events[0].error, JmfReturnCodeError)
    assert not any(isinstance(event, EntrySubmitted) for event in events)
    assert manager.state == SubmissionBatchState.DONE
    assert [event["status"] for event in manager.job_timeline() if event["stage"] == "submit_queue_entry"] == [
        "started",
        "failed",
    ]


def test_jobs_get_jobs_ignores_unrecognized_status_without_request() -> None:
    """Return an empty list and send nothing for an unknown status filter."""

    transport = _RecordingTransport()
    manager = _build_manager(transport=transport)

    assert manager.job_get_jobs(status="Bogus") == []
    assert transport.sent_messages == []


def test_jobs_get_jobs_builds_queue_status_query_with_filters() -> None:
    """Send a Brief QueueStatus query with StatusList and QueueEntryDef filters.

    Returns:
        None: Assertions validate query construction and flattening.

    Raises:
        AssertionError: Raised when the query or records diverge.
    """

    transport = _RecordingTransport()
    manager = _build_manager(transport=transport)

    records = manager.job_get_jobs(status="Completed", job_id=42)

    query = transport.sent_messages[0].query()
    queue_filter = query.node_find_child("QueueFilter")
    assert query.node_get_attribute("xsi:type") == "QueryQueueStatus"
    assert queue_filter.node_get_attribute("QueueEntryDetails") == "Brief"
    assert queue_filter.node_get_attribute("StatusList") == "Completed"
    assert queue_filter.node_find_child("QueueEntryDef").node_get_attribute("QueueEntryID") == "42"
    assert [record.queue_entry_id for record in records] == ["42", "43"]


def test_jobs_get_jobs_skips_entry_filter_for_non_positive_id() -> None:
    """Omit QueueEntryDef unless the job id is positive."""

    transport = _RecordingTransport()
    manager = _build_manager(transport=transport)

    manager.job_get_jobs(job_id=0)

    queue_filter = transport.sent_messages[0].query().node_find_child("QueueFilter")
    assert queue_filter.node_find_child("QueueEntryDef") is None
    assert queue_filter.node_get_attribute("StatusList") is None


def test_jobs_get_job_status_returns_first_record_or_none() -> None:
    """Return the first flattened record, or None for an empty queue reply."""

    single_entry_reply = (
        b'<JMF><Response Type="QueueStatus" ReturnCode="0"><Queue DeviceID="FieryQueue">'
        b'<QueueEntry QueueEntryID="42" Status="Completed"/></Queue></Response></JMF>'
    )
    empty_reply = b'<JMF><Response Type="QueueStatus" ReturnCode="0"><Queue DeviceID="FieryQueue"/></Response></JMF>'

    record = _build_manager(transport=_RecordingTransport(single_entry_reply)).job_get_job_status(42)

    assert record is not None
    assert record.queue_entry_id == "42"
    assert record.device_id == "FieryQueue"
    assert _build_manager(transport=_RecordingTransport(empty_reply)).job_get_job_status(7) is None


def test_jobs_flatten_queue_entries_reads_every_queue_in_document_order() -> None:
    """Flatten entries across queues with per-entry DeviceID overriding the queue's.

    Returns:
        None: Assertions validate flattening contract.

    Raises:
        AssertionError: Raised when records are missing or misattributed.
    """

    response = element_tree.fromstring(
        b'<JMF xmlns="http://www.CIP4.org/JDFSchema_1_1"><Response ReturnCode="0">'
        b'<Queue DeviceID="Q1"><QueueEntry QueueEntryID="1" Status="Completed"/></Queue>'
        b'<Queue DeviceID="Q2"><QueueEntry QueueEntryID="2" Status="Aborted" DeviceID="Override"/>'
        b'<QueueEntry QueueEntryID="3" Status="Suspended"/></Queue>'
        b"</Response></JMF>"
    )

    records = job_flatten_queue_entries(response)

    assert [(record.device_id, record.queue_entry_id, record.status) for record in records] == [
        ("Q1", "1", "Completed"),
        ("Override", "2", "Aborted"),
        ("Q2", "3", "Suspended"),
    ]
    assert records[0].record_as_dict()["end_time"] is None
