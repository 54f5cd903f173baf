"""Job-layer workflow submission orchestrator.

A `WorkflowSubmissionManager` accumulates JDF files and destination
workflows, then submits every file to every workflow when the batch is
flushed. Flushing is explicit: call `job_submit_all()` / `job_close()` or use
the manager as a context manager. A batch that is never flushed drops its
queued work silently.
"""

from __future__ import annotations

import logging
from typing import Callable, Final, Iterable
import xml.etree.ElementTree as element_tree

from jdf_client.adapters import JmfAdapterError, JmfTransportPort
from jdf_client.config import AppSettings
from jdf_client.domain import (
    InvalidArgumentError,
    QueueEntryRecord,
    WorkflowBatchClosedError,
    WorkflowDescriptor,
    WorkflowNotFoundError,
    domain_build_stage_event,
)
from jdf_client.messages import JmfMessage, message_xml_children, message_xml_iter

from .interfaces import QueueStatusPort, SubmissionBatchState
from .notifications import EntryFailed, EntrySubmitted, NotificationSinkPort

logger = logging.getLogger(__name__)

JDF_FILE_SUFFIX: Final[str] = ".jdf"
QUEUE_STATUS_FILTERS: Final[frozenset[str]] = frozenset({"Completed", "InProgress", "Suspended", "Aborted"})


class WorkflowSubmissionManager(QueueStatusPort):
    """Submit queued JDF files to named workflow controllers and query queue status."""

    def __init__(
        self,
        transport: JmfTransportPort,
        settings: AppSettings,
        notification_sink: NotificationSinkPort | None = None,
        message_factory: Callable[[], JmfMessage] | None = None,
    ):
        """Initialize orchestrator dependencies and an empty batch.

        Args:
            transport: Adapter used to submit JMF messages.
            settings: Runtime settings for sender identity, file paths and return URL.
            notification_sink: Optional sink for EntrySubmitted/EntryFailed events.
            message_factory: Optional factory for new JMF envelopes.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when dependencies are invalid.
        """

        if transport is None:
            raise ValueError("transport must not be None")
        if settings is None:
            raise ValueError("settings must not be None")

        self._transport = transport
        self._settings = settings
        self._notification_sink = notification_sink
        self._message_factory = message_factory or self._job_build_default_message
        self._files_to_send: list[str] = []
        self._target_workflows: list[WorkflowDescriptor] = []
        self._available_workflows: dict[str, str] = {}
        self._state = SubmissionBatchState.IDLE
        self._timeline: list[dict[str, object]] = []

    def __enter__(self) -> WorkflowSubmissionManager:
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        if exc_type is None:
            self.job_close()
        else:
            logger.warning(
                "Submission batch aborted by %s; dropping %d queued file(s)",
                exc_type.__name__,
                len(self._files_to_send),
            )
            self._state = SubmissionBatchState.DONE
        return False

    @property
    def state(self) -> SubmissionBatchState:
        """Current batch lifecycle state."""
        return self._state

    def job_pending_files(self) -> list[str]:
        """Return queued file paths in insertion order."""
        return list(self._files_to_send)

    def job_pending_workflows(self) -> list[WorkflowDescriptor]:
        """Return target workflows in insertion order."""
        return list(self._target_workflows)

    def job_timeline(self) -> list[dict[str, object]]:
        """Return structured stage events recorded by this instance."""
        return list(self._timeline)

    def job_queue_file(self, file_name: str) -> WorkflowSubmissionManager:
        """Queue one JDF file for submission when the batch is flushed.

        Args:
            file_name: Path of a JDF file relative to the JMF server, or an absolute URL.

        Returns:
            WorkflowSubmissionManager: This manager, for chaining.

        Raises:
            InvalidArgumentError: Raised when the file does not end in `.jdf`.
            WorkflowBatchClosedError: Raised when the batch was already flushed.
        """

        self._job_require_open()
        if not file_name.endswith(JDF_FILE_SUFFIX):
            raise InvalidArgumentError(f"Please only send JDF files to the JMF server, got '{file_name}'")

        self._files_to_send.append(file_name)
        self._state = SubmissionBatchState.ACCUMULATING
        logger.info("Queued JDF file %s", file_name)
        return self

    def job_queue_files(self, file_names: Iterable[str]) -> WorkflowSubmissionManager:
        """Queue several JDF files in order.

        Stops at the first invalid file; files queued before it stay queued.

        Args:
            file_names: JDF file paths.

        Returns:
            WorkflowSubmissionManager: This manager, for chaining.

        Raises:
            InvalidArgumentError: Raised for the first file not ending in `.jdf`.
            WorkflowBatchClosedError: Raised when the batch was already flushed.
        """

        for file_name in file_names:
            self.job_queue_file(file_name)
        return self

    def job_to_destination(self, workflow_name: str) -> WorkflowSubmissionManager:
        """Add a destination workflow, resolving it against the server's known controllers.

        Multiple destinations may be added by calling this again.

        Args:
            workflow_name: Controller identifier of the workflow.

        Returns:
            WorkflowSubmissionManager: This manager, for chaining.

        Raises:
            WorkflowNotFoundError: Raised when the server does not know the workflow.
            WorkflowBatchClosedError: Raised when the batch was already flushed.
            JmfAdapterError: Raised when the KnownControllers query fails.
        """

        self._job_require_open()
        workflow_url = self._job_resolve_workflow_url(workflow_name)
        if workflow_url is None:
            raise WorkflowNotFoundError(
                f"The workflow {workflow_name} was not found on the JMF server",
                workflow_name=workflow_name,
            )

        self._target_workflows.append(WorkflowDescriptor(name=workflow_name, url=workflow_url))
        self._state = SubmissionBatchState.ACCUMULATING
        return self

    def job_submit_all(self) -> int:
        """Submit every queued file to every target workflow, then close the batch.

        Targets form the outer loop and files the inner loop, both in insertion
        order. The first failure is raised after its EntryFailed notification;
        the batch is closed either way.

        Returns:
            int: Number of queue entries submitted.

        Raises:
            JmfAdapterError: Raised for the first failed submission.
        """

        if self._state == SubmissionBatchState.DONE:
            return 0

        submitted_count = 0
        self._state = SubmissionBatchState.FLUSHING
        try:
            if self._files_to_send and self._target_workflows:
                for workflow in self._target_workflows:
                    for file_name in self._files_to_send:
                        self.job_submit_queue_entry(file_name, workflow)
                        submitted_count += 1
        finally:
            self._state = SubmissionBatchState.DONE
        return submitted_count

    def job_close(self) -> int:
        """Flush the batch; equivalent to `job_submit_all()`."""
        return self.job_submit_all()

    def job_submit_queue_entry(self, file_url: str, workflow: WorkflowDescriptor) -> element_tree.Element:
        """Submit one SubmitQueueEntry command for a file to a workflow.

        Args:
            file_url: JDF file path or URL; local paths are rebased on the server file path.
            workflow: Resolved destination workflow.

        Returns:
            xml.etree.ElementTree.Element: Parsed server reply.

        Raises:
            JmfTransportError: Raised for transport failures, after EntryFailed is published.
            JmfResponseParseError: Raised for malformed replies, after EntryFailed is published.
            JmfReturnCodeError: Raised for non-zero return codes, after EntryFailed is published.
        """

        jmf = self._message_factory()
        command = jmf.command()
        command.node_add_attribute("Type", "SubmitQueueEntry")
        command.node_add_attribute("xsi:type", "CommandSubmitQueueEntry")
        queue_submission_params = command.node_add_child("QueueSubmissionParams")
        queue_submission_params.node_add_attribute("URL", jmf.message_format_print_file_path(file_url))
        queue_submission_params.node_add_attribute("ReturnJMF", self._settings.settings_return_jmf_url())
        jmf.message_set_device(workflow.url)

        outgoing_message = jmf.message_get_raw()
        stage_details = {"workflow": workflow.name, "file": file_url}
        self._timeline.append(domain_build_stage_event(stage="submit_queue_entry", status="started", details=stage_details))
        try:
            response = self._transport.adapter_submit_message(jmf)
        except JmfAdapterError as error:
            logger.error("Queue entry for %s on workflow %s failed: %s", file_url, workflow.name, error)
            self._timeline.append(
                domain_build_stage_event(
                    stage="submit_queue_entry",
                    status="failed",
                    details={**stage_details, "error": str(error)},
                )
            )
            self._job_publish(EntryFailed(outgoing_message=outgoing_message, error_detail=str(error), error=error))
            raise

        logger.info("Submitted %s to workflow %s", file_url, workflow.name)
        self._timeline.append(domain_build_stage_event(stage="submit_queue_entry", status="completed", details=stage_details))
        self._job_publish(EntrySubmitted(outgoing_message=outgoing_message, response=response))
        return response

    def job_get_jobs(self, status: str | None = None, job_id: int | None = None) -> list[QueueEntryRecord]:
        """Query queue entries, optionally filtered by one status or one entry id.

        An unrecognized status yields an empty list without contacting the server.

        Args:
            status: One of `Completed`, `InProgress`, `Suspended`, `Aborted`.
            job_id: Queue entry identifier; ignored unless positive.

        Returns:
            list[QueueEntryRecord]: Every QueueEntry under every Queue in the reply.

        Raises:
            JmfAdapterError: Raised when the QueueStatus query fails.
        """

        if status is not None and status not in QUEUE_STATUS_FILTERS:
            logger.info("Ignoring queue status query for unrecognized status %r", status)
            return []

        jmf = self._message_factory()
        query = jmf.query()
        query.node_add_attribute("Type", "QueueStatus")
        query.node_add_attribute("xsi:type", "QueryQueueStatus")
        queue_filter = query.node_add_child("QueueFilter")
        queue_filter.node_add_attribute("QueueEntryDetails", "Brief")
        if status is not None:
            queue_filter.node_add_attribute("StatusList", status)
        if job_id is not None and job_id > 0:
            queue_filter.node_add_child("QueueEntryDef").node_add_attribute("QueueEntryID", job_id)

        response = self._transport.adapter_submit_message(jmf)
        self._timeline.append(
            domain_build_stage_event(
                stage="queue_status",
                status="completed",
                details={"status_filter": status, "job_id": job_id},
            )
        )
        return job_flatten_queue_entries(response)

    def job_get_job_status(self, job_id: int) -> QueueEntryRecord | None:
        """Return the first queue entry for the id, or None."""
        records = self.job_get_jobs(job_id=job_id)
        return records[0] if records else None

    def _job_resolve_workflow_url(self, workflow_name: str) -> str | None:
        """Resolve a workflow name from cache or a KnownControllers query.

        Every controller in the reply that carries a URL is cached; the first
        URL seen for a controller id wins.

        Args:
            workflow_name: Controller identifier.

        Returns:
            str | None: Controller URL, or None when unknown to the server.

        Raises:
            JmfAdapterError: Raised when the query fails.
        """

        if workflow_name in self._available_workflows:
            return self._available_workflows[workflow_name]

        self._timeline.append(
            domain_build_stage_event(stage="resolve_workflow", status="started", details={"workflow": workflow_name})
        )
        jmf = self._message_factory()
        jmf.query().node_add_attribute("Type", "KnownControllers")
        response = self._transport.adapter_submit_message(jmf)

        for controller in message_xml_iter(response, "JDFController"):
            controller_id = controller.get("ControllerID", "").strip()
            controller_url = controller.get("URL", "").strip()
            if not controller_url:
                logger.warning("Ignoring controller %r without URL in KnownControllers reply", controller_id)
                continue
            if controller_id and controller_id not in self._available_workflows:
                self._available_workflows[controller_id] = controller_url

        workflow_url = self._available_workflows.get(workflow_name)
        self._timeline.append(
            domain_build_stage_event(
                stage="resolve_workflow",
                status="completed" if workflow_url is not None else "failed",
                details={"workflow": workflow_name, "known_controllers": len(self._available_workflows)},
            )
        )
        if workflow_url is not None:
            logger.info("Resolved workflow %s to %s", workflow_name, workflow_url)
        return workflow_url

    def _job_require_open(self) -> None:
        if self._state in (SubmissionBatchState.FLUSHING, SubmissionBatchState.DONE):
            raise WorkflowBatchClosedError("submission batch is already closed; create a new manager")

    def _job_publish(self, event: EntrySubmitted | EntryFailed) -> None:
        if self._notification_sink is not None:
            self._notification_sink.notification_publish(event)

    def _job_build_default_message(self) -> JmfMessage:
        return JmfMessage(
            sender_id=self._settings.settings_sender_id(),
            server_file_path=self._settings.server_file_path,
        )


def job_flatten_queue_entries(response: element_tree.Element) -> list[QueueEntryRecord]:
    """Flatten every QueueEntry of every Queue in a QueueStatus reply.

    Args:
        response: Parsed reply root element.

    Returns:
        list[QueueEntryRecord]: Records in document order; `device_id` falls back to the Queue's DeviceID.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    records: list[QueueEntryRecord] = []
    for queue in message_xml_iter(response, "Queue"):
        for queue_entry in message_xml_children(queue, "QueueEntry"):
            records.append(
                QueueEntryRecord(
                    device_id=queue_entry.get("DeviceID", queue.get("DeviceID")),
                    queue_entry_id=queue_entry.get("QueueEntryID"),
                    status=queue_entry.get("Status"),
                    submission_time=queue_entry.get("SubmissionTime"),
                    start_time=queue_entry.get("StartTime"),
                    end_time=queue_entry.get("EndTime"),
                )
            )
    return records
