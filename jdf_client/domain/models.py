"""Typed domain models shared across runtime layers.

This module provides simple data contracts for cross-layer communication
between the workflow orchestrator, the API surface and callers.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class WorkflowDescriptor:
    """Remote controller known to the JMF server.

    Attributes:
        name: Controller identifier (`ControllerID`) used as workflow name.
        url: Controller URL reported by the server.
    """

    name: str
    url: str


@dataclass(frozen=True)
class QueueEntryRecord:
    """One flattened queue entry row from a QueueStatus response.

    Attributes:
        device_id: Device or workflow owning the entry.
        queue_entry_id: Server-assigned queue entry identifier.
        status: Queue entry status text.
        submission_time: Submission timestamp as reported by the server.
        start_time: Processing start timestamp as reported by the server.
        end_time: Processing end timestamp as reported by the server.
    """

    device_id: str | None
    queue_entry_id: str | None
    status: str | None
    submission_time: str | None
    start_time: str | None
    end_time: str | None

    def record_as_dict(self) -> dict[str, str | None]:
        """Return record fields as a JSON-serializable mapping.

        Returns:
            dict[str, str | None]: Field name to value mapping.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        return {
            "device_id": self.device_id,
            "queue_entry_id": self.queue_entry_id,
            "status": self.status,
            "submission_time": self.submission_time,
            "start_time": self.start_time,
            "end_time": self.end_time,
        }
