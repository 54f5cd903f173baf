"""Typed interfaces for job-layer orchestration responsibilities."""

from enum import Enum
from typing import Protocol

from jdf_client.domain import QueueEntryRecord


class SubmissionBatchState(str, Enum):
    """Lifecycle of one submission batch."""

    IDLE = "idle"
    ACCUMULATING = "accumulating"
    FLUSHING = "flushing"
    DONE = "done"


class QueueStatusPort(Protocol):
    """Port definition for reading queue entries from the job-management server."""

    def job_get_jobs(self, status: str | None = None, job_id: int | None = None) -> list[QueueEntryRecord]:
        """Return queue entries matching optional filters.

        Args:
            status: Optional single queue entry status.
            job_id: Optional queue entry identifier.

        Returns:
            list[QueueEntryRecord]: Flattened queue entries.

        Raises:
            ConnectionError: Raised when the server cannot be reached.
            RuntimeError: Raised when the reply is malformed or carries a failure code.
        """

    def job_get_job_status(self, job_id: int) -> QueueEntryRecord | None:
        """Return one queue entry by identifier, if the server knows it.

        Args:
            job_id: Queue entry identifier.

        Returns:
            QueueEntryRecord | None: First matching record or None.

        Raises:
            ConnectionError: Raised when the server cannot be reached.
            RuntimeError: Raised when the reply is malformed or carries a failure code.
        """
