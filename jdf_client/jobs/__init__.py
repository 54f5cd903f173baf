"""Job layer package for workflow submission orchestration boundaries."""

from .interfaces import QueueStatusPort, SubmissionBatchState
from .notifications import (
	DEFAULT_NOTIFICATION_HISTORY_LIMIT,
	EntryFailed,
	EntrySubmitted,
	InMemoryNotificationDispatcher,
	NotificationEvent,
	NotificationSinkPort,
	ReturnJmfReceived,
)
from .workflow_manager import (
	JDF_FILE_SUFFIX,
	QUEUE_STATUS_FILTERS,
	WorkflowSubmissionManager,
	job_flatten_queue_entries,
)

__all__ = [
	"DEFAULT_NOTIFICATION_HISTORY_LIMIT",
	"EntryFailed",
	"EntrySubmitted",
	"InMemoryNotificationDispatcher",
	"JDF_FILE_SUFFIX",
	"NotificationEvent",
	"NotificationSinkPort",
	"QUEUE_STATUS_FILTERS",
	"QueueStatusPort",
	"ReturnJmfReceived",
	"SubmissionBatchState",
	"WorkflowSubmissionManager",
	"job_flatten_queue_entries",
]
