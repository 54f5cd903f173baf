"""Domain models, errors and helpers used across application layer boundaries."""

from .errors import (
    InvalidArgumentError,
    InvalidUsageError,
    JdfClientError,
    ResourceNotFoundError,
    UnsupportedSectionError,
    WorkflowBatchClosedError,
    WorkflowNotFoundError,
)
from .models import QueueEntryRecord, WorkflowDescriptor
from .paths import domain_format_print_file_path
from .timeline import domain_build_stage_event, domain_iso8601_timestamp

__all__ = [
    "InvalidArgumentError",
    "InvalidUsageError",
    "JdfClientError",
    "QueueEntryRecord",
    "ResourceNotFoundError",
    "UnsupportedSectionError",
    "WorkflowBatchClosedError",
    "WorkflowDescriptor",
    "WorkflowNotFoundError",
    "domain_build_stage_event",
    "domain_format_print_file_path",
    "domain_iso8601_timestamp",
]
