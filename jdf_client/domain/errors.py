"""Project-native typed exceptions for message construction and workflow submission."""

from __future__ import annotations


class JdfClientError(Exception):
    """Base exception for every failure raised by the JDF/JMF client."""


class InvalidUsageError(JdfClientError, ValueError):
    """Resource link usage tag is not `Input` or `Output`."""


class ResourceNotFoundError(JdfClientError, LookupError):
    """Resource link target does not exist in the ResourcePool.

    Attributes:
        resource_name: Element name of the missing resource.
    """

    def __init__(self, message: str, resource_name: str):
        super().__init__(message)
        self.resource_name = resource_name


class UnsupportedSectionError(JdfClientError, ValueError):
    """Top-level section name is not allowed for the envelope type.

    Attributes:
        section_name: Requested section name.
    """

    def __init__(self, message: str, section_name: str):
        super().__init__(message)
        self.section_name = section_name


class InvalidArgumentError(JdfClientError, ValueError):
    """Caller supplied an argument the workflow layer refuses, like a non-JDF file."""


class WorkflowNotFoundError(JdfClientError, LookupError):
    """Destination workflow name is not known to the JMF server.

    Attributes:
        workflow_name: Unresolved workflow name.
    """

    def __init__(self, message: str, workflow_name: str):
        super().__init__(message)
        self.workflow_name = workflow_name


class WorkflowBatchClosedError(JdfClientError, RuntimeError):
    """Submission batch was already flushed and cannot accept more work."""
