"""Typed interfaces for adapter-layer responsibilities."""

from typing import Protocol
import xml.etree.ElementTree as element_tree

from jdf_client.messages import XmlEnvelope


class JmfTransportPort(Protocol):
    """Port definition for submitting JMF messages to the job-management server."""

    def adapter_default_url(self) -> str:
        """Return the endpoint used when no URL is passed to submission.

        Returns:
            str: Configured JMF server URL.

        Raises:
            RuntimeError: Raised when endpoint metadata is unavailable.
        """

    def adapter_submit_message(self, message: XmlEnvelope, url: str | None = None) -> element_tree.Element:
        """Send one message and return the validated, parsed reply.

        Args:
            message: Envelope to serialize and submit.
            url: Optional endpoint override.

        Returns:
            xml.etree.ElementTree.Element: Parsed reply root element.

        Raises:
            ConnectionError: Raised when the server cannot be reached.
            RuntimeError: Raised when the reply is malformed or carries a failure code.
        """
