"""JMF message envelope for queries, commands and responses exchanged with the server."""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Final
from uuid import uuid4

from .document import JDF_SCHEMA_NAMESPACE, PROTOCOL_VERSION, XML_SCHEMA_INSTANCE_NAMESPACE, XmlEnvelope, XmlNode

_SECTION_ID_PREFIXES: Final[dict[str, str]] = {
    "Query": "Q",
    "Command": "C",
    "Response": "R",
    "Acknowledge": "A",
}


class JmfMessage(XmlEnvelope):
    """JMF envelope; every message section gets a generated `ID` on creation."""

    ROOT_TAG = "JMF"
    SECTION_NAMES = frozenset(_SECTION_ID_PREFIXES)

    def __init__(
        self,
        sender_id: str,
        server_file_path: str = "",
        clock: Callable[[], datetime] | None = None,
        id_provider: Callable[[], str] | None = None,
    ):
        """Initialize the JMF root element.

        Args:
            sender_id: Value of the root `SenderID` attribute.
            server_file_path: Server-side base path used for print file references.
            clock: Optional provider for the root `TimeStamp`.
            id_provider: Optional provider of unique section ID suffixes.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when sender_id is blank.
        """

        self._id_provider = id_provider or (lambda: uuid4().hex[:12])
        super().__init__(sender_id=sender_id, server_file_path=server_file_path, clock=clock)

    def query(self) -> XmlNode:
        """Return the Query section."""
        return self.message_section("Query")

    def command(self) -> XmlNode:
        """Return the Command section."""
        return self.message_section("Command")

    def response(self) -> XmlNode:
        """Return the Response section."""
        return self.message_section("Response")

    def acknowledge(self) -> XmlNode:
        """Return the Acknowledge section."""
        return self.message_section("Acknowledge")

    def message_set_device(self, device_id: str) -> JmfMessage:
        """Target the Command at one device or workflow controller.

        Args:
            device_id: Value written to the Command's `DeviceID` attribute.

        Returns:
            JmfMessage: This message, for chaining.

        Raises:
            ValueError: Raised when device_id is blank.
        """

        if not device_id.strip():
            raise ValueError("device_id must not be blank")
        self.command().node_add_attribute("DeviceID", device_id)
        return self

    def _message_root_attributes(self) -> list[tuple[str, str]]:
        return [
            ("SenderID", self.sender_id),
            ("TimeStamp", self.message_timestamp()),
            ("Version", PROTOCOL_VERSION),
            ("xmlns", JDF_SCHEMA_NAMESPACE),
            ("xmlns:xsi", XML_SCHEMA_INSTANCE_NAMESPACE),
        ]

    def _message_on_section_created(self, section: XmlNode) -> None:
        section.node_add_attribute("ID", f"{_SECTION_ID_PREFIXES[section.node_name]}{self._id_provider()}")
