"""XML document builder shared by JDF and JMF envelopes.

Envelopes own one root element and a closed set of top-level section names.
Each section exists at most once: the first access creates it, later accesses
return the same element so further children are appended to it.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, ClassVar, Final, Iterator
import xml.etree.ElementTree as element_tree

from jdf_client.domain import UnsupportedSectionError, domain_format_print_file_path, domain_iso8601_timestamp

XML_PROLOG: Final[str] = '<?xml version="1.0" encoding="UTF-8"?>'
JDF_SCHEMA_NAMESPACE: Final[str] = "http://www.CIP4.org/JDFSchema_1_1"
JDF_SCHEMA_TYPES_NAMESPACE: Final[str] = "http://www.CIP4.org/JDFSchema_1_1_Types"
XML_SCHEMA_INSTANCE_NAMESPACE: Final[str] = "http://www.w3.org/2001/XMLSchema-instance"
EFI_EXTENSION_NAMESPACE: Final[str] = "http://www.efi.com/efijdf"
PROTOCOL_VERSION: Final[str] = "1.3"


def message_xml_local_name(tag: str) -> str:
    """Strip a `{namespace}` qualifier from an ElementTree tag.

    Args:
        tag: ElementTree tag, qualified or not.

    Returns:
        str: Local element name.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return tag.rsplit("}", maxsplit=1)[-1]


def message_xml_iter(element: element_tree.Element, name: str) -> Iterator[element_tree.Element]:
    """Iterate over descendants (and self) matching a local name in any namespace.

    Args:
        element: Subtree root.
        name: Local element name to match.

    Returns:
        Iterator[xml.etree.ElementTree.Element]: Matching elements in document order.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    for candidate in element.iter():
        if isinstance(candidate.tag, str) and message_xml_local_name(candidate.tag) == name:
            yield candidate


def message_xml_children(element: element_tree.Element, name: str) -> list[element_tree.Element]:
    """Return direct children matching a local name in any namespace."""

    return [child for child in element if message_xml_local_name(child.tag) == name]


class XmlNode:
    """Thin typed wrapper around one ElementTree element.

    Two nodes compare equal when they wrap the same underlying element.
    """

    def __init__(self, element: element_tree.Element):
        self._element = element

    @property
    def element(self) -> element_tree.Element:
        """Underlying ElementTree element."""
        return self._element

    @property
    def node_name(self) -> str:
        """Local element name."""
        return message_xml_local_name(self._element.tag)

    def node_add_child(self, name: str) -> XmlNode:
        """Append a new child element and return it.

        Args:
            name: Child element name.

        Returns:
            XmlNode: Wrapper around the new child.

        Raises:
            ValueError: Raised when name is blank.
        """

        if not name.strip():
            raise ValueError("child element name must not be blank")
        return XmlNode(element_tree.SubElement(self._element, name))

    def node_add_attribute(self, key: str, value: object) -> XmlNode:
        """Set one attribute, coercing the value to text.

        Args:
            key: Attribute name, may carry a prefix like `xsi:type`.
            value: Attribute value; `None` renders as an empty string.

        Returns:
            XmlNode: This node, for chaining.

        Raises:
            ValueError: Raised when key is blank.
        """

        if not key.strip():
            raise ValueError("attribute name must not be blank")
        self._element.set(key, "" if value is None else str(value))
        return self

    def node_get_attribute(self, key: str, default: str | None = None) -> str | None:
        """Return one attribute value or the default."""
        return self._element.get(key, default)

    def node_attributes(self) -> dict[str, str]:
        """Return a copy of the attributes in insertion order."""
        return dict(self._element.attrib)

    def node_children(self, name: str | None = None) -> list[XmlNode]:
        """Return direct children, optionally filtered by local name."""
        return [
            XmlNode(child)
            for child in self._element
            if name is None or message_xml_local_name(child.tag) == name
        ]

    def node_find_child(self, name: str) -> XmlNode | None:
        """Return the first direct child with the given local name, if any."""
        children = self.node_children(name)
        return children[0] if children else None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, XmlNode):
            return NotImplemented
        return self._element is other._element

    def __hash__(self) -> int:
        return id(self._element)

    def __repr__(self) -> str:
        return f"XmlNode({self.node_name!r}, {self.node_attributes()!r})"


class XmlEnvelope:
    """Base envelope with lazily created, unique top-level sections.

    Subclasses define the root tag, the root attributes and the closed set of
    section names they accept.
    """

    ROOT_TAG: ClassVar[str] = ""
    SECTION_NAMES: ClassVar[frozenset[str]] = frozenset()

    def __init__(
        self,
        sender_id: str,
        server_file_path: str = "",
        clock: Callable[[], datetime] | None = None,
    ):
        """Initialize the root element with the envelope's fixed attributes.

        Args:
            sender_id: Identity announced to the JMF server.
            server_file_path: Server-side base path used for print file references.
            clock: Optional provider for the current time, defaults to UTC now.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when sender_id is blank.
        """

        normalized_sender_id = sender_id.strip()
        if not normalized_sender_id:
            raise ValueError("sender_id must not be blank")

        self._sender_id = normalized_sender_id
        self._server_file_path = server_file_path
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._root = element_tree.Element(self.ROOT_TAG)
        for attribute_name, attribute_value in self._message_root_attributes():
            self._root.set(attribute_name, attribute_value)

    @property
    def sender_id(self) -> str:
        """Identity announced to the JMF server."""
        return self._sender_id

    def message_section(self, name: str) -> XmlNode:
        """Return the named top-level section, creating it on first access.

        Args:
            name: Section element name.

        Returns:
            XmlNode: The single section element of that name.

        Raises:
            UnsupportedSectionError: Raised when the envelope does not allow the section.
        """

        if name not in self.SECTION_NAMES:
            raise UnsupportedSectionError(
                f"unsupported section '{name}' for {self.ROOT_TAG}; "
                f"allowed: {', '.join(sorted(self.SECTION_NAMES))}",
                section_name=name,
            )

        existing_sections = message_xml_children(self._root, name)
        if existing_sections:
            return XmlNode(existing_sections[0])

        section = XmlNode(element_tree.SubElement(self._root, name))
        self._message_on_section_created(section)
        return section

    def message_get(self) -> element_tree.Element:
        """Return the root element for inspection."""
        return self._root

    def message_root(self) -> XmlNode:
        """Return the root element wrapped as a node."""
        return XmlNode(self._root)

    def message_get_raw(self) -> str:
        """Serialize the envelope as an XML document with a UTF-8 prolog.

        Returns:
            str: Prolog followed by the root element, empty elements written as start/end pairs.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        body = element_tree.tostring(self._root, encoding="unicode", short_empty_elements=False)
        return f"{XML_PROLOG}\n{body}"

    def message_format_print_file_path(self, file_name: str) -> str:
        """Format a print file reference relative to the JMF server's file system."""
        return domain_format_print_file_path(file_name=file_name, server_file_path=self._server_file_path)

    def message_timestamp(self) -> str:
        """Return the current clock value as ISO-8601 text."""
        return domain_iso8601_timestamp(self._clock())

    def _message_root_attributes(self) -> list[tuple[str, str]]:
        """Return ordered root attributes; subclasses override."""
        return []

    def _message_on_section_created(self, section: XmlNode) -> None:
        """Hook invoked once when a section is first created."""
        _ = section
