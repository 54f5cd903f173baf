"""JDF job ticket envelope with resource pool, resource links and audit record.

The default resources model a fixed two-step combined process
(LayoutPreparation then DigitalPrinting) producing one final product. The
target server expects exactly this shape, so the defaults are not
configurable.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Callable, Final, Mapping

from jdf_client.domain import InvalidUsageError, ResourceNotFoundError

from .document import (
    EFI_EXTENSION_NAMESPACE,
    JDF_SCHEMA_NAMESPACE,
    JDF_SCHEMA_TYPES_NAMESPACE,
    PROTOCOL_VERSION,
    XML_SCHEMA_INSTANCE_NAMESPACE,
    XmlEnvelope,
    XmlNode,
)

LINK_USAGES: Final[frozenset[str]] = frozenset({"Input", "Output"})
AUDIT_AGENT_VERSION: Final[str] = "1"


class JdfMessage(XmlEnvelope):
    """JDF envelope pre-populated with the combined print pipeline defaults."""

    ROOT_TAG = "JDF"
    SECTION_NAMES = frozenset({"AuditPool", "ResourcePool", "ResourceLinkPool"})

    def __init__(
        self,
        sender_id: str,
        server_file_path: str = "",
        name: str = "",
        clock: Callable[[], datetime] | None = None,
    ):
        """Build the JDF root, creation audit entry and default resources.

        Args:
            sender_id: Agent name recorded in the creation audit entry.
            server_file_path: Server-side base path used for print file references.
            name: Initial DescriptiveName value.
            clock: Optional provider for the audit timestamp.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when sender_id is blank.
        """

        self._name = name
        super().__init__(sender_id=sender_id, server_file_path=server_file_path, clock=clock)
        self._message_record_creation_audit()
        self._message_create_default_resources()

    def audit_pool(self) -> XmlNode:
        """Return the AuditPool section."""
        return self.message_section("AuditPool")

    def resource_pool(self) -> XmlNode:
        """Return the ResourcePool section."""
        return self.message_section("ResourcePool")

    def resource_link_pool(self) -> XmlNode:
        """Return the ResourceLinkPool section."""
        return self.message_section("ResourceLinkPool")

    def message_set_name(self, name: str) -> JdfMessage:
        """Overwrite the DescriptiveName attribute."""
        self.message_root().node_add_attribute("DescriptiveName", name)
        return self

    def message_set_print_file(self, file_name: str, quantity: int = 1) -> JdfMessage:
        """Register a print file as a RunList input and link the product output.

        The file is not checked for existence: it is usually a path on the
        JMF server's file system rather than a local one.

        Args:
            file_name: Print file path or URL.
            quantity: Number of copies requested on the Component output link.

        Returns:
            JdfMessage: This message, for chaining.

        Raises:
            ResourceNotFoundError: Raised when the Component resource was removed.
        """

        run_list_id = f"RL{len(self.resource_pool().node_children('RunList')) + 1}"
        run_list = self.resource_pool().node_add_child("RunList")
        run_list.node_add_attribute("Class", "Parameter")
        run_list.node_add_attribute("ID", run_list_id)
        run_list.node_add_attribute("Status", "Available")

        layout_element = run_list.node_add_child("LayoutElement")
        file_spec = layout_element.node_add_child("FileSpec")
        file_spec.node_add_attribute("URL", self.message_format_print_file_path(file_name))

        self.message_link_resource("RunList", "Input", {"CombinedProcessIndex": 0}, resource_id=run_list_id)
        self.message_link_resource("Component", "Output", {"Amount": quantity, "CombinedProcessIndex": 1})
        return self

    def message_link_resource(
        self,
        resource_name: str,
        usage: str,
        attributes: Mapping[str, object] | None = None,
        resource_id: str | None = None,
    ) -> XmlNode:
        """Create a ResourceLinkPool entry referencing an existing resource.

        Args:
            resource_name: Element name of the resource in ResourcePool.
            usage: Link usage, `Input` or `Output`.
            attributes: Extra link attributes, written in the given order.
            resource_id: Optional ID selecting one of several same-named resources.

        Returns:
            XmlNode: The new `<resource_name>Link` element.

        Raises:
            InvalidUsageError: Raised when usage is not `Input` or `Output`.
            ResourceNotFoundError: Raised when no matching resource exists.
        """

        if usage not in LINK_USAGES:
            raise InvalidUsageError(f"usage must be Input or Output, got '{usage}'")

        candidates = self.resource_pool().node_children(resource_name)
        if resource_id is not None:
            candidates = [node for node in candidates if node.node_get_attribute("ID") == resource_id]
        if not candidates:
            raise ResourceNotFoundError(
                f"No {resource_name} resource exists. Refusing to make link",
                resource_name=resource_name,
            )

        resource_link = self.resource_link_pool().node_add_child(f"{resource_name}Link")
        resource_link.node_add_attribute("rRef", candidates[0].node_get_attribute("ID", ""))
        resource_link.node_add_attribute("Usage", usage)
        for attribute_name, attribute_value in (attributes or {}).items():
            resource_link.node_add_attribute(str(attribute_name), attribute_value)
        return resource_link

    def message_save(self, path: str | Path) -> Path:
        """Write the serialized JDF to a file and return its path.

        Args:
            path: Destination file path; the parent directory must exist.

        Returns:
            pathlib.Path: Written file path.

        Raises:
            OSError: Raised when the file cannot be written.
        """

        target_path = Path(path)
        target_path.write_text(self.message_get_raw(), encoding="utf-8")
        return target_path

    def _message_root_attributes(self) -> list[tuple[str, str]]:
        return [
            ("Activation", "Active"),
            ("DescriptiveName", self._name),
            ("ID", "ID1"),
            ("JobID", "J_000000"),
            ("JobPartID", "n_000015"),
            ("NamedFeatures", "FieryVirtualPrinter GL"),
            ("Status", "Ready"),
            ("Type", "Combined"),
            ("Types", "LayoutPreparation DigitalPrinting"),
            ("Version", PROTOCOL_VERSION),
            ("xmlns", JDF_SCHEMA_NAMESPACE),
            ("xmlns:EFI", EFI_EXTENSION_NAMESPACE),
            ("xmlns:jdftyp", JDF_SCHEMA_TYPES_NAMESPACE),
            ("xmlns:xsi", XML_SCHEMA_INSTANCE_NAMESPACE),
        ]

    def _message_record_creation_audit(self) -> None:
        created = self.audit_pool().node_add_child("Created")
        created.node_add_attribute("AgentName", self.sender_id)
        created.node_add_attribute("AgentVersion", AUDIT_AGENT_VERSION)
        created.node_add_attribute("TimeStamp", self.message_timestamp())

    def _message_create_default_resources(self) -> None:
        component = self.resource_pool().node_add_child("Component")
        component.node_add_attribute("Class", "Quantity")
        component.node_add_attribute("ComponentType", "FinalProduct")
        component.node_add_attribute("ID", "C1")
        component.node_add_attribute("Status", "Available")

        digital_printing_params = self.resource_pool().node_add_child("DigitalPrintingParams")
        digital_printing_params.node_add_attribute("Class", "Parameter")
        digital_printing_params.node_add_attribute("ID", "DP1")
        digital_printing_params.node_add_attribute("Status", "Available")

        layout_preparation_params = self.resource_pool().node_add_child("LayoutPreparationParams")
        layout_preparation_params.node_add_attribute("Class", "Parameter")
        layout_preparation_params.node_add_attribute("ID", "LPP1")
        layout_preparation_params.node_add_attribute("Status", "Available")

        self.message_link_resource("LayoutPreparationParams", "Input", {"CombinedProcessIndex": 0})
        self.message_link_resource("DigitalPrintingParams", "Input", {"CombinedProcessIndex": 1})
