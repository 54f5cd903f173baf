"""Message layer package for JDF and JMF envelope construction."""

from .document import (
    XML_PROLOG,
    XmlEnvelope,
    XmlNode,
    message_xml_children,
    message_xml_iter,
    message_xml_local_name,
)
from .jdf import LINK_USAGES, JdfMessage
from .jmf import JmfMessage

__all__ = [
    "LINK_USAGES",
    "XML_PROLOG",
    "JdfMessage",
    "JmfMessage",
    "XmlEnvelope",
    "XmlNode",
    "message_xml_children",
    "message_xml_iter",
    "message_xml_local_name",
]
