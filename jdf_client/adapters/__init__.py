"""Adapter layer package for JMF server integration boundaries."""

from .interfaces import JmfTransportPort
from .jmf_errors import JmfAdapterError, JmfResponseParseError, JmfReturnCodeError, JmfTransportError
from .jmf_http_transport import JmfHttpTransport
from .jmf_return_codes import JmfReturnCode, jmf_return_code_default_message, jmf_return_code_is_success

__all__ = [
	"JmfAdapterError",
	"JmfHttpTransport",
	"JmfResponseParseError",
	"JmfReturnCode",
	"JmfReturnCodeError",
	"JmfTransportError",
	"JmfTransportPort",
	"jmf_return_code_default_message",
	"jmf_return_code_is_success",
]
