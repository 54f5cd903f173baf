"""Project-native typed exceptions for JMF transport and response validation failures."""

from __future__ import annotations

from jdf_client.domain import JdfClientError


class JmfAdapterError(JdfClientError):
    """Base exception for adapter-level JMF failures."""


class JmfTransportError(JmfAdapterError, ConnectionError):
    """Network or HTTP-level failure while talking to the JMF server.

    Attributes:
        url: Endpoint the request was sent to.
    """

    def __init__(self, message: str, url: str):
        super().__init__(message)
        self.url = url


class JmfResponseParseError(JmfAdapterError, RuntimeError):
    """JMF server replied with a body that is not well-formed XML."""


class JmfReturnCodeError(JmfAdapterError, RuntimeError):
    """Well-formed JMF reply carrying a missing or non-zero `ReturnCode`.

    Attributes:
        return_code: Return code text, or None when the attribute was absent.
        error_message: Server supplied comment or known default message.
    """

    def __init__(self, message: str, return_code: str | None, error_message: str):
        super().__init__(message)
        self.return_code = return_code
        self.error_message = error_message
