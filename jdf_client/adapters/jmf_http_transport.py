"""JMF-over-HTTP adapter: POST serialized messages and validate the reply."""

from __future__ import annotations

import logging
from typing import Final
import xml.etree.ElementTree as element_tree

import httpx

from jdf_client.messages import XmlEnvelope, message_xml_iter, message_xml_local_name

from .interfaces import JmfTransportPort
from .jmf_errors import JmfResponseParseError, JmfReturnCodeError, JmfTransportError
from .jmf_return_codes import jmf_return_code_default_message, jmf_return_code_is_success

logger = logging.getLogger(__name__)


class JmfHttpTransport(JmfTransportPort):
    """Adapter implementation for synchronous JMF request/response exchange.

    Nothing is retried: every transport, parse or return-code failure is
    raised to the caller.
    """

    _USER_AGENT: Final[str] = "jdf-client/1.0 (Python/httpx)"
    _JMF_CONTENT_TYPE: Final[str] = "application/vnd.cip4-jmf+xml"
    _REPLY_ELEMENT_NAMES: Final[tuple[str, ...]] = ("Response", "Acknowledge")

    def __init__(self, server_url: str, request_timeout_seconds: float = 30.0):
        """Initialize JMF transport with one pooled HTTP client.

        Args:
            server_url: Default JMF server endpoint.
            request_timeout_seconds: HTTP request timeout in seconds.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when required config values are invalid.
        """

        normalized_server_url = server_url.strip()
        if not normalized_server_url:
            raise ValueError("server_url must not be blank")
        if request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be > 0")

        self._server_url = normalized_server_url
        self._client = httpx.Client(
            timeout=request_timeout_seconds,
            headers={"User-Agent": self._USER_AGENT, "Content-Type": self._JMF_CONTENT_TYPE},
        )

    def adapter_default_url(self) -> str:
        """Return the configured JMF server URL."""
        return self._server_url

    def adapter_submit_message(self, message: XmlEnvelope, url: str | None = None) -> element_tree.Element:
        """Serialize, POST and validate one JMF message.

        Args:
            message: Envelope to submit.
            url: Optional endpoint override, defaults to the configured server URL.

        Returns:
            xml.etree.ElementTree.Element: Parsed reply root element.

        Raises:
            JmfTransportError: Raised for network, timeout and HTTP status failures.
            JmfResponseParseError: Raised when the reply is not valid XML.
            JmfReturnCodeError: Raised when the reply's ReturnCode is absent or not `0`.
        """

        target_url = (url or self._server_url).strip()
        payload = self._adapter_http_post(url=target_url, body=message.message_get_raw())
        response_root = self._adapter_parse_xml(payload=payload, url=target_url)
        self._adapter_validate_return_code(response_root)
        return response_root

    def adapter_close(self) -> None:
        """Close the pooled HTTP client."""
        self._client.close()

    def _adapter_http_post(self, url: str, body: str) -> bytes:
        """Execute one HTTP POST and return response payload bytes.

        Args:
            url: Endpoint URL.
            body: Serialized XML body.

        Returns:
            bytes: HTTP response payload.

        Raises:
            JmfTransportError: Raised for network failures and non-success HTTP status.
        """

        logger.debug("POST JMF message to %s (%d bytes)", url, len(body))
        try:
            response = self._client.post(url, content=body.encode("utf-8"))
            response.raise_for_status()
        except httpx.TimeoutException as error:
            logger.warning("JMF request to %s timed out", url)
            raise JmfTransportError(f"JMF transport request timed out: url={url}", url=url) from error
        except httpx.HTTPStatusError as error:
            logger.warning("JMF server %s returned HTTP %s", url, error.response.status_code)
            raise JmfTransportError(
                f"JMF server returned HTTP {error.response.status_code}: url={url}",
                url=url,
            ) from error
        except httpx.HTTPError as error:
            logger.warning("JMF request to %s failed: %s", url, error)
            raise JmfTransportError(f"JMF transport request failed: url={url}", url=url) from error

        return bytes(response.content)

    def _adapter_parse_xml(self, payload: bytes, url: str) -> element_tree.Element:
        """Parse payload as XML and raise deterministic parsing errors.

        Args:
            payload: Candidate XML payload.
            url: Endpoint label for error messages.

        Returns:
            xml.etree.ElementTree.Element: Parsed root node.

        Raises:
            JmfResponseParseError: Raised when payload is not valid XML.
        """

        try:
            return element_tree.fromstring(payload)
        except element_tree.ParseError as error:
            raise JmfResponseParseError(f"JMF response XML parse failed: url={url}") from error

    def _adapter_validate_return_code(self, response_root: element_tree.Element) -> None:
        """Require a `ReturnCode` of `0` on the reply element.

        Args:
            response_root: Parsed reply root element.

        Returns:
            None: Validation succeeds silently.

        Raises:
            JmfReturnCodeError: Raised for an absent or non-zero return code.
        """

        reply_element = self._adapter_find_reply_element(response_root)
        return_code = reply_element.get("ReturnCode")
        if jmf_return_code_is_success(return_code):
            return

        error_message = self._adapter_extract_error_text(reply_element) or jmf_return_code_default_message(
            return_code,
            fallback_message="unexpected JMF response",
        )
        logger.warning("JMF reply rejected: code=%s, message=%s", return_code, error_message)
        raise JmfReturnCodeError(
            f"JMF request rejected: code={return_code or 'MISSING'}, message={error_message}",
            return_code=return_code,
            error_message=error_message,
        )

    def _adapter_find_reply_element(self, response_root: element_tree.Element) -> element_tree.Element:
        """Return the first Response/Acknowledge element, falling back to the root."""

        if message_xml_local_name(response_root.tag) in self._REPLY_ELEMENT_NAMES:
            return response_root
        for reply_name in self._REPLY_ELEMENT_NAMES:
            for candidate in message_xml_iter(response_root, reply_name):
                return candidate
        return response_root

    def _adapter_extract_error_text(self, reply_element: element_tree.Element) -> str:
        """Return the first non-blank `Notification/Comment` text of a reply."""

        for notification in message_xml_iter(reply_element, "Notification"):
            for comment in message_xml_iter(notification, "Comment"):
                comment_text = (comment.text or "").strip()
                if comment_text:
                    return comment_text
        return ""
