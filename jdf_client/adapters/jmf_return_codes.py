"""Canonical CIP4 JMF return-code semantics for response validation."""

from __future__ import annotations

from enum import Enum
from typing import Final


class JmfReturnCode(str, Enum):
    """Known JMF `ReturnCode` values used by response validation."""

    SUCCESS = "0"
    GENERAL_ERROR = "1"
    INTERNAL_ERROR = "2"
    XML_PARSER_ERROR = "3"
    XML_VALIDATION_ERROR = "4"
    NOT_IMPLEMENTED = "5"
    INVALID_PARAMETERS = "6"
    INSUFFICIENT_PARAMETERS = "7"
    DEVICE_NOT_AVAILABLE = "8"
    MESSAGE_INCOMPLETE = "9"
    MESSAGE_SERVICE_BUSY = "10"
    DEVICE_NOT_RUNNING = "100"
    DEVICE_REQUIRES_MANUAL_INTERVENTION = "101"
    DEVICE_STOPPED = "102"


JMF_RETURN_CODE_DEFAULT_MESSAGES: Final[dict[str, str]] = {
    JmfReturnCode.SUCCESS.value: "Success.",
    JmfReturnCode.GENERAL_ERROR.value: "General error.",
    JmfReturnCode.INTERNAL_ERROR.value: "Internal error.",
    JmfReturnCode.XML_PARSER_ERROR.value: "XML parser error.",
    JmfReturnCode.XML_VALIDATION_ERROR.value: "XML validation error.",
    JmfReturnCode.NOT_IMPLEMENTED.value: "Query or command not implemented.",
    JmfReturnCode.INVALID_PARAMETERS.value: "Invalid parameters.",
    JmfReturnCode.INSUFFICIENT_PARAMETERS.value: "Insufficient parameters.",
    JmfReturnCode.DEVICE_NOT_AVAILABLE.value: "Device not available.",
    JmfReturnCode.MESSAGE_INCOMPLETE.value: "Message incomplete.",
    JmfReturnCode.MESSAGE_SERVICE_BUSY.value: "Message service is busy.",
    JmfReturnCode.DEVICE_NOT_RUNNING.value: "Device not running.",
    JmfReturnCode.DEVICE_REQUIRES_MANUAL_INTERVENTION.value: "Device requires manual intervention.",
    JmfReturnCode.DEVICE_STOPPED.value: "Device is stopped.",
}


def jmf_return_code_default_message(return_code: str | None, fallback_message: str) -> str:
    """Return canonical default message for a JMF return code.

    Args:
        return_code: Return code text from the response, may be None.
        fallback_message: Fallback message when code is unknown or absent.

    Returns:
        str: Canonical message for known code, else provided fallback message.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if return_code is None:
        return fallback_message
    return JMF_RETURN_CODE_DEFAULT_MESSAGES.get(return_code.strip(), fallback_message)


def jmf_return_code_is_success(return_code: str | None) -> bool:
    """Return whether the return code denotes success.

    Args:
        return_code: Return code text from the response, may be None.

    Returns:
        bool: True only for the exact success code.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return return_code is not None and return_code.strip() == JmfReturnCode.SUCCESS.value
