"""Error taxonomy shared by every provider adapter."""

from typing import Any, Dict, Optional


class AdapterError(Exception):
    """Base exception for all adapter operation failures."""

    error_code = "adapter_error"

    def __init__(
        self,
        message: str = "Adapter operation failed",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class RequestFailedError(AdapterError):
    """Raised when the transport could not complete the request."""

    error_code = "request_failed"

    def __init__(self, message: str = "Failed to send request", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class InvalidEncodingError(AdapterError):
    """Raised when the response body is not valid UTF-8."""

    error_code = "invalid_encoding"

    def __init__(self, message: str = "Failed to parse response as UTF-8", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class MalformedResponseError(AdapterError):
    """Raised when the response is not JSON or lacks a required field.

    The raw body is kept for diagnostics.
    """

    error_code = "malformed_response"

    def __init__(
        self,
        message: str = "Malformed provider response",
        raw_body: str = "",
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        full_details = details or {}
        full_details["raw_body"] = raw_body
        if status_code is not None:
            full_details["status_code"] = status_code

        super().__init__(message, full_details)
        self.raw_body = raw_body
        self.status_code = status_code


class EmptyResponseArrayError(AdapterError):
    """Raised when a list-shaped response holds no element to select."""

    error_code = "empty_response_array"

    def __init__(self, field: str, details: Optional[Dict[str, Any]] = None):
        full_details = details or {}
        full_details["field"] = field

        super().__init__(f"Provider response field '{field}' is empty", full_details)
        self.field = field


class ProviderError(AdapterError):
    """Raised when the provider reported failure for a boolean operation."""

    error_code = "provider_error"

    def __init__(self, message: str = "Provider reported failure", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
