"""
Shared error handling for the document registry client.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel
from opentelemetry import trace


class ErrorResponse(BaseModel):
    """Standard error response format."""

    trace_id: Optional[str] = None
    code: str
    message: str
    details: Dict[str, Any] = {}


class RegistryClientError(Exception):
    """Base exception for the registry client."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        trace_id = None
        current_span = trace.get_current_span()
        if current_span and current_span.is_recording():
            span_context = current_span.get_span_context()
            if span_context.trace_id != 0:
                trace_id = f"{span_context.trace_id:032x}"

        return ErrorResponse(
            trace_id=trace_id,
            code=self.code,
            message=self.message,
            details=self.details
        )


class InvalidConfigurationError(RegistryClientError):
    """Rate limit or client settings that can never be used."""

    def __init__(self, message: str = "Invalid configuration", details: Optional[Dict[str, Any]] = None):
        super().__init__("INVALID_CONFIGURATION", message, details)


class RateLimitError(RegistryClientError):
    """Rate limiting errors."""

    def __init__(self, message: str = "Rate limit exceeded", details: Optional[Dict[str, Any]] = None):
        super().__init__("RATE_LIMIT_ERROR", message, details)


class EncodingError(RegistryClientError):
    """Document could not be serialized into a request payload."""

    def __init__(self, message: str = "Payload encoding failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("ENCODING_ERROR", message, details)


class TransportError(RegistryClientError):
    """Outbound request failed before a response was received."""

    def __init__(self, message: str = "Transport error", details: Optional[Dict[str, Any]] = None):
        super().__init__("TRANSPORT_ERROR", message, details)
