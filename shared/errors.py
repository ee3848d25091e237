"""
Shared error handling for the Proposal Gateway.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel, Field

from shared.logging import request_id_var


class ErrorResponse(BaseModel):
    """Standard error response format."""

    trace_id: Optional[str] = None
    code: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)


class GatewayException(Exception):
    """Base exception for Proposal Gateway components."""

    status_code: int = 400

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            trace_id=request_id_var.get(),
            code=self.code,
            message=self.message,
            details=self.details
        )


class AuthenticationError(GatewayException):
    """Authentication-related errors."""

    status_code = 401

    def __init__(self, message: str = "Authentication failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("AUTHENTICATION_ERROR", message, details)


class AuthorizationError(GatewayException):
    """Authorization-related errors."""

    status_code = 403

    def __init__(self, message: str = "Authorization failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("AUTHORIZATION_ERROR", message, details)


class ValidationError(GatewayException):
    """Validation-related errors."""

    status_code = 400

    def __init__(self, message: str = "Validation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("VALIDATION_ERROR", message, details)


class StrategyNotSelectedError(GatewayException):
    """A pricing computation was invoked without a selected plan."""

    status_code = 500

    def __init__(self, message: str = "No pricing plan was selected", details: Optional[Dict[str, Any]] = None):
        super().__init__("INVALID_OPERATION", message, details)


class ExternalServiceError(GatewayException):
    """External service errors."""

    status_code = 502

    def __init__(self, service: str, message: str = "External service error", details: Optional[Dict[str, Any]] = None,
                 code: str = "EXTERNAL_SERVICE_ERROR"):
        self.service = service
        super().__init__(code, f"{service}: {message}", details)


class EngineRequestError(ExternalServiceError):
    """The calculation engine rejected the request or could not be reached."""

    def __init__(self, message: str = "Engine request failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("calculation_engine", message, details, code="ENGINE_REQUEST_ERROR")

    @property
    def upstream_status(self) -> Optional[int]:
        """HTTP status returned by the engine, if one was received."""
        return self.details.get("status_code")


class EngineResponseError(ExternalServiceError):
    """The engine answered with a body that does not match the expected shape."""

    def __init__(self, message: str = "Engine response could not be decoded", details: Optional[Dict[str, Any]] = None):
        super().__init__("calculation_engine", message, details, code="ENGINE_RESPONSE_ERROR")
