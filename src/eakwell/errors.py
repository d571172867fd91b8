"""
Structured errors for eakwell

Every error raised by the library carries an ErrorCode from the catalog
below, optional context, and the underlying cause when one exists.
"""

from enum import Enum
from datetime import datetime, timezone
from typing import Dict, Optional, Any


class ErrorCode(Enum):
    """Error codes used across the library"""

    # Configuration Errors (1000-1999)
    CONFIG_INVALID_VALUE = "EK1001"
    CONFIG_FILE_UNREADABLE = "EK1002"

    # Network Errors (2000-2999)
    HTTP_REQUEST_FAILED = "EK2001"
    NETWORK_ERROR = "EK2002"
    REQUEST_TIMEOUT = "EK2003"
    INVALID_RESPONSE = "EK2004"


ERROR_MESSAGES: Dict[ErrorCode, str] = {
    ErrorCode.CONFIG_INVALID_VALUE: "Invalid configuration value",
    ErrorCode.CONFIG_FILE_UNREADABLE: "Configuration file could not be read",
    ErrorCode.HTTP_REQUEST_FAILED: "HTTP request failed",
    ErrorCode.NETWORK_ERROR: "Network Error",
    ErrorCode.REQUEST_TIMEOUT: "Timeout",
    ErrorCode.INVALID_RESPONSE: "Response body could not be decoded",
}


class EakwellError(Exception):
    """Base exception with structured error information"""

    def __init__(self,
                 error_code: ErrorCode,
                 context: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None,
                 custom_message: Optional[str] = None):
        """
        Initialize error

        Args:
            error_code: The specific error code from ErrorCode enum
            context: Additional context information (url, path, etc.)
            cause: The underlying exception that caused this error
            custom_message: Optional custom message to override default
        """
        self.error_code = error_code
        self.context = context or {}
        self.cause = cause
        self.custom_message = custom_message
        self.timestamp = datetime.now(timezone.utc)
        super().__init__(self.message)

    @property
    def message(self) -> str:
        return self.custom_message or ERROR_MESSAGES[self.error_code]

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for serialization"""
        return {
            "error_code": self.error_code.value,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
            "context": self.context,
            "cause": str(self.cause) if self.cause else None
        }

    def __str__(self) -> str:
        base_msg = f"[{self.error_code.value}] {self.message}"
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base_msg += f" (context: {context_str})"
        return base_msg


class ConfigurationError(EakwellError):
    def __init__(self, message: str, context: Optional[Dict] = None,
                 cause: Optional[Exception] = None,
                 error_code: ErrorCode = ErrorCode.CONFIG_INVALID_VALUE):
        super().__init__(error_code, context=context, cause=cause, custom_message=message)


class AjaxError(EakwellError):
    """Raised when a JSON request does not produce a 2xx response"""

    def __init__(self, error_code: ErrorCode, url: str,
                 status: Optional[int] = None, reason: Optional[str] = None,
                 cause: Optional[Exception] = None):
        self.url = url
        self.status = status
        self.reason = reason
        context: Dict[str, Any] = {"url": url}
        if status is not None:
            context["status"] = status
        super().__init__(error_code, context=context, cause=cause, custom_message=reason)
