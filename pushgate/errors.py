"""
Error types and error codes for pushgate.
Provides structured error handling across the connection, transport and config layers.
"""

from enum import Enum
from typing import Dict, Any, Optional


class ErrorCode(str, Enum):
    """Standard error codes used across pushgate."""
    CERTIFICATE_EXPIRED = "certificate_expired"
    TRANSPORT_ERROR = "transport_error"
    NOT_CONNECTED = "not_connected"
    TIMEOUT = "timeout"
    CONFIGURATION_ERROR = "configuration_error"
    INTERNAL_ERROR = "internal_error"

    def __str__(self) -> str:
        return self.value


# Error code constants for easy import
CERTIFICATE_EXPIRED = ErrorCode.CERTIFICATE_EXPIRED
TRANSPORT_ERROR = ErrorCode.TRANSPORT_ERROR
NOT_CONNECTED = ErrorCode.NOT_CONNECTED
TIMEOUT = ErrorCode.TIMEOUT
CONFIGURATION_ERROR = ErrorCode.CONFIGURATION_ERROR
INTERNAL_ERROR = ErrorCode.INTERNAL_ERROR


class PushGateError(Exception):
    """Base exception for all pushgate errors."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.cause = cause

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            'error': self.error_code.value,
            'message': self.message,
            'details': self.details
        }

        if self.cause:
            result['cause'] = str(self.cause)

        return result

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"


class FatalCertificateError(PushGateError):
    """
    Raised when the gateway rejects the client certificate as expired.

    Never retried. Callers catch this separately from transport failures
    to trigger re-provisioning of the certificate.
    """

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, CERTIFICATE_EXPIRED, details, cause)


# Name used by callers familiar with the gateway's own terminology
CertificateExpiredError = FatalCertificateError


class TransientTransportError(PushGateError):
    """
    Raised by transports to signal a retryable failure.

    Socket, TLS and broken-pipe errors from the standard library are
    recognised without wrapping; custom transports raise this instead.
    """

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, TRANSPORT_ERROR, details, cause)


class NotConnectedError(PushGateError):
    """Raised when an operation needs an established session and there is none."""

    def __init__(self, message: str = "Transport is not connected",
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, NOT_CONNECTED, details)


class ReadTimeoutError(PushGateError):
    """Raised when a bounded read expires before any data arrives."""

    def __init__(
        self,
        message: str,
        timeout_seconds: Optional[float] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, TIMEOUT, details)
        self.timeout_seconds = timeout_seconds

        if timeout_seconds is not None:
            self.details['timeout_seconds'] = timeout_seconds


class ConfigurationError(PushGateError):
    """Raised when there's a configuration error."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, CONFIGURATION_ERROR, details)
        self.config_key = config_key
        self.config_value = config_value

        if config_key:
            self.details['config_key'] = config_key
        if config_value is not None:
            self.details['config_value'] = str(config_value)
