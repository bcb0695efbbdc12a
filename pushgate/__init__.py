"""
pushgate Python Package

Resilient certificate-authenticated TLS connection to push-notification gateways.
"""

__version__ = "0.1.0"

from .connection import Connection
from .config import ConnectionConfig, PRODUCTION_GATEWAY, SANDBOX_GATEWAY
from .errors import (
    PushGateError,
    FatalCertificateError,
    CertificateExpiredError,
    TransientTransportError,
    NotConnectedError,
    ReadTimeoutError,
    ConfigurationError,
)
from .metrics import ConnectionMetrics
from .resilience import ErrorClass, classify_error
from .transport import Transport, SSLTransport

__all__ = [
    "Connection",
    "ConnectionConfig",
    "PRODUCTION_GATEWAY",
    "SANDBOX_GATEWAY",
    "PushGateError",
    "FatalCertificateError",
    "CertificateExpiredError",
    "TransientTransportError",
    "NotConnectedError",
    "ReadTimeoutError",
    "ConfigurationError",
    "ConnectionMetrics",
    "ErrorClass",
    "classify_error",
    "Transport",
    "SSLTransport",
]
