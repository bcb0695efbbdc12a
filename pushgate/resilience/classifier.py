"""
Failure classification for transport errors.
"""

import re
import socket
import ssl
from enum import Enum

from ..errors import TransientTransportError

CERTIFICATE_EXPIRED_PATTERN = re.compile(r"certificate expired", re.IGNORECASE)

# Only consulted after the expiry check; an expired-certificate SSLError is never transient.
# socket.error is OSError, so any socket-level failure not carved out below is retried.
TRANSIENT_EXCEPTIONS = (
    ssl.SSLError,
    ConnectionError,
    socket.gaierror,
    socket.herror,
    OSError,
    TransientTransportError,
)

# OSErrors that a fresh session cannot cure: unreadable certificate files and expired waits.
UNCLASSIFIED_OS_ERRORS = (
    FileNotFoundError,
    PermissionError,
    IsADirectoryError,
    TimeoutError,
)


class ErrorClass(Enum):
    """Outcome of classifying a transport failure."""
    FATAL = "fatal"                 # Expired client certificate, never retried
    TRANSIENT = "transient"         # Retryable after reconnecting
    UNCLASSIFIED = "unclassified"   # Propagated as-is


def is_certificate_expired(error: BaseException) -> bool:
    """Check whether a TLS error reports an expired client certificate."""
    return isinstance(error, ssl.SSLError) and bool(
        CERTIFICATE_EXPIRED_PATTERN.search(str(error))
    )


def classify_error(error: BaseException) -> ErrorClass:
    """Classify an error raised by a transport during connect, read or write."""
    if is_certificate_expired(error):
        return ErrorClass.FATAL
    if isinstance(error, UNCLASSIFIED_OS_ERRORS):
        return ErrorClass.UNCLASSIFIED
    if isinstance(error, TRANSIENT_EXCEPTIONS):
        return ErrorClass.TRANSIENT
    return ErrorClass.UNCLASSIFIED
