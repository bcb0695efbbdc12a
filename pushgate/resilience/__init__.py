# Copyright (c) 2025 Gimel Foundation and the persons identified as the document authors.
# All rights reserved. This file is subject to the Gimel Foundation's Legal Provisions Relating to GiFo Documents.
# See http://GimelFoundation.com or https://github.com/Gimel-Foundation for details.
# Code Components extracted from GiFo-RfC 0111 must include this license text and are provided without warranty.

"""
Package resilience provides the retry machinery for pushgate connections.

- Failure classification (fatal, transient, unclassified)
- Bounded, immediate retry with a teardown hook between attempts
"""

from .classifier import (
    ErrorClass,
    classify_error,
    is_certificate_expired,
    CERTIFICATE_EXPIRED_PATTERN,
    TRANSIENT_EXCEPTIONS,
    UNCLASSIFIED_OS_ERRORS,
)

from .retry import (
    RetryConfig,
    Retry,
)

__all__ = [
    # Classification
    'ErrorClass',
    'classify_error',
    'is_certificate_expired',
    'CERTIFICATE_EXPIRED_PATTERN',
    'TRANSIENT_EXCEPTIONS',
    'UNCLASSIFIED_OS_ERRORS',

    # Retry
    'RetryConfig',
    'Retry',
]
