# Copyright (c) 2025 Gimel Foundation and the persons identified as the document authors.
# All rights reserved. This file is subject to the Gimel Foundation's Legal Provisions Relating to GiFo Documents.
# See http://GimelFoundation.com or https://github.com/Gimel-Foundation for details.
# Code Components extracted from GiFo-RfC 0111 must include this license text and are provided without warranty.

"""
Package transport provides the raw sessions a Connection drives.

- Transport: abstract connect/read/write/close interface
- SSLTransport: certificate-authenticated TLS over TCP
"""

from .base import Transport
from .ssl_transport import SSLTransport, READ_CHUNK_SIZE

__all__ = [
    'Transport',
    'SSLTransport',
    'READ_CHUNK_SIZE',
]
