"""
TLS transport authenticated with a client certificate.
"""

import logging
import select
import socket
import ssl
from typing import Optional, Union

from ..config import ConnectionConfig, DEFAULT_READ_TIMEOUT
from ..errors import NotConnectedError, ReadTimeoutError
from .base import Transport

logger = logging.getLogger(__name__)

READ_CHUNK_SIZE = 4096


class SSLTransport(Transport):
    """Blocking TLS session to the push gateway."""

    def __init__(self,
                 certificate: str,
                 gateway: str,
                 port: int,
                 passphrase: Optional[str] = None,
                 connect_timeout: Optional[float] = None,
                 read_timeout: float = DEFAULT_READ_TIMEOUT):
        self.certificate = certificate
        self.gateway = gateway
        self.port = port
        self.passphrase = passphrase
        self.connect_timeout = connect_timeout
        self.read_timeout = read_timeout
        self._ssl: Optional[ssl.SSLSocket] = None

    @classmethod
    def from_config(cls, config: ConnectionConfig) -> "SSLTransport":
        return cls(
            certificate=config.certificate,
            gateway=config.gateway,
            port=config.port,
            passphrase=config.passphrase,
            connect_timeout=config.connect_timeout,
            read_timeout=config.read_timeout,
        )

    @property
    def connected(self) -> bool:
        return self._ssl is not None

    def build_context(self) -> ssl.SSLContext:
        """Create a client TLS context carrying the certificate and key."""
        context = ssl.create_default_context(ssl.Purpose.SERVER_AUTH)
        context.load_cert_chain(self.certificate, password=self.passphrase)
        return context

    def connect(self) -> None:
        context = self.build_context()

        sock = socket.create_connection((self.gateway, self.port), timeout=self.connect_timeout)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_KEEPALIVE, 1)
            ssl_sock = context.wrap_socket(sock, server_hostname=self.gateway)
        except Exception:
            sock.close()
            raise

        # Reads and writes block; only read_with_timeout bounds the wait
        ssl_sock.settimeout(None)
        self._ssl = ssl_sock
        logger.debug(f"TLS session established with {self.gateway}:{self.port}")

    def write(self, data: bytes) -> int:
        self._require_connected().sendall(data)
        return len(data)

    def read(self, size: Optional[int] = None,
             buf: Optional[bytearray] = None) -> Union[bytes, bytearray]:
        """
        Read from the session.

        Without ``size`` returns whatever the next record holds. With
        ``size`` blocks until that many bytes arrive or the peer closes,
        returning what was read. When ``buf`` is given its contents are
        replaced with the data and it is returned.
        """
        ssl_sock = self._require_connected()

        if size is None:
            data = ssl_sock.recv(READ_CHUNK_SIZE)
        else:
            chunks = []
            remaining = size
            while remaining > 0:
                chunk = ssl_sock.recv(remaining)
                if not chunk:
                    break
                chunks.append(chunk)
                remaining -= len(chunk)
            data = b"".join(chunks)

        if buf is not None:
            buf[:] = data
            return buf
        return data

    def read_with_timeout(self, size: int, timeout: Optional[float] = None) -> bytes:
        ssl_sock = self._require_connected()
        timeout = self.read_timeout if timeout is None else timeout

        # Bytes already decrypted by the TLS layer are invisible to select
        if ssl_sock.pending() == 0:
            readable, _, _ = select.select([ssl_sock], [], [], timeout)
            if not readable:
                raise ReadTimeoutError(f"No data from {self.gateway}:{self.port} within {timeout}s",
                                       timeout_seconds=timeout)

        return self.read(size)

    def close(self) -> None:
        if self._ssl is None:
            return
        ssl_sock, self._ssl = self._ssl, None
        ssl_sock.close()
        logger.debug(f"TLS session with {self.gateway}:{self.port} closed")

    def _require_connected(self) -> ssl.SSLSocket:
        if self._ssl is None:
            raise NotConnectedError(f"No session with {self.gateway}:{self.port}")
        return self._ssl
