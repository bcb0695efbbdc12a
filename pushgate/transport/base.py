"""
Transport interface consumed by Connection.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class Transport(ABC):
    """
    A single authenticated session with the gateway.

    Implementations raise socket/TLS errors (or TransientTransportError)
    on failure; Connection decides whether to retry.
    """

    @property
    @abstractmethod
    def connected(self) -> bool:
        """Whether the session is established."""
        pass

    @abstractmethod
    def connect(self) -> None:
        """Establish the session."""
        pass

    @abstractmethod
    def write(self, data: bytes) -> Any:
        """Write raw bytes to the session."""
        pass

    @abstractmethod
    def read(self, size: Optional[int] = None, buf: Optional[bytearray] = None) -> Any:
        """Read up to ``size`` bytes, optionally into ``buf``."""
        pass

    @abstractmethod
    def read_with_timeout(self, size: int, timeout: Optional[float] = None) -> Any:
        """Read ``size`` bytes, waiting at most ``timeout`` seconds for data."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Tear down the session. Safe to call when not connected."""
        pass
