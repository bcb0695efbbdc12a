"""
Resilient connection to a push-notification gateway.

Copyright (c) 2025 Gimel Foundation and the persons identified as the document authors.
All rights reserved. This file is subject to the Gimel Foundation's Legal Provisions Relating to GiFo Documents.
See http://GimelFoundation.com or https://github.com/Gimel-Foundation for details.
Code Components extracted from GiFo-RfC 0111 must include this license text and are provided without warranty.
"""

import dataclasses
import logging
import threading
from typing import Any, Callable, Optional

from .config import ConnectionConfig
from .errors import FatalCertificateError
from .metrics import ConnectionMetrics, OUTCOME_SUCCESS, OUTCOME_FATAL, OUTCOME_TRANSIENT, OUTCOME_ERROR
from .resilience import ErrorClass, Retry, RetryConfig
from .transport import Transport, SSLTransport

logger = logging.getLogger(__name__)

TransportFactory = Callable[[ConnectionConfig], Transport]


class Connection:
    """
    One logical session with the gateway, reconnected as needed.

    ``write`` and ``read`` connect on demand and retry transient socket or
    TLS failures up to ``retries`` total attempts, tearing the session down
    before each retry. An expired client certificate raises
    FatalCertificateError without retrying. ``read_with_timeout`` never
    connects and never retries.

    Calls are serialised by an internal lock, so a Connection may be shared
    between threads; operations still run one at a time.
    """

    def __init__(self,
                 config: Optional[ConnectionConfig] = None,
                 transport_factory: Optional[TransportFactory] = None,
                 metrics: Optional[ConnectionMetrics] = None,
                 **options):
        if config is None:
            config = ConnectionConfig(**options)
        elif options:
            config = dataclasses.replace(config, **options)

        self.config = config
        self._transport_factory = transport_factory or SSLTransport.from_config
        self._transport: Optional[Transport] = None
        self._metrics = metrics
        self._lock = threading.RLock()
        self._reconnect_pending = False

        self._retry = Retry(RetryConfig(max_attempts=config.retries), on_transient=self._on_transient)
        self._single_attempt = Retry(RetryConfig(max_attempts=1), on_transient=self._on_transient)

    @property
    def retries(self) -> int:
        return self.config.retries

    @property
    def gateway(self) -> str:
        return self.config.gateway

    @property
    def port(self) -> int:
        return self.config.port

    @property
    def certificate(self) -> str:
        return self.config.certificate

    @property
    def connected(self) -> bool:
        with self._lock:
            return self._transport is not None and bool(self._transport.connected)

    def connect(self) -> None:
        """Open the session unless one is already live."""
        with self._lock:
            self._run("connect", self._ensure_connected, self._single_attempt)

    def close(self) -> None:
        """Close and forget the session. No-op when nothing is open."""
        with self._lock:
            if self._transport is None:
                return
            transport, self._transport = self._transport, None
            transport.close()
            self._reconnect_pending = False
            logger.info(f"Closed connection to {self.gateway}:{self.port}")
            if self._metrics:
                self._metrics.record_disconnect("closed")

    def write(self, data: bytes) -> Any:
        """Write ``data``, connecting and retrying as needed."""
        with self._lock:
            return self._run("write", lambda: self._ensure_connected().write(data))

    def read(self, size: Optional[int] = None, buf: Optional[bytearray] = None) -> Any:
        """Read from the gateway, connecting and retrying as needed."""
        with self._lock:
            return self._run("read", lambda: self._ensure_connected().read(size, buf))

    def read_with_timeout(self, size: int, timeout: Optional[float] = None) -> Any:
        """
        Read from an already established session, waiting a bounded time.

        Does not connect. A transient failure still closes the session
        before the error propagates.
        """
        args = (size,) if timeout is None else (size, timeout)
        with self._lock:
            return self._run("read_with_timeout",
                             lambda: self._get_transport().read_with_timeout(*args),
                             self._single_attempt)

    def __enter__(self) -> "Connection":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return (f"Connection(gateway={self.gateway!r}, port={self.port}, "
                f"retries={self.retries}, connected={self.connected})")

    def _get_transport(self) -> Transport:
        if self._transport is None:
            self._transport = self._transport_factory(self.config)
        return self._transport

    def _ensure_connected(self) -> Transport:
        transport = self._get_transport()
        if not transport.connected:
            logger.debug(f"Connecting to {self.gateway}:{self.port}")
            transport.connect()
            if self._metrics:
                self._metrics.record_connect(reconnect=self._reconnect_pending)
            self._reconnect_pending = False
        return transport

    def _on_transient(self, error: Exception, attempt: int, budget: int) -> None:
        logger.warning(f"Transient failure talking to {self.gateway}:{self.port} "
                       f"(attempt {attempt}/{budget}): {error!r}")
        transport, self._transport = self._transport, None
        if transport is None:
            return
        self._reconnect_pending = True
        try:
            transport.close()
        except OSError as e:
            logger.debug(f"Ignoring error while closing broken session: {e!r}")
        if self._metrics:
            self._metrics.record_disconnect("transient")

    def _run(self, operation: str, func: Callable[[], Any], retry: Optional[Retry] = None) -> Any:
        retry = retry or self._retry
        try:
            result = retry.execute_sync(func)
        except FatalCertificateError:
            self._record(operation, OUTCOME_FATAL, retry.attempts)
            raise
        except Exception:
            outcome = OUTCOME_TRANSIENT if retry.last_error_class is ErrorClass.TRANSIENT else OUTCOME_ERROR
            self._record(operation, outcome, retry.attempts)
            raise
        self._record(operation, OUTCOME_SUCCESS, retry.attempts)
        return result

    def _record(self, operation: str, outcome: str, attempts: int) -> None:
        if self._metrics:
            self._metrics.record_operation(operation, outcome, attempts)
