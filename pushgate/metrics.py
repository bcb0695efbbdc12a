"""
Prometheus metrics for pushgate connections.

Each ConnectionMetrics owns its registry so several connections (or test
cases) can keep independent counters in one process.
"""

import logging
from typing import Dict, Optional

from prometheus_client import CollectorRegistry, Counter, generate_latest, CONTENT_TYPE_LATEST

logger = logging.getLogger(__name__)

OUTCOME_SUCCESS = "success"
OUTCOME_FATAL = "fatal"
OUTCOME_TRANSIENT = "transient"
OUTCOME_ERROR = "error"


class ConnectionMetrics:
    """Counters describing connection lifecycle and retry behaviour."""

    content_type = CONTENT_TYPE_LATEST

    def __init__(self, namespace: str = "pushgate", registry: Optional[CollectorRegistry] = None):
        self.registry = registry or CollectorRegistry()

        self.connects = Counter(
            'connects_total',
            'Total number of sessions opened',
            namespace=namespace,
            registry=self.registry
        )

        self.reconnects = Counter(
            'reconnects_total',
            'Total number of sessions reopened after a transient failure',
            namespace=namespace,
            registry=self.registry
        )

        self.certificate_failures = Counter(
            'certificate_expired_total',
            'Total number of operations rejected because the client certificate expired',
            namespace=namespace,
            registry=self.registry
        )

        self.disconnects = Counter(
            'disconnects_total',
            'Total number of sessions torn down',
            ['reason'],
            namespace=namespace,
            registry=self.registry
        )

        self.attempts = Counter(
            'operation_attempts_total',
            'Total number of read/write attempts, retries included',
            ['operation', 'outcome'],
            namespace=namespace,
            registry=self.registry
        )

        self.operations = Counter(
            'operations_total',
            'Total number of logical read/write operations by final outcome',
            ['operation', 'outcome'],
            namespace=namespace,
            registry=self.registry
        )

        self.namespace = namespace

    def record_connect(self, reconnect: bool = False) -> None:
        self.connects.inc()
        if reconnect:
            self.reconnects.inc()

    def record_disconnect(self, reason: str) -> None:
        self.disconnects.labels(reason=reason).inc()

    def record_operation(self, operation: str, outcome: str, attempts: int) -> None:
        """Record one logical operation and the attempts it took."""
        if attempts > 0:
            self.attempts.labels(operation=operation, outcome=outcome).inc(attempts)
        self.operations.labels(operation=operation, outcome=outcome).inc()
        if outcome == OUTCOME_FATAL:
            self.certificate_failures.inc()
        logger.debug(f"{operation} finished with {outcome} after {attempts} attempt(s)")

    def sample(self, name: str, labels: Optional[Dict[str, str]] = None) -> float:
        """Current value of a counter sample, 0.0 if never incremented."""
        value = self.registry.get_sample_value(f"{self.namespace}_{name}", labels or {})
        return value or 0.0

    def export(self) -> str:
        """Export metrics in Prometheus text format."""
        return generate_latest(self.registry).decode('utf-8')
