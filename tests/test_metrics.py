"""
Tests for connection metrics.
"""

from pushgate.metrics import ConnectionMetrics, OUTCOME_FATAL, OUTCOME_SUCCESS


class TestConnectionMetrics:
    """Test Prometheus counters"""

    def test_independent_registries(self):
        first = ConnectionMetrics()
        second = ConnectionMetrics()

        first.record_connect()

        assert first.sample("connects_total") == 1
        assert second.sample("connects_total") == 0

    def test_record_operation(self):
        metrics = ConnectionMetrics()
        metrics.record_operation("write", OUTCOME_SUCCESS, 3)

        assert metrics.sample("operation_attempts_total", {"operation": "write", "outcome": "success"}) == 3
        assert metrics.sample("operations_total", {"operation": "write", "outcome": "success"}) == 1

    def test_export(self):
        metrics = ConnectionMetrics(namespace="apns")
        metrics.record_disconnect("transient")

        text = metrics.export()

        assert 'apns_disconnects_total{reason="transient"} 1.0' in text
        assert metrics.content_type.startswith("text/plain")

    def test_reconnect_and_certificate_counters(self):
        metrics = ConnectionMetrics()
        metrics.record_connect()
        metrics.record_connect(reconnect=True)
        metrics.record_operation("write", OUTCOME_FATAL, 1)

        assert metrics.sample("connects_total") == 2
        assert metrics.sample("reconnects_total") == 1
        assert metrics.sample("certificate_expired_total") == 1
        assert metrics.sample("operation_attempts_total", {"operation": "write", "outcome": "fatal"}) == 1
