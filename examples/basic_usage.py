"""
Basic pushgate usage example.

This example demonstrates the fundamental connection operations:
- Loading configuration from the environment
- Writing a frame to the gateway
- Polling for an error response
- Handling an expired certificate
"""

import logging
import sys

from pushgate import Connection, ConnectionConfig, ConnectionMetrics, FatalCertificateError, ReadTimeoutError

ERROR_RESPONSE_SIZE = 6


def basic_example():
    """Demonstrate basic pushgate usage"""
    logging.basicConfig(level=logging.INFO)
    print("Basic pushgate Example")
    print("=" * 30)

    # 1. Create configuration (PUSHGATE_CERTIFICATE must be set)
    config = ConnectionConfig.from_env()
    metrics = ConnectionMetrics()

    # 2. Create connection; nothing is opened until first use
    with Connection(config, metrics=metrics) as connection:
        try:
            # 3. Write a pre-encoded frame
            frame = sys.stdin.buffer.read() or b"\x00"
            connection.write(frame)
            print(f"✓ Wrote {len(frame)} bytes to {connection.gateway}:{connection.port}")

            # 4. Check whether the gateway rejected anything
            try:
                response = connection.read_with_timeout(ERROR_RESPONSE_SIZE)
                print(f"✓ Gateway responded: {response!r}")
            except ReadTimeoutError:
                print("✓ No error response from gateway")

        except FatalCertificateError as e:
            print(f"✗ Certificate must be renewed: {e}")
            return 1

    print(metrics.export())
    return 0


if __name__ == "__main__":
    sys.exit(basic_example())
