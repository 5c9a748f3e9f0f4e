"""
Pytest configuration for ringshard tests.

Configures pytest-asyncio for async test support and resets the shared
logging configuration between tests.
"""

from typing import Generator

import pytest

from ringshard.logging import LoggerStream, LoggingConfig
from ringshard.ring import Ring, RingConfig


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line(
        "markers", "asyncio: mark test as async"
    )


@pytest.fixture(autouse=True)
def reset_logging_config() -> Generator[None, None, None]:
    yield
    LoggingConfig().update(
        log_level="info",
        log_output="stderr",
        disabled_loggers=[],
    )


@pytest.fixture
def quiet_logger() -> LoggerStream:
    logger = LoggerStream(name="ringshard.test")
    logger.config.update(disabled_loggers=["ringshard.test"])
    return logger


@pytest.fixture
def ring(quiet_logger: LoggerStream) -> Ring:
    return Ring(RingConfig(replication_factor=10), logger=quiet_logger)


@pytest.fixture
def three_host_ring(ring: Ring) -> Ring:
    ring.add("1.1.1.1")
    ring.add("2.2.2.2")
    ring.add("3.3.3.3")
    return ring
