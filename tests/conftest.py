"""
Pytest configuration for the rendezvous hash test suite.

Configures pytest-asyncio for async test support.
"""

import pytest

from rendezvous_hash.logging import LoggingConfig


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line(
        "markers", "asyncio: mark test as async"
    )


@pytest.fixture(autouse=True)
def reset_logging_config():
    config = LoggingConfig()
    config.update(log_level="error", log_output="stderr", disabled_loggers=[])
    yield config
    config.update(log_level="error", log_output="stderr", disabled_loggers=[])
