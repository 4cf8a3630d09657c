"""
Pytest configuration and shared fixtures for lsp-rust tests.
"""
import pytest

from lsp_rust.lsp.session import SessionContext
from lsp_rust.utils.logger import logger


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted during a test."""
    messages: list[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def context():
    """A fresh shared session context."""
    return SessionContext()
