"""Shared pytest configuration and fixtures."""

import pytest

from chia_exporter.config.models import ExporterConfig
from chia_exporter.utils.logger import setup_logger

from fakes import FakeNode, default_responses, make_rpc_client


@pytest.fixture
def logger():
    """Create logger for tests."""
    return setup_logger("test")


@pytest.fixture
def responses():
    """Healthy responses for every service; tests may edit them."""
    return default_responses()


@pytest.fixture
def fake_node(responses):
    return FakeNode(responses)


@pytest.fixture
def rpc_client(fake_node):
    """RPC client wired to the fake node."""
    client = make_rpc_client(fake_node.handle)
    yield client
    client.close()


@pytest.fixture
def config():
    """All four services enabled on their default ports."""
    return ExporterConfig(cert="/tmp/test.crt", key="/tmp/test.key")
