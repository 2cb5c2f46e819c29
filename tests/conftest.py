"""Shared fixtures for themesync tests."""

from unittest.mock import Mock

import pytest

from themesync.api import ThemeClient, reset_api
from themesync.output import OutputFormatter


@pytest.fixture(autouse=True)
def _reset_shared_client():
    """Drop the process-wide client between tests."""
    reset_api()
    yield
    reset_api()


@pytest.fixture
def mock_client():
    """Create a mock theme API client."""
    return Mock(spec=ThemeClient)


@pytest.fixture
def mock_output():
    """Create a mock output formatter."""
    output = Mock(spec=OutputFormatter)
    output.quiet = True
    return output


def logged(mock_method) -> list[str]:
    """Return the messages passed to a mocked output method."""
    return [call.args[0] for call in mock_method.call_args_list]
