"""Shared fixtures."""

import pytest

from tests.fakes import FakeConnection


@pytest.fixture
def bracket_connection():
    """Fake connection quoting with [ and ]."""
    return FakeConnection()


@pytest.fixture
def double_quote_connection():
    """Fake connection quoting with double quotes."""
    return FakeConnection(prefix='"', suffix='"')
