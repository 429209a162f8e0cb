# tests/conftest.py

import pytest

from tests._fakes import FakeConnection


@pytest.fixture
def fake_conn():
    return FakeConnection()
