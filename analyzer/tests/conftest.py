"""Shared pytest fixtures."""

import pytest

from analyzer.tests.fakes import FakeClock, FakeModelClient


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def model_client() -> FakeModelClient:
    return FakeModelClient()
