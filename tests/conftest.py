"""Tests configurations and fixtures."""

import pytest

from pytest_stepwise.settings import StepwiseSettings
from tests.examples.drivers import MemoryDriver, RecordingReporter


@pytest.fixture
def events() -> list[str]:
    """Provide a shared event log for drivers and reporters."""
    return []


@pytest.fixture
def driver(events: list[str]) -> MemoryDriver:
    """Provide an in-memory driver recording into the shared event log."""
    return MemoryDriver(events)


@pytest.fixture
def reporter(events: list[str]) -> RecordingReporter:
    """Provide a verbose reporter recording into the shared event log."""
    return RecordingReporter(events)


@pytest.fixture
def settings() -> StepwiseSettings:
    """Provide settings with acceptance cases enabled.

    Settings are built explicitly so that tests do not depend on the
    environment of the machine running them.
    """
    return StepwiseSettings(acc='1', mount='transit')
