"""Pytest plugin for running stepwise acceptance cases.

This module integrates the execution engine with pytest by:
- registering custom command-line options;
- providing the `stepwise` fixture that runs a case and reports its
  outcome through the current test.

    def test_transit_keys(stepwise):
        stepwise.run(Case(
            driver=TransitDriver(),
            steps=(
                Step(operation='create', path='keys/test'),
                Step(operation='read', path='keys/test'),
            ),
        ))
"""

from typing import TYPE_CHECKING

import pytest

from pytest_stepwise.core import run
from pytest_stepwise.settings import StepwiseSettings

from .reporter import ALLOW_QUIET_OPTION, PytestReporter

if TYPE_CHECKING:
    from _pytest.config import Config
    from _pytest.config.argparsing import Parser
    from _pytest.fixtures import FixtureRequest

if TYPE_CHECKING:
    from pytest_stepwise.schema import Case

__all__ = (
    'PytestReporter',
    'StepwiseRunner',
)

MOUNT_OPTION = 'stepwise_mount'


def pytest_addoption(parser: 'Parser') -> None:
    """Register pytest command-line options for pytest-stepwise.

    Args:
        parser: Pytest argument parser.
    """
    group = parser.getgroup('stepwise', 'stepwise acceptance cases')
    group.addoption(
        '--stepwise-mount',
        action='store',
        dest=MOUNT_OPTION,
        default=None,
        help=(
            'Mount point prepended to every step path. '
            'Overrides the STEPWISE_MOUNT environment variable.'
        ),
    )
    group.addoption(
        '--stepwise-allow-quiet',
        action='store_true',
        dest=ALLOW_QUIET_OPTION,
        default=False,
        help=(
            'Run acceptance cases without the verbose flag. '
            'By default cases fail unless pytest runs with -v, '
            'so that progress of long cases is visible.'
        ),
    )


def pytest_configure(config: 'Config') -> None:
    """Register the marker used to tag acceptance tests.

    Args:
        config: Pytest configuration object.
    """
    config.addinivalue_line(
        'markers',
        'stepwise: acceptance test running a case against a live backend',
    )


class StepwiseRunner:
    """Runs cases on behalf of a single pytest test."""

    def __init__(self, config: 'Config') -> None:
        """Initialize a runner.

        Args:
            config: Pytest configuration object.
        """
        self.config = config

    def settings(self) -> StepwiseSettings:
        """Resolve settings from the environment and command line."""
        if mount := self.config.getoption(MOUNT_OPTION, default=None):
            return StepwiseSettings(mount=mount)

        return StepwiseSettings()

    def run(self, case: 'Case') -> None:
        """Run a case and fail the test on any recorded error.

        Args:
            case: Case to execute.

        Raises:
            pytest.fail.Exception: If the case reported an error.
            pytest.skip.Exception: If acceptance cases are not enabled.
        """
        __tracebackhide__ = True

        reporter = PytestReporter(self.config)
        run(reporter, case, settings=self.settings())
        reporter.finalize()


@pytest.fixture
def stepwise(request: 'FixtureRequest') -> StepwiseRunner:
    """Provide a runner executing cases within the current test."""
    return StepwiseRunner(request.config)
