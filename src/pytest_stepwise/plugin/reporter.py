"""Reporter adapting the engine lifecycle contract to pytest.

Errors are collected and the test keeps running; they fail the test
once the case is over. Fatal outcomes fail the test immediately, and
skips are turned into pytest skips.
"""

from logging import getLogger
from os import linesep
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from _pytest.config import Config

logger = getLogger(__name__)

ALLOW_QUIET_OPTION = 'stepwise_allow_quiet'


def format_args(args: tuple[object, ...]) -> str:
    """Join reporter arguments into a single message."""
    return ' '.join(f'{arg}' for arg in args)


class PytestReporter:
    """Reporter bound to a pytest session configuration."""

    def __init__(self, config: 'Config') -> None:
        """Initialize a reporter.

        Args:
            config: Pytest configuration object.
        """
        self.config = config
        self.errors: list[str] = []

    @property
    def verbose(self) -> bool:
        """Whether pytest runs with `-v` or quiet runs are allowed."""
        if self.config.getoption(ALLOW_QUIET_OPTION, default=False):
            return True

        return self.config.getoption('verbose', default=0) > 0

    @property
    def failed(self) -> bool:
        """Whether any error was recorded."""
        return bool(self.errors)

    def error(self, *args: object) -> None:
        """Record an error and continue."""
        message = format_args(args)
        logger.error(message)
        self.errors.append(message)

    def fatal(self, *args: object) -> None:
        """Fail the test immediately, including earlier errors.

        Raises:
            pytest.fail.Exception: Always.
        """
        __tracebackhide__ = True

        message = format_args(args)
        logger.error(message)
        pytest.fail(self.summary(message), pytrace=False)

    def skip(self, *args: object) -> None:
        """Skip the test.

        Raises:
            pytest.skip.Exception: Always.
        """
        __tracebackhide__ = True

        pytest.skip(format_args(args))

    def helper(self) -> None:
        """Accept the helper marker.

        Pytest hides helper frames through `__tracebackhide__` set by
        the frames themselves, so there is nothing to record.
        """
        return None

    def summary(self, message: str | None = None) -> str:
        """Join recorded errors and an optional final message."""
        messages = [*self.errors]
        if message:
            messages.append(message)

        return f'{linesep}{linesep}'.join(messages)

    def finalize(self) -> None:
        """Fail the test if any error was recorded.

        Raises:
            pytest.fail.Exception: If errors were recorded.
        """
        __tracebackhide__ = True

        if self.failed:
            pytest.fail(self.summary(), pytrace=False)
