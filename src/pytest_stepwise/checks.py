"""Reusable response checks.

A response check receives a backend response and raises `CheckError`
when the response does not satisfy it. Checks are composed with
`multi` and attached to steps with `response_check`.
"""

from collections.abc import Callable
from typing import TYPE_CHECKING

from pytest_stepwise.errors import CheckError

if TYPE_CHECKING:
    from collections.abc import Iterable

if TYPE_CHECKING:
    from pytest_stepwise.schema import Response, StepCheck

#: Prefix the backend adds to display names of issued tokens.
DISPLAY_NAME_PREFIX = 'mnt-'

type ResponseCheck = Callable[['Response | None'], None]


def multi(*checks: ResponseCheck) -> ResponseCheck:
    """Combine several checks into one.

    Checks run in order; the first failure propagates unchanged and the
    remaining checks are not called.

    Args:
        checks: Checks to combine.

    Returns:
        A check running all given checks.
    """
    def check(response: 'Response | None') -> None:
        for item in checks:
            item(response)

    return check


def auth_policies(policies: 'Iterable[str]') -> ResponseCheck:
    """Check that a response issued a token with exactly `policies`.

    Policies are compared as sorted sequences, so order is ignored but
    duplicates must match in count.

    Args:
        policies: Expected policy names.

    Returns:
        A check of the response auth policies.
    """
    expected = sorted(policies)

    def check(response: 'Response | None') -> None:
        if response is None or response.auth is None:
            raise CheckError('no auth in response')

        actual = sorted(response.auth.policies)
        if actual != expected:
            raise CheckError(f'invalid policies: expected {expected!r}, got {actual!r}')

    return check


def auth_display_name(name: str) -> ResponseCheck:
    """Check that a response issued a token with a valid display name.

    Args:
        name: Expected display name without the mount prefix. An empty
            name accepts any display name.

    Returns:
        A check of the response auth display name.
    """
    def check(response: 'Response | None') -> None:
        if not name:
            return

        if response is None or response.auth is None:
            raise CheckError('no auth in response')

        if response.auth.display_name != f'{DISPLAY_NAME_PREFIX}{name}':
            raise CheckError(f'invalid display name: {response.auth.display_name!r}')

    return check


def is_error_response() -> ResponseCheck:
    """Check that a response represents an error."""
    def check(response: 'Response | None') -> None:
        if response is None or not response.is_error:
            raise CheckError('response should be error')

    return check


def response_check(*checks: ResponseCheck) -> 'StepCheck':
    """Adapt response checks into a step check.

    The dispatch error is ignored by the returned check; it is reported
    by the execution engine on its own.

    Args:
        checks: Response checks to run, in order.

    Returns:
        A step check running all given response checks.
    """
    combined = multi(*checks)

    def check(response: 'Response | None', error: Exception | None) -> None:  # noqa: ARG001
        combined(response)

    return check
