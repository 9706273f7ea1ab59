"""Pytest plugin and engine for stepwise acceptance tests.

The `pytest_stepwise` package runs ordered sequences of declarative
steps (write, read, list, delete) against a live backend reached
through a pluggable driver.

Key features:
- immutable case and step models validated with Pydantic;
- a driver contract that provisions and tears down the backend;
- guaranteed teardown on every exit path of a run;
- reusable response checks;
- a pytest fixture reporting skips, errors and fatal outcomes.

Cases only run when the `STEPWISE_ACC` environment variable is set.
"""

from pytest_stepwise.core import run
from pytest_stepwise.schema import Auth, Case, Response, Step, StepOperation

__all__ = (
    'Auth',
    'Case',
    'Response',
    'Step',
    'StepOperation',
    'run',
)
