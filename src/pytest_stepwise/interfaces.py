"""Capability contracts consumed by the execution engine.

The engine never constructs a backend, a client, or a reporter on its
own. Callers supply objects satisfying the protocols below; production
implementations and test doubles are interchangeable.
"""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from typing import Self

if TYPE_CHECKING:
    from pytest_stepwise.schema import Response
    from pytest_stepwise.values import Payload


@runtime_checkable
class Client(Protocol):
    """Connected client used to dispatch step operations.

    Each method returns the backend response, or `None` for an empty
    body, and raises on failure. A client may raise
    `pytest_stepwise.errors.ResponseError` to hand back a response
    together with the error.
    """

    def write(self, path: str, data: 'Payload') -> 'Response | None':
        """Create or update the resource at `path`."""
        ...  # pragma: no cover

    def read(self, path: str) -> 'Response | None':
        """Read the resource at `path`."""
        ...  # pragma: no cover

    def list(self, path: str) -> 'Response | None':
        """List the keys under `path`."""
        ...  # pragma: no cover

    def delete(self, path: str) -> 'Response | None':
        """Delete the resource at `path`."""
        ...  # pragma: no cover

    def unauthenticated(self) -> 'Self':
        """Return a copy of the client that sends no credentials."""
        ...  # pragma: no cover


@runtime_checkable
class StepDriver(Protocol):
    """Pluggable provider of a backend and connections to it.

    `setup` is called at most once per run. `client` may be called many
    times and may return a different client each time. `teardown` must
    be safe to call after a partially failed setup and must tolerate
    being called twice: once right after a failed setup, and once more
    when the run exits.
    """

    @property
    def name(self) -> str:
        """Human-readable driver name used in diagnostics."""
        ...  # pragma: no cover

    def setup(self) -> None:
        """Provision the backend state needed by a case."""
        ...  # pragma: no cover

    def client(self) -> Client:
        """Return a connected client."""
        ...  # pragma: no cover

    def teardown(self) -> None:
        """Release everything provisioned by `setup`."""
        ...  # pragma: no cover


@runtime_checkable
class TestT(Protocol):
    """Lifecycle reporting capability of the host test runner.

    `error` records a failure and lets the run continue. `fatal` and
    `skip` record an outcome and end the run; implementations may raise
    to unwind, and the engine also stops on its own after calling them.
    """

    @property
    def verbose(self) -> bool:
        """Whether the host runner reports progress verbosely."""
        ...  # pragma: no cover

    def error(self, *args: object) -> None:
        """Record an error and continue."""
        ...  # pragma: no cover

    def fatal(self, *args: object) -> None:
        """Record an error and abort the run."""
        ...  # pragma: no cover

    def skip(self, *args: object) -> None:
        """Mark the run as intentionally not executed."""
        ...  # pragma: no cover

    def helper(self) -> None:
        """Mark the calling frame as a helper, hidden from diagnostics."""
        ...  # pragma: no cover
