"""In-memory driver, client and reporter for tests.

The backend is a plain dictionary of paths to payloads. Every call is
recorded in a shared event log so that tests can assert on the exact
sequence of driver, client and reporter interactions.
"""

from typing import TYPE_CHECKING

from pytest_stepwise.plugin.reporter import format_args
from pytest_stepwise.schema import Response

if TYPE_CHECKING:
    from typing import Self

if TYPE_CHECKING:
    from pytest_stepwise.values import Payload


class MemoryBackend:
    """Dictionary-backed storage with injectable failures and responses."""

    def __init__(self, events: list[str] | None = None) -> None:
        self.events = events if events is not None else []
        self.storage: dict[str, Payload] = {}
        self.failures: dict[tuple[str, str], Exception] = {}
        self.responses: dict[tuple[str, str], Response] = {}
        self.tokens: list[str] = []

    def call(self, operation: str, path: str, token: str) -> None:
        self.events.append(f'{operation} {path}')
        self.tokens.append(token)
        if error := self.failures.get((operation, path)):
            raise error


class MemoryClient:
    """Client dispatching operations to a `MemoryBackend`."""

    def __init__(self, backend: MemoryBackend, token: str = 'root') -> None:
        self.backend = backend
        self.token = token

    def write(self, path: str, data: 'Payload') -> Response | None:
        self.backend.call('write', path, self.token)
        self.backend.storage[path] = dict(data)
        return self.backend.responses.get(('write', path))

    def read(self, path: str) -> Response | None:
        self.backend.call('read', path, self.token)
        if path not in self.backend.storage:
            return None
        return Response(data=self.backend.storage[path])

    def list(self, path: str) -> Response | None:
        self.backend.call('list', path, self.token)
        prefix = f'{path.rstrip('/')}/'
        keys = sorted(
            key.removeprefix(prefix)
            for key in self.backend.storage
            if key.startswith(prefix)
        )
        if not keys:
            return None
        return Response(data={'keys': keys})

    def delete(self, path: str) -> Response | None:
        self.backend.call('delete', path, self.token)
        self.backend.storage.pop(path, None)
        return None

    def unauthenticated(self) -> 'Self':
        return type(self)(self.backend, token='')


class MemoryDriver:
    """Driver provisioning a `MemoryBackend`."""

    name = 'memory'

    def __init__(self, events: list[str] | None = None, *,
                 setup_error: Exception | None = None,
                 client_error: Exception | None = None,
                 teardown_error: Exception | None = None) -> None:
        self.events = events if events is not None else []
        self.backend = MemoryBackend(self.events)

        self.setup_error = setup_error
        self.client_error = client_error
        self.teardown_error = teardown_error

        self.clients: list[MemoryClient] = []

    def count(self, event: str) -> int:
        return self.events.count(event)

    def setup(self) -> None:
        self.events.append('setup')
        if self.setup_error is not None:
            raise self.setup_error

    def client(self) -> MemoryClient:
        self.events.append('client')
        if self.client_error is not None:
            raise self.client_error
        client = MemoryClient(self.backend)
        self.clients.append(client)
        return client

    def teardown(self) -> None:
        self.events.append('teardown')
        if self.teardown_error is not None:
            raise self.teardown_error


class RecordingReporter:
    """Reporter recording every call without raising."""

    def __init__(self, events: list[str] | None = None, *, verbose: bool = True) -> None:
        self.events = events if events is not None else []
        self.verbose = verbose

        self.errors: list[str] = []
        self.fatals: list[str] = []
        self.skips: list[str] = []
        self.helpers = 0

    def error(self, *args: object) -> None:
        self.events.append('error')
        self.errors.append(format_args(args))

    def fatal(self, *args: object) -> None:
        self.events.append('fatal')
        self.fatals.append(format_args(args))

    def skip(self, *args: object) -> None:
        self.events.append('skip')
        self.skips.append(format_args(args))

    def helper(self) -> None:
        self.helpers += 1


class AbortingReporter(RecordingReporter):
    """Reporter unwinding on fatal outcomes, as pytest does."""

    class Fatal(BaseException):  # noqa: N818
        pass

    def fatal(self, *args: object) -> None:
        super().fatal(*args)
        raise self.Fatal(format_args(args))
