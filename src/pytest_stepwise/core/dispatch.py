"""Dispatch of step operations to client calls.

Every operation of the vocabulary is mapped here. Per-path operations
map to a client call; all others map to `None` and are rejected with
`UnsupportedOperationError` before anything is sent to the backend.
"""

from collections.abc import Callable
from types import MappingProxyType
from typing import TYPE_CHECKING

from pytest_stepwise.errors import UnsupportedOperationError
from pytest_stepwise.schema import StepOperation

if TYPE_CHECKING:
    from collections.abc import Mapping

if TYPE_CHECKING:
    from pytest_stepwise.interfaces import Client
    from pytest_stepwise.schema import Response
    from pytest_stepwise.values import Payload

type Dispatcher = Callable[['Client', str, 'Payload'], 'Response | None']


def _write(client: 'Client', path: str, data: 'Payload') -> 'Response | None':
    return client.write(path, data)


def _read(client: 'Client', path: str, data: 'Payload') -> 'Response | None':  # noqa: ARG001
    return client.read(path)


def _list(client: 'Client', path: str, data: 'Payload') -> 'Response | None':  # noqa: ARG001
    return client.list(path)


def _delete(client: 'Client', path: str, data: 'Payload') -> 'Response | None':  # noqa: ARG001
    return client.delete(path)


#: Total mapping of operations to dispatch functions.
DISPATCHERS: 'Mapping[StepOperation, Dispatcher | None]' = MappingProxyType({
    StepOperation.WRITE: _write,
    StepOperation.UPDATE: _write,
    StepOperation.READ: _read,
    StepOperation.LIST: _list,
    StepOperation.DELETE: _delete,
    StepOperation.HELP: None,
    StepOperation.REVOKE: None,
    StepOperation.RENEW: None,
    StepOperation.ROLLBACK: None,
})


def get_dispatcher(operation: StepOperation) -> Dispatcher:
    """Resolve the dispatch function of an operation.

    Args:
        operation: Step operation.

    Returns:
        A callable sending the operation through a client.

    Raises:
        UnsupportedOperationError: If the operation can not be dispatched.
    """
    if dispatcher := DISPATCHERS.get(operation):
        return dispatcher

    raise UnsupportedOperationError(f'Unsupported operation {operation.value!r}')
