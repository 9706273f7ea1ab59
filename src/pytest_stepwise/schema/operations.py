"""Step operation vocabulary.

Operations are split in two groups. Per-path operations are dispatched
against a single request path; case-global operations concern the
whole backend and are never dispatched by the step loop.
"""

from enum import StrEnum


class StepOperation(StrEnum):
    """Closed enumeration of step kinds."""

    WRITE = 'create'
    READ = 'read'
    UPDATE = 'update'
    DELETE = 'delete'
    LIST = 'list'
    HELP = 'help'

    REVOKE = 'revoke'
    RENEW = 'renew'
    ROLLBACK = 'rollback'

    @property
    def is_global(self) -> bool:
        """Whether the operation is case-global rather than per-path."""
        return self in GLOBAL_OPERATIONS


#: Operations called per path.
PATH_OPERATIONS = frozenset({
    StepOperation.WRITE,
    StepOperation.READ,
    StepOperation.UPDATE,
    StepOperation.DELETE,
    StepOperation.LIST,
    StepOperation.HELP,
})

#: Operations called globally, the path is less relevant.
GLOBAL_OPERATIONS = frozenset({
    StepOperation.REVOKE,
    StepOperation.RENEW,
    StepOperation.ROLLBACK,
})
