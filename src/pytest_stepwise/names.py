"""Path and mount primitive types and validation rules.

Every step path is relative to a mount point. The engine joins both
with a single slash, so mounts must not carry leading or trailing
slashes and step paths must not start with one.
"""

from re import ASCII
from re import compile as regexp
from typing import Annotated

from pydantic import Field

_SEGMENT_PATTERN = r'[\w.-]+'

#: Compiled pattern for mount points, e.g. `transit` or `auth/approle`.
MOUNT_PATTERN = regexp(
    rf'^{_SEGMENT_PATTERN}(/{_SEGMENT_PATTERN})*$',
    flags=ASCII,
)

#: Compiled pattern for relative step paths. An empty path addresses
#: the mount itself.
PATH_PATTERN = regexp(r'^([^/\s]\S*)?$')


Mount = Annotated[
    str, Field(
        pattern=MOUNT_PATTERN.pattern,
        title='Mount point',
        description=(
            'Path segment prepended to every step path before dispatch. '
            'Must not start or end with a slash.'
        ),
        examples=[
            'transit',
            'auth/approle',
        ],
    ),
]

RelativePath = Annotated[
    str, Field(
        pattern=PATH_PATTERN.pattern,
        title='Step path',
        description=(
            'Request path relative to the mount point. '
            'The mount prefix is added by the execution engine.'
        ),
        examples=[
            'keys/test',
            'encrypt/test',
        ],
    ),
]


def join_path(mount: str, path: str) -> str:
    """Prefix a relative step path with a mount point.

    Args:
        mount: Mount point without surrounding slashes.
        path: Relative step path.

    Returns:
        The dispatch path.
    """
    return f'{mount}/{path}'
