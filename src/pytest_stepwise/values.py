"""Core value types for step payloads.

This module defines the value types that may appear in a step payload
and a normalizer that turns arbitrary runtime objects into strictly
typed payload values before they are handed to a client.
"""

from collections.abc import Mapping, Sequence
from datetime import date, datetime, timedelta
from typing import Any

from pydantic import SecretStr

#: Scalars are atomic values passed to clients as is.
type Scalar = date | datetime | timedelta | str | bytes | int | float | bool | SecretStr

#: A value is any scalar or a nested container of scalars.
type Value = Scalar | Sequence['Value'] | Mapping[str, 'Value'] | None

#: A payload is the mapping sent with write operations.
type Payload = dict[str, Value]

#: A value in runtime represents any Python object received from
#: a test author or a client prior to normalization.
type RuntimeValue = Any

MAPPINGS = (dict,)
SCALARS = (date, datetime, timedelta, str, bytes, int, float, bool, SecretStr)
SEQUENCES = (list, tuple, set, frozenset)


def _normalize_key(value: RuntimeValue) -> str:
    """Validate a payload mapping key.

    Raises:
        TypeError: If the provided key is not a string.
    """
    if not isinstance(value, str):
        raise TypeError(f'Can not use {value!r} as payload key')

    return value


def normalize(value: RuntimeValue) -> Value:
    """Recursively normalize a runtime value into a payload `Value`.

    Mappings keep their keys, sequences and sets become lists.

    Args:
        value: Runtime value to normalize.

    Returns:
        A fully normalized payload value.

    Raises:
        TypeError: If the value type is unsupported.
    """
    if value is None:
        return None

    if isinstance(value, SCALARS):
        return value

    if isinstance(value, MAPPINGS):
        return {
            _normalize_key(key): normalize(item)
            for key, item in value.items()
        }

    if isinstance(value, SEQUENCES):
        return [
            normalize(item)
            for item in value
        ]

    raise TypeError(f'{value!r} has unsupported type')
