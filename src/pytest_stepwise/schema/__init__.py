"""Declarative data model of acceptance cases.

Defines immutable Pydantic models describing cases, their steps, the
operation vocabulary, and the responses returned by backends.
"""

from .cases import Case, PreCheck, TeardownHook
from .operations import GLOBAL_OPERATIONS, PATH_OPERATIONS, StepOperation
from .responses import Auth, Response
from .steps import Step, StepCheck

__all__ = (
    'GLOBAL_OPERATIONS',
    'PATH_OPERATIONS',
    'Auth',
    'Case',
    'PreCheck',
    'Response',
    'Step',
    'StepCheck',
    'StepOperation',
    'TeardownHook',
)
