"""Execution engine and operation dispatch."""

from .dispatch import DISPATCHERS, get_dispatcher
from .runner import CaseRunner, run

__all__ = (
    'DISPATCHERS',
    'CaseRunner',
    'get_dispatcher',
    'run',
)
