"""Core exception hierarchy.

This module defines the error types raised by drivers, clients, checks,
and the execution engine. Every error may carry an `ErrorContext` that
is rendered into a readable location line and a YAML snippet of the
failing step when the error is reported.
"""

from os import linesep
from typing import TYPE_CHECKING, Any, TypedDict

from yaml import dump

from pytest_stepwise.values import MAPPINGS, SCALARS, SEQUENCES

if TYPE_CHECKING:
    from typing import Self

if TYPE_CHECKING:
    from pytest_stepwise.schema import Step

SNIPPET_ELLIPSIS = f' ...{linesep}'
SNIPPET_INDENT = 2

FORMAT_REPLACER = '<runtime object>'
FORMAT_CASE = '<anonymous case>'
FORMAT_INDENT = 4


class ErrorContext(TypedDict, total=False):
    """Container describing contextual information for error formatting.

    All fields are optional; the formatter adapts output based on
    provided values.
    """

    #: Title of the case being executed.
    case: str | None

    #: One-based number of the step where the error occurred.
    step_num: int | None
    #: Operation of the failing step.
    operation: str | None
    #: Fully prefixed dispatch path.
    path: str | None

    #: Underlying exception that triggered formatting.
    error: Exception | None
    #: Runtime element associated with the error.
    element: Any


class ErrorFormatter:
    """Utility class for formatting stepwise errors.

    Produces human-readable messages with an optional location line
    and a YAML snippet of the step that failed.
    """

    @classmethod
    def format(cls, message: str, context: ErrorContext | None = None) -> str:
        """Format an error message using contextual information.

        Args:
            message: Base human-readable error message.
            context: Optional error context with location and data.

        Returns:
            A fully formatted error message suitable for display.
        """
        if not context:
            return message

        message += linesep
        message += cls.get_location_string(context, indent=FORMAT_INDENT)
        message += cls.get_snippet_string(context, indent=FORMAT_INDENT * 2)

        return message.rstrip()

    @classmethod
    def get_location_string(cls, context: ErrorContext, *,
                            indent: str | int | None = None) -> str:
        """Format case and step location information.

        Args:
            context: Error context containing location metadata.
            indent: Optional indentation (string or number of spaces).

        Returns:
            A formatted location string including case title, step number,
            operation, path and the type of the underlying error when
            available.
        """
        indent = cls._ensure_indent(indent)

        case = context.get('case') or FORMAT_CASE
        message = f'{indent}in {case!r}{linesep}'

        if (step_num := context.get('step_num')) is not None:
            message += f'{indent}on step {step_num}'
            if operation := context.get('operation'):
                message += f', {operation}'
                if path := context.get('path'):
                    message += f' {path!r}'
            message += linesep

        if (error := context.get('error')) is not None:
            message += f'{indent}caused by {type(error).__name__}{linesep}'

        return message

    @classmethod
    def get_snippet_string(cls, context: ErrorContext, *,
                           indent: str | int | None = None) -> str:
        """Generate a YAML snippet of the failing element.

        Args:
            context: Error context containing the element.
            indent: Optional indentation (string or number of spaces).

        Returns:
            A formatted multi-line snippet string, or an empty string
            if no element is available.
        """
        indent = cls._ensure_indent(indent)

        if not (element := context.get('element')):
            return ''

        snippet = f'{indent}{SNIPPET_ELLIPSIS}'
        snippet += cls._make_yaml(element, indent)
        snippet += linesep

        return snippet

    @classmethod
    def _filter_unsafe(cls, value: Any) -> Any:  # noqa: ANN401
        """Recursively sanitize values for safe YAML serialization.

        Non-scalar and non-container objects (checks, drivers, clients)
        are replaced with a placeholder.

        Args:
            value: Arbitrary value to sanitize.

        Returns:
            A YAML-safe representation of the value.
        """
        if value is None or isinstance(value, SCALARS):
            return value

        if isinstance(value, MAPPINGS):
            return {
                f'{key}': cls._filter_unsafe(item)
                for key, item in value.items()
            }

        if isinstance(value, SEQUENCES):
            return [
                cls._filter_unsafe(item)
                for item in value
            ]

        return FORMAT_REPLACER

    @classmethod
    def _make_yaml(cls, value: Any, indent: str = '') -> str:  # noqa: ANN401
        """Serialize a value to an indented YAML string.

        Args:
            value: Arbitrary value to serialize.
            indent: Optional indentation prefix.

        Returns:
            A YAML-formatted string representation of the value.
        """
        data = dump(
            cls._filter_unsafe(value),
            indent=SNIPPET_INDENT,
            sort_keys=False,
        )

        return cls._make_indent(data, indent)

    @staticmethod
    def _make_indent(value: str, indent: str) -> str:
        """Apply indentation to a multi-line string.

        Empty or whitespace-only lines are omitted.
        """
        if not indent:
            return value

        return linesep.join(
            f'{indent}{line}'
            for line in value.splitlines()
            if line.strip()
        )

    @staticmethod
    def _ensure_indent(indent: str | int | None = None) -> str:
        """Normalize indentation input to a string."""
        if isinstance(indent, int) and indent > 0:
            return ' ' * indent

        if isinstance(indent, str):
            return indent

        return ''


class StepwiseError(Exception, ErrorFormatter):
    """Base exception for all pytest-stepwise errors.

    All custom exceptions raised by the library inherit from this
    class to allow unified error handling by callers.
    """

    def __init__(self, message: str, *,
                 context: ErrorContext | None = None) -> None:
        """Initialize an error.

        Args:
            message: Human-readable error description.
            context: Optional error context used for formatting.
        """
        self.message = message
        self.context = context

        super().__init__(message)

    def __str__(self) -> str:
        """String representation."""
        return self.format(self.message, self.context)

    @classmethod
    def from_step(cls, message: str, step: 'Step', *,
                  case: str | None = None,
                  step_num: int | None = None,
                  path: str | None = None,
                  error: Exception | None = None) -> 'Self':
        """Create an error located at a step of a case.

        Args:
            message: Human-readable error message.
            step: Step being executed when the error occurred.
            case: Title of the case.
            step_num: One-based step number.
            path: Prefixed dispatch path.
            error: Optional underlying exception.

        Returns:
            An initialized error with location context.
        """
        error_context = ErrorContext(
            case=case,
            step_num=step_num,
            operation=step.operation.value,
            path=path,
            error=error,
            element=step.model_dump(
                mode='json',
                exclude_defaults=True,
                exclude={'check'},
            ),
        )

        return cls(message, context=error_context)


class DriverError(StepwiseError):
    """Error raised by a driver that cannot provision or reach a backend."""


class UnsupportedOperationError(StepwiseError):
    """Error raised when a step operation has no dispatch function.

    Operations such as `help`, `revoke`, `renew` and `rollback` belong
    to the vocabulary but can not be dispatched against a path. This
    is a programming error in the case definition and aborts the run.
    """


class ResponseError(StepwiseError):
    """Error raised by a client for an erroneous backend response.

    Clients raise this error when the backend answered, but the answer
    represents a failure. The response, if any, is kept so that step
    checks may inspect both values.
    """

    def __init__(self, message: str, *,
                 response: Any = None,  # noqa: ANN401
                 status: int | None = None,
                 context: ErrorContext | None = None) -> None:
        """Initialize a response error.

        Args:
            message: Human-readable error description.
            response: Response object returned alongside the error.
            status: Optional transport status code.
            context: Optional error context used for formatting.
        """
        self.response = response
        self.status = status

        super().__init__(message, context=context)


class CheckError(StepwiseError, AssertionError):
    """Error raised by a response check that does not hold."""
