"""Step definitions.

A step is an immutable description of one backend operation. It is
created by the test author when a case is constructed and is never
modified while the case runs.
"""

from collections.abc import Callable
from typing import Any

from pydantic import ConfigDict, Field, field_validator

from pytest_stepwise.models import DescribedMixin, SchemaModel
from pytest_stepwise.names import RelativePath  # noqa: TC001
from pytest_stepwise.values import Payload, normalize

from .operations import StepOperation  # noqa: TC001
from .responses import Response  # noqa: TC001

#: The check receives the dispatch response and the dispatch error,
#: either of which may be `None`, and raises if the step did not
#: behave as expected.
type StepCheck = Callable[[Response | None, Exception | None], None]


class Step(DescribedMixin, SchemaModel):
    """Single declarative operation of a case."""

    model_config = ConfigDict(ser_json_bytes='base64')

    operation: StepOperation = Field(
        title='Operation',
        description='Kind of operation dispatched for the step.',
    )

    path: RelativePath = Field(
        default='',
        title='Request path',
        description=(
            'Request path relative to the mount point. '
            'The mount prefix is added automatically.'
        ),
    )

    data: Payload = Field(
        default_factory=dict,
        title='Request data',
        description='Arguments sent with write operations.',
    )

    check: StepCheck | None = Field(
        default=None,
        title='Step check',
        description=(
            'Called after the step is executed with the response and the '
            'error of the dispatch. If not set, the next step is executed.'
        ),
    )

    error_ok: bool = Field(
        default=False,
        title='Error tolerance',
        description=(
            'Let a dispatch error through to the check instead of '
            'failing the step and stopping the case.'
        ),
    )

    unauthenticated: bool = Field(
        default=False,
        title='Unauthenticated request',
        description='Dispatch the request without client credentials.',
    )

    @field_validator('data', mode='before')
    @classmethod
    def normalize_data(cls, value: Any) -> Any:  # noqa: ANN401
        """Normalize request data into plain payload values.

        Raises:
            ValueError: If the data contains unsupported values or keys.
        """
        if value is None:
            return {}

        try:
            return normalize(value)
        except TypeError as error:
            raise ValueError(f'{error}') from error
