"""Case definitions.

A case is a single set of steps to run against a backend. A case should
generally map one to one to a test function of an integration suite.
"""

from collections.abc import Callable

from pydantic import Field

from pytest_stepwise.interfaces import StepDriver  # noqa: TC001
from pytest_stepwise.models import DescribedMixin, SchemaModel
from pytest_stepwise.names import Mount  # noqa: TC001

from .steps import Step  # noqa: TC001

#: Called once before the case runs at all. Failures are surfaced by
#: the hook itself, usually by raising or calling `pytest.skip`.
type PreCheck = Callable[[], None]

#: Called before the case is over regardless of the outcome. Raises if
#: it can not guarantee that all resources were cleaned up.
type TeardownHook = Callable[[], None]


class Case(DescribedMixin, SchemaModel):
    """Ordered set of steps with lifecycle hooks and a driver."""

    driver: StepDriver | None = Field(
        default=None,
        title='Driver',
        description='Provider of the backend and of clients to reach it.',
    )

    pre_check: PreCheck | None = Field(
        default=None,
        title='Pre-check hook',
        description='Validation performed once before the case runs.',
    )

    steps: tuple[Step, ...] = Field(
        default=(),
        title='Steps',
        description='Operations run for the case, in execution order.',
    )

    teardown: TeardownHook | None = Field(
        default=None,
        title='Teardown hook',
        description=(
            'Called before the case is over regardless of whether it '
            'succeeded or failed.'
        ),
    )

    mount: Mount | None = Field(
        default=None,
        title='Mount point',
        description=(
            'Mount point prepended to every step path. '
            'Defaults to the mount resolved from the environment.'
        ),
    )

    @property
    def label(self) -> str | None:
        """Name used to locate the case in reports."""
        if self.title:
            return self.title

        if self.driver is not None:
            return self.driver.name

        return None
