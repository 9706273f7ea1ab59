"""Runtime settings resolved from the environment.

Acceptance cases create real resources on a live backend, so they are
only executed when `STEPWISE_ACC` is set to a non-empty value. The mount
point prepended to step paths is read from `STEPWISE_MOUNT`.
"""

from pydantic import Field, field_validator
from pydantic_settings import SettingsConfigDict

from pytest_stepwise.models import SettingsModel
from pytest_stepwise.names import Mount  # noqa: TC001

#: Environment variable that must be non-empty for cases to run.
TEST_ENV_VAR = 'STEPWISE_ACC'

#: Mount point used when neither the case nor the environment sets one.
DEFAULT_MOUNT = 'transit'


class StepwiseSettings(SettingsModel):
    """Settings controlling whether and where acceptance cases run.

    Settings are resolved on every run, so changes to the environment
    made by fixtures are always observed.
    """

    model_config = SettingsConfigDict(
        env_prefix='STEPWISE_',
        frozen=True,
        extra='ignore',
    )

    acc: str = Field(
        default='',
        title='Acceptance opt-in',
        description='Any non-empty value enables execution of acceptance cases.',
    )

    mount: Mount = Field(
        default=DEFAULT_MOUNT,
        title='Mount point',
        description='Path segment prepended to every step path.',
    )

    @field_validator('mount', mode='before')
    @classmethod
    def strip_slashes(cls, value: object) -> object:
        """Strip surrounding slashes from a configured mount point."""
        if isinstance(value, str):
            return value.strip('/')

        return value

    @property
    def enabled(self) -> bool:
        """Whether acceptance cases are allowed to run."""
        return bool(self.acc)
