"""CLI utilities for inspecting pytest-stepwise configuration.

The commands print what the execution engine would use if a case were
run in the current environment, without contacting any backend.
"""

from click import echo, group, option
from yaml import safe_dump

from pytest_stepwise.schema import GLOBAL_OPERATIONS, StepOperation
from pytest_stepwise.settings import TEST_ENV_VAR, StepwiseSettings


@group(help='Command-line utilities for pytest-stepwise.')
def cli() -> None:
    """Root CLI group for pytest-stepwise tools."""
    return None


@cli.command(
    name='settings',
    help='Print settings resolved from the environment as YAML.',
)
@option(
    '-m', '--mount',
    default=None,
    help='Mount point overriding the STEPWISE_MOUNT environment variable.',
)
def print_settings(mount: str | None) -> None:
    """Resolve and print runtime settings.

    Args:
        mount: Optional mount point override.
    """
    settings = StepwiseSettings(mount=mount) if mount else StepwiseSettings()

    echo(safe_dump({
        'enabled': settings.enabled,
        'gate': TEST_ENV_VAR,
        'mount': settings.mount,
    }, sort_keys=False), nl=False)


@cli.command(
    name='operations',
    help='List step operations and whether they are dispatched per path.',
)
def print_operations() -> None:
    """Print the operation vocabulary."""
    for operation in StepOperation:
        scope = 'global' if operation in GLOBAL_OPERATIONS else 'path'
        echo(f'{operation.value}\t{scope}')


if __name__ == '__main__':
    cli()
