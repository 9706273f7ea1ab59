"""Execution engine for acceptance cases.

This module runs a single case end to end: it gates execution on the
environment, provisions the backend through the case driver, dispatches
every step through a fresh client, runs step checks, and tears the
backend down on every exit path.

The engine never returns a result. Every outcome is reported through
the `TestT` reporter supplied by the caller.
"""

from contextlib import ExitStack
from logging import getLogger
from typing import TYPE_CHECKING

from pytest_stepwise.errors import DriverError, ResponseError, StepwiseError, UnsupportedOperationError
from pytest_stepwise.names import join_path
from pytest_stepwise.settings import TEST_ENV_VAR, StepwiseSettings

from .dispatch import get_dispatcher

if TYPE_CHECKING:
    from typing import NoReturn

if TYPE_CHECKING:
    from pytest_stepwise.interfaces import Client, StepDriver, TestT
    from pytest_stepwise.schema import Case, Response, Step

logger = getLogger(__name__)


class RunAborted(Exception):  # noqa: N818
    """Raised internally after a fatal outcome has been reported."""


class CaseRunner:
    """Executable runtime of a single case.

    The runner reads the case and its steps but never modifies them.
    Execution is strictly sequential and the runner is meant to be used
    for one run only.
    """

    def __init__(self, reporter: 'TestT', case: 'Case', *,
                 settings: StepwiseSettings | None = None) -> None:
        """Initialize a case runner.

        Args:
            reporter: Host reporter receiving every outcome.
            case: Case to execute.
            settings: Resolved settings. Read from the environment
                when omitted.
        """
        self.reporter = reporter
        self.case = case
        self.settings = settings or StepwiseSettings()

    @property
    def mount(self) -> str:
        """Mount point prepended to step paths."""
        return self.case.mount or self.settings.mount

    def run(self) -> None:
        """Run the case, reporting every outcome."""
        self.reporter.helper()

        logger.debug('Stepwise starting case %r', self.case.label)
        try:
            self.run_case()
        except RunAborted:
            logger.debug('Stepwise aborted case %r', self.case.label)
        else:
            logger.debug('Stepwise finished case %r', self.case.label)

    def run_case(self) -> None:
        """Gate, provision, execute and release.

        Raises:
            RunAborted: After a fatal outcome has been reported.
        """
        if not self.settings.enabled:
            self.reporter.skip(f'Acceptance tests skipped unless env {TEST_ENV_VAR!r} set')
            return

        if not self.reporter.verbose:
            self.abort('Acceptance tests must be run with the verbose flag on tests')

        if self.case.pre_check is not None:
            self.case.pre_check()

        driver = self.case.driver
        if driver is None:
            self.abort('nil driver in acceptance test')

        with ExitStack() as stack:
            if self.case.teardown is not None:
                stack.callback(self.teardown_case)
            stack.callback(self.teardown_driver, driver)

            try:
                driver.setup()
            except Exception as error:  # noqa: BLE001
                self.release(driver)
                self.abort(DriverError(f'Driver {driver.name!r} setup failed: {error}'))

            leases = self.run_steps(driver)
            self.log_leases(leases)

            logger.debug('Rollback was not requested for mount %r', self.mount)

    def run_steps(self, driver: 'StepDriver') -> list['Response']:
        """Execute the steps in order.

        A failing check is reported and execution goes on; a failing
        dispatch is reported and stops the loop unless the step
        tolerates errors.

        Args:
            driver: Provisioned driver.

        Returns:
            Responses carrying leases handed out by the backend.

        Raises:
            RunAborted: If a client can not be acquired or an operation
                can not be dispatched.
        """
        leases: list[Response] = []

        for step_num, step in enumerate(self.case.steps, start=1):
            path = join_path(self.mount, step.path)
            logger.debug(
                'Executing test step %d: %s %r', step_num, step.operation.value, path,
                extra={'step_num': step_num, 'operation': step.operation.value, 'path': path},
            )

            client = self.acquire_client(driver, step)

            response, error = self.dispatch(client, step, path, step_num=step_num)
            if getattr(response, 'lease_id', None):
                leases.append(response)

            if step.check is not None:
                self.check(step, response, error)

            if error is None:
                continue

            if step.error_ok:
                logger.debug('Step %d failed as tolerated: %s', step_num, error)
                continue

            self.reporter.error(StepwiseError.from_step(
                f'Failed step {step_num}: {error}',
                step,
                case=self.case.label,
                step_num=step_num,
                path=path,
                error=error,
            ))
            break

        return leases

    def acquire_client(self, driver: 'StepDriver', step: 'Step') -> 'Client':
        """Obtain a fresh client for a step.

        Raises:
            RunAborted: If the driver can not provide a client.
        """
        try:
            client = driver.client()
            if step.unauthenticated:
                client = client.unauthenticated()
        except Exception as error:  # noqa: BLE001
            self.abort(DriverError(f'Driver {driver.name!r} client failed: {error}'))

        return client

    def dispatch(self, client: 'Client', step: 'Step', path: str, *,
                 step_num: int) -> tuple['Response | None', Exception | None]:
        """Send a step operation through a client.

        Args:
            client: Connected client.
            step: Step to dispatch.
            path: Prefixed request path.
            step_num: One-based step number for error reporting.

        Returns:
            The response and the error of the dispatch.

        Raises:
            RunAborted: If the operation can not be dispatched.
        """
        try:
            dispatcher = get_dispatcher(step.operation)
        except UnsupportedOperationError as error:
            self.abort(UnsupportedOperationError.from_step(
                error.message,
                step,
                case=self.case.label,
                step_num=step_num,
                path=path,
            ))

        try:
            return dispatcher(client, path, step.data), None
        except ResponseError as error:
            return error.response, error
        except Exception as error:  # noqa: BLE001
            return None, error

    def check(self, step: 'Step', response: 'Response | None',
              error: Exception | None) -> None:
        """Run a step check and report its failure."""
        self.reporter.helper()

        try:
            step.check(response, error)  # type: ignore[misc]
        except Exception as check_error:  # noqa: BLE001
            self.reporter.error('test check error:', check_error)

    def log_leases(self, leases: list['Response']) -> None:
        """Log leases left behind by the steps.

        Revocation is not performed by the engine, so no revocation can
        fail and nothing is reported.
        """
        for response in leases:
            logger.debug(
                'Lease %r was not revoked (duration %ds)',
                response.lease_id, response.lease_duration,
            )

    def teardown_case(self) -> None:
        """Run the case teardown hook."""
        try:
            self.case.teardown()  # type: ignore[misc]
        except Exception as error:  # noqa: BLE001
            self.reporter.error('failed to tear down:', error)

    def teardown_driver(self, driver: 'StepDriver') -> None:
        """Run the final driver teardown.

        Raises:
            RunAborted: If the driver fails to tear down.
        """
        try:
            driver.teardown()
        except Exception as error:  # noqa: BLE001
            self.abort(DriverError(f'Driver {driver.name!r} teardown failed: {error}'))

    def release(self, driver: 'StepDriver') -> None:
        """Tear a driver down right after a failed setup.

        The final teardown still runs when the case exits, so a failure
        here is only logged.
        """
        try:
            driver.teardown()
        except Exception:  # noqa: BLE001
            logger.warning('Driver %r teardown after failed setup failed', driver.name, exc_info=True)

    def abort(self, *args: object) -> 'NoReturn':
        """Report a fatal outcome and stop the run.

        Raises:
            RunAborted: Always, unless the reporter raises first.
        """
        self.reporter.fatal(*args)
        raise RunAborted


def run(reporter: 'TestT', case: 'Case', *,
        settings: StepwiseSettings | None = None) -> None:
    """Perform an acceptance test on a backend with the given case.

    Cases are not run unless the `STEPWISE_ACC` environment variable is
    set to a non-empty value, so that running a suite does not surprise
    a user by creating real resources.

    Cases fail unless the reporter is verbose: acceptance cases can take
    long, and progress output lets users see what is going on.

    Args:
        reporter: Host reporter receiving every outcome.
        case: Case to execute.
        settings: Resolved settings. Read from the environment when omitted.
    """
    CaseRunner(reporter, case, settings=settings).run()
