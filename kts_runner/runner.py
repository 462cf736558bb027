import asyncio
import logging
import os

from kts_runner.core.config import RunnerConfig
from kts_runner.data import ExecutionRequest, ResolvedEnvironment, SessionStatus
from kts_runner.environment import EnvironmentResolver, ShellProfileLoaderFactory
from kts_runner.exceptions import RunnerError, TaskSchedulingError, ToolNotFoundError
from kts_runner.locator import ToolLocator
from kts_runner.session import ExecutionSession, format_not_found
from kts_runner.sink import CollectingSink, OutputSink, safe_emit


class ScriptRunner:
    r"""Run submitted scripts through the external tool and stream the output.

    Every call creates an independent :class:`ExecutionSession` with its own
    script file, child process and reader tasks, so concurrent runs never share
    state. Toolchain and process failures are reported to the sink and in the
    returned :class:`SessionStatus`; they are never raised.
    """

    def __init__(
        self,
        config: RunnerConfig | None = None,
        sink: OutputSink | None = None,
        environment: ResolvedEnvironment | None = None,
    ) -> None:
        """Initialize the runner.

        Args:
            config (RunnerConfig | None): Runner settings. Defaults to the Kotlin
                script toolchain.
            sink (OutputSink | None): Default receiver of notifications.
            environment (ResolvedEnvironment | None): Values recovered from the
                login shell, overlaid on the live environment for every lookup
                and child process.

        """
        self.config = config or RunnerConfig()
        self.sink = sink or CollectingSink()
        self.environment = environment or ResolvedEnvironment()
        self.logger = logging.getLogger(__name__)

        if self.config.verbose and not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.DEBUG)

    def process_environment(self) -> dict[str, str]:
        """Return the live environment with the resolved values on top."""
        return self.environment.merged_with(os.environ)

    def run(self, source: str, sink: OutputSink | None = None) -> SessionStatus:
        """Run ``source`` and block until the session is terminal."""
        sink = sink if sink is not None else self.sink
        request = ExecutionRequest(source=source, toolchain=self.config.toolchain)
        env = self.process_environment()

        try:
            tool = ToolLocator(request.toolchain, env, self.logger).require()
        except ToolNotFoundError as e:
            self.logger.warning("%s", e)
            safe_emit(sink, format_not_found(request.toolchain), self.logger)
            return SessionStatus.spawn_error(str(e))

        session = ExecutionSession(request, tool, sink, self.config, env, self.logger)
        status = session.run()
        self.logger.debug("Session finished: %s", status)
        return status

    async def run_script(self, source: str, sink: OutputSink | None = None) -> SessionStatus:
        """Run ``source`` on a worker thread, suspending the caller until it ends.

        Raises:
            TaskSchedulingError: If the worker itself fails. Toolchain and process
                errors are reported through the sink instead.

        """
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, self.run, source, sink)
        except RunnerError:
            raise
        except Exception as e:
            msg = f"Script worker failed: {e}"
            raise TaskSchedulingError(msg) from e


def resolve_environment(config: RunnerConfig | None = None) -> ResolvedEnvironment:
    """Recover PATH and the toolchain home variable from the login shell.

    The loader comes from ``config.platform`` when set, otherwise from the running
    platform. Updates ``os.environ`` with every non-empty value and returns them.
    Never raises.
    """
    config = config or RunnerConfig()
    home_variable = config.toolchain.home_variable
    loader = ShellProfileLoaderFactory.create_loader(config.platform) if config.platform else None
    resolver = EnvironmentResolver(loader=loader, extra_variables=[home_variable] if home_variable else None)
    return resolver.resolve()


def bootstrap(
    config: RunnerConfig | None = None,
    sink: OutputSink | None = None,
    resolve: bool = True,
) -> ScriptRunner:
    """Prepare a runner at application startup.

    The login shell is consulted once, before anything else, so that tools
    installed through the user's profile are visible to every later run.
    """
    config = config or RunnerConfig()
    environment = resolve_environment(config) if resolve else ResolvedEnvironment()

    runner = ScriptRunner(config=config, sink=sink, environment=environment)
    runner.logger.debug("Final PATH: %r", runner.process_environment().get("PATH"))
    return runner
