import logging
import subprocess
import tempfile
from concurrent.futures import Future, ThreadPoolExecutor, wait
from pathlib import Path
from typing import IO

from kts_runner.const import FAILURE_GLYPH, SUCCESS_GLYPH, SessionPhase
from kts_runner.core.config import RunnerConfig, ToolchainConfig
from kts_runner.data import ExecutionRequest, SessionStatus
from kts_runner.exceptions import ProcessSpawnError, ProcessWaitError, ScriptFileError
from kts_runner.sink import OutputSink, safe_emit

STDOUT_PREFIX = ""


def format_install_hints(toolchain: ToolchainConfig) -> str:
    """Render the per-platform install commands as a bullet list."""
    return "\n".join(f"• {platform}: {command}" for platform, command in toolchain.install_hints.items())


def format_not_found(toolchain: ToolchainConfig) -> str:
    """Build the diagnostic shown when the tool cannot be located."""
    return (
        f"{FAILURE_GLYPH} {toolchain.display_name} compiler not found!\n\n"
        f"Please install {toolchain.display_name}:\n"
        f"{format_install_hints(toolchain)}"
    )


class ExecutionSession:
    r"""One run of a script through the external tool.

    The session walks ``CREATED -> FILE_WRITTEN -> SPAWNED -> STREAMING ->
    COMPLETED``. Standard output and standard error are drained by two reader
    tasks so neither pipe can fill up and stall the child, and each line is
    handed to the sink as soon as it is read. ``run`` returns only after the
    child has exited and both readers are done. The transient script file is
    removed on every path out of ``run``.
    """

    def __init__(
        self,
        request: ExecutionRequest,
        tool: str,
        sink: OutputSink,
        config: RunnerConfig | None = None,
        env: dict[str, str] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            request (ExecutionRequest): Source text and toolchain.
            tool (str): Located executable, bare name or absolute path.
            sink (OutputSink): Receiver of the notifications.
            config (RunnerConfig | None): Runner settings.
            env (dict[str, str] | None): Environment of the child process. If None,
                the child inherits the current environment.
            logger (logging.Logger | None): Logger to use.

        """
        self.request = request
        self.tool = tool
        self.sink = sink
        self.config = config or RunnerConfig(toolchain=request.toolchain)
        self.env = env
        self.logger = logger or logging.getLogger(__name__)

        self.phase = SessionPhase.CREATED
        self.status = SessionStatus()
        self.script_path: Path | None = None
        self.process: subprocess.Popen[bytes] | None = None

    def run(self) -> SessionStatus:
        """Execute the script and return the terminal status."""
        try:
            self._write_script()
            self._spawn()
            self.status = self._stream()
        except ScriptFileError as e:
            self._emit(f"{FAILURE_GLYPH} {e}")
            self.status = SessionStatus.spawn_error(str(e))
        except ProcessSpawnError as e:
            message = f"{FAILURE_GLYPH} {e}"
            if e.is_missing_tool:
                toolchain = self.request.toolchain
                message += f"\n\nPlease install {toolchain.display_name}:\n{format_install_hints(toolchain)}"
            self._emit(message)
            self.status = SessionStatus.spawn_error(str(e))
        finally:
            self._remove_script()
            self.phase = SessionPhase.COMPLETED

        return self.status

    def _write_script(self) -> None:
        """Persist the source to a fresh temporary file."""
        toolchain = self.request.toolchain
        try:
            with tempfile.NamedTemporaryFile(
                mode="w",
                suffix=toolchain.script_suffix,
                dir=self.config.temp_dir,
                encoding=self.config.encoding,
                delete=False,
            ) as handle:
                self.script_path = Path(handle.name)
                handle.write(f"{self.request.source}\n")
        except (OSError, UnicodeEncodeError) as e:
            msg = f"Failed to write script file: {e}"
            raise ScriptFileError(msg) from e

        self.logger.debug("Wrote script to %s", self.script_path)
        self.phase = SessionPhase.FILE_WRITTEN

    def _spawn(self) -> None:
        """Start the tool on the script with both streams captured separately."""
        command = [self.tool, self.request.toolchain.script_flag, str(self.script_path)]
        self.logger.debug("Executing command: %s", command)

        try:
            self.process = subprocess.Popen(  # noqa: S603
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                env=self.env,
            )
        except OSError as e:
            raise ProcessSpawnError(self.request.toolchain.tool_name, e) from e

        self.phase = SessionPhase.SPAWNED

    def _stream(self) -> SessionStatus:
        """Drain both pipes concurrently and classify the exit."""
        process = self.process
        if process is None or process.stdout is None or process.stderr is None:
            msg = "Session has no running process"
            raise RuntimeError(msg)

        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="kts-reader") as readers:
            futures = [
                readers.submit(self._drain, process.stdout, STDOUT_PREFIX),
                readers.submit(self._drain, process.stderr, self.config.stderr_prefix),
            ]
            self.phase = SessionPhase.STREAMING

            try:
                exit_code = self._wait(process)
            except ProcessWaitError as e:
                wait(futures)
                self._report_reader_errors(futures)
                self._emit(f"{FAILURE_GLYPH} {e}")
                return SessionStatus.wait_error(str(e))

            wait(futures)
            self._report_reader_errors(futures)

        if exit_code == 0:
            self._emit(f"{SUCCESS_GLYPH} Execution completed")
            return SessionStatus.succeeded()

        if exit_code < 0:
            self._emit(f"{FAILURE_GLYPH} Process terminated by signal {-exit_code}")
        else:
            self._emit(f"{FAILURE_GLYPH} Process exited with status {exit_code}")
        return SessionStatus.failed_exit(exit_code)

    def _wait(self, process: "subprocess.Popen[bytes]") -> int:
        try:
            return process.wait()
        except OSError as e:
            msg = f"Failed to wait on process: {e}"
            raise ProcessWaitError(msg) from e

    def _drain(self, pipe: IO[bytes], prefix: str) -> None:
        """Forward every decodable line of ``pipe`` to the sink, in order."""
        with pipe:
            for raw in iter(pipe.readline, b""):
                try:
                    line = raw.decode(self.config.encoding)
                except UnicodeDecodeError:
                    self.logger.debug("Skipping undecodable output line: %r", raw[:80])
                    continue
                self._emit(prefix + line.rstrip("\r\n"))

    def _report_reader_errors(self, futures: "list[Future[None]]") -> None:
        for future in futures:
            error = future.exception()
            if error is not None:
                self.logger.exception("Output reader stopped early: %s", error, exc_info=error)

    def _emit(self, text: str) -> None:
        safe_emit(self.sink, text, self.logger)

    def _remove_script(self) -> None:
        if self.script_path is None:
            return
        try:
            self.script_path.unlink(missing_ok=True)
        except OSError as e:
            self.logger.warning("Failed to remove script file %s: %s", self.script_path, e)
