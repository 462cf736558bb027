"""kts-runner - run scripts through an external toolchain and stream the output."""

from .const import HostPlatform, SessionOutcome, SessionPhase
from .core.config import RunnerConfig, ToolchainConfig
from .data import ExecutionRequest, ResolvedEnvironment, SessionStatus
from .environment import EnvironmentResolver, ShellProfileLoader, ShellProfileLoaderFactory
from .exceptions import (
    EnvironmentResolutionError,
    ProcessSpawnError,
    ProcessWaitError,
    RunnerError,
    ScriptFileError,
    TaskSchedulingError,
    ToolNotFoundError,
    UnsupportedPlatformError,
)
from .locator import ToolLocator
from .runner import ScriptRunner, bootstrap, resolve_environment
from .session import ExecutionSession
from .sink import CallbackSink, CollectingSink, OutputSink, StreamSink, safe_emit

__all__ = [
    "CallbackSink",
    "CollectingSink",
    "EnvironmentResolutionError",
    "EnvironmentResolver",
    "ExecutionRequest",
    "ExecutionSession",
    "HostPlatform",
    "OutputSink",
    "ProcessSpawnError",
    "ProcessWaitError",
    "ResolvedEnvironment",
    "RunnerConfig",
    "RunnerError",
    "ScriptFileError",
    "ScriptRunner",
    "SessionOutcome",
    "SessionPhase",
    "SessionStatus",
    "ShellProfileLoader",
    "ShellProfileLoaderFactory",
    "StreamSink",
    "TaskSchedulingError",
    "ToolLocator",
    "ToolNotFoundError",
    "ToolchainConfig",
    "UnsupportedPlatformError",
    "bootstrap",
    "resolve_environment",
    "safe_emit",
]
