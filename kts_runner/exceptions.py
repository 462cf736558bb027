"""Custom exceptions for kts-runner."""


class RunnerError(Exception):
    """Base exception for all runner related errors."""

    def __init__(self, message: str) -> None:
        """Initialize the RunnerError."""
        super().__init__(message)


class EnvironmentResolutionError(RunnerError):
    """Raised when the login shell cannot be run or read."""


class ToolNotFoundError(RunnerError):
    """Raised when the external tool cannot be located."""

    def __init__(self, tool: str) -> None:
        """Initialize the ToolNotFoundError."""
        super().__init__(f"Tool {tool} not found")
        self.tool = tool


class ScriptFileError(RunnerError):
    """Raised when the transient script file cannot be created or written."""


class ProcessSpawnError(RunnerError):
    """Raised when the external tool cannot be started."""

    def __init__(self, tool: str, error: OSError) -> None:
        """Initialize the ProcessSpawnError."""
        super().__init__(f"Failed to start {tool}: {error}")
        self.tool = tool
        self.error = error

    @property
    def is_missing_tool(self) -> bool:
        """Whether the executable itself does not exist."""
        return isinstance(self.error, FileNotFoundError)


class ProcessWaitError(RunnerError):
    """Raised when waiting on the child process fails."""


class UnsupportedPlatformError(RunnerError):
    """Raised when no shell profile loader is registered for a platform."""

    def __init__(self, platform: str) -> None:
        """Initialize the UnsupportedPlatformError."""
        super().__init__(f"Platform {platform} is not supported")


class TaskSchedulingError(RunnerError):
    """Raised when the background worker running a session fails itself."""
