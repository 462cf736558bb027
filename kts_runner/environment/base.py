import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field

from kts_runner.environment.parser import build_echo_command


@dataclass
class LoaderConfig:
    """Platform-specific login shell configuration."""

    platform: str
    default_shell: str
    shell_flags: list[str] = field(default_factory=list)
    variables: list[str] = field(default_factory=lambda: ["PATH"])


class ShellProfileLoader(ABC):
    """Abstract base class for platform-specific login shell invocations."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        """Initialize the loader."""
        self.config: LoaderConfig
        self.logger: logging.Logger = logger or logging.getLogger(__name__)

    def get_shell(self, environ: Mapping[str, str] | None = None) -> str:
        """Return the user's shell, falling back to the platform default."""
        return (environ or {}).get("SHELL") or self.config.default_shell

    def get_command(self, shell: str, variables: list[str] | None = None) -> list[str]:
        """Build the argv that prints every variable with its sentinel marker.

        ``variables`` defaults to the loader's own list.
        """
        names = self.config.variables if variables is None else variables
        return [shell, *self.config.shell_flags, "-c", build_echo_command(names)]

    @property
    def platform(self) -> str:
        """Get the platform the loader targets."""
        return self.config.platform

    @property
    def variables(self) -> list[str]:
        """Get the variables the loader queries."""
        return list(self.config.variables)

    @property
    @abstractmethod
    def is_enabled(self) -> bool:
        """Whether this loader runs a shell at all."""
