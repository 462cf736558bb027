"""Data classes for kts-runner."""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from kts_runner.const import SessionOutcome

if TYPE_CHECKING:
    from kts_runner.core.config import ToolchainConfig


class ResolvedEnvironment(Mapping[str, str]):
    """Read-only view of the variables recovered from the login shell.

    Only non-empty values are ever stored, so overlaying this mapping on another
    environment can never blank out a working value.
    """

    def __init__(self, values: Mapping[str, str] | None = None) -> None:
        """Initialize the environment, dropping empty values."""
        self._values = MappingProxyType({k: v for k, v in (values or {}).items() if v})

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ResolvedEnvironment({dict(self._values)!r})"

    def merged_with(self, base: Mapping[str, str]) -> dict[str, str]:
        """Return a copy of ``base`` with the resolved values laid on top."""
        merged = dict(base)
        merged.update(self._values)
        return merged


@dataclass(frozen=True)
class ExecutionRequest:
    """Source text submitted for execution by a given toolchain."""

    source: str
    toolchain: "ToolchainConfig"


@dataclass(frozen=True)
class SessionStatus:
    """Completion status of an execution session."""

    outcome: SessionOutcome = SessionOutcome.RUNNING
    exit_code: int | None = None
    reason: str = field(default="")

    @classmethod
    def succeeded(cls) -> "SessionStatus":
        """Status for a zero exit code."""
        return cls(SessionOutcome.SUCCEEDED, exit_code=0)

    @classmethod
    def failed_exit(cls, code: int) -> "SessionStatus":
        """Status for a non-zero exit code."""
        return cls(SessionOutcome.FAILED_EXIT, exit_code=code)

    @classmethod
    def spawn_error(cls, reason: str) -> "SessionStatus":
        """Status for a session that never got a running child process."""
        return cls(SessionOutcome.SPAWN_ERROR, reason=reason)

    @classmethod
    def wait_error(cls, reason: str) -> "SessionStatus":
        """Status for a session whose child process could not be waited on."""
        return cls(SessionOutcome.WAIT_ERROR, reason=reason)

    @property
    def is_terminal(self) -> bool:
        """Check if the session has finished."""
        return self.outcome != SessionOutcome.RUNNING

    @property
    def success(self) -> bool:
        """Check if the execution was successful."""
        return self.outcome == SessionOutcome.SUCCEEDED
