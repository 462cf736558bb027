"""Constants used throughout kts-runner.

This module defines enumerations for host platforms, session phases and
outcomes, plus the glyphs that prefix notifications sent to an output sink.
"""

import sys
from enum import Enum
from typing import Any


class StrEnum(str, Enum):
    """A string enumeration that combines str and Enum functionality.

    Members are strings and can be compared directly to string values.
    """

    def __new__(cls, value: str) -> "StrEnum":
        """Create a new StrEnum member."""
        if not isinstance(value, str):
            msg = f"StrEnum values must be strings, got {type(value).__name__}"
            raise TypeError(msg)

        obj = str.__new__(cls, value)
        obj._value_ = value
        return obj

    def __str__(self) -> str:
        """Return the string value."""
        return str(self.value)

    def __repr__(self) -> str:
        """Return a detailed representation."""
        return f"<{self.__class__.__name__}.{self.name}: '{self.value}'>"

    @classmethod
    def _missing_(cls, value: Any) -> "StrEnum":
        """Handle missing values during lookup (case-insensitive)."""
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.lower():
                    return member

        msg = f"{value!r} is not a valid {cls.__name__}"
        raise ValueError(msg)


class HostPlatform(StrEnum):
    r"""Host operating systems that get a dedicated shell profile loader.

    Values follow the prefixes reported by ``sys.platform``.
    """

    MACOS = "darwin"
    LINUX = "linux"
    WINDOWS = "win32"

    @classmethod
    def current(cls, platform: str | None = None) -> "HostPlatform | None":
        """Map a ``sys.platform`` string to a member, or None for anything else."""
        name = (platform or sys.platform).lower()
        for member in cls:
            if name.startswith(member.value):
                return member
        return None


class SessionPhase(StrEnum):
    """Lifecycle phases of an execution session."""

    CREATED = "created"
    FILE_WRITTEN = "file_written"
    SPAWNED = "spawned"
    STREAMING = "streaming"
    COMPLETED = "completed"


class SessionOutcome(StrEnum):
    """Completion status of an execution session."""

    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED_EXIT = "failed_exit"
    SPAWN_ERROR = "spawn_error"
    WAIT_ERROR = "wait_error"


SUCCESS_GLYPH = "✅"
FAILURE_GLYPH = "❌"
WARNING_GLYPH = "⚠️"

SENTINEL_PREFIX = "__KTS_"
SENTINEL_SUFFIX = "__"

DEFAULT_MACOS_SHELL = "/bin/zsh"
DEFAULT_LINUX_SHELL = "/bin/bash"
