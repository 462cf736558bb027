"""Login shell environment resolution for kts-runner."""

from .base import LoaderConfig, ShellProfileLoader
from .factory import ShellProfileLoaderFactory
from .linux_loader import LinuxProfileLoader
from .macos_loader import MacOSProfileLoader
from .parser import build_echo_command, marker_for, parse_sentinel_output
from .passthrough_loader import PassthroughProfileLoader
from .resolver import EnvironmentResolver

__all__ = [
    "EnvironmentResolver",
    "LinuxProfileLoader",
    "LoaderConfig",
    "MacOSProfileLoader",
    "PassthroughProfileLoader",
    "ShellProfileLoader",
    "ShellProfileLoaderFactory",
    "build_echo_command",
    "marker_for",
    "parse_sentinel_output",
]
