import logging

from kts_runner.const import DEFAULT_LINUX_SHELL, HostPlatform

from .base import LoaderConfig, ShellProfileLoader


class LinuxProfileLoader(ShellProfileLoader):
    """Loader for Linux.

    A non-interactive login shell already sources the profile files, and
    skipping ``-i`` keeps interactive rc files from printing to the pipe.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        """Initialize the Linux loader."""
        super().__init__(logger)

        self.config = LoaderConfig(
            platform=HostPlatform.LINUX,
            default_shell=DEFAULT_LINUX_SHELL,
            shell_flags=["-l"],
            variables=["PATH"],
        )

    @property
    def is_enabled(self) -> bool:
        """Linux always needs the login shell."""
        return True
