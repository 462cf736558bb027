import logging

from kts_runner.const import DEFAULT_MACOS_SHELL, HostPlatform

from .base import LoaderConfig, ShellProfileLoader


class MacOSProfileLoader(ShellProfileLoader):
    """Loader for macOS.

    Apps started from Finder or the Dock inherit a minimal launchd environment,
    and zsh only reads ``.zshrc`` for interactive shells. ``-i`` forces
    interactive mode even though stdout is a pipe, so the profile files that
    extend PATH are sourced.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        """Initialize the macOS loader."""
        super().__init__(logger)

        self.config = LoaderConfig(
            platform=HostPlatform.MACOS,
            default_shell=DEFAULT_MACOS_SHELL,
            shell_flags=["-l", "-i"],
            variables=["PATH"],
        )

    @property
    def is_enabled(self) -> bool:
        """MacOS always needs the login shell."""
        return True
