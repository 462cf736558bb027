import logging

from kts_runner.const import HostPlatform

from .base import LoaderConfig, ShellProfileLoader


class PassthroughProfileLoader(ShellProfileLoader):
    """Loader for platforms where the inherited environment is used as-is."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        """Initialize the passthrough loader."""
        super().__init__(logger)

        self.config = LoaderConfig(
            platform=HostPlatform.WINDOWS,
            default_shell="",
            shell_flags=[],
            variables=[],
        )

    @property
    def is_enabled(self) -> bool:
        """Never run a shell."""
        return False
