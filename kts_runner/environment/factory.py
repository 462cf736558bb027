import logging
from typing import Any, ClassVar

from kts_runner.const import HostPlatform
from kts_runner.exceptions import UnsupportedPlatformError

from .base import ShellProfileLoader
from .linux_loader import LinuxProfileLoader
from .macos_loader import MacOSProfileLoader
from .passthrough_loader import PassthroughProfileLoader


class ShellProfileLoaderFactory:
    """Factory for creating platform-specific shell profile loaders."""

    _loaders: ClassVar[dict[str, Any]] = {
        str(HostPlatform.MACOS): MacOSProfileLoader,
        str(HostPlatform.LINUX): LinuxProfileLoader,
        str(HostPlatform.WINDOWS): PassthroughProfileLoader,
    }

    @classmethod
    def create_loader(cls, platform: str, logger: logging.Logger | None = None) -> ShellProfileLoader:
        """Create loader for specified platform."""
        if platform.lower() not in cls._loaders:
            raise UnsupportedPlatformError(platform)

        loader_class = cls._loaders[platform.lower()]
        if not issubclass(loader_class, ShellProfileLoader):
            msg = f"Loader class {loader_class} is not a subclass of ShellProfileLoader"
            raise TypeError(msg)

        return loader_class(logger=logger)  # type: ignore[no-any-return]

    @classmethod
    def for_current_platform(cls, logger: logging.Logger | None = None) -> ShellProfileLoader:
        """Create the loader for the running interpreter's platform.

        Platforms without a registered loader get the passthrough loader.
        """
        platform = HostPlatform.current()
        if platform is None:
            return PassthroughProfileLoader(logger=logger)
        return cls.create_loader(platform, logger)

    @classmethod
    def get_supported_platforms(cls) -> list[str]:
        """Get list of supported platforms."""
        return list(cls._loaders.keys())

    @classmethod
    def register_loader(cls, platform: str, loader_class: type[ShellProfileLoader]) -> None:
        """Register new platform loader."""
        cls._loaders[platform.lower()] = loader_class
