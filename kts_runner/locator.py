"""Locate the external tool that runs submitted scripts."""

import logging
import os
import subprocess
from collections.abc import Mapping
from pathlib import Path

from kts_runner.core.config import ToolchainConfig
from kts_runner.exceptions import ToolNotFoundError


class ToolLocator:
    """Find the executable for a toolchain.

    The bare tool name wins whenever it can be started through PATH. Otherwise
    the configured candidate paths are checked in order and the first one that
    exists on disk is returned. Nothing is cached, so a PATH fixed after
    startup is picked up by the next lookup.
    """

    def __init__(
        self,
        config: ToolchainConfig | None = None,
        environment: Mapping[str, str] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the locator.

        Args:
            config (ToolchainConfig | None): Toolchain to look for.
            environment (Mapping[str, str] | None): Environment used for the PATH
                probe and for ``{home}`` expansion. Defaults to ``os.environ``
                read at lookup time.
            logger (logging.Logger | None): Logger to use.

        """
        self.config = config or ToolchainConfig()
        self.environment = environment
        self.logger = logger or logging.getLogger(__name__)

    def locate(self) -> str | None:
        """Return the tool location, or None if it cannot be found."""
        env = dict(os.environ if self.environment is None else self.environment)

        if self._probe_path(env):
            self.logger.debug("Found %s in PATH", self.config.tool_name)
            return self.config.tool_name

        for candidate in self.candidate_paths(env):
            if Path(candidate).exists():
                self.logger.debug("Found %s at: %s", self.config.tool_name, candidate)
                return candidate

        self.logger.debug("%s not found anywhere, current PATH: %r", self.config.tool_name, env.get("PATH"))
        return None

    def require(self) -> str:
        """Return the tool location or raise ToolNotFoundError."""
        location = self.locate()
        if location is None:
            raise ToolNotFoundError(self.config.tool_name)
        return location

    def candidate_paths(self, env: Mapping[str, str]) -> list[str]:
        """Expand the configured candidates, using an empty root when HOME is unset."""
        home = env.get("HOME", "")
        return [candidate.replace("{home}", home) for candidate in self.config.candidate_paths]

    def _probe_path(self, env: dict[str, str]) -> bool:
        """Check whether the bare tool name starts, whatever its exit code."""
        try:
            subprocess.run(  # noqa: S603
                [self.config.tool_name, self.config.version_flag],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                env=env,
                check=False,
            )
        except OSError:
            return False
        return True
