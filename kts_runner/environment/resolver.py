import logging
import os
import subprocess
from collections.abc import Mapping, MutableMapping

from kts_runner.data import ResolvedEnvironment
from kts_runner.exceptions import EnvironmentResolutionError

from .base import ShellProfileLoader
from .factory import ShellProfileLoaderFactory
from .parser import parse_sentinel_output


class EnvironmentResolver:
    r"""Recover PATH (and friends) from the user's login shell.

    Desktop launchers hand applications an environment that skips the user's
    shell profile, so tools installed through Homebrew, SDKMAN or similar are
    missing from PATH. The resolver runs the login shell once, reads the
    variables back through the sentinel protocol and applies every non-empty
    value to ``target``.

    Resolution never raises: if the shell cannot be run or read, the
    inherited environment is left exactly as it was.
    """

    def __init__(
        self,
        loader: ShellProfileLoader | None = None,
        environ: Mapping[str, str] | None = None,
        target: MutableMapping[str, str] | None = None,
        extra_variables: list[str] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            loader (ShellProfileLoader | None): Platform loader. Defaults to the
                loader for the running platform.
            environ (Mapping[str, str] | None): Environment read for ``SHELL``.
                Defaults to ``os.environ``.
            target (MutableMapping[str, str] | None): Environment updated with the
                resolved values. Defaults to ``os.environ``.
            extra_variables (list[str] | None): Variables queried in addition to
                the loader's own, such as a toolchain home variable.
            logger (logging.Logger | None): Logger to use.

        """
        self.logger = logger or logging.getLogger(__name__)
        self.loader = loader or ShellProfileLoaderFactory.for_current_platform(self.logger)
        self.variables = self.loader.variables
        if self.loader.is_enabled:
            for name in extra_variables or []:
                if name and name not in self.variables:
                    self.variables.append(name)
        self.environ = os.environ if environ is None else environ
        self.target = os.environ if target is None else target

    def resolve(self) -> ResolvedEnvironment:
        """Run the login shell and apply the recovered variables."""
        if not self.loader.is_enabled:
            self.logger.debug("No login shell resolution on %s", self.loader.platform)
            return ResolvedEnvironment()

        try:
            output = self._capture()
        except EnvironmentResolutionError as e:
            self.logger.warning("Keeping inherited environment: %s", e)
            return ResolvedEnvironment()

        resolved = ResolvedEnvironment(parse_sentinel_output(output, self.variables))
        for name, value in resolved.items():
            self.logger.debug("Setting %s: %s", name, value)
            self.target[name] = value

        return resolved

    def _capture(self) -> str:
        """Run the login shell and return its decoded standard output."""
        shell = self.loader.get_shell(self.environ)
        command = self.loader.get_command(shell, self.variables)

        try:
            result = subprocess.run(  # noqa: S603
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                check=False,
            )
        except (OSError, ValueError) as e:
            msg = f"Failed to run login shell {shell}: {e}"
            raise EnvironmentResolutionError(msg) from e

        return os.fsdecode(result.stdout)
