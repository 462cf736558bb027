import codecs

from pydantic import BaseModel, Field, field_validator

from kts_runner.const import WARNING_GLYPH
from kts_runner.environment.factory import ShellProfileLoaderFactory

DEFAULT_CANDIDATE_PATHS = [
    # Homebrew (Apple Silicon)
    "/opt/homebrew/bin/kotlinc",
    # Homebrew (Intel)
    "/usr/local/bin/kotlinc",
    # SDKMAN
    "{home}/.sdkman/candidates/kotlin/current/bin/kotlinc",
    # Manual install
    "/usr/bin/kotlinc",
    # Snap
    "/snap/bin/kotlinc",
    "{home}/.local/share/JetBrains/Toolbox/scripts/kotlinc",
]

DEFAULT_INSTALL_HINTS = {
    "macOS": "brew install kotlin",
    "Linux": "sudo snap install kotlin --classic",
    "Or via SDKMAN": "sdk install kotlin",
}


class ToolchainConfig(BaseModel):
    """Configuration of the external tool that runs submitted scripts."""

    tool_name: str = Field(default="kotlinc", description="Executable name looked up on PATH.")
    display_name: str = Field(default="Kotlin", description="Human readable toolchain name used in diagnostics.")
    version_flag: str = Field(
        default="-version",
        description="Harmless flag used to probe whether the bare tool name can be started.",
    )
    script_flag: str = Field(default="-script", description="Flag telling the tool to run a file as a script.")
    script_suffix: str = Field(default=".kts", description="Suffix of the transient script file.")
    candidate_paths: list[str] = Field(
        default_factory=lambda: list(DEFAULT_CANDIDATE_PATHS),
        description="Install locations checked in priority order when the tool is not on PATH. "
        "'{home}' expands to $HOME, or to an empty string when HOME is unset.",
    )
    install_hints: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_INSTALL_HINTS),
        description="Platform label to install command, listed when the tool cannot be found.",
    )
    home_variable: str | None = Field(
        default="JAVA_HOME",
        description="Toolchain home variable recovered from the login shell along with PATH.",
    )

    @field_validator("script_suffix")
    @classmethod
    def validate_script_suffix(cls, v: str) -> str:
        """Validate that the suffix is a file extension."""
        if not v.startswith(".") or len(v) < 2:
            msg = f"script_suffix must look like '.ext', got {v!r}"
            raise ValueError(msg)
        return v

    @field_validator("tool_name")
    @classmethod
    def validate_tool_name(cls, v: str) -> str:
        """Validate that the tool name is not blank."""
        if not v.strip():
            msg = "tool_name cannot be empty"
            raise ValueError(msg)
        return v


class RunnerConfig(BaseModel):
    """Configuration for a script runner."""

    toolchain: ToolchainConfig = Field(default_factory=ToolchainConfig)

    # Behaviour settings
    verbose: bool = Field(default=False, description="Whether to print verbose output.")
    temp_dir: str | None = Field(
        default=None,
        description="Directory for transient script files. If None, the system temp directory is used.",
    )
    stderr_prefix: str = Field(
        default=f"{WARNING_GLYPH} ",
        description="Marker prepended to every standard-error line forwarded to the sink.",
    )
    encoding: str = Field(default="utf-8", description="Encoding used to write scripts and decode output lines.")
    platform: str | None = Field(
        default=None,
        description="Platform whose login shell loader resolves the environment. If None, the running platform.",
    )

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Validate that the encoding names a known codec."""
        try:
            codecs.lookup(v)
        except LookupError as e:
            msg = f"Unknown encoding: {v!r}"
            raise ValueError(msg) from e
        return v

    @field_validator("platform")
    @classmethod
    def validate_platform(cls, v: str | None) -> str | None:
        """Validate that a loader is registered for the platform."""
        if v is None:
            return v
        supported = ShellProfileLoaderFactory.get_supported_platforms()
        if v.lower() not in supported:
            msg = f"Unsupported platform {v!r}, expected one of {', '.join(supported)}"
            raise ValueError(msg)
        return v.lower()
