"""Tests for kts_runner.core.config module."""

import pytest
from pydantic import ValidationError

from kts_runner.const import WARNING_GLYPH
from kts_runner.core.config import DEFAULT_CANDIDATE_PATHS, RunnerConfig, ToolchainConfig


class TestToolchainConfig:
    """Test ToolchainConfig defaults and validation."""

    def test_defaults(self) -> None:
        """Defaults describe the Kotlin script runner."""
        config = ToolchainConfig()
        assert config.tool_name == "kotlinc"
        assert config.version_flag == "-version"
        assert config.script_flag == "-script"
        assert config.script_suffix == ".kts"
        assert config.home_variable == "JAVA_HOME"
        assert config.candidate_paths == DEFAULT_CANDIDATE_PATHS
        assert config.candidate_paths[0] == "/opt/homebrew/bin/kotlinc"

    def test_candidate_paths_not_shared(self) -> None:
        """Each config owns its candidate list."""
        first = ToolchainConfig()
        first.candidate_paths.append("/custom/kotlinc")
        assert "/custom/kotlinc" not in ToolchainConfig().candidate_paths

    def test_install_hints(self) -> None:
        """Install hints cover macOS, Linux and SDKMAN."""
        hints = ToolchainConfig().install_hints
        assert hints["macOS"] == "brew install kotlin"
        assert hints["Linux"] == "sudo snap install kotlin --classic"
        assert "sdk install kotlin" in hints.values()

    @pytest.mark.parametrize("suffix", ["kts", ".", ""])
    def test_invalid_suffix(self, suffix: str) -> None:
        """Suffixes must look like file extensions."""
        with pytest.raises(ValidationError, match="script_suffix"):
            ToolchainConfig(script_suffix=suffix)

    def test_blank_tool_name(self) -> None:
        """Tool name cannot be blank."""
        with pytest.raises(ValidationError, match="tool_name cannot be empty"):
            ToolchainConfig(tool_name="  ")


class TestRunnerConfig:
    """Test RunnerConfig defaults."""

    def test_defaults(self) -> None:
        """Test default values."""
        config = RunnerConfig()
        assert config.toolchain == ToolchainConfig()
        assert config.verbose is False
        assert config.temp_dir is None
        assert config.stderr_prefix == f"{WARNING_GLYPH} "
        assert config.encoding == "utf-8"
        assert config.platform is None

    def test_nested_toolchain_from_dict(self) -> None:
        """Nested toolchain settings can be given as a plain dict."""
        config = RunnerConfig.model_validate({"toolchain": {"tool_name": "kscript", "script_flag": "--run"}})
        assert config.toolchain.tool_name == "kscript"
        assert config.toolchain.script_flag == "--run"

    @pytest.mark.parametrize("encoding", ["utf-8", "UTF8", "latin-1"])
    def test_known_encodings(self, encoding: str) -> None:
        """Any codec Python knows is accepted."""
        assert RunnerConfig(encoding=encoding).encoding == encoding

    def test_unknown_encoding(self) -> None:
        """Unknown codecs are rejected when the config is built."""
        with pytest.raises(ValidationError, match="Unknown encoding: 'no-such-codec'"):
            RunnerConfig(encoding="no-such-codec")

    def test_platform_normalized(self) -> None:
        """Platform keys are matched case-insensitively."""
        assert RunnerConfig(platform="Darwin").platform == "darwin"

    def test_unsupported_platform(self) -> None:
        """A platform without a registered loader is rejected."""
        with pytest.raises(ValidationError, match="Unsupported platform 'plan9'"):
            RunnerConfig(platform="plan9")
