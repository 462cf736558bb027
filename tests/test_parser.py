"""Tests for the sentinel line protocol."""

import pytest

from kts_runner.environment.parser import build_echo_command, marker_for, parse_sentinel_output


class TestMarkers:
    """Test marker construction."""

    def test_marker_format(self) -> None:
        """Markers wrap the upper-cased name."""
        assert marker_for("PATH") == "__KTS_PATH__"
        assert marker_for("java_home") == "__KTS_JAVA_HOME__"

    @pytest.mark.parametrize("name", ["", "1PATH", "PATH; rm -rf /", "A-B"])
    def test_invalid_variable_names(self, name: str) -> None:
        """Names that are not shell variables are rejected."""
        with pytest.raises(ValueError, match="Invalid environment variable name"):
            marker_for(name)

    def test_echo_command(self) -> None:
        """One echo per variable, chained with &&."""
        command = build_echo_command(["PATH", "JAVA_HOME"])
        assert command == 'echo "__KTS_PATH__$PATH" && echo "__KTS_JAVA_HOME__$JAVA_HOME"'


class TestParseSentinelOutput:
    """Test parsing shell output."""

    def test_parses_values(self) -> None:
        """Values follow their markers directly."""
        output = "__KTS_PATH__/opt/homebrew/bin:/usr/bin\n__KTS_JAVA_HOME__/Library/Java/Home\n"
        values = parse_sentinel_output(output, ["PATH", "JAVA_HOME"])
        assert values == {"PATH": "/opt/homebrew/bin:/usr/bin", "JAVA_HOME": "/Library/Java/Home"}

    def test_ignores_noise(self) -> None:
        """Banner and prompt lines without a marker are skipped."""
        output = "Last login: Mon Oct 19\nWelcome!\n__KTS_PATH__/usr/bin\nbye\n"
        assert parse_sentinel_output(output, ["PATH"]) == {"PATH": "/usr/bin"}

    def test_marker_must_start_the_line(self) -> None:
        """A marker in the middle of a line is not a value."""
        output = "echo __KTS_PATH__/nope\n"
        assert parse_sentinel_output(output, ["PATH"]) == {}

    def test_empty_value_is_kept(self) -> None:
        """An empty value is reported as such."""
        assert parse_sentinel_output("__KTS_JAVA_HOME__\n", ["JAVA_HOME"]) == {"JAVA_HOME": ""}

    def test_missing_marker(self) -> None:
        """Variables without a line are absent."""
        assert parse_sentinel_output("__KTS_PATH__/bin\n", ["PATH", "JAVA_HOME"]) == {"PATH": "/bin"}

    def test_duplicate_marker_last_wins(self) -> None:
        """The last line for a marker wins."""
        output = "__KTS_PATH__/first\n__KTS_PATH__/second\n"
        assert parse_sentinel_output(output, ["PATH"]) == {"PATH": "/second"}

    def test_crlf_line_endings(self) -> None:
        """Carriage returns are not part of the value."""
        assert parse_sentinel_output("__KTS_PATH__/usr/bin\r\n", ["PATH"]) == {"PATH": "/usr/bin"}

    def test_value_whitespace_preserved(self) -> None:
        """Only the marker is stripped, the rest is taken verbatim."""
        output = "__KTS_PATH__ /with leading space\n"
        assert parse_sentinel_output(output, ["PATH"]) == {"PATH": " /with leading space"}

    def test_similar_names_do_not_collide(self) -> None:
        """PATH and PATH_EXT markers are told apart."""
        output = "__KTS_PATH_EXT__.kts\n__KTS_PATH__/bin\n"
        assert parse_sentinel_output(output, ["PATH", "PATH_EXT"]) == {"PATH": "/bin", "PATH_EXT": ".kts"}

    def test_longer_marker_claims_its_line(self) -> None:
        """A marker that prefixes another does not steal the longer marker's line."""
        output = "__KTS_PATH__/bin\n__KTS_PATH__X__/x\n"
        assert parse_sentinel_output(output, ["PATH", "PATH__X"]) == {"PATH": "/bin", "PATH__X": "/x"}
