"""Command-line entry point: ``python -m kts_runner [FILE]``."""

import argparse
import logging
import sys

from kts_runner.core.config import RunnerConfig, ToolchainConfig
from kts_runner.environment import ShellProfileLoaderFactory
from kts_runner.runner import bootstrap
from kts_runner.sink import StreamSink


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="kts-runner",
        description="Run a Kotlin script through kotlinc and stream its output.",
    )
    parser.add_argument("file", nargs="?", help="Script to run. Reads standard input when omitted.")
    parser.add_argument("--tool", default=None, help="Executable to use instead of kotlinc.")
    parser.add_argument(
        "--no-resolve",
        action="store_true",
        help="Skip reading PATH from the login shell.",
    )
    parser.add_argument(
        "--platform",
        choices=ShellProfileLoaderFactory.get_supported_platforms(),
        default=None,
        help="Login shell flavour used to read PATH. Defaults to the running platform.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr.")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the CLI and return the process exit code."""
    args = build_parser().parse_args(argv)

    if args.file:
        with open(args.file, encoding="utf-8") as handle:
            source = handle.read()
    else:
        source = sys.stdin.read()

    toolchain = ToolchainConfig(tool_name=args.tool) if args.tool else ToolchainConfig()
    config = RunnerConfig(toolchain=toolchain, platform=args.platform)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(asctime)s] [%(name)s] [%(levelname)s] %(message)s",
    )

    runner = bootstrap(config, sink=StreamSink(sys.stdout), resolve=not args.no_resolve)
    status = runner.run(source.rstrip("\n"))
    return 0 if status.success else 1


if __name__ == "__main__":
    sys.exit(main())
