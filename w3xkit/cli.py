"""Command-line application: dispatches to the registered commands."""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from typing import Optional

from w3xkit.command import (
    APP_NAME,
    VERSION,
    Command,
    CommandError,
    HelpCommand,
    VersionCommand,
    print_version,
)
from w3xkit.convert_commands import ConvertCommand, LniCommand
from w3xkit.inspect_commands import AnalyzeCommand, ExtractCommand
from w3xkit.resources import ToolkitError

logger = logging.getLogger(__name__)


class CliApp:
    """Parses the command line and runs the matching command."""

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        for command in (
            HelpCommand(self.print_help, self._print_command_help),
            VersionCommand(),
            ConvertCommand(),
            LniCommand(),
            ExtractCommand(),
            AnalyzeCommand(),
        ):
            self.register_command(command)

    def register_command(self, command: Command) -> None:
        """Add a command; raise if its name is already taken."""
        if command is None:
            raise CommandError("Cannot register a null command")
        if command.name in self._commands:
            raise CommandError(f"Command '{command.name}' is already registered")
        self._commands[command.name] = command

    def find_command(self, name: str) -> Optional[Command]:
        """Return the command called ``name``, or None."""
        return self._commands.get(name)

    @property
    def command_names(self) -> list[str]:
        """Names of the registered commands in registration order."""
        return list(self._commands)

    def _print_command_help(self, name: str) -> bool:
        command = self.find_command(name)
        if command is None:
            return False
        print(f"Usage: {APP_NAME} {command.usage}")
        print()
        print(f"  {command.description}")
        return True

    def print_help(self) -> None:
        """Print the top-level help listing every command."""
        width = max((len(name) for name in self._commands), default=0) + 4
        lines = [
            f"{APP_NAME} v{VERSION} - Warcraft III Map Toolchain",
            "",
            f"Usage: {APP_NAME} <command> [options]",
            "",
            "Commands:",
        ]
        lines.extend(
            f"  {name:<{width}}{command.description}"
            for name, command in self._commands.items()
        )
        lines.extend([
            "",
            "Global options:",
            "  --help, -h       Show this help message",
            "  --version, -v    Show version information",
            "",
            f"Use '{APP_NAME} <command> --help' for more information on a command.",
        ])
        print("\n".join(lines))

    def run(self, argv: Sequence[str]) -> int:
        """Run with the arguments after the program name; return an exit code."""
        args = list(argv)
        if not args:
            self.print_help()
            return 0

        first = args[0]
        if first in ("--help", "-h"):
            self.print_help()
            return 0
        if first in ("--version", "-v"):
            print_version()
            return 0

        command = self.find_command(first)
        if command is None:
            print(f"Error: Unknown command '{first}'.", file=sys.stderr)
            print(
                f"Run '{APP_NAME} --help' to see available commands.",
                file=sys.stderr,
            )
            return 1

        if len(args) >= 2 and args[1] in ("--help", "-h"):
            self._print_command_help(first)
            return 0

        try:
            command.execute(args[1:])
        except (ToolkitError, OSError) as exc:
            print(f"Error: {exc}", file=sys.stderr)
            logger.error("Command '%s' failed: %s", first, exc)
            return 1
        return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point of the command-line tool."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    if argv is None:
        argv = sys.argv[1:]
    try:
        return CliApp().run(argv)
    except Exception as exc:  # last-resort guard for the process exit code
        print(f"Fatal error: {exc}", file=sys.stderr)
        logger.critical("Unhandled exception: %s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())