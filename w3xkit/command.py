"""Command interface, the built-in help and version commands, and map input resolution."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Optional

from w3xkit.resources import ToolkitError

APP_NAME = "w3x_toolkit"
VERSION = "0.1.0"

HelpPrinter = Callable[[], None]
SpecificHelpPrinter = Callable[[str], bool]


class CommandError(ToolkitError):
    """Raised when a command is given invalid arguments or cannot run."""


class Command(ABC):
    """A subcommand of the command-line interface.

    Subclasses set ``name`` (the word typed on the command line),
    ``description`` (shown in the help listing) and ``usage``.
    """

    name: str = ""
    description: str = ""
    usage: str = ""

    @abstractmethod
    def execute(self, args: Sequence[str]) -> None:
        """Run the command with the arguments that follow its name."""


def print_version() -> None:
    """Print the version line of the toolkit."""
    print(f"{APP_NAME} version {VERSION}")


def resolve_map_input_path(input_path: str) -> Path:
    """Return the absolute path of an existing map directory or packed map file."""
    path = Path(input_path)
    if not path.exists():
        raise FileNotFoundError(f"Input path not found: {input_path}")
    if not path.is_dir() and not path.is_file():
        raise CommandError(
            f"Input path is neither a file nor a directory: {input_path}"
        )
    try:
        return path.absolute()
    except OSError as exc:
        raise CommandError(f"Failed to resolve input path: {exc}") from exc


def resolve_map_input_directory(input_path: str) -> Path:
    """Return the absolute path of an existing unpacked map directory."""
    resolved = resolve_map_input_path(input_path)
    if not resolved.is_dir():
        raise CommandError(f"Input must be an unpacked map directory: {resolved}")
    return resolved


class HelpCommand(Command):
    """Shows help for the whole interface or for one command."""

    name = "help"
    description = "Show help for the CLI or a specific command"
    usage = "help [command]"

    def __init__(
        self,
        help_printer: Optional[HelpPrinter] = None,
        specific_help_printer: Optional[SpecificHelpPrinter] = None,
    ) -> None:
        self.help_printer = help_printer
        self.specific_help_printer = specific_help_printer

    def execute(self, args: Sequence[str]) -> None:
        if not args:
            if self.help_printer is not None:
                self.help_printer()
            return
        if len(args) > 1:
            raise CommandError(f"Too many arguments.\nUsage: {self.usage}")
        if self.specific_help_printer is None or not self.specific_help_printer(args[0]):
            raise CommandError(f"Unknown command '{args[0]}'.")


class VersionCommand(Command):
    """Prints the version information."""

    name = "version"
    description = "Show version information"
    usage = "version"

    def execute(self, args: Sequence[str]) -> None:
        if args:
            raise CommandError(
                f"This command does not accept arguments.\nUsage: {self.usage}"
            )
        print_version()