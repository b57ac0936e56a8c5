"""Command-line option parsing for the cryptoguard tool."""

from __future__ import annotations

import argparse
import enum
import sys
from collections.abc import Sequence
from typing import NoReturn


class Command(enum.Enum):
    """Operation requested on the command line."""

    ENCRYPT = enum.auto()
    DECRYPT = enum.auto()
    CHECKSUM = enum.auto()
    ERROR = enum.auto()


class OptionsError(Exception):
    """Raised when the command line is incomplete or inconsistent."""


_COMMANDS = {
    "encrypt": Command.ENCRYPT,
    "decrypt": Command.DECRYPT,
    "checksum": Command.CHECKSUM,
}

# (short flag, long name, takes a value, description)
_OPTIONS = (
    ("h", "help", False, "Help"),
    ("c", "command", True, "command: encrypt, decrypt, checksum"),
    ("i", "input", True, "path to input file"),
    ("o", "output", True, "path to output string"),
    ("p", "password", True, "password for encryption/decryption"),
)

_REQUIRED = ("command", "input")


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise OptionsError(message)


def _build_parser() -> _Parser:
    parser = _Parser(add_help=False, allow_abbrev=False)
    for short, name, takes_value, description in _OPTIONS:
        flags = (f"-{short}", f"--{name}")
        if takes_value:
            parser.add_argument(*flags, dest=name, default=None, help=description)
        else:
            parser.add_argument(*flags, dest=name, action="store_true", help=description)
    return parser


class ProgramOptions:
    """Parsed command-line options: command, input and output paths, password."""

    def __init__(self) -> None:
        self.command = Command.ERROR
        self.input_file = ""
        self.output_file = ""
        self.password = ""
        self._parser = _build_parser()

    def help_text(self) -> str:
        """Return the description of the allowed options."""
        entries = []
        for short, name, takes_value, description in _OPTIONS:
            flag = f"-{short} [ --{name} ]" + (" arg" if takes_value else "")
            entries.append((flag, description))
        width = max(len(flag) for flag, _ in entries) + 1
        lines = ["Allowed options:"]
        lines.extend(f"  {flag.ljust(width)}{description}" for flag, description in entries)
        return "\n".join(lines) + "\n"

    def parse(self, argv: Sequence[str] | None = None) -> None:
        """Parse arguments (without the program name) and validate them."""
        args = list(sys.argv[1:] if argv is None else argv)
        namespace = vars(self._parser.parse_args(args))

        for name in _REQUIRED:
            if namespace[name] is None:
                raise OptionsError(f"the option '--{name}' is required but missing")

        if namespace["help"]:
            print(self.help_text())
            return

        try:
            self.command = _COMMANDS[namespace["command"]]
        except KeyError:
            raise OptionsError("Command is invalid.") from None

        self.input_file = namespace["input"]
        if namespace["output"] is not None:
            self.output_file = namespace["output"]

        if self.input_file == self.output_file:
            raise OptionsError("Input file and output file must be different!")

        if namespace["password"] is not None:
            self.password = namespace["password"]

        if self.command in (Command.ENCRYPT, Command.DECRYPT):
            verb = self.command.name.lower()
            if not self.output_file:
                raise OptionsError(f"Output file is required for {verb} command!")
            if not self.password:
                raise OptionsError(f"Password is required for {verb} command!")
        elif self.command is Command.CHECKSUM:
            if self.output_file or self.password:
                raise OptionsError("Unsupported parameters for checksum command.!")
        else:
            raise OptionsError("Command is invalid.")