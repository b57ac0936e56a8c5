"""Command-line entry point: encrypt, decrypt or checksum a file."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from contextlib import ExitStack
from typing import BinaryIO

from cryptoguard.context import CryptoGuardCtx, CryptoGuardError
from cryptoguard.options import Command, OptionsError, ProgramOptions


def _open(stack: ExitStack, path: str, mode: str) -> BinaryIO | None:
    try:
        return stack.enter_context(open(path, mode))
    except OSError:
        return None


def _run(options: ProgramOptions) -> None:
    ctx = CryptoGuardCtx()
    with ExitStack() as stack:
        if options.command in (Command.ENCRYPT, Command.DECRYPT):
            source = _open(stack, options.input_file, "rb")
            target = _open(stack, options.output_file, "wb")
            if source is None:
                raise CryptoGuardError("Cannot open input file")
            if target is None:
                raise CryptoGuardError("Cannot open output file")
            if options.command is Command.ENCRYPT:
                ctx.encrypt_file(source, target, options.password)
                print("File encoded successfully")
            else:
                ctx.decrypt_file(source, target, options.password)
                print("File decoded successfully")
        elif options.command is Command.CHECKSUM:
            source = _open(stack, options.input_file, "rb")
            if source is None:
                raise CryptoGuardError("Cannot open input file")
            print(f"Checksum: {ctx.calculate_checksum(source)}")
        else:
            raise CryptoGuardError("Unsupported command")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the tool; return 0 on success and 1 on any error."""
    try:
        options = ProgramOptions()
        options.parse(argv)
        _run(options)
    except (OptionsError, CryptoGuardError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())