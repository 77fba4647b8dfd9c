"""Command-line entry point: a REPL or a script runner."""

from __future__ import annotations

import os
import sys
from typing import Sequence, TextIO

from loxvm.vm import VM, InterpretResult

_LINE_LIMIT = 1023

EXIT_USAGE = 64
EXIT_COMPILE_ERROR = 65
EXIT_RUNTIME_ERROR = 70
EXIT_IO_ERROR = 74


def repl(vm: VM, stdin: TextIO) -> None:
    """Read and run one line at a time until end of input."""
    while True:
        vm.out.write("> ")
        vm.out.flush()
        line = stdin.readline(_LINE_LIMIT)
        if not line:
            vm.out.write("\n")
            break
        vm.interpret(line)


def run_file(vm: VM, path: str | os.PathLike) -> int:
    """Run the script at ``path`` and return the process exit status."""
    try:
        with open(path, "rb") as handle:
            data = handle.read()
    except OSError:
        vm.err.write(f'Could not open file "{os.fspath(path)}".\n')
        return EXIT_IO_ERROR
    try:
        source = data.decode("utf-8")
    except UnicodeDecodeError:
        vm.err.write(f'Could not read file "{os.fspath(path)}".\n')
        return EXIT_IO_ERROR

    result = vm.interpret(source)
    if result is InterpretResult.COMPILE_ERROR:
        return EXIT_COMPILE_ERROR
    if result is InterpretResult.RUNTIME_ERROR:
        return EXIT_RUNTIME_ERROR
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Start the REPL with no arguments, or run the one script given."""
    args = list(sys.argv[1:] if argv is None else argv)
    vm = VM()
    if not args:
        repl(vm, sys.stdin)
        return 0
    if len(args) == 1:
        return run_file(vm, args[0])
    sys.stderr.write("Usage: loxvm [path]\n")
    return EXIT_USAGE


if __name__ == "__main__":
    sys.exit(main())