"""Bytecode chunks and their opcodes."""

from __future__ import annotations

from enum import IntEnum

from loxvm.value import Value


class OpCode(IntEnum):
    """Instruction set of the virtual machine."""

    CONSTANT = 0
    NIL = 1
    TRUE = 2
    FALSE = 3
    EQUAL = 4
    GREATER = 5
    LESS = 6
    NEGATE = 7
    RETURN = 8
    ADD = 9
    SUBTRACT = 10
    MULTIPLY = 11
    DIVIDE = 12
    NOT = 13


class Chunk:
    """A sequence of bytecode with source lines and a constant pool."""

    def __init__(self) -> None:
        self.code = bytearray()
        self.lines: list[int] = []
        self.constants: list[Value] = []

    def __len__(self) -> int:
        return len(self.code)

    def write(self, byte: int, line: int) -> None:
        """Append one byte emitted for source ``line``."""
        if not 0 <= byte <= 0xFF:
            raise ValueError(f"byte out of range: {byte}")
        self.code.append(byte)
        self.lines.append(line)

    def add_constant(self, value: Value) -> int:
        """Add ``value`` to the constant pool and return its index."""
        self.constants.append(value)
        return len(self.constants) - 1