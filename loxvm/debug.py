"""Human-readable listings of bytecode chunks."""

from __future__ import annotations

from loxvm.chunk import Chunk, OpCode
from loxvm.value import format_value


def disassemble_instruction(chunk: Chunk, offset: int) -> tuple[str, int]:
    """Describe the instruction at ``offset``; return the text and the next offset."""
    line = chunk.lines[offset]
    if offset > 0 and line == chunk.lines[offset - 1]:
        prefix = f"{offset:04d}    | "
    else:
        prefix = f"{offset:04d} {line:4d} "

    byte = chunk.code[offset]
    try:
        op = OpCode(byte)
    except ValueError:
        return f"{prefix}Unknown opcode {byte}", offset + 1

    name = f"OP_{op.name}"
    if op is OpCode.CONSTANT:
        index = chunk.code[offset + 1]
        constant = format_value(chunk.constants[index])
        return f"{prefix}{name:<16} {index:4d} '{constant}'", offset + 2
    return prefix + name, offset + 1


def disassemble_chunk(chunk: Chunk, name: str) -> str:
    """Return a listing of every instruction in ``chunk`` under a header."""
    lines = [f"== {name} =="]
    offset = 0
    while offset < len(chunk):
        text, offset = disassemble_instruction(chunk, offset)
        lines.append(text)
    return "\n".join(lines) + "\n"