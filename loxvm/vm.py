"""Stack-based virtual machine that runs compiled Lox chunks."""

from __future__ import annotations

import math
import operator
import sys
from enum import Enum
from typing import Callable, TextIO

from loxvm.chunk import Chunk, OpCode
from loxvm.compiler import CompileError, compile_source
from loxvm.debug import disassemble_chunk, disassemble_instruction
from loxvm.value import Interner, LoxString, Value, format_value, is_falsey, values_equal

STACK_MAX = 256


class InterpretResult(Enum):
    OK = 0
    COMPILE_ERROR = 1
    RUNTIME_ERROR = 2


class LoxRuntimeError(Exception):
    """An error raised while executing bytecode."""

    def __init__(self, message: str, line: int) -> None:
        super().__init__(message)
        self.message = message
        self.line = line


def _is_number(value: Value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _divide(a: float, b: float) -> float:
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


_NUMBER_OPS: dict[OpCode, Callable[[float, float], Value]] = {
    OpCode.GREATER: operator.gt,
    OpCode.LESS: operator.lt,
    OpCode.SUBTRACT: operator.sub,
    OpCode.MULTIPLY: operator.mul,
    OpCode.DIVIDE: _divide,
}


class VM:
    """Runs Lox source, writing results to ``out`` and errors to ``err``."""

    def __init__(
        self,
        out: TextIO | None = None,
        err: TextIO | None = None,
        trace: bool = False,
    ) -> None:
        self.out = out if out is not None else sys.stdout
        self.err = err if err is not None else sys.stderr
        self.trace = trace
        self.interner = Interner()
        self._stack: list[Value] = []

    def push(self, value: Value) -> None:
        if len(self._stack) >= STACK_MAX:
            raise OverflowError("Stack overflow.")
        self._stack.append(value)

    def pop(self) -> Value:
        if not self._stack:
            raise IndexError("Stack underflow.")
        return self._stack.pop()

    def _peek(self, distance: int) -> Value:
        return self._stack[-1 - distance]

    def interpret(self, source: str) -> InterpretResult:
        """Compile and run ``source``, reporting the outcome."""
        try:
            chunk = compile_source(source, self.interner)
        except CompileError as error:
            for message in error.messages:
                self.err.write(message + "\n")
            return InterpretResult.COMPILE_ERROR

        if self.trace:
            self.out.write(disassemble_chunk(chunk, "code"))

        try:
            self._run(chunk)
        except LoxRuntimeError as error:
            self.err.write(f"{error.message}\n[line {error.line}] in script\n")
            self._stack.clear()
            return InterpretResult.RUNTIME_ERROR
        return InterpretResult.OK

    def _trace(self, chunk: Chunk, offset: int) -> None:
        slots = "".join(f"[ {format_value(value)} ]" for value in self._stack)
        text, _ = disassemble_instruction(chunk, offset)
        self.out.write(f"          {slots}\n{text}\n")

    def _run(self, chunk: Chunk) -> None:
        code = chunk.code
        ip = 0

        def fail(message: str) -> LoxRuntimeError:
            return LoxRuntimeError(message, chunk.lines[ip - 1])

        while True:
            if self.trace:
                self._trace(chunk, ip)

            instruction = code[ip]
            ip += 1

            if instruction == OpCode.CONSTANT:
                self.push(chunk.constants[code[ip]])
                ip += 1
            elif instruction == OpCode.NIL:
                self.push(None)
            elif instruction == OpCode.TRUE:
                self.push(True)
            elif instruction == OpCode.FALSE:
                self.push(False)
            elif instruction == OpCode.EQUAL:
                b = self.pop()
                a = self.pop()
                self.push(values_equal(a, b))
            elif instruction in _NUMBER_OPS:
                if not (_is_number(self._peek(0)) and _is_number(self._peek(1))):
                    raise fail("Operands must be numbers.")
                b = self.pop()
                a = self.pop()
                self.push(_NUMBER_OPS[OpCode(instruction)](a, b))
            elif instruction == OpCode.NEGATE:
                if not _is_number(self._peek(0)):
                    raise fail("Operand must be a number.")
                self.push(-self.pop())
            elif instruction == OpCode.ADD:
                right, left = self._peek(0), self._peek(1)
                if isinstance(right, LoxString) and isinstance(left, LoxString):
                    self.pop()
                    self.pop()
                    self.push(self.interner.intern(left.chars + right.chars))
                elif _is_number(right) and _is_number(left):
                    b = self.pop()
                    a = self.pop()
                    self.push(a + b)
                else:
                    raise fail("Operands must be two numbers or two strings.")
            elif instruction == OpCode.NOT:
                self.push(is_falsey(self.pop()))
            elif instruction == OpCode.RETURN:
                self.out.write(format_value(self.pop()) + "\n")
                return