"""Single-pass Pratt compiler from Lox expressions to bytecode."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Optional

from loxvm.chunk import Chunk, OpCode
from loxvm.scanner import Scanner, Token, TokenType
from loxvm.value import Interner, Value

_MAX_CONSTANT_INDEX = 0xFF


class CompileError(Exception):
    """Raised when source text fails to compile; holds every reported error."""

    def __init__(self, messages: list[str]) -> None:
        self.messages = list(messages)
        super().__init__("\n".join(self.messages))


class Precedence(IntEnum):
    """Binding strength of operators, lowest first."""

    NONE = 0
    ASSIGNMENT = 1
    OR = 2
    AND = 3
    EQUALITY = 4
    COMPARISON = 5
    TERM = 6
    FACTOR = 7
    UNARY = 8
    CALL = 9
    PRIMARY = 10


_BINARY_OPS: dict[TokenType, tuple[OpCode, ...]] = {
    TokenType.BANG_EQUAL: (OpCode.EQUAL, OpCode.NOT),
    TokenType.EQUAL_EQUAL: (OpCode.EQUAL,),
    TokenType.GREATER: (OpCode.GREATER,),
    TokenType.GREATER_EQUAL: (OpCode.LESS, OpCode.NOT),
    TokenType.LESS: (OpCode.LESS,),
    TokenType.LESS_EQUAL: (OpCode.GREATER, OpCode.NOT),
    TokenType.PLUS: (OpCode.ADD,),
    TokenType.MINUS: (OpCode.SUBTRACT,),
    TokenType.STAR: (OpCode.MULTIPLY,),
    TokenType.SLASH: (OpCode.DIVIDE,),
}

_LITERAL_OPS = {
    TokenType.FALSE: OpCode.FALSE,
    TokenType.NIL: OpCode.NIL,
    TokenType.TRUE: OpCode.TRUE,
}

_UNARY_OPS = {
    TokenType.BANG: OpCode.NOT,
    TokenType.MINUS: OpCode.NEGATE,
}


class Compiler:
    """Compiles one expression of source text into a chunk."""

    def __init__(self, source: str, interner: Interner) -> None:
        self._scanner = Scanner(source)
        self._interner = interner
        self._chunk = Chunk()
        self._current = Token(TokenType.EOF, "", 1)
        self._previous = self._current
        self._errors: list[str] = []
        self._panic = False

    def compile(self) -> Chunk:
        """Compile the source; raise CompileError if any error was reported."""
        self._advance()
        self._expression()
        self._consume(TokenType.EOF, "Expected end of expression.")
        self._emit(OpCode.RETURN)
        if self._errors:
            raise CompileError(self._errors)
        return self._chunk

    # error reporting

    def _error_at(self, token: Token, message: str) -> None:
        if self._panic:
            return
        self._panic = True
        if token.type is TokenType.EOF:
            where = " at end"
        elif token.type is TokenType.ERROR:
            where = ""
        else:
            where = f" at '{token.lexeme}'"
        self._errors.append(f"[line {token.line}] Error{where}: {message}")

    def _error(self, message: str) -> None:
        self._error_at(self._previous, message)

    def _error_at_current(self, message: str) -> None:
        self._error_at(self._current, message)

    # token handling

    def _advance(self) -> None:
        self._previous = self._current
        while True:
            self._current = self._scanner.scan_token()
            if self._current.type is not TokenType.ERROR:
                break
            self._error_at_current(self._current.lexeme)

    def _consume(self, token_type: TokenType, message: str) -> None:
        if self._current.type is token_type:
            self._advance()
        else:
            self._error_at_current(message)

    # code emission

    def _emit(self, *codes: int) -> None:
        for byte in codes:
            self._chunk.write(byte, self._previous.line)

    def _make_constant(self, value: Value) -> int:
        index = self._chunk.add_constant(value)
        if index > _MAX_CONSTANT_INDEX:
            self._error("Too many constants in one chunk.")
            return 0
        return index

    def _emit_constant(self, value: Value) -> None:
        self._emit(OpCode.CONSTANT, self._make_constant(value))

    # parse functions

    def _binary(self) -> None:
        operator = self._previous.type
        rule = _rule(operator)
        self._parse_precedence(Precedence(rule.precedence + 1))
        self._emit(*_BINARY_OPS.get(operator, ()))

    def _literal(self) -> None:
        op = _LITERAL_OPS.get(self._previous.type)
        if op is not None:
            self._emit(op)

    def _grouping(self) -> None:
        self._expression()
        self._consume(TokenType.RIGHT_PAREN, "Expected ')' after expression.")

    def _number(self) -> None:
        self._emit_constant(float(self._previous.lexeme))

    def _string(self) -> None:
        self._emit_constant(self._interner.intern(self._previous.lexeme[1:-1]))

    def _unary(self) -> None:
        operator = self._previous.type
        self._parse_precedence(Precedence.UNARY)
        op = _UNARY_OPS.get(operator)
        if op is not None:
            self._emit(op)

    def _parse_precedence(self, precedence: Precedence) -> None:
        self._advance()
        prefix = _rule(self._previous.type).prefix
        if prefix is None:
            self._error("Expected expression.")
            return
        prefix(self)

        while precedence < _rule(self._current.type).precedence:
            self._advance()
            infix = _rule(self._previous.type).infix
            if infix is not None:
                infix(self)

    def _expression(self) -> None:
        self._parse_precedence(Precedence.ASSIGNMENT)


_ParseFn = Optional[Callable[[Compiler], None]]


@dataclass(frozen=True)
class _ParseRule:
    prefix: _ParseFn
    infix: _ParseFn
    precedence: Precedence


_NO_RULE = _ParseRule(None, None, Precedence.NONE)

_RULES: dict[TokenType, _ParseRule] = {
    TokenType.LEFT_PAREN: _ParseRule(Compiler._grouping, None, Precedence.NONE),
    TokenType.MINUS: _ParseRule(Compiler._unary, Compiler._binary, Precedence.TERM),
    TokenType.PLUS: _ParseRule(None, Compiler._binary, Precedence.TERM),
    TokenType.SLASH: _ParseRule(None, Compiler._binary, Precedence.FACTOR),
    TokenType.STAR: _ParseRule(None, Compiler._binary, Precedence.FACTOR),
    TokenType.BANG: _ParseRule(Compiler._unary, None, Precedence.NONE),
    TokenType.BANG_EQUAL: _ParseRule(None, Compiler._binary, Precedence.EQUALITY),
    TokenType.EQUAL_EQUAL: _ParseRule(None, Compiler._binary, Precedence.EQUALITY),
    TokenType.GREATER: _ParseRule(None, Compiler._binary, Precedence.COMPARISON),
    TokenType.GREATER_EQUAL: _ParseRule(None, Compiler._binary, Precedence.COMPARISON),
    TokenType.LESS: _ParseRule(None, Compiler._binary, Precedence.COMPARISON),
    TokenType.LESS_EQUAL: _ParseRule(None, Compiler._binary, Precedence.COMPARISON),
    TokenType.STRING: _ParseRule(Compiler._string, None, Precedence.NONE),
    TokenType.NUMBER: _ParseRule(Compiler._number, None, Precedence.NONE),
    TokenType.FALSE: _ParseRule(Compiler._literal, None, Precedence.NONE),
    TokenType.NIL: _ParseRule(Compiler._literal, None, Precedence.NONE),
    TokenType.TRUE: _ParseRule(Compiler._literal, None, Precedence.NONE),
}


def _rule(token_type: TokenType) -> _ParseRule:
    return _RULES.get(token_type, _NO_RULE)


def compile_source(source: str, interner: Interner) -> Chunk:
    """Compile ``source`` into a new chunk, interning strings in ``interner``."""
    return Compiler(source, interner).compile()