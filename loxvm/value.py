"""Lox runtime values, strings and string interning."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from loxvm.table import Table

_FNV_OFFSET = 2166136261
_FNV_PRIME = 16777619
_MASK32 = 0xFFFFFFFF


@dataclass(frozen=True, eq=False)
class LoxString:
    """A heap string; equal contents share one interned instance."""

    chars: str
    hash: int

    def __str__(self) -> str:
        return self.chars


Value = Union[None, bool, float, LoxString]


def hash_string(chars: str) -> int:
    """Return the 32-bit FNV-1a hash of the UTF-8 bytes of ``chars``."""
    hash_value = _FNV_OFFSET
    for byte in chars.encode("utf-8"):
        hash_value ^= byte
        hash_value = (hash_value * _FNV_PRIME) & _MASK32
    return hash_value


class Interner:
    """Keeps one LoxString per distinct character sequence."""

    def __init__(self) -> None:
        self._strings = Table()

    def __len__(self) -> int:
        return len(self._strings)

    def intern(self, chars: str) -> LoxString:
        """Return the unique LoxString holding ``chars``."""
        hash_value = hash_string(chars)
        existing = self._strings.find_string(chars, hash_value)
        if existing is not None:
            return existing
        string = LoxString(chars, hash_value)
        self._strings.set(string, None)
        return string


def _kind(value: Value) -> str:
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, LoxString):
        return "obj"
    raise TypeError(f"not a Lox value: {value!r}")


def values_equal(a: Value, b: Value) -> bool:
    """Lox equality: same type and same value; objects by identity."""
    kind = _kind(a)
    if kind != _kind(b):
        return False
    if kind == "nil":
        return True
    if kind == "obj":
        return a is b
    return a == b


def is_falsey(value: Value) -> bool:
    """Only nil and false are falsey."""
    return value is None or value is False


def format_value(value: Value) -> str:
    """Render a value the way the interpreter prints it."""
    kind = _kind(value)
    if kind == "nil":
        return "nil"
    if kind == "bool":
        return "true" if value else "false"
    if kind == "number":
        return "%g" % value
    return value.chars