"""Bytecode compiler and stack virtual machine for Lox expressions."""

__version__ = "0.1.0"
__all__ = ["chunk", "cli", "compiler", "debug", "scanner", "table", "value", "vm"]