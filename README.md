# loxvm

A small interpreter for Lox expressions. Source text is scanned into tokens,
compiled by a Pratt parser into bytecode, and run on a stack-based virtual
machine. Strings are interned, so equal strings are the same object and string
equality compares identity.

## The language

Each program is a single expression; its value is printed when it finishes.
The expression may use:

- number literals (`1`, `2.5`), string literals (`"hi"`), `true`, `false`, `nil`
- arithmetic: `+ - * /` and unary `-`
- comparison and equality: `< <= > >= == !=`
- logical not: `!`
- grouping with parentheses
- string concatenation with `+`
- `//` comments running to the end of the line

Numbers are printed in the style of C's `%g` (`3`, `0.5`, `1e+20`). Only `nil`
and `false` are falsey. Division by zero gives `inf`, `-inf` or `nan` rather
than an error.

## What it does not do

The scanner recognises the full set of Lox keywords and punctuation, but the
compiler only accepts the expression forms listed above. There are no
statements, no `print`, no variables, no control flow (`if`, `while`, `for`),
no `and`/`or`, no functions and no classes. Using any of these gives a compile
error. The value stack holds at most 256 values, and a chunk at most 256
constants.

## Installation

```
pip install .
```

## Command line

Start an interactive prompt:

```
loxvm
```

Each line you type (up to 1023 characters) is compiled and evaluated, and its
result is printed. End the session with end-of-file (Ctrl-D).

Run a file containing one expression:

```
loxvm program.lox
```

Exit statuses:

| status | meaning                                       |
|--------|-----------------------------------------------|
| 0      | success                                       |
| 64     | wrong command-line usage                      |
| 65     | compile error                                 |
| 70     | runtime error                                 |
| 74     | the file could not be opened or decoded as UTF-8 |

## Library use

```python
import io
from loxvm.vm import VM, InterpretResult

out = io.StringIO()
vm = VM(out=out)
result = vm.interpret('"foo" + "bar" == "foobar"')
assert result is InterpretResult.OK
assert out.getvalue() == "true\n"
```

`VM(out=..., err=..., trace=...)` takes the streams for results and errors
(standard output and standard error by default). With `trace=True` the
machine also writes a disassembly of the compiled chunk and, before each
instruction, the contents of the stack and the instruction being run.

`VM.interpret` returns `InterpretResult.OK`, `COMPILE_ERROR` or
`RUNTIME_ERROR`. Compile errors are written to the error stream in the form
`[line 1] Error at ')': Expected expression.`; runtime errors such as
`Operands must be numbers.` are followed by `[line N] in script`.

The lower layers are usable on their own:

- `loxvm.scanner.Scanner` produces `Token`s; iterating it yields tokens up to
  and including `EOF`.
- `loxvm.compiler.compile_source(source, interner)` returns a
  `loxvm.chunk.Chunk`, or raises `loxvm.compiler.CompileError`, whose
  `messages` list holds the reported errors.
- `loxvm.debug.disassemble_chunk(chunk, name)` returns a text listing of a
  chunk; `disassemble_instruction(chunk, offset)` returns the text of one
  instruction and the offset of the next.
- `loxvm.value.Interner` keeps one `LoxString` per distinct text;
  `hash_string` is the 32-bit FNV-1a hash of the text's UTF-8 bytes.
- `loxvm.table.Table` is the open-addressing hash table the interner uses,
  keyed by interned strings.

## Running the tests

```
pip install .[test]
pytest
```