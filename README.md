# typhoon

`typhoon` is a small dynamically typed scripting language, as a Python
library. It holds the pieces of a tree-walking interpreter:

- `typhoon.tokens`: `TokenType` and the frozen `Token` dataclass
  (`token_type`, `lexeme`, `literal`, `line`, `identifier_hash`)
- `typhoon.scanner`: `Scanner` and `scan_tokens(source, reporter)`, which
  turn source text into tokens
- `typhoon.syntax`: expression nodes (`Comma`, `Ternary`, `Binary`, `Unary`,
  `Grouping`, `Literal`, `Variable`, `Assignment`, `Logical`, `Call`,
  `Lambda`) and statement nodes (`ExpressionStmt`, `PrintStmt`,
  `VariableStmt` with `VariableDeclaration`, `BlockStmt`, `IfStmt`,
  `WhileStmt`, `FunctionStmt`, `ReturnStmt`, `ContinueStmt`, `BreakStmt`,
  `EmptyStmt`); every node has `accept(visitor)`
- `typhoon.values`: `UNDEFINED`, the `Callable` base class, and
  `stringify`, `values_equal`, `is_truthy`, `bool_to_number`
- `typhoon.operations`: `add`, `subtract`, `multiply`, `divide`, `less`,
  `greater`, `less_equal`, `greater_equal`
- `typhoon.environment`: `Environment`, chained variable scopes
- `typhoon.resolver`: `Resolver`, the static pass that binds local
  variables to their scope depth
- `typhoon.interpreter`: `Interpreter`, `Function`, the built-in `Clock`,
  and the `ReturnSignal`, `BreakSignal` and `ContinueSignal` exceptions
- `typhoon.diagnostics`: `Reporter` and `EvaluationError`

It has no dependencies outside the standard library.

## Values and semantics

- Values are `float` numbers, `str` strings, `bool` booleans, `UNDEFINED`,
  and callables.
- `print` shows numbers without a trailing `.0` (`3.0` prints as `3`),
  booleans as `true` / `false`, and `undefined`. Functions print as
  `[Function: (name)]`, anonymous ones as `[Function: (anonymous)]`, and
  built-ins as `[Native Function]`.
- Booleans take part in arithmetic and comparison as `1` and `0`. `+` adds
  numbers and booleans, and joins two strings or a string with a number.
  Dividing by zero is a runtime error. `<`, `>`, `<=`, `>=` also compare two
  strings.
- `==` treats `true` as equal to `1` and `false` to `0`; functions are equal
  only to themselves.
- `undefined`, `0`, `""` and `false` are false in conditions; everything
  else is true.
- `and` / `or` short-circuit and yield one of their operands.
- A call with fewer arguments than the function declares is a runtime
  error; extra arguments are ignored.
- The global `clock` returns the milliseconds since the Unix epoch.

## Scanning

```python
import sys

from typhoon.diagnostics import Reporter
from typhoon.scanner import scan_tokens

reporter = Reporter(sys.stdout, False)
for token in scan_tokens('var greeting = "hello"; // a comment', reporter):
    print(token.token_type, repr(token.lexeme), token.literal)
```

The list always ends with a `TokenType.EOF` token. `//` line comments and
`/* ... */` block comments are skipped. An unexpected character, an
unterminated string or an unclosed block comment is reported to the
reporter and sets `reporter.had_error`; nothing is raised. Every identifier
and keyword gets a fresh `identifier_hash`, which the resolver and
interpreter use to tell variable occurrences apart.

## Running a program

Programs are lists of statement nodes. Resolve them, then interpret them:

```python
import sys

from typhoon.diagnostics import Reporter
from typhoon.interpreter import Interpreter
from typhoon.resolver import Resolver
from typhoon.syntax import (
    Binary, BlockStmt, Literal, PrintStmt, Variable, VariableDeclaration, VariableStmt,
)
from typhoon.tokens import Token, TokenType

reporter = Reporter(sys.stdout, False)
interpreter = Interpreter(reporter, sys.stdout)

name = Token(TokenType.IDENTIFIER, "x", None, 1, "x-declaration")
use = Token(TokenType.IDENTIFIER, "x", None, 1, "x-use")
plus = Token(TokenType.PLUS, "+", None, 1)

program = [
    BlockStmt([
        VariableStmt([VariableDeclaration(name, Literal(2.0))]),
        PrintStmt(Binary(Variable(use), plus, Literal(" apples"))),
    ]),
]

Resolver(interpreter, reporter).resolve_stmts(program)
if not reporter.had_error:
    interpreter.interpret(program)   # prints: 2 apples
```

`Interpreter.interpret` runs the statements in order. A runtime error stops
the statement that raised it, is reported, and the next statement runs.

## Diagnostics

`Reporter(stream, color)` writes to `stream` (standard output when `None`).
`color` is `True`, `False`, or `None` to colour only when the stream is a
terminal.

- Compile-time errors: `[line] Error: at '<lexeme>': message` (`at end` for
  the EOF token); they set `had_error`, which `reset()` clears.
- Warnings, such as `Unused variable` for locals the resolver never saw
  read or assigned: `[line] Warning at '<lexeme>': message`.
- Runtime errors: `[line] message`; they set `had_runtime_error`.

The resolver reports `return` outside a function, `break` / `continue`
outside a loop or across a function boundary, and reading a local variable
in its own initializer.

## What it does not do

- There is no parser: nothing here turns tokens into syntax nodes, so
  programs have to be built from the `typhoon.syntax` classes directly.
- There is no command, interactive prompt or way to run a script file.
- The keywords `class`, `this`, `super`, `for` and `exit` are recognised by
  the scanner, but no node or behaviour goes with them.