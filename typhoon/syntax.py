"""Syntax tree nodes for expressions and statements.

Every node dispatches to a visitor through ``accept``, which calls the
visitor method named after the node kind (``visit_binary``,
``visit_print_stmt`` and so on) and returns its result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar

from typhoon.tokens import Token


class Expression:
    """Base class of every expression node."""

    _visit: ClassVar[str] = ""

    def accept(self, visitor: Any) -> Any:
        """Call the visitor method for this node kind and return its result."""
        return getattr(visitor, self._visit)(self)


@dataclass
class Comma(Expression):
    """``left, right``: evaluates both and yields the right one."""

    left: Expression
    right: Expression
    _visit: ClassVar[str] = "visit_comma"


@dataclass
class Ternary(Expression):
    """``condition ? truth : falsy``."""

    condition: Expression
    truth: Expression
    falsy: Expression
    _visit: ClassVar[str] = "visit_ternary"


@dataclass
class Binary(Expression):
    """An arithmetic, comparison or equality operation."""

    left: Expression
    operator: Token
    right: Expression
    _visit: ClassVar[str] = "visit_binary"


@dataclass
class Unary(Expression):
    """A prefix ``!`` or ``-`` operation."""

    operator: Token
    right: Expression
    _visit: ClassVar[str] = "visit_unary"


@dataclass
class Grouping(Expression):
    """A parenthesised expression."""

    expression: Expression
    _visit: ClassVar[str] = "visit_grouping"


@dataclass
class Literal(Expression):
    """A constant value written in the source."""

    value: Any
    _visit: ClassVar[str] = "visit_literal"


@dataclass
class Variable(Expression):
    """A reference to a named variable."""

    name: Token
    _visit: ClassVar[str] = "visit_variable"


@dataclass
class Assignment(Expression):
    """``name = expression``."""

    name: Token
    expression: Expression
    _visit: ClassVar[str] = "visit_assignment"


@dataclass
class Logical(Expression):
    """A short-circuiting ``and`` or ``or``."""

    operator: Token
    left: Expression
    right: Expression
    _visit: ClassVar[str] = "visit_logical"


@dataclass
class Call(Expression):
    """A call of ``callee`` with arguments; ``paren`` locates errors."""

    callee: Expression
    arguments: list[Expression]
    paren: Token
    _visit: ClassVar[str] = "visit_call"


@dataclass
class Lambda(Expression):
    """An anonymous function expression."""

    name: Token
    params: list[Token]
    body: list[Stmt]
    _visit: ClassVar[str] = "visit_lambda"

    def display_name(self) -> str:
        """The name shown when the function is printed."""
        return "anonymous"


class Stmt:
    """Base class of every statement node."""

    _visit: ClassVar[str] = ""

    def accept(self, visitor: Any) -> Any:
        """Call the visitor method for this node kind and return its result."""
        return getattr(visitor, self._visit)(self)


@dataclass
class ExpressionStmt(Stmt):
    """An expression evaluated for its side effects."""

    expression: Expression
    _visit: ClassVar[str] = "visit_expression_stmt"


@dataclass
class PrintStmt(Stmt):
    """``print expression;``."""

    expression: Expression
    _visit: ClassVar[str] = "visit_print_stmt"


@dataclass
class VariableDeclaration:
    """One name in a ``var`` statement, with its optional initializer."""

    name: Token
    initializer: Expression | None = None


@dataclass
class VariableStmt(Stmt):
    """``var a = 1, b;``: one or more declarations."""

    variables: list[VariableDeclaration] = field(default_factory=list)
    _visit: ClassVar[str] = "visit_variable_stmt"


@dataclass
class BlockStmt(Stmt):
    """A braced list of statements with its own scope."""

    stmts: list[Stmt] = field(default_factory=list)
    _visit: ClassVar[str] = "visit_block_stmt"


@dataclass
class IfStmt(Stmt):
    """``if`` with an optional ``else`` branch."""

    condition: Expression
    truth: Stmt
    falsy: Stmt | None = None
    _visit: ClassVar[str] = "visit_if_stmt"


@dataclass
class WhileStmt(Stmt):
    """A ``while`` loop."""

    condition: Expression
    body: Stmt
    _visit: ClassVar[str] = "visit_while_stmt"


@dataclass
class FunctionStmt(Stmt):
    """A named function declaration."""

    name: Token
    params: list[Token]
    body: list[Stmt]
    _visit: ClassVar[str] = "visit_function_stmt"

    def display_name(self) -> str:
        """The name shown when the function is printed."""
        return self.name.lexeme


@dataclass
class ReturnStmt(Stmt):
    """``return`` with an optional value."""

    keyword: Token
    value: Expression | None = None
    _visit: ClassVar[str] = "visit_return_stmt"


@dataclass
class ContinueStmt(Stmt):
    """``continue;``."""

    keyword: Token
    _visit: ClassVar[str] = "visit_continue_stmt"


@dataclass
class BreakStmt(Stmt):
    """``break;``."""

    keyword: Token
    _visit: ClassVar[str] = "visit_break_stmt"


@dataclass
class EmptyStmt(Stmt):
    """A statement that does nothing."""

    _visit: ClassVar[str] = "visit_empty_stmt"