"""Static pass that binds local variable uses to their scope depth.

It also reports misplaced ``return``, ``break`` and ``continue``, reads of a
local inside its own initializer, and warns about locals that are never used.
"""

from __future__ import annotations

from typing import Any

from typhoon.diagnostics import Reporter
from typhoon.syntax import (
    Assignment,
    Binary,
    BlockStmt,
    BreakStmt,
    Call,
    Comma,
    ContinueStmt,
    EmptyStmt,
    Expression,
    ExpressionStmt,
    FunctionStmt,
    Grouping,
    IfStmt,
    Lambda,
    Literal,
    Logical,
    PrintStmt,
    ReturnStmt,
    Stmt,
    Ternary,
    Unary,
    Variable,
    VariableStmt,
    WhileStmt,
)
from typhoon.tokens import Token
from typhoon.values import Callable, Undefined


class Resolver:
    """Walks a program once, telling the interpreter where each local lives."""

    def __init__(self, interpreter: Any, reporter: Reporter | None = None) -> None:
        self.interpreter = interpreter
        if reporter is None:
            reporter = getattr(interpreter, "reporter", None) or Reporter()
        self.reporter = reporter
        self._scopes: list[dict[str, bool]] = []
        self._unused: list[dict[str, Token]] = []
        self._loop_depth = 0
        self._function_depth = 0

    def resolve_stmts(self, stmts: list[Stmt]) -> None:
        """Resolve every statement in order."""
        for stmt in stmts:
            stmt.accept(self)

    def _resolve_expression(self, expr: Expression) -> None:
        expr.accept(self)

    def _resolve_stmt(self, stmt: Stmt) -> None:
        stmt.accept(self)

    def _resolve_function(self, function: FunctionStmt | Lambda) -> None:
        self._function_depth += 1
        self._begin_scope()
        for param in function.params:
            self._declare(param)
            self._define(param)
        self.resolve_stmts(function.body)
        self._end_scope()
        self._function_depth -= 1

    def _resolve_local(self, name: Token) -> None:
        innermost = len(self._scopes) - 1
        for index in range(innermost, -1, -1):
            if name.lexeme in self._scopes[index]:
                self._unused[index].pop(name.lexeme, None)
                self.interpreter.resolve(name.identifier_hash, innermost - index)

    def _begin_scope(self) -> None:
        self._unused.append({})
        self._scopes.append({})

    def _end_scope(self) -> None:
        if self._unused:
            for token in self._unused.pop().values():
                self.reporter.warn_at_token(token, "Unused variable")
        self._scopes.pop()

    def _declare(self, name: Token) -> None:
        if not self._scopes:
            return
        self._unused[-1][name.lexeme] = name
        self._scopes[-1][name.lexeme] = False

    def _define(self, name: Token) -> None:
        if not self._scopes:
            return
        self._scopes[-1][name.lexeme] = True

    def _check_jump(self, keyword: Token, what: str) -> None:
        if self._loop_depth == 0:
            self.reporter.error_at_token(keyword, f"Can't use {what} outside a loop")
        elif self._function_depth >= self._loop_depth:
            self.reporter.error_at_token(keyword, "Jump target cannot cross function boundary")

    # expressions

    def visit_comma(self, expr: Comma) -> None:
        self._resolve_expression(expr.left)
        self._resolve_expression(expr.right)

    def visit_ternary(self, expr: Ternary) -> None:
        self._resolve_expression(expr.condition)
        self._resolve_expression(expr.truth)
        self._resolve_expression(expr.falsy)

    def visit_binary(self, expr: Binary) -> None:
        self._resolve_expression(expr.left)
        self._resolve_expression(expr.right)

    def visit_unary(self, expr: Unary) -> None:
        self._resolve_expression(expr.right)

    def visit_grouping(self, expr: Grouping) -> None:
        self._resolve_expression(expr.expression)

    def visit_literal(self, expr: Literal) -> None:
        # Literals bind no names; only their value needs to be a runtime value.
        if not isinstance(expr.value, (Undefined, bool, int, float, str, Callable)):
            raise TypeError(f"not a runtime value: {expr.value!r}")

    def visit_variable(self, expr: Variable) -> None:
        if self._scopes and self._scopes[-1].get(expr.name.lexeme) is False:
            self.reporter.error_at_token(
                expr.name, "Can't read local variable in its own initializer."
            )
        self._resolve_local(expr.name)

    def visit_assignment(self, expr: Assignment) -> None:
        self._resolve_expression(expr.expression)
        self._resolve_local(expr.name)

    def visit_logical(self, expr: Logical) -> None:
        self._resolve_expression(expr.left)
        self._resolve_expression(expr.right)

    def visit_call(self, expr: Call) -> None:
        self._resolve_expression(expr.callee)
        for argument in expr.arguments:
            self._resolve_expression(argument)

    def visit_lambda(self, expr: Lambda) -> None:
        self._resolve_function(expr)

    # statements

    def visit_expression_stmt(self, stmt: ExpressionStmt) -> None:
        self._resolve_expression(stmt.expression)

    def visit_print_stmt(self, stmt: PrintStmt) -> None:
        self._resolve_expression(stmt.expression)

    def visit_variable_stmt(self, stmt: VariableStmt) -> None:
        for declaration in stmt.variables:
            self._declare(declaration.name)
            if declaration.initializer is not None:
                self._resolve_expression(declaration.initializer)
            self._define(declaration.name)

    def visit_block_stmt(self, stmt: BlockStmt) -> None:
        self._begin_scope()
        self.resolve_stmts(stmt.stmts)
        self._end_scope()

    def visit_if_stmt(self, stmt: IfStmt) -> None:
        self._resolve_expression(stmt.condition)
        self._resolve_stmt(stmt.truth)
        if stmt.falsy is not None:
            self._resolve_stmt(stmt.falsy)

    def visit_while_stmt(self, stmt: WhileStmt) -> None:
        self._loop_depth += 1
        self._resolve_expression(stmt.condition)
        self._resolve_stmt(stmt.body)
        self._loop_depth -= 1

    def visit_function_stmt(self, stmt: FunctionStmt) -> None:
        self._declare(stmt.name)
        self._define(stmt.name)
        self._resolve_function(stmt)

    def visit_return_stmt(self, stmt: ReturnStmt) -> None:
        if self._function_depth == 0:
            self.reporter.error_at_token(stmt.keyword, "Can't use return outside a function")
        if stmt.value is not None:
            self._resolve_expression(stmt.value)

    def visit_continue_stmt(self, stmt: ContinueStmt) -> None:
        self._check_jump(stmt.keyword, "continue")

    def visit_break_stmt(self, stmt: BreakStmt) -> None:
        self._check_jump(stmt.keyword, "break")

    def visit_empty_stmt(self, stmt: EmptyStmt) -> None:
        if not isinstance(stmt, EmptyStmt):
            raise TypeError(f"not an empty statement: {stmt!r}")