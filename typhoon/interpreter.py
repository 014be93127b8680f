"""Tree-walking evaluation of statements and expressions."""

from __future__ import annotations

import sys
import time
from typing import Any, TextIO

from typhoon import operations
from typhoon.diagnostics import EvaluationError, Reporter
from typhoon.environment import Environment
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
from typhoon.tokens import Token, TokenType
from typhoon.values import UNDEFINED, Callable, bool_to_number, is_truthy, stringify, values_equal


class ReturnSignal(Exception):
    """Unwinds a function body carrying the returned value."""

    def __init__(self, value: Any) -> None:
        super().__init__("return")
        self.value = value


class BreakSignal(Exception):
    """Leaves the innermost loop."""

    def __init__(self, keyword: Token | None = None) -> None:
        super().__init__("break")
        self.keyword = keyword


class ContinueSignal(Exception):
    """Skips to the next iteration of the innermost loop."""

    def __init__(self, keyword: Token | None = None) -> None:
        super().__init__("continue")
        self.keyword = keyword


class Function(Callable):
    """A user-defined function or lambda together with its closure."""

    def __init__(self, declaration: FunctionStmt | Lambda, closure: Environment) -> None:
        self.declaration = declaration
        self.closure = closure

    def arity(self) -> int:
        return len(self.declaration.params)

    def call(self, interpreter: Interpreter, arguments: list[Any]) -> Any:
        environment = Environment(self.closure)
        for param, argument in zip(self.declaration.params, arguments):
            environment.define(param.lexeme, argument)
        try:
            interpreter.execute_block(self.declaration.body, environment)
        except ReturnSignal as signal:
            return signal.value
        return UNDEFINED

    def __str__(self) -> str:
        return f"[Function: ({self.declaration.display_name()})]"


class Clock(Callable):
    """Milliseconds since the Unix epoch."""

    def arity(self) -> int:
        return 0

    def call(self, interpreter: Any, arguments: list[Any]) -> float:
        return float(time.time_ns() // 1_000_000)


_BINARY = {
    TokenType.PLUS: operations.add,
    TokenType.MINUS: operations.subtract,
    TokenType.STAR: operations.multiply,
    TokenType.SLASH: operations.divide,
    TokenType.GREATER: operations.greater,
    TokenType.GREATER_EQUAL: operations.greater_equal,
    TokenType.LESS: operations.less,
    TokenType.LESS_EQUAL: operations.less_equal,
}


class Interpreter:
    """Runs resolved statements, writing ``print`` output to ``out``."""

    def __init__(self, reporter: Reporter | None = None, out: TextIO | None = None) -> None:
        self.reporter = reporter if reporter is not None else Reporter()
        self._out = out
        self.globals = Environment()
        self.globals.define("clock", Clock())
        self.environment = self.globals
        self.locals: dict[str, int] = {}

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    def interpret(self, stmts: list[Stmt]) -> None:
        """Run statements in order, reporting each runtime error and going on."""
        for stmt in stmts:
            try:
                self.execute(stmt)
            except EvaluationError as error:
                self.reporter.runtime_error(error)

    def evaluate(self, expr: Expression) -> Any:
        return expr.accept(self)

    def execute(self, stmt: Stmt) -> None:
        stmt.accept(self)

    def execute_block(self, stmts: list[Stmt], environment: Environment) -> None:
        """Run statements in ``environment``, restoring the current scope afterwards."""
        previous = self.environment
        self.environment = environment
        try:
            for stmt in stmts:
                self.execute(stmt)
        finally:
            self.environment = previous

    def resolve(self, identifier_hash: str, depth: int) -> None:
        """Record how many scopes out the variable occurrence is bound."""
        self.locals[identifier_hash] = depth

    def _look_up_variable(self, name: Token) -> Any:
        depth = self.locals.get(name.identifier_hash)
        if depth is None:
            return self.globals.get(name)
        return self.environment.get_at(name, depth)

    # expressions

    def visit_comma(self, expr: Comma) -> Any:
        self.evaluate(expr.left)
        return self.evaluate(expr.right)

    def visit_ternary(self, expr: Ternary) -> Any:
        if is_truthy(self.evaluate(expr.condition)):
            return self.evaluate(expr.truth)
        return self.evaluate(expr.falsy)

    def visit_binary(self, expr: Binary) -> Any:
        left = self.evaluate(expr.left)
        right = self.evaluate(expr.right)
        kind = expr.operator.token_type
        if kind is TokenType.EQUAL_EQUAL:
            return values_equal(left, right)
        if kind is TokenType.BANG_EQUAL:
            return not values_equal(left, right)
        handler = _BINARY.get(kind)
        if handler is None:
            raise ValueError(f"not a binary operator: {kind}")
        return handler(left, right, expr.operator)

    def visit_unary(self, expr: Unary) -> Any:
        value = self.evaluate(expr.right)
        kind = expr.operator.token_type
        if kind is TokenType.BANG:
            return not is_truthy(value)
        if kind is TokenType.MINUS:
            if isinstance(value, bool):
                return -bool_to_number(value)
            if isinstance(value, (int, float)):
                return -float(value)
            raise EvaluationError(
                expr.operator, "Unary minus requires number or boolean operand"
            )
        raise ValueError(f"not a unary operator: {kind}")

    def visit_grouping(self, expr: Grouping) -> Any:
        return self.evaluate(expr.expression)

    def visit_literal(self, expr: Literal) -> Any:
        return expr.value

    def visit_variable(self, expr: Variable) -> Any:
        return self._look_up_variable(expr.name)

    def visit_assignment(self, expr: Assignment) -> Any:
        value = self.evaluate(expr.expression)
        depth = self.locals.get(expr.name.identifier_hash)
        if depth is None:
            self.globals.assign(expr.name, value)
        else:
            self.environment.assign_at(expr.name, value, depth)
        return value

    def visit_logical(self, expr: Logical) -> Any:
        left = self.evaluate(expr.left)
        kind = expr.operator.token_type
        if kind is TokenType.AND:
            return self.evaluate(expr.right) if is_truthy(left) else left
        if kind is TokenType.OR:
            return left if is_truthy(left) else self.evaluate(expr.right)
        raise ValueError(f"not a logical operator: {kind}")

    def visit_call(self, expr: Call) -> Any:
        callee = self.evaluate(expr.callee)
        arguments = [self.evaluate(argument) for argument in expr.arguments]
        if not isinstance(callee, Callable):
            raise EvaluationError(expr.paren, "Can only call functions and classes")
        arity = callee.arity()
        if len(arguments) < arity:
            raise EvaluationError(
                expr.paren, f"Expected [{arity}] arguments got [{len(arguments)}]"
            )
        return callee.call(self, arguments)

    def visit_lambda(self, expr: Lambda) -> Any:
        return Function(expr, self.environment)

    # statements

    def visit_expression_stmt(self, stmt: ExpressionStmt) -> None:
        self.evaluate(stmt.expression)

    def visit_print_stmt(self, stmt: PrintStmt) -> None:
        print(stringify(self.evaluate(stmt.expression)), file=self.out)

    def visit_variable_stmt(self, stmt: VariableStmt) -> None:
        for declaration in stmt.variables:
            value = (
                UNDEFINED
                if declaration.initializer is None
                else self.evaluate(declaration.initializer)
            )
            self.environment.define(declaration.name.lexeme, value)

    def visit_block_stmt(self, stmt: BlockStmt) -> None:
        self.execute_block(stmt.stmts, Environment(self.environment))

    def visit_if_stmt(self, stmt: IfStmt) -> None:
        if is_truthy(self.evaluate(stmt.condition)):
            self.execute(stmt.truth)
        elif stmt.falsy is not None:
            self.execute(stmt.falsy)

    def visit_while_stmt(self, stmt: WhileStmt) -> None:
        while is_truthy(self.evaluate(stmt.condition)):
            try:
                self.execute(stmt.body)
            except BreakSignal:
                break
            except ContinueSignal:
                continue

    def visit_function_stmt(self, stmt: FunctionStmt) -> None:
        self.environment.define(stmt.name.lexeme, Function(stmt, self.environment))

    def visit_return_stmt(self, stmt: ReturnStmt) -> None:
        value = UNDEFINED if stmt.value is None else self.evaluate(stmt.value)
        raise ReturnSignal(value)

    def visit_continue_stmt(self, stmt: ContinueStmt) -> None:
        raise ContinueSignal(stmt.keyword)

    def visit_break_stmt(self, stmt: BreakStmt) -> None:
        raise BreakSignal(stmt.keyword)

    def visit_empty_stmt(self, stmt: EmptyStmt) -> None:
        if not isinstance(stmt, EmptyStmt):
            raise TypeError(f"not an empty statement: {stmt!r}")