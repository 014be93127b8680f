import io
import itertools
import time

import pytest

from typhoon import operations
from typhoon.diagnostics import EvaluationError, Reporter
from typhoon.environment import Environment
from typhoon.interpreter import Clock, Function, Interpreter
from typhoon.syntax import (
    Assignment,
    Binary,
    BlockStmt,
    BreakStmt,
    Call,
    Comma,
    ContinueStmt,
    EmptyStmt,
    ExpressionStmt,
    FunctionStmt,
    Grouping,
    IfStmt,
    Lambda,
    Literal,
    Logical,
    PrintStmt,
    ReturnStmt,
    Ternary,
    Unary,
    Variable,
    VariableDeclaration,
    VariableStmt,
    WhileStmt,
)
from typhoon.tokens import Token, TokenType
from typhoon.values import UNDEFINED, is_truthy, values_equal

_counter = itertools.count()


def tok(token_type, lexeme):
    return Token(token_type, lexeme, None, 1)


def ident(name):
    return Token(TokenType.IDENTIFIER, name, None, 1, f"{name}-{next(_counter)}")


def num(value):
    return Literal(float(value))


def var(name):
    return Variable(ident(name))


def declare(name, initializer=None):
    return VariableStmt([VariableDeclaration(ident(name), initializer)])


def assign(name, expr):
    return ExpressionStmt(Assignment(ident(name), expr))


def binary(left, token_type, lexeme, right):
    return Binary(left, tok(token_type, lexeme), right)


@pytest.fixture
def out():
    return io.StringIO()


@pytest.fixture
def errors():
    return io.StringIO()


@pytest.fixture
def interp(out, errors):
    return Interpreter(Reporter(stream=errors, color=False), out)


def test_print_string_literal(interp, out):
    interp.interpret([PrintStmt(Literal("hello"))])
    assert out.getvalue() == "hello\n"
    assert interp.reporter.had_runtime_error is False


def test_declaration_without_initializer_is_undefined(interp, out):
    interp.interpret([declare("a"), PrintStmt(var("a"))])
    assert out.getvalue() == "undefined\n"
    assert interp.evaluate(var("a")) is UNDEFINED


def test_binary_plus_matches_operations(interp):
    plus = tok(TokenType.PLUS, "+")
    result = interp.evaluate(Binary(num(2), plus, num(3)))
    assert result == operations.add(2.0, 3.0, plus)


def test_equality_uses_value_rules(interp):
    expr = binary(num(1), TokenType.EQUAL_EQUAL, "==", Literal(True))
    assert interp.evaluate(expr) is values_equal(1.0, True)
    expr = binary(num(1), TokenType.BANG_EQUAL, "!=", Literal(True))
    assert interp.evaluate(expr) is (not values_equal(1.0, True))


def test_divide_by_zero_raises(interp):
    with pytest.raises(EvaluationError) as info:
        interp.evaluate(binary(num(1), TokenType.SLASH, "/", num(0)))
    assert info.value.message == "Divide by zero"


def test_unary_minus_negates_number(interp):
    assert interp.evaluate(Unary(tok(TokenType.MINUS, "-"), num(4))) == -4.0


def test_unary_minus_on_string_raises(interp):
    with pytest.raises(EvaluationError) as info:
        interp.evaluate(Unary(tok(TokenType.MINUS, "-"), Literal("s")))
    assert info.value.message == "Unary minus requires number or boolean operand"


def test_unary_bang_negates_truthiness(interp):
    for value in ("", "x", 0.0, 2.0, UNDEFINED):
        assert interp.evaluate(Unary(tok(TokenType.BANG, "!"), Literal(value))) is (
            not is_truthy(value)
        )


def test_logical_short_circuits(interp):
    or_expr = Logical(tok(TokenType.OR, "or"), Literal("a"), var("nope"))
    assert interp.evaluate(or_expr) == "a"
    and_expr = Logical(tok(TokenType.AND, "and"), num(0), var("nope"))
    assert interp.evaluate(and_expr) == 0.0
    and_right = Logical(tok(TokenType.AND, "and"), Literal("a"), Literal("b"))
    assert interp.evaluate(and_right) == "b"


def test_ternary_picks_branch(interp):
    assert interp.evaluate(Ternary(Literal(True), Literal("yes"), Literal("no"))) == "yes"
    assert interp.evaluate(Ternary(Literal(""), Literal("yes"), Literal("no"))) == "no"


def test_comma_and_grouping_yield_inner_value(interp):
    assert interp.evaluate(Comma(Literal("left"), Literal("right"))) == "right"
    assert interp.evaluate(Grouping(Literal("inner"))) == "inner"


def test_comma_still_evaluates_left(interp):
    with pytest.raises(EvaluationError):
        interp.evaluate(Comma(var("missing"), Literal("right")))


def test_assignment_to_undefined_global_raises(interp):
    with pytest.raises(EvaluationError) as info:
        interp.evaluate(Assignment(ident("y"), num(1)))
    assert info.value.message == "Undefined variable 'y'"


def test_assignment_returns_value_and_updates(interp):
    interp.execute(declare("a", num(1)))
    assert interp.evaluate(Assignment(ident("a"), Literal("new"))) == "new"
    assert interp.evaluate(var("a")) == "new"


def test_call_non_callable_raises(interp):
    with pytest.raises(EvaluationError) as info:
        interp.evaluate(Call(Literal("text"), [], tok(TokenType.RIGHT_PARENTHESIS, ")")))
    assert info.value.message == "Can only call functions and classes"


def _identity_function(name="id"):
    param = ident("x")
    use = Variable(ident("x"))
    body = [ReturnStmt(tok(TokenType.RETURN, "return"), use)]
    return FunctionStmt(ident(name), [param], body), use


def test_function_returns_argument(interp):
    decl, use = _identity_function()
    interp.resolve(use.name.identifier_hash, 0)
    interp.execute(decl)
    call = Call(var("id"), [num(42)], tok(TokenType.RIGHT_PARENTHESIS, ")"))
    assert interp.evaluate(call) == 42.0


def test_too_few_arguments_raises(interp):
    decl, _ = _identity_function()
    interp.execute(decl)
    call = Call(var("id"), [], tok(TokenType.RIGHT_PARENTHESIS, ")"))
    with pytest.raises(EvaluationError) as info:
        interp.evaluate(call)
    assert info.value.message == "Expected [1] arguments got [0]"


def test_extra_arguments_are_accepted(interp):
    decl, use = _identity_function()
    interp.resolve(use.name.identifier_hash, 0)
    interp.execute(decl)
    call = Call(var("id"), [Literal("a"), Literal("b")], tok(TokenType.RIGHT_PARENTHESIS, ")"))
    assert interp.evaluate(call) == "a"


def test_function_without_return_gives_undefined(interp):
    interp.execute(FunctionStmt(ident("noop"), [], [EmptyStmt()]))
    call = Call(var("noop"), [], tok(TokenType.RIGHT_PARENTHESIS, ")"))
    assert interp.evaluate(call) is UNDEFINED


def test_function_display(interp):
    decl, _ = _identity_function("named")
    assert str(Function(decl, interp.globals)) == "[Function: (named)]"
    lam = Lambda(ident("lambda"), [], [])
    assert str(interp.evaluate(lam)) == "[Function: (anonymous)]"


def test_lambda_captures_closure(interp):
    use = Variable(ident("captured"))
    lam = Lambda(ident("lambda"), [], [ReturnStmt(tok(TokenType.RETURN, "return"), use)])
    interp.resolve(use.name.identifier_hash, 1)
    closure = Environment(interp.globals).define("captured", "kept")
    function = Function(lam, closure)
    assert function.arity() == 0
    assert function.call(interp, []) == "kept"


def test_while_with_break_runs_once(interp, out):
    interp.execute(declare("runs", num(0)))
    body = BlockStmt(
        [
            PrintStmt(Literal("tick")),
            assign("runs", binary(var("runs"), TokenType.PLUS, "+", num(1))),
            BreakStmt(tok(TokenType.BREAK, "break")),
        ]
    )
    interp.execute(WhileStmt(Literal(True), body))
    assert out.getvalue() == "tick\n"
    assert interp.evaluate(var("runs")) == 1.0


def test_while_counts_to_limit(interp):
    interp.execute(declare("i", num(0)))
    cond = binary(var("i"), TokenType.LESS, "<", num(3))
    body = assign("i", binary(var("i"), TokenType.PLUS, "+", num(1)))
    interp.execute(WhileStmt(cond, body))
    assert interp.evaluate(var("i")) == 3.0


def test_while_continue_skips_rest_of_body(interp, out):
    interp.execute(declare("i", num(0)))
    cond = binary(var("i"), TokenType.LESS, "<", num(3))
    body = BlockStmt(
        [
            assign("i", binary(var("i"), TokenType.PLUS, "+", num(1))),
            IfStmt(
                binary(var("i"), TokenType.EQUAL_EQUAL, "==", num(2)),
                ContinueStmt(tok(TokenType.CONTINUE, "continue")),
            ),
            PrintStmt(var("i")),
        ]
    )
    interp.execute(WhileStmt(cond, body))
    assert out.getvalue() == "1\n3\n"
    assert interp.evaluate(var("i")) == 3.0


def test_if_else_branches(interp, out):
    interp.execute(declare("picked", Literal("none")))
    interp.execute(
        IfStmt(
            Literal(False),
            BlockStmt([PrintStmt(Literal("then")), assign("picked", Literal("then"))]),
            BlockStmt([PrintStmt(Literal("else")), assign("picked", Literal("else"))]),
        )
    )
    assert interp.evaluate(var("picked")) == "else"
    interp.execute(
        IfStmt(
            Literal(True),
            BlockStmt([PrintStmt(Literal("then")), assign("picked", Literal("then"))]),
            BlockStmt([PrintStmt(Literal("else")), assign("picked", Literal("else"))]),
        )
    )
    assert interp.evaluate(var("picked")) == "then"
    interp.execute(IfStmt(Literal(False), PrintStmt(Literal("then"))))
    assert out.getvalue() == "else\nthen\n"


def test_block_shadowing_leaves_global_alone(interp, out):
    interp.execute(declare("x", Literal("global")))
    inner_use = Variable(ident("x"))
    interp.resolve(inner_use.name.identifier_hash, 0)
    block = BlockStmt([declare("x", Literal("local")), PrintStmt(inner_use)])
    interp.execute(block)
    interp.execute(PrintStmt(var("x")))
    assert out.getvalue() == "local\nglobal\n"
    assert interp.evaluate(var("x")) == "global"


def test_execute_block_restores_environment_on_error(interp):
    before = interp.environment
    with pytest.raises(EvaluationError):
        interp.execute_block([PrintStmt(var("missing"))], Environment(before))
    assert interp.environment is before


def test_interpret_reports_and_continues(interp, out, errors):
    interp.interpret([PrintStmt(var("nope")), PrintStmt(Literal("after"))])
    assert out.getvalue() == "after\n"
    assert interp.reporter.had_runtime_error is True
    assert "Undefined variable 'nope'" in errors.getvalue()


def test_empty_stmt_does_nothing(interp, out):
    interp.interpret([EmptyStmt()])
    assert out.getvalue() == ""
    assert interp.reporter.had_runtime_error is False


def test_clock_returns_epoch_milliseconds(interp):
    clock = Clock()
    assert clock.arity() == 0
    assert str(clock) == "[Native Function]"
    before = time.time() * 1000
    value = interp.evaluate(Call(var("clock"), [], tok(TokenType.RIGHT_PARENTHESIS, ")")))
    after = time.time() * 1000
    assert before - 1 <= value <= after + 1
    assert value == int(value)