"""Arithmetic and comparison operators on runtime values.

Booleans act as the numbers 1 and 0. Each function raises
``EvaluationError`` at ``operator`` when the operands do not fit.
"""

from __future__ import annotations

import operator as _op
from typing import Any, Callable as _Fn

from typhoon.diagnostics import EvaluationError
from typhoon.tokens import Token
from typhoon.values import bool_to_number, stringify

_ARITHMETIC_ERROR = "Operands must be numbers or booleans"
_COMPARISON_ERROR = "Operands must be numbers, booleans, or strings"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return bool_to_number(value)
    if _is_number(value):
        return float(value)
    return None


def _numbers(left: Any, right: Any) -> tuple[float, float] | None:
    a, b = _as_number(left), _as_number(right)
    if a is None or b is None:
        return None
    return a, b


def _arithmetic(left: Any, right: Any, operator: Token, fn: _Fn[[float, float], float]) -> float:
    pair = _numbers(left, right)
    if pair is None:
        raise EvaluationError(operator, _ARITHMETIC_ERROR)
    return fn(*pair)


def add(left: Any, right: Any, operator: Token) -> float | str:
    """Add numbers and booleans, or join strings with strings or numbers."""
    pair = _numbers(left, right)
    if pair is not None:
        return pair[0] + pair[1]
    left_ok = isinstance(left, str) or _is_number(left)
    right_ok = isinstance(right, str) or _is_number(right)
    if left_ok and right_ok and (isinstance(left, str) or isinstance(right, str)):
        return stringify(left) + stringify(right)
    raise EvaluationError(operator, "Operands must be (numbers or booleans) or two strings")


def subtract(left: Any, right: Any, operator: Token) -> float:
    """Subtract numbers and booleans."""
    return _arithmetic(left, right, operator, _op.sub)


def multiply(left: Any, right: Any, operator: Token) -> float:
    """Multiply numbers and booleans."""
    return _arithmetic(left, right, operator, _op.mul)


def divide(left: Any, right: Any, operator: Token) -> float:
    """Divide numbers and booleans; a zero divisor is an error."""
    dividend, divisor = _arithmetic(left, right, operator, lambda a, b: (a, b))
    if divisor == 0.0:
        raise EvaluationError(operator, "Divide by zero")
    return dividend / divisor


def _compare(left: Any, right: Any, operator: Token, fn: _Fn[[Any, Any], bool]) -> bool:
    pair = _numbers(left, right)
    if pair is not None:
        return fn(*pair)
    if isinstance(left, str) and isinstance(right, str):
        return fn(left, right)
    raise EvaluationError(operator, _COMPARISON_ERROR)


def less(left: Any, right: Any, operator: Token) -> bool:
    """``left < right`` for numbers, booleans or two strings."""
    return _compare(left, right, operator, _op.lt)


def greater(left: Any, right: Any, operator: Token) -> bool:
    """``left > right`` for numbers, booleans or two strings."""
    return _compare(left, right, operator, _op.gt)


def less_equal(left: Any, right: Any, operator: Token) -> bool:
    """``left <= right`` for numbers, booleans or two strings."""
    return _compare(left, right, operator, _op.le)


def greater_equal(left: Any, right: Any, operator: Token) -> bool:
    """``left >= right`` for numbers, booleans or two strings."""
    return _compare(left, right, operator, _op.ge)