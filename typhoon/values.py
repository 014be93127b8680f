"""Runtime values and the rules for printing, comparing and testing them.

Numbers are ``float``, strings ``str``, booleans ``bool``; the undefined
value is ``UNDEFINED`` and functions are ``Callable`` instances.
"""

from __future__ import annotations

import abc
import enum
from decimal import Decimal
from typing import Any, Union


class Undefined(enum.Enum):
    """The value of variables without an initializer and of bare returns."""

    UNDEFINED = "undefined"

    def __str__(self) -> str:
        return "undefined"

    def __bool__(self) -> bool:
        return False


UNDEFINED = Undefined.UNDEFINED


class Callable(abc.ABC):
    """Anything that can be called from a program."""

    @abc.abstractmethod
    def arity(self) -> int:
        """The number of parameters the callable declares."""

    @abc.abstractmethod
    def call(self, interpreter: Any, arguments: list[Any]) -> Any:
        """Run the callable with already evaluated arguments."""

    def __str__(self) -> str:
        return "[Native Function]"


Value = Union[Undefined, float, str, bool, Callable]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def bool_to_number(value: bool) -> float:
    """Booleans take part in arithmetic as 1 and 0."""
    if not isinstance(value, bool):
        raise TypeError(f"expected a boolean, got {value!r}")
    return 1.0 if value else 0.0


def _format_number(number: float) -> str:
    number = float(number)
    if number != number:
        return "NaN"
    if number in (float("inf"), float("-inf")):
        return "inf" if number > 0 else "-inf"
    return format(Decimal(repr(number)).normalize(), "f")


def stringify(value: Any) -> str:
    """The text ``print`` shows for a value."""
    if isinstance(value, Undefined):
        return "undefined"
    if isinstance(value, bool):
        return "true" if value else "false"
    if _is_number(value):
        return _format_number(value)
    if isinstance(value, str):
        return value
    if isinstance(value, Callable):
        return str(value)
    raise TypeError(f"not a runtime value: {value!r}")


def values_equal(left: Any, right: Any) -> bool:
    """Equality as ``==`` sees it; booleans equal the numbers 1 and 0."""
    if isinstance(left, (Undefined, Callable)) or isinstance(right, (Undefined, Callable)):
        return left is right
    if isinstance(left, str) or isinstance(right, str):
        return isinstance(left, str) and isinstance(right, str) and left == right
    if isinstance(left, bool) and isinstance(right, bool):
        return left == right
    a = bool_to_number(left) if isinstance(left, bool) else left
    b = bool_to_number(right) if isinstance(right, bool) else right
    if _is_number(a) and _is_number(b):
        return float(a) == float(b)
    return False


def is_truthy(value: Any) -> bool:
    """Whether a value counts as true in conditions."""
    if isinstance(value, Undefined):
        return False
    if isinstance(value, bool):
        return value
    if _is_number(value):
        return value != 0.0
    if isinstance(value, str):
        return value != ""
    return isinstance(value, Callable)