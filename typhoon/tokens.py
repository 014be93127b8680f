"""Token kinds and the tokens the scanner produces."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class TokenType(enum.Enum):
    """Every kind of token the language knows."""

    LEFT_PARENTHESIS = enum.auto()
    RIGHT_PARENTHESIS = enum.auto()
    LEFT_BRACES = enum.auto()
    RIGHT_BRACES = enum.auto()
    COMMA = enum.auto()
    DOT = enum.auto()
    MINUS = enum.auto()
    PLUS = enum.auto()
    SEMI_COLON = enum.auto()
    QUESTION = enum.auto()
    COLON = enum.auto()
    SLASH = enum.auto()
    STAR = enum.auto()
    BANG = enum.auto()
    BANG_EQUAL = enum.auto()
    EQUAL = enum.auto()
    EQUAL_EQUAL = enum.auto()
    GREATER = enum.auto()
    GREATER_EQUAL = enum.auto()
    LESS = enum.auto()
    LESS_EQUAL = enum.auto()
    IDENTIFIER = enum.auto()
    STRING_LITERAL = enum.auto()
    NUMBER_LITERAL = enum.auto()
    AND = enum.auto()
    OR = enum.auto()
    CLASS = enum.auto()
    IF = enum.auto()
    ELSE = enum.auto()
    TRUE = enum.auto()
    FALSE = enum.auto()
    WHILE = enum.auto()
    FOR = enum.auto()
    RETURN = enum.auto()
    SUPER = enum.auto()
    THIS = enum.auto()
    VAR = enum.auto()
    UNDEFINED = enum.auto()
    FUNCTION = enum.auto()
    PRINT = enum.auto()
    EXIT = enum.auto()
    NEW_LINE = enum.auto()
    BREAK = enum.auto()
    CONTINUE = enum.auto()
    EOF = enum.auto()


@dataclass(frozen=True)
class Token:
    """A lexeme together with its kind, literal value and source line.

    ``literal`` holds a ``str`` for string literals and a ``float`` for
    number literals. ``identifier_hash`` is a unique id given to every
    identifier and keyword occurrence, used to resolve variable bindings.
    """

    token_type: TokenType
    lexeme: str
    literal: str | float | None = None
    line: int = 1
    identifier_hash: str | None = None