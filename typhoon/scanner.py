"""Turns source text into a list of tokens."""

from __future__ import annotations

import uuid

from typhoon.diagnostics import Reporter
from typhoon.tokens import Token, TokenType

KEYWORDS: dict[str, TokenType] = {
    "and": TokenType.AND,
    "or": TokenType.OR,
    "class": TokenType.CLASS,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "while": TokenType.WHILE,
    "for": TokenType.FOR,
    "return": TokenType.RETURN,
    "super": TokenType.SUPER,
    "this": TokenType.THIS,
    "var": TokenType.VAR,
    "undefined": TokenType.UNDEFINED,
    "fun": TokenType.FUNCTION,
    "print": TokenType.PRINT,
    "exit": TokenType.EXIT,
    "break": TokenType.BREAK,
    "continue": TokenType.CONTINUE,
}

_SINGLE = {
    "(": TokenType.LEFT_PARENTHESIS,
    ")": TokenType.RIGHT_PARENTHESIS,
    "{": TokenType.LEFT_BRACES,
    "}": TokenType.RIGHT_BRACES,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    "*": TokenType.STAR,
    ";": TokenType.SEMI_COLON,
    "?": TokenType.QUESTION,
    ":": TokenType.COLON,
}

# character -> (kind when followed by '=', kind otherwise)
_WITH_EQUAL = {
    "!": (TokenType.BANG_EQUAL, TokenType.BANG),
    "=": (TokenType.EQUAL_EQUAL, TokenType.EQUAL),
    "<": (TokenType.LESS_EQUAL, TokenType.LESS),
    ">": (TokenType.GREATER_EQUAL, TokenType.GREATER),
}

_END = "\0"


def _is_digit(c: str) -> bool:
    return "0" <= c <= "9"


def _is_alphabetic(c: str) -> bool:
    return c.isalpha() or c == "_"


class Scanner:
    """Splits source text into tokens, reporting lexical errors to a reporter."""

    def __init__(self, source: str, reporter: Reporter | None = None) -> None:
        self.source = source
        self.reporter = reporter if reporter is not None else Reporter()
        self._tokens: list[Token] = []
        self._start = 0
        self._current = 0
        self._line = 1

    def scan_tokens(self) -> list[Token]:
        """Scan the whole source; the list always ends with an EOF token."""
        self._tokens = []
        self._start = self._current = 0
        self._line = 1
        while not self._at_end():
            self._start = self._current
            self._scan_token()
        self._tokens.append(Token(TokenType.EOF, "", None, self._line))
        return self._tokens

    def _scan_token(self) -> None:
        c = self._advance()
        if c in _SINGLE:
            self._add(_SINGLE[c])
        elif c in _WITH_EQUAL:
            with_equal, alone = _WITH_EQUAL[c]
            self._add(with_equal if self._matches("=") else alone)
        elif c == "/":
            self._slash()
        elif c == "\n":
            self._line += 1
        elif c == '"':
            self._string_literal()
        elif _is_digit(c):
            self._number_literal()
        elif _is_alphabetic(c):
            self._identifier()
        elif c in " \r\t":
            pass
        else:
            self.reporter.error_at_line(self._line, "Unexpected character")

    def _slash(self) -> None:
        nxt = self._peek()
        if nxt == "/":
            while self._peek() != "\n" and not self._at_end():
                self._advance()
        elif nxt == "*":
            self._advance()
            while not self._at_end():
                if self._peek() == "\n":
                    self._line += 1
                if self._peek() == "*" and self._peek_next() == "/":
                    self._advance()
                    self._advance()
                    return
                self._advance()
            self.reporter.error_at_line(self._line, "Expect a '*/'")
        else:
            self._add(TokenType.SLASH)

    def _string_literal(self) -> None:
        while not self._at_end():
            c = self._peek()
            if c == '"':
                self._advance()
                text = self.source[self._start + 1 : self._current - 1]
                self._add(TokenType.STRING_LITERAL, literal=text)
                return
            if c == "\n":
                break
            self._advance()
        self.reporter.error_at_line(self._line, "Unterminated string literal")

    def _number_literal(self) -> None:
        while _is_digit(self._peek()):
            self._advance()
        if self._peek() == "." and _is_digit(self._peek_next()):
            self._advance()
            while _is_digit(self._peek()):
                self._advance()
        value = float(self.source[self._start : self._current])
        self._add(TokenType.NUMBER_LITERAL, literal=value)

    def _identifier(self) -> None:
        while _is_alphabetic(self._peek()) or _is_digit(self._peek()):
            self._advance()
        lexeme = self.source[self._start : self._current]
        token_type = KEYWORDS.get(lexeme, TokenType.IDENTIFIER)
        self._add(token_type, identifier_hash=str(uuid.uuid4()))

    def _matches(self, expected: str) -> bool:
        if self._at_end() or self._peek() != expected:
            return False
        self._current += 1
        return True

    def _peek(self) -> str:
        return self.source[self._current] if self._current < len(self.source) else _END

    def _peek_next(self) -> str:
        index = self._current + 1
        return self.source[index] if index < len(self.source) else _END

    def _at_end(self) -> bool:
        return self._current >= len(self.source)

    def _advance(self) -> str:
        c = self.source[self._current]
        self._current += 1
        return c

    def _add(
        self,
        token_type: TokenType,
        literal: str | float | None = None,
        identifier_hash: str | None = None,
    ) -> None:
        lexeme = self.source[self._start : self._current]
        self._tokens.append(Token(token_type, lexeme, literal, self._line, identifier_hash))


def scan_tokens(source: str, reporter: Reporter | None = None) -> list[Token]:
    """Scan ``source`` into tokens."""
    return Scanner(source, reporter).scan_tokens()