"""Error reporting for the scanner, resolver and interpreter."""

from __future__ import annotations

import sys
from typing import TextIO

from typhoon.tokens import Token, TokenType

_RESET = "\x1b[0m"


class EvaluationError(Exception):
    """An error raised while running a program, tied to the offending token."""

    def __init__(self, token: Token, message: str) -> None:
        super().__init__(message)
        self.token = token
        self.message = message


class Reporter:
    """Writes diagnostics to a stream and remembers whether any errors occurred.

    ``color`` may be True, False, or None to colour only when the stream
    is a terminal.
    """

    def __init__(self, stream: TextIO | None = None, color: bool | None = None) -> None:
        self._stream = stream
        self._color = color
        self.had_error = False
        self.had_runtime_error = False

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def _use_color(self) -> bool:
        if self._color is not None:
            return self._color
        isatty = getattr(self.stream, "isatty", None)
        return bool(isatty and isatty())

    def _paint(self, text: str, *codes: str) -> str:
        if not self._use_color():
            return text
        return f"\x1b[{';'.join(codes)}m{text}{_RESET}"

    def _emit(self, text: str) -> None:
        print(text, file=self.stream)

    @staticmethod
    def _where(token: Token) -> str:
        if token.token_type is TokenType.EOF:
            return "at end"
        return f"at '{token.lexeme}'"

    def _report(self, line: int, where: str, message: str) -> None:
        self._emit(
            f"{self._paint(f'[{line}]', '1', '34')} "
            f"{self._paint('Error:', '1', '31')} "
            f"{self._paint(where, '33')}: "
            f"{self._paint(message, '97')}"
        )
        self.had_error = True

    def _report_warning(self, line: int, where: str, message: str) -> None:
        self._emit(
            f"{self._paint(f'[{line}]', '1', '34')} "
            f"{self._paint('Warning', '1', '38', '2', '199', '79', '25')} "
            f"{self._paint(where, '33')}: "
            f"{self._paint(message, '97')}"
        )

    def error_at_line(self, line: int, message: str) -> None:
        """Report a compile-time error that has only a line number."""
        self._report(line, "", message)

    def error_at_token(self, token: Token, message: str) -> None:
        """Report a compile-time error at a token."""
        self._report(token.line, self._where(token), message)

    def warn_at_token(self, token: Token, message: str) -> None:
        """Report a warning at a token; warnings do not count as errors."""
        self._report_warning(token.line, self._where(token), message)

    def runtime_error(self, error: EvaluationError) -> None:
        """Report an error that stopped a statement from running."""
        self._emit(
            f"{self._paint(str(error.token.line), '1', '34').join('[]')} "
            f"{self._paint(error.message, '91')}"
        )
        self.had_runtime_error = True

    def reset(self) -> None:
        """Forget compile-time errors before the next input is run."""
        self.had_error = False