"""Variable scopes chained from the innermost outwards."""

from __future__ import annotations

from typing import Any

from typhoon.diagnostics import EvaluationError
from typhoon.tokens import Token


class Environment:
    """A mapping of names to values with an optional enclosing scope."""

    def __init__(self, enclosing: Environment | None = None) -> None:
        self.values: dict[str, Any] = {}
        self.enclosing = enclosing

    def _undefined(self, token: Token) -> EvaluationError:
        return EvaluationError(token, f"Undefined variable '{token.lexeme}'")

    def _ancestor(self, depth: int) -> Environment:
        environment = self
        for _ in range(depth):
            if environment.enclosing is None:
                raise LookupError(f"no scope {depth} levels up")
            environment = environment.enclosing
        return environment

    def get(self, token: Token) -> Any:
        """Look a name up here or in any enclosing scope."""
        environment: Environment | None = self
        while environment is not None:
            if token.lexeme in environment.values:
                return environment.values[token.lexeme]
            environment = environment.enclosing
        raise self._undefined(token)

    def get_at(self, token: Token, depth: int) -> Any:
        """Look a name up exactly ``depth`` scopes out."""
        return self._ancestor(depth).values[token.lexeme]

    def assign(self, token: Token, value: Any) -> None:
        """Rebind an existing name in the nearest scope that holds it."""
        environment: Environment | None = self
        while environment is not None:
            if token.lexeme in environment.values:
                environment.values[token.lexeme] = value
                return
            environment = environment.enclosing
        raise self._undefined(token)

    def assign_at(self, token: Token, value: Any, depth: int) -> None:
        """Bind a name exactly ``depth`` scopes out."""
        self._ancestor(depth).values[token.lexeme] = value

    def define(self, name: str, value: Any) -> Environment:
        """Bind a name in this scope, replacing any earlier binding."""
        self.values[name] = value
        return self