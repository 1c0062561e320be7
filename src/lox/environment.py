from typing import Any, Dict, Optional

from .errors import RuntimeNameError
from .tokens import Token


class Environment:
    """Ámbito en tiempo de ejecución: nombre -> valor, con enlace al ámbito que lo encierra."""

    def __init__(self, enclosing: Optional["Environment"] = None):
        self.enclosing = enclosing
        self.values: Dict[str, Any] = {}

    def define(self, name: str, value: Any) -> None:
        self.values[name] = value

    def get(self, name: Token) -> Any:
        env = self
        while env is not None:
            if name.lexeme in env.values:
                return env.values[name.lexeme]
            env = env.enclosing
        raise RuntimeNameError(name, f"Variable no definida: '{name.lexeme}'")

    def assign(self, name: Token, value: Any) -> None:
        env = self
        while env is not None:
            if name.lexeme in env.values:
                env.values[name.lexeme] = value
                return
            env = env.enclosing
        raise RuntimeNameError(name, f"Variable no definida: '{name.lexeme}'")

    # Acceso directo con la distancia calculada por el resolver

    def ancestor(self, distance: int) -> "Environment":
        env = self
        for _ in range(distance):
            env = env.enclosing
        return env

    def get_at(self, distance: int, name: str) -> Any:
        return self.ancestor(distance).values[name]

    def assign_at(self, distance: int, name: str, value: Any) -> None:
        self.ancestor(distance).values[name] = value
