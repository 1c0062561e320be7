from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Token:
    type: str
    lexeme: str
    literal: Any = None
    line: int = 0
    column: int = 0

    def __str__(self):
        return f"{self.type} {self.lexeme} {self.literal}"


def synthetic(type_: str, lexeme: str, line: int = 0, column: int = 0) -> Token:
    """Token que no viene del código fuente (p. ej. 'this' inyectado por el resolver)."""
    return Token(type_, lexeme, None, line, column)
