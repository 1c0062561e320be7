from dataclasses import dataclass, field
from typing import Dict, Optional

from .symbols import VarStatus, VarSymbol
from .tokens import Token


@dataclass
class Scope:
    symbols: Dict[str, VarSymbol] = field(default_factory=dict)

    def declare(self, token: Token):
        if token.lexeme in self.symbols:
            raise ValueError(f"Ya existe una variable con este nombre en este ámbito: {token.lexeme}")
        self.symbols[token.lexeme] = VarSymbol(name=token.lexeme, token=token)

    def define(self, name: str):
        self.symbols[name].status = VarStatus.DEFINED

    def inject(self, token: Token):
        # 'this' y 'super' no cuentan como variables sin usar
        self.symbols[token.lexeme] = VarSymbol(name=token.lexeme, token=token, status=VarStatus.USED)

    def lookup(self, name: str) -> Optional[VarSymbol]:
        return self.symbols.get(name)

    def first_unused(self) -> Optional[VarSymbol]:
        for sym in self.symbols.values():
            if not sym.is_used:
                return sym
        return None
