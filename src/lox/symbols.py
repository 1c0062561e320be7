from dataclasses import dataclass
from enum import Enum

from .tokens import Token


class VarStatus(Enum):
    DECLARED = "declared"
    DEFINED = "defined"
    USED = "used"


@dataclass
class VarSymbol:
    name: str
    token: Token
    status: VarStatus = VarStatus.DECLARED

    @property
    def is_used(self) -> bool:
        return self.status is VarStatus.USED

    @property
    def in_initializer(self) -> bool:
        return self.status is VarStatus.DECLARED
