from dataclasses import dataclass, field
from itertools import count
from typing import Any, List, Optional

from .tokens import Token

# Identificador único por nodo de expresión; la tabla de distancias del
# resolver se indexa con él.
_node_ids = count(1)


# ---------------- Expresiones ----------------

@dataclass
class Expr:
    node_id: int = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        self.node_id = next(_node_ids)


@dataclass
class Assign(Expr):
    name: Token
    value: Expr


@dataclass
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass
class Logical(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass
class Unary(Expr):
    operator: Token
    right: Expr


@dataclass
class Call(Expr):
    callee: Expr
    paren: Token
    arguments: List[Expr] = field(default_factory=list)


@dataclass
class Get(Expr):
    object: Expr
    name: Token


@dataclass
class Set(Expr):
    object: Expr
    name: Token
    value: Expr


@dataclass
class This(Expr):
    keyword: Token


@dataclass
class Super(Expr):
    keyword: Token
    method: Token


@dataclass
class Grouping(Expr):
    expression: Expr


@dataclass
class Literal(Expr):
    value: Any


@dataclass
class Variable(Expr):
    name: Token


# ---------------- Sentencias ----------------

@dataclass
class Stmt:
    pass


@dataclass
class Expression(Stmt):
    expression: Expr


@dataclass
class Print(Stmt):
    expression: Expr


@dataclass
class Var(Stmt):
    name: Token
    initializer: Optional[Expr] = None


@dataclass
class Block(Stmt):
    statements: List[Stmt] = field(default_factory=list)


@dataclass
class If(Stmt):
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt] = None


@dataclass
class While(Stmt):
    condition: Expr
    body: Stmt


@dataclass
class Function(Stmt):
    name: Token
    params: List[Token] = field(default_factory=list)
    body: List[Stmt] = field(default_factory=list)
    is_getter: bool = False


@dataclass
class Return(Stmt):
    keyword: Token
    value: Optional[Expr] = None


@dataclass
class Class(Stmt):
    name: Token
    superclass: Optional[Variable] = None
    methods: List[Function] = field(default_factory=list)
