import time
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Protocol, runtime_checkable

from . import ast
from .environment import Environment
from .errors import RuntimeNameError
from .tokens import Token

if TYPE_CHECKING:
    from .interpreter import Interpreter


@runtime_checkable
class LoxCallable(Protocol):
    """Cualquier valor que se pueda llamar desde Lox."""

    def arity(self) -> int: ...

    def call(self, interpreter: "Interpreter", arguments: List[Any]) -> Any: ...


# ---------------- Funciones ----------------

class LoxFunction:
    def __init__(self, declaration: ast.Function, closure: Environment):
        self.declaration = declaration
        self.closure = closure

    @property
    def name(self) -> str:
        return self.declaration.name.lexeme

    @property
    def is_getter(self) -> bool:
        return self.declaration.is_getter

    def arity(self) -> int:
        return len(self.declaration.params)

    def call(self, interpreter: "Interpreter", arguments: List[Any]) -> Any:
        env = Environment(self.closure)
        for param, value in zip(self.declaration.params, arguments):
            env.define(param.lexeme, value)

        outcome = interpreter.execute_block(self.declaration.body, env)
        return outcome.value

    def bind(self, instance: "LoxInstance") -> "LoxFunction":
        # El método ligado es una función nueva; la declarada no cambia
        env = Environment(self.closure)
        env.define("this", instance)
        return LoxFunction(self.declaration, env)

    def __str__(self):
        return f"<fn {self.name}>"


# ---------------- Clases e instancias ----------------

class LoxClass:
    def __init__(self, name: str, superclass: Optional["LoxClass"], methods: Dict[str, LoxFunction]):
        self.name = name
        self.superclass = superclass
        self.methods = methods

    def find_method(self, name: str) -> Optional[LoxFunction]:
        if name in self.methods:
            return self.methods[name]
        if self.superclass is not None:
            return self.superclass.find_method(name)
        return None

    def arity(self) -> int:
        initializer = self.find_method("init")
        if initializer is None:
            return 0
        return initializer.arity()

    def call(self, interpreter: "Interpreter", arguments: List[Any]) -> "LoxInstance":
        instance = LoxInstance(self)
        initializer = self.find_method("init")
        if initializer is not None:
            initializer.bind(instance).call(interpreter, arguments)
        # init siempre produce la instancia, sin importar lo que devuelva
        return instance

    def __str__(self):
        return self.name


class LoxInstance:
    def __init__(self, klass: LoxClass):
        self.klass = klass
        self.fields: Dict[str, Any] = {}

    def get(self, name: Token, interpreter: "Interpreter") -> Any:
        if name.lexeme in self.fields:
            return self.fields[name.lexeme]

        method = self.klass.find_method(name.lexeme)
        if method is not None:
            return bind_method(method, self, interpreter)

        raise RuntimeNameError(name, f"Propiedad no definida: '{name.lexeme}'")

    def set(self, name: Token, value: Any) -> None:
        self.fields[name.lexeme] = value

    def __str__(self):
        return f"Instance of class {self.klass.name}"


def bind_method(method: LoxFunction, instance: LoxInstance, interpreter: "Interpreter") -> Any:
    """Liga el método a la instancia; los getters se invocan en el acto."""
    bound = method.bind(instance)
    if bound.is_getter:
        return bound.call(interpreter, [])
    return bound


# ---------------- Nativas ----------------

class Clock:
    """Milisegundos desde epoch, como número."""

    def arity(self) -> int:
        return 0

    def call(self, interpreter: "Interpreter", arguments: List[Any]) -> float:
        return float(time.time_ns() // 1_000_000)

    def __str__(self):
        return "<native fn>"


BUILTINS = {
    "clock": Clock,
}


def define_builtins(env: Environment) -> Environment:
    for name, factory in BUILTINS.items():
        env.define(name, factory())
    return env
