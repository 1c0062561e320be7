import sys
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, TextIO, Tuple

from . import ast
from .environment import Environment
from .errors import (
    DivisionByZeroError,
    ErrorReporter,
    LoxRuntimeError,
    RuntimeArityError,
    RuntimeCallError,
    RuntimeNameError,
    RuntimeTypeError,
)
from .runtime import LoxCallable, LoxClass, LoxFunction, LoxInstance, bind_method
from .tokens import Token


# ---------------- Resultado de ejecutar una sentencia ----------------

@dataclass(frozen=True)
class Completed:
    value: Any = None


@dataclass(frozen=True)
class Returned:
    value: Any = None


COMPLETED = Completed()


# ---------------- Utilidades de valores ----------------

def is_truthy(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(a: Any, b: Any) -> bool:
    if a is None and b is None:
        return True
    if a is None or b is None:
        return False
    # true == 1 es falso en Lox
    if type(a) is not type(b):
        return False
    return a == b


def stringify(value: Any) -> str:
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        text = repr(value)
        if text.endswith(".0"):
            text = text[:-2]
        return text
    return str(value)


def _number_operands(operator: Token, left: Any, right: Any) -> Tuple[float, float]:
    if isinstance(left, float) and isinstance(right, float):
        return left, right
    raise RuntimeTypeError(operator, f"Los operandos de '{operator.lexeme}' deben ser números.")


class Interpreter:
    def __init__(self, globals: Environment, reporter: ErrorReporter, out: Optional[TextIO] = None):
        self.globals = globals
        self.env = globals
        self.reporter = reporter
        self.out = out if out is not None else sys.stdout
        self.locals: Dict[int, int] = {}

    def resolve(self, table: Dict[int, int]):
        """Incorpora la tabla de distancias producida por el resolver."""
        # En el REPL la tabla solo crece: los node_id nunca se repiten entre líneas
        self.locals.update(table)

    def interpret(self, statements: List[ast.Stmt]) -> List[Any]:
        """Ejecuta el programa; devuelve los valores de las sentencias-expresión de nivel superior."""
        results = []
        try:
            for stmt in statements:
                if isinstance(stmt, ast.Expression):
                    results.append(self.evaluate(stmt.expression))
                else:
                    self.execute(stmt)
        except LoxRuntimeError as ex:
            self.reporter.report_runtime_error(ex)
        return results

    # ---------------- Sentencias ----------------

    def execute(self, stmt: ast.Stmt):
        match stmt:
            case ast.Expression(expression=expr):
                self.evaluate(expr)
            case ast.Print(expression=expr):
                value = self.evaluate(expr)
                print(stringify(value), file=self.out)
            case ast.Var(name=name, initializer=initializer):
                value = self.evaluate(initializer) if initializer is not None else None
                self.env.define(name.lexeme, value)
            case ast.Block(statements=statements):
                return self.execute_block(statements, Environment(self.env))
            case ast.If(condition=cond, then_branch=then_branch, else_branch=else_branch):
                if is_truthy(self.evaluate(cond)):
                    return self.execute(then_branch)
                if else_branch is not None:
                    return self.execute(else_branch)
            case ast.While(condition=cond, body=body):
                while is_truthy(self.evaluate(cond)):
                    outcome = self.execute(body)
                    if isinstance(outcome, Returned):
                        return outcome
            case ast.Function(name=name):
                self.env.define(name.lexeme, LoxFunction(stmt, self.env))
            case ast.Return(value=value):
                return Returned(self.evaluate(value) if value is not None else None)
            case ast.Class():
                self._execute_class(stmt)
            case _:
                raise TypeError(f"Sentencia desconocida: {type(stmt).__name__}")
        return COMPLETED

    def execute_block(self, statements: List[ast.Stmt], env: Environment):
        previous = self.env
        self.env = env
        try:
            for stmt in statements:
                outcome = self.execute(stmt)
                if isinstance(outcome, Returned):
                    return outcome
        finally:
            self.env = previous
        return COMPLETED

    def _execute_class(self, stmt: ast.Class):
        superclass = None
        if stmt.superclass is not None:
            superclass = self.evaluate(stmt.superclass)
            if not isinstance(superclass, LoxClass):
                raise RuntimeTypeError(stmt.superclass.name, "La superclase debe ser una clase.")

        self.env.define(stmt.name.lexeme, None)

        closure = self.env
        if superclass is not None:
            closure = Environment(self.env)
            closure.define("super", superclass)

        methods = {m.name.lexeme: LoxFunction(m, closure) for m in stmt.methods}
        klass = LoxClass(stmt.name.lexeme, superclass, methods)
        self.env.assign(stmt.name, klass)

    # ---------------- Expresiones ----------------

    def evaluate(self, expr: ast.Expr) -> Any:
        match expr:
            case ast.Literal(value=value):
                return value
            case ast.Grouping(expression=inner):
                return self.evaluate(inner)
            case ast.Variable(name=name):
                return self._lookup_variable(name, expr)
            case ast.Assign(name=name, value=value_expr):
                value = self.evaluate(value_expr)
                distance = self.locals.get(expr.node_id)
                if distance is not None:
                    self.env.assign_at(distance, name.lexeme, value)
                else:
                    self.globals.assign(name, value)
                return value
            case ast.Logical():
                return self._logical(expr)
            case ast.Unary():
                return self._unary(expr)
            case ast.Binary():
                return self._binary(expr)
            case ast.Call():
                return self._call(expr)
            case ast.Get(object=obj_expr, name=name):
                obj = self.evaluate(obj_expr)
                if isinstance(obj, LoxInstance):
                    return obj.get(name, self)
                raise RuntimeTypeError(name, "Solo las instancias tienen propiedades.")
            case ast.Set(object=obj_expr, name=name, value=value_expr):
                obj = self.evaluate(obj_expr)
                if not isinstance(obj, LoxInstance):
                    raise RuntimeTypeError(name, "Solo las instancias tienen campos.")
                value = self.evaluate(value_expr)
                obj.set(name, value)
                return value
            case ast.This(keyword=keyword):
                return self._lookup_variable(keyword, expr)
            case ast.Super():
                return self._super(expr)
            case _:
                raise TypeError(f"Expresión desconocida: {type(expr).__name__}")

    def _lookup_variable(self, name: Token, expr: ast.Expr) -> Any:
        distance = self.locals.get(expr.node_id)
        if distance is not None:
            return self.env.get_at(distance, name.lexeme)
        return self.globals.get(name)

    def _logical(self, expr: ast.Logical) -> Any:
        left = self.evaluate(expr.left)
        if expr.operator.type == "OR":
            if is_truthy(left):
                return left
        elif not is_truthy(left):
            return left
        return self.evaluate(expr.right)

    def _unary(self, expr: ast.Unary) -> Any:
        right = self.evaluate(expr.right)
        op = expr.operator
        if op.type == "BANG":
            return not is_truthy(right)
        if op.type == "MINUS":
            if not isinstance(right, float):
                raise RuntimeTypeError(op, "El operando de '-' debe ser un número.")
            return -right
        raise TypeError(f"Operador unario desconocido: {op.lexeme}")

    def _binary(self, expr: ast.Binary) -> Any:
        left = self.evaluate(expr.left)
        right = self.evaluate(expr.right)
        op = expr.operator

        match op.type:
            case "EQUAL_EQUAL":
                return is_equal(left, right)
            case "BANG_EQUAL":
                return not is_equal(left, right)
            case "PLUS":
                if isinstance(left, float) and isinstance(right, float):
                    return left + right
                if isinstance(left, str) and isinstance(right, str):
                    return left + right
                raise RuntimeTypeError(op, "Los operandos de '+' deben ser dos números o dos cadenas.")
            case "MINUS":
                a, b = _number_operands(op, left, right)
                return a - b
            case "STAR":
                a, b = _number_operands(op, left, right)
                return a * b
            case "SLASH":
                a, b = _number_operands(op, left, right)
                if b == 0:
                    raise DivisionByZeroError(op, "Operación ilegal: división entre cero.")
                return a / b
            case "GREATER":
                a, b = _number_operands(op, left, right)
                return a > b
            case "GREATER_EQUAL":
                a, b = _number_operands(op, left, right)
                return a >= b
            case "LESS":
                a, b = _number_operands(op, left, right)
                return a < b
            case "LESS_EQUAL":
                a, b = _number_operands(op, left, right)
                return a <= b
        raise TypeError(f"Operador binario desconocido: {op.lexeme}")

    def _call(self, expr: ast.Call) -> Any:
        callee = self.evaluate(expr.callee)
        arguments = [self.evaluate(arg) for arg in expr.arguments]

        if not isinstance(callee, LoxCallable):
            raise RuntimeCallError(expr.paren, "Solo se pueden llamar funciones y clases.")
        if callee.arity() != len(arguments):
            raise RuntimeArityError(
                expr.paren,
                f"Se esperaban {callee.arity()} argumentos pero se recibieron {len(arguments)}.",
            )
        return callee.call(self, arguments)

    def _super(self, expr: ast.Super) -> Any:
        distance = self.locals[expr.node_id]
        superclass: LoxClass = self.env.get_at(distance, "super")
        # 'this' vive siempre un ámbito por debajo de 'super'
        instance: LoxInstance = self.env.get_at(distance - 1, "this")

        method = superclass.find_method(expr.method.lexeme)
        if method is None:
            raise RuntimeNameError(expr.method, f"Propiedad no definida: '{expr.method.lexeme}'")
        return bind_method(method, instance, self)
