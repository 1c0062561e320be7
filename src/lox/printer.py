from . import ast
from .interpreter import stringify


class AstPrinter:
    """Forma prefija con paréntesis: ``(* (- 123) (group 45.67))``."""

    def print(self, expr: ast.Expr) -> str:
        match expr:
            case ast.Binary(left=left, operator=op, right=right) | ast.Logical(left=left, operator=op, right=right):
                return self._parenthesize(op.lexeme, left, right)
            case ast.Grouping(expression=inner):
                return self._parenthesize("group", inner)
            case ast.Literal(value=value):
                return stringify(value)
            case ast.Unary(operator=op, right=right):
                return self._parenthesize(op.lexeme, right)
            case ast.Variable(name=name):
                return name.lexeme
            case ast.Assign(name=name, value=value):
                return self._parenthesize(f"= {name.lexeme}", value)
            case ast.Call(callee=callee, arguments=arguments):
                return self._parenthesize("call", callee, *arguments)
            case ast.Get(object=obj, name=name):
                return f"(. {self.print(obj)} {name.lexeme})"
            case ast.Set(object=obj, name=name, value=value):
                return f"(.= {self.print(obj)} {name.lexeme} {self.print(value)})"
            case ast.This():
                return "this"
            case ast.Super(method=method):
                return f"(super {method.lexeme})"
        raise TypeError(f"Expresión desconocida: {type(expr).__name__}")

    def _parenthesize(self, name: str, *exprs: ast.Expr) -> str:
        parts = [name] + [self.print(e) for e in exprs]
        return "(" + " ".join(parts) + ")"


class RpnPrinter:
    """Notación polaca inversa para expresiones aritméticas: ``1 2 + 3 *``."""

    def print(self, expr: ast.Expr) -> str:
        match expr:
            case ast.Binary(left=left, operator=op, right=right):
                return f"{self.print(left)} {self.print(right)} {op.lexeme}"
            case ast.Grouping(expression=inner):
                return self.print(inner)
            case ast.Literal(value=value):
                return stringify(value)
            case ast.Unary(operator=op, right=right):
                if op.type == "MINUS":
                    return f"0 {self.print(right)} -"
                return f"{self.print(right)} {op.lexeme}"
            case ast.Variable(name=name):
                return name.lexeme
        raise TypeError(f"Expresión no soportada en RPN: {type(expr).__name__}")
