from typing import Dict, List, Optional

from . import ast
from .errors import ErrorReporter, StaticResolutionError
from .scope import Scope
from .symbols import VarStatus
from .tokens import Token, synthetic
from .types import ClassType, FunctionType


class Resolver:
    """Pasada estática previa a la ejecución.

    Calcula, para cada variable local, a cuántos ámbitos de distancia está su
    declaración y rechaza los programas ilegales. Se detiene en el primer error:
    no hay recuperación.
    """

    def __init__(self, reporter: ErrorReporter):
        self.reporter = reporter
        self.scopes: List[Scope] = []
        self.locals: Dict[int, int] = {}
        self.current_function = FunctionType.NONE
        self.current_class = ClassType.NONE

    def resolve(self, statements: List[ast.Stmt]) -> Optional[Dict[int, int]]:
        """Devuelve la tabla node_id -> distancia, o None si hubo un error estático."""
        self.scopes = []
        self.current_function = FunctionType.NONE
        self.current_class = ClassType.NONE
        try:
            self._resolve_stmts(statements)
        except StaticResolutionError as ex:
            self.reporter.report_static_error(ex.token, ex.message)
            return None
        return self.locals

    def err(self, token: Token, message: str):
        raise StaticResolutionError(token, message)

    # ---------------- Ámbitos ----------------

    def _begin_scope(self):
        self.scopes.append(Scope())

    def _end_scope(self):
        unused = self.scopes[-1].first_unused()
        if unused is not None:
            self.err(unused.token, f"Variable no usada: {unused.name}")
        self.scopes.pop()

    def _declare(self, name: Token):
        # En el ámbito global se permite redeclarar
        if not self.scopes:
            return
        try:
            self.scopes[-1].declare(name)
        except ValueError as ex:
            self.err(name, str(ex))

    def _define(self, name: Token):
        if not self.scopes:
            return
        self.scopes[-1].define(name.lexeme)

    def _resolve_local(self, expr: ast.Expr, name: Token):
        for depth, scope in enumerate(reversed(self.scopes)):
            sym = scope.lookup(name.lexeme)
            if sym is not None:
                sym.status = VarStatus.USED
                self.locals[expr.node_id] = depth
                return
        # No encontrada: se trata como global

    # ---------------- Sentencias ----------------

    def _resolve_stmts(self, statements: List[ast.Stmt]):
        for stmt in statements:
            self._resolve_stmt(stmt)

    def _resolve_stmt(self, stmt: ast.Stmt):
        match stmt:
            case ast.Block(statements=statements):
                self._begin_scope()
                self._resolve_stmts(statements)
                self._end_scope()
            case ast.Class():
                self._resolve_class(stmt)
            case ast.Expression(expression=expr) | ast.Print(expression=expr):
                self._resolve_expr(expr)
            case ast.Function(name=name):
                self._declare(name)
                self._define(name)
                self._resolve_function(stmt, FunctionType.FUNCTION)
            case ast.If(condition=cond, then_branch=then_branch, else_branch=else_branch):
                self._resolve_expr(cond)
                self._resolve_stmt(then_branch)
                if else_branch is not None:
                    self._resolve_stmt(else_branch)
            case ast.Return(keyword=keyword, value=value):
                self._resolve_return(keyword, value)
            case ast.Var(name=name, initializer=initializer):
                self._declare(name)
                if initializer is not None:
                    self._resolve_expr(initializer)
                self._define(name)
            case ast.While(condition=cond, body=body):
                self._resolve_expr(cond)
                self._resolve_stmt(body)
            case _:
                raise TypeError(f"Sentencia desconocida: {type(stmt).__name__}")

    def _resolve_return(self, keyword: Token, value: Optional[ast.Expr]):
        if self.current_function is FunctionType.NONE:
            self.err(keyword, "No se puede usar 'return' fuera de una función.")
        if value is not None:
            if self.current_function is FunctionType.INITIALIZER:
                self.err(keyword, "No se puede devolver un valor desde un inicializador.")
            self._resolve_expr(value)

    # ---------------- Funciones ----------------

    def _resolve_function(self, function: ast.Function, kind: FunctionType):
        if function.is_getter and self.current_class is ClassType.NONE:
            self.err(function.name, "Un getter solo puede declararse dentro de una clase.")

        enclosing = self.current_function
        self.current_function = kind

        self._begin_scope()
        for param in function.params:
            self._declare(param)
            self._define(param)
        self._resolve_stmts(function.body)
        self._end_scope()

        self.current_function = enclosing

    # ---------------- Clases ----------------

    def _resolve_class(self, stmt: ast.Class):
        enclosing = self.current_class
        self.current_class = ClassType.CLASS

        self._declare(stmt.name)
        self._define(stmt.name)

        superclass = stmt.superclass
        if superclass is not None:
            if superclass.name.lexeme == stmt.name.lexeme:
                self.err(superclass.name, "Una clase no puede heredar de sí misma.")
            self.current_class = ClassType.SUBCLASS
            self._resolve_expr(superclass)
            # ámbito extra para 'super', un nivel por encima de 'this'
            self._begin_scope()
            self.scopes[-1].inject(synthetic("SUPER", "super", stmt.name.line))

        self._begin_scope()
        self.scopes[-1].inject(synthetic("THIS", "this", stmt.name.line))

        seen = set()
        for method in stmt.methods:
            mname = method.name.lexeme
            if mname in seen:
                self.err(method.name, f"Método duplicado en clase '{stmt.name.lexeme}': {mname}")
            seen.add(mname)
            kind = FunctionType.INITIALIZER if mname == "init" else FunctionType.METHOD
            self._resolve_function(method, kind)

        self._end_scope()
        if superclass is not None:
            self._end_scope()

        self.current_class = enclosing

    # ---------------- Expresiones ----------------

    def _resolve_expr(self, expr: ast.Expr):
        match expr:
            case ast.Variable(name=name):
                if self.scopes:
                    sym = self.scopes[-1].lookup(name.lexeme)
                    if sym is not None and sym.in_initializer:
                        self.err(name, f"No se puede leer la variable local '{name.lexeme}' en su propio inicializador.")
                self._resolve_local(expr, name)
            case ast.Assign(name=name, value=value):
                self._resolve_expr(value)
                self._resolve_local(expr, name)
            case ast.Binary(left=left, right=right) | ast.Logical(left=left, right=right):
                self._resolve_expr(left)
                self._resolve_expr(right)
            case ast.Unary(right=right):
                self._resolve_expr(right)
            case ast.Grouping(expression=inner):
                self._resolve_expr(inner)
            case ast.Literal():
                pass
            case ast.Call(callee=callee, arguments=arguments):
                self._resolve_expr(callee)
                for arg in arguments:
                    self._resolve_expr(arg)
            case ast.Get(object=obj):
                self._resolve_expr(obj)
            case ast.Set(object=obj, value=value):
                self._resolve_expr(value)
                self._resolve_expr(obj)
            case ast.This(keyword=keyword):
                if self.current_class is ClassType.NONE:
                    self.err(keyword, "No se puede usar 'this' fuera de una clase.")
                self._resolve_local(expr, keyword)
            case ast.Super(keyword=keyword):
                if self.current_class is ClassType.NONE:
                    self.err(keyword, "No se puede usar 'super' fuera de una clase.")
                if self.current_class is not ClassType.SUBCLASS:
                    self.err(keyword, "No se puede usar 'super' en una clase sin superclase.")
                self._resolve_local(expr, keyword)
            case _:
                raise TypeError(f"Expresión desconocida: {type(expr).__name__}")
