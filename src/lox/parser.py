from typing import List, Optional

from lark import Lark, Transformer, v_args
from lark import Token as LarkToken
from lark.exceptions import UnexpectedCharacters, UnexpectedInput, UnexpectedToken

from . import ast
from .errors import ErrorReporter
from .tokens import Token

MAX_ARGS = 255

GRAMMAR = r"""
program: declaration*

?declaration: class_decl
            | fun_decl
            | var_decl
            | statement

class_decl: "class" IDENT superclass? "{" function* "}"
superclass: LESS IDENT
fun_decl: "fun" function
function: IDENT "(" [parameters] ")" block
        | IDENT block                              -> getter
parameters: IDENT ("," IDENT)*
var_decl: "var" IDENT ("=" expression)? ";"

?statement: expr_stmt
          | for_stmt
          | if_stmt
          | print_stmt
          | return_stmt
          | while_stmt
          | block

expr_stmt: expression ";"
for_stmt: "for" "(" for_init for_cond ";" for_incr ")" statement
for_init: var_decl | expr_stmt | ";"
for_cond: expression?
for_incr: expression?
if_stmt: "if" "(" expression ")" statement ("else" statement)?
print_stmt: "print" expression ";"
return_stmt: RETURN expression? ";"
while_stmt: "while" "(" expression ")" statement
block: "{" declaration* "}"

?expression: assignment
?assignment: IDENT "=" assignment                  -> assign
           | call "." IDENT "=" assignment         -> set_expr
           | logic_or
?logic_or: logic_and
         | logic_or OR logic_and                   -> logical
?logic_and: equality
          | logic_and AND equality                 -> logical
?equality: comparison
         | equality (BANG_EQUAL | EQUAL_EQUAL) comparison                  -> binary
?comparison: term
           | comparison (GREATER | GREATER_EQUAL | LESS | LESS_EQUAL) term -> binary
?term: factor
     | term (MINUS | PLUS) factor                  -> binary
?factor: unary
       | factor (SLASH | STAR) unary               -> binary
?unary: (BANG | MINUS) unary                       -> unary_expr
      | call
?call: primary
     | call "(" [arguments] ")"                    -> call_expr
     | call "." IDENT                              -> get_expr
arguments: expression ("," expression)*
?primary: "true"                                   -> true_lit
        | "false"                                  -> false_lit
        | "nil"                                    -> nil_lit
        | NUMBER                                   -> number
        | STRING                                   -> string
        | THIS                                     -> this_expr
        | IDENT                                    -> variable
        | "(" expression ")"                       -> grouping
        | SUPER "." IDENT                          -> super_expr

RETURN: "return"
THIS: "this"
SUPER: "super"
OR: "or"
AND: "and"
BANG_EQUAL: "!="
EQUAL_EQUAL: "=="
GREATER_EQUAL: ">="
LESS_EQUAL: "<="
GREATER: ">"
LESS: "<"
BANG: "!"
MINUS: "-"
PLUS: "+"
SLASH: "/"
STAR: "*"

IDENT: /[A-Za-z_][A-Za-z0-9_]*/
NUMBER: /\d+(\.\d+)?/
STRING: /"[^"]*"/
COMMENT: /\/\/[^\n]*/

%import common.WS
%ignore WS
%ignore COMMENT
"""

# Lexer básico: las palabras reservadas nunca se aceptan como identificadores
_lark = Lark(GRAMMAR, start="program", parser="lalr", lexer="basic", propagate_positions=True)


def _tok(t: LarkToken) -> Token:
    literal = None
    if t.type == "NUMBER":
        literal = float(t)
    elif t.type == "STRING":
        literal = str(t)[1:-1]
    return Token(t.type, str(t), literal, t.line, t.column)


class AstBuilder(Transformer):
    """Convierte el árbol de lark en nodos de ``ast``.

    Las validaciones de construcción (límite de parámetros/argumentos) se
    reportan sin detener la construcción.
    """

    def __init__(self, reporter: ErrorReporter):
        super().__init__()
        self.reporter = reporter

    # ---------------- Declaraciones ----------------

    def program(self, children):
        return list(children)

    def class_decl(self, children):
        name = _tok(children[0])
        superclass = None
        methods = []
        for child in children[1:]:
            if isinstance(child, ast.Variable):
                superclass = child
            else:
                methods.append(child)
        return ast.Class(name, superclass, methods)

    def superclass(self, children):
        return ast.Variable(_tok(children[1]))

    def fun_decl(self, children):
        return children[0]

    def function(self, children):
        name, params, body = children
        return ast.Function(_tok(name), params or [], body.statements)

    def getter(self, children):
        name, body = children
        return ast.Function(_tok(name), [], body.statements, is_getter=True)

    def parameters(self, children):
        params = [_tok(t) for t in children]
        if len(params) > MAX_ARGS:
            self.reporter.report_static_error(params[MAX_ARGS], f"No se pueden tener más de {MAX_ARGS} parámetros.")
        return params

    def var_decl(self, children):
        initializer = children[1] if len(children) > 1 else None
        return ast.Var(_tok(children[0]), initializer)

    # ---------------- Sentencias ----------------

    def expr_stmt(self, children):
        return ast.Expression(children[0])

    def print_stmt(self, children):
        return ast.Print(children[0])

    def return_stmt(self, children):
        value = children[1] if len(children) > 1 else None
        return ast.Return(_tok(children[0]), value)

    def while_stmt(self, children):
        return ast.While(children[0], children[1])

    def if_stmt(self, children):
        else_branch = children[2] if len(children) > 2 else None
        return ast.If(children[0], children[1], else_branch)

    def block(self, children):
        return ast.Block(list(children))

    def for_init(self, children):
        return children[0] if children else None

    def for_cond(self, children):
        return children[0] if children else None

    def for_incr(self, children):
        return children[0] if children else None

    def for_stmt(self, children):
        # for (init; cond; incr) body  =>  { init; while (cond) { body; incr; } }
        init, cond, incr, body = children
        if incr is not None:
            body = ast.Block([body, ast.Expression(incr)])
        if cond is None:
            cond = ast.Literal(True)
        body = ast.While(cond, body)
        if init is not None:
            body = ast.Block([init, body])
        return body

    # ---------------- Expresiones ----------------

    def assign(self, children):
        name, value = children
        return ast.Assign(_tok(name), value)

    def set_expr(self, children):
        obj, name, value = children
        return ast.Set(obj, _tok(name), value)

    def logical(self, children):
        left, op, right = children
        return ast.Logical(left, _tok(op), right)

    def binary(self, children):
        left, op, right = children
        return ast.Binary(left, _tok(op), right)

    def unary_expr(self, children):
        op, right = children
        return ast.Unary(_tok(op), right)

    @v_args(meta=True)
    def call_expr(self, meta, children):
        callee, arguments = children
        paren = Token("RIGHT_PAREN", ")", None, getattr(meta, "end_line", 0), getattr(meta, "end_column", 0))
        return ast.Call(callee, paren, arguments or [])

    def arguments(self, children):
        args = list(children)
        if len(args) > MAX_ARGS:
            self.reporter.report_static_error(self._line_of(args[MAX_ARGS]), f"No se pueden tener más de {MAX_ARGS} argumentos.")
        return args

    def get_expr(self, children):
        obj, name = children
        return ast.Get(obj, _tok(name))

    def true_lit(self, _):
        return ast.Literal(True)

    def false_lit(self, _):
        return ast.Literal(False)

    def nil_lit(self, _):
        return ast.Literal(None)

    def number(self, children):
        return ast.Literal(_tok(children[0]).literal)

    def string(self, children):
        return ast.Literal(_tok(children[0]).literal)

    def this_expr(self, children):
        return ast.This(_tok(children[0]))

    def variable(self, children):
        return ast.Variable(_tok(children[0]))

    def grouping(self, children):
        return ast.Grouping(children[0])

    def super_expr(self, children):
        keyword, method = children
        return ast.Super(_tok(keyword), _tok(method))

    def _line_of(self, expr) -> int:
        # Línea aproximada de una expresión, para reportar
        for attr in ("name", "operator", "keyword", "paren"):
            tok = getattr(expr, attr, None)
            if isinstance(tok, Token):
                return tok.line
        return 0


class Parser:
    def __init__(self, reporter: ErrorReporter):
        self.reporter = reporter

    def parse(self, source: str) -> Optional[List[ast.Stmt]]:
        """Devuelve la lista de sentencias, o None si hubo errores."""
        try:
            tree = _lark.parse(source)
        except UnexpectedInput as ex:
            self.reporter.syntax_error(ex.line, ex.column, self._describe(ex))
            return None

        before = len(self.reporter.errors)
        statements = AstBuilder(self.reporter).transform(tree)
        if len(self.reporter.errors) > before:
            return None
        return statements

    def _describe(self, ex: UnexpectedInput) -> str:
        if isinstance(ex, UnexpectedToken):
            if ex.token.type == "$END":
                return "Fin de entrada inesperado."
            return f"Token inesperado '{ex.token}'."
        if isinstance(ex, UnexpectedCharacters):
            return f"Carácter inesperado '{ex.char}'."
        return "Error de sintaxis."
