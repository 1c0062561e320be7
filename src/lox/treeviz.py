from dataclasses import fields, is_dataclass
from typing import List

from graphviz import Digraph

from . import ast
from .interpreter import stringify
from .tokens import Token


def _label(node):
    name = type(node).__name__
    if isinstance(node, ast.Literal):
        return f"{name}\n{stringify(node.value)}"
    if isinstance(node, ast.Function) and node.is_getter:
        name += " (getter)"
    tokens = [getattr(node, f.name) for f in fields(node) if isinstance(getattr(node, f.name), Token)]
    if tokens:
        return f"{name}\n" + " ".join(t.lexeme for t in tokens)
    return name


def _children(node):
    for f in fields(node):
        value = getattr(node, f.name)
        if isinstance(value, list):
            for item in value:
                if is_dataclass(item) and not isinstance(item, Token):
                    yield item
        elif is_dataclass(value) and not isinstance(value, Token):
            yield value


def _walk(dot, node, idx_gen):
    my_id = next(idx_gen)
    dot.node(str(my_id), _label(node))

    for child in _children(node):
        child_id = _walk(dot, child, idx_gen)
        dot.edge(str(my_id), str(child_id))
    return my_id


def build_ast_graph(statements: List[ast.Stmt]) -> Digraph:
    dot = Digraph(comment="AST", format="svg")
    def counter():
        i = 0
        while True:
            yield i
            i += 1
    ids = counter()
    root = next(ids)
    dot.node(str(root), "Program")
    for stmt in statements:
        dot.edge(str(root), str(_walk(dot, stmt, ids)))
    return dot


def render_ast_svg(statements: List[ast.Stmt]) -> str:
    # Requiere el binario de Graphviz instalado
    return build_ast_graph(statements).pipe().decode("utf-8")
