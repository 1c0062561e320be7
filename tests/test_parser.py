from conftest import parse_program

from lox import ast
from lox.printer import AstPrinter

def single_expr(code: str) -> ast.Expr:
    statements, reporter = parse_program(code)
    assert statements is not None, reporter.errors
    assert isinstance(statements[0], ast.Expression)
    return statements[0].expression

# ---------------- Programas válidos ----------------

def test_declarations_kinds():
    statements, _ = parse_program("""
    var a = 1;
    fun f(x, y) { return x + y; }
    class A < B { m() { return this; } }
    print a;
    """)
    assert [type(s) for s in statements] == [ast.Var, ast.Function, ast.Class, ast.Print]

    fn = statements[1]
    assert [p.lexeme for p in fn.params] == ["x", "y"]
    assert isinstance(fn.body[0], ast.Return)

    klass = statements[2]
    assert klass.name.lexeme == "A"
    assert klass.superclass.name.lexeme == "B"
    assert [m.name.lexeme for m in klass.methods] == ["m"]

def test_literals_are_converted():
    assert single_expr("12;").value == 12.0
    assert isinstance(single_expr("12;").value, float)
    assert single_expr("3.25;").value == 3.25
    assert single_expr('"hola mundo";').value == "hola mundo"
    assert single_expr("true;").value is True
    assert single_expr("false;").value is False
    assert single_expr("nil;").value is None

def test_precedence_and_associativity():
    p = AstPrinter()
    assert p.print(single_expr("1 + 2 * 3;")) == "(+ 1 (* 2 3))"
    assert p.print(single_expr("1 - 2 - 3;")) == "(- (- 1 2) 3)"
    assert p.print(single_expr("-a == !b;")) == "(== (- a) (! b))"
    assert p.print(single_expr("a or b and c;")) == "(or a (and b c))"
    assert p.print(single_expr("a = b = 3;")) == "(= a (= b 3))"

def test_call_get_and_set():
    expr = single_expr("obj.field.method(1, 2);")
    assert isinstance(expr, ast.Call)
    assert isinstance(expr.callee, ast.Get)
    assert expr.callee.name.lexeme == "method"
    assert len(expr.arguments) == 2

    expr = single_expr("obj.a.b = 5;")
    assert isinstance(expr, ast.Set)
    assert expr.name.lexeme == "b"
    assert isinstance(expr.object, ast.Get)

def test_call_paren_token_is_closing_paren():
    expr = single_expr("f(\n1\n);")
    assert expr.paren.lexeme == ")"
    assert expr.paren.line == 3

def test_this_and_super():
    statements, _ = parse_program("class B < A { m() { return super.m(this); } }")
    ret = statements[0].methods[0].body[0]
    call = ret.value
    assert isinstance(call.callee, ast.Super)
    assert call.callee.method.lexeme == "m"
    assert isinstance(call.arguments[0], ast.This)

def test_getter_declaration():
    statements, _ = parse_program("class A { area { return 1; } m() { return 2; } }")
    area, m = statements[0].methods
    assert area.is_getter and area.params == []
    assert not m.is_getter

def test_for_desugars_to_while():
    statements, _ = parse_program("for (var i = 0; i < 3; i = i + 1) print i;")
    outer = statements[0]
    assert isinstance(outer, ast.Block)
    init, loop = outer.statements
    assert isinstance(init, ast.Var)
    assert isinstance(loop, ast.While)
    assert isinstance(loop.condition, ast.Binary)
    body, incr = loop.body.statements
    assert isinstance(body, ast.Print)
    assert isinstance(incr.expression, ast.Assign)

def test_for_without_clauses():
    statements, _ = parse_program("for (;;) print 1;")
    loop = statements[0]
    assert isinstance(loop, ast.While)
    assert loop.condition.value is True
    assert isinstance(loop.body, ast.Print)

def test_comments_are_ignored():
    statements, _ = parse_program("// nada\nprint 1; // fin\n")
    assert len(statements) == 1

def test_expression_nodes_have_unique_ids():
    statements, _ = parse_program("a + a; a + a;")
    ids = set()
    for stmt in statements:
        e = stmt.expression
        ids.update({e.node_id, e.left.node_id, e.right.node_id})
    assert len(ids) == 6

# ---------------- Errores ----------------

def test_missing_semicolon_at_end():
    statements, reporter = parse_program("print 1")
    assert statements is None
    assert reporter.had_error
    assert reporter.errors[0].startswith("[SyntaxError] L1:")
    assert "Fin de entrada inesperado." in reporter.errors[0]

def test_unexpected_token():
    statements, reporter = parse_program("var = 1;")
    assert statements is None
    assert "Token inesperado '='." in reporter.errors[0]

def test_unexpected_character():
    statements, reporter = parse_program("var a = 1 @ 2;")
    assert statements is None
    assert "Carácter inesperado '@'." in reporter.errors[0]

def test_keyword_is_not_an_identifier():
    statements, reporter = parse_program("var class = 1;")
    assert statements is None
    assert reporter.errors

def test_too_many_arguments():
    code = "f(" + ", ".join(["1"] * 256) + ");"
    statements, reporter = parse_program(code)
    assert statements is None
    assert any("No se pueden tener más de 255 argumentos." in e for e in reporter.errors)

def test_too_many_parameters():
    code = "fun f(" + ", ".join(f"p{i}" for i in range(256)) + ") {}"
    statements, reporter = parse_program(code)
    assert statements is None
    assert any("No se pueden tener más de 255 parámetros." in e for e in reporter.errors)

def test_255_arguments_is_fine():
    code = "f(" + ", ".join(["1"] * 255) + ");"
    statements, reporter = parse_program(code)
    assert statements is not None
    assert not reporter.errors
