import pytest
from conftest import parse_program

from lox.printer import AstPrinter, RpnPrinter
from lox.treeviz import build_ast_graph

def expr_of(code):
    statements, reporter = parse_program(code)
    assert statements is not None, reporter.errors
    return statements[0].expression

@pytest.mark.parametrize("code,text", [
    ("-123 * (45.67);", "(* (- 123) (group 45.67))"),
    ('"hola" + nil;', "(+ hola nil)"),
    ("a = true;", "(= a true)"),
    ("f(1, x);", "(call f 1 x)"),
    ("obj.field;", "(. obj field)"),
    ("obj.field = 2;", "(.= obj field 2)"),
    ("a and !b;", "(and a (! b))"),
])
def test_ast_printer(code, text):
    assert AstPrinter().print(expr_of(code)) == text

def test_ast_printer_this_and_super():
    statements, _ = parse_program("class B < A { m() { return super.m + this; } }")
    ret = statements[0].methods[0].body[0]
    assert AstPrinter().print(ret.value) == "(+ (super m) this)"

@pytest.mark.parametrize("code,text", [
    ("(1 + 2) * (4 - 3);", "1 2 + 4 3 - *"),
    ("1 + 2 * 3;", "1 2 3 * +"),
    ("-3 + x;", "0 3 - x +"),
    ("!true;", "true !"),
])
def test_rpn_printer(code, text):
    assert RpnPrinter().print(expr_of(code)) == text

def test_rpn_printer_rejects_calls():
    with pytest.raises(TypeError):
        RpnPrinter().print(expr_of("f(1);"))

def test_ast_graph_structure():
    statements, _ = parse_program("print 1 + 2;")
    dot = build_ast_graph(statements)
    src = dot.source
    assert "Program" in src
    assert "Print" in src
    assert "Binary" in src
    # Program -> Print -> Binary -> (Literal, Literal)
    assert src.count("->") == 4

def test_ast_graph_marks_getters():
    statements, _ = parse_program("class C { area { return 1; } }")
    assert "(getter)" in build_ast_graph(statements).source
