import os, sys, io
import streamlit as st
from streamlit_ace import st_ace

st.set_page_config(page_title="Lox IDE", page_icon="🧪", layout="wide")

ROOT = os.path.dirname(os.path.dirname(__file__))
sys.path.append(os.path.join(ROOT, "src"))

from lox.environment import Environment
from lox.errors import ErrorReporter
from lox.interpreter import Interpreter
from lox.parser import Parser
from lox.printer import AstPrinter
from lox.resolver import Resolver
from lox.runtime import define_builtins
from lox.treeviz import render_ast_svg
from lox import ast

DEFAULT_CODE = """class A {
  greet() { return "A"; }
}

class B < A {
  greet() { return "B"; }
  parentGreet() { return super.greet(); }
}

fun makeCounter() {
  var i = 0;
  fun count() {
    i = i + 1;
    return i;
  }
  return count;
}

var counter = makeCounter();
print counter();
print counter();
print B().parentGreet();
"""


def show_errors(title, errors):
    st.error(title)
    for e in errors:
        st.code(e, language="text")


def expression_outline(statements):
    # Una línea por sentencia-expresión/print, en notación prefija
    printer = AstPrinter()
    lines = []
    for stmt in statements:
        if isinstance(stmt, (ast.Expression, ast.Print)):
            lines.append(printer.print(stmt.expression))
    return "\n".join(lines)


st.title("🧪 Lox IDE - Intérprete")

if "code" not in st.session_state:
    st.session_state.code = DEFAULT_CODE

# SIDEBAR CON OPCIONES
with st.sidebar:
    st.header("⚙️ Opciones")

    show_ast = st.toggle(
        "📋 Mostrar expresiones (prefijo)",
        value=False,
        help="Imprime las expresiones de nivel superior con paréntesis"
    )

    show_tree = st.toggle(
        "🌳 Mostrar árbol (Graphviz)",
        value=True,
        help="Dibuja el AST; requiere el binario de Graphviz"
    )

    st.divider()
    st.caption("Lox IDE v1.0")

# EDITOR DE CÓDIGO
code = st_ace(
    language="text",
    theme="dracula",
    auto_update=True,
    value=st.session_state.code,
    min_lines=20,
    max_lines=40,
    font_size=14,
    show_gutter=True,
    key="ace"
)

run = st.columns([1,1,2])[0].button("🚀 Ejecutar", type="primary", use_container_width=True)

if run:
    st.session_state.code = code or ""

    reporter = ErrorReporter()
    statements = Parser(reporter).parse(st.session_state.code)

    if statements is None:
        show_errors("Errores Sintácticos:", reporter.errors)
    else:
        table = Resolver(reporter).resolve(statements)

        if table is None:
            show_errors("Errores Semánticos:", reporter.errors)
        else:
            out = io.StringIO()
            interpreter = Interpreter(define_builtins(Environment()), reporter, out=out)
            interpreter.resolve(table)
            interpreter.interpret(statements)

            st.subheader("📤 Salida")
            st.code(out.getvalue() or "(sin salida)", language="text")

            if reporter.had_runtime_error:
                show_errors("Error en tiempo de ejecución:", reporter.errors)
            else:
                st.success("✅ EJECUCIÓN EXITOSA")

        if show_ast:
            st.subheader("📋 Expresiones")
            st.code(expression_outline(statements) or "(ninguna)", language="text")

        if show_tree:
            with st.expander("Ver Árbol de Sintaxis (AST)"):
                try:
                    st.image(render_ast_svg(statements))
                except Exception as e:
                    st.info("No se pudo renderizar el árbol (¿Graphviz instalado?)")
                    st.caption(f"Error: {e}")
