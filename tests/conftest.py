import io, os, sys

ROOT = os.path.dirname(os.path.dirname(__file__))
sys.path.append(os.path.join(ROOT, "src"))

from lox.environment import Environment
from lox.errors import ErrorReporter
from lox.interpreter import Interpreter
from lox.parser import Parser
from lox.resolver import Resolver
from lox.runtime import define_builtins

def parse_program(code: str):
    """Parse → (statements, reporter); statements es None si hubo errores"""
    reporter = ErrorReporter()
    statements = Parser(reporter).parse(code)
    return statements, reporter

def resolve_program(code: str):
    """Parse + Resolver → (tabla, reporter); exige que no haya errores sintácticos"""
    statements, reporter = parse_program(code)
    assert statements is not None, f"Errores sintácticos: {reporter.errors}"
    table = Resolver(reporter).resolve(statements)
    return table, reporter

def run_program(code: str):
    """Parse + Resolver + Intérprete → (líneas impresas, reporter)"""
    statements, reporter = parse_program(code)
    assert statements is not None, f"Errores sintácticos: {reporter.errors}"
    table = Resolver(reporter).resolve(statements)
    assert table is not None, f"Errores semánticos: {reporter.errors}"

    out = io.StringIO()
    interpreter = Interpreter(define_builtins(Environment()), reporter, out=out)
    interpreter.resolve(table)
    interpreter.interpret(statements)
    return out.getvalue().splitlines(), reporter
