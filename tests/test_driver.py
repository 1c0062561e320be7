import io

import pytest

from lox.driver import EXIT_RUNTIME_ERROR, EXIT_STATIC_ERROR, EXIT_USAGE, Lox, main

def session():
    out, err = io.StringIO(), io.StringIO()
    return Lox(out=out, err=err), out, err

def write(tmp_path, code):
    path = tmp_path / "programa.lox"
    path.write_text(code, encoding="utf-8")
    return str(path)

@pytest.mark.parametrize("code,status,stream_has", [
    ('print "ok";', 0, ""),
    ("print 1", EXIT_STATIC_ERROR, "[SyntaxError]"),
    ("{ var sinUso = 1; }", EXIT_STATIC_ERROR, "[SemanticError]"),
    ("return 1;", EXIT_STATIC_ERROR, "[SemanticError]"),
    ("print 1 / 0;", EXIT_RUNTIME_ERROR, "[RuntimeError]"),
])
def test_run_file_exit_status(tmp_path, code, status, stream_has):
    lox, _, err = session()
    assert lox.run_file(write(tmp_path, code)) == status
    assert stream_has in err.getvalue()

def test_run_file_output(tmp_path):
    lox, out, err = session()
    lox.run_file(write(tmp_path, 'var a = "hola";\nprint a;\n'))
    assert out.getvalue() == "hola\n"
    assert err.getvalue() == ""

def test_static_error_skips_execution(tmp_path):
    lox, out, _ = session()
    status = lox.run_file(write(tmp_path, 'print "antes";\n{ var a = 1; }'))
    assert status == EXIT_STATIC_ERROR
    assert out.getvalue() == ""

def test_repl_echoes_expression_values():
    lox, out, _ = session()
    lox.run_prompt(io.StringIO("var a = 1;\na + 2;\nprint a;\n"))
    assert out.getvalue() == "> > 3\n> 1\n> "

def test_repl_keeps_state_between_lines():
    lox, out, _ = session()
    lox.run_prompt(io.StringIO('fun greet(n) { return "hola " + n; }\ngreet("ana");\n'))
    assert "hola ana\n" in out.getvalue()

def test_repl_accumulates_local_distances():
    lox, out, _ = session()
    lox.run_prompt(io.StringIO("{ var a = 1; print a; }\n{ var b = 2; print b; }\n"))
    assert out.getvalue() == "> 1\n> 2\n> "
    # una entrada por cada línea; ninguna pisa a la anterior
    assert sorted(lox.interpreter.locals.values()) == [0, 0]

def test_repl_recovers_after_errors():
    lox, out, err = session()
    lox.run_prompt(io.StringIO("print x;\nprint 1\nprint 2;\n"))
    assert "[RuntimeError]" in err.getvalue()
    assert "[SyntaxError]" in err.getvalue()
    assert "2\n" in out.getvalue()
    assert not lox.reporter.has_errors

def test_main_usage(capsys):
    assert main(["a.lox", "b.lox"]) == EXIT_USAGE
    assert "Uso: lox [script]" in capsys.readouterr().out

def test_main_runs_script(tmp_path, capsys):
    assert main([write(tmp_path, "print 2 * 21;")]) == 0
    assert capsys.readouterr().out == "42\n"
