import sys
from typing import Any, List, Optional, TextIO

from .environment import Environment
from .errors import ErrorReporter
from .interpreter import Interpreter, stringify
from .parser import Parser
from .resolver import Resolver
from .runtime import define_builtins

EXIT_USAGE = 64
EXIT_STATIC_ERROR = 65
EXIT_RUNTIME_ERROR = 70


class Lox:
    """Sesión del intérprete: un entorno global, un reporter y un intérprete."""

    def __init__(self, out: Optional[TextIO] = None, err: Optional[TextIO] = None):
        self.out = out if out is not None else sys.stdout
        self.reporter = ErrorReporter(stream=err if err is not None else sys.stderr)
        self.globals = define_builtins(Environment())
        self.interpreter = Interpreter(self.globals, self.reporter, out=self.out)

    def run(self, source: str, repl: bool = False) -> List[Any]:
        statements = Parser(self.reporter).parse(source)
        if statements is None:
            return []

        table = Resolver(self.reporter).resolve(statements)
        if table is None:
            return []
        self.interpreter.resolve(table)

        results = self.interpreter.interpret(statements)
        if repl and not self.reporter.had_runtime_error:
            for value in results:
                print(stringify(value), file=self.out)
        return results

    def run_file(self, path: str) -> int:
        with open(path, encoding="utf-8") as f:
            source = f.read()
        self.run(source)
        if self.reporter.had_error:
            return EXIT_STATIC_ERROR
        if self.reporter.had_runtime_error:
            return EXIT_RUNTIME_ERROR
        return 0

    def run_prompt(self, stdin: Optional[TextIO] = None):
        stdin = stdin if stdin is not None else sys.stdin
        while True:
            print("> ", end="", file=self.out, flush=True)
            line = stdin.readline()
            if not line:
                break
            self.run(line, repl=True)
            # un error en una línea no afecta a las siguientes
            self.reporter.reset()


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) > 1:
        print("Uso: lox [script]")
        return EXIT_USAGE

    lox = Lox()
    if argv:
        return lox.run_file(argv[0])
    lox.run_prompt()
    return 0
