from typing import List, Optional, TextIO, Union

from .tokens import Token


class ErrorReporter:
    """Registro de errores que comparten parser, resolver e intérprete.

    Cada error queda como una línea ``[Tipo] L<línea>:C<columna> mensaje`` en
    ``errors``; si se pasa ``stream`` también se escribe ahí al momento.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream
        self.errors: List[str] = []
        self.had_error = False
        self.had_runtime_error = False

    @property
    def has_errors(self) -> bool:
        return self.had_error or self.had_runtime_error

    def reset(self):
        self.errors.clear()
        self.had_error = False
        self.had_runtime_error = False

    def syntax_error(self, line: int, column: int, msg: str):
        self.had_error = True
        self._emit(f"[SyntaxError] L{line}:C{column} {msg}")

    def report_static_error(self, where: Union[Token, int], msg: str):
        if isinstance(where, Token):
            line, col = where.line, where.column
        else:
            line, col = where, 0
        self.had_error = True
        self._emit(f"[SemanticError] L{line}:C{col} {msg}")

    def report_runtime_error(self, error: "LoxRuntimeError"):
        tok = error.token
        line = tok.line if tok else 0
        col = tok.column if tok else 0
        self.had_runtime_error = True
        self._emit(f"[RuntimeError] L{line}:C{col} {error.message}")

    def _emit(self, text: str):
        self.errors.append(text)
        if self.stream is not None:
            print(text, file=self.stream)


# ---------------- Errores estáticos ----------------

class StaticResolutionError(Exception):
    def __init__(self, token: Token, message: str):
        super().__init__(message)
        self.token = token
        self.message = message


# ---------------- Errores en tiempo de ejecución ----------------

class LoxRuntimeError(Exception):
    def __init__(self, token: Optional[Token], message: str):
        super().__init__(message)
        self.token = token
        self.message = message


class RuntimeNameError(LoxRuntimeError):
    pass


class RuntimeTypeError(LoxRuntimeError):
    pass


class RuntimeArityError(LoxRuntimeError):
    pass


class RuntimeCallError(LoxRuntimeError):
    pass


class DivisionByZeroError(LoxRuntimeError):
    pass
