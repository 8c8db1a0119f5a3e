from typing import Optional


class GamaError(Exception):
    """Base exception for every fatal Gama diagnostic.

    Each error carries a short `kind` name (used as the diagnostic prefix),
    the human readable message and, when known, the source line.
    """
    kind = 'Error'

    def __init__(self, message: str, line: Optional[int] = None):
        self.message = message
        self.line = line
        text = f"{self.kind}: {message}"
        if line is not None:
            text += f" (line {line})"
        super().__init__(text)


class LexicalError(GamaError):
    """Unterminated string literal or a configured lexer capacity exceeded."""
    kind = 'LexicalError'


class ParseError(GamaError):
    """Syntax error: the parser found a token it did not expect."""
    kind = 'SyntaxError'


class UndeclaredVariable(GamaError):
    kind = 'UndeclaredVariable'

    def __init__(self, name: str, line: Optional[int] = None):
        super().__init__(f"variable '{name}' is not declared", line)
        self.name = name


class UninitializedVariable(GamaError):
    kind = 'UninitializedVariable'

    def __init__(self, name: str, line: Optional[int] = None):
        super().__init__(f"variable '{name}' is not initialized", line)
        self.name = name


class DivisionByZero(GamaError):
    kind = 'DivisionByZero'


class ModuloByZero(GamaError):
    kind = 'ModuloByZero'


class RuntimeInputError(GamaError):
    """`Leer` could not obtain an integer from the input stream."""
    kind = 'RuntimeInputError'


class SymbolTableFull(GamaError):
    kind = 'SymbolTableFull'


class NestingTooDeep(GamaError):
    """Statements nested deeper than the interpreter's call stack allows."""
    kind = 'NestingTooDeep'
