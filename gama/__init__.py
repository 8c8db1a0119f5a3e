# Gama language package
# This package provides a tokenizer, parsers and an interpreter for the Gama teaching language.
from .errors import GamaError
from .interpreter import run_program, run_source, parse_program, Interpreter, RunResult
from .lexer import tokenize, detokenize, Token, TokenKind

__all__ = [
    'run_program',
    'run_source',
    'parse_program',
    'Interpreter',
    'RunResult',
    'GamaError',
    'tokenize',
    'detokenize',
    'Token',
    'TokenKind',
]
