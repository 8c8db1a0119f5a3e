"""Token dump and execution report writers.

The token dump lists every token (``EOF`` included), one per line, as
``line:\\tkind-number\\ttext``. The report groups the lexemes by lexical
category and records the parse verdict and the program output of a run.
"""

from pathlib import Path
from typing import Iterable, List, Optional, Union

from .lexer import Token, TokenKind, RESERVED_KINDS, SYMBOL_KINDS, OPERATOR_KINDS

PathLike = Union[str, Path]

LEXICAL_SECTIONS = (
    ('Palabras reservadas', RESERVED_KINDS),
    ('Identificadores', frozenset({TokenKind.IDENT})),
    ('Numeros', frozenset({TokenKind.NUMBER})),
    ('Cadenas', frozenset({TokenKind.STRING})),
    ('Operadores', OPERATOR_KINDS),
    ('Simbolos', SYMBOL_KINDS),
)


def token_dump(tokens: Iterable[Token]) -> str:
    return ''.join(f"{t.line}:\t{t.kind.code}\t{t.text}\n" for t in tokens)


def write_token_dump(tokens: Iterable[Token], path: PathLike) -> None:
    with open(path, 'w', encoding='utf-8') as f:
        f.write(token_dump(tokens))


def lexical_sections(tokens: List[Token]) -> str:
    parts = []
    for title, kinds in LEXICAL_SECTIONS:
        lines = [f"-- {title} --\n"]
        lines.extend(f"TOK_{t.kind.name}\t{t.text}\n" for t in tokens if t.kind in kinds)
        parts.append(''.join(lines))
    return '\n'.join(parts)


def format_report(source: str, tokens: List[Token], parse_result: str, output: str,
                  error: Optional[str] = None) -> str:
    """Render the run report.

    `parse_result` is ``OK`` or the syntax diagnostic; `output` is the
    program output captured so far. A runtime `error`, if any, is appended
    to the execution section.
    """
    if source and not source.endswith('\n'):
        source += '\n'
    report = "=== Codigo fuente ===\n" + (source or '\n')
    report += "\n=== Lexer ===\n" + lexical_sections(tokens)
    report += f"\n=== Parser ===\n{parse_result}\n"
    report += "\n=== Ejecucion ===\n" + output
    if error:
        report += error + '\n'
    return report


def write_report(path: PathLike, source: str, tokens: List[Token], parse_result: str,
                 output: str, error: Optional[str] = None) -> None:
    with open(path, 'w', encoding='utf-8') as f:
        f.write(format_report(source, tokens, parse_result, output, error))
