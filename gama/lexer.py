"""Tokenizer for the Gama language.

The whole source text is converted into a list of tokens before parsing
starts. Every lexical unit becomes one :class:`Token` and the list always
ends with exactly one ``EOF`` token. Whitespace (space, tab, CR, LF) is
skipped; line feeds advance the line counter used in diagnostics.

Characters that do not start any known token are not rejected here: they
become ``UNKNOWN`` tokens and surface as syntax errors once the parser
meets them. The only lexical errors are an unterminated string literal and
exceeding one of the optional capacity limits.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional

from .errors import LexicalError

# Capacity limits of the classic implementation, used as the CLI defaults.
DEFAULT_MAX_TOKENS = 2048
DEFAULT_MAX_LEXEME_LEN = 128


class TokenKind(Enum):
    # Reserved words
    TYPE = 'TYPE'
    PRINT = 'PRINT'
    READ = 'READ'
    SUM = 'SUM'
    IF = 'IF'
    ELSE = 'ELSE'
    WHILE = 'WHILE'
    SWITCH = 'SWITCH'
    CASE = 'CASE'
    DEFAULT = 'DEFAULT'
    BREAK = 'BREAK'
    # Names and literals
    IDENT = 'IDENT'
    NUMBER = 'NUMBER'
    STRING = 'STRING'
    # Punctuation
    COMMA = ','
    SEMI = ';'
    LPAREN = '('
    RPAREN = ')'
    LBRACE = '{'
    RBRACE = '}'
    COLON = ':'
    # Relational and assignment operators
    ASSIGN = '='
    EQ = '=='
    NE = '!='
    LT = '<'
    LE = '<='
    GT = '>'
    GE = '>='
    # Arithmetic operators
    PLUS = '+'
    MINUS = '-'
    STAR = '*'
    SLASH = '/'
    PERCENT = '%'
    CARET = '^'
    # Special
    EOF = 'EOF'
    UNKNOWN = 'UNKNOWN'

    @property
    def code(self) -> int:
        """Stable numeric id of the kind, used by the token dump."""
        return _KIND_CODES[self]


_KIND_CODES: Dict[TokenKind, int] = {kind: i for i, kind in enumerate(TokenKind)}

RESERVED_KINDS = frozenset({
    TokenKind.TYPE, TokenKind.PRINT, TokenKind.READ, TokenKind.SUM,
    TokenKind.IF, TokenKind.ELSE, TokenKind.WHILE, TokenKind.SWITCH,
    TokenKind.CASE, TokenKind.DEFAULT, TokenKind.BREAK,
})
SYMBOL_KINDS = frozenset({
    TokenKind.COMMA, TokenKind.SEMI, TokenKind.LPAREN, TokenKind.RPAREN,
    TokenKind.LBRACE, TokenKind.RBRACE, TokenKind.COLON,
})
OPERATOR_KINDS = frozenset({
    TokenKind.ASSIGN, TokenKind.EQ, TokenKind.NE, TokenKind.LT, TokenKind.LE,
    TokenKind.GT, TokenKind.GE, TokenKind.PLUS, TokenKind.MINUS,
    TokenKind.STAR, TokenKind.SLASH, TokenKind.PERCENT, TokenKind.CARET,
})

# Keyword lookup is case-insensitive; the token keeps the original spelling.
KEYWORDS: Dict[str, TokenKind] = {
    'entero': TokenKind.TYPE,
    'caracter': TokenKind.TYPE,
    'flotante': TokenKind.TYPE,
    'var': TokenKind.TYPE,
    'const': TokenKind.TYPE,
    'items': TokenKind.TYPE,
    'item': TokenKind.TYPE,
    'imprimir': TokenKind.PRINT,
    'print': TokenKind.PRINT,
    'leer': TokenKind.READ,
    'read': TokenKind.READ,
    'suma': TokenKind.SUM,
    'si': TokenKind.IF,
    'if': TokenKind.IF,
    'sino': TokenKind.ELSE,
    'else': TokenKind.ELSE,
    'mientras': TokenKind.WHILE,
    'while': TokenKind.WHILE,
    'switch': TokenKind.SWITCH,
    'case': TokenKind.CASE,
    'caso': TokenKind.CASE,
    'default': TokenKind.DEFAULT,
    'predeterminado': TokenKind.DEFAULT,
    'break': TokenKind.BREAK,
    'romper': TokenKind.BREAK,
}

WHITESPACE = ' \t\r\n'
LETTERS = 'abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ'
DIGITS = '0123456789'

TWO_CHAR_OPS = {
    '==': TokenKind.EQ,
    '!=': TokenKind.NE,
    '<=': TokenKind.LE,
    '>=': TokenKind.GE,
}
SINGLE_CHAR_TOKENS = {
    '=': TokenKind.ASSIGN,
    '<': TokenKind.LT,
    '>': TokenKind.GT,
    ',': TokenKind.COMMA,
    ';': TokenKind.SEMI,
    '(': TokenKind.LPAREN,
    ')': TokenKind.RPAREN,
    '{': TokenKind.LBRACE,
    '}': TokenKind.RBRACE,
    ':': TokenKind.COLON,
    '+': TokenKind.PLUS,
    '-': TokenKind.MINUS,
    '*': TokenKind.STAR,
    '/': TokenKind.SLASH,
    '%': TokenKind.PERCENT,
    '^': TokenKind.CARET,
}


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    line: int
    column: int = 0

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.text!r}, line={self.line})"


def tokenize(source: str,
             max_tokens: Optional[int] = None,
             max_lexeme_len: Optional[int] = None) -> List[Token]:
    """Convert source text into a list of tokens ending with ``EOF``.

    Rules are tried in this order at each token boundary: word (keyword or
    identifier), integer literal, string literal, two-character operator,
    single-character punctuation/operator, and finally ``UNKNOWN``.

    `max_tokens` bounds the length of the returned list (``EOF`` included)
    and `max_lexeme_len` the number of characters of a single lexeme. Both
    default to ``None``, meaning unbounded.

    Raises:
        LexicalError: on an unterminated string or an exceeded limit.
    """
    tokens: List[Token] = []
    i = 0
    line = 1
    col = 1
    length = len(source)

    def emit(kind: TokenKind, text: str, tok_line: int, tok_col: int) -> None:
        if max_tokens is not None and len(tokens) >= max_tokens:
            raise LexicalError(f"too many tokens (limit {max_tokens})", tok_line)
        if max_lexeme_len is not None and len(text) > max_lexeme_len:
            raise LexicalError(
                f"lexeme longer than {max_lexeme_len} characters: {text[:20]!r}...", tok_line)
        tokens.append(Token(kind, text, tok_line, tok_col))

    while i < length:
        c = source[i]
        if c in WHITESPACE:
            if c == '\n':
                line += 1
                col = 1
            else:
                col += 1
            i += 1
            continue
        start = i
        start_col = col
        # Keyword or identifier
        if c in LETTERS:
            while i < length and (source[i] in LETTERS or source[i] in DIGITS):
                i += 1
            text = source[start:i]
            emit(KEYWORDS.get(text.lower(), TokenKind.IDENT), text, line, start_col)
            col += i - start
            continue
        # Integer literal
        if c in DIGITS:
            while i < length and source[i] in DIGITS:
                i += 1
            emit(TokenKind.NUMBER, source[start:i], line, start_col)
            col += i - start
            continue
        # String literal, must close on the same line
        if c == '"':
            i += 1
            while i < length and source[i] not in '"\n':
                i += 1
            if i >= length or source[i] != '"':
                raise LexicalError("unterminated string literal", line)
            emit(TokenKind.STRING, source[start + 1:i], line, start_col)
            i += 1
            col += i - start
            continue
        pair = source[i:i + 2]
        if pair in TWO_CHAR_OPS:
            emit(TWO_CHAR_OPS[pair], pair, line, start_col)
            i += 2
            col += 2
            continue
        kind = SINGLE_CHAR_TOKENS.get(c, TokenKind.UNKNOWN)
        emit(kind, c, line, start_col)
        i += 1
        col += 1
    emit(TokenKind.EOF, 'EOF', line, col)
    return tokens


def token_source(token: Token) -> str:
    """Render a single token back to the text that produces it."""
    if token.kind is TokenKind.STRING:
        return f'"{token.text}"'
    return token.text


def detokenize(tokens: Iterable[Token]) -> str:
    """Join tokens back into source text with normalized whitespace."""
    return ' '.join(token_source(t) for t in tokens if t.kind is not TokenKind.EOF)
