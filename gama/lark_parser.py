"""Lark front end for the Gama language.

An alternative to the recursive-descent :class:`gama.parser.Parser` that
accepts exactly the same language and builds the same AST:

1. **Lexing**: the token list produced by :func:`gama.lexer.tokenize` is fed
   to Lark through a custom lexer, so both front ends share one tokenizer
   (case-insensitive keywords, line tracking and capacity limits included).
   Punctuation and keywords that carry no information are mapped to
   ``_``-prefixed terminals and therefore filtered out of the parse tree.

2. **Parsing**: a Lark LALR parser builds a parse tree, which
   :class:`ASTTransformer` turns into :mod:`gama.ast` nodes.

The dangling ``Sino`` is resolved by LALR's shift preference, binding it to
the nearest ``Si``.
"""

from __future__ import annotations

from typing import Iterator, List

from lark import Lark, Token as LarkToken, Transformer, v_args
from lark.exceptions import UnexpectedInput, UnexpectedToken, VisitError
from lark.lexer import Lexer

from .ast import (
    Program, VarDecl, Declarator, PrintStmt, SumStmt, ReadStmt, AssignStmt,
    Block, IfStmt, WhileStmt, SwitchStmt, CaseClause,
    Literal, StringLit, Ident, UnaryOp, BinaryOp,
)
from .errors import ParseError
from .lexer import Token, TokenKind

# Token kinds that keep their value in the parse tree; every other kind
# becomes an anonymous (filtered) terminal.
KEPT_KINDS = frozenset({
    TokenKind.TYPE, TokenKind.IDENT, TokenKind.NUMBER, TokenKind.STRING,
    TokenKind.EQ, TokenKind.NE, TokenKind.LT, TokenKind.LE, TokenKind.GT,
    TokenKind.GE, TokenKind.PLUS, TokenKind.MINUS, TokenKind.STAR,
    TokenKind.SLASH, TokenKind.PERCENT, TokenKind.CARET, TokenKind.UNKNOWN,
})


def terminal_name(kind: TokenKind) -> str:
    return kind.name if kind in KEPT_KINDS else '_' + kind.name


GAMA_GRAMMAR = r"""
    start: statement*

    // Statements
    ?statement: var_decl
              | print_stmt
              | sum_stmt
              | read_stmt
              | assign_stmt
              | if_stmt
              | while_stmt
              | switch_stmt
              | block

    var_decl: TYPE declarator (_COMMA declarator)* _SEMI
    declarator: IDENT (_ASSIGN expr)?

    print_stmt: _PRINT _LPAREN print_arg _RPAREN _SEMI   -> print_paren
              | _PRINT _LBRACE print_arg _RBRACE _SEMI   -> print_brace
    ?print_arg: STRING | expr

    sum_stmt: _SUM expr _SEMI
    read_stmt: _READ _LPAREN IDENT _RPAREN _SEMI
    assign_stmt: IDENT _ASSIGN expr _SEMI

    if_stmt: _IF _LPAREN expr _RPAREN statement (_ELSE statement)?
    while_stmt: _WHILE _LPAREN expr _RPAREN statement

    switch_stmt: _SWITCH _LPAREN expr _RPAREN _LBRACE case_list default_clause? _RBRACE
    case_list: (case_clause+ (_BREAK _SEMI)?)?
    case_clause: _CASE NUMBER _COLON statement
    default_clause: _DEFAULT _COLON statement

    block: _LBRACE statement* _RBRACE

    // Expressions, lowest precedence first; all levels left-associative
    ?expr: relational
    ?relational: additive ((EQ | NE | LT | GT | LE | GE) additive)*
    ?additive: multiplicative ((PLUS | MINUS) multiplicative)*
    ?multiplicative: power ((STAR | SLASH | PERCENT) power)*
    ?power: unary (CARET unary)*
    ?unary: MINUS primary   -> neg
          | primary
    ?primary: _LPAREN expr _RPAREN
            | NUMBER          -> number
            | IDENT           -> ident

    %declare TYPE IDENT NUMBER STRING UNKNOWN
    %declare EQ NE LT LE GT GE PLUS MINUS STAR SLASH PERCENT CARET
    %declare _PRINT _READ _SUM _IF _ELSE _WHILE _SWITCH _CASE _DEFAULT _BREAK
    %declare _COMMA _SEMI _LPAREN _RPAREN _LBRACE _RBRACE _COLON _ASSIGN
"""


class GamaTokenLexer(Lexer):
    """Adapts a list of :class:`gama.lexer.Token` to Lark tokens."""
    def __init__(self, lexer_conf):
        pass

    def lex(self, data: List[Token]) -> Iterator[LarkToken]:
        for token in data:
            if token.kind is TokenKind.EOF:
                break
            yield LarkToken(terminal_name(token.kind), token.text,
                            line=token.line, column=token.column)


GAMA_PARSER = Lark(
    GAMA_GRAMMAR,
    parser='lalr',
    lexer=GamaTokenLexer,
    propagate_positions=True,
)


def fold_binary(items) -> BinaryOp:
    """Build a left-associative chain from `operand (op operand)*` children."""
    left = items[0]
    for i in range(1, len(items), 2):
        op = items[i]
        left = BinaryOp(str(op), left, items[i + 1], line=op.line)
    return left


class ASTTransformer(Transformer):
    """Transforms the raw parse tree into an AST."""

    def start(self, items):
        return Program(body=list(items))

    @v_args(meta=True)
    def var_decl(self, meta, items):
        type_token = items[0]
        return VarDecl(str(type_token), list(items[1:]), line=type_token.line)

    def declarator(self, items):
        name = items[0]
        init = items[1] if len(items) > 1 else None
        return Declarator(str(name), init, line=name.line)

    def _print(self, meta, items, delimiter):
        arg = items[0]
        if isinstance(arg, LarkToken) and arg.type == 'STRING':
            arg = StringLit(str(arg), line=arg.line)
        return PrintStmt(arg, delimiter, line=meta.line)

    @v_args(meta=True)
    def print_paren(self, meta, items):
        return self._print(meta, items, '(')

    @v_args(meta=True)
    def print_brace(self, meta, items):
        return self._print(meta, items, '{')

    @v_args(meta=True)
    def sum_stmt(self, meta, items):
        return SumStmt(items[0], line=meta.line)

    @v_args(meta=True)
    def read_stmt(self, meta, items):
        return ReadStmt(str(items[0]), line=meta.line)

    def assign_stmt(self, items):
        name, value = items
        return AssignStmt(str(name), value, line=name.line)

    @v_args(meta=True)
    def if_stmt(self, meta, items):
        else_branch = items[2] if len(items) > 2 else None
        return IfStmt(items[0], items[1], else_branch, line=meta.line)

    @v_args(meta=True)
    def while_stmt(self, meta, items):
        return WhileStmt(items[0], items[1], line=meta.line)

    @v_args(meta=True)
    def switch_stmt(self, meta, items):
        subject, cases = items[0], items[1]
        default = items[2] if len(items) > 2 else None
        return SwitchStmt(subject, cases, default, line=meta.line)

    def case_list(self, items):
        return list(items)

    @v_args(meta=True)
    def case_clause(self, meta, items):
        label, body = items
        return CaseClause(int(label), body, line=meta.line)

    def default_clause(self, items):
        return items[0]

    @v_args(meta=True)
    def block(self, meta, items):
        line = meta.line if not meta.empty else 0
        return Block(list(items), line=line)

    # Expressions
    def relational(self, items):
        return fold_binary(items)

    def additive(self, items):
        return fold_binary(items)

    def multiplicative(self, items):
        return fold_binary(items)

    def power(self, items):
        return fold_binary(items)

    def neg(self, items):
        op, operand = items
        return UnaryOp('-', operand, line=op.line)

    def number(self, items):
        token = items[0]
        return Literal(int(token), line=token.line)

    def ident(self, items):
        token = items[0]
        return Ident(str(token), line=token.line)


def describe_lark_token(token: LarkToken) -> str:
    if token.type == '$END':
        return "EOF 'EOF'"
    return f"{token.type.lstrip('_')} {token.value!r}"


def parse_tokens(tokens: List[Token]) -> Program:
    """Parse a token list ending with EOF into a Program AST.

    Raises:
        ParseError: when the tokens do not form a valid program.
    """
    if not tokens or tokens[-1].kind is not TokenKind.EOF:
        raise ValueError("token list must end with an EOF token")
    try:
        tree = GAMA_PARSER.parse(tokens)
    except UnexpectedToken as e:
        token = e.token
        line = token.line if isinstance(token.line, int) else tokens[-1].line
        expected = ', '.join(sorted(name.lstrip('_') for name in e.expected))
        raise ParseError(
            f"unexpected {describe_lark_token(token)}, expected one of: {expected}", line) from None
    except UnexpectedInput as e:
        raise ParseError(str(e), getattr(e, 'line', None)) from None
    try:
        return ASTTransformer().transform(tree)
    except VisitError as e:
        raise e.orig_exc from None
