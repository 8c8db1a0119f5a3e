"""Recursive-descent parser for the Gama language.

Each grammar rule is one method consuming tokens from a single cursor and
returning an AST node. The grammar (statements first, then expressions from
lowest to highest precedence):

    program   := stmt* EOF
    stmt      := declStmt | printStmt | sumStmt | readStmt | assignStmt
               | ifStmt | whileStmt | switchStmt | block
    declStmt  := TYPE IDENT ('=' expr)? (',' IDENT ('=' expr)?)* ';'
    printStmt := PRINT ( '(' arg ')' | '{' arg '}' ) ';'     arg := STRING | expr
    sumStmt   := SUM expr ';'
    readStmt  := READ '(' IDENT ')' ';'
    assignStmt:= IDENT '=' expr ';'
    ifStmt    := IF '(' expr ')' stmt (ELSE stmt)?
    whileStmt := WHILE '(' expr ')' stmt
    switchStmt:= SWITCH '(' expr ')' '{' (CASE NUMBER ':' stmt)* (BREAK ';')?
                 (DEFAULT ':' stmt)? '}'
    block     := '{' stmt* '}'

    expr      := addExpr (('==' | '!=' | '<' | '>' | '<=' | '>=') addExpr)*
    addExpr   := mulExpr (('+' | '-') mulExpr)*
    mulExpr   := powExpr (('*' | '/' | '%') powExpr)*
    powExpr   := unary ('^' unary)*
    unary     := '-'? primary
    primary   := '(' expr ')' | NUMBER | IDENT

All binary levels are left-associative, including '^'.
"""

from __future__ import annotations

from typing import List, Optional

from .ast import (
    Program, VarDecl, Declarator, PrintStmt, SumStmt, ReadStmt, AssignStmt,
    Block, IfStmt, WhileStmt, SwitchStmt, CaseClause,
    Literal, StringLit, Ident, UnaryOp, BinaryOp, Node,
)
from .errors import ParseError
from .lexer import Token, TokenKind


RELATIONAL_OPS = (TokenKind.EQ, TokenKind.NE, TokenKind.LT,
                  TokenKind.GT, TokenKind.LE, TokenKind.GE)
ADDITIVE_OPS = (TokenKind.PLUS, TokenKind.MINUS)
MULTIPLICATIVE_OPS = (TokenKind.STAR, TokenKind.SLASH, TokenKind.PERCENT)


def describe(kind: TokenKind) -> str:
    """Name a token kind the way diagnostics show it."""
    if kind.value != kind.name:
        return f"'{kind.value}'"
    return kind.name


class Parser:
    def __init__(self, tokens: List[Token]):
        if not tokens or tokens[-1].kind is not TokenKind.EOF:
            raise ValueError("token list must end with an EOF token")
        self.tokens = tokens
        self.pos = 0

    def peek(self) -> Token:
        return self.tokens[self.pos]

    def match(self, *kinds: TokenKind) -> bool:
        return self.peek().kind in kinds

    def consume(self, kind: TokenKind, expected: Optional[str] = None) -> Token:
        token = self.peek()
        if token.kind is not kind:
            raise self.unexpected(expected or describe(kind))
        # The cursor never moves past EOF.
        if token.kind is not TokenKind.EOF:
            self.pos += 1
        return token

    def unexpected(self, expected: str) -> ParseError:
        token = self.peek()
        return ParseError(
            f"expected {expected}, got {token.kind.name} {token.text!r}", token.line)

    def parse_program(self) -> Program:
        statements: List[Node] = []
        while not self.match(TokenKind.EOF):
            statements.append(self.parse_statement())
        self.consume(TokenKind.EOF)
        return Program(statements)

    def parse_statement(self) -> Node:
        kind = self.peek().kind
        if kind is TokenKind.TYPE:
            return self.parse_var_decl()
        if kind is TokenKind.PRINT:
            return self.parse_print_stmt()
        if kind is TokenKind.SUM:
            return self.parse_sum_stmt()
        if kind is TokenKind.READ:
            return self.parse_read_stmt()
        if kind is TokenKind.IDENT:
            return self.parse_assign_stmt()
        if kind is TokenKind.IF:
            return self.parse_if_stmt()
        if kind is TokenKind.WHILE:
            return self.parse_while_stmt()
        if kind is TokenKind.SWITCH:
            return self.parse_switch_stmt()
        if kind is TokenKind.LBRACE:
            return self.parse_block()
        raise self.unexpected('a statement')

    def parse_var_decl(self) -> VarDecl:
        type_token = self.consume(TokenKind.TYPE)
        declarators: List[Declarator] = []
        while True:
            name_token = self.consume(TokenKind.IDENT, 'identifier')
            init: Optional[Node] = None
            if self.match(TokenKind.ASSIGN):
                self.consume(TokenKind.ASSIGN)
                init = self.parse_expression()
            declarators.append(Declarator(name_token.text, init, line=name_token.line))
            if not self.match(TokenKind.COMMA):
                break
            self.consume(TokenKind.COMMA)
        self.consume(TokenKind.SEMI)
        return VarDecl(type_token.text, declarators, line=type_token.line)

    def parse_print_stmt(self) -> PrintStmt:
        print_token = self.consume(TokenKind.PRINT)
        if self.match(TokenKind.LPAREN):
            opening, closing = TokenKind.LPAREN, TokenKind.RPAREN
        elif self.match(TokenKind.LBRACE):
            opening, closing = TokenKind.LBRACE, TokenKind.RBRACE
        else:
            raise self.unexpected("'(' or '{'")
        self.consume(opening)
        if self.match(TokenKind.STRING):
            string_token = self.consume(TokenKind.STRING)
            value: Node = StringLit(string_token.text, line=string_token.line)
        else:
            value = self.parse_expression()
        self.consume(closing)
        self.consume(TokenKind.SEMI)
        return PrintStmt(value, opening.value, line=print_token.line)

    def parse_sum_stmt(self) -> SumStmt:
        sum_token = self.consume(TokenKind.SUM)
        expr = self.parse_expression()
        self.consume(TokenKind.SEMI)
        return SumStmt(expr, line=sum_token.line)

    def parse_read_stmt(self) -> ReadStmt:
        read_token = self.consume(TokenKind.READ)
        self.consume(TokenKind.LPAREN)
        name_token = self.consume(TokenKind.IDENT, 'identifier')
        self.consume(TokenKind.RPAREN)
        self.consume(TokenKind.SEMI)
        return ReadStmt(name_token.text, line=read_token.line)

    def parse_assign_stmt(self) -> AssignStmt:
        name_token = self.consume(TokenKind.IDENT, 'identifier')
        self.consume(TokenKind.ASSIGN)
        value = self.parse_expression()
        self.consume(TokenKind.SEMI)
        return AssignStmt(name_token.text, value, line=name_token.line)

    def parse_condition(self) -> Node:
        self.consume(TokenKind.LPAREN)
        condition = self.parse_expression()
        self.consume(TokenKind.RPAREN)
        return condition

    def parse_if_stmt(self) -> IfStmt:
        if_token = self.consume(TokenKind.IF)
        condition = self.parse_condition()
        then_branch = self.parse_statement()
        else_branch = None
        # A dangling Sino binds to the nearest Si.
        if self.match(TokenKind.ELSE):
            self.consume(TokenKind.ELSE)
            else_branch = self.parse_statement()
        return IfStmt(condition, then_branch, else_branch, line=if_token.line)

    def parse_while_stmt(self) -> WhileStmt:
        while_token = self.consume(TokenKind.WHILE)
        condition = self.parse_condition()
        body = self.parse_statement()
        return WhileStmt(condition, body, line=while_token.line)

    def parse_switch_stmt(self) -> SwitchStmt:
        switch_token = self.consume(TokenKind.SWITCH)
        subject = self.parse_condition()
        self.consume(TokenKind.LBRACE)
        cases: List[CaseClause] = []
        while self.match(TokenKind.CASE):
            case_token = self.consume(TokenKind.CASE)
            label = self.consume(TokenKind.NUMBER, 'integer case label')
            self.consume(TokenKind.COLON)
            body = self.parse_statement()
            cases.append(CaseClause(int(label.text), body, line=case_token.line))
            if self.match(TokenKind.BREAK):
                self.consume(TokenKind.BREAK)
                self.consume(TokenKind.SEMI)
                break
        default = None
        if self.match(TokenKind.DEFAULT):
            self.consume(TokenKind.DEFAULT)
            self.consume(TokenKind.COLON)
            default = self.parse_statement()
        self.consume(TokenKind.RBRACE)
        return SwitchStmt(subject, cases, default, line=switch_token.line)

    def parse_block(self) -> Block:
        brace = self.consume(TokenKind.LBRACE)
        statements: List[Node] = []
        while not self.match(TokenKind.RBRACE, TokenKind.EOF):
            statements.append(self.parse_statement())
        self.consume(TokenKind.RBRACE)
        return Block(statements, line=brace.line)

    # Expressions, lowest precedence first

    def parse_expression(self) -> Node:
        return self.parse_relational()

    def parse_relational(self) -> Node:
        node = self.parse_additive()
        while self.match(*RELATIONAL_OPS):
            op_token = self.consume(self.peek().kind)
            right = self.parse_additive()
            node = BinaryOp(op_token.text, node, right, line=op_token.line)
        return node

    def parse_additive(self) -> Node:
        node = self.parse_multiplicative()
        while self.match(*ADDITIVE_OPS):
            op_token = self.consume(self.peek().kind)
            right = self.parse_multiplicative()
            node = BinaryOp(op_token.text, node, right, line=op_token.line)
        return node

    def parse_multiplicative(self) -> Node:
        node = self.parse_power()
        while self.match(*MULTIPLICATIVE_OPS):
            op_token = self.consume(self.peek().kind)
            right = self.parse_power()
            node = BinaryOp(op_token.text, node, right, line=op_token.line)
        return node

    def parse_power(self) -> Node:
        node = self.parse_unary()
        while self.match(TokenKind.CARET):
            op_token = self.consume(TokenKind.CARET)
            right = self.parse_unary()
            node = BinaryOp(op_token.text, node, right, line=op_token.line)
        return node

    def parse_unary(self) -> Node:
        if self.match(TokenKind.MINUS):
            op_token = self.consume(TokenKind.MINUS)
            return UnaryOp('-', self.parse_primary(), line=op_token.line)
        return self.parse_primary()

    def parse_primary(self) -> Node:
        token = self.peek()
        if token.kind is TokenKind.LPAREN:
            self.consume(TokenKind.LPAREN)
            expr = self.parse_expression()
            self.consume(TokenKind.RPAREN)
            return expr
        if token.kind is TokenKind.NUMBER:
            self.consume(TokenKind.NUMBER)
            return Literal(int(token.text), line=token.line)
        if token.kind is TokenKind.IDENT:
            self.consume(TokenKind.IDENT)
            return Ident(token.text, line=token.line)
        raise self.unexpected("a number, identifier or '('")
