"""Interpreter for the Gama language.

This module ties the toolchain together: source text is tokenized in full,
parsed into an AST (by the hand-written recursive-descent parser or the
lark front end) and the AST is executed by :class:`Interpreter`.

Execution semantics:

* every value is an integer; relational operators yield 0 or 1 and any
  nonzero value counts as true;
* a single flat :class:`SymbolTable` holds every variable for the whole run;
  blocks do not open scopes;
* the first error aborts the run. Errors are raised as :class:`GamaError`
  subclasses; :func:`run_source` turns them into a :class:`RunResult` for
  callers that want to continue.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import List, Optional, TextIO

from .ast import (
    Program, VarDecl, PrintStmt, SumStmt, ReadStmt, AssignStmt,
    Block, IfStmt, WhileStmt, SwitchStmt,
    Literal, StringLit, Ident, UnaryOp, BinaryOp, Node,
)
from .console import Console
from .environment import SymbolTable
from .errors import GamaError, DivisionByZero, ModuloByZero, NestingTooDeep, ParseError
from .lexer import Token, tokenize
from .parser import Parser

PARSERS = ('descent', 'lark')


def parse_tokens(tokens: List[Token], parser: str = 'descent') -> Program:
    """Parse an already tokenized program with the selected front end."""
    if parser not in PARSERS:
        raise ValueError(f"unknown parser {parser!r}, expected one of {PARSERS}")
    try:
        if parser == 'descent':
            return Parser(tokens).parse_program()
        from .lark_parser import parse_tokens as lark_parse_tokens
        return lark_parse_tokens(tokens)
    except RecursionError:
        raise ParseError("expression or block nesting too deep") from None


def parse_program(source: str, parser: str = 'descent',
                  max_tokens: Optional[int] = None,
                  max_lexeme_len: Optional[int] = None) -> Program:
    """Tokenize and parse source code into a Program AST."""
    tokens = tokenize(source, max_tokens=max_tokens, max_lexeme_len=max_lexeme_len)
    return parse_tokens(tokens, parser)


def trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero, as C does."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


class Interpreter:
    """Executes a Gama Program AST."""
    def __init__(self, debug_level: int = 0, debug_file: Optional[str] = 'debug.txt',
                 stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None,
                 max_symbols: Optional[int] = None):
        self.symbols = SymbolTable(max_symbols)
        self.console = Console(stdin, stdout)
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 and debug_file else None

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg, file=sys.stderr)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def run(self, program: Program) -> str:
        """Execute every statement of `program` and return the captured output."""
        try:
            try:
                self.execute_block(program.body)
            except RecursionError:
                raise NestingTooDeep("statements nested too deeply to execute") from None
            self.debug(f"run finished, {len(self.symbols)} symbols")
        except GamaError as e:
            self.debug(f"run failed: {e}")
            raise
        finally:
            self.close()
        return self.console.output

    def execute_block(self, statements: List[Node]):
        for stmt in statements:
            self.execute(stmt)

    def execute(self, node: Node):
        if isinstance(node, VarDecl):
            for decl in node.declarators:
                self.symbols.undefine(decl.name)
                if decl.init is not None:
                    self.symbols.set(decl.name, self.evaluate(decl.init))
                if self.debug_level >= 2:
                    self.debug(f"declare {node.type_name} {decl.name}")
            return
        if isinstance(node, PrintStmt):
            if isinstance(node.value, StringLit):
                self.console.write_line(node.value.text)
            else:
                self.console.write_line(str(self.evaluate(node.value)))
            return
        if isinstance(node, SumStmt):
            self.console.write_line(str(self.evaluate(node.expr)))
            return
        if isinstance(node, ReadStmt):
            value = self.console.read_int(node.line)
            self.symbols.set(node.name, value)
            if self.debug_level >= 2:
                self.debug(f"read {node.name} = {value}")
            return
        if isinstance(node, AssignStmt):
            value = self.evaluate(node.value)
            self.symbols.set(node.name, value)
            if self.debug_level >= 2:
                self.debug(f"assign {node.name} = {value}")
            return
        if isinstance(node, Block):
            self.execute_block(node.statements)
            return
        if isinstance(node, IfStmt):
            cond = self.evaluate(node.condition)
            if self.debug_level >= 3:
                self.debug(f"if condition {cond} on line {node.line}")
            if cond != 0:
                self.execute(node.then_branch)
            elif node.else_branch is not None:
                self.execute(node.else_branch)
            return
        if isinstance(node, WhileStmt):
            iterations = 0
            while self.evaluate(node.condition) != 0:
                iterations += 1
                if self.debug_level >= 3:
                    self.debug(f"while iteration {iterations} on line {node.line}")
                self.execute(node.body)
            return
        if isinstance(node, SwitchStmt):
            subject = self.evaluate(node.subject)
            for case in node.cases:
                if case.value == subject:
                    if self.debug_level >= 3:
                        self.debug(f"switch {subject} -> case {case.value}")
                    self.execute(case.body)
                    return
            if node.default is not None:
                if self.debug_level >= 3:
                    self.debug(f"switch {subject} -> default")
                self.execute(node.default)
            return
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def evaluate(self, node: Node) -> int:
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Ident):
            return self.symbols.get(node.name, node.line)
        if isinstance(node, UnaryOp):
            operand = self.evaluate(node.operand)
            if node.op == '-':
                return -operand
            raise NotImplementedError(f"unsupported unary operator {node.op}")
        if isinstance(node, BinaryOp):
            # Left-associative chains nest on the left; walk that spine with a loop.
            spine = []
            while isinstance(node, BinaryOp):
                spine.append(node)
                node = node.left
            left = self.evaluate(node)
            for op_node in reversed(spine):
                right = self.evaluate(op_node.right)
                result = self.apply_binary_op(op_node.op, left, right, op_node.line)
                if self.debug_level >= 4:
                    self.debug(f"{left} {op_node.op} {right} = {result}")
                left = result
            return left
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def apply_binary_op(self, op: str, a: int, b: int, line: Optional[int] = None) -> int:
        if op == '+':
            return a + b
        if op == '-':
            return a - b
        if op == '*':
            return a * b
        if op == '/':
            if b == 0:
                raise DivisionByZero("division by zero", line)
            return trunc_div(a, b)
        if op == '%':
            if b == 0:
                raise ModuloByZero("modulo by zero", line)
            return a - b * trunc_div(a, b)
        if op == '^':
            if b >= 0:
                return a ** b
            if a == 0:
                raise DivisionByZero("zero raised to a negative power", line)
            # |a ** b| < 1 unless |a| == 1, so the truncated real result is exact.
            if a == 1:
                return 1
            if a == -1:
                return 1 if b % 2 == 0 else -1
            return 0
        if op == '==':
            return 1 if a == b else 0
        if op == '!=':
            return 1 if a != b else 0
        if op == '<':
            return 1 if a < b else 0
        if op == '>':
            return 1 if a > b else 0
        if op == '<=':
            return 1 if a <= b else 0
        if op == '>=':
            return 1 if a >= b else 0
        raise NotImplementedError(f"unknown operator {op}")


@dataclass
class RunResult:
    """Outcome of :func:`run_source`: tokens, captured output and the error, if any."""
    tokens: List[Token]
    output: str
    ok: bool
    error: Optional[GamaError] = None
    symbols: dict = field(default_factory=dict)


def run_program(source: str, debug_level: int = 0, parser: str = 'descent',
                stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> str:
    """Convenience function to parse and run a program, raising on the first error."""
    ast_program = parse_program(source, parser=parser)
    interpreter = Interpreter(debug_level=debug_level, stdin=stdin, stdout=stdout)
    return interpreter.run(ast_program)


def run_source(source: str, parser: str = 'descent',
               stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None,
               debug_level: int = 0, debug_file: Optional[str] = 'debug.txt',
               max_tokens: Optional[int] = None, max_lexeme_len: Optional[int] = None,
               max_symbols: Optional[int] = None) -> RunResult:
    """Tokenize, parse and execute `source`, reporting failure in the result.

    Nothing is executed unless the whole program tokenizes and parses.
    """
    interpreter = Interpreter(debug_level=debug_level, debug_file=debug_file,
                              stdin=stdin, stdout=stdout, max_symbols=max_symbols)
    tokens: List[Token] = []
    try:
        tokens = tokenize(source, max_tokens=max_tokens, max_lexeme_len=max_lexeme_len)
        interpreter.debug(f"tokenized {len(tokens)} tokens")
        program = parse_tokens(tokens, parser)
        interpreter.debug(f"parsed {len(program.body)} statements with the {parser} parser")
    except GamaError as e:
        interpreter.debug(f"front end failed: {e}")
        interpreter.close()
        return RunResult(tokens, '', False, e)
    try:
        interpreter.run(program)
    except GamaError as e:
        return RunResult(tokens, interpreter.console.output, False, e,
                         interpreter.symbols.snapshot())
    return RunResult(tokens, interpreter.console.output, True, None,
                     interpreter.symbols.snapshot())
