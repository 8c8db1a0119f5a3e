"""Abstract Syntax Tree (AST) definitions for the Gama language.

A program is parsed once into these nodes and then executed by walking
them, so control-flow bodies never have to be re-parsed. Statement and
expression nodes are plain dataclasses; the `line` of each node is kept
for diagnostics but ignored when comparing nodes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass
class Program(Node):
    body: List[Node]


# Statements

@dataclass
class Declarator(Node):
    name: str
    init: Optional[Node]
    line: int = field(default=0, compare=False)


@dataclass
class VarDecl(Node):
    type_name: str  # type keyword as written, e.g. 'Entero'
    declarators: List[Declarator]
    line: int = field(default=0, compare=False)


@dataclass
class PrintStmt(Node):
    value: Node  # StringLit or an expression
    delimiter: str = '('  # '(' or '{' as written in the source
    line: int = field(default=0, compare=False)


@dataclass
class SumStmt(Node):
    expr: Node
    line: int = field(default=0, compare=False)


@dataclass
class ReadStmt(Node):
    name: str
    line: int = field(default=0, compare=False)


@dataclass
class AssignStmt(Node):
    name: str
    value: Node
    line: int = field(default=0, compare=False)


@dataclass
class Block(Node):
    statements: List[Node]
    line: int = field(default=0, compare=False)


@dataclass
class IfStmt(Node):
    condition: Node
    then_branch: Node
    else_branch: Optional[Node]
    line: int = field(default=0, compare=False)


@dataclass
class WhileStmt(Node):
    condition: Node
    body: Node
    line: int = field(default=0, compare=False)


@dataclass
class CaseClause(Node):
    value: int
    body: Node
    line: int = field(default=0, compare=False)


@dataclass
class SwitchStmt(Node):
    subject: Node
    cases: List[CaseClause]
    default: Optional[Node]
    line: int = field(default=0, compare=False)


# Expressions

@dataclass
class Literal(Node):
    value: int
    line: int = field(default=0, compare=False)


@dataclass
class StringLit(Node):
    text: str
    line: int = field(default=0, compare=False)


@dataclass
class Ident(Node):
    name: str
    line: int = field(default=0, compare=False)


@dataclass
class UnaryOp(Node):
    op: str
    operand: Node
    line: int = field(default=0, compare=False)


@dataclass
class BinaryOp(Node):
    op: str
    left: Node
    right: Node
    line: int = field(default=0, compare=False)
