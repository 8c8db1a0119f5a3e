"""JSON serialization/deserialization for the Gama AST.

This module converts between Gama AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. It supports a full
round-trip for all node types; source line numbers are kept under the
``line`` key of each node.
"""

from __future__ import annotations

from typing import Any

from .ast import (
    Program,
    VarDecl,
    Declarator,
    PrintStmt,
    SumStmt,
    ReadStmt,
    AssignStmt,
    Block,
    IfStmt,
    WhileStmt,
    CaseClause,
    SwitchStmt,
    Literal,
    StringLit,
    Ident,
    UnaryOp,
    BinaryOp,
)


def ast_to_obj(node: Any) -> Any:
    # Primitives
    if node is None:
        return None
    if isinstance(node, (int, str, bool)):
        return node

    # Node types
    if isinstance(node, Program):
        return {"type": "Program", "body": [ast_to_obj(n) for n in node.body]}
    if isinstance(node, VarDecl):
        return {
            "type": "VarDecl",
            "type_name": node.type_name,
            "declarators": [ast_to_obj(d) for d in node.declarators],
            "line": node.line,
        }
    if isinstance(node, Declarator):
        return {"type": "Declarator", "name": node.name, "init": ast_to_obj(node.init), "line": node.line}
    if isinstance(node, PrintStmt):
        return {
            "type": "PrintStmt",
            "value": ast_to_obj(node.value),
            "delimiter": node.delimiter,
            "line": node.line,
        }
    if isinstance(node, SumStmt):
        return {"type": "SumStmt", "expr": ast_to_obj(node.expr), "line": node.line}
    if isinstance(node, ReadStmt):
        return {"type": "ReadStmt", "name": node.name, "line": node.line}
    if isinstance(node, AssignStmt):
        return {"type": "AssignStmt", "name": node.name, "value": ast_to_obj(node.value), "line": node.line}
    if isinstance(node, Block):
        return {"type": "Block", "statements": [ast_to_obj(s) for s in node.statements], "line": node.line}
    if isinstance(node, IfStmt):
        return {
            "type": "IfStmt",
            "condition": ast_to_obj(node.condition),
            "then_branch": ast_to_obj(node.then_branch),
            "else_branch": ast_to_obj(node.else_branch),
            "line": node.line,
        }
    if isinstance(node, WhileStmt):
        return {
            "type": "WhileStmt",
            "condition": ast_to_obj(node.condition),
            "body": ast_to_obj(node.body),
            "line": node.line,
        }
    if isinstance(node, CaseClause):
        return {"type": "CaseClause", "value": node.value, "body": ast_to_obj(node.body), "line": node.line}
    if isinstance(node, SwitchStmt):
        return {
            "type": "SwitchStmt",
            "subject": ast_to_obj(node.subject),
            "cases": [ast_to_obj(c) for c in node.cases],
            "default": ast_to_obj(node.default),
            "line": node.line,
        }
    if isinstance(node, BinaryOp):
        return {
            "type": "BinaryOp",
            "op": node.op,
            "left": ast_to_obj(node.left),
            "right": ast_to_obj(node.right),
            "line": node.line,
        }
    if isinstance(node, UnaryOp):
        return {"type": "UnaryOp", "op": node.op, "operand": ast_to_obj(node.operand), "line": node.line}
    if isinstance(node, Literal):
        return {"type": "Literal", "value": node.value, "line": node.line}
    if isinstance(node, StringLit):
        return {"type": "StringLit", "text": node.text, "line": node.line}
    if isinstance(node, Ident):
        return {"type": "Ident", "name": node.name, "line": node.line}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None or isinstance(obj, (int, str, bool)):
        return obj
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    line = obj.get("line", 0)
    if t == "Program":
        return Program(body=[ast_from_obj(n) for n in obj["body"]])
    if t == "VarDecl":
        return VarDecl(
            type_name=obj["type_name"],
            declarators=[ast_from_obj(d) for d in obj["declarators"]],
            line=line,
        )
    if t == "Declarator":
        return Declarator(name=obj["name"], init=ast_from_obj(obj.get("init")), line=line)
    if t == "PrintStmt":
        return PrintStmt(value=ast_from_obj(obj["value"]), delimiter=obj.get("delimiter", "("), line=line)
    if t == "SumStmt":
        return SumStmt(expr=ast_from_obj(obj["expr"]), line=line)
    if t == "ReadStmt":
        return ReadStmt(name=obj["name"], line=line)
    if t == "AssignStmt":
        return AssignStmt(name=obj["name"], value=ast_from_obj(obj["value"]), line=line)
    if t == "Block":
        return Block(statements=[ast_from_obj(s) for s in obj["statements"]], line=line)
    if t == "IfStmt":
        return IfStmt(
            condition=ast_from_obj(obj["condition"]),
            then_branch=ast_from_obj(obj["then_branch"]),
            else_branch=ast_from_obj(obj.get("else_branch")),
            line=line,
        )
    if t == "WhileStmt":
        return WhileStmt(condition=ast_from_obj(obj["condition"]), body=ast_from_obj(obj["body"]), line=line)
    if t == "CaseClause":
        return CaseClause(value=int(obj["value"]), body=ast_from_obj(obj["body"]), line=line)
    if t == "SwitchStmt":
        return SwitchStmt(
            subject=ast_from_obj(obj["subject"]),
            cases=[ast_from_obj(c) for c in obj["cases"]],
            default=ast_from_obj(obj.get("default")),
            line=line,
        )
    if t == "BinaryOp":
        return BinaryOp(op=obj["op"], left=ast_from_obj(obj["left"]), right=ast_from_obj(obj["right"]), line=line)
    if t == "UnaryOp":
        return UnaryOp(op=obj["op"], operand=ast_from_obj(obj["operand"]), line=line)
    if t == "Literal":
        return Literal(value=int(obj["value"]), line=line)
    if t == "StringLit":
        return StringLit(text=obj["text"], line=line)
    if t == "Ident":
        return Ident(name=obj["name"], line=line)

    raise ValueError(f"Unknown AST node type: {t}")
