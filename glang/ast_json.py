"""JSON serialization/deserialization for glang ASTs.

This module converts between glang AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. Operators are stored by
enum name and ``nil`` by a marker object, so every node type round-trips.
"""

from __future__ import annotations

from typing import Any, Dict

from .ast import (
    Program,
    Let,
    ExprStmt,
    Binding,
    Pattern,
    Block,
    Call,
    If,
    Binary,
    Unary,
    Literal,
    Identifier,
    BinaryOp,
    UnaryOp,
)
from .types import NIL, NilVal

NIL_MARKER: Dict[str, Any] = {"__type__": "Nil"}


def ast_to_obj(node: Any) -> Any:
    # Primitives
    if node is None:
        return None
    if isinstance(node, NilVal):
        return dict(NIL_MARKER)
    if isinstance(node, (int, float, str, bool)):
        return node

    if isinstance(node, Program):
        return {"type": "Program", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, Let):
        return {"type": "Let", "binding": ast_to_obj(node.binding)}
    if isinstance(node, ExprStmt):
        return {"type": "ExprStmt", "expr": ast_to_obj(node.expr)}
    if isinstance(node, Binding):
        params = None if node.parameters is None else [ast_to_obj(p) for p in node.parameters]
        return {
            "type": "Binding",
            "pattern": ast_to_obj(node.pattern),
            "parameters": params,
            "value": ast_to_obj(node.value),
        }
    if isinstance(node, Pattern):
        return {"type": "Pattern", "identifier": ast_to_obj(node.identifier)}
    if isinstance(node, Block):
        return {
            "type": "Block",
            "statements": [ast_to_obj(s) for s in node.statements],
            "result": ast_to_obj(node.result),
        }
    if isinstance(node, Call):
        return {
            "type": "Call",
            "target": ast_to_obj(node.target),
            "arguments": [ast_to_obj(a) for a in node.arguments],
        }
    if isinstance(node, If):
        return {
            "type": "If",
            "condition": ast_to_obj(node.condition),
            "then_block": ast_to_obj(node.then_block),
            "else_branch": ast_to_obj(node.else_branch),
        }
    if isinstance(node, Binary):
        return {"type": "Binary", "op": node.op.name, "lhs": ast_to_obj(node.lhs), "rhs": ast_to_obj(node.rhs)}
    if isinstance(node, Unary):
        return {"type": "Unary", "op": node.op.name, "rhs": ast_to_obj(node.rhs)}
    if isinstance(node, Literal):
        return {"type": "Literal", "value": ast_to_obj(node.value)}
    if isinstance(node, Identifier):
        return {"type": "Identifier", "name": node.name, "slot": node.slot}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None or isinstance(obj, (int, float, str, bool)):
        return obj
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    if obj.get("__type__") == "Nil":
        return NIL
    t = obj.get("type")
    if t == "Program":
        return Program(statements=[ast_from_obj(s) for s in obj["statements"]])
    if t == "Let":
        return Let(binding=ast_from_obj(obj["binding"]))
    if t == "ExprStmt":
        return ExprStmt(expr=ast_from_obj(obj["expr"]))
    if t == "Binding":
        params = obj.get("parameters")
        return Binding(
            pattern=ast_from_obj(obj["pattern"]),
            parameters=None if params is None else [ast_from_obj(p) for p in params],
            value=ast_from_obj(obj["value"]),
        )
    if t == "Pattern":
        return Pattern(identifier=ast_from_obj(obj["identifier"]))
    if t == "Block":
        return Block(
            statements=[ast_from_obj(s) for s in obj["statements"]],
            result=ast_from_obj(obj.get("result")),
        )
    if t == "Call":
        return Call(target=ast_from_obj(obj["target"]), arguments=[ast_from_obj(a) for a in obj["arguments"]])
    if t == "If":
        return If(
            condition=ast_from_obj(obj["condition"]),
            then_block=ast_from_obj(obj["then_block"]),
            else_branch=ast_from_obj(obj.get("else_branch")),
        )
    if t == "Binary":
        return Binary(lhs=ast_from_obj(obj["lhs"]), op=BinaryOp[obj["op"]], rhs=ast_from_obj(obj["rhs"]))
    if t == "Unary":
        return Unary(op=UnaryOp[obj["op"]], rhs=ast_from_obj(obj["rhs"]))
    if t == "Literal":
        value = ast_from_obj(obj["value"])
        # JSON has no float/int distinction; glang numbers are floats
        if isinstance(value, int) and not isinstance(value, bool):
            value = float(value)
        return Literal(value=value)
    if t == "Identifier":
        return Identifier(name=obj["name"], slot=obj.get("slot"))

    raise ValueError(f"Unknown AST node type: {t}")
