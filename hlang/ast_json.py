"""JSON serialization/deserialization for the hlang AST.

This module converts between hlang AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. Every node carries a
``"type"`` key naming its class; absent expressions are stored as
``null``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .ast import (
    Program,
    Declaration,
    Assignment,
    Identifier,
    Literal,
    BinaryExpr,
    FunctionDecl,
    FunctionCall,
    ElseIfClause,
    IfStmt,
    WhileLoop,
    RepeatLoop,
    Break,
    Continue,
    Return,
)


def _block_to_obj(nodes: Optional[List[Any]]) -> Optional[List[Any]]:
    if nodes is None:
        return None
    return [ast_to_obj(n) for n in nodes]


def _block_from_obj(objs: Optional[List[Any]]) -> Optional[List[Any]]:
    if objs is None:
        return None
    return [ast_from_obj(o) for o in objs]


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None

    if isinstance(node, Program):
        return {"type": "Program", "body": _block_to_obj(node.body)}
    if isinstance(node, Declaration):
        return {"type": "Declaration", "name": node.name, "value": ast_to_obj(node.value)}
    if isinstance(node, Assignment):
        return {"type": "Assignment", "name": node.name, "value": ast_to_obj(node.value)}
    if isinstance(node, Identifier):
        return {"type": "Identifier", "name": node.name}
    if isinstance(node, Literal):
        return {"type": "Literal", "raw_text": node.raw_text}
    if isinstance(node, BinaryExpr):
        return {
            "type": "BinaryExpr",
            "op": node.op,
            "left": ast_to_obj(node.left),
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, FunctionDecl):
        return {
            "type": "FunctionDecl",
            "name": node.name,
            "params": list(node.params),
            "return_type_name": node.return_type_name,
            "body": _block_to_obj(node.body),
        }
    if isinstance(node, FunctionCall):
        return {"type": "FunctionCall", "name": node.name, "args": _block_to_obj(node.args)}
    if isinstance(node, ElseIfClause):
        return {
            "type": "ElseIfClause",
            "condition": ast_to_obj(node.condition),
            "consequent": _block_to_obj(node.consequent),
        }
    if isinstance(node, IfStmt):
        return {
            "type": "IfStmt",
            "condition": ast_to_obj(node.condition),
            "consequent": _block_to_obj(node.consequent),
            "else_ifs": [ast_to_obj(c) for c in node.else_ifs],
            "alternate": _block_to_obj(node.alternate),
        }
    if isinstance(node, WhileLoop):
        return {"type": "WhileLoop", "condition": ast_to_obj(node.condition), "body": _block_to_obj(node.body)}
    if isinstance(node, RepeatLoop):
        return {"type": "RepeatLoop", "body": _block_to_obj(node.body)}
    if isinstance(node, Break):
        return {"type": "Break"}
    if isinstance(node, Continue):
        return {"type": "Continue"}
    if isinstance(node, Return):
        return {"type": "Return", "value": ast_to_obj(node.value)}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t == "Program":
        return Program(body=_block_from_obj(obj["body"]))
    if t == "Declaration":
        return Declaration(name=obj["name"], value=ast_from_obj(obj.get("value")))
    if t == "Assignment":
        return Assignment(name=obj["name"], value=ast_from_obj(obj.get("value")))
    if t == "Identifier":
        return Identifier(name=obj["name"])
    if t == "Literal":
        return Literal(raw_text=obj["raw_text"])
    if t == "BinaryExpr":
        return BinaryExpr(op=obj["op"], left=ast_from_obj(obj.get("left")), right=ast_from_obj(obj.get("right")))
    if t == "FunctionDecl":
        return FunctionDecl(
            name=obj["name"],
            params=list(obj["params"]),
            return_type_name=obj.get("return_type_name"),
            body=_block_from_obj(obj["body"]),
        )
    if t == "FunctionCall":
        return FunctionCall(name=obj["name"], args=_block_from_obj(obj["args"]))
    if t == "ElseIfClause":
        return ElseIfClause(condition=ast_from_obj(obj.get("condition")), consequent=_block_from_obj(obj["consequent"]))
    if t == "IfStmt":
        return IfStmt(
            condition=ast_from_obj(obj.get("condition")),
            consequent=_block_from_obj(obj["consequent"]),
            else_ifs=[ast_from_obj(c) for c in obj.get("else_ifs", [])],
            alternate=_block_from_obj(obj.get("alternate")),
        )
    if t == "WhileLoop":
        return WhileLoop(condition=ast_from_obj(obj.get("condition")), body=_block_from_obj(obj["body"]))
    if t == "RepeatLoop":
        return RepeatLoop(body=_block_from_obj(obj["body"]))
    if t == "Break":
        return Break()
    if t == "Continue":
        return Continue()
    if t == "Return":
        return Return(value=ast_from_obj(obj.get("value")))

    raise ValueError(f"Unknown AST node type: {t}")


def load_program(data: Dict[str, Any]) -> Program:
    program = ast_from_obj(data)
    if not isinstance(program, Program):
        raise ValueError("AST JSON does not describe a Program")
    return program
