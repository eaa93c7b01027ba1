"""Abstract Syntax Tree (AST) definitions for hlang.

The AST classes defined in this module represent the syntactic structure
of parsed hlang programs. Nodes own their children; the tree is built
once per parse and never mutated by the interpreter. Expression
positions that the parser could not fill hold ``None``.
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


@dataclass
class Declaration(Node):
    name: str
    value: Optional[Node]


@dataclass
class Assignment(Node):
    name: str
    value: Optional[Node]


@dataclass
class Identifier(Node):
    name: str


@dataclass
class Literal(Node):
    raw_text: str  # coerced to a number at runtime when it parses as one


@dataclass
class BinaryExpr(Node):
    op: str
    left: Optional[Node]
    right: Optional[Node]


@dataclass
class FunctionDecl(Node):
    name: str
    params: List[str]
    return_type_name: Optional[str]  # parsed, never enforced
    body: List[Node]


@dataclass
class FunctionCall(Node):
    name: str
    args: List[Node]


@dataclass
class ElseIfClause:
    condition: Optional[Node]
    consequent: List[Node]


@dataclass
class IfStmt(Node):
    condition: Optional[Node]
    consequent: List[Node]
    else_ifs: List[ElseIfClause] = field(default_factory=list)
    alternate: Optional[List[Node]] = None


@dataclass
class WhileLoop(Node):
    condition: Optional[Node]
    body: List[Node]


@dataclass
class RepeatLoop(Node):
    body: List[Node]


@dataclass
class Break(Node):
    pass


@dataclass
class Continue(Node):
    pass


@dataclass
class Return(Node):
    value: Optional[Node] = None
