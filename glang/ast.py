"""Abstract Syntax Tree (AST) definitions for the glang language.

The parser produces these nodes and the interpreter walks them. Nodes carry
data only; all behaviour lives in the interpreter. An ``else if`` chain is
kept right-nested: ``If.else_branch`` is either ``None``, a :class:`Block`,
or another :class:`If`.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, List, Optional, Union


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


class BinaryOp(Enum):
    OR = 'or'
    AND = 'and'

    NOT_EQ = '!='
    EQ = '=='
    GREATER = '>'
    GREATER_EQ = '>='
    LESS = '<'
    LESS_EQ = '<='

    SUBTRACT = '-'
    ADD = '+'

    DIVIDE = '/'
    MULTIPLY = '*'


class UnaryOp(Enum):
    NOT = '!'
    NEGATE = '-'


@dataclass
class Identifier(Node):
    name: str
    # resolved stack slot, unused until a resolver pass exists
    slot: Optional[int] = None

    def resolve(self, slot: int) -> 'Identifier':
        return replace(self, slot=slot)


@dataclass
class Pattern(Node):
    identifier: Identifier

    @property
    def name(self) -> str:
        return self.identifier.name


@dataclass
class Program(Node):
    statements: List['Stmt'] = field(default_factory=list)


@dataclass
class Binding(Node):
    pattern: Pattern
    parameters: Optional[List[Pattern]]  # None for a plain variable
    value: 'Expr'

    @property
    def is_function(self) -> bool:
        return self.parameters is not None


@dataclass
class Let(Node):
    binding: Binding


@dataclass
class ExprStmt(Node):
    expr: 'Expr'


@dataclass
class Block(Node):
    statements: List['Stmt'] = field(default_factory=list)
    result: Optional['Expr'] = None


@dataclass
class Call(Node):
    target: 'Expr'
    arguments: List['Expr'] = field(default_factory=list)


@dataclass
class If(Node):
    condition: 'Expr'
    then_block: Block
    else_branch: Optional[Union[Block, 'If']] = None


@dataclass
class Binary(Node):
    lhs: 'Expr'
    op: BinaryOp
    rhs: 'Expr'


@dataclass
class Unary(Node):
    op: UnaryOp
    rhs: 'Expr'


@dataclass
class Literal(Node):
    value: Any  # bool, float, str or NIL


Stmt = Union[Let, ExprStmt]
Expr = Union[Block, Call, If, Binary, Unary, Literal, Identifier]
