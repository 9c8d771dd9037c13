"""Recursive-descent parser for the glang language.

Operator precedence, lowest to highest::

    or  ->  and  ->  == != < <= > >=  ->  + -  ->  * /  ->  ! - (unary)
        ->  call  ->  primary

Every binary tier goes through :meth:`Parser.parse_binary`, which folds to
the left, so ``10 - 2 - 3`` is ``(10 - 2) - 3``. Unary operators recurse to
the right.

Calls are written by juxtaposition: a primary followed by its arguments
(``f 1 2``, ``f 1 + 2``, ``f(41)``). Each argument is an expression whose
call tier takes no arguments of its own, so ``f 1 2`` passes two arguments
and ``f 1 + 2`` passes one. The argument list has no terminator and ends
at the first token that cannot start a primary. A parenthesized argument
is complete on its own, so ``f(41) + 1`` adds to the call result. ``f()``
is an explicit call with no arguments. Binary operators (``-`` included)
never start an argument, so ``a - 1`` is a subtraction.

The parser looks at most one token ahead, never backtracks and stops at
the first error.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, List, Optional, Sequence

from .ast import (
    Program, Let, ExprStmt, Binding, Pattern, Block, Call, If, Binary,
    Unary, Literal, Identifier, BinaryOp, UnaryOp, Node,
)
from .errors import (
    ExpectedToken, ExpectedIdentifier, ExpectedPrimary, ExpectedUnary,
    DuplicateParameter,
)
from .lexer import lex
from .stream import Stream
from .tokens import Pos, Token
from . import tokens as tk
from .types import NIL


OR_OPS = {tk.OR: BinaryOp.OR}
AND_OPS = {tk.AND: BinaryOp.AND}
EQUALITY_OPS = {
    tk.EQEQ: BinaryOp.EQ,
    tk.NOTEQ: BinaryOp.NOT_EQ,
    tk.LESS: BinaryOp.LESS,
    tk.LESSEQ: BinaryOp.LESS_EQ,
    tk.GREATER: BinaryOp.GREATER,
    tk.GREATEREQ: BinaryOp.GREATER_EQ,
}
ADDITIVE_OPS = {tk.PLUS: BinaryOp.ADD, tk.MINUS: BinaryOp.SUBTRACT}
MULTIPLICATIVE_OPS = {tk.STAR: BinaryOp.MULTIPLY, tk.SLASH: BinaryOp.DIVIDE}
UNARY_OPS = {tk.BANG: UnaryOp.NOT, tk.MINUS: UnaryOp.NEGATE}

TERMINALS = {tk.TRUE, tk.FALSE, tk.NIL, tk.NUMBER, tk.STRING, tk.IDENT}
PRIMARY_START = TERMINALS | {tk.LBRACE, tk.IF, tk.LPAR}


class Parser:
    def __init__(self, tokens: Sequence[Token]):
        self.tokens: Stream[Token] = Stream(tokens)
        # cleared while parsing an if condition so its block is not
        # swallowed as a call argument
        self.block_arguments = True
        # set while parsing a juxtaposed argument, whose own call tier is
        # a bare primary
        self.in_argument = False

    @contextmanager
    def flags(self, **values: bool):
        saved = {name: getattr(self, name) for name in values}
        for name, value in values.items():
            setattr(self, name, value)
        try:
            yield
        finally:
            for name, value in saved.items():
                setattr(self, name, value)

    # Token helpers

    def peek_type(self) -> Optional[str]:
        token = self.tokens.peek()
        return token.type if token is not None else None

    def peek_pos(self) -> Optional[Pos]:
        token = self.tokens.peek()
        return token.pos if token is not None else None

    def match(self, kind: str) -> bool:
        return self.tokens.advance_if(lambda t: t.type == kind)

    def expect(self, kind: str) -> Token:
        token = self.tokens.peek()
        if token is None or token.type != kind:
            raise ExpectedToken(kind, self.peek_pos())
        return self.tokens.next()

    def can_start_primary(self) -> bool:
        kind = self.peek_type()
        if kind == tk.LBRACE:
            return self.block_arguments
        return kind in PRIMARY_START

    # Statements

    def parse_program(self) -> Program:
        statements = []
        while not self.tokens.at_end():
            statements.append(self.parse_statement())
        return Program(statements)

    def parse_statement(self) -> Node:
        if self.match(tk.LET):
            binding = self.parse_binding()
            self.expect(tk.SEMICOLON)
            return Let(binding)
        expr = self.parse_expression()
        self.expect(tk.SEMICOLON)
        return ExprStmt(expr)

    def parse_binding(self) -> Binding:
        pattern = self.parse_pattern()
        parameters: Optional[List[Pattern]] = None
        if self.match(tk.LPAR):
            parameters = self.parse_parameters()
        self.expect(tk.EQUALS)
        value = self.parse_expression()
        return Binding(pattern, parameters, value)

    def parse_parameters(self) -> List[Pattern]:
        # the opening '(' is already consumed
        parameters: List[Pattern] = []
        seen = set()
        if self.match(tk.RPAR):
            return parameters
        while True:
            pos = self.peek_pos()
            pattern = self.parse_pattern()
            if pattern.name in seen:
                raise DuplicateParameter(pattern.name, pos)
            seen.add(pattern.name)
            parameters.append(pattern)
            if not self.match(tk.COMMA):
                break
        self.expect(tk.RPAR)
        return parameters

    def parse_pattern(self) -> Pattern:
        return Pattern(self.parse_identifier())

    def parse_identifier(self) -> Identifier:
        token = self.tokens.peek()
        if token is None or token.type != tk.IDENT:
            raise ExpectedIdentifier(self.peek_pos())
        self.tokens.next()
        return Identifier(token.value)

    # Expressions

    def parse_expression(self) -> Node:
        return self.parse_logic_or()

    def parse_binary(self, parse_operand: Callable[[], Node], operators: dict) -> Node:
        lhs = parse_operand()
        while True:
            op = self.tokens.next_if_map(lambda t: operators.get(t.type))
            if op is None:
                return lhs
            rhs = parse_operand()
            lhs = Binary(lhs, op, rhs)

    def parse_logic_or(self) -> Node:
        return self.parse_binary(self.parse_logic_and, OR_OPS)

    def parse_logic_and(self) -> Node:
        return self.parse_binary(self.parse_equality, AND_OPS)

    def parse_equality(self) -> Node:
        return self.parse_binary(self.parse_term, EQUALITY_OPS)

    def parse_term(self) -> Node:
        return self.parse_binary(self.parse_factor, ADDITIVE_OPS)

    def parse_factor(self) -> Node:
        return self.parse_binary(self.parse_unary, MULTIPLICATIVE_OPS)

    def parse_unary(self) -> Node:
        op = self.tokens.next_if_map(lambda t: UNARY_OPS.get(t.type))
        if op is None:
            return self.parse_call()
        if self.peek_type() not in UNARY_OPS and not self.can_start_primary():
            raise ExpectedUnary(self.peek_pos())
        return Unary(op, self.parse_unary())

    def parse_call(self) -> Node:
        target = self.parse_primary()
        if self.in_argument:
            return target
        arguments: List[Node] = []
        called = False
        while True:
            if self.match(tk.LPAR):
                if self.match(tk.RPAR):
                    called = True
                    continue
                arguments.append(self.parse_group())
            elif self.can_start_primary():
                arguments.append(self.parse_argument())
            else:
                break
        if arguments or called:
            return Call(target, arguments)
        return target

    def parse_argument(self) -> Node:
        with self.flags(in_argument=True):
            return self.parse_logic_or()

    def parse_primary(self) -> Node:
        token = self.tokens.peek()
        if token is None:
            raise ExpectedPrimary(None)
        if token.type == tk.LBRACE:
            return self.parse_block()
        if token.type == tk.IF:
            return self.parse_if()
        if self.match(tk.LPAR):
            return self.parse_group()
        if token.type in TERMINALS:
            self.tokens.next()
            return self.terminal(token)
        raise ExpectedPrimary(token.pos)

    def terminal(self, token: Token) -> Node:
        if token.type == tk.TRUE:
            return Literal(True)
        if token.type == tk.FALSE:
            return Literal(False)
        if token.type == tk.NIL:
            return Literal(NIL)
        if token.type == tk.IDENT:
            return Identifier(token.value)
        # NUMBER and STRING values are decoded by the lexer
        return Literal(token.value)

    def parse_group(self) -> Node:
        # the opening '(' is already consumed
        with self.flags(block_arguments=True, in_argument=False):
            expr = self.parse_expression()
        self.expect(tk.RPAR)
        return expr

    def parse_block(self) -> Block:
        self.expect(tk.LBRACE)
        with self.flags(block_arguments=True, in_argument=False):
            statements = []
            result = None
            while not self.match(tk.RBRACE):
                if self.tokens.at_end():
                    raise ExpectedToken(tk.RBRACE, None)
                if self.match(tk.LET):
                    binding = self.parse_binding()
                    self.expect(tk.SEMICOLON)
                    statements.append(Let(binding))
                    continue
                expr = self.parse_expression()
                if self.match(tk.SEMICOLON):
                    statements.append(ExprStmt(expr))
                    continue
                if self.peek_type() != tk.RBRACE:
                    raise ExpectedToken(tk.SEMICOLON, self.peek_pos())
                result = expr
        return Block(statements, result)

    def parse_if(self) -> If:
        self.expect(tk.IF)
        with self.flags(block_arguments=False, in_argument=False):
            condition = self.parse_expression()
        if self.peek_type() != tk.LBRACE:
            raise ExpectedToken(tk.LBRACE, self.peek_pos())
        then_block = self.parse_block()
        else_branch = None
        if self.match(tk.ELSE):
            if self.peek_type() == tk.IF:
                else_branch = self.parse_if()
            else:
                else_branch = self.parse_block()
        return If(condition, then_block, else_branch)


def parse(tokens: Sequence[Token]) -> Program:
    """Parse a token sequence into a Program, raising ParseError on failure."""
    return Parser(tokens).parse_program()


def parse_expression(tokens: Sequence[Token]) -> Node:
    """Parse a token sequence holding exactly one expression."""
    parser = Parser(tokens)
    expr = parser.parse_expression()
    if not parser.tokens.at_end():
        raise ExpectedToken(tk.EOF, parser.peek_pos())
    return expr


def parse_program(source: str) -> Program:
    """Lex and parse glang source code into a Program AST."""
    return parse(lex(source))
