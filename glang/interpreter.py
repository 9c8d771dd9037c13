"""Tree-walking interpreter for the glang language.

The interpreter evaluates a parsed :class:`~glang.ast.Program` directly,
without an intermediate bytecode. Scoping is lexical: every block and every
call runs in a fresh child scope of the :class:`Environment` arena, and a
user function remembers the scope it was defined in. Errors are raised as
:class:`~glang.errors.GlangRuntimeError` subclasses and abort the whole
evaluation.
"""

from __future__ import annotations

import sys
from typing import Any, Callable, List, Optional, TextIO

from .ast import (
    Program, Let, ExprStmt, Binding, Pattern, Block, Call, If, Binary,
    Unary, Literal, Identifier, BinaryOp, UnaryOp, Node,
)
from .environment import Environment, GLOBAL
from .errors import (
    DiagnosticType, GlangTypeError, IncorrectArity, UndefinedIdentifier,
)
from .native_function import NativeFunction
from .parser import parse_program
from .std import populate_std
from .types import (
    NIL, FuncVal, as_num, divide, is_truthy, type_of, values_equal,
    is_num, to_string,
)


class UserFunction(FuncVal):
    """A function defined with ``let name(params) = body``.

    The body is kept unevaluated. ``scope`` is the index of the scope the
    definition ran in, which becomes the parent scope of every call.
    """
    def __init__(self, name: str, parameters: List[Pattern], body: Node, scope: int):
        self.name = name
        self.parameters = parameters
        self.body = body
        self.scope = scope

    @property
    def arity(self) -> int:
        return len(self.parameters)

    def __repr__(self) -> str:
        return f"<fn {self.name}>"


class Interpreter:
    """Core interpreter that executes glang ASTs."""
    def __init__(self, environment: Optional[Environment] = None, debug_level: int = 0,
                 debug_file: Optional[str] = None, load_std: bool = True):
        self.environment = environment if environment is not None else Environment()
        self.scope = GLOBAL
        self.debug_level = debug_level
        self.debug_fp: Optional[TextIO] = None
        if debug_level > 0 and debug_file:
            self.debug_fp = open(debug_file, 'w', encoding='utf-8')
        # natives are registered before any program runs
        if load_std:
            populate_std(self.environment)

    def debug(self, msg: str, level: int = 1):
        if self.debug_level >= level:
            fp = self.debug_fp if self.debug_fp else sys.stderr
            fp.write(msg + '\n')
            fp.flush()

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def run(self, program: Program) -> Any:
        """Execute every statement in order. A program always yields nil."""
        for stmt in program.statements:
            self.debug(f"statement {type(stmt).__name__}")
            self.execute(stmt)
        return NIL

    def execute(self, stmt: Node) -> Any:
        """Execute one statement and return its value.

        A ``let`` yields nil; an expression statement yields the value of
        its expression, which the REPL echoes.
        """
        if isinstance(stmt, Let):
            self.bind(stmt.binding)
            return NIL
        if isinstance(stmt, ExprStmt):
            return self.evaluate(stmt.expr)
        raise NotImplementedError(f"execute: unexpected node type {type(stmt)}")

    def bind(self, binding: Binding) -> None:
        name = binding.pattern.name
        if binding.is_function:
            # nothing is evaluated for a function definition
            self.environment.capture(self.scope)
            value = UserFunction(name, list(binding.parameters), binding.value, self.scope)
            self.debug(f"define function {name}/{value.arity}", 2)
        else:
            value = self.evaluate(binding.value)
            self.debug(f"bind {name} = {to_string(value)}", 2)
        self.environment.define(name, value, self.scope)

    def evaluate(self, node: Node) -> Any:
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Identifier):
            value = self.environment.get(node.name, self.scope)
            if value is None:
                raise UndefinedIdentifier(node.name)
            return value
        if isinstance(node, Block):
            return self.evaluate_block(node)
        if isinstance(node, If):
            return self.evaluate_if(node)
        if isinstance(node, Call):
            return self.evaluate_call(node)
        if isinstance(node, Unary):
            return self.evaluate_unary(node)
        if isinstance(node, Binary):
            return self.evaluate_binary(node)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def evaluate_in_scope(self, parent: int, body: Callable[[int], Any]) -> Any:
        """Run ``body`` in a fresh child scope of ``parent``, released on exit.

        The value ``body`` returns is handed to the environment on release,
        so a closure leaving the scope keeps the frames it refers to.
        """
        saved = self.scope
        index = self.scope = self.environment.push_scope(parent)
        result = NIL
        try:
            result = body(index)
            return result
        finally:
            self.scope = saved
            self.environment.pop_scope(index, result)

    def evaluate_block(self, block: Block) -> Any:
        def body(scope: int) -> Any:
            for stmt in block.statements:
                self.execute(stmt)
            if block.result is None:
                return NIL
            return self.evaluate(block.result)
        return self.evaluate_in_scope(self.scope, body)

    def evaluate_if(self, node: If) -> Any:
        cond = self.evaluate(node.condition)
        truthy = is_truthy(cond)
        self.debug(f"if condition {to_string(cond)} -> {truthy}", 3)
        if truthy:
            return self.evaluate_block(node.then_block)
        if node.else_branch is None:
            return NIL
        if isinstance(node.else_branch, If):
            return self.evaluate_if(node.else_branch)
        return self.evaluate_block(node.else_branch)

    def evaluate_call(self, node: Call) -> Any:
        func = self.evaluate(node.target)
        if not isinstance(func, FuncVal):
            raise GlangTypeError(DiagnosticType.Func, type_of(func))
        self.debug(f"call {func!r} with {len(node.arguments)} argument(s)", 3)
        if isinstance(func, UserFunction) and len(node.arguments) != func.arity:
            raise IncorrectArity(len(node.arguments), func.arity, func.name)
        # the callee and evaluated arguments are not bound anywhere yet
        with self.environment.holding([func]) as held:
            for arg in node.arguments:
                # arguments are evaluated in the caller's scope
                held.append(self.evaluate(arg))
            return self.call_function(func, held[1:])

    def call_user(self, func: UserFunction, values: List[Any]) -> Any:
        def body(scope: int) -> Any:
            for param, value in zip(func.parameters, values):
                self.environment.define(param.name, value, scope)
            return self.evaluate(func.body)
        return self.evaluate_in_scope(func.scope, body)

    def call_function(self, func: Any, args: List[Any]) -> Any:
        """Call any Func value with already evaluated arguments."""
        if isinstance(func, NativeFunction):
            return func.call(args)
        if isinstance(func, UserFunction):
            if len(args) != func.arity:
                raise IncorrectArity(len(args), func.arity, func.name)
            return self.call_user(func, args)
        raise GlangTypeError(DiagnosticType.Func, type_of(func))

    def evaluate_unary(self, node: Unary) -> Any:
        rhs = self.evaluate(node.rhs)
        if node.op is UnaryOp.NOT:
            return not is_truthy(rhs)
        return -as_num(rhs)

    def evaluate_binary(self, node: Binary) -> Any:
        op = node.op
        lhs = self.evaluate(node.lhs)
        # the right-hand side is only evaluated on demand
        if op is BinaryOp.OR:
            return lhs if is_truthy(lhs) else self.evaluate(node.rhs)
        if op is BinaryOp.AND:
            return lhs if not is_truthy(lhs) else self.evaluate(node.rhs)
        if op is BinaryOp.EQ:
            return values_equal(lhs, self.evaluate(node.rhs))
        if op is BinaryOp.NOT_EQ:
            return not values_equal(lhs, self.evaluate(node.rhs))
        if op is BinaryOp.ADD:
            return self.add(lhs, self.evaluate(node.rhs))
        # numeric operators reject a bad left operand before touching the right
        a = as_num(lhs)
        b = as_num(self.evaluate(node.rhs))
        if op is BinaryOp.GREATER:
            return a > b
        if op is BinaryOp.GREATER_EQ:
            return a >= b
        if op is BinaryOp.LESS:
            return a < b
        if op is BinaryOp.LESS_EQ:
            return a <= b
        if op is BinaryOp.SUBTRACT:
            return a - b
        if op is BinaryOp.MULTIPLY:
            return a * b
        if op is BinaryOp.DIVIDE:
            return divide(a, b)
        raise NotImplementedError(f"unknown operator {op}")

    @staticmethod
    def add(lhs: Any, rhs: Any) -> Any:
        if is_num(lhs) and is_num(rhs):
            return float(lhs) + float(rhs)
        if isinstance(lhs, str) or is_num(lhs):
            if isinstance(rhs, str) or is_num(rhs):
                return to_string(lhs) + to_string(rhs)
            raise GlangTypeError(DiagnosticType.Num, type_of(rhs))
        raise GlangTypeError(DiagnosticType.Num, type_of(lhs))


def interpret(program: Program, environment: Environment) -> Any:
    """Evaluate ``program`` against ``environment``; always returns nil."""
    return Interpreter(environment, load_std=False).run(program)


def run_program(source: str, debug_level: int = 0) -> Any:
    """Convenience function to parse and run a glang program from source."""
    program = parse_program(source)
    interpreter = Interpreter(debug_level=debug_level)
    try:
        return interpreter.run(program)
    finally:
        interpreter.close()


def run_file(file_path: str, debug_level: int = 0, debug_file: Optional[str] = None) -> Interpreter:
    """Parse and run a glang file, returning the interpreter instance.

    The debug file, if any, is closed once the program finishes; the
    returned interpreter keeps its bindings for inspection.
    """
    with open(file_path, 'r', encoding='utf-8') as f:
        source = f.read()
    program = parse_program(source)
    interpreter = Interpreter(debug_level=debug_level, debug_file=debug_file)
    try:
        interpreter.run(program)
    finally:
        interpreter.close()
    return interpreter
