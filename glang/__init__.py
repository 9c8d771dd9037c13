# glang language package
# This package provides a lexer, parser and tree-walking interpreter for glang.
from .errors import GlangError, ParseError, GlangRuntimeError
from .interpreter import run_program, run_file, interpret, Interpreter
from .lexer import lex
from .parser import parse, parse_program

__all__ = [
    'run_program',
    'run_file',
    'interpret',
    'Interpreter',
    'lex',
    'parse',
    'parse_program',
    'GlangError',
    'ParseError',
    'GlangRuntimeError',
]
