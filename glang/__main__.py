"""CLI entry point for the glang interpreter.

Usage:
    python -m glang [-v|-vv|-vvv] [program_file]
    python -m glang [-v...] --tokens <program_file>
    python -m glang [-v...] --emit-ast <program_file>
    python -m glang [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --debug-file  Write debug output to this file instead of stderr
  --tokens      Print the token stream of the given file
  --emit-ast    Parse the given file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Without a program file an interactive REPL is started. Bindings persist
between REPL lines; the value of each expression statement is echoed
unless it is nil.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from .ast_json import ast_to_obj, ast_from_obj
from .errors import GlangError
from .interpreter import Interpreter
from .lexer import lex
from .parser import parse, parse_program
from . import tokens as tk
from .types import NilVal, repr_value

VERSION = '0.1.0'


def read_source(path: Path) -> Optional[str]:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        return None
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def run_program_ast(program, args) -> int:
    interpreter = Interpreter(debug_level=args.v, debug_file=args.debug_file)
    try:
        interpreter.run(program)
    except GlangError as e:
        print(str(e), file=sys.stderr)
        return 1
    except RecursionError:
        print('runtime error: maximum recursion depth exceeded', file=sys.stderr)
        return 1
    finally:
        interpreter.close()
    return 0


def repl(interpreter: Interpreter, stdin: Optional[TextIO] = None) -> int:
    stdin = stdin if stdin is not None else sys.stdin
    print(f"glang v{VERSION}", file=sys.stderr)
    while True:
        print('> ', end='', file=sys.stderr, flush=True)
        line = stdin.readline()
        if not line:
            break
        source = line.strip()
        if not source:
            continue
        if source == ':env':
            print(' '.join(interpreter.environment.names()))
            continue
        try:
            tokens = lex(source)
            if not tokens:
                continue
            if tokens[-1].type != tk.SEMICOLON:
                tokens = lex(source + '\n;')
            program = parse(tokens)
            for stmt in program.statements:
                value = interpreter.execute(stmt)
                if not isinstance(value, NilVal):
                    print(repr_value(value))
        except GlangError as e:
            print(str(e), file=sys.stderr)
        except RecursionError:
            print('runtime error: maximum recursion depth exceeded', file=sys.stderr)
    print('Goodbye! o/', file=sys.stderr)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="glang language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--debug-file', metavar='PATH', help='write debug output to PATH instead of stderr')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--tokens', metavar='GLANG_FILE', help='print the tokens of the given file')
    group.add_argument('--emit-ast', metavar='GLANG_FILE', help='emit AST JSON for the given file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='glang program file to execute; omit for a REPL')
    args = parser.parse_args(argv)

    # Token dump mode
    if args.tokens:
        source = read_source(Path(args.tokens))
        if source is None:
            return 1
        try:
            for token in lex(source):
                print(repr(token))
        except GlangError as e:
            print(str(e), file=sys.stderr)
            return 1
        return 0

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        source = read_source(program_file)
        if source is None:
            return 1
        try:
            program = parse_program(source)
        except GlangError as e:
            print(str(e), file=sys.stderr)
            return 1
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(ast_to_obj(program), out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return 0

    # Execute from AST JSON
    if args.ast:
        ast_path = Path(args.ast)
        if not ast_path.exists():
            print(f"Error: file {ast_path} not found", file=sys.stderr)
            return 1
        try:
            with open(ast_path, 'r', encoding='utf-8') as f:
                program = ast_from_obj(json.load(f))
        except (KeyError, TypeError, ValueError) as e:
            print(f"Error: invalid AST file {ast_path}: {e}", file=sys.stderr)
            return 1
        return run_program_ast(program, args)

    # Interactive mode
    if not args.program:
        interpreter = Interpreter(debug_level=args.v, debug_file=args.debug_file)
        try:
            return repl(interpreter)
        finally:
            interpreter.close()

    # Default: execute source file
    source = read_source(Path(args.program))
    if source is None:
        return 1
    try:
        program = parse_program(source)
    except GlangError as e:
        print(str(e), file=sys.stderr)
        return 1
    return run_program_ast(program, args)


if __name__ == '__main__':
    sys.exit(main())
