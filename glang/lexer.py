"""Lexical scanner for glang.

The terminals are declared as a Lark grammar and scanned with Lark's basic
lexer; Lark's own parser is never run. Keywords are string terminals that
Lark splits out of ``IDENT`` matches, so ``letter`` stays an identifier
while ``let`` becomes ``LET``. The resulting Lark tokens are converted into
:class:`glang.tokens.Token` objects with literal values already decoded.
"""

from __future__ import annotations

import ast as py_ast
from typing import List

from lark import Lark
from lark.exceptions import UnexpectedCharacters

from .errors import LexError
from .tokens import Pos, Token, NUMBER, STRING


GLANG_TOKENS = r"""
    start: _token*

    _token: LET | IF | ELSE | TRUE | FALSE | NIL | AND | OR
          | NUMBER | STRING | IDENT
          | EQEQ | NOTEQ | LESSEQ | GREATEREQ | LESS | GREATER | EQUALS
          | PLUS | MINUS | STAR | SLASH | BANG
          | LBRACE | RBRACE | LPAR | RPAR | SEMICOLON | COMMA

    // Keywords
    LET: "let"
    IF: "if"
    ELSE: "else"
    TRUE: "true"
    FALSE: "false"
    NIL: "nil"
    AND: "and"
    OR: "or"

    // Literals
    NUMBER: /\d+(\.\d+)?/
    STRING: /"(\\.|[^"\\\n])*"/
    IDENT: /[A-Za-z_][A-Za-z0-9_]*/

    // Operators and punctuation
    EQEQ: "=="
    NOTEQ: "!="
    LESSEQ: "<="
    GREATEREQ: ">="
    LESS: "<"
    GREATER: ">"
    EQUALS: "="
    PLUS: "+"
    MINUS: "-"
    STAR: "*"
    SLASH: "/"
    BANG: "!"
    LBRACE: "{"
    RBRACE: "}"
    LPAR: "("
    RPAR: ")"
    SEMICOLON: ";"
    COMMA: ","

    COMMENT: /\/\/[^\n]*/
    %import common.WS
    %ignore WS
    %ignore COMMENT
"""


GLANG_LEXER = Lark(
    GLANG_TOKENS,
    parser='lalr',
    lexer='basic',
)


def _decode(kind: str, raw: str):
    if kind == NUMBER:
        return float(raw)
    if kind == STRING:
        return py_ast.literal_eval(raw)
    return raw


def lex(source: str) -> List[Token]:
    """Convert source code into a list of tokens.

    Raises :class:`LexError` at the first character that does not start
    any token.
    """
    tokens: List[Token] = []
    try:
        for tok in GLANG_LEXER.lex(source):
            try:
                value = _decode(tok.type, str(tok))
            except (SyntaxError, ValueError) as e:
                raise LexError(f"malformed literal {str(tok)}", Pos(tok.line, tok.column)) from e
            tokens.append(Token(tok.type, value, tok.line, tok.column))
    except UnexpectedCharacters as e:
        raise LexError(f"unexpected character {e.char!r}", Pos(e.line, e.column)) from e
    return tokens
