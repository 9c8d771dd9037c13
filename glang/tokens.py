"""Token definitions shared by the glang lexer and parser."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Pos:
    """A 1-based source position."""
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass
class Token:
    type: str
    value: Any
    line: int
    column: int

    @property
    def pos(self) -> Pos:
        return Pos(self.line, self.column)

    def __repr__(self) -> str:
        return f"{self.type}({self.value!r}) at {self.line}:{self.column}"


# Keywords
LET = 'LET'
IF = 'IF'
ELSE = 'ELSE'
TRUE = 'TRUE'
FALSE = 'FALSE'
NIL = 'NIL'
AND = 'AND'
OR = 'OR'

# Literals
NUMBER = 'NUMBER'
STRING = 'STRING'
IDENT = 'IDENT'

# Operators and punctuation
EQEQ = 'EQEQ'
NOTEQ = 'NOTEQ'
LESSEQ = 'LESSEQ'
GREATEREQ = 'GREATEREQ'
LESS = 'LESS'
GREATER = 'GREATER'
EQUALS = 'EQUALS'
PLUS = 'PLUS'
MINUS = 'MINUS'
STAR = 'STAR'
SLASH = 'SLASH'
BANG = 'BANG'
LBRACE = 'LBRACE'
RBRACE = 'RBRACE'
LPAR = 'LPAR'
RPAR = 'RPAR'
SEMICOLON = 'SEMICOLON'
COMMA = 'COMMA'

EOF = 'EOF'

# How each kind is shown in diagnostics
DISPLAY = {
    LET: "'let'", IF: "'if'", ELSE: "'else'", TRUE: "'true'", FALSE: "'false'",
    NIL: "'nil'", AND: "'and'", OR: "'or'",
    NUMBER: 'number', STRING: 'string', IDENT: 'identifier',
    EQEQ: "'=='", NOTEQ: "'!='", LESSEQ: "'<='", GREATEREQ: "'>='",
    LESS: "'<'", GREATER: "'>'", EQUALS: "'='", PLUS: "'+'", MINUS: "'-'",
    STAR: "'*'", SLASH: "'/'", BANG: "'!'", LBRACE: "'{'", RBRACE: "'}'",
    LPAR: "'('", RPAR: "')'", SEMICOLON: "';'", COMMA: "','",
    EOF: 'end of input',
}


def display(kind: str) -> str:
    return DISPLAY.get(kind, kind)
