from enum import Enum
from typing import Optional

from glang.tokens import Pos, display


class DiagnosticType(Enum):
    """Coarse type tag of a runtime value, used in error messages."""
    Bool = 'Bool'
    Num = 'Num'
    Str = 'Str'
    Func = 'Func'
    List = 'List'
    Nil = 'Nil'

    def __str__(self) -> str:
        return self.value


class GlangError(Exception):
    """Base class of every error surfaced to glang users."""
    phase = 'glang'

    def __init__(self, message: str, pos: Optional[Pos] = None):
        self.message = message
        self.pos = pos
        super().__init__(self._format())

    @property
    def kind(self) -> str:
        return type(self).__name__

    def _format(self) -> str:
        where = f" at {self.pos}" if self.pos is not None else ''
        return f"{self.phase} error{where}: {self.message}"


class LexError(GlangError):
    phase = 'lex'


class ParseError(GlangError):
    phase = 'parse'


class ExpectedToken(ParseError):
    def __init__(self, which: str, pos: Optional[Pos] = None):
        self.which = which
        super().__init__(f"expected {display(which)}", pos)


class ExpectedIdentifier(ParseError):
    def __init__(self, pos: Optional[Pos] = None):
        super().__init__('expected identifier', pos)


class ExpectedPrimary(ParseError):
    def __init__(self, pos: Optional[Pos] = None):
        super().__init__('expected expression', pos)


class ExpectedUnary(ParseError):
    def __init__(self, pos: Optional[Pos] = None):
        super().__init__('expected operand after unary operator', pos)


class DuplicateParameter(ParseError):
    def __init__(self, name: str, pos: Optional[Pos] = None):
        self.name = name
        super().__init__(f"duplicate parameter {name!r}", pos)


class GlangRuntimeError(GlangError):
    phase = 'runtime'


class GlangTypeError(GlangRuntimeError):
    # Tags only, so the failing value is never copied into the error
    def __init__(self, expected: DiagnosticType, actual: DiagnosticType):
        self.expected = expected
        self.actual = actual
        super().__init__(f"type error: expected {expected}, found {actual}")


class IncorrectArity(GlangRuntimeError):
    def __init__(self, given: int, correct: int, name: str = '<fn>'):
        self.given = given
        self.correct = correct
        self.name = name
        super().__init__(f"{name} expects {correct} argument(s), given {given}")


class UndefinedIdentifier(GlangRuntimeError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"undefined identifier {name!r}")


class GlangIOError(GlangRuntimeError):
    def __init__(self, message: str):
        super().__init__(f"I/O error: {message}")
