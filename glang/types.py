"""Runtime values and value helpers for glang.

glang values map onto Python objects as follows:

=========  ==========================================
Bool       ``bool``
Num        ``float`` (``int`` results of natives are accepted)
Str        ``str``
Func       a :class:`FuncVal` subclass (user or native)
List       :class:`ListVal`
Nil        the :data:`NIL` singleton
=========  ==========================================

Every value is immutable, so handing the same object to several bindings
behaves exactly like giving each binding its own copy.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from glang.errors import DiagnosticType, GlangTypeError


class NilVal:
    """Marker object for the glang ``nil`` value."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'nil'


NIL = NilVal()


class FuncVal:
    """Common base of user-defined and native functions."""
    name: str
    # index of the scope a user function closes over
    scope: Optional[int] = None

    def __eq__(self, other: Any) -> bool:
        # functions are never comparable, not even with themselves
        return False

    __hash__ = object.__hash__


@dataclass(frozen=True)
class ListVal:
    items: Tuple[Any, ...] = ()

    def __len__(self) -> int:
        return len(self.items)

    def __repr__(self) -> str:
        return f"List({list(self.items)!r})"


def is_num(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def type_of(value: Any) -> DiagnosticType:
    """Return the diagnostic type tag of a runtime value."""
    if isinstance(value, bool):
        return DiagnosticType.Bool
    if is_num(value):
        return DiagnosticType.Num
    if isinstance(value, str):
        return DiagnosticType.Str
    if isinstance(value, FuncVal):
        return DiagnosticType.Func
    if isinstance(value, ListVal):
        return DiagnosticType.List
    if isinstance(value, NilVal):
        return DiagnosticType.Nil
    raise TypeError(f"not a glang value: {value!r}")


def as_num(value: Any) -> float:
    if is_num(value):
        return float(value)
    raise GlangTypeError(DiagnosticType.Num, type_of(value))


def as_str(value: Any) -> str:
    if isinstance(value, str):
        return value
    raise GlangTypeError(DiagnosticType.Str, type_of(value))


def is_truthy(value: Any) -> bool:
    # only false and nil are falsy; 0 and "" are truthy
    return not (value is False or isinstance(value, NilVal))


def values_equal(a: Any, b: Any) -> bool:
    """Value equality: same variant and same payload.

    Functions never compare equal. Lists compare element-wise. Values of
    different variants are never equal, so ``1 == "1"`` is false.
    """
    ta, tb = type_of(a), type_of(b)
    if ta is not tb:
        return False
    if ta is DiagnosticType.Func:
        return False
    if ta is DiagnosticType.List:
        if len(a.items) != len(b.items):
            return False
        return all(values_equal(x, y) for x, y in zip(a.items, b.items))
    if ta is DiagnosticType.Nil:
        return True
    return a == b


def divide(a: float, b: float) -> float:
    """IEEE 754 division: dividing by zero gives an infinity or NaN."""
    if b != 0.0:
        return a / b
    if a == 0.0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def num_to_string(n: float) -> str:
    if math.isnan(n):
        return 'NaN'
    if math.isinf(n):
        return 'inf' if n > 0 else '-inf'
    if n == int(n):
        return str(int(n))
    return repr(float(n))


def to_string(value: Any) -> str:
    """Render a value as text for printing and concatenation."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if is_num(value):
        return num_to_string(value)
    if isinstance(value, str):
        return value
    if isinstance(value, ListVal):
        return '[' + ', '.join(repr_value(item) for item in value.items) + ']'
    if isinstance(value, NilVal):
        return 'nil'
    if isinstance(value, FuncVal):
        return repr(value)
    return str(value)


def repr_value(value: Any) -> str:
    """Like :func:`to_string`, but strings are quoted."""
    if isinstance(value, str):
        escaped = value.replace('\\', '\\\\').replace('"', '\\"')
        return f'"{escaped}"'
    return to_string(value)
