"""Native function registry for glang.

``populate_std`` binds every native function into the global scope of an
environment. The interpreter calls it before any program is evaluated, so
natives are looked up like any other Func value.
"""

from typing import Any, List

from glang.environment import Environment, GLOBAL
from glang.errors import DiagnosticType, GlangTypeError
from glang.native_function import NativeFunction
from glang.types import NIL, ListVal, is_num, to_string, type_of

from .io import populate_io


def std_print(args: List[Any]) -> Any:
    print(' '.join(to_string(a) for a in args))
    return NIL


def std_list(args: List[Any]) -> Any:
    return ListVal(tuple(args))


def std_len(args: List[Any]) -> Any:
    value = args[0]
    if isinstance(value, (str, ListVal)):
        return float(len(value))
    raise GlangTypeError(DiagnosticType.List, type_of(value))


def std_str(args: List[Any]) -> Any:
    return to_string(args[0])


def std_num(args: List[Any]) -> Any:
    value = args[0]
    if is_num(value):
        return float(value)
    if not isinstance(value, str):
        raise GlangTypeError(DiagnosticType.Str, type_of(value))
    try:
        return float(value.strip())
    except ValueError:
        return NIL


def populate_std(env: Environment) -> Environment:
    natives = [
        NativeFunction('print', None, std_print),
        NativeFunction('list', None, std_list),
        NativeFunction('len', 1, std_len),
        NativeFunction('str', 1, std_str),
        NativeFunction('num', 1, std_num),
    ]
    for native in natives:
        env.define(native.name, native, GLOBAL)
    populate_io(env)
    return env
