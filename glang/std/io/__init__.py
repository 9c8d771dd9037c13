from typing import Any, List

from glang.environment import Environment, GLOBAL
from glang.native_function import NativeFunction
from glang.types import as_str

from .basic_io import BasicIO


def populate_io(env: Environment) -> Environment:
    basic_io = BasicIO()

    def std_read_line(args: List[Any]) -> Any:
        return basic_io.read_line()

    def std_read_file(args: List[Any]) -> Any:
        return basic_io.read_file(as_str(args[0]))

    def std_file_exists(args: List[Any]) -> Any:
        return basic_io.file_exists(as_str(args[0]))

    env.define('read_line', NativeFunction('read_line', 0, std_read_line), GLOBAL)
    env.define('read_file', NativeFunction('read_file', 1, std_read_file), GLOBAL)
    env.define('file_exists', NativeFunction('file_exists', 1, std_file_exists), GLOBAL)
    return env
