from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from glang.errors import IncorrectArity
from glang.types import FuncVal


@dataclass(eq=False)
class NativeFunction(FuncVal):
    """A host callable reachable from glang as an ordinary Func value.

    ``arity`` of None accepts any number of arguments.
    """
    name: str
    arity: Optional[int]
    fn: Callable[[List[Any]], Any]

    def call(self, arguments: List[Any]) -> Any:
        if self.arity is not None and len(arguments) != self.arity:
            raise IncorrectArity(len(arguments), self.arity, self.name)
        return self.fn(arguments)

    def __repr__(self) -> str:
        return f"<native {self.name}>"
