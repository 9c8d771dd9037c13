from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Set

from glang.types import FuncVal, ListVal


GLOBAL = 0


@dataclass
class Scope:
    parent: Optional[int]
    values: Dict[str, Any] = field(default_factory=dict)
    released: bool = False
    # a function value was defined in this frame or below it
    captured: bool = False


class Environment:
    """Arena of lexical scope frames mapping identifiers to values.

    Frames are addressed by index and linked to their parent by index, so a
    closure only holds the integer of the scope it was defined in. Frame 0
    is the global scope and is never released. Blocks and calls push a child
    frame and pop it on exit.

    A popped frame that no function captured is freed at once. A popped
    frame that was captured stays only while some function value reachable
    from a live frame, a held temporary or the value being returned still
    refers to it. Freed slots are reused by later frames.
    """
    def __init__(self):
        self.scopes: List[Optional[Scope]] = [Scope(parent=None)]
        self.free: List[int] = []
        self.held: List[List[Any]] = []

    def push_scope(self, parent: int = GLOBAL) -> int:
        frame = Scope(parent=parent)
        if self.free:
            index = self.free.pop()
            self.scopes[index] = frame
            return index
        self.scopes.append(frame)
        return len(self.scopes) - 1

    def pop_scope(self, index: int, result: Any = None) -> None:
        """Release ``index``. ``result`` is the value leaving the frame."""
        if index == GLOBAL:
            return
        frame = self.scopes[index]
        frame.released = True
        if frame.captured:
            self.collect(result)
        else:
            self._free(index)
            self._truncate()

    def capture(self, index: int) -> None:
        # ancestors of a captured frame are captured too
        current: Optional[int] = index
        while current is not None and not self.scopes[current].captured:
            self.scopes[current].captured = True
            current = self.scopes[current].parent

    @contextmanager
    def holding(self, values: List[Any]) -> Iterator[List[Any]]:
        """Treat ``values`` as live while the block runs, even if unbound."""
        self.held.append(values)
        try:
            yield values
        finally:
            self.held.pop()

    def collect(self, *roots: Any) -> None:
        """Free every released frame no reachable function value refers to."""
        marked: Set[int] = set()
        pending: List[Any] = list(roots)
        for values in self.held:
            pending.extend(values)
        for index, frame in enumerate(self.scopes):
            if frame is not None and not frame.released:
                self._mark(index, marked, pending)
        while pending:
            value = pending.pop()
            if isinstance(value, ListVal):
                pending.extend(value.items)
            elif isinstance(value, FuncVal) and value.scope is not None:
                self._mark(value.scope, marked, pending)
        for index, frame in enumerate(self.scopes):
            if frame is not None and frame.released and index not in marked:
                self._free(index)
        self._truncate()

    def _mark(self, index: int, marked: Set[int], pending: List[Any]) -> None:
        current: Optional[int] = index
        while current is not None and current not in marked:
            marked.add(current)
            frame = self.scopes[current]
            pending.extend(frame.values.values())
            current = frame.parent

    def _free(self, index: int) -> None:
        self.scopes[index] = None
        self.free.append(index)

    def _truncate(self) -> None:
        while len(self.scopes) > 1 and self.scopes[-1] is None:
            self.scopes.pop()
        self.free = [i for i in self.free if i < len(self.scopes)]

    def define(self, name: str, value: Any, scope: int = GLOBAL) -> None:
        """Bind ``name`` in ``scope``; rebinding overwrites silently."""
        self.scopes[scope].values[name] = value

    def get(self, name: str, scope: int = GLOBAL) -> Optional[Any]:
        """Resolve ``name`` from ``scope`` outwards, or return None if unbound."""
        current: Optional[int] = scope
        while current is not None:
            frame = self.scopes[current]
            if name in frame.values:
                return frame.values[name]
            current = frame.parent
        return None

    def names(self, scope: int = GLOBAL) -> List[str]:
        seen: List[str] = []
        current: Optional[int] = scope
        while current is not None:
            frame = self.scopes[current]
            seen.extend(n for n in frame.values if n not in seen)
            current = frame.parent
        return sorted(seen)

    def __len__(self) -> int:
        return len(self.scopes) - len(self.free)
