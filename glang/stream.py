from typing import Callable, Generic, Iterable, List, Optional, TypeVar

T = TypeVar('T')
U = TypeVar('U')


class Stream(Generic[T]):
    """A forward-only sequence with one item of lookahead."""

    def __init__(self, items: Iterable[T]):
        self.items: List[T] = list(items)
        self.pos = 0

    def peek(self) -> Optional[T]:
        if self.pos < len(self.items):
            return self.items[self.pos]
        return None

    def next(self) -> Optional[T]:
        item = self.peek()
        if item is not None:
            self.pos += 1
        return item

    def advance_if(self, predicate: Callable[[T], bool]) -> bool:
        """Consume the next item if it satisfies ``predicate``."""
        item = self.peek()
        if item is not None and predicate(item):
            self.pos += 1
            return True
        return False

    def next_if_map(self, f: Callable[[T], Optional[U]]) -> Optional[U]:
        """Consume the next item if ``f`` maps it to something other than None."""
        item = self.peek()
        if item is None:
            return None
        mapped = f(item)
        if mapped is not None:
            self.pos += 1
        return mapped

    def at_end(self) -> bool:
        return self.pos >= len(self.items)
