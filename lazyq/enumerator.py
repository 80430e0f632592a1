"""
the pull protocol every source and combinator speaks.

an enumerator is single-pass: move_next() advances, `current` reads, and
dispose() releases whatever parent enumerators were opened. a disposed
enumerator is finished; move_next() keeps returning False and never
reopens its source. reading
`current` before a successful move_next() or after exhaustion is a caller
error; it returns the last held value (initially None) instead of raising.
"""
from __future__ import annotations

import typing
from abc import ABC, abstractmethod
from .types import *

if typing.TYPE_CHECKING:
    from .enumerable import Enumerable


class Enumerator(ABC, Generic[T]):
    """single-pass cursor. usable as a context manager that disposes on exit."""

    @abstractmethod
    def move_next(self) -> bool:
        pass

    @property
    @abstractmethod
    def current(self) -> T:
        pass

    def dispose(self) -> None:
        """release parent enumerators. safe before any move_next and safe twice."""
        pass

    def __enter__(self) -> 'Enumerator[T]':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.dispose()


class UnaryEnumerator(Enumerator[T]):
    """base for combinators over one parent: opens the parent lazily and tracks exhaustion."""

    def __init__(self, source: 'Enumerable[Any]'):
        self._source = source
        self._enumerator: Optional[Enumerator[Any]] = None
        self._current: Optional[T] = None
        self._done = False

    @property
    def current(self) -> T:
        return self._current

    def _parent(self) -> Enumerator[Any]:
        if self._enumerator is None:
            self._enumerator = self._source.get_enumerator()
        return self._enumerator

    def _finish(self) -> bool:
        self._done = True
        return False

    def dispose(self) -> None:
        self._done = True
        if self._enumerator is not None:
            self._enumerator.dispose()
            self._enumerator = None


# --- base sources ---

class SequenceEnumerator(Enumerator[T]):
    """walks a random-access sequence by index. reads the live sequence, not a copy."""

    def __init__(self, items: Sequence[T]):
        self._items = items
        self._index = 0
        self._current: Optional[T] = None
        self._done = False

    def move_next(self) -> bool:
        if not self._done and self._index < len(self._items):
            self._current = self._items[self._index]
            self._index += 1
            return True
        self._done = True
        return False

    @property
    def current(self) -> T:
        return self._current

    def dispose(self) -> None:
        self._done = True


class IteratorEnumerator(Enumerator[T]):
    """
    adapts a python iterator. when `owned` is set the iterator was created
    for this enumerator, and dispose() closes it so a generator's finally
    blocks run on early termination. iterators handed in by the caller are
    left open.
    """

    def __init__(self, iterator: Iterator[T], owned: bool = False):
        self._iterator: Optional[Iterator[T]] = iterator
        self._owned = owned
        self._current: Optional[T] = None
        self._done = False

    def move_next(self) -> bool:
        if self._done:
            return False
        try:
            self._current = next(self._iterator)
            return True
        except StopIteration:
            self._done = True
            return False

    @property
    def current(self) -> T:
        return self._current

    def dispose(self) -> None:
        self._done = True
        if self._iterator is not None:
            close = getattr(self._iterator, 'close', None) if self._owned else None
            self._iterator = None
            if close is not None:
                close()


class RangeEnumerator(Enumerator[int]):
    def __init__(self, start: int, count: int):
        self._current = start - 1
        self._end = start + count - 1
        self._done = False

    def move_next(self) -> bool:
        if not self._done and self._current < self._end:
            self._current += 1
            return True
        self._done = True
        return False

    @property
    def current(self) -> int:
        return self._current

    def dispose(self) -> None:
        self._done = True


class RepeatEnumerator(Enumerator[T]):
    """count None repeats forever"""

    def __init__(self, value: T, count: Optional[int]):
        self._value = value
        self._remaining = count
        self._done = False

    def move_next(self) -> bool:
        if self._done:
            return False
        if self._remaining is None:
            return True
        if self._remaining > 0:
            self._remaining -= 1
            return True
        self._done = True
        return False

    @property
    def current(self) -> T:
        return self._value

    def dispose(self) -> None:
        self._done = True


class EmptyEnumerator(Enumerator[Any]):
    def move_next(self) -> bool:
        return False

    @property
    def current(self) -> Any:
        return None
