from __future__ import annotations
import typing
from ..types import *
from ..config import get_defaults
from ..enumerator import Enumerator, UnaryEnumerator

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable

# membership is a linear scan because the comparer is an arbitrary
# equality function, not a hash.

def _index_of(items: List[T], item: T, comparer: EqualityComparer[T]) -> int:
    for index in range(len(items) - 1, -1, -1):
        if comparer(items[index], item):
            return index
    return -1


def _remove(items: List[T], item: T, comparer: EqualityComparer[T]) -> bool:
    index = _index_of(items, item, comparer)
    if index == -1:
        return False
    del items[index]
    return True


class _DistinctEnumerator(UnaryEnumerator[T]):
    def __init__(self, source: 'Enumerable[T]', comparer: EqualityComparer[T]):
        super().__init__(source)
        self._comparer = comparer
        self._seen: List[T] = []

    def move_next(self) -> bool:
        if self._done: return False
        parent = self._parent()
        while parent.move_next():
            item = parent.current
            if _index_of(self._seen, item, self._comparer) == -1:
                self._seen.append(item)
                self._current = item
                return True
        return self._finish()


class _UnionEnumerator(Enumerator[T]):
    """first sequence, then second, with a running list of what was produced"""
    def __init__(self, first: 'Enumerable[T]', second: 'Enumerable[T]', comparer: EqualityComparer[T]):
        self._pending = [first, second]
        self._comparer = comparer
        self._enumerator: Optional[Enumerator[T]] = None
        self._seen: List[T] = []
        self._current: Optional[T] = None
        self._done = False

    @property
    def current(self) -> T:
        return self._current

    def move_next(self) -> bool:
        if self._done: return False
        while True:
            if self._enumerator is None:
                if not self._pending:
                    self._done = True
                    return False
                self._enumerator = self._pending.pop(0).get_enumerator()
            if self._enumerator.move_next():
                item = self._enumerator.current
                if _index_of(self._seen, item, self._comparer) == -1:
                    self._seen.append(item)
                    self._current = item
                    return True
            else:
                self._enumerator.dispose()
                self._enumerator = None

    def dispose(self) -> None:
        self._done = True
        self._pending = []
        if self._enumerator is not None:
            self._enumerator.dispose()
            self._enumerator = None


class _IntersectEnumerator(UnaryEnumerator[T]):
    """
    drains self into a working list on the first pull, then walks `second`;
    each match removes one copy, so output never exceeds self's multiplicity.
    """
    def __init__(self, first: 'Enumerable[T]', second: 'Enumerable[T]', comparer: EqualityComparer[T]):
        super().__init__(second)
        self._first = first
        self._comparer = comparer
        self._working: Optional[List[T]] = None

    def move_next(self) -> bool:
        if self._done: return False
        if self._working is None:
            self._working = self._first.to.list()
        parent = self._parent()
        while parent.move_next():
            item = parent.current
            if _remove(self._working, item, self._comparer):
                self._current = item
                return True
        return self._finish()


class _ExceptEnumerator(UnaryEnumerator[T]):
    """
    drains self into an exclusion list on the first pull, then walks `second`;
    every yielded element joins the exclusion list so it is not repeated.
    """
    def __init__(self, first: 'Enumerable[T]', second: 'Enumerable[T]', comparer: EqualityComparer[T]):
        super().__init__(second)
        self._first = first
        self._comparer = comparer
        self._excluded: Optional[List[T]] = None

    def move_next(self) -> bool:
        if self._done: return False
        if self._excluded is None:
            self._excluded = self._first.to.list()
        parent = self._parent()
        while parent.move_next():
            item = parent.current
            if _index_of(self._excluded, item, self._comparer) == -1:
                self._excluded.append(item)
                self._current = item
                return True
        return self._finish()


class SetAccessor(Generic[T]):
    """
    set algebra driven by an equality comparer (default: configured
    equality_comparer). all results are deferred and keep encounter order.
    """
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def distinct(self, comparer: Optional[EqualityComparer[T]] = None) -> 'Enumerable[T]':
        """return distinct elements. preserves order of first appearance."""
        from ..enumerable import Enumerable
        comparer = comparer or get_defaults().equality_comparer
        return Enumerable(lambda: _DistinctEnumerator(self._enumerable, comparer))

    def union(self, other: Iterable[T], comparer: Optional[EqualityComparer[T]] = None) -> 'Enumerable[T]':
        """elements of this sequence then `other`, each distinct value once."""
        from ..enumerable import Enumerable
        from ..factories import from_iterable
        comparer = comparer or get_defaults().equality_comparer
        second = from_iterable(other)
        return Enumerable(lambda: _UnionEnumerator(self._enumerable, second, comparer))

    def intersect(self, other: Iterable[T], comparer: Optional[EqualityComparer[T]] = None) -> 'Enumerable[T]':
        """
        elements of `other`, in `other`'s order, that also occur in this sequence.
        ex: [1, 1, 2] & [1, 1, 1, 3] -> [1, 1]
        """
        from ..enumerable import Enumerable
        from ..factories import from_iterable
        comparer = comparer or get_defaults().equality_comparer
        second = from_iterable(other)
        return Enumerable(lambda: _IntersectEnumerator(self._enumerable, second, comparer))

    def except_(self, other: Iterable[T], comparer: Optional[EqualityComparer[T]] = None) -> 'Enumerable[T]':
        """
        distinct elements of `other` that do not occur in this sequence.
        ex: [1, 2].except_([2, 3, 3, 4]) -> [3, 4]
        """
        from ..enumerable import Enumerable
        from ..factories import from_iterable
        comparer = comparer or get_defaults().equality_comparer
        second = from_iterable(other)
        return Enumerable(lambda: _ExceptEnumerator(self._enumerable, second, comparer))

    def concat(self, *others: Iterable[T]) -> 'Enumerable[T]':
        """concatenate with other sequences, preserving all elements and order."""
        from ..factories import concat
        return concat(self._enumerable, *others)

    def contains(self, value: T, comparer: Optional[EqualityComparer[T]] = None) -> bool:
        """determines whether the sequence contains `value`. stops at the first match."""
        comparer = comparer or get_defaults().equality_comparer
        with self._enumerable.get_enumerator() as enumerator:
            while enumerator.move_next():
                if comparer(value, enumerator.current):
                    return True
        return False
