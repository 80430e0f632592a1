from __future__ import annotations
import typing
from ..types import *
from ..enumerator import Enumerator, UnaryEnumerator
from ..factories import from_iterable, singleton

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable, OrderedEnumerable

# --- enumerators, one per combinator ---

class _WhereEnumerator(UnaryEnumerator[T]):
    def __init__(self, source: 'Enumerable[T]', predicate: Predicate[T]):
        super().__init__(source)
        self._predicate = predicate

    def move_next(self) -> bool:
        if self._done: return False
        parent = self._parent()
        while parent.move_next():
            item = parent.current
            if self._predicate(item):
                self._current = item
                return True
        return self._finish()


class _SelectEnumerator(UnaryEnumerator[U]):
    def __init__(self, source: 'Enumerable[T]', selector: Callable[[T, int], U]):
        super().__init__(source)
        self._selector = selector
        self._index = 0

    def move_next(self) -> bool:
        if self._done: return False
        parent = self._parent()
        if not parent.move_next():
            return self._finish()
        self._current = self._selector(parent.current, self._index)
        self._index += 1
        return True


class _SelectManyEnumerator(Enumerator[V]):
    """outer pulls the next collection only once the inner one is exhausted."""
    def __init__(self, source: 'Enumerable[T]', collection_selector: Selector[T, Iterable[U]],
                 result_selector: Optional[Callable[[T, U], V]]):
        self._source = source
        self._collection_selector = collection_selector
        self._result_selector = result_selector
        self._outer: Optional[Enumerator[T]] = None
        self._inner: Optional[Enumerator[U]] = None
        self._current: Optional[V] = None
        self._done = False

    @property
    def current(self) -> V:
        return self._current

    def move_next(self) -> bool:
        if self._done: return False
        if self._outer is None:
            self._outer = self._source.get_enumerator()
        while True:
            if self._inner is None:
                if not self._outer.move_next():
                    self._done = True
                    return False
                self._inner = from_iterable(self._collection_selector(self._outer.current)).get_enumerator()
            if self._inner.move_next():
                item = self._inner.current
                self._current = self._result_selector(self._outer.current, item) if self._result_selector else item
                return True
            self._inner.dispose()
            self._inner = None

    def dispose(self) -> None:
        self._done = True
        if self._inner is not None:
            self._inner.dispose()
            self._inner = None
        if self._outer is not None:
            self._outer.dispose()
            self._outer = None


class _SkipEnumerator(UnaryEnumerator[T]):
    def __init__(self, source: 'Enumerable[T]', count: int):
        super().__init__(source)
        self._count = count
        self._skipped = False

    def move_next(self) -> bool:
        if self._done: return False
        parent = self._parent()
        if not self._skipped:
            for _ in range(self._count):
                if not parent.move_next():
                    return self._finish()
            self._skipped = True
        if not parent.move_next():
            return self._finish()
        self._current = parent.current
        return True


class _TakeEnumerator(UnaryEnumerator[T]):
    """never asks the parent for more than `count` elements"""
    def __init__(self, source: 'Enumerable[T]', count: int):
        super().__init__(source)
        self._remaining = count

    def move_next(self) -> bool:
        if self._done or self._remaining <= 0:
            return self._finish()
        parent = self._parent()
        if not parent.move_next():
            self._remaining = 0
            return self._finish()
        self._remaining -= 1
        self._current = parent.current
        return True


class _TakeWhileEnumerator(UnaryEnumerator[T]):
    def __init__(self, source: 'Enumerable[T]', predicate: Predicate[T]):
        super().__init__(source)
        self._predicate = predicate

    def move_next(self) -> bool:
        if self._done: return False
        parent = self._parent()
        if not parent.move_next() or not self._predicate(parent.current):
            return self._finish()
        self._current = parent.current
        return True


class _SkipWhileEnumerator(UnaryEnumerator[T]):
    def __init__(self, source: 'Enumerable[T]', predicate: Predicate[T]):
        super().__init__(source)
        self._predicate = predicate
        self._skipped = False

    def move_next(self) -> bool:
        if self._done: return False
        parent = self._parent()
        while parent.move_next():
            item = parent.current
            if self._skipped or not self._predicate(item):
                self._skipped = True
                self._current = item
                return True
        return self._finish()


class _DefaultIfEmptyEnumerator(UnaryEnumerator[T]):
    def __init__(self, source: 'Enumerable[T]', default_value: T):
        super().__init__(source)
        self._default_value = default_value
        self._is_first = True

    def move_next(self) -> bool:
        if self._done: return False
        parent = self._parent()
        if self._is_first:
            self._is_first = False
            if not parent.move_next():
                # exactly one default, then exhausted
                self._current = self._default_value
                self._done = True
                return True
            self._current = parent.current
            return True
        if not parent.move_next():
            return self._finish()
        self._current = parent.current
        return True


class _ReverseEnumerator(UnaryEnumerator[T]):
    def __init__(self, source: 'Enumerable[T]'):
        super().__init__(source)
        self._buffer: Optional[List[T]] = None
        self._index = 0

    def move_next(self) -> bool:
        if self._done: return False
        if self._buffer is None:
            self._buffer = self._source.to.list()
            self._index = len(self._buffer)
        if self._index > 0:
            self._index -= 1
            self._current = self._buffer[self._index]
            return True
        return self._finish()

# --- mixin ---

class _CoreOperations(Generic[T]):
    def where(self: 'Enumerable[T]', predicate: Predicate[T]) -> 'Enumerable[T]':
        """filter elements based on a predicate"""
        from ..enumerable import Enumerable
        return Enumerable(lambda: _WhereEnumerator(self, predicate))

    def select(self: 'Enumerable[T]', selector: Selector[T, U]) -> 'Enumerable[U]':
        """project each element to a new form"""
        from ..enumerable import Enumerable
        return Enumerable(lambda: _SelectEnumerator(self, lambda item, _: selector(item)))

    def select_with_index(self: 'Enumerable[T]', selector: Callable[[T, int], U]) -> 'Enumerable[U]':
        """project each element to a new form, using the element's index"""
        from ..enumerable import Enumerable
        return Enumerable(lambda: _SelectEnumerator(self, selector))

    def select_many(self: 'Enumerable[T]', collection_selector: Selector[T, Iterable[U]],
                    result_selector: Optional[Callable[[T, U], V]] = None) -> 'Enumerable[V]':
        """project each element to a sequence and flatten. the selector may return any iterable."""
        from ..enumerable import Enumerable
        return Enumerable(lambda: _SelectManyEnumerator(self, collection_selector, result_selector))

    def order_by(self: 'Enumerable[T]', key_selector: Optional[KeySelector[T, K]] = None,
                 comparer: Optional[Comparer[K]] = None) -> 'OrderedEnumerable[T]':
        """stable sort by a key"""
        from ..enumerable import OrderedEnumerable
        return OrderedEnumerable(self, key_selector, comparer, False)

    def order_by_descending(self: 'Enumerable[T]', key_selector: Optional[KeySelector[T, K]] = None,
                            comparer: Optional[Comparer[K]] = None) -> 'OrderedEnumerable[T]':
        """stable sort by a key in descending order"""
        from ..enumerable import OrderedEnumerable
        return OrderedEnumerable(self, key_selector, comparer, True)

    def take(self: 'Enumerable[T]', count: int) -> 'Enumerable[T]':
        """take the first 'count' elements"""
        from ..enumerable import Enumerable
        return Enumerable(lambda: _TakeEnumerator(self, count))

    def skip(self: 'Enumerable[T]', count: int) -> 'Enumerable[T]':
        """skip the first 'count' elements"""
        from ..enumerable import Enumerable
        return Enumerable(lambda: _SkipEnumerator(self, count))

    def take_while(self: 'Enumerable[T]', predicate: Predicate[T]) -> 'Enumerable[T]':
        """take elements while predicate is true"""
        from ..enumerable import Enumerable
        return Enumerable(lambda: _TakeWhileEnumerator(self, predicate))

    def skip_while(self: 'Enumerable[T]', predicate: Predicate[T]) -> 'Enumerable[T]':
        """skip elements while predicate is true"""
        from ..enumerable import Enumerable
        return Enumerable(lambda: _SkipWhileEnumerator(self, predicate))

    def reverse(self: 'Enumerable[T]') -> 'Enumerable[T]':
        """inverts the order of the elements. buffers the source when first pulled."""
        from ..enumerable import Enumerable
        return Enumerable(lambda: _ReverseEnumerator(self))

    def default_if_empty(self: 'Enumerable[T]', default_value: Optional[T] = None) -> 'Enumerable[T]':
        """returns the elements of a sequence, or a default value in a singleton collection if the sequence is empty"""
        from ..enumerable import Enumerable
        return Enumerable(lambda: _DefaultIfEmptyEnumerator(self, default_value))

    def append(self: 'Enumerable[T]', element: T) -> 'Enumerable[T]':
        """appends a value to the end of the sequence"""
        return self.set.concat([element])

    def prepend(self: 'Enumerable[T]', element: T) -> 'Enumerable[T]':
        """adds a value to the beginning of the sequence"""
        return singleton(element).set.concat(self)

    def of_type(self: 'Enumerable[T]', type_filter: Type[U]) -> 'Enumerable[U]':
        """filters the elements of a sequence based on a specified type"""
        # syntactic sugar over where(); Type[U] means a class (or tuple of classes), not an instance
        return self.where(lambda item: isinstance(item, type_filter))
