from __future__ import annotations
import typing
from ..types import *
from ..enumerator import Enumerator

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable


class _ZipEnumerator(Enumerator[V]):
    def __init__(self, first: 'Enumerable[T]', second: 'Enumerable[U]',
                 result_selector: Callable[[T, U], V]):
        self._first = first
        self._second = second
        self._result_selector = result_selector
        self._left: Optional[Enumerator[T]] = None
        self._right: Optional[Enumerator[U]] = None
        self._current: Optional[V] = None
        self._done = False

    @property
    def current(self) -> V:
        return self._current

    def move_next(self) -> bool:
        if self._done:
            return False
        if self._left is None:
            self._left = self._first.get_enumerator()
            self._right = self._second.get_enumerator()
        # the shorter side ends the zip
        if self._left.move_next() and self._right.move_next():
            self._current = self._result_selector(self._left.current, self._right.current)
            return True
        self._done = True
        return False

    def dispose(self) -> None:
        self._done = True
        if self._left is not None:
            self._left.dispose()
            self._left = None
        if self._right is not None:
            self._right.dispose()
            self._right = None


class ZipAccessor(Generic[T]):
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def zip_with(self, other: Iterable[U],
                 result_selector: Optional[Callable[[T, U], V]] = None) -> 'Enumerable[V]':
        """zip two sequences with a result selector (default: pairs). stops at the shorter one."""
        from ..enumerable import Enumerable
        from ..factories import from_iterable
        second = from_iterable(other)
        selector = result_selector or (lambda left, right: (left, right))
        return Enumerable(lambda: _ZipEnumerator(self._enumerable, second, selector))
