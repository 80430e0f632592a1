from __future__ import annotations

from abc import ABC, abstractmethod
from .types import *
from .config import get_defaults
from .enumerator import Enumerator, SequenceEnumerator
from .sorter import EnumerableSorter

# --- core functionality ---
from .extensions.core import _CoreOperations

# --- accessors ---
from .extensions.set import SetAccessor
from .extensions.grouping import GroupingAccessor
from .extensions.stats import StatsAccessor
from .extensions.terminal import TerminalAccessor
from .extensions.zip import ZipAccessor


# --- abstract base class ---

class IEnumerable(ABC, Generic[T]):
    @abstractmethod
    def get_enumerator(self) -> Enumerator[T]:
        """open a fresh enumerator over the sequence"""
        pass

# --- base enumerable implementation ---

class _BaseEnumerable(IEnumerable[T]):
    def __init__(self, factory: Callable[[], Enumerator[T]]):
        """init with a zero-argument function that opens a new enumerator per call"""
        self._factory = factory

    def get_enumerator(self) -> Enumerator[T]:
        return self._factory()

    def __iter__(self) -> Iterator[T]:
        # the generator's finally runs on exhaustion, break (close) and exceptions
        enumerator = self.get_enumerator()
        try:
            while enumerator.move_next():
                yield enumerator.current
        finally:
            enumerator.dispose()

# --- main enumerable class ---

class Enumerable(
    _BaseEnumerable[T],
    _CoreOperations[T]
):
    """a deferred, restartable sequence. nothing runs until a terminal operator pulls."""
    def __init__(self, factory: Callable[[], Enumerator[T]]):
        super().__init__(factory)
        # --- initialize accessors ---
        self.set = SetAccessor(self)
        self.zip = ZipAccessor(self)
        self.group = GroupingAccessor(self)
        self.stats = StatsAccessor(self)
        self.to = TerminalAccessor(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(deferred)"

# --- grouping ---

class Grouping(Enumerable[T], Generic[K, T]):
    """one bucket produced by group_by. restartable over its materialized elements."""
    def __init__(self, key: K, elements: List[T]):
        super().__init__(lambda: SequenceEnumerator(elements))
        self.key = key
        self._elements = elements

    def __repr__(self) -> str:
        return f"Grouping(key={self.key!r}, count={len(self._elements)})"

# --- ordered enumerable class ---

class OrderedEnumerable(Enumerable[T]):
    """
    a sorted view of `source`. each then_by adds a node whose parent is the
    node it was called on; the chain is turned into a sorter chain (primary
    criterion first) every time the sequence is enumerated.
    """

    def __init__(self, source: Enumerable[T], key_selector: Optional[KeySelector[T, K]] = None,
                 comparer: Optional[Comparer[K]] = None, descending: bool = False,
                 parent: Optional['OrderedEnumerable[T]'] = None):
        super().__init__(lambda: _OrderedEnumerator(self))
        self.source = source
        self.key_selector = key_selector or identity
        self.comparer = comparer or get_defaults().comparer
        self.descending = descending
        self.parent = parent

    def get_enumerable_sorter(self) -> EnumerableSorter[T]:
        """walk leaf -> root so the head of the sorter chain is the primary criterion"""
        sorter: Optional[EnumerableSorter[T]] = None
        node: Optional[OrderedEnumerable[T]] = self
        while node is not None:
            sorter = EnumerableSorter(node.key_selector, node.comparer, node.descending, sorter)
            node = node.parent
        return sorter

    def create_ordered_enumerable(self, key_selector: Optional[KeySelector[T, K]],
                                  comparer: Optional[Comparer[K]],
                                  descending: bool) -> 'OrderedEnumerable[T]':
        return OrderedEnumerable(self.source, key_selector, comparer, descending, parent=self)

    def then_by(self, key_selector: Optional[KeySelector[T, K]] = None,
                comparer: Optional[Comparer[K]] = None) -> 'OrderedEnumerable[T]':
        """secondary sort ascending"""
        return self.create_ordered_enumerable(key_selector, comparer, False)

    def then_by_descending(self, key_selector: Optional[KeySelector[T, K]] = None,
                           comparer: Optional[Comparer[K]] = None) -> 'OrderedEnumerable[T]':
        """secondary sort descending"""
        return self.create_ordered_enumerable(key_selector, comparer, True)


class _OrderedEnumerator(Enumerator[T]):
    """buffers and sorts on the first move_next; every enumeration sorts from scratch."""

    def __init__(self, ordered: OrderedEnumerable[T]):
        self._ordered = ordered
        self._buffer: Optional[List[T]] = None
        self._permutation: List[int] = []
        self._index = 0
        self._current: Optional[T] = None
        self._done = False

    def move_next(self) -> bool:
        if self._done:
            return False
        if self._buffer is None:
            self._buffer = self._ordered.source.to.list()
            self._permutation = self._ordered.get_enumerable_sorter().sort(self._buffer)
        if self._index < len(self._buffer):
            self._current = self._buffer[self._permutation[self._index]]
            self._index += 1
            return True
        self._done = True
        return False

    @property
    def current(self) -> T:
        return self._current

    def dispose(self) -> None:
        self._done = True
