from __future__ import annotations
import logging
import typing
from ..types import *
from ..config import get_defaults
from ..enumerator import UnaryEnumerator

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable, Grouping

logger = logging.getLogger(__name__)


class _GroupByEnumerator(UnaryEnumerator[Any]):
    """drains the whole parent into buckets before producing the first group"""
    def __init__(self, source: 'Enumerable[T]', key_selector: KeySelector[T, K],
                 element_selector: Selector[T, U],
                 result_selector: Optional[Callable[[K, 'Grouping[K, U]'], V]],
                 key_serializer: KeySerializer):
        super().__init__(source)
        self._key_selector = key_selector
        self._element_selector = element_selector
        self._result_selector = result_selector
        self._key_serializer = key_serializer
        self._buckets: Optional[List[Tuple[K, List[U]]]] = None
        self._index = 0

    def _build_buckets(self) -> List[Tuple[K, List[U]]]:
        lookup: Dict[str, Tuple[K, List[U]]] = {}
        parent = self._parent()
        count = 0
        try:
            while parent.move_next():
                item = parent.current
                key = self._key_selector(item)
                serialized = self._key_serializer(key)
                if serialized not in lookup:
                    lookup[serialized] = (key, [])
                lookup[serialized][1].append(self._element_selector(item))
                count += 1
        finally:
            # the parent is fully consumed, release it now
            parent.dispose()
            self._enumerator = None
        logger.debug(f"group_by bucketed {count} elements into {len(lookup)} groups")
        return list(lookup.values())

    def move_next(self) -> bool:
        from ..enumerable import Grouping
        if self._done: return False
        if self._buckets is None:
            self._buckets = self._build_buckets()
        if self._index >= len(self._buckets):
            return self._finish()
        key, elements = self._buckets[self._index]
        self._index += 1
        grouping = Grouping(key, elements)
        self._current = self._result_selector(key, grouping) if self._result_selector else grouping
        return True


class GroupingAccessor(Generic[T]):
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def group_by(self, key_selector: KeySelector[T, K],
                 element_selector: Optional[Selector[T, U]] = None,
                 result_selector: Optional[Callable[[K, 'Grouping[K, U]'], V]] = None,
                 key_serializer: Optional[KeySerializer] = None) -> 'Enumerable[Any]':
        """
        group elements by a key, in first-seen key order.

        keys are bucketed by key_serializer(key) (default: configured
        key_serializer), so unhashable keys such as dicts and lists work.
        yields Grouping objects (restartable, with a .key) unless a
        result_selector(key, grouping) is given.
        """
        from ..enumerable import Enumerable
        element_selector = element_selector or identity
        key_serializer = key_serializer or get_defaults().key_serializer
        return Enumerable(lambda: _GroupByEnumerator(
            self._enumerable, key_selector, element_selector, result_selector, key_serializer))

    def group_by_multiple(self, *key_selectors: KeySelector[T, Any]) -> 'Enumerable[Grouping[Tuple, T]]':
        """group by multiple keys with composite key tuples"""
        return self.group_by(lambda item: tuple(selector(item) for selector in key_selectors))
