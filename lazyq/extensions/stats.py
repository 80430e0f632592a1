from __future__ import annotations
import typing
from ..types import *
from ..errors import EmptySequenceError

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable

class StatsAccessor(Generic[T]):
    """numeric folds. a selector projects first, then the fold runs on the projection."""
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    def sum(self, selector: Optional[Selector[T, Union[int, float]]] = None) -> Union[int, float]:
        """calc sum. empty sequences sum to 0."""
        if selector: return self._enumerable.select(selector).stats.sum()
        total = 0
        with self._enumerable.get_enumerator() as enumerator:
            while enumerator.move_next():
                total += enumerator.current
        return total

    def average(self, selector: Optional[Selector[T, Union[int, float]]] = None) -> float:
        """calc average"""
        if selector: return self._enumerable.select(selector).stats.average()
        count, total = 0, 0
        with self._enumerable.get_enumerator() as enumerator:
            while enumerator.move_next():
                count += 1
                total += enumerator.current
        if count == 0: raise EmptySequenceError()
        return total / count

    def min(self, selector: Optional[Selector[T, Any]] = None) -> Any:
        """find minimum"""
        if selector: return self._enumerable.select(selector).stats.min()
        return self._extreme(lambda candidate, best: candidate < best)

    def max(self, selector: Optional[Selector[T, Any]] = None) -> Any:
        """find maximum"""
        if selector: return self._enumerable.select(selector).stats.max()
        return self._extreme(lambda candidate, best: candidate > best)

    def _extreme(self, better: Callable[[Any, Any], bool]) -> Any:
        # first occurrence wins on ties
        with self._enumerable.get_enumerator() as enumerator:
            if not enumerator.move_next():
                raise EmptySequenceError()
            best = enumerator.current
            while enumerator.move_next():
                if better(enumerator.current, best):
                    best = enumerator.current
        return best
