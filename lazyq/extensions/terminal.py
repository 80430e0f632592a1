from __future__ import annotations
import typing
import numpy as np
import pandas as pd
from ..types import *
from ..config import get_defaults
from ..errors import EmptySequenceError, InvalidOperationError

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable

# distinguishes "no seed" from a seed of None
_NO_SEED = object()


class TerminalAccessor(Generic[T]):
    """
    operators that drive the pipeline. each opens one enumerator (two for
    sequence_equal) and disposes it on every exit path, callbacks raising
    included, before the error reaches the caller.
    """
    def __init__(self, enumerable_instance: 'Enumerable[T]'):
        self._enumerable = enumerable_instance

    # --- materialization ---

    def list(self) -> List[T]:
        """convert to list"""
        results = []
        with self._enumerable.get_enumerator() as enumerator:
            while enumerator.move_next():
                results.append(enumerator.current)
        return results

    def array(self) -> np.ndarray:
        """convert to numpy array"""
        return np.array(self.list())

    def set(self) -> Set[T]:
        """convert to set"""
        return set(self.list())

    def dict(self, key_selector: KeySelector[T, K],
             value_selector: Optional[Selector[T, V]] = None) -> Dict[K, V]:
        """convert to dictionary. later keys overwrite earlier ones."""
        val_sel = value_selector if value_selector else identity
        return {key_selector(item): val_sel(item) for item in self.list()}

    def pandas(self) -> pd.Series:
        """convert to pandas series"""
        return pd.Series(self.list())

    def df(self) -> pd.DataFrame:
        """convert to pandas dataframe"""
        return pd.DataFrame(self.list())

    def for_each(self, action: Callable[[T], Any]) -> None:
        """run action on every element"""
        with self._enumerable.get_enumerator() as enumerator:
            while enumerator.move_next():
                action(enumerator.current)

    # --- counting and quantifiers ---

    def count(self, predicate: Optional[Predicate[T]] = None) -> int:
        """count elements"""
        c = 0
        with self._enumerable.get_enumerator() as enumerator:
            while enumerator.move_next():
                if predicate is None or predicate(enumerator.current):
                    c += 1
        return c

    def any(self, predicate: Optional[Predicate[T]] = None) -> bool:
        """check if any element satisfies condition. stops at the first hit."""
        with self._enumerable.get_enumerator() as enumerator:
            while enumerator.move_next():
                if predicate is None or predicate(enumerator.current):
                    return True
        return False

    def all(self, predicate: Predicate[T]) -> bool:
        """check if all elements satisfy condition. stops at the first miss."""
        with self._enumerable.get_enumerator() as enumerator:
            while enumerator.move_next():
                if not predicate(enumerator.current):
                    return False
        return True

    def sequence_equal(self, other: Iterable[T], comparer: Optional[EqualityComparer[T]] = None) -> bool:
        """positional equality, including length"""
        from ..factories import from_iterable
        comparer = comparer or get_defaults().equality_comparer
        with self._enumerable.get_enumerator() as first, from_iterable(other).get_enumerator() as second:
            while first.move_next():
                if not second.move_next() or not comparer(first.current, second.current):
                    return False
            return not second.move_next()

    # --- element access ---

    def first(self, predicate: Optional[Predicate[T]] = None) -> T:
        """get first element"""
        with self._enumerable.get_enumerator() as enumerator:
            while enumerator.move_next():
                current = enumerator.current
                if predicate is None or predicate(current):
                    return current
        raise EmptySequenceError()

    def first_or_default(self, predicate: Optional[Predicate[T]] = None,
                         default: Optional[T] = None) -> Optional[T]:
        """get first element or default"""
        with self._enumerable.get_enumerator() as enumerator:
            while enumerator.move_next():
                current = enumerator.current
                if predicate is None or predicate(current):
                    return current
        return default

    def _last(self, predicate: Optional[Predicate[T]]) -> Tuple[bool, Optional[T]]:
        has_value, value = False, None
        with self._enumerable.get_enumerator() as enumerator:
            while enumerator.move_next():
                current = enumerator.current
                if predicate is None or predicate(current):
                    has_value, value = True, current
        return has_value, value

    def last(self, predicate: Optional[Predicate[T]] = None) -> T:
        """get last element"""
        has_value, value = self._last(predicate)
        if not has_value: raise EmptySequenceError()
        return value

    def last_or_default(self, predicate: Optional[Predicate[T]] = None,
                        default: Optional[T] = None) -> Optional[T]:
        """get last element or default"""
        has_value, value = self._last(predicate)
        return value if has_value else default

    def single(self, predicate: Optional[Predicate[T]] = None) -> T:
        """get the only element, erroring if there are none or more than one"""
        if predicate is not None:
            return self._enumerable.where(predicate).to.single()
        with self._enumerable.get_enumerator() as enumerator:
            if enumerator.move_next():
                current = enumerator.current
                if enumerator.move_next():
                    raise InvalidOperationError()
                return current
        raise EmptySequenceError()

    def single_or_default(self, predicate: Optional[Predicate[T]] = None,
                          default: Optional[T] = None) -> Optional[T]:
        """
        get the only element or default when empty. more than one element
        still raises. with a predicate this is where(predicate).single(),
        so no match raises EmptySequenceError rather than returning default.
        """
        if predicate is not None:
            return self._enumerable.where(predicate).to.single()
        with self._enumerable.get_enumerator() as enumerator:
            if enumerator.move_next():
                current = enumerator.current
                if enumerator.move_next():
                    raise InvalidOperationError()
                return current
        return default

    def element_at(self, index: int) -> T:
        """element at a zero-based position"""
        return self._enumerable.skip(index).to.first()

    def element_at_or_default(self, index: int, default: Optional[T] = None) -> Optional[T]:
        """element at a zero-based position or default when out of range"""
        return self._enumerable.skip(index).to.first_or_default(default=default)

    # --- folding ---

    def aggregate(self, accumulator: Accumulator[Any, T], seed: Any = _NO_SEED,
                  result_selector: Optional[Selector[Any, V]] = None) -> Any:
        """
        applies accumulator over the sequence. without a seed the first element
        seeds the fold and an empty sequence raises EmptySequenceError; with a
        seed an empty sequence yields the seed (through result_selector if given).
        """
        with self._enumerable.get_enumerator() as enumerator:
            if seed is _NO_SEED:
                if not enumerator.move_next():
                    raise EmptySequenceError()
                accumulate = enumerator.current
            else:
                accumulate = seed
            while enumerator.move_next():
                accumulate = accumulator(accumulate, enumerator.current)
        return result_selector(accumulate) if result_selector else accumulate

    def aggregate_with_selector(self, seed: U, accumulator: Accumulator[U, T],
                                result_selector: Selector[U, V]) -> V:
        """aggregate with seed and final transformation"""
        return self.aggregate(accumulator, seed, result_selector)
