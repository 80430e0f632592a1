from __future__ import annotations

import logging
from .types import *

logger = logging.getLogger(__name__)


class EnumerableSorter(Generic[T]):
    """
    one sort criterion in a chain. `next` is the less significant criterion
    consulted on a tie; the last sorter breaks remaining ties by original
    index, which keeps the overall sort stable even though quicksort is not.
    """

    def __init__(self, key_selector: KeySelector[T, K], comparer: Comparer[K],
                 descending: bool, next_sorter: Optional['EnumerableSorter[T]'] = None):
        self.key_selector = key_selector
        self.comparer = comparer
        self.descending = descending
        self.next = next_sorter
        self.keys: List[Any] = []

    def compute_keys(self, elements: Sequence[T]) -> None:
        """each key selector runs exactly once per element"""
        sorter = self
        while sorter is not None:
            sorter.keys = [sorter.key_selector(element) for element in elements]
            sorter = sorter.next

    def compare_keys(self, index1: int, index2: int) -> int:
        sorter = self
        while True:
            c = sorter.comparer(sorter.keys[index1], sorter.keys[index2])
            if c != 0:
                return -c if sorter.descending else c
            if sorter.next is None:
                return index1 - index2
            sorter = sorter.next

    def sort(self, elements: Sequence[T]) -> List[int]:
        """returns the permutation that orders `elements`"""
        count = len(elements)
        logger.debug(f"sorting {count} elements on {self._depth()} criteria")
        self.compute_keys(elements)
        permutation = list(range(count))
        if count > 1:
            self._quick_sort(permutation, 0, count - 1)
        return permutation

    def _quick_sort(self, permutation: List[int], left: int, right: int) -> None:
        # recurse into the smaller partition, loop on the larger one
        while True:
            i, j = left, right
            pivot = permutation[i + ((j - i) >> 1)]
            while True:
                while i < len(permutation) and self.compare_keys(pivot, permutation[i]) > 0:
                    i += 1
                while j >= 0 and self.compare_keys(pivot, permutation[j]) < 0:
                    j -= 1
                if i > j:
                    break
                if i < j:
                    permutation[i], permutation[j] = permutation[j], permutation[i]
                i += 1
                j -= 1
                if i > j:
                    break
            if j - left <= right - i:
                if left < j:
                    self._quick_sort(permutation, left, j)
                left = i
            else:
                if i < right:
                    self._quick_sort(permutation, i, right)
                right = j
            if left >= right:
                return

    def _depth(self) -> int:
        depth, sorter = 0, self
        while sorter is not None:
            depth, sorter = depth + 1, sorter.next
        return depth
