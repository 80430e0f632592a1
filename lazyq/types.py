from typing import (
    TypeVar, Generic, Callable, Iterator, Iterable, Any, Optional, Union,
    Dict, List, Tuple, Set, Type, Sequence
)

T = TypeVar('T')
U = TypeVar('U')
K = TypeVar('K')
V = TypeVar('V')

Predicate = Callable[[T], bool]
Selector = Callable[[T], U]
KeySelector = Callable[[T], K]
Accumulator = Callable[[U, T], U]

# injectable collaborators
Comparer = Callable[[T, T], int]
EqualityComparer = Callable[[T, T], bool]
KeySerializer = Callable[[Any], str]


def identity(item: T) -> T:
    return item
