import typing
from collections.abc import Iterator as _IteratorABC, Sequence as _SequenceABC
from .types import *
from .enumerator import (
    Enumerator, SequenceEnumerator, IteratorEnumerator, RangeEnumerator,
    RepeatEnumerator, EmptyEnumerator
)

if typing.TYPE_CHECKING:
    from .enumerable import Enumerable

def create(factory: Callable[[], Enumerator[T]]) -> 'Enumerable[T]':
    """wrap a zero-argument enumerator factory"""
    from .enumerable import Enumerable
    return Enumerable(factory)

def from_iterable(data: Iterable[T]) -> 'Enumerable[T]':
    """
    create enumerable from iterable.
    sequences are walked by index and re-iterables are re-opened per
    enumeration; a bare iterator (or generator object) can only be
    enumerated once, which is the caller's responsibility. such an iterator
    stays the caller's: disposing an enumerator over it never closes it.
    """
    from .enumerable import Enumerable
    if isinstance(data, Enumerable):
        return data
    if isinstance(data, _SequenceABC):
        return Enumerable(lambda: SequenceEnumerator(data))
    if isinstance(data, _IteratorABC):
        return Enumerable(lambda: IteratorEnumerator(data))
    return Enumerable(lambda: IteratorEnumerator(iter(data), owned=True))

def from_range(start: int, count: int) -> 'Enumerable[int]':
    """create enumerable from range"""
    from .enumerable import Enumerable
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    return Enumerable(lambda: RangeEnumerator(start, count))

def repeat(item: T, count: Optional[int] = None) -> 'Enumerable[T]':
    """create enumerable with repeated item. count None repeats forever."""
    from .enumerable import Enumerable
    if count is not None and count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    return Enumerable(lambda: RepeatEnumerator(item, count))

def singleton(value: T) -> 'Enumerable[T]':
    """sequence with exactly one element"""
    from .enumerable import Enumerable
    return Enumerable(lambda: SequenceEnumerator((value,)))

def empty() -> 'Enumerable[Any]':
    """create empty enumerable"""
    from .enumerable import Enumerable
    return Enumerable(EmptyEnumerator)

def generate(generator_func: Callable[[], T], count: Optional[int] = None) -> 'Enumerable[T]':
    """sequence of generator_func() results, called once per pulled element"""
    return repeat(None, count).select(lambda _: generator_func())

def from_generator(generator_function: Callable[..., Iterator[T]], *args: Any, **kwargs: Any) -> 'Enumerable[T]':
    """
    restartable sequence over a generator function: every enumeration calls
    it again, and disposing the enumerator closes the generator.
    """
    from .enumerable import Enumerable
    return Enumerable(lambda: IteratorEnumerator(iter(generator_function(*args, **kwargs)), owned=True))

# --- variadic combinators ---

def concat(*sources: Iterable[T]) -> 'Enumerable[T]':
    """chain sequences in order: all of the first, then all of the second, ..."""
    return from_iterable([from_iterable(source) for source in sources]).select_many(identity)

def union(*sources: Iterable[T], comparer: Optional[EqualityComparer[T]] = None) -> 'Enumerable[T]':
    """chain sequences in order, dropping elements equal to one already produced"""
    return concat(*sources).set.distinct(comparer)

def sequence_equal(first: Iterable[T], second: Iterable[T],
                   comparer: Optional[EqualityComparer[T]] = None) -> bool:
    """positional equality of two sequences, including length"""
    return from_iterable(first).to.sequence_equal(second, comparer)

# --- aliases ---
lazyq = from_iterable
Q = from_iterable
