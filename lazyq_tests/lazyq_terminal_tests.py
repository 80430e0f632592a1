import numpy as np
import pandas as pd
import suite
from collections import namedtuple
from fixtures import people, tracked
from lazyq import Q, empty, repeat, sequence_equal, EmptySequenceError, InvalidOperationError, QueryError

test = suite.test
assert_that = suite.assert_that
assert_raises = suite.assert_raises

Person = namedtuple('Person', ['name', 'age', 'city'])

sample_people = [
    Person('alice', 25, 'nyc'),
    Person('bob', 30, 'la'),
    Person('charlie', 25, 'nyc'),
]

sample_numbers = [1, 2, 3, 4, 5, 6, 7, 8, 9, 10]


# --- materialization ---

@test("list, set and dict conversions")
def test_collections():
    assert_that(Q(sample_numbers).to.list() == sample_numbers, "list")
    assert_that(Q([1, 2, 2, 3]).to.set() == {1, 2, 3}, "set")
    by_name = Q(sample_people).to.dict(lambda p: p.name, lambda p: p.age)
    assert_that(by_name == {'alice': 25, 'bob': 30, 'charlie': 25}, f"dict: {by_name}")
    assert_that(Q(sample_people).to.dict(lambda p: p.name)['bob'] == sample_people[1], "dict without values")


@test("array conversion creates numpy array")
def test_to_array():
    result = Q(sample_numbers).where(lambda x: x > 5).to.array()
    assert_that(isinstance(result, np.ndarray), f"should return ndarray: {type(result)}")
    assert_that(np.array_equal(result, np.array([6, 7, 8, 9, 10])), f"unexpected: {result}")


@test("pandas conversions")
def test_to_pandas():
    series = Q(sample_numbers).take(3).to.pandas()
    assert_that(isinstance(series, pd.Series) and series.tolist() == [1, 2, 3], "series")
    frame = people(10).select(lambda p: {'name': p['name'], 'age': p['age']}).to.df()
    assert_that(isinstance(frame, pd.DataFrame) and frame.shape == (10, 2), f"frame shape {frame.shape}")
    assert_that(list(frame.columns) == ['name', 'age'], "columns follow the record keys")


@test("for_each visits every element in order")
def test_for_each():
    seen = []
    Q([3, 1, 2]).to.for_each(seen.append)
    assert_that(seen == [3, 1, 2], f"unexpected: {seen}")


# --- error kinds ---

@test("error kinds are value errors and query errors")
def test_error_hierarchy():
    assert_that(issubclass(EmptySequenceError, ValueError) and issubclass(EmptySequenceError, QueryError), "empty")
    assert_that(issubclass(InvalidOperationError, ValueError), "invalid operation")


# --- first / last ---

@test("first and first_or_default")
def test_first():
    assert_that(Q([5, 6]).to.first() == 5, "first element")
    assert_that(Q([5, 6, 7]).to.first(lambda x: x > 5) == 6, "first match")
    assert_raises(EmptySequenceError, lambda: empty().to.first())
    assert_raises(EmptySequenceError, lambda: Q([1]).to.first(lambda x: x > 1))
    assert_that(empty().to.first_or_default() is None, "None is the no-value result")
    assert_that(Q([1]).to.first_or_default(lambda x: x > 1, default=-1) == -1, "explicit default")


@test("first stops pulling after the first element")
def test_first_short_circuit():
    assert_that(repeat('x').to.first() == 'x', "works on an unbounded source")
    source, tracker = tracked([1, 2, 3])
    source.to.first()
    assert_that(tracker.pulls == 1 and tracker.open_enumerators == 0, "one pull, disposed")


@test("last and last_or_default")
def test_last():
    assert_that(Q([1, 2, 3]).to.last() == 3, "last element")
    assert_that(Q([1, 2, 3, 4]).to.last(lambda x: x % 2 == 1) == 3, "last match")
    assert_raises(EmptySequenceError, lambda: empty().to.last())
    assert_that(empty().to.last_or_default() is None, "no value")
    assert_that(Q([2]).to.last_or_default(lambda x: x > 5, default=0) == 0, "explicit default")
    assert_that(Q([None]).to.last() is None, "a None element is still an element")


# --- single ---

@test("single requires exactly one element")
def test_single():
    assert_that(Q([1]).to.single() == 1, "one element")
    assert_raises(InvalidOperationError, lambda: Q([1, 1, 2]).to.single())
    assert_raises(EmptySequenceError, lambda: empty().to.single())
    assert_that(Q([1, 2, 3]).to.single(lambda x: x == 2) == 2, "one match")
    assert_raises(InvalidOperationError, lambda: Q([1, 2, 3]).to.single(lambda x: x > 1))


@test("single stops after detecting a second element")
def test_single_short_circuit():
    source, tracker = tracked([1, 2, 3, 4])
    assert_raises(InvalidOperationError, lambda: source.to.single())
    assert_that(tracker.pulls == 2 and tracker.open_enumerators == 0, "two pulls, disposed")


@test("single_or_default returns the default only without a predicate")
def test_single_or_default():
    assert_that(empty().to.single_or_default() is None, "empty gives None")
    assert_that(empty().to.single_or_default(default=9) == 9, "explicit default")
    assert_that(Q([4]).to.single_or_default() == 4, "one element")
    assert_raises(InvalidOperationError, lambda: Q([1, 2]).to.single_or_default())
    assert_that(Q([1, 2]).to.single_or_default(lambda x: x == 2) == 2, "one match")
    # with a predicate it behaves like where().single()
    assert_raises(EmptySequenceError, lambda: Q([1, 2]).to.single_or_default(lambda x: x > 5))
    assert_raises(InvalidOperationError, lambda: Q([1, 2]).to.single_or_default(lambda x: x > 0))


# --- element_at ---

@test("element_at and element_at_or_default")
def test_element_at():
    assert_that(Q(['a', 'b', 'c']).to.element_at(1) == 'b', "by index")
    assert_raises(EmptySequenceError, lambda: Q(['a']).to.element_at(3))
    assert_that(Q(['a']).to.element_at_or_default(3) is None, "out of range gives None")
    assert_that(Q(['a']).to.element_at_or_default(3, default='z') == 'z', "explicit default")


# --- quantifiers ---

@test("count with and without predicate")
def test_count():
    assert_that(Q(sample_numbers).to.count() == 10, "all elements")
    assert_that(Q(sample_numbers).to.count(lambda x: x % 3 == 0) == 3, "matching elements")
    assert_that(empty().to.count() == 0, "empty")


@test("any and all short-circuit")
def test_any_all():
    source, tracker = tracked([1, 2, 3, 4])
    assert_that(source.to.any(lambda x: x == 2), "2 exists")
    assert_that(tracker.pulls == 2, f"any should stop at the match, pulled {tracker.pulls}")
    assert_that(not source.to.all(lambda x: x < 1), "1 fails")
    assert_that(tracker.pulls == 3, "all should stop at the first failure")
    assert_that(tracker.open_enumerators == 0, "both disposed")
    assert_that(Q([0]).to.any() and not empty().to.any(), "any without predicate checks for elements")
    assert_that(empty().to.all(lambda x: False), "all of empty is true")


@test("sequence_equal compares positionally")
def test_sequence_equal():
    assert_that(Q([1, 2, 3]).to.sequence_equal([1, 2, 3]), "equal")
    assert_that(not Q([1, 2, 3]).to.sequence_equal([1, 3, 2]), "different order")
    assert_that(not Q([1, 2]).to.sequence_equal([1, 2, 3]), "second longer")
    assert_that(not Q([1, 2, 3]).to.sequence_equal([1, 2]), "first longer")
    assert_that(empty().to.sequence_equal([]), "two empties")
    assert_that(Q(['A']).to.sequence_equal(['a'], lambda a, b: a.lower() == b.lower()), "comparer")


@test("sequence_equal disposes both enumerators on early exit")
def test_sequence_equal_dispose():
    first, first_tracker = tracked([1, 2, 3])
    second, second_tracker = tracked([1, 9, 3])
    assert_that(not first.to.sequence_equal(second), "mismatch at index 1")
    assert_that(first_tracker.open_enumerators == 0 and second_tracker.open_enumerators == 0, "both disposed")


@test("module-level sequence_equal takes both sequences")
def test_sequence_equal_function():
    assert_that(sequence_equal([1, 2, 3], Q([1, 2, 3])), "list against enumerable")
    assert_that(not sequence_equal(Q([1, 2]), [1, 2, 3]), "length differs")
    assert_that(sequence_equal([], empty()), "two empties")
    assert_that(sequence_equal(['A', 'b'], ['a', 'B'], lambda a, b: a.lower() == b.lower()), "comparer")
    first, tracker = tracked([1, 2])
    assert_that(not sequence_equal(first, [9, 2]) and tracker.open_enumerators == 0, "mismatch disposes")


# --- aggregate ---

@test("aggregate with and without a seed")
def test_aggregate():
    assert_that(Q([1, 2, 3]).to.aggregate(lambda a, x: a + x, 0) == 6, "seeded sum")
    assert_that(Q([1, 2, 3]).to.aggregate(lambda a, x: a * x) == 6, "unseeded product")
    assert_that(Q(['a', 'b']).to.aggregate(lambda a, x: a + x) == 'ab', "first element seeds the fold")
    assert_raises(EmptySequenceError, lambda: empty().to.aggregate(lambda a, x: a + x))
    assert_that(empty().to.aggregate(lambda a, x: a + x, 10) == 10, "empty with seed returns the seed")
    assert_that(empty().to.aggregate(lambda a, x: a + x, None) is None, "None is a valid seed")
    assert_that(empty().to.aggregate(lambda a, x: a + x, 1, lambda a: a * 100) == 100, "result selector on seed")


@test("aggregate_with_selector transforms the final value")
def test_aggregate_with_selector():
    result = Q(['x', 'y']).to.aggregate_with_selector('', lambda a, x: a + x, str.upper)
    assert_that(result == 'XY', f"unexpected: {result}")


# --- cleanup on failure ---

@test("callback errors propagate after the source is disposed")
def test_callback_error_disposes():
    source, tracker = tracked([1, 2, 3])

    def explode(x):
        if x == 2:
            raise KeyError('boom')

    error = assert_raises(KeyError, lambda: source.select(lambda x: x).to.for_each(explode))
    assert_that(error.args == ('boom',), "original error surfaces unchanged")
    assert_that(tracker.open_enumerators == 0, "source disposed before the error surfaced")


@test("source errors propagate after cleanup")
def test_source_error_disposes():
    source, tracker = tracked([1, 2, 3], fail_at=1)
    assert_raises(RuntimeError, lambda: source.where(lambda x: True).take(5).to.list())
    assert_that(tracker.open_enumerators == 0, "disposed despite the failure")


if __name__ == "__main__":
    suite.main(title="lazyq terminal operations test suite")
