import logging
import suite
from lazyq import (
    Q, configure, get_defaults, reset_defaults, QueryDefaults,
    default_comparer, default_equality_comparer, default_key_serializer
)

test = suite.test
assert_that = suite.assert_that
assert_raises = suite.assert_raises

case_insensitive = lambda a, b: a.lower() == b.lower()


@test("shipped defaults")
def test_shipped_defaults():
    reset_defaults()
    defaults = get_defaults()
    assert_that(isinstance(defaults, QueryDefaults), "defaults object")
    assert_that(defaults.equality_comparer is default_equality_comparer, "equality comparer")
    assert_that(defaults.comparer is default_comparer, "comparer")
    assert_that(defaults.key_serializer is default_key_serializer, "serializer")


@test("default comparers follow natural ordering and equality")
def test_default_functions():
    assert_that(default_comparer(1, 2) < 0 and default_comparer(2, 1) > 0 and default_comparer(3, 3) == 0,
                "ordering sign")
    nan = float('nan')
    assert_that(default_equality_comparer(nan, nan), "the same object is equal to itself")
    assert_that(not default_equality_comparer(1, 2), "different values")
    assert_that(default_key_serializer('1') != default_key_serializer(1), "type-aware serialization")


@test("configure swaps the default used by later operators")
def test_configure_equality():
    try:
        configure(equality_comparer=case_insensitive)
        assert_that(Q(['a', 'A', 'b']).set.distinct().to.list() == ['a', 'b'], "configured comparer applies")
    finally:
        reset_defaults()
    assert_that(Q(['a', 'A']).set.distinct().to.count() == 2, "reset restores value equality")


@test("pipelines keep the defaults they were built with")
def test_configure_resolution_time():
    built = Q(['b', 'A', 'a']).order_by()
    try:
        configure(comparer=lambda a, b: (a.lower() > b.lower()) - (a.lower() < b.lower()))
        later = Q(['b', 'A', 'a']).order_by()
        assert_that(built.to.list() == ['A', 'a', 'b'], "built before configure: code point order")
        assert_that(later.to.list() == ['A', 'a', 'b'], "case-insensitive and stable")
        assert_that(Q(['b', 'a', 'A']).order_by().to.list() == ['a', 'A', 'b'], "ties keep input order")
    finally:
        reset_defaults()


@test("configure rejects unknown names and non-callables")
def test_configure_validation():
    assert_raises(TypeError, lambda: configure(hash_function=hash))
    assert_raises(TypeError, lambda: configure(comparer=42))
    assert_that(get_defaults().comparer is default_comparer, "failed configure changes nothing")


@test("library logs through a null handler by default")
def test_logging_setup():
    handlers = logging.getLogger('lazyq').handlers
    assert_that(any(isinstance(h, logging.NullHandler) for h in handlers), "package logger has a NullHandler")


if __name__ == "__main__":
    suite.main(title="lazyq configuration test suite")
