"""error kinds raised by terminal operators."""

SEQUENCE_NO_ELEMENTS = "sequence contains no elements"
SEQUENCE_MORE_THAN_ONE = "sequence contains more than one element"


class QueryError(Exception):
    """base class for errors raised by lazyq itself (never for user callbacks)."""
    pass


class EmptySequenceError(QueryError, ValueError):
    """a terminal operator required at least one element and found none."""

    def __init__(self, message: str = SEQUENCE_NO_ELEMENTS):
        super().__init__(message)


class InvalidOperationError(QueryError, ValueError):
    """cardinality violation: more than one element where exactly one was required."""

    def __init__(self, message: str = SEQUENCE_MORE_THAN_ONE):
        super().__init__(message)
