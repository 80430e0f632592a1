from .types import *


def default_equality_comparer(first: Any, second: Any) -> bool:
    """identity first, then value equality"""
    return first is second or first == second


def default_comparer(first: Any, second: Any) -> int:
    """natural ordering as a negative / zero / positive int"""
    return (first > second) - (first < second)


def default_key_serializer(key: Any) -> str:
    """bucket name for group_by. repr keeps 1 and '1' apart."""
    return repr(key)
