"""
shared test data: seeded faker records and instrumented sources that
count pulls and disposals.
"""
from typing import Any, Dict, List, Optional

import numpy as np
from faker import Faker

from lazyq import Enumerable, Enumerator, create, from_iterable

DEPARTMENTS = ['eng', 'sales', 'hr', 'marketing']


class RecordGenerator:
    """seeded person / order records, reproducible per seed."""

    def __init__(self, seed: Optional[int] = None):
        self._fake = Faker()
        if seed is not None:
            self._fake.seed_instance(seed)
        self._rng = np.random.default_rng(seed)

    def person(self, person_id: int) -> Dict[str, Any]:
        return {
            'id': person_id,
            'name': self._fake.first_name().lower(),
            'age': self._fake.pyint(min_value=18, max_value=65),
            'salary': self._fake.pyint(min_value=30000, max_value=150000),
            # numpy's choice returns a numpy scalar, keep native types
            'department': self._rng.choice(DEPARTMENTS).item(),
            'active': self._fake.pybool(),
        }

    def order(self, order_id: int, max_customer: int) -> Dict[str, Any]:
        return {
            'order_id': order_id,
            'customer_id': int(self._rng.integers(1, max_customer, endpoint=True)),
            'amount': round(self._fake.pyfloat(min_value=5, max_value=500), 2),
        }


def people(count: int, seed: int = 42) -> Enumerable:
    """materialized up front so every enumeration sees the same records"""
    generator = RecordGenerator(seed)
    return from_iterable([generator.person(i + 1) for i in range(count)])


def orders(count: int, max_customer: int = 5, seed: int = 7) -> Enumerable:
    generator = RecordGenerator(seed)
    return from_iterable([generator.order(i + 1, max_customer) for i in range(count)])


# --- instrumented sources ---

class Tracker:
    """counts what consumers did to the enumerators of a tracked source."""

    def __init__(self):
        self.opened = 0
        self.pulls = 0
        self.disposed = 0

    @property
    def open_enumerators(self) -> int:
        return self.opened - self.disposed


class _TrackedEnumerator(Enumerator[Any]):
    def __init__(self, items: List[Any], tracker: Tracker, fail_at: Optional[int]):
        self._items = items
        self._tracker = tracker
        self._fail_at = fail_at
        self._index = -1
        self._disposed = False

    def move_next(self) -> bool:
        if self._index + 1 >= len(self._items):
            self._index = len(self._items)
            return False
        self._index += 1
        self._tracker.pulls += 1
        if self._fail_at is not None and self._index == self._fail_at:
            raise RuntimeError(f"source failed at index {self._index}")
        return True

    @property
    def current(self) -> Any:
        return self._items[self._index]

    def dispose(self) -> None:
        if not self._disposed:
            self._disposed = True
            self._tracker.disposed += 1


def tracked(items: List[Any], fail_at: Optional[int] = None):
    """returns (enumerable, tracker). `pulls` counts successful-or-failing advances only."""
    tracker = Tracker()

    def factory():
        tracker.opened += 1
        return _TrackedEnumerator(items, tracker, fail_at)

    return create(factory), tracker
