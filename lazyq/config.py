"""
process-wide defaults for the injectable collaborators.

operators resolve a missing comparer / serializer against the active
defaults at the moment the operator is called, so a pipeline built before
configure() keeps the functions it was built with.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace

from .comparers import default_comparer, default_equality_comparer, default_key_serializer
from .types import *

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueryDefaults:
    equality_comparer: EqualityComparer = default_equality_comparer
    comparer: Comparer = default_comparer
    key_serializer: KeySerializer = default_key_serializer


_SHIPPED = QueryDefaults()
_active = _SHIPPED


def get_defaults() -> QueryDefaults:
    return _active


def configure(**overrides: Callable) -> QueryDefaults:
    """replace one or more defaults. unknown names and non-callables raise."""
    global _active
    known = {f.name for f in fields(QueryDefaults)}
    for name, value in overrides.items():
        if name not in known:
            raise TypeError(f"unknown default '{name}', expected one of {sorted(known)}")
        if not callable(value):
            raise TypeError(f"default '{name}' must be callable, got {type(value).__name__}")
    _active = replace(_active, **overrides)
    logger.debug(f"query defaults updated: {sorted(overrides)}")
    return _active


def reset_defaults() -> QueryDefaults:
    global _active
    _active = _SHIPPED
    logger.debug("query defaults reset")
    return _active
