r"""
'    .__
'    |  | _____  ___________.__. ______
'    |  | \__  \ \___   <   |  |/ ____/
'    |  |__/ __ \_/    / \___  < <_|  |
'    |____(____  /_____ \/ ____|\__   |
'              \/      \/\/        |__|
"""
import logging

# expose the main classes
from .enumerable import Enumerable, OrderedEnumerable, Grouping
from .enumerator import Enumerator
from .sorter import EnumerableSorter

# expose the factory functions
from .factories import (
    from_iterable,
    from_range,
    repeat,
    singleton,
    empty,
    generate,
    from_generator,
    create,
    concat,
    union,
    sequence_equal,
    lazyq,
    Q
)

# expose errors, comparers and configuration
from .errors import QueryError, EmptySequenceError, InvalidOperationError
from .comparers import default_comparer, default_equality_comparer, default_key_serializer
from .config import QueryDefaults, configure, get_defaults, reset_defaults

# library logging: applications attach their own handlers
logging.getLogger(__name__).addHandler(logging.NullHandler())

# define what `import *` does
__all__ = [
    "Enumerable",
    "OrderedEnumerable",
    "Grouping",
    "Enumerator",
    "EnumerableSorter",
    "from_iterable",
    "from_range",
    "repeat",
    "singleton",
    "empty",
    "generate",
    "from_generator",
    "create",
    "concat",
    "union",
    "sequence_equal",
    "lazyq",
    "Q",
    "QueryError",
    "EmptySequenceError",
    "InvalidOperationError",
    "default_comparer",
    "default_equality_comparer",
    "default_key_serializer",
    "QueryDefaults",
    "configure",
    "get_defaults",
    "reset_defaults"
]
