"""datype: deep clone, deep equality and deep merge for Python values.

The public API is re-exported here; everything else lives in
:mod:`datype.domain` and the CLI layers.
"""

from __future__ import annotations

from datype.domain.arrays import (
    chunk,
    compact,
    compact_by,
    compact_with,
    flatten,
    flatten_deep,
    flatten_depth,
    uniq,
    uniq_by,
    uniq_by_property,
)
from datype.domain.clone import clone_deep
from datype.domain.equality import is_equal
from datype.domain.errors import (
    DatypeError,
    DepthExceededError,
    InvalidArgumentError,
    InvalidValueError,
)
from datype.domain.functions import compose, curry, once, pipe
from datype.domain.merge import (
    DEFAULT_MAX_DEPTH,
    ArrayMergeStrategy,
    MergeOptions,
    deep_merge,
    merge,
)
from datype.domain.objects import (
    get,
    group_by,
    is_empty,
    key_transformers,
    map_keys,
    map_values,
    omit,
    pick,
    set_in,
)
from datype.domain.slugify import SlugifyOptions, slugify
from datype.domain.strings import (
    CaseStyle,
    camel_case,
    capitalize,
    constant_case,
    convert_case,
    dot_case,
    kebab_case,
    pascal_case,
    snake_case,
    truncate,
    truncate_middle,
    truncate_words,
)
from datype.domain.timing import Debounced, Throttled, debounce, throttle
from datype.domain.values import (
    MISSING,
    Kind,
    is_array,
    is_container,
    is_function,
    is_plain_object,
    is_primitive,
    kind_of,
)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "MISSING",
    "ArrayMergeStrategy",
    "CaseStyle",
    "DatypeError",
    "Debounced",
    "DepthExceededError",
    "InvalidArgumentError",
    "InvalidValueError",
    "Kind",
    "MergeOptions",
    "SlugifyOptions",
    "Throttled",
    "__version__",
    "camel_case",
    "capitalize",
    "chunk",
    "clone_deep",
    "compact",
    "compact_by",
    "compact_with",
    "compose",
    "constant_case",
    "convert_case",
    "curry",
    "debounce",
    "deep_merge",
    "dot_case",
    "flatten",
    "flatten_deep",
    "flatten_depth",
    "get",
    "group_by",
    "is_array",
    "is_container",
    "is_empty",
    "is_equal",
    "is_function",
    "is_plain_object",
    "is_primitive",
    "kebab_case",
    "key_transformers",
    "kind_of",
    "map_keys",
    "map_values",
    "merge",
    "omit",
    "once",
    "pascal_case",
    "pick",
    "pipe",
    "set_in",
    "slugify",
    "snake_case",
    "throttle",
    "truncate",
    "truncate_middle",
    "truncate_words",
    "uniq",
    "uniq_by",
    "uniq_by_property",
]
