"""Exception hierarchy for datype.

Every error raised by the library derives from :class:`DatypeError` and
from the matching builtin (``TypeError``, ``ValueError``, ``RecursionError``)
so callers can catch either.

INVARIANT: ``clone_deep`` and ``is_equal`` never raise.
"""

from __future__ import annotations


class DatypeError(Exception):
    """Base class for all datype errors."""

    code: str = "DATYPE_ERROR"


class InvalidArgumentError(DatypeError, TypeError):
    """An argument has the wrong type (e.g. a merge target that is not a dict)."""

    code = "INVALID_ARGUMENT"


class InvalidValueError(DatypeError, ValueError):
    """An argument has the right type but an unusable value (e.g. a negative size)."""

    code = "INVALID_VALUE"


class DepthExceededError(DatypeError, RecursionError):
    """Nested merge recursion went deeper than the configured limit."""

    code = "DEPTH_EXCEEDED"

    def __init__(self, max_depth: int) -> None:
        self.max_depth = max_depth
        super().__init__(f"Maximum merge depth ({max_depth}) exceeded")
