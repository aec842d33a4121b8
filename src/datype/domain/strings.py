"""String helpers: case conversion and truncation.

Word boundaries for case conversion are ASCII-based: a lowercase letter or
digit followed by an uppercase letter, or any run of non-alphanumeric
characters.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable
from enum import StrEnum
from typing import Any

from datype.domain.errors import InvalidArgumentError, InvalidValueError

_LOWER_UPPER = re.compile(r"([a-z0-9])([A-Z])")
_ACRONYM_WORD = re.compile(r"([A-Z])([A-Z][a-z])")
_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]+")


def _require_text(value: Any) -> str:
    if not isinstance(value, str):
        msg = f"Expected a string, got {type(value).__name__}"
        raise InvalidArgumentError(msg)
    return value


def _words(text: str) -> list[str]:
    spaced = _LOWER_UPPER.sub(r"\1 \2", text)
    return _NON_ALNUM.sub(" ", spaced).split()


def _joined_lower(text: str, separator: str) -> str:
    marked = _LOWER_UPPER.sub(rf"\1{separator}\2", text)
    marked = _ACRONYM_WORD.sub(rf"\1{separator}\2", marked)
    return _NON_ALNUM.sub(separator, marked).lower().strip(separator)


def capitalize(text: str) -> str:
    """Uppercase the first character and lowercase the rest.

    >>> capitalize("hELLO wORLD")
    'Hello world'
    """
    value = _require_text(text)
    return value[:1].upper() + value[1:].lower()


def camel_case(text: str) -> str:
    """``"hello world"`` -> ``"helloWorld"``."""
    words = _words(_require_text(text))
    if not words:
        return ""
    head, *rest = words
    return head.lower() + "".join(word[:1].upper() + word[1:].lower() for word in rest)


def pascal_case(text: str) -> str:
    """``"hello world"`` -> ``"HelloWorld"``."""
    return "".join(word[:1].upper() + word[1:].lower() for word in _words(_require_text(text)))


def kebab_case(text: str) -> str:
    """``"helloWorld"`` -> ``"hello-world"``; ``"XMLHttpRequest"`` -> ``"xml-http-request"``."""
    return _joined_lower(_require_text(text), "-")


def snake_case(text: str) -> str:
    """``"helloWorld"`` -> ``"hello_world"``."""
    return _joined_lower(_require_text(text), "_")


def constant_case(text: str) -> str:
    """``"helloWorld"`` -> ``"HELLO_WORLD"``."""
    return snake_case(text).upper()


def dot_case(text: str) -> str:
    """``"helloWorld"`` -> ``"hello.world"``."""
    value = _require_text(text)
    marked = _LOWER_UPPER.sub(r"\1.\2", value)
    return _NON_ALNUM.sub(".", marked).lower().strip(".")


class CaseStyle(StrEnum):
    """Target styles accepted by :func:`convert_case`."""

    CAMEL = "camel"
    PASCAL = "pascal"
    KEBAB = "kebab"
    SNAKE = "snake"
    CONSTANT = "constant"
    DOT = "dot"


CASE_CONVERTERS: dict[CaseStyle, Callable[[str], str]] = {
    CaseStyle.CAMEL: camel_case,
    CaseStyle.PASCAL: pascal_case,
    CaseStyle.KEBAB: kebab_case,
    CaseStyle.SNAKE: snake_case,
    CaseStyle.CONSTANT: constant_case,
    CaseStyle.DOT: dot_case,
}


def convert_case(text: str, style: CaseStyle | str) -> str:
    """Convert *text* to the named case *style*."""
    try:
        resolved = CaseStyle(style)
    except ValueError as exc:
        choices = ", ".join(CaseStyle)
        msg = f"Unknown case style {style!r} (expected one of: {choices})"
        raise InvalidValueError(msg) from exc
    return CASE_CONVERTERS[resolved](text)


# ---------------------------------------------------------------------------
# Truncation
# ---------------------------------------------------------------------------


def _check_truncate_args(text: Any, length: Any, omission: Any) -> None:
    _require_text(text)
    if isinstance(length, bool) or not isinstance(length, int):
        msg = "Length must be an integer"
        raise InvalidArgumentError(msg)
    if length < 0:
        msg = f"Length must be non-negative, got {length}"
        raise InvalidValueError(msg)
    if not isinstance(omission, str):
        msg = "Omission must be a string"
        raise InvalidArgumentError(msg)


def truncate(text: str, length: int = 30, omission: str = "...") -> str:
    """Cut *text* to at most *length* characters, ending with *omission*.

    Examples:
        >>> truncate("The quick brown fox", 10)
        'The qui...'
        >>> truncate("short", 10)
        'short'
    """
    _check_truncate_args(text, length, omission)
    if len(text) <= length:
        return text
    keep = length - len(omission)
    if keep <= 0:
        return omission[:length]
    return text[:keep] + omission


def truncate_words(text: str, length: int, omission: str = "...") -> str:
    """Like :func:`truncate`, but cut at the last word boundary that fits.

    Falls back to character truncation when no space fits.

    >>> truncate_words("The quick brown fox", 14)
    'The quick...'
    """
    _check_truncate_args(text, length, omission)
    if len(text) <= length:
        return text
    boundary = text[: length - len(omission)].rfind(" ")
    if boundary == -1:
        return truncate(text, length, omission)
    return text[:boundary] + omission


def truncate_middle(text: str, length: int, omission: str = "...") -> str:
    """Keep the start and end of *text*, replacing the middle with *omission*.

    >>> truncate_middle("abcdefghij", 7)
    'ab...ij'
    """
    _check_truncate_args(text, length, omission)
    if len(text) <= length:
        return text
    content = length - len(omission)
    if content <= 0:
        return omission[:length]
    head = math.ceil(content / 2)
    tail = content - head
    return text[:head] + omission + (text[-tail:] if tail > 0 else "")
