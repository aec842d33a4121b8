"""Structured document I/O: JSON, TOML and YAML files.

The format is chosen by file suffix. Loading always yields plain Python
values (dict / list / scalars), so documents from different formats can be
merged and compared with each other.
"""

from __future__ import annotations

import datetime as _dt
import json
import tomllib
from collections.abc import Callable
from enum import StrEnum
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError


class DocumentFormat(StrEnum):
    JSON = "json"
    TOML = "toml"
    YAML = "yaml"


SUFFIX_FORMATS: dict[str, DocumentFormat] = {
    ".json": DocumentFormat.JSON,
    ".toml": DocumentFormat.TOML,
    ".yaml": DocumentFormat.YAML,
    ".yml": DocumentFormat.YAML,
}


class DocumentError(Exception):
    """A document could not be located, recognized or parsed.

    ``code`` is one of ``NOT_FOUND``, ``UNSUPPORTED_FORMAT``, ``PARSE_ERROR``.
    """

    def __init__(self, code: str, message: str, path: Path) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.path = path


def detect_format(path: Path) -> DocumentFormat:
    """Map *path*'s suffix to a :class:`DocumentFormat`."""
    try:
        return SUFFIX_FORMATS[path.suffix.lower()]
    except KeyError:
        supported = ", ".join(sorted(SUFFIX_FORMATS))
        msg = f"Unsupported document type {path.suffix or '(none)'!r} for {path} (supported: {supported})"
        raise DocumentError("UNSUPPORTED_FORMAT", msg, path) from None


def _parse_yaml(text: str) -> Any:
    # A fresh YAML instance per call; the object is stateful.
    return YAML(typ="safe").load(text)


_PARSERS: dict[DocumentFormat, Callable[[str], Any]] = {
    DocumentFormat.JSON: json.loads,
    DocumentFormat.TOML: tomllib.loads,
    DocumentFormat.YAML: _parse_yaml,
}


def load_document(path: Path) -> Any:
    """Read and parse the document at *path*.

    Raises:
        DocumentError: missing file, unknown suffix, or malformed content.
    """
    fmt = detect_format(path)
    if not path.is_file():
        raise DocumentError("NOT_FOUND", f"No such document: {path}", path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeError) as exc:
        raise DocumentError("PARSE_ERROR", f"Cannot read {path}: {exc}", path) from exc
    try:
        return _PARSERS[fmt](text)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError, YAMLError) as exc:
        raise DocumentError("PARSE_ERROR", f"Invalid {fmt.upper()} in {path}: {exc}", path) from exc


def _json_default(value: Any) -> Any:
    if isinstance(value, (_dt.datetime, _dt.date, _dt.time)):
        return value.isoformat()
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=repr)
    if isinstance(value, (bytes, bytearray)):
        return value.decode("utf-8", errors="replace")
    return repr(value)


def to_jsonable(value: Any) -> Any:
    """Round-trip *value* through JSON so it only holds JSON-native types."""
    return json.loads(json.dumps(value, default=_json_default))


def dump_document(value: Any, *, indent: int | None = 2, sort_keys: bool = False) -> str:
    """Serialize *value* as JSON text.

    Dates become ISO strings and sets become sorted lists.
    """
    return json.dumps(
        value,
        indent=indent,
        sort_keys=sort_keys,
        ensure_ascii=False,
        default=_json_default,
    )
