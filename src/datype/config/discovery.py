"""Locate the datype config file.

``DATYPE_CONFIG`` names a file explicitly; a relative value is taken from
the search start directory. Otherwise each directory from *start* up to the
filesystem root is checked for ``datype.toml`` and then ``.datype.toml``.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAMES: tuple[str, ...] = ("datype.toml", ".datype.toml")
CONFIG_FILENAME = CONFIG_FILENAMES[0]
CONFIG_ENV_VAR = "DATYPE_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file that applies to *start* (default: cwd), or None.

    An explicit ``DATYPE_CONFIG`` that does not point at a file yields None
    rather than falling back to the directory search.
    """
    base = (start or Path.cwd()).resolve()
    explicit = os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        path = Path(explicit).expanduser()
        if not path.is_absolute():
            path = base / path
        return path if path.is_file() else None

    for directory in (base, *base.parents):
        found = _config_in(directory)
        if found is not None:
            return found
    return None


def _config_in(directory: Path) -> Path | None:
    for name in CONFIG_FILENAMES:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None
