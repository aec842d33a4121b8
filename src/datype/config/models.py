"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, datype.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from datype.domain.merge import DEFAULT_MAX_DEPTH, ArrayMergeStrategy

# --- datype.toml sections ---


class MergeConfig(BaseModel):
    """[merge] section: defaults for ``datype merge``."""

    model_config = {"frozen": True}

    array_strategy: ArrayMergeStrategy = ArrayMergeStrategy.CONCAT
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=0)


class SlugifyConfig(BaseModel):
    """[slugify] section."""

    model_config = {"frozen": True}

    separator: str = "-"
    lowercase: bool = True
    strict: bool = False


class OutputConfig(BaseModel):
    """[output] section: how documents are serialized in human output."""

    model_config = {"frozen": True}

    indent: int = Field(default=2, ge=0)
    sort_keys: bool = False
