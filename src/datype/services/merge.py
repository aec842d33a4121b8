"""MergeService: deep-merge structured documents from disk."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from datype.domain.errors import DatypeError
from datype.domain.merge import (
    DEFAULT_MAX_DEPTH,
    ArrayMergeStrategy,
    deep_merge,
    resolve_merge_options,
)
from datype.domain.values import is_plain_object, kind_of
from datype.infrastructure.documents import DocumentError, load_document, to_jsonable
from datype.services.result import ServiceResult
from datype.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)


class MergeService:
    """Merge JSON / TOML / YAML documents, later files taking priority."""

    @traced
    def merge_files(
        self,
        paths: Sequence[Path],
        *,
        strategy: ArrayMergeStrategy | str = ArrayMergeStrategy.CONCAT,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> ServiceResult:
        """Load every document in *paths* and deep-merge them in order.

        The first document is the merge target and must be a mapping.
        Later documents that are not mappings are skipped with a warning.
        """
        op = "merge"
        if not paths:
            return ServiceResult.failure(op, "INVALID_ARGUMENT", "At least one document is required")

        documents: list[Any] = []
        with trace_span("load_documents") as span:
            for path in paths:
                try:
                    documents.append(load_document(path))
                except DocumentError as exc:
                    return ServiceResult.failure(
                        op, exc.code, exc.message, detail={"path": str(exc.path)}
                    )
            if span:
                span.annotate("count", len(documents))

        warnings = [
            f"{path} holds a {kind_of(document)} value, not a mapping; skipped"
            for path, document in zip(paths[1:], documents[1:], strict=True)
            if not is_plain_object(document)
        ]

        target, *sources = documents
        try:
            options = resolve_merge_options(array_merge_strategy=strategy, max_depth=max_depth)
            with trace_span(
                "deep_merge",
                strategy=str(options.array_merge_strategy),
                max_depth=options.max_depth,
            ):
                # A trailing options-only document stays data, not options.
                merged = deep_merge(target, *sources, options=options)
        except DatypeError as exc:
            logger.debug("Merge of %d documents failed: %s", len(documents), exc)
            failed = ServiceResult.from_domain_error(op, exc)
            return failed.model_copy(update={"warnings": warnings})

        try:
            document = to_jsonable(merged)
        except (ValueError, TypeError) as exc:
            # Anchored YAML can alias a mapping into itself or use complex keys.
            logger.debug("Merged document is not JSON-serializable: %s", exc)
            return ServiceResult.failure(
                op,
                "INVALID_VALUE",
                f"Merged document cannot be serialized: {exc}",
                warnings=warnings,
            )

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "document": document,
                "sources": [str(p) for p in paths],
                "strategy": str(strategy),
                "max_depth": max_depth,
            },
            warnings=warnings,
        )
