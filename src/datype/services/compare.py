"""CompareService: deep equality between structured documents."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from datype.domain.equality import is_equal
from datype.domain.values import is_plain_object, kind_of
from datype.infrastructure.documents import DocumentError, load_document
from datype.services.result import ServiceResult
from datype.services.telemetry import trace_span, traced


def top_level_diff(left: dict[Any, Any], right: dict[Any, Any]) -> dict[str, list[str]]:
    """Keys only in *left*, only in *right*, and present in both with unequal values."""
    return {
        "only_left": [str(k) for k in left if k not in right],
        "only_right": [str(k) for k in right if k not in left],
        "changed": [str(k) for k in left if k in right and not is_equal(left[k], right[k])],
    }


class CompareService:
    """Compare two documents structurally, ignoring their file format."""

    @traced
    def compare_files(self, left: Path, right: Path) -> ServiceResult:
        """Deep-compare the documents at *left* and *right*.

        A difference is a successful result with ``data["equal"] = False``.
        """
        op = "compare"
        try:
            with trace_span("load_documents"):
                a = load_document(left)
                b = load_document(right)
        except DocumentError as exc:
            return ServiceResult.failure(op, exc.code, exc.message, detail={"path": str(exc.path)})

        with trace_span("is_equal"):
            equal = is_equal(a, b)

        data: dict[str, Any] = {
            "equal": equal,
            "left": str(left),
            "right": str(right),
            "left_kind": str(kind_of(a)),
            "right_kind": str(kind_of(b)),
        }
        if not equal and is_plain_object(a) and is_plain_object(b):
            data["differences"] = top_level_diff(a, b)
        return ServiceResult(ok=True, op=op, data=data)
