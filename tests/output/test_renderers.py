"""Tests for operation-specific renderers."""

from __future__ import annotations

import json

from datype.output.renderers import render_quiet, render_result
from datype.services.result import ServiceError, ServiceResult


def _merge_result() -> ServiceResult:
    return ServiceResult(
        ok=True,
        op="merge",
        data={
            "document": {"b": [1, 2], "a": {"x": "é"}},
            "sources": ["base.json", "prod.yaml"],
            "strategy": "concat",
            "max_depth": 50,
        },
    )


def _compare_result(equal: bool, **extra: object) -> ServiceResult:
    data: dict[str, object] = {
        "equal": equal,
        "left": "a.json",
        "right": "b.json",
        "left_kind": "mapping",
        "right_kind": "mapping",
    }
    data.update(extra)
    return ServiceResult(ok=True, op="compare", data=data)


class TestRenderMerge:
    def test_shows_sources_and_document(self) -> None:
        output = render_result(_merge_result())
        assert output.splitlines()[0].startswith("OK")
        assert "merge" in output
        assert "sources: base.json, prod.yaml" in output
        assert "strategy: concat" in output
        assert '"x": "é"' in output
        assert "max_depth" not in output

    def test_verbose_shows_depth(self) -> None:
        assert "max_depth: 50" in render_result(_merge_result(), verbose=True)

    def test_sort_keys(self) -> None:
        output = render_result(_merge_result(), sort_keys=True)
        assert output.index('"a"') < output.index('"b"')


class TestRenderCompare:
    def test_equal(self) -> None:
        output = render_result(_compare_result(True))
        assert "documents are equal" in output
        assert "left: a.json" in output

    def test_differences(self) -> None:
        result = _compare_result(
            False, differences={"only_left": ["old"], "only_right": [], "changed": ["keep", "x"]}
        )
        output = render_result(result)
        assert "documents differ" in output
        assert "only in left: old" in output
        assert "only in right" not in output
        assert "changed: keep, x" in output

    def test_kind_mismatch(self) -> None:
        output = render_result(_compare_result(False, right_kind="sequence"))
        assert "left_kind: mapping" in output
        assert "right_kind: sequence" in output


class TestRenderText:
    def test_slugify(self) -> None:
        result = ServiceResult(ok=True, op="slugify", data={"input": "A B", "slug": "a-b"})
        assert "slug: a-b" in render_result(result)
        assert "input: A B" in render_result(result, verbose=True)

    def test_convert_case(self) -> None:
        result = ServiceResult(
            ok=True, op="convert_case", data={"input": "a b", "style": "snake", "output": "a_b"}
        )
        assert "snake: a_b" in render_result(result)


class TestRenderGeneric:
    def test_unknown_op(self) -> None:
        result = ServiceResult(ok=True, op="other", data={"n": 1, "items": [1, 2]})
        output = render_result(result)
        assert "n: 1" in output
        assert "items: [1,2]" in output


class TestRenderError:
    def test_message_and_code(self) -> None:
        result = ServiceResult.failure("merge", "DEPTH_EXCEEDED", "too deep", detail={"max_depth": 3})
        output = render_result(result)
        assert output.startswith("ERROR")
        assert "too deep" in output
        assert "code: DEPTH_EXCEEDED" in output
        assert "detail" not in output

    def test_verbose_shows_detail(self) -> None:
        result = ServiceResult.failure("merge", "NOT_FOUND", "missing", detail={"path": "x.json"})
        output = render_result(result, verbose=True)
        assert "path: x.json" in output


class TestRenderMeta:
    def test_verbose_prints_span_tree(self) -> None:
        telemetry = {
            "name": "MergeService.merge_files",
            "duration_ms": 1.5,
            "children": [{"name": "load_documents", "duration_ms": 0.5, "annotations": {"count": 2}}],
        }
        result = ServiceResult(ok=True, op="slugify", data={"slug": "x"}, meta={"telemetry": telemetry})
        output = render_result(result, verbose=True)
        assert "MergeService.merge_files" in output
        assert "load_documents  (count=2)" in output

    def test_meta_hidden_without_verbose(self) -> None:
        result = ServiceResult(
            ok=True, op="slugify", data={"slug": "x"}, meta={"telemetry": {"name": "s", "duration_ms": 1}}
        )
        assert "meta" not in render_result(result)


class TestRenderQuiet:
    def test_merge_prints_document_json(self) -> None:
        output = render_quiet(_merge_result())
        assert json.loads(output) == {"b": [1, 2], "a": {"x": "é"}}

    def test_compare(self) -> None:
        assert render_quiet(_compare_result(True)) == "equal"
        assert render_quiet(_compare_result(False)) == "different"

    def test_convert_case(self) -> None:
        result = ServiceResult(ok=True, op="convert_case", data={"output": "a_b"})
        assert render_quiet(result) == "a_b"

    def test_unknown_op(self) -> None:
        assert render_quiet(ServiceResult(ok=True, op="other")) == "OK: other"

    def test_error(self) -> None:
        result = ServiceResult(ok=False, op="merge", error=ServiceError(code="X", message="bad"))
        assert render_quiet(result) == "ERROR: merge — bad"
