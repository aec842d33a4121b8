"""TextService: slug and case conversion for the CLI."""

from __future__ import annotations

from datype.domain.errors import DatypeError
from datype.domain.slugify import slugify
from datype.domain.strings import CaseStyle, convert_case
from datype.services.result import ServiceResult
from datype.services.telemetry import traced


class TextService:
    """String transformations wrapped in the service contract."""

    @traced
    def slugify(
        self,
        text: str,
        *,
        separator: str = "-",
        lowercase: bool = True,
        strict: bool = False,
    ) -> ServiceResult:
        op = "slugify"
        try:
            slug = slugify(text, separator=separator, lowercase=lowercase, strict=strict)
        except DatypeError as exc:
            return ServiceResult.from_domain_error(op, exc)
        warnings = [] if slug or not text else [f"{text!r} produced an empty slug"]
        return ServiceResult(ok=True, op=op, data={"input": text, "slug": slug}, warnings=warnings)

    @traced
    def convert_case(self, text: str, style: CaseStyle | str) -> ServiceResult:
        op = "convert_case"
        try:
            converted = convert_case(text, style)
        except DatypeError as exc:
            return ServiceResult.from_domain_error(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            data={"input": text, "style": str(CaseStyle(style)), "output": converted},
        )
