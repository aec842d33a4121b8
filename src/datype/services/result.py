"""ServiceResult and ServiceError: the service contract.

INVARIANT: All service-layer methods return ServiceResult; domain and
document errors are converted to ``ServiceError`` codes, never raised
past the service boundary.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from datype.domain.errors import DatypeError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"merge"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (telemetry spans).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(
        cls,
        op: str,
        code: str,
        message: str,
        *,
        detail: dict[str, Any] | None = None,
        warnings: list[str] | None = None,
    ) -> ServiceResult:
        """Build an ``ok=False`` result."""
        return cls(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=message, detail=detail or {}),
            warnings=warnings or [],
        )

    @classmethod
    def from_domain_error(cls, op: str, exc: DatypeError) -> ServiceResult:
        """Convert a domain exception into a failed result."""
        detail: dict[str, Any] = {}
        max_depth = getattr(exc, "max_depth", None)
        if max_depth is not None:
            detail["max_depth"] = max_depth
        return cls.failure(op, exc.code, str(exc), detail=detail)
