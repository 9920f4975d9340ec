"""ServiceResult and ServiceError — what every service call hands back.

INVARIANT: All service-layer methods return ServiceResult.
The CLI renders it; library callers read ``data`` and ``error`` directly.

A rule :class:`~jsonrules.domain.outcome.Outcome` maps onto a result with
:meth:`ServiceResult.from_outcome`: a failing outcome becomes an
``INVALID`` error whose detail is the failure map.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, Field

from jsonrules.domain.outcome import Outcome

INVALID = "INVALID"
UNKNOWN_RULE = "UNKNOWN_RULE"


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
        op: Name of the operation (e.g. ``"check"``).
        data: Operation-specific payload, present on failure too.
        warnings: Non-fatal issues, such as skipped unknown rule names.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @classmethod
    def failure(
        cls,
        op: str,
        code: str,
        message: str,
        *,
        data: dict[str, Any] | None = None,
        detail: dict[str, Any] | None = None,
        warnings: Iterable[str] = (),
    ) -> ServiceResult:
        return cls(
            ok=False,
            op=op,
            data=data or {},
            warnings=list(warnings),
            error=ServiceError(code=code, message=message, detail=detail or {}),
        )

    @classmethod
    def from_outcome(
        cls,
        op: str,
        outcome: Outcome,
        *,
        data: dict[str, Any] | None = None,
        warnings: Iterable[str] = (),
    ) -> ServiceResult:
        """Wrap a rule outcome; ``data`` gains ``valid`` and ``errors`` keys."""
        payload = {**(data or {}), "valid": outcome.valid, "errors": outcome.errors}
        if outcome.valid:
            return cls(ok=True, op=op, data=payload, warnings=list(warnings))
        return cls.failure(
            op,
            INVALID,
            f"Value failed: {', '.join(sorted(outcome.errors))}",
            data=payload,
            detail=outcome.errors,
            warnings=warnings,
        )

