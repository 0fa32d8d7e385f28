"""ServiceResult and ServiceError — the service-layer return contract.

INVARIANT: Interpreter operations return ServiceResult instead of raising.
The CLI and any embedding application consume this type.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from linecmd.domain.errors import CommandError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: CommandError) -> ServiceError:
        """Build an error payload from a domain failure, keeping its code and detail."""
        return cls(code=exc.code, message=str(exc), detail=exc.detail)


class ServiceResult(BaseModel):
    """Universal return type for interpreter operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"execute"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (timing, telemetry).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None
