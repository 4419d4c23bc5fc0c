"""ServiceResult and ServiceError — the universal service contract.

INVARIANT: All service-layer methods return ServiceResult. Expected
failures (missing record, invalid frontmatter, existing file) are
reported through ``error``, never raised.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# Error codes shared across services.
NOT_FOUND = "NOT_FOUND"
ALREADY_EXISTS = "ALREADY_EXISTS"
VALIDATION_FAILED = "VALIDATION_FAILED"
INVALID_INPUT = "INVALID_INPUT"
IO_ERROR = "IO_ERROR"
NO_PROJECT = "NO_PROJECT"
IN_USE = "IN_USE"


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"create_article"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
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
        **detail: Any,
    ) -> ServiceResult:
        """Shorthand for a failed result."""
        return cls(ok=False, op=op, error=ServiceError(code=code, message=message, detail=detail))
