"""
Processor results

Every processor returns a ProcessorResult instead of raising. The status
says which branch the request took; the envelope is what the connector
serializes for the admin UI.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel


class ResultStatus(str, enum.Enum):
    """Outcome of a processor run."""

    SUCCESS = "success"
    VALIDATION_FAILURE = "validation_failure"
    NOT_FOUND = "not_found"
    ACCESS_DENIED = "access_denied"
    PERSISTENCE_FAILURE = "persistence_failure"
    STORAGE_FAILURE = "storage_failure"
    UNEXPECTED_FAILURE = "unexpected_failure"


class ErrorItem(BaseModel):
    """Field-scoped error as the admin forms expect it."""

    id: str
    msg: str


class ProcessorResponse(BaseModel):
    """JSON envelope returned to the admin UI."""

    success: bool
    message: str = ""
    total: int = 0
    data: list[dict[str, Any]] = []
    object: dict[str, Any] | None = None
    errors: list[ErrorItem] = []
    code: str | None = None


@dataclass
class ProcessorResult:
    status: ResultStatus
    message: str = ""
    object: dict[str, Any] | None = None
    data: list[dict[str, Any]] = field(default_factory=list)
    total: int | None = None
    errors: list[dict[str, str]] = field(default_factory=list)
    code: str | None = None

    @property
    def success(self) -> bool:
        return self.status == ResultStatus.SUCCESS

    def to_response(self) -> ProcessorResponse:
        total = self.total if self.total is not None else len(self.data)
        return ProcessorResponse(
            success=self.success,
            message=self.message,
            total=total,
            data=self.data,
            object=self.object,
            errors=[ErrorItem(**error) for error in self.errors],
            code=self.code,
        )

    def to_envelope(self) -> dict[str, Any]:
        return self.to_response().model_dump()
