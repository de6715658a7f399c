"""Sanity HTTP API response schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SanityBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class QueryResponse(SanityBaseModel):
    ms: int | None = None
    query: str | None = None
    result: Any = None


class MutationResultPayload(SanityBaseModel):
    id: str
    operation: str
    document: dict[str, Any] | None = None


class MutationResponsePayload(SanityBaseModel):
    transaction_id: str | None = Field(default=None, alias="transactionId")
    results: list[MutationResultPayload] = Field(default_factory=list)


class ErrorDetail(SanityBaseModel):
    description: str | None = None
    type: str | None = None
    items: list[dict[str, Any]] | None = None


class ErrorResponse(SanityBaseModel):
    """Error body. Validation errors nest a detail object; gateway errors are flat."""

    error: ErrorDetail | str | None = None
    message: str | None = None
    status_code: int | None = Field(default=None, alias="statusCode")

    @property
    def error_type(self) -> str | None:
        if isinstance(self.error, ErrorDetail):
            return self.error.type
        return self.error

    @property
    def description(self) -> str:
        if isinstance(self.error, ErrorDetail) and self.error.description:
            return self.error.description
        if self.message:
            return self.message
        if isinstance(self.error, str):
            return self.error
        return "Unknown Sanity API error"
