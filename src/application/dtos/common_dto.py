"""Common DTOs for API responses and error handling."""
from __future__ import annotations

from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, Field, model_validator

T = TypeVar("T")

INTERNAL_SERVER_ERROR = "Internal server error"


class ApiResponse(BaseModel, Generic[T]):
    """Envelope wrapping every response body.

    Either ``{"success": true, "data": ...}`` or ``{"success": false, "error": "..."}``.
    """
    success: bool = Field(..., description="Whether the request succeeded")
    data: T | None = Field(None, description="Payload, present when success is true")
    error: str | None = Field(None, description="Error message, present when success is false")

    @model_validator(mode="after")
    def _check_tag(self) -> "ApiResponse[T]":
        if self.success and self.error is not None:
            raise ValueError("A successful response cannot carry an error")
        if not self.success and (self.error is None or self.data is not None):
            raise ValueError("A failed response needs an error and no data")
        return self

    @classmethod
    def ok(cls, data: T) -> "ApiResponse[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> "ApiResponse[T]":
        return cls(success=False, error=error)

    def to_body(self) -> dict[str, Any]:
        """JSON-ready body holding only the key that matches the tag."""
        exclude = {"error"} if self.success else {"data"}
        return self.model_dump(mode="json", by_alias=True, exclude=exclude)


class ErrorResponse(BaseModel):
    """Body of every failed request."""
    success: Literal[False] = Field(False, description="Always false for errors")
    error: str = Field(..., description="Error message describing what went wrong", examples=[INTERNAL_SERVER_ERROR])


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(..., description="Health status", examples=["healthy"])
    database: Literal["ok", "unavailable", "disabled"] = Field(
        ..., description="Result of the database connectivity probe"
    )


class RootResponse(BaseModel):
    """Root endpoint response model."""
    status: str = Field(..., description="API status", examples=["ok"])
    service: str = Field(..., description="Service name", examples=["cycling-network-backend"])
    version: str = Field(..., description="API version", examples=["0.1.0"])
