"""Pydantic schema for the standard JSON response envelope."""

from typing import Any

from pydantic import BaseModel, Field


class JSONEnvelope(BaseModel):
    """Wrapper shape used for JSON responses.

    ``data`` is left out of the serialized body when it is None.
    """

    error: bool = Field(default=False, description="Whether the response reports a failure")
    message: str = Field(default="", description="Human-readable message")
    data: Any | None = Field(default=None, description="Optional response payload")

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
