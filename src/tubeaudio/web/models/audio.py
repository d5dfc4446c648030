"""Audio catalog API request and response models."""

from pydantic import BaseModel, Field


class CategoryUpdateRequest(BaseModel):
    """Body of PATCH /audio/{id}."""

    category: str | None = Field(None, description="New category; empty leaves it unchanged")


class SuccessResponse(BaseModel):
    """Acknowledgement returned by delete endpoints."""

    success: bool = Field(True, description="Whether the operation succeeded")


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str = Field(..., description="Human-readable error message")
