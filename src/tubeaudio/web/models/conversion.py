"""Conversion API request models."""

from pydantic import BaseModel, Field


class ConvertRequest(BaseModel):
    """Body of POST /convert and POST /convert/jobs."""

    url: str | None = Field(None, description="Source video reference")
    category: str | None = Field(None, description="Catalog category for the new asset")
