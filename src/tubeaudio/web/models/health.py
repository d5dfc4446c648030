"""Health check API response models."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ReadinessResponse(BaseModel):
    """Response for the readiness endpoint."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status: str = Field(..., description="Readiness status (ready/not_ready)")
    extractor: str | None = Field(None, description="Name of the detected extractor")
    extractor_present: bool = Field(..., description="Whether an extractor is installed")
    transcoder_present: bool = Field(..., description="Whether a transcoder is installed")
    message: str = Field(..., description="Human-readable summary")
    timestamp: str = Field(..., description="ISO timestamp of the check")


class LivenessProbeResponse(BaseModel):
    """Response for the liveness probe."""

    status: str = Field(..., description="Liveness status (alive)")
