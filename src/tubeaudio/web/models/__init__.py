"""Web API contract models using Pydantic for validation."""

from tubeaudio.web.models.audio import CategoryUpdateRequest, ErrorResponse, SuccessResponse
from tubeaudio.web.models.conversion import ConvertRequest
from tubeaudio.web.models.health import LivenessProbeResponse, ReadinessResponse
from tubeaudio.web.models.playlists import PlaylistCreateRequest, PlaylistPatchRequest

__all__ = [
    "CategoryUpdateRequest",
    "ConvertRequest",
    "ErrorResponse",
    "LivenessProbeResponse",
    "PlaylistCreateRequest",
    "PlaylistPatchRequest",
    "ReadinessResponse",
    "SuccessResponse",
]
