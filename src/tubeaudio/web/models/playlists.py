"""Playlist API request models."""

from pydantic import AliasChoices, BaseModel, Field


class PlaylistCreateRequest(BaseModel):
    """Body of POST /playlists."""

    name: str | None = Field(None, description="Playlist name (required, non-empty)")
    description: str | None = Field(None, description="Optional free-text description")


class PlaylistPatchRequest(BaseModel):
    """Body of PATCH /playlist/{id}; omitted fields are left unchanged."""

    name: str | None = Field(None, description="New name")
    description: str | None = Field(None, description="New description")
    audio_ids: list[str] | None = Field(
        None,
        validation_alias=AliasChoices("audioIds", "audio_ids"),
        description="Replacement for the full ordered list of asset ids",
    )
