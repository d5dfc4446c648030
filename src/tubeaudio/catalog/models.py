"""Data models for the audio catalog.

Field names are snake_case in Python and camelCase on the wire and on disk.
Catalogs written by earlier releases used a different set of keys (``videoId``,
``filename``, ``url``, ``duration``, ``fileSize``, ``thumbnail``); those are
accepted on input and rewritten with the current names on the next save.
"""

import uuid
from datetime import UTC, datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

DEFAULT_CATEGORY = "Uncategorized"


def new_id() -> str:
    """Return a collision-resistant identifier."""
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(UTC)


class CatalogModel(BaseModel):
    """Shared configuration for catalog records."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AudioAsset(CatalogModel):
    """One converted audio file stored in the asset directory."""

    id: str = Field(default_factory=new_id)
    source_id: str = Field(validation_alias=AliasChoices("sourceId", "videoId", "source_id"))
    title: str = "Unknown"
    stored_filename: str = Field(
        validation_alias=AliasChoices("storedFilename", "filename", "stored_filename")
    )
    source_url: str = Field(validation_alias=AliasChoices("sourceUrl", "url", "source_url"))
    category: str = DEFAULT_CATEGORY
    duration_seconds: float = Field(
        default=0.0,
        validation_alias=AliasChoices("durationSeconds", "duration", "duration_seconds"),
    )
    file_size_bytes: int = Field(
        default=0,
        validation_alias=AliasChoices("fileSizeBytes", "fileSize", "file_size_bytes"),
    )
    created_at: datetime = Field(
        default_factory=utcnow,
        validation_alias=AliasChoices("createdAt", "created_at"),
    )
    thumbnail_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("thumbnailUrl", "thumbnail", "thumbnail_url"),
    )

    @field_validator("source_id", mode="before")
    @classmethod
    def coerce_source_id(cls, v: object) -> object:
        """Older catalogs stored numeric timestamps as the source id."""
        if isinstance(v, int | float):
            return str(int(v))
        return v


class Playlist(CatalogModel):
    """Named, ordered grouping of asset ids."""

    id: str = Field(default_factory=new_id)
    name: str
    description: str = ""
    audio_ids: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("audioIds", "audio_ids"),
    )
    created_at: datetime = Field(
        default_factory=utcnow,
        validation_alias=AliasChoices("createdAt", "created_at"),
    )


class Catalog(CatalogModel):
    """Root aggregate persisted as a single JSON document."""

    audios: list[AudioAsset] = Field(default_factory=list)
    playlists: list[Playlist] = Field(default_factory=list)

    def find_audio(self, audio_id: str) -> AudioAsset | None:
        return next((a for a in self.audios if a.id == audio_id), None)

    def find_playlist(self, playlist_id: str) -> Playlist | None:
        return next((p for p in self.playlists if p.id == playlist_id), None)


class ResolvedPlaylist(Playlist):
    """A playlist together with the assets its ids currently resolve to."""

    audios: list[AudioAsset] = Field(default_factory=list)
