"""File-backed catalog of audio assets and playlists.

The whole catalog is one JSON document. Every mutation loads it, applies the
change and rewrites the file. A single lock serialises those load-mutate-save
sequences so concurrent requests cannot overwrite each other's changes.
"""

import json
import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from enum import StrEnum
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from tubeaudio.catalog.models import DEFAULT_CATEGORY, AudioAsset, Catalog, Playlist
from tubeaudio.exceptions import CatalogIOError, NotFoundError, ValidationError
from tubeaudio.system.path_resolver import PathResolver

logger = logging.getLogger(__name__)


class SortKey(StrEnum):
    """Fields the asset listing can be sorted by."""

    TITLE = "title"
    DURATION = "duration"
    FILE_SIZE = "fileSize"
    CREATED_AT = "createdAt"


class SortOrder(StrEnum):
    ASC = "asc"
    DESC = "desc"


def _sort_value(asset: AudioAsset, sort_key: SortKey) -> Any:
    if sort_key is SortKey.TITLE:
        return asset.title.lower()
    if sort_key is SortKey.DURATION:
        return asset.duration_seconds
    if sort_key is SortKey.FILE_SIZE:
        return asset.file_size_bytes
    return asset.created_at.timestamp()


def sort_audios(
    audios: list[AudioAsset],
    sort_key: SortKey = SortKey.CREATED_AT,
    order: SortOrder = SortOrder.DESC,
) -> list[AudioAsset]:
    """Sort assets by ``sort_key``; ties fall back to the asset id."""
    return sorted(
        audios,
        key=lambda asset: (_sort_value(asset, sort_key), asset.id),
        reverse=order is SortOrder.DESC,
    )


class MetadataStore:
    """Owns the persisted catalog and every query and mutation on it."""

    def __init__(
        self,
        path_resolver: PathResolver,
        default_category: str = DEFAULT_CATEGORY,
        all_categories_label: str = "All",
    ) -> None:
        self.path_resolver = path_resolver
        self.catalog_path = path_resolver.get_catalog_path()
        self.default_category = default_category
        self.all_categories_label = all_categories_label
        self._lock = threading.RLock()

    # Persistence

    def load(self) -> Catalog:
        """Read the catalog from disk.

        A missing or unreadable file yields an empty catalog. Corruption is
        logged rather than raised, so the previous contents are lost on the
        next save.
        """
        if not self.catalog_path.exists():
            return Catalog()
        try:
            raw = json.loads(self.catalog_path.read_text(encoding="utf-8"))
            return Catalog.model_validate(raw)
        except (OSError, json.JSONDecodeError, PydanticValidationError) as e:
            logger.error("Failed to read catalog %s, starting empty: %s", self.catalog_path, e)
            return Catalog()

    def save(self, catalog: Catalog) -> None:
        """Overwrite the persisted catalog with ``catalog``.

        Raises:
            CatalogIOError: If the file cannot be written
        """
        payload = json.dumps(catalog.model_dump(mode="json", by_alias=True), indent=2)
        temp_path = self.catalog_path.with_suffix(".tmp")
        try:
            self.catalog_path.parent.mkdir(parents=True, exist_ok=True)
            temp_path.write_text(payload, encoding="utf-8")
            temp_path.replace(self.catalog_path)
        except OSError as e:
            logger.error("Failed to save catalog %s: %s", self.catalog_path, e)
            raise CatalogIOError(f"Failed to save catalog: {e}") from e

    @contextmanager
    def transaction(self) -> Iterator[Catalog]:
        """Load the catalog under the writer lock and save it on clean exit."""
        with self._lock:
            catalog = self.load()
            yield catalog
            self.save(catalog)

    # Audio assets

    def list_audios(
        self,
        category: str | None = None,
        sort_by: SortKey | str = SortKey.CREATED_AT,
        order: SortOrder | str = SortOrder.DESC,
    ) -> list[AudioAsset]:
        """List assets, optionally filtered by exact category and sorted.

        Unknown sort keys fall back to creation time; any order other than
        ``asc`` sorts descending.
        """
        audios = self.load().audios
        if category and category != self.all_categories_label:
            audios = [a for a in audios if a.category == category]

        try:
            sort_key = SortKey(sort_by)
        except ValueError:
            sort_key = SortKey.CREATED_AT
        sort_order = SortOrder.ASC if order == SortOrder.ASC else SortOrder.DESC
        return sort_audios(audios, sort_key, sort_order)

    def list_categories(self) -> list[str]:
        """Distinct categories in first-seen order."""
        return list(dict.fromkeys(a.category for a in self.load().audios))

    def get_audio(self, audio_id: str) -> AudioAsset:
        audio = self.load().find_audio(audio_id)
        if audio is None:
            raise NotFoundError("audio", audio_id)
        return audio

    def add_audio(self, audio: AudioAsset) -> AudioAsset:
        """Append a new asset to the catalog."""
        with self.transaction() as catalog:
            if catalog.find_audio(audio.id) is not None:
                raise ValidationError(f"Audio {audio.id} already exists")
            catalog.audios.append(audio)
        logger.info("Added audio %s (%s)", audio.id, audio.stored_filename)
        return audio

    def delete_audio(self, audio_id: str) -> AudioAsset:
        """Remove an asset, its id from every playlist, and its backing file."""
        with self.transaction() as catalog:
            audio = catalog.find_audio(audio_id)
            if audio is None:
                raise NotFoundError("audio", audio_id)
            catalog.audios = [a for a in catalog.audios if a.id != audio_id]
            for playlist in catalog.playlists:
                playlist.audio_ids = [i for i in playlist.audio_ids if i != audio_id]

        file_path = self.path_resolver.get_audio_path(audio.stored_filename)
        try:
            file_path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Could not remove audio file %s: %s", file_path, e)
        logger.info("Deleted audio %s", audio_id)
        return audio

    def patch_audio_category(self, audio_id: str, category: str | None) -> AudioAsset:
        """Change an asset's category; an empty category leaves it untouched."""
        with self.transaction() as catalog:
            audio = catalog.find_audio(audio_id)
            if audio is None:
                raise NotFoundError("audio", audio_id)
            if category:
                audio.category = category
        return audio

    # Playlists

    def list_playlists(self) -> list[Playlist]:
        return self.load().playlists

    def create_playlist(self, name: str | None, description: str | None = None) -> Playlist:
        """Create an empty playlist.

        Raises:
            ValidationError: If ``name`` is empty
        """
        if not name or not name.strip():
            raise ValidationError("Playlist name must not be empty")
        playlist = Playlist(name=name, description=description or "")
        with self.transaction() as catalog:
            catalog.playlists.append(playlist)
        return playlist

    def get_playlist(self, playlist_id: str) -> Playlist:
        playlist = self.load().find_playlist(playlist_id)
        if playlist is None:
            raise NotFoundError("playlist", playlist_id)
        return playlist

    def patch_playlist(
        self,
        playlist_id: str,
        name: str | None = None,
        description: str | None = None,
        audio_ids: list[str] | None = None,
    ) -> Playlist:
        """Update the given fields; ``audio_ids`` replaces the whole list."""
        if name is not None and not name.strip():
            raise ValidationError("Playlist name must not be empty")
        with self.transaction() as catalog:
            playlist = catalog.find_playlist(playlist_id)
            if playlist is None:
                raise NotFoundError("playlist", playlist_id)
            if name is not None:
                playlist.name = name
            if description is not None:
                playlist.description = description
            if audio_ids is not None:
                playlist.audio_ids = list(audio_ids)
        return playlist

    def delete_playlist(self, playlist_id: str) -> Playlist:
        with self.transaction() as catalog:
            playlist = catalog.find_playlist(playlist_id)
            if playlist is None:
                raise NotFoundError("playlist", playlist_id)
            catalog.playlists = [p for p in catalog.playlists if p.id != playlist_id]
        return playlist
