"""Read-time playlist resolution and sequential playback."""

from tubeaudio.catalog.models import Catalog, Playlist, ResolvedPlaylist
from tubeaudio.catalog.store import MetadataStore
from tubeaudio.exceptions import NotFoundError


class PlaylistResolver:
    """Joins a playlist's ordered ids against the asset catalog.

    Ids without a matching asset are skipped, so a playlist that still holds a
    dangling reference resolves to the assets that do exist.
    """

    def __init__(self, metadata_store: MetadataStore) -> None:
        self.metadata_store = metadata_store

    def resolve(self, playlist: Playlist) -> ResolvedPlaylist:
        return self._join(playlist, self.metadata_store.load())

    def resolve_by_id(self, playlist_id: str) -> ResolvedPlaylist:
        """Look up and resolve a playlist in one catalog read.

        Raises:
            NotFoundError: If no playlist has ``playlist_id``
        """
        catalog = self.metadata_store.load()
        playlist = catalog.find_playlist(playlist_id)
        if playlist is None:
            raise NotFoundError("playlist", playlist_id)
        return self._join(playlist, catalog)

    @staticmethod
    def _join(playlist: Playlist, catalog: Catalog) -> ResolvedPlaylist:
        by_id = {audio.id: audio for audio in catalog.audios}
        audios = [by_id[audio_id] for audio_id in playlist.audio_ids if audio_id in by_id]
        return ResolvedPlaylist(**playlist.model_dump(), audios=audios)


class PlaylistCursor:
    """Steps through a resolved playlist one asset at a time.

    Advancing past the last asset clears the cursor; there is no shuffle or
    repeat.
    """

    def __init__(self, playlist: ResolvedPlaylist | None = None) -> None:
        self.playlist = playlist
        self.index = 0

    def start(self, playlist: ResolvedPlaylist) -> str | None:
        """Begin playback of ``playlist`` and return the first asset id."""
        self.playlist = playlist
        self.index = 0
        return self.current()

    def current(self) -> str | None:
        """Id of the asset at the cursor, clearing the cursor when exhausted."""
        if self.playlist is None or self.index >= len(self.playlist.audios):
            self.playlist = None
            self.index = 0
            return None
        return self.playlist.audios[self.index].id

    def advance(self) -> str | None:
        """Move to the next asset and return its id, or None at the end."""
        if self.playlist is None:
            return None
        self.index += 1
        return self.current()

    @property
    def active(self) -> bool:
        return self.playlist is not None
