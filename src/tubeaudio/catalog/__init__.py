"""Catalog domain package.

- AudioAsset, Playlist, Catalog: persisted records
- MetadataStore: load/save and every query and mutation on the catalog
- PlaylistResolver, PlaylistCursor: read-time playlist joins and playback order
"""

from tubeaudio.catalog.models import AudioAsset, Catalog, Playlist, ResolvedPlaylist
from tubeaudio.catalog.playlists import PlaylistCursor, PlaylistResolver
from tubeaudio.catalog.store import MetadataStore, SortKey, SortOrder

__all__ = [
    "AudioAsset",
    "Catalog",
    "MetadataStore",
    "Playlist",
    "PlaylistCursor",
    "PlaylistResolver",
    "ResolvedPlaylist",
    "SortKey",
    "SortOrder",
]
