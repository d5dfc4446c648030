"""Playlist API routes."""

import asyncio
from typing import Annotated

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends

from tubeaudio.catalog.models import Playlist, ResolvedPlaylist
from tubeaudio.catalog.playlists import PlaylistResolver
from tubeaudio.catalog.store import MetadataStore
from tubeaudio.web.core.container import Container
from tubeaudio.web.models.audio import ErrorResponse, SuccessResponse
from tubeaudio.web.models.playlists import PlaylistCreateRequest, PlaylistPatchRequest

router = APIRouter()

NOT_FOUND = {404: {"model": ErrorResponse}}


@router.get("/playlists", response_model=list[Playlist])
@inject
async def list_playlists(
    metadata_store: Annotated[MetadataStore, Depends(Provide[Container.metadata_store])],
) -> list[Playlist]:
    return await asyncio.to_thread(metadata_store.list_playlists)


@router.post("/playlists", response_model=Playlist, responses={400: {"model": ErrorResponse}})
@inject
async def create_playlist(
    request: PlaylistCreateRequest,
    metadata_store: Annotated[MetadataStore, Depends(Provide[Container.metadata_store])],
) -> Playlist:
    """Create an empty playlist; the name must not be empty."""
    return await asyncio.to_thread(
        metadata_store.create_playlist, request.name, request.description
    )


@router.get("/playlist/{playlist_id}", response_model=ResolvedPlaylist, responses=NOT_FOUND)
@inject
async def get_playlist(
    playlist_id: str,
    playlist_resolver: Annotated[PlaylistResolver, Depends(Provide[Container.playlist_resolver])],
) -> ResolvedPlaylist:
    """Return a playlist with its assets resolved in order.

    Ids that no longer match an asset are left out of ``audios``.
    """
    return await asyncio.to_thread(playlist_resolver.resolve_by_id, playlist_id)


@router.patch("/playlist/{playlist_id}", response_model=Playlist, responses=NOT_FOUND)
@inject
async def patch_playlist(
    playlist_id: str,
    patch: PlaylistPatchRequest,
    metadata_store: Annotated[MetadataStore, Depends(Provide[Container.metadata_store])],
) -> Playlist:
    """Update name, description, or replace the whole ordered id list."""
    return await asyncio.to_thread(
        metadata_store.patch_playlist,
        playlist_id,
        patch.name,
        patch.description,
        patch.audio_ids,
    )


@router.delete("/playlist/{playlist_id}", response_model=SuccessResponse, responses=NOT_FOUND)
@inject
async def delete_playlist(
    playlist_id: str,
    metadata_store: Annotated[MetadataStore, Depends(Provide[Container.metadata_store])],
) -> SuccessResponse:
    await asyncio.to_thread(metadata_store.delete_playlist, playlist_id)
    return SuccessResponse(success=True)
