"""Audio catalog API routes: listing, byte serving, category updates and deletion."""

import asyncio
from typing import Annotated

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Header, Query
from fastapi.responses import StreamingResponse

from tubeaudio.catalog.models import AudioAsset
from tubeaudio.catalog.store import MetadataStore, SortKey, SortOrder
from tubeaudio.media.range_server import MediaRangeServer
from tubeaudio.web.core.container import Container
from tubeaudio.web.models.audio import CategoryUpdateRequest, ErrorResponse, SuccessResponse

router = APIRouter()

NOT_FOUND = {404: {"model": ErrorResponse}}


@router.get("/audios", response_model=list[AudioAsset])
@inject
async def list_audios(
    metadata_store: Annotated[MetadataStore, Depends(Provide[Container.metadata_store])],
    category: Annotated[str | None, Query()] = None,
    sort_by: Annotated[str, Query(alias="sortBy")] = SortKey.CREATED_AT.value,
    order: Annotated[str, Query()] = SortOrder.DESC.value,
) -> list[AudioAsset]:
    """List stored audio assets.

    Args:
        category: Exact category to keep; omitted or "All" keeps everything
        sort_by: One of title, duration, fileSize, createdAt
        order: asc or desc
    """
    return await asyncio.to_thread(metadata_store.list_audios, category, sort_by, order)


@router.get("/categories", response_model=list[str])
@inject
async def list_categories(
    metadata_store: Annotated[MetadataStore, Depends(Provide[Container.metadata_store])],
) -> list[str]:
    """List distinct categories in the order they first appear."""
    return await asyncio.to_thread(metadata_store.list_categories)


@router.get(
    "/audio/{audio_id}",
    response_class=StreamingResponse,
    responses={
        200: {"content": {"audio/mpeg": {}}},
        206: {"content": {"audio/mpeg": {}}},
        **NOT_FOUND,
        416: {"model": ErrorResponse},
    },
)
@inject
async def get_audio_file(
    audio_id: str,
    media_server: Annotated[MediaRangeServer, Depends(Provide[Container.media_server])],
    range_header: Annotated[str | None, Header(alias="range")] = None,
) -> StreamingResponse:
    """Stream an asset's bytes, honouring a single ``bytes=start-end`` Range header.

    Raises:
        NotFoundError: If the asset is unknown or its file is missing on disk
        RangeNotSatisfiableError: If the range starts beyond the end of the file
    """
    window, body = await asyncio.to_thread(media_server.serve, audio_id, range_header)
    return StreamingResponse(
        body,
        status_code=window.status_code,
        media_type=window.media_type,
        headers=window.headers("inline"),
    )


@router.patch("/audio/{audio_id}", response_model=AudioAsset, responses=NOT_FOUND)
@inject
async def update_audio_category(
    audio_id: str,
    update: CategoryUpdateRequest,
    metadata_store: Annotated[MetadataStore, Depends(Provide[Container.metadata_store])],
) -> AudioAsset:
    """Move an asset to another category."""
    return await asyncio.to_thread(
        metadata_store.patch_audio_category, audio_id, update.category
    )


@router.delete("/audio/{audio_id}", response_model=SuccessResponse, responses=NOT_FOUND)
@inject
async def delete_audio(
    audio_id: str,
    metadata_store: Annotated[MetadataStore, Depends(Provide[Container.metadata_store])],
) -> SuccessResponse:
    """Delete an asset, its file, and every playlist reference to it."""
    await asyncio.to_thread(metadata_store.delete_audio, audio_id)
    return SuccessResponse(success=True)
