"""Conversion API routes: synchronous conversion and background jobs."""

import asyncio
from typing import Annotated

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, status
from fastapi.responses import StreamingResponse

from tubeaudio.conversion.jobs import ConversionJob, ConversionJobManager
from tubeaudio.conversion.orchestrator import ConversionOrchestrator
from tubeaudio.media.range_server import MediaRangeServer
from tubeaudio.web.core.container import Container
from tubeaudio.web.models.audio import ErrorResponse
from tubeaudio.web.models.conversion import ConvertRequest

router = APIRouter(prefix="/convert")

ERRORS = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


@router.post(
    "",
    response_class=StreamingResponse,
    responses={200: {"content": {"audio/mpeg": {}}}, **ERRORS},
)
@inject
async def convert(
    request: ConvertRequest,
    orchestrator: Annotated[
        ConversionOrchestrator, Depends(Provide[Container.conversion_orchestrator])
    ],
    media_server: Annotated[MediaRangeServer, Depends(Provide[Container.media_server])],
) -> StreamingResponse:
    """Convert a source reference to audio and stream the produced file back.

    The pipeline keeps running if the client disconnects; the asset is still
    catalogued. Use ``POST /convert/jobs`` to avoid holding the request open.
    """
    result = await asyncio.to_thread(orchestrator.convert, request.url, request.category)
    window = await asyncio.to_thread(media_server.window_for, result.file_path)
    headers = window.headers("attachment")
    headers["X-Audio-Id"] = result.audio.id
    return StreamingResponse(
        media_server.iter_bytes(window),
        media_type=window.media_type,
        headers=headers,
    )


@router.post(
    "/jobs",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=ConversionJob,
    responses={400: {"model": ErrorResponse}},
)
@inject
async def start_conversion_job(
    request: ConvertRequest,
    jobs: Annotated[ConversionJobManager, Depends(Provide[Container.conversion_jobs])],
) -> ConversionJob:
    """Queue a conversion and return its job record immediately."""
    return await jobs.submit(request.url, request.category)


@router.get("/jobs", response_model=list[ConversionJob])
@inject
async def list_conversion_jobs(
    jobs: Annotated[ConversionJobManager, Depends(Provide[Container.conversion_jobs])],
) -> list[ConversionJob]:
    """List known conversion jobs, newest first."""
    return jobs.list_jobs()


@router.get(
    "/jobs/{job_id}",
    response_model=ConversionJob,
    responses={404: {"model": ErrorResponse}},
)
@inject
async def get_conversion_job(
    job_id: str,
    jobs: Annotated[ConversionJobManager, Depends(Provide[Container.conversion_jobs])],
) -> ConversionJob:
    """Poll the state of one conversion job."""
    return jobs.get(job_id)
