"""Tests for background conversion jobs."""

import threading
import time
from unittest.mock import MagicMock

import pytest

from tubeaudio.conversion.jobs import ConversionJobManager, JobStatus
from tubeaudio.conversion.orchestrator import ConversionOrchestrator
from tubeaudio.exceptions import NotFoundError, ValidationError

URL = "https://youtu.be/dQw4w9WgXcQ"


@pytest.mark.asyncio
async def test_successful_job(orchestrator, metadata_store):
    manager = ConversionJobManager(orchestrator)

    job = await manager.submit(URL, "Music")
    assert job.status in (JobStatus.PENDING, JobStatus.RUNNING)

    finished = await manager.wait(job.id)

    assert finished.status == JobStatus.SUCCEEDED
    assert finished.error is None
    assert finished.finished_at is not None
    assert metadata_store.get_audio(finished.audio_id).category == "Music"


@pytest.mark.asyncio
async def test_failed_job_records_error(orchestrator, tool_probe, metadata_store):
    tool_probe.detect_extractor.return_value = None
    manager = ConversionJobManager(orchestrator)

    job = await manager.submit(URL)
    finished = await manager.wait(job.id)

    assert finished.status == JobStatus.FAILED
    assert "Required tool not available" in finished.error
    assert finished.audio_id is None
    assert metadata_store.load().audios == []


@pytest.mark.asyncio
async def test_unexpected_exception_marks_job_failed():
    orchestrator = MagicMock(spec=ConversionOrchestrator)
    orchestrator.convert.side_effect = RuntimeError("kaboom")
    manager = ConversionJobManager(orchestrator)

    job = await manager.submit(URL)
    finished = await manager.wait(job.id)

    assert finished.status == JobStatus.FAILED
    assert finished.error == "kaboom"


@pytest.mark.asyncio
@pytest.mark.parametrize("url", [None, "", "  "])
async def test_submit_requires_url(orchestrator, url):
    manager = ConversionJobManager(orchestrator)

    with pytest.raises(ValidationError):
        await manager.submit(url)

    assert manager.list_jobs() == []


@pytest.mark.asyncio
async def test_get_unknown_job(orchestrator):
    manager = ConversionJobManager(orchestrator)

    with pytest.raises(NotFoundError, match="Job nope not found"):
        manager.get("nope")


@pytest.mark.asyncio
async def test_list_jobs_newest_first():
    manager = ConversionJobManager(MagicMock(spec=ConversionOrchestrator))
    submitted = [await manager.submit(f"{URL}?n={n}") for n in range(3)]
    for job in submitted:
        await manager.wait(job.id)

    jobs = manager.list_jobs()

    assert {job.id for job in jobs} == {job.id for job in submitted}
    created = [job.created_at for job in jobs]
    assert created == sorted(created, reverse=True)


@pytest.mark.asyncio
async def test_concurrency_is_bounded():
    active = 0
    peak = 0
    lock = threading.Lock()

    def convert(source_url, category):
        nonlocal active, peak
        with lock:
            active += 1
            peak = max(peak, active)
        time.sleep(0.05)
        with lock:
            active -= 1
        return MagicMock(audio=MagicMock(id=source_url))

    orchestrator = MagicMock(spec=ConversionOrchestrator)
    orchestrator.convert.side_effect = convert
    manager = ConversionJobManager(orchestrator, max_concurrent=1)

    jobs = [await manager.submit(f"{URL}?n={n}") for n in range(3)]
    for job in jobs:
        await manager.wait(job.id)

    assert peak == 1
    assert all(manager.get(job.id).status == JobStatus.SUCCEEDED for job in jobs)


@pytest.mark.asyncio
async def test_shutdown_cancels_queued_jobs():
    orchestrator = MagicMock(spec=ConversionOrchestrator)
    manager = ConversionJobManager(orchestrator)

    jobs = [await manager.submit(URL), await manager.submit(URL)]
    await manager.shutdown()

    orchestrator.convert.assert_not_called()
    assert all(manager.get(job.id).status == JobStatus.PENDING for job in jobs)


@pytest.mark.asyncio
async def test_only_recent_finished_jobs_are_retained():
    orchestrator = MagicMock(spec=ConversionOrchestrator)
    manager = ConversionJobManager(orchestrator, max_concurrent=1, max_retained=2)

    jobs = []
    for n in range(4):
        job = await manager.submit(f"{URL}?n={n}")
        await manager.wait(job.id)
        jobs.append(job)

    assert {job.id for job in manager.list_jobs()} == {jobs[2].id, jobs[3].id}
    with pytest.raises(NotFoundError):
        manager.get(jobs[0].id)
